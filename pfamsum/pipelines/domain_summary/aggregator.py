#!/usr/bin/env python3
"""
Mutation count aggregation at amino acid position or protein change level.
"""

import logging
from typing import Optional, Union

import pandas as pd

from pfamsum.exceptions import JoinIntegrityError, ValidationError
from .models import SummarizeBy


class MutationAggregator:
    """
    Groups parsed mutations and joins per gene totals.

    The output has the record type's columns up to ``fraction`` plus
    ``Start``/``End`` (both the position) used for interval matching.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def aggregate(self, parsed: pd.DataFrame, gene_totals: pd.DataFrame,
                  summarize_by: Union[str, SummarizeBy] = SummarizeBy.AA_POS) -> pd.DataFrame:
        """Count mutations per key and compute the fraction of each gene's total

        Args:
            parsed: Output of PositionParser.parse
            gene_totals: Table with Hugo_Symbol and total columns
            summarize_by: Granularity selector

        Returns:
            Aggregated table sorted by N descending, ties by group key

        Raises:
            JoinIntegrityError: If a mutated gene has no total
        """
        summarize_by = SummarizeBy.from_value(summarize_by)
        record_type = summarize_by.record_type
        keys = list(record_type.KEY_COLUMNS)

        totals = self._gene_total_lookup(gene_totals)

        counts = (parsed.groupby(keys, sort=True, observed=True)
                  .size()
                  .reset_index(name='N'))

        missing = sorted(set(counts['Hugo_Symbol']) - set(totals.index))
        if missing:
            raise JoinIntegrityError(
                f"{len(missing)} mutated genes are absent from the gene totals: {', '.join(missing[:10])}",
                {'genes': missing}
            )

        counts['total'] = counts['Hugo_Symbol'].map(totals).astype('int64')
        counts['fraction'] = counts['N'] / counts['total']

        # mergesort keeps the key order from groupby for equal N
        counts = counts.sort_values('N', ascending=False, kind='mergesort').reset_index(drop=True)

        columns = {
            'HGNC': counts['Hugo_Symbol'],
            'Start': counts['pos'],
            'End': counts['pos'],
            'Variant_Classification': counts['Variant_Classification'],
        }
        if summarize_by is SummarizeBy.AA_CHANGE:
            columns['AAChange'] = counts['AAChange']
        columns['N'] = counts['N'].astype('int64')
        columns['total'] = counts['total']
        columns['fraction'] = counts['fraction']
        summary = pd.DataFrame(columns)

        self.logger.info(f"Aggregated {int(summary['N'].sum())} mutations into {len(summary)} "
                         f"{summarize_by.value} records")
        return summary

    def _gene_total_lookup(self, gene_totals: pd.DataFrame) -> pd.Series:
        """Gene symbol -> total mutation count"""
        for column in ('Hugo_Symbol', 'total'):
            if column not in gene_totals.columns:
                raise ValidationError(f"Gene totals table is missing column {column}",
                                      {'available': list(gene_totals.columns)})

        totals = gene_totals[['Hugo_Symbol', 'total']].drop_duplicates('Hugo_Symbol')
        totals = totals.set_index('Hugo_Symbol')['total']
        if (totals <= 0).any():
            bad = sorted(totals[totals <= 0].index.astype(str))
            raise ValidationError(f"Gene totals must be positive: {', '.join(bad)}", {'genes': bad})
        return totals
