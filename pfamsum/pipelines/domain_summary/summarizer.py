#!/usr/bin/env python3
"""
Per-domain rollup of annotated mutation records.
"""

import logging
from typing import Iterable, Optional

import pandas as pd

from pfamsum.error_handlers import log_exception
from pfamsum.exceptions import IncompleteRowError
from pfamsum.models import DomainSummaryRecord


class DomainSummarizer:
    """Totals mutations and genes per domain label and ranks the labels"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def summarize(self, annotated: pd.DataFrame, label_metadata: pd.DataFrame) -> pd.DataFrame:
        """Build the domain summary table

        Args:
            annotated: Output of IntervalMatcher.annotate; unmatched rows
                are ignored
            label_metadata: Label, pfam, Description with one row per label

        Returns:
            DomainLabel, nMuts, nGenes, pfam, Description sorted by nMuts
            descending, ties by label
        """
        matched = annotated[annotated['DomainLabel'].notna()]

        summary = (matched.groupby('DomainLabel', sort=True)
                   .agg(nMuts=('N', 'sum'), nGenes=('HGNC', 'nunique'))
                   .reset_index())

        meta = label_metadata.drop_duplicates('Label', keep='first')
        summary = summary.merge(meta[['Label', 'pfam', 'Description']],
                                how='left', left_on='DomainLabel', right_on='Label')
        summary = summary.drop(columns=['Label'])

        summary = self.drop_incomplete(summary)
        summary['nMuts'] = summary['nMuts'].astype('int64')
        summary['nGenes'] = summary['nGenes'].astype('int64')

        summary = summary.sort_values(['nMuts', 'DomainLabel'], ascending=[False, True],
                                      kind='mergesort')
        summary = summary[list(DomainSummaryRecord.COLUMNS)].reset_index(drop=True)

        self.logger.info(f"Summarized {int(summary['nMuts'].sum())} mutations over {len(summary)} domains")
        return summary

    def drop_incomplete(self, summary: pd.DataFrame) -> pd.DataFrame:
        """Remove rows missing a label, mutation count or gene count

        Dropped rows are logged as an IncompleteRowError at WARNING level;
        the error is never raised to the caller.
        """
        required = list(DomainSummaryRecord.REQUIRED_COLUMNS)
        complete = summary[required].notna().all(axis=1)
        if not complete.all():
            incomplete = summary[~complete]
            log_exception(
                self.logger,
                IncompleteRowError(f"Dropping {len(incomplete)} incomplete domain summary rows",
                                   {'rows': incomplete.head(10).to_dict('records')}),
                level=logging.WARNING
            )
        return summary[complete].copy()

    @staticmethod
    def select_labels(domain_summary: pd.DataFrame, top: int = 5,
                      domains_to_label: Optional[Iterable[str]] = None) -> pd.DataFrame:
        """Rows to highlight: the given labels, or the top rows by nMuts

        An explicit label list overrides top.
        """
        if domains_to_label is not None:
            labels = set(domains_to_label)
            return domain_summary[domain_summary['DomainLabel'].isin(labels)].reset_index(drop=True)
        return domain_summary.head(top).reset_index(drop=True)
