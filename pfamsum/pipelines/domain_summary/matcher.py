#!/usr/bin/env python3
"""
Interval matching of aggregated mutation records against Pfam domains.

A record (gene, Start, End) matches a domain interval when the gene is the
same and the interval contains it: ``interval.Start <= Start`` and
``End <= interval.End``. When several intervals contain a record, the first
one in (HGNC, Start, End) order is used. This is not the narrowest match.
"""

import logging
from typing import Optional

import numpy as np
import pandas as pd

from pfamsum.io.reference import DomainReferenceTable
from .models import SummarizeBy


class IntervalMatcher:
    """First-match 'within' lookup of records in a domain reference"""

    def __init__(self, reference: DomainReferenceTable,
                 logger: Optional[logging.Logger] = None):
        self.reference = reference
        self.logger = logger or logging.getLogger(__name__)

    def match(self, records: pd.DataFrame) -> pd.Series:
        """Find the first containing interval for every record

        Args:
            records: Table with HGNC, Start and End columns

        Returns:
            Nullable integer Series aligned with records holding the row
            position in the sorted reference, <NA> for no match
        """
        idx = np.full(len(records), -1, dtype=np.int64)
        genes = records['HGNC'].to_numpy()
        starts = records['Start'].to_numpy(dtype=np.int64)
        ends = records['End'].to_numpy(dtype=np.int64)

        # rows of one gene are matched against that gene's block only
        for gene in pd.unique(genes):
            block = self.reference.gene_block(gene)
            if block is None:
                continue
            offset, ref_starts, ref_ends = block
            for i in np.flatnonzero(genes == gene):
                # reference starts are sorted, so candidates form a prefix
                hi = np.searchsorted(ref_starts, starts[i], side='right')
                hits = np.flatnonzero(ref_ends[:hi] >= ends[i])
                if hits.size:
                    idx[i] = offset + hits[0]

        matched = pd.Series(idx, index=records.index, dtype='Int64')
        matched[matched < 0] = pd.NA
        return matched

    def annotate(self, records: pd.DataFrame,
                 summarize_by: SummarizeBy = SummarizeBy.AA_POS) -> pd.DataFrame:
        """Attach DomainLabel, pfam and Description to aggregated records

        Record order is preserved; unmatched records keep null domain
        columns.

        Returns:
            Table with the record type's output columns
        """
        record_type = SummarizeBy.from_value(summarize_by).record_type
        matched = self.match(records)
        hit = matched.notna().to_numpy()

        annotated = records.rename(columns={'Start': 'AAPos'}).drop(columns=['End'])
        for column in ('DomainLabel', 'pfam', 'Description'):
            annotated[column] = pd.Series([None] * len(annotated), index=annotated.index, dtype=object)

        if hit.any():
            rows = self.reference.rows(matched[hit].astype('int64').to_numpy())
            annotated.loc[hit, 'DomainLabel'] = rows['Label'].to_numpy()
            annotated.loc[hit, 'pfam'] = rows['pfam'].to_numpy()
            annotated.loc[hit, 'Description'] = rows['Description'].to_numpy()

        self.logger.info(f"Matched {int(hit.sum())} of {len(records)} records to Pfam domains")
        return annotated[list(record_type.COLUMNS)].reset_index(drop=True)
