#!/usr/bin/env python3
"""
Pfam domain reference table.

Loaded once, sorted by (HGNC, Start, End) and treated as read-only. The
sort order defines which interval wins when domains overlap.
"""

import logging
import os
from typing import Dict, Optional, Tuple

import numpy as np
import pandas as pd

from pfamsum.exceptions import FileOperationError, ValidationError


REFERENCE_COLUMNS = ['HGNC', 'Start', 'End', 'Label', 'pfam', 'Description']


class DomainReferenceTable:
    """Sorted, immutable table of Pfam domain intervals per gene"""

    def __init__(self, frame: pd.DataFrame):
        """
        Args:
            frame: Table with HGNC, Start, End and Label columns; pfam and
                Description are optional
        """
        self.logger = logging.getLogger("pfamsum.reference")
        self._frame = self._prepare(frame)
        self._index: Dict[str, Tuple[int, np.ndarray, np.ndarray]] = self._build_index(self._frame)
        self.logger.debug(f"Domain reference ready: {len(self._frame)} intervals on {len(self._index)} genes")

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> 'DomainReferenceTable':
        return cls(frame)

    @classmethod
    def from_file(cls, path: str, sep: str = '\t') -> 'DomainReferenceTable':
        """Read a delimited domain table (gzip detected from the extension)

        Raises:
            FileOperationError: If the file cannot be read
        """
        if not os.path.exists(path):
            raise FileOperationError(f"Domain reference file not found: {path}", {'path': path})
        try:
            frame = pd.read_csv(path, sep=sep, comment='#', dtype={'HGNC': str, 'Label': str,
                                                                   'pfam': str, 'Description': str})
        except (OSError, ValueError) as e:
            raise FileOperationError(f"Error reading domain reference {path}: {str(e)}",
                                     {'path': path}) from e
        table = cls(frame)
        table.logger.info(f"Loaded {len(table)} domain intervals from {path}")
        return table

    @staticmethod
    def _prepare(frame: pd.DataFrame) -> pd.DataFrame:
        missing = [c for c in ('HGNC', 'Start', 'End', 'Label') if c not in frame.columns]
        if missing:
            raise ValidationError(f"Domain reference is missing columns: {', '.join(missing)}",
                                  {'missing': missing, 'available': list(frame.columns)})

        prepared = frame.reindex(columns=REFERENCE_COLUMNS).copy()
        if prepared[['HGNC', 'Start', 'End', 'Label']].isna().any().any():
            raise ValidationError("Domain reference has rows without gene, coordinates or label")

        try:
            prepared['Start'] = prepared['Start'].astype('int64')
            prepared['End'] = prepared['End'].astype('int64')
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Domain coordinates must be integers: {str(e)}") from e
        prepared['HGNC'] = prepared['HGNC'].astype(str)
        prepared['Label'] = prepared['Label'].astype(str)

        inverted = prepared[prepared['Start'] > prepared['End']]
        if not inverted.empty:
            raise ValidationError(
                f"{len(inverted)} domain intervals have Start > End",
                {'rows': inverted.head(10).to_dict('records')}
            )

        prepared = prepared.sort_values(['HGNC', 'Start', 'End'], kind='mergesort')
        return prepared.reset_index(drop=True)

    @staticmethod
    def _build_index(frame: pd.DataFrame) -> Dict[str, Tuple[int, np.ndarray, np.ndarray]]:
        """Gene -> (first row, starts, ends); rows of a gene are contiguous after sorting"""
        index = {}
        if frame.empty:
            return index
        genes = frame['HGNC'].to_numpy()
        starts = frame['Start'].to_numpy()
        ends = frame['End'].to_numpy()
        boundaries = np.flatnonzero(genes[1:] != genes[:-1]) + 1
        offsets = np.concatenate(([0], boundaries, [len(frame)]))
        for lo, hi in zip(offsets[:-1], offsets[1:]):
            index[genes[lo]] = (int(lo), starts[lo:hi], ends[lo:hi])
        return index

    def __len__(self) -> int:
        return len(self._frame)

    @property
    def frame(self) -> pd.DataFrame:
        """Sorted reference rows (a copy)"""
        return self._frame.copy()

    def gene_block(self, gene: str) -> Optional[Tuple[int, np.ndarray, np.ndarray]]:
        """(first row, starts, ends) for a gene, None if the gene has no domains"""
        return self._index.get(gene)

    def rows(self, positions) -> pd.DataFrame:
        """Reference rows by position in the sorted table"""
        return self._frame.iloc[positions]

    def label_metadata(self) -> pd.DataFrame:
        """One pfam id and description per label, first sorted occurrence wins"""
        meta = self._frame.drop_duplicates('Label', keep='first')
        return meta[['Label', 'pfam', 'Description']].reset_index(drop=True)
