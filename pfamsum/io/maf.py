#!/usr/bin/env python3
"""
MAF (Mutation Annotation Format) backed mutation store.

Splits a MAF table into non-synonymous and silent rows using the variant
classification lists from the ``variants`` configuration section and
provides the per-gene totals used for mutation fractions.
"""

import logging
import os
from typing import Any, Dict, Iterable, List, Optional

import pandas as pd

from pfamsum.config.defaults import DEFAULT_CONFIG
from pfamsum.exceptions import FileOperationError, ValidationError


REQUIRED_MAF_COLUMNS = ['Hugo_Symbol', 'Variant_Classification', 'Variant_Type']


class MafTable:
    """Read-only view over a MAF table"""

    def __init__(self, data: pd.DataFrame, variants_config: Optional[Dict[str, Any]] = None):
        """
        Args:
            data: MAF rows
            variants_config: 'variants' config section; defaults if omitted

        Raises:
            ValidationError: If required MAF columns are missing
        """
        self.logger = logging.getLogger("pfamsum.maf")
        missing = [c for c in REQUIRED_MAF_COLUMNS if c not in data.columns]
        if missing:
            raise ValidationError(f"MAF is missing required columns: {', '.join(missing)}",
                                  {'missing': missing, 'available': list(data.columns)})

        variants = dict(DEFAULT_CONFIG['variants'])
        variants.update(variants_config or {})
        self.non_synonymous: List[str] = list(variants['non_synonymous'])
        self.exclude_types: List[str] = list(variants.get('exclude_types') or [])

        self._data = data.reset_index(drop=True)
        # excluded types (copy number calls) are never silent: they count towards
        # gene totals but never feed a summary
        self._nonsyn_mask = (self._data['Variant_Classification'].astype(str).isin(self.non_synonymous)
                             | self._data['Variant_Type'].astype(str).isin(self.exclude_types))

    @classmethod
    def read_maf(cls, path: str, variants_config: Optional[Dict[str, Any]] = None) -> 'MafTable':
        """Read a tab-delimited MAF file, skipping '#' header lines

        Raises:
            FileOperationError: If the file cannot be read
        """
        if not os.path.exists(path):
            raise FileOperationError(f"MAF file not found: {path}", {'path': path})
        try:
            data = pd.read_csv(path, sep='\t', comment='#', dtype=str, keep_default_na=False,
                               na_values=[''], low_memory=False)
        except (OSError, ValueError) as e:
            raise FileOperationError(f"Error reading MAF {path}: {str(e)}", {'path': path}) from e

        table = cls(data, variants_config)
        table.logger.info(f"Read {len(data)} MAF rows from {path} "
                          f"({int(table._nonsyn_mask.sum())} non-synonymous)")
        return table

    @property
    def columns(self) -> List[str]:
        return list(self._data.columns)

    def __len__(self) -> int:
        return len(self._data)

    def _type_filter(self, exclude_types: Optional[Iterable[str]]) -> pd.Series:
        exclude = self.exclude_types if exclude_types is None else list(exclude_types)
        return ~self._data['Variant_Type'].astype(str).isin(exclude)

    def silent(self, exclude_types: Optional[Iterable[str]] = None) -> pd.DataFrame:
        """Rows whose classification is not in the non-synonymous list"""
        mask = ~self._nonsyn_mask & self._type_filter(exclude_types)
        return self._data[mask].reset_index(drop=True)

    def subset(self, include_syn: bool = False,
               exclude_types: Optional[Iterable[str]] = None) -> pd.DataFrame:
        """Mutation rows with excluded variant types (CNV by default) removed

        Args:
            include_syn: Keep silent rows too
            exclude_types: Variant types to drop; config value if None
        """
        mask = self._type_filter(exclude_types)
        if not include_syn:
            mask &= self._nonsyn_mask
        return self._data[mask].reset_index(drop=True)

    def gene_summary(self, include_syn: bool = False) -> pd.DataFrame:
        """Total mutation count per gene

        Counts every row (all variant types) of the non-synonymous set, or
        of the whole table when include_syn is set.

        Returns:
            Hugo_Symbol, total sorted by total descending
        """
        rows = self._data if include_syn else self._data[self._nonsyn_mask]
        totals = (rows.groupby('Hugo_Symbol', sort=True)
                  .size()
                  .reset_index(name='total'))
        totals['Hugo_Symbol'] = totals['Hugo_Symbol'].astype(str)
        return totals.sort_values('total', ascending=False, kind='mergesort').reset_index(drop=True)
