#!/usr/bin/env python3
"""
Domain models for pfamsum
Defines the per-domain summary record
"""
from dataclasses import dataclass
from typing import Optional, Dict, Any, Mapping

import pandas as pd


def _optional_str(value: Any) -> Optional[str]:
    """Convert a table cell to str, mapping NA to None"""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    return str(value)


@dataclass(frozen=True)
class DomainSummaryRecord:
    """Mutation totals for one domain label across all genes"""
    domain_label: str
    n_muts: int
    n_genes: int
    pfam: Optional[str] = None
    description: Optional[str] = None

    COLUMNS = ('DomainLabel', 'nMuts', 'nGenes', 'pfam', 'Description')
    REQUIRED_COLUMNS = ('DomainLabel', 'nMuts', 'nGenes')

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'DomainSummaryRecord':
        return cls(
            domain_label=str(row['DomainLabel']),
            n_muts=int(row['nMuts']),
            n_genes=int(row['nGenes']),
            pfam=_optional_str(row.get('pfam')),
            description=_optional_str(row.get('Description'))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'DomainLabel': self.domain_label,
            'nMuts': self.n_muts,
            'nGenes': self.n_genes,
            'pfam': self.pfam,
            'Description': self.description
        }
