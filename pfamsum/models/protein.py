#!/usr/bin/env python3
"""
Amino acid level summary records.

Each summary granularity has its own fixed-shape record type. The class
attributes describe how the record maps onto table columns so that the
aggregation and annotation stages build frames by name rather than by
column position.
"""
from dataclasses import dataclass
from typing import Optional, Dict, Any, Mapping, Tuple

from .domain import _optional_str


class _SummaryRecordMixin:
    """Column mapping shared by the per-position summary records"""

    # Grouping columns of the parsed mutation table
    KEY_COLUMNS: Tuple[str, ...] = ()
    # Output table columns, in order
    COLUMNS: Tuple[str, ...] = ()
    # Output column -> attribute name
    FIELD_MAP: Dict[str, str] = {}

    @property
    def matched(self) -> bool:
        """True if the record was annotated with a domain"""
        return self.domain_label is not None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]):
        """Create a record from an annotated summary table row"""
        values = {}
        for column, attr in cls.FIELD_MAP.items():
            value = row.get(column)
            if attr in ('position', 'n', 'total'):
                value = int(value)
            elif attr == 'fraction':
                value = float(value)
            elif attr in ('domain_label', 'pfam', 'description'):
                value = _optional_str(value)
            else:
                value = str(value)
            values[attr] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to an output table row"""
        return {column: getattr(self, attr) for column, attr in self.FIELD_MAP.items()}


@dataclass(frozen=True)
class PositionSummaryRecord(_SummaryRecordMixin):
    """Mutation count for one gene, variant classification and position"""
    gene: str
    position: int
    variant_classification: str
    n: int
    total: int
    fraction: float
    domain_label: Optional[str] = None
    pfam: Optional[str] = None
    description: Optional[str] = None

    KEY_COLUMNS = ('Hugo_Symbol', 'Variant_Classification', 'pos')
    COLUMNS = ('HGNC', 'AAPos', 'Variant_Classification', 'N', 'total', 'fraction',
               'DomainLabel', 'pfam', 'Description')
    FIELD_MAP = {
        'HGNC': 'gene',
        'AAPos': 'position',
        'Variant_Classification': 'variant_classification',
        'N': 'n',
        'total': 'total',
        'fraction': 'fraction',
        'DomainLabel': 'domain_label',
        'pfam': 'pfam',
        'Description': 'description',
    }


@dataclass(frozen=True)
class ChangeSummaryRecord(_SummaryRecordMixin):
    """Mutation count for one gene, variant classification, protein change and position"""
    gene: str
    position: int
    variant_classification: str
    aa_change: str
    n: int
    total: int
    fraction: float
    domain_label: Optional[str] = None
    pfam: Optional[str] = None
    description: Optional[str] = None

    KEY_COLUMNS = ('Hugo_Symbol', 'Variant_Classification', 'AAChange', 'pos')
    COLUMNS = ('HGNC', 'AAPos', 'Variant_Classification', 'AAChange', 'N', 'total', 'fraction',
               'DomainLabel', 'pfam', 'Description')
    FIELD_MAP = {
        'HGNC': 'gene',
        'AAPos': 'position',
        'Variant_Classification': 'variant_classification',
        'AAChange': 'aa_change',
        'N': 'n',
        'total': 'total',
        'fraction': 'fraction',
        'DomainLabel': 'domain_label',
        'pfam': 'pfam',
        'Description': 'description',
    }
