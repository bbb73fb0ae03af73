#!/usr/bin/env python3
"""
Option and result models for Pfam domain summarization.

Selectors are validated once, when options are created, so that every
stage downstream can rely on a known granularity and variant class.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, List, Optional, Sequence, Type, Union

import pandas as pd

from pfamsum.exceptions import ConfigurationError
from pfamsum.models import (
    PositionSummaryRecord, ChangeSummaryRecord, DomainSummaryRecord
)


def _single_value(value: Any, name: str, allowed: Sequence[str]) -> str:
    """Unwrap a selector that may arrive as a one element list"""
    if isinstance(value, (list, tuple, set)):
        if len(value) != 1:
            raise ConfigurationError(
                f"{name} can only be one of {', '.join(allowed)}",
                {name: list(value)}
            )
        value = next(iter(value))
    if isinstance(value, Enum):
        value = value.value
    if value not in allowed:
        raise ConfigurationError(
            f"{name} can only be one of {', '.join(allowed)}",
            {name: value}
        )
    return value


class SummarizeBy(Enum):
    """Granularity of the amino acid summary table"""
    AA_POS = 'AAPos'
    AA_CHANGE = 'AAChange'

    @classmethod
    def from_value(cls, value: Any) -> 'SummarizeBy':
        return cls(_single_value(value, 'summarize_by', [m.value for m in cls]))

    @property
    def record_type(self) -> Type[Union[PositionSummaryRecord, ChangeSummaryRecord]]:
        if self is SummarizeBy.AA_CHANGE:
            return ChangeSummaryRecord
        return PositionSummaryRecord


class VariantClassFilter(Enum):
    """Which variant classifications feed the summary"""
    NON_SYN = 'nonSyn'
    SYN = 'Syn'
    ALL = 'all'

    @classmethod
    def from_value(cls, value: Any) -> 'VariantClassFilter':
        return cls(_single_value(value, 'var_class', [m.value for m in cls]))


@dataclass
class ParseDiagnostics:
    """Counts of mutations dropped while parsing amino acid positions"""
    total_records: int = 0
    missing_conversion: int = 0
    unparseable_position: int = 0

    @property
    def dropped(self) -> int:
        return self.missing_conversion + self.unparseable_position

    @property
    def parsed(self) -> int:
        return self.total_records - self.dropped

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_records': self.total_records,
            'parsed': self.parsed,
            'dropped': self.dropped,
            'missing_conversion': self.missing_conversion,
            'unparseable_position': self.unparseable_position
        }


@dataclass
class SummaryOptions:
    """
    Options for one summarization run.

    Mirrors the arguments of PfamDomainService.summarize; selectors are
    normalized to enums in __post_init__.
    """
    aa_col: Optional[str] = None
    summarize_by: Union[str, SummarizeBy] = SummarizeBy.AA_POS
    var_class: Union[str, VariantClassFilter] = VariantClassFilter.NON_SYN
    top: int = 5
    domains_to_label: Optional[List[str]] = None
    base_name: Optional[str] = None
    width: float = 5.0
    height: float = 5.0
    label_size: float = 1.0

    def __post_init__(self):
        self.summarize_by = SummarizeBy.from_value(self.summarize_by)
        self.var_class = VariantClassFilter.from_value(self.var_class)
        if self.domains_to_label is not None:
            if isinstance(self.domains_to_label, str):
                self.domains_to_label = [self.domains_to_label]
            self.domains_to_label = list(self.domains_to_label)
        self.validate()

    def validate(self) -> None:
        """Validate numeric options"""
        if isinstance(self.top, bool) or not isinstance(self.top, int) or self.top < 0:
            raise ConfigurationError("top must be a non-negative integer", {'top': self.top})
        for name in ('width', 'height', 'label_size'):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive", {name: getattr(self, name)})

    def to_dict(self) -> Dict[str, Any]:
        return {
            'aa_col': self.aa_col,
            'summarize_by': self.summarize_by.value,
            'var_class': self.var_class.value,
            'top': self.top,
            'domains_to_label': self.domains_to_label,
            'base_name': self.base_name,
            'width': self.width,
            'height': self.height,
            'label_size': self.label_size
        }

    @classmethod
    def from_config(cls, config: Dict[str, Any], **overrides) -> 'SummaryOptions':
        """Build options from the summary/plot config sections, then apply overrides"""
        summary = config.get('summary', {})
        plot = config.get('plot', {})
        values = {
            'summarize_by': summary.get('summarize_by', 'AAPos'),
            'var_class': summary.get('var_class', 'nonSyn'),
            'top': summary.get('top', 5),
            'width': plot.get('width', 5.0),
            'height': plot.get('height', 5.0),
            'label_size': plot.get('label_size', 1.0),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass
class DomainSummaryResult:
    """Both summary tables of a run plus diagnostics"""
    protein_summary: pd.DataFrame
    domain_summary: pd.DataFrame
    highlighted: pd.DataFrame
    options: SummaryOptions
    diagnostics: ParseDiagnostics = field(default_factory=ParseDiagnostics)
    aa_col: Optional[str] = None
    output_files: List[str] = field(default_factory=list)

    @property
    def unmatched_count(self) -> int:
        return int(self.protein_summary['DomainLabel'].isna().sum())

    def protein_records(self, limit: Optional[int] = None) -> List[Union[PositionSummaryRecord, ChangeSummaryRecord]]:
        """Protein summary rows as records, optionally only the first limit rows"""
        record_type = self.options.summarize_by.record_type
        rows = self.protein_summary if limit is None else self.protein_summary.head(limit)
        return [record_type.from_row(row) for row in rows.to_dict('records')]

    def domain_records(self) -> List[DomainSummaryRecord]:
        return [DomainSummaryRecord.from_row(row) for row in self.domain_summary.to_dict('records')]

    def as_dict(self) -> Dict[str, pd.DataFrame]:
        """Tables keyed by their report names"""
        return {'proteinSummary': self.protein_summary, 'domainSummary': self.domain_summary}
