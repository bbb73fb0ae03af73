"""Pfam domain summarization package"""
from .service import PfamDomainService, pfam_domains
from .parser import PositionParser, parse_position
from .aggregator import MutationAggregator
from .matcher import IntervalMatcher
from .summarizer import DomainSummarizer
from .models import (
    SummarizeBy, VariantClassFilter, SummaryOptions, ParseDiagnostics, DomainSummaryResult
)

__all__ = [
    'PfamDomainService',
    'pfam_domains',
    'PositionParser',
    'parse_position',
    'MutationAggregator',
    'IntervalMatcher',
    'DomainSummarizer',
    'SummarizeBy',
    'VariantClassFilter',
    'SummaryOptions',
    'ParseDiagnostics',
    'DomainSummaryResult',
]
