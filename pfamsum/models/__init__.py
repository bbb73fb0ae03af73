"""Value objects for pfamsum tables"""
from .domain import DomainSummaryRecord
from .protein import PositionSummaryRecord, ChangeSummaryRecord

__all__ = [
    'DomainSummaryRecord',
    'PositionSummaryRecord',
    'ChangeSummaryRecord',
]
