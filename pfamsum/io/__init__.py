"""Input and output adapters: MAF mutations, domain reference, reports"""
from .maf import MafTable
from .reference import DomainReferenceTable
from .writer import SummaryWriter

__all__ = ['MafTable', 'DomainReferenceTable', 'SummaryWriter']
