#!/usr/bin/env python3
"""
pfamsum - Pfam domain summarization of cancer mutation data

Annotates amino acid positions from MAF files with Pfam domains and
summarizes mutation counts per position and per domain.
"""

__version__ = '0.1.0'
__author__ = 'pfamsum Team'
__email__ = 'example@example.org'
__license__ = 'MIT'

from .exceptions import PfamSumError
from .error_handlers import handle_exceptions
from .pipelines.domain_summary import PfamDomainService, pfam_domains

__all__ = ['PfamSumError', 'handle_exceptions', 'PfamDomainService', 'pfam_domains']
