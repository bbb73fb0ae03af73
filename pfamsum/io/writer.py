#!/usr/bin/env python3
"""
Tab-delimited report writer for the summary tables.
"""

import csv
import logging
from typing import List

import pandas as pd

from pfamsum.utils.file import atomic_write


PROTEIN_SUMMARY_SUFFIX = '_AAPos_summary.txt'
DOMAIN_SUMMARY_SUFFIX = '_domainSummary.txt'


class SummaryWriter:
    """Writes <base>_AAPos_summary.txt and <base>_domainSummary.txt"""

    def __init__(self, na_rep: str = 'NA'):
        self.na_rep = na_rep
        self.logger = logging.getLogger("pfamsum.writer")

    def write_table(self, table: pd.DataFrame, path: str) -> str:
        """Write one table unquoted with a header row

        Raises:
            FileOperationError: If the file cannot be written
        """
        with atomic_write(path, newline='') as handle:
            table.to_csv(handle, sep='\t', index=False, na_rep=self.na_rep,
                         quoting=csv.QUOTE_NONE, escapechar='\\', lineterminator='\n')
        self.logger.info(f"Wrote {len(table)} rows to {path}")
        return path

    def write(self, protein_summary: pd.DataFrame, domain_summary: pd.DataFrame,
              base_name: str) -> List[str]:
        """Write both summary tables

        Returns:
            Paths written, protein summary first
        """
        return [
            self.write_table(protein_summary, f"{base_name}{PROTEIN_SUMMARY_SUFFIX}"),
            self.write_table(domain_summary, f"{base_name}{DOMAIN_SUMMARY_SUFFIX}"),
        ]
