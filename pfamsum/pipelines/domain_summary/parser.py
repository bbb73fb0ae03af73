#!/usr/bin/env python3
"""
Amino acid position parsing from protein change annotations.

Handles the HGVS-like short forms found in MAF protein change columns:

    p.V600E        -> 600
    p.C229Lfs*18   -> 229
    p.R123_L125del -> 123
    p.*757Lext*?   -> 757
"""

import re
import logging
import warnings
from typing import Any, NamedTuple, Optional, Tuple

import numpy as np
import pandas as pd

from pfamsum.exceptions import ParseWarning, ValidationError
from .models import ParseDiagnostics


_ALPHA = re.compile(r'[^\W\d_]')
_TRAILING_STOP = re.compile(r'\*$')
_LEADING_STOP = re.compile(r'^\*')
_STOP_SUFFIX = re.compile(r'\*.*')
_DIGITS = re.compile(r'\d+')
_MAX_POSITION = int(np.iinfo(np.int64).max)


class ParsedPosition(NamedTuple):
    """Conversion token and parsed position (None when unparseable)"""
    conversion: Optional[str]
    position: Optional[int]

    @property
    def ok(self) -> bool:
        return self.position is not None


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ''
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def extract_conversion(value: Any) -> Optional[str]:
    """Return the token after the last '.', or None if there is none"""
    if _is_missing(value):
        return None
    text = str(value)
    # a single trailing separator does not start a new token
    if text.endswith('.'):
        text = text[:-1]
    conversion = text.split('.')[-1]
    return conversion or None


def parse_position(value: Any) -> ParsedPosition:
    """Parse one protein change annotation

    Args:
        value: Raw annotation, e.g. 'p.V600E'; None/NaN/'' allowed

    Returns:
        ParsedPosition; position is None when no number could be extracted
        or the number does not fit a 64-bit integer
    """
    conversion = extract_conversion(value)
    if conversion is None:
        return ParsedPosition(None, None)

    token = _ALPHA.sub('', conversion)
    token = _TRAILING_STOP.sub('', token)
    token = _LEADING_STOP.sub('', token)
    token = _STOP_SUFFIX.sub('', token)
    token = token.split('_')[0].strip()

    if not _DIGITS.fullmatch(token):
        return ParsedPosition(conversion, None)
    position = int(token)
    if position > _MAX_POSITION:
        return ParsedPosition(conversion, None)
    return ParsedPosition(conversion, position)


class PositionParser:
    """Adds conv/pos columns to a mutation table and drops unparseable rows"""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def parse(self, mutations: pd.DataFrame,
              aa_col: str = 'AAChange') -> Tuple[pd.DataFrame, ParseDiagnostics]:
        """Parse positions for every row of a mutation table

        Args:
            mutations: Table with Hugo_Symbol, Variant_Type,
                Variant_Classification and the protein change column
            aa_col: Name of the protein change column

        Returns:
            (parsed table with an AAChange, conv and pos column, diagnostics)

        Raises:
            ValidationError: If a required column is missing
        """
        required = ['Hugo_Symbol', 'Variant_Type', 'Variant_Classification', aa_col]
        missing = [c for c in required if c not in mutations.columns]
        if missing:
            raise ValidationError(f"Mutation table is missing columns: {', '.join(missing)}",
                                  {'missing': missing, 'available': list(mutations.columns)})

        prot = pd.DataFrame({
            'Hugo_Symbol': mutations['Hugo_Symbol'].astype(str).to_numpy(),
            'Variant_Type': mutations['Variant_Type'].astype(str).to_numpy(),
            'Variant_Classification': mutations['Variant_Classification'].astype(str).to_numpy(),
            'AAChange': mutations[aa_col].to_numpy(dtype=object),
        })

        parsed = [parse_position(value) for value in prot['AAChange']]
        prot['conv'] = pd.Series([p.conversion for p in parsed], dtype=object)
        prot['pos'] = pd.Series([p.position for p in parsed], dtype='Int64')

        no_conv = prot['conv'].isna()
        no_pos = prot['pos'].isna() & ~no_conv
        diagnostics = ParseDiagnostics(
            total_records=len(prot),
            missing_conversion=int(no_conv.sum()),
            unparseable_position=int(no_pos.sum())
        )

        if diagnostics.dropped:
            message = (f"Removed {diagnostics.dropped} mutations for which AA position was not available "
                       f"({diagnostics.missing_conversion} without protein change, "
                       f"{diagnostics.unparseable_position} unparseable)")
            self.logger.warning(message)
            warnings.warn(message, ParseWarning, stacklevel=2)

        prot = prot[prot['pos'].notna()].reset_index(drop=True)
        prot['pos'] = prot['pos'].astype('int64')
        prot['AAChange'] = prot['AAChange'].astype(str)

        self.logger.debug(f"Parsed amino acid positions for {len(prot)} of {diagnostics.total_records} mutations")
        return prot, diagnostics
