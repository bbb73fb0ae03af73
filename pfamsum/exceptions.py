#!/usr/bin/env python3
"""
Exception hierarchy for the pfamsum package.
All custom exceptions should inherit from PfamSumError.
"""
from typing import Dict, Any, Optional


class PfamSumError(Exception):
    """Base exception for all pfamsum errors"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize with error message and optional details

        Args:
            message: Error message
            details: Optional details dictionary with context
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(PfamSumError):
    """Invalid option value or unreadable configuration"""
    pass


class ValidationError(PfamSumError):
    """Data validation error"""
    pass


class FieldResolutionError(ValidationError):
    """No protein change column could be found in the mutation table"""
    pass


class JoinIntegrityError(ValidationError):
    """Mutated gene missing from the gene totals table"""
    pass


class IncompleteRowError(ValidationError):
    """Domain summary row with a missing required field"""
    pass


class FileOperationError(PfamSumError):
    """Error during file operations"""
    pass


class ParseWarning(UserWarning):
    """Mutations dropped because no amino acid position could be parsed"""
    pass
