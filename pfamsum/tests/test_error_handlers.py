#!/usr/bin/env python3
"""
Tests for the exception hierarchy and error reporting helpers
"""
import logging
import unittest

import pytest

from pfamsum.error_handlers import (
    EXIT_CONFIG, EXIT_ERROR, EXIT_INTERRUPTED, EXIT_UNEXPECTED,
    exit_code_for, error_hints, format_error, handle_exceptions, log_exception
)
from pfamsum.exceptions import (
    PfamSumError, ValidationError, FieldResolutionError, JoinIntegrityError,
    IncompleteRowError, ConfigurationError, FileOperationError
)


class TestExceptionHierarchy(unittest.TestCase):

    def test_validation_subclasses(self):
        for cls in (FieldResolutionError, JoinIntegrityError, IncompleteRowError):
            self.assertTrue(issubclass(cls, ValidationError))
            self.assertTrue(issubclass(cls, PfamSumError))

    def test_details_default_to_empty(self):
        error = ConfigurationError("bad value")
        self.assertEqual(error.message, "bad value")
        self.assertEqual(error.details, {})
        self.assertEqual(str(error), "bad value")


class TestExitCodes(unittest.TestCase):

    def test_codes(self):
        self.assertEqual(exit_code_for(ConfigurationError("x")), EXIT_CONFIG)
        self.assertEqual(exit_code_for(JoinIntegrityError("x")), EXIT_ERROR)
        self.assertEqual(exit_code_for(FileOperationError("x")), EXIT_ERROR)
        self.assertEqual(exit_code_for(RuntimeError("x")), EXIT_UNEXPECTED)
        self.assertEqual(exit_code_for(KeyboardInterrupt()), EXIT_INTERRUPTED)


class TestFormatError(unittest.TestCase):

    def test_field_resolution_lists_columns(self):
        error = FieldResolutionError("AAChange field not found in MAF",
                                     {'candidates': ['HGVSp_Short', 'Protein_Change'],
                                      'available': ['Hugo_Symbol', 'Variant_Type']})
        lines = format_error(error).splitlines()
        self.assertEqual(lines[0], "FieldResolutionError: AAChange field not found in MAF")
        self.assertIn("  Tried columns: HGVSp_Short, Protein_Change", lines)
        self.assertIn("  Available columns: Hugo_Symbol, Variant_Type", lines)

    def test_join_integrity_lists_genes(self):
        genes = [f"G{i}" for i in range(12)]
        hints = error_hints(JoinIntegrityError("genes without totals", {'genes': genes}))
        self.assertEqual(hints, ["Genes without totals: G0, G1, G2, G3, G4, G5, G6, G7, G8, G9 (and 2 more)"])

    def test_missing_columns_and_path(self):
        self.assertEqual(error_hints(ValidationError("bad MAF", {'missing': ['Variant_Type']})),
                         ["Missing columns: Variant_Type"])
        self.assertEqual(error_hints(FileOperationError("unreadable", {'path': 'a.maf'})),
                         ["Path: a.maf"])

    def test_verbose_adds_other_details_only(self):
        error = ConfigurationError("Invalid configuration", {'errors': ['summary.top']})
        self.assertEqual(format_error(error), "ConfigurationError: Invalid configuration")
        self.assertIn("Details: {'errors': ['summary.top']}", format_error(error, verbose=True))

    def test_unexpected_error(self):
        self.assertEqual(format_error(KeyError('x')), "Unexpected Error (KeyError): 'x'")


class TestHandleExceptions:

    def test_passes_through_result(self):
        @handle_exceptions()
        def ok():
            return 'done'
        assert ok() == 'done'

    def test_known_error(self, capsys):
        @handle_exceptions()
        def fail():
            raise JoinIntegrityError("genes without totals", {'genes': ['BRAF']})
        assert fail() == EXIT_ERROR
        err = capsys.readouterr().err
        assert 'JoinIntegrityError: genes without totals' in err
        assert 'Genes without totals: BRAF' in err

    def test_unexpected_error(self, capsys):
        @handle_exceptions()
        def fail():
            raise RuntimeError("boom")
        assert fail() == EXIT_UNEXPECTED
        assert 'See the log' in capsys.readouterr().err

    def test_exit_on_error(self):
        @handle_exceptions(exit_on_error=True)
        def fail():
            raise ConfigurationError("no config")
        with pytest.raises(SystemExit) as excinfo:
            fail()
        assert excinfo.value.code == EXIT_CONFIG


class TestLogException:

    def test_includes_details_and_context(self, caplog):
        logger = logging.getLogger('pfamsum.test')
        with caplog.at_level(logging.ERROR, logger='pfamsum.test'):
            log_exception(logger, FieldResolutionError("no column", {'available': ['a']}),
                          context={'base_name': 'run'})
        record = caplog.records[-1]
        assert record.getMessage() == "FieldResolutionError: no column"
        assert record.context == {'available': ['a'], 'base_name': 'run'}
        assert record.exc_info is None

    def test_raised_error_keeps_traceback(self, caplog):
        logger = logging.getLogger('pfamsum.test')
        try:
            raise FileOperationError("disk full", {'path': 'out.txt'})
        except FileOperationError as e:
            with caplog.at_level(logging.ERROR, logger='pfamsum.test'):
                log_exception(logger, e)
        assert caplog.records[-1].exc_info is not None
