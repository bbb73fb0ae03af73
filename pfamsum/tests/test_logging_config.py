#!/usr/bin/env python3
"""
Tests for run logging setup
"""
import logging
import os

import pytest

from pfamsum.core import LoggingManager


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    quiet = {name: logging.getLogger(name).level for name in LoggingManager.QUIET_LOGGERS}
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, lvl in quiet.items():
        logging.getLogger(name).setLevel(lvl)


class TestLoggingManager:

    def test_level_from_config(self):
        assert LoggingManager.resolve_level(False, {'level': 'warning'}) == logging.WARNING
        assert LoggingManager.resolve_level(False, {'level': 'chatty'}) == logging.INFO
        assert LoggingManager.resolve_level(True, {'level': 'ERROR'}) == logging.DEBUG

    def test_timestamped_file_in_log_dir(self, tmp_path):
        log_dir = tmp_path / 'logs'
        LoggingManager.configure(component='pfamsum', config={'logging': {'log_dir': str(log_dir)}})
        logging.getLogger('pfamsum.test').info("summary written")

        files = os.listdir(log_dir)
        assert len(files) == 1
        assert files[0].startswith('pfamsum_') and files[0].endswith('.log')

    def test_explicit_file_wins(self, tmp_path):
        log_file = tmp_path / 'run' / 'pfamsum.log'
        LoggingManager.configure(log_file=str(log_file), log_dir=str(tmp_path / 'unused'))
        logging.getLogger('pfamsum.test').warning("dropped rows")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert 'dropped rows' in log_file.read_text()
        assert not (tmp_path / 'unused').exists()

    def test_plotting_loggers_quieted(self):
        LoggingManager.configure(verbose=True)
        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger('matplotlib').level == logging.WARNING
