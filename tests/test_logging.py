"""
Unit Tests for the Logging Helpers

Run:
    pytest tests/test_logging.py -v
"""

import sys
import os
import logging

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from spectrallab.utils.logging import setup_logging, get_logger, log_section


class TestLogging:
    """Test suite for setup_logging / log_section."""

    def test_file_handler_receives_records(self, tmp_path):
        log_file = tmp_path / 'logs' / 'run.log'
        logger = setup_logging(str(log_file), level=logging.DEBUG, name='spectrallab.test_file')

        get_logger('spectrallab.test_file').debug("engine ready")
        for handler in logger.handlers:
            handler.flush()

        text = log_file.read_text()
        assert "DEBUG" in text
        assert "engine ready" in text

    def test_reconfigure_does_not_stack_handlers(self, tmp_path):
        name = 'spectrallab.test_reconfigure'
        setup_logging(str(tmp_path / 'a.log'), name=name)
        logger = setup_logging(str(tmp_path / 'b.log'), name=name)

        assert len(logger.handlers) == 2
        console = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]
        assert console[0].level == logging.WARNING

    def test_console_only(self):
        logger = setup_logging(name='spectrallab.test_console')
        assert len(logger.handlers) == 1

    def test_log_section(self, tmp_path):
        log_file = tmp_path / 'section.log'
        logger = setup_logging(str(log_file), name='spectrallab.test_section')

        log_section(logger, "RESULTS", {'peak_bin': 200, 'tone': {'frequency_hz': 20000.0}})
        for handler in logger.handlers:
            handler.flush()

        text = log_file.read_text()
        assert "RESULTS" in text
        assert "  peak_bin: 200" in text
        assert "    frequency_hz: 20000" in text
