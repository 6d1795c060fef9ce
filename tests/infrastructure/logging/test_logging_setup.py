"""Tests for logging handlers and setup."""
import io
import json
import logging

import pytest

from fogmap.config.config import Config
from fogmap.infrastructure.logging import (
    get_logger, setup_logging, setup_simple_logging, get_log_stats
)
from fogmap.infrastructure.logging.handlers import ConsoleHandler, FileHandler


@pytest.fixture
def restore_root_logger():
    """Put the root logger's handlers and level back after the test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestHandlers:
    """Test logging handlers."""

    def test_file_handler_writes_json(self, tmp_path):
        """Test the file handler creates its directory and writes JSON lines."""
        log_file = tmp_path / 'nested' / 'fogmap.log'
        handler = FileHandler(str(log_file))
        logger = get_logger("test.file_handler")
        logger.setLevel(logging.DEBUG)
        logger.addHandler(handler)

        try:
            logger.log_performance('enumerate_cells', 0.2, items_processed=100)
        finally:
            logger.removeHandler(handler)
            handler.close()

        lines = log_file.read_text().strip().splitlines()
        assert len(lines) == 1
        data = json.loads(lines[0])
        assert data['logger'] == "test.file_handler"
        assert data['performance']['items_processed'] == 100

    def test_file_handler_plain(self, tmp_path):
        """Test plain-text file output."""
        log_file = tmp_path / 'plain.log'
        handler = FileHandler(str(log_file), use_json=False)
        logger = get_logger("test.file_plain")
        logger.setLevel(logging.DEBUG)
        logger.addHandler(handler)

        try:
            logger.warning("Skipped footprints")
        finally:
            logger.removeHandler(handler)
            handler.close()

        assert " - test.file_plain - WARNING - Skipped footprints" in log_file.read_text()

    def test_console_handler_no_color_for_pipes(self):
        """Test colors are off for non-terminal streams."""
        stream = io.StringIO()
        handler = ConsoleHandler(stream=stream)
        logger = get_logger("test.console")
        logger.addHandler(handler)

        try:
            logger.warning("Region not found")
        finally:
            logger.removeHandler(handler)

        output = stream.getvalue()
        assert "Region not found" in output
        assert '\033[' not in output
        assert handler.level == logging.INFO


class TestSetup:
    """Test logging setup."""

    def test_setup_logging(self, tmp_path, restore_root_logger):
        """Test console and file handlers are installed from config."""
        config = Config()
        log_file = tmp_path / 'logs' / 'fogmap.log'

        setup_logging(config, log_file=str(log_file), log_level='DEBUG')

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert sum(isinstance(h, ConsoleHandler) for h in root.handlers) == 1
        assert sum(isinstance(h, FileHandler) for h in root.handlers) == 1

        stats = get_log_stats()
        assert stats['file']['filename'] == str(log_file)
        assert stats['file']['backup_count'] == 5

        for handler in root.handlers:
            handler.flush()
        first = json.loads(log_file.read_text().splitlines()[0])
        assert first['message'] == "Structured logging system initialized"

    def test_setup_logging_console_only(self, restore_root_logger):
        """Test file logging can be disabled."""
        setup_logging(Config(), file=False)

        root = restore_root_logger
        assert root.level == logging.INFO
        assert not any(isinstance(h, FileHandler) for h in root.handlers)
        assert get_log_stats() == {}

    def test_setup_simple_logging(self, restore_root_logger):
        """Test console-only setup replaces existing handlers."""
        setup_simple_logging('warning')
        setup_simple_logging('warning')

        root = restore_root_logger
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], ConsoleHandler)
