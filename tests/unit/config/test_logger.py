"""Tests for logging setup."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from azprov.config.schemas import LogFileConfig, LoggingConfig
from azprov.helpers.logger import DetailedFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    azure_level = logging.getLogger("azure").level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.getLogger("azure").setLevel(azure_level)


@pytest.mark.unit
class TestSetupLogging:
    """Test handler and level configuration."""

    def test_stdout(self, restore_root_logger):
        setup_logging(LoggingConfig(level="DEBUG", destination="stdout"))

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, DetailedFormatter)
        assert logging.getLogger("azure").level == logging.WARNING

    def test_file_and_stdout(self, restore_root_logger, tmp_path):
        log_path = tmp_path / "logs" / "azprov.log"
        config = LoggingConfig(level="INFO", destination="both",
                               file=LogFileConfig(path=str(log_path), max_size_mb=1, backup_count=2))

        logger = setup_logging(config)
        logger.info("provider ready", region="eastus")

        root = restore_root_logger
        file_handlers = [handler for handler in root.handlers if isinstance(handler, RotatingFileHandler)]
        assert len(root.handlers) == 2
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 1024 * 1024
        assert file_handlers[0].backupCount == 2
        file_handlers[0].flush()
        assert "provider ready" in log_path.read_text()
