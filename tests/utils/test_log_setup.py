"""Tests for the logging setup helpers."""

import logging
from pathlib import Path

import pytest
from rich.logging import RichHandler

from bytescape import escape
from bytescape.utils.config_loader import ConfigLoader
from bytescape.utils.log_setup import setup_logging, setup_logging_from_config


@pytest.mark.unit
@pytest.mark.logging
class TestSetupLogging:
	"""Test cases for setup_logging."""

	def test_verbose_console(self, restore_root_logger: logging.Logger) -> None:
		"""Test verbose logging installs a debug-level rich handler."""
		setup_logging(is_verbose=True)

		assert restore_root_logger.level == logging.DEBUG
		assert len(restore_root_logger.handlers) == 1
		handler = restore_root_logger.handlers[0]
		assert isinstance(handler, RichHandler)
		assert handler.level == logging.DEBUG

	def test_quiet_by_default(self, restore_root_logger: logging.Logger) -> None:
		"""Test the default level is WARNING."""
		setup_logging()
		assert restore_root_logger.level == logging.WARNING

	def test_repeated_setup_replaces_handlers(self, restore_root_logger: logging.Logger) -> None:
		"""Test calling setup twice does not duplicate handlers."""
		setup_logging()
		setup_logging()
		assert len(restore_root_logger.handlers) == 1

	def test_no_console(self, restore_root_logger: logging.Logger) -> None:
		"""Test disabling console output."""
		setup_logging(log_to_console=False)
		assert restore_root_logger.handlers == []

	def test_file_logging(self, restore_root_logger: logging.Logger, tmp_path: Path) -> None:
		"""Test debug records from the escaper reach the log file."""
		log_file = tmp_path / "logs" / "bytescape.log"
		setup_logging(is_verbose=True, log_to_console=False, log_file_path=log_file)

		escape(b"a\x01")
		for handler in restore_root_logger.handlers:
			handler.flush()

		content = log_file.read_text(encoding="utf-8")
		assert "Escaped 2 bytes in 1 chunk(s)" in content
		assert "bytescape.escape" in content


@pytest.mark.unit
@pytest.mark.logging
@pytest.mark.config
class TestSetupLoggingFromConfig:
	"""Test cases for setup_logging_from_config."""

	def test_applies_logging_section(
		self, monkeypatch: pytest.MonkeyPatch, restore_root_logger: logging.Logger, tmp_path: Path
	) -> None:
		"""Test the logging section drives level, console and file output."""
		log_file = tmp_path / "from-config.log"
		monkeypatch.setenv("BYTESCAPE_LOGGING_VERBOSE", "true")
		monkeypatch.setenv("BYTESCAPE_LOGGING_CONSOLE", "false")
		monkeypatch.setenv("BYTESCAPE_LOGGING_LOG_FILE", str(log_file))

		setup_logging_from_config(ConfigLoader())
		for handler in restore_root_logger.handlers:
			handler.flush()

		assert restore_root_logger.level == logging.DEBUG
		assert [type(handler) for handler in restore_root_logger.handlers] == [logging.FileHandler]
		assert "bytescape version" in log_file.read_text(encoding="utf-8")
