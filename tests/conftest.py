"""Global test fixtures and configuration."""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from rich.logging import RichHandler

from bytescape.utils.config_loader import ENV_PREFIX, ConfigLoader


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
	"""
	Keep tests away from the developer's own configuration.

	Runs every test from an empty temporary directory, points XDG and HOME
	lookups there, drops any BYTESCAPE_* variables and resets the shared
	ConfigLoader instance.
	"""
	for env_var in list(os.environ):
		if env_var.startswith(ENV_PREFIX):
			monkeypatch.delenv(env_var)
	monkeypatch.chdir(tmp_path)
	monkeypatch.setenv("HOME", str(tmp_path))
	monkeypatch.setattr("bytescape.utils.config_loader.xdg_config_home", str(tmp_path / ".config"))
	monkeypatch.setattr(ConfigLoader, "_instance", None)
	yield


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
	"""
	Drop handlers installed during a logging test and restore the root level.

	Handlers that pytest attaches for log capture are managed by pytest and
	are left alone.
	"""
	root_logger = logging.getLogger()
	handlers = root_logger.handlers[:]
	level = root_logger.level
	yield root_logger
	for handler in root_logger.handlers[:]:
		if isinstance(handler, (RichHandler, logging.FileHandler)) and handler not in handlers:
			root_logger.removeHandler(handler)
			handler.close()
	root_logger.setLevel(level)
