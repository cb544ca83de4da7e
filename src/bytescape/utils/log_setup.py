"""
Logging setup for bytescape.

The library itself only emits records through module loggers. Applications
embedding it call one of these helpers once to decide where records go.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from rich.logging import RichHandler

if TYPE_CHECKING:
	from bytescape.utils.config_loader import ConfigLoader


def setup_logging(
	is_verbose: bool = False,
	log_to_console: bool = True,
	log_file_path: Path | str | None = None,
) -> None:
	"""
	Set up logging configuration.

	Args:
	        is_verbose: Enable verbose logging
	        log_to_console: Whether to log to the console
	        log_file_path: Optional path to a file for logging. If None, no file logging.

	"""
	log_level = logging.DEBUG if is_verbose else logging.WARNING

	root_logger = logging.getLogger()
	root_logger.setLevel(log_level)

	# Clear existing handlers to avoid duplicate logs if called multiple times
	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)

	if log_to_console:
		console_handler = RichHandler(
			level=log_level,
			rich_tracebacks=True,
			show_time=True,
			show_path=is_verbose,
		)
		root_logger.addHandler(console_handler)

	if log_file_path:
		try:
			file_handler_path = Path(log_file_path)
			file_handler_path.parent.mkdir(parents=True, exist_ok=True)

			file_handler = logging.FileHandler(file_handler_path, mode="a", encoding="utf-8")
			file_handler.setLevel(logging.DEBUG)
			file_handler.setFormatter(
				logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s")
			)
			root_logger.addHandler(file_handler)
			root_logger.debug("Logging to file: %s", file_handler_path)
		except (OSError, TypeError) as e:
			# Report on plain stderr since the console handler may be absent
			crit_logger = logging.getLogger("bytescape.critical_setup")
			crit_logger.handlers.clear()
			console_err_handler = logging.StreamHandler()
			console_err_handler.setFormatter(logging.Formatter("%(message)s"))
			crit_logger.addHandler(console_err_handler)
			crit_logger.propagate = False
			crit_logger.critical("[BYTESCAPE CRITICAL] Failed to set up file logging to %s: %s", log_file_path, e)


def setup_logging_from_config(config_loader: ConfigLoader) -> None:
	"""Apply the ``logging`` section of a loaded configuration."""
	setup_logging(
		is_verbose=config_loader.get("logging.verbose", False),
		log_to_console=config_loader.get("logging.console", True),
		log_file_path=config_loader.get("logging.log_file"),
	)
	log_environment_info()


def log_environment_info() -> None:
	"""Log information about the execution environment."""
	logger = logging.getLogger(__name__)

	import platform

	from bytescape import __version__

	logger.info("bytescape version: %s", __version__)
	logger.info("Python version: %s", platform.python_version())
	logger.info("Platform: %s", platform.platform())
