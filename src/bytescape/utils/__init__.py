"""Utility module for bytescape package."""

from .config_loader import ConfigError, ConfigLoader
from .log_setup import setup_logging, setup_logging_from_config

__all__ = [
	"ConfigError",
	"ConfigLoader",
	"setup_logging",
	"setup_logging_from_config",
]
