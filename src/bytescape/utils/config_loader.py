"""
Configuration loader for bytescape.

This module provides functionality for loading and managing
configuration settings.

"""

import copy
import logging
import os
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml
from xdg.BaseDirectory import xdg_config_home

from bytescape.config import DEFAULT_CONFIG, MIN_BUFFER_SIZE

# Set up logger
logger = logging.getLogger(__name__)

# Type variable for config values with better type safety
T = TypeVar("T")

# Prefix of environment variables that override configuration
ENV_PREFIX = "BYTESCAPE_"

# Constant for minimum number of parts in environment variable
MIN_ENV_VAR_PARTS = 2

# Type for configuration values
ConfigValue = str | int | float | bool | dict[str, Any] | list[Any] | None


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigLoader:
	"""
	Loads and manages configuration for bytescape.

	Values come from the defaults, then a YAML file, then environment
	variables, each layer overriding the previous one.

	"""

	_instance = None  # For singleton pattern

	@classmethod
	def get_instance(cls, config_file: str | None = None, reload: bool = False) -> "ConfigLoader":
		"""
		Get the singleton instance of ConfigLoader.

		Args:
		        config_file: Path to configuration file (optional)
		        reload: Whether to reload config even if already loaded

		Returns:
		        ConfigLoader: Singleton instance

		"""
		if cls._instance is None or reload:
			cls._instance = cls(config_file)
		return cls._instance

	def __init__(self, config_file: str | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
		        config_file: Path to configuration file (optional)

		"""
		self.config: dict[str, Any] = {}
		self.config_file = self._resolve_config_file(config_file)
		self.load_config()

	def _resolve_config_file(self, config_file: str | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, use that. Otherwise, look in standard locations:
		1. ./.bytescape.yml in the current directory
		2. $XDG_CONFIG_HOME/bytescape/config.yml
		3. ~/.bytescape/config.yml

		Args:
		        config_file: Explicitly provided config file path (optional)

		Returns:
		        Path | None: Resolved config file path or None if no suitable file found

		"""
		if config_file:
			path = Path(config_file).expanduser().resolve()
			if not path.exists():
				logger.warning("Specified config file not found: %s", path)
			return path

		local_config = Path(".bytescape.yml")
		if local_config.exists():
			return local_config

		xdg_config_file = Path(xdg_config_home) / "bytescape" / "config.yml"
		if xdg_config_file.exists():
			return xdg_config_file

		legacy_config = Path.home() / ".bytescape" / "config.yml"
		if legacy_config.exists():
			return legacy_config

		return None

	def load_config(self) -> dict[str, Any]:
		"""
		Load configuration from file and apply environment variable overrides.

		Returns:
		        dict[str, Any]: Loaded configuration

		Raises:
		        ConfigError: If the file exists but cannot be loaded, or a value is invalid

		"""
		self.config = copy.deepcopy(DEFAULT_CONFIG)

		if self.config_file:
			try:
				if self.config_file.exists():
					with self.config_file.open(encoding="utf-8") as f:
						file_config = yaml.safe_load(f)
					if file_config is not None and not isinstance(file_config, dict):
						msg = f"Top level of {self.config_file} must be a mapping"
						raise ConfigError(msg)
					if file_config:
						self._merge_configs(self.config, file_config)
					logger.info("Loaded configuration from %s", self.config_file)
				else:
					logger.warning("Configuration file not found: %s", self.config_file)
			except (OSError, yaml.YAMLError) as e:
				error_msg = f"Error loading configuration from {self.config_file}: {e}"
				logger.exception(error_msg)
				raise ConfigError(error_msg) from e

		self._apply_env_overrides()
		self._resolve_paths()
		self._validate()

		return self.config

	def _merge_configs(self, base: dict[str, Any], override: dict[str, Any]) -> None:
		"""
		Recursively merge two configuration dictionaries.

		Args:
		        base: Base configuration dictionary to merge into
		        override: Override configuration to apply

		"""
		for key, value in override.items():
			if isinstance(value, dict) and key in base and isinstance(base[key], dict):
				self._merge_configs(base[key], value)
			else:
				base[key] = value

	def _apply_env_overrides(self) -> None:
		"""Apply environment variable overrides to configuration."""
		# Look for environment variables in the form BYTESCAPE_SECTION_KEY
		for env_var, value in os.environ.items():
			if not env_var.startswith(ENV_PREFIX):
				continue
			parts = env_var.lower().split("_")[1:]
			if len(parts) < MIN_ENV_VAR_PARTS:
				continue
			section, key = parts[0], "_".join(parts[1:])

			# Try to convert value to appropriate type
			typed_value: ConfigValue
			if value.lower() in ("true", "yes"):
				typed_value = True
			elif value.lower() in ("false", "no"):
				typed_value = False
			else:
				try:
					typed_value = int(value)
				except ValueError:
					try:
						typed_value = float(value)
					except ValueError:
						typed_value = value

			if not isinstance(self.config.get(section), dict):
				self.config[section] = {}

			self.config[section][key] = typed_value
			logger.debug("Applied environment override %s: %s", env_var, typed_value)

	def _resolve_paths(self) -> None:
		"""Resolve and expand any paths in the configuration."""
		path_keys = [
			("logging", "log_file"),
		]

		for section, key in path_keys:
			if section in self.config and key in self.config[section]:
				path_str = self.config[section][key]
				if isinstance(path_str, str):
					self.config[section][key] = str(Path(path_str).expanduser().resolve())

	def _validate(self) -> None:
		"""
		Check configuration values.

		Raises:
		        ConfigError: If a value has the wrong type or is out of range

		"""
		buffer_size = self.get("escape.buffer_size")
		if isinstance(buffer_size, bool) or not isinstance(buffer_size, int):
			msg = f"escape.buffer_size must be an integer, got {buffer_size!r}"
			raise ConfigError(msg)
		if buffer_size < MIN_BUFFER_SIZE:
			msg = f"escape.buffer_size must be at least {MIN_BUFFER_SIZE}, got {buffer_size}"
			raise ConfigError(msg)

		for key in ("logging.verbose", "logging.console"):
			if not isinstance(self.get(key), bool):
				msg = f"{key} must be a boolean, got {self.get(key)!r}"
				raise ConfigError(msg)

		log_file = self.get("logging.log_file")
		if log_file is not None and not isinstance(log_file, str):
			msg = f"logging.log_file must be a path, got {log_file!r}"
			raise ConfigError(msg)

	def get(self, key: str, default: T = None) -> T:
		"""
		Get a configuration value using dot notation.

		Examples:
		        config.get("escape")
		        config.get("escape.buffer_size")

		Args:
		        key: Configuration key, can include dots for nested access
		        default: Default value if key not found

		Returns:
		        T: Configuration value or default

		"""
		current = self.config

		for part in key.split("."):
			if isinstance(current, dict) and part in current:
				current = current[part]
			else:
				return default

		return cast("T", current)
