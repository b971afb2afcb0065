"""
Manages loading and validation of the optional INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from modpack_cli.exceptions import ConfigurationError
from modpack_cli.models.config import InstallConfig

log = logging.getLogger(__name__)


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path, required: bool = False):
        """
        Args:
            config_file_path: Location of the INI file.
            required: Fail if the file does not exist instead of using defaults.
        """
        self.config_file_path = config_file_path
        self.required = required
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> InstallConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated InstallConfig object.

        Raises:
            ConfigurationError: If a required file is missing, the file cannot be
            parsed, or validation fails.
        """
        config_from_file: dict[str, Any] = {}

        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(f"Error parsing configuration file: {e}") from e
            config_from_file = self._get_config_as_dict()
            log.debug(f"Loaded settings from '{self.config_file_path}'")
        elif self.required:
            raise ConfigurationError(
                f"Configuration file not found at '{self.config_file_path}'."
            )

        # Override with CLI options
        if cli_options:
            config_from_file.update(cli_options)

        try:
            config_dir = self.config_file_path.parent
            return InstallConfig(**config_from_file, config_path=str(config_dir))
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the known keys present in the 'DEFAULT' section."""
        section = self._parser["DEFAULT"]
        known_keys = InstallConfig.get_ini_keys()
        unknown = set(section) - known_keys
        if unknown:
            log.warning(
                f"[yellow]Ignoring unknown config keys:[/] {', '.join(sorted(unknown))}"
            )
        return {key: section[key] for key in known_keys if key in section}
