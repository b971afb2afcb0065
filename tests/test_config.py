"""Tests for settings loading and validation."""

import pytest

from modpack_cli.exceptions import ConfigurationError
from modpack_cli.models.config import DEFAULT_API_BASE_URL
from modpack_cli.storage.config_manager import ConfigManager


def write_ini(path, body: str):
    path.write_text("[DEFAULT]\n" + body, encoding="utf-8")
    return path


class TestConfigManager:
    def test_defaults_when_file_missing(self, tmp_path):
        config = ConfigManager(tmp_path / "config.ini").load_config()

        assert config.max_workers == 6
        assert config.api_base_url == DEFAULT_API_BASE_URL
        assert config.mods_dir == "mods"
        assert config.timeout == 0

    def test_required_file_missing(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            ConfigManager(tmp_path / "config.ini", required=True).load_config()

    def test_values_from_file(self, tmp_path):
        path = write_ini(
            tmp_path / "config.ini",
            "max_workers = 3\napi_base_url = http://localhost:8080/api/v2/\ntimeout = 30\n",
        )

        config = ConfigManager(path).load_config()

        assert config.max_workers == 3
        assert config.api_base_url == "http://localhost:8080/api/v2"
        assert config.timeout == 30

    def test_cli_options_override_file(self, tmp_path):
        path = write_ini(tmp_path / "config.ini", "max_workers = 3\n")

        config = ConfigManager(path).load_config({"max_workers": 10})

        assert config.max_workers == 10

    def test_unknown_keys_are_ignored(self, tmp_path):
        path = write_ini(tmp_path / "config.ini", "colour = blue\n")

        config = ConfigManager(path).load_config()

        assert config.max_workers == 6

    @pytest.mark.parametrize(
        "body",
        [
            "max_workers = 0\n",
            "max_workers = 100\n",
            "api_base_url = ftp://example.com\n",
            "timeout = -1\n",
            "mods_dir = ../mods\n",
        ],
    )
    def test_invalid_values(self, tmp_path, body):
        path = write_ini(tmp_path / "config.ini", body)

        with pytest.raises(ConfigurationError, match="validation failed"):
            ConfigManager(path).load_config()

    def test_unparseable_file(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text("max_workers = 3\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="parsing"):
            ConfigManager(path).load_config()
