"""Unit tests for adf_markdown.config_loader module."""

from unittest.mock import patch

import pytest

from src.adf_markdown.config import ALL_ATTRIBUTES
from src.adf_markdown.config_loader import ConfigLoader
from src.adf_markdown.errors import ConfigError, FilesystemError


def write_config(tmp_path, content: str) -> str:
    path = tmp_path / "adf2md.yaml"
    path.write_text(content, encoding="utf-8")
    return str(path)


class TestConfigLoaderLoad:
    """Test cases for ConfigLoader.load."""

    def test_load_valid_config(self, tmp_path):
        path = write_config(tmp_path, (
            'base_url: "https://example.atlassian.net/wiki"\n'
            "panel_admonitions:\n"
            '  custom: "abstract"\n'
            "critical_attributes:\n"
            '  heading: ["level"]\n'
            "  layoutSection: all\n"
        ))

        config = ConfigLoader.load(path)

        assert config.base_url == "https://example.atlassian.net/wiki"
        assert config.panel_admonitions["custom"] == "abstract"
        assert config.critical_attributes["heading"] == ("level",)
        assert config.critical_attributes["layoutSection"] is ALL_ATTRIBUTES

    def test_base_url_argument_overrides_file(self, tmp_path):
        path = write_config(tmp_path, 'base_url: "https://file"\n')
        config = ConfigLoader.load(path, base_url="https://flag")
        assert config.base_url == "https://flag"

    def test_missing_file_raises_filesystem_error(self, tmp_path):
        with pytest.raises(FilesystemError) as exc_info:
            ConfigLoader.load(str(tmp_path / "missing.yaml"))
        assert "Configuration file not found" in str(exc_info.value)
        assert exc_info.value.operation == "read"

    def test_invalid_yaml_raises_config_error(self, tmp_path):
        path = write_config(tmp_path, "base_url: [unclosed\n")
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.load(path)
        assert "Invalid YAML syntax" in str(exc_info.value)

    def test_empty_file_raises_config_error(self, tmp_path):
        path = write_config(tmp_path, "")
        with pytest.raises(ConfigError, match="empty"):
            ConfigLoader.load(path)

    def test_non_mapping_raises_config_error(self, tmp_path):
        path = write_config(tmp_path, "- a\n- b\n")
        with pytest.raises(ConfigError, match="YAML dictionary"):
            ConfigLoader.load(path)


class TestConfigLoaderParse:
    """Test cases for ConfigLoader.parse validation."""

    def test_empty_mapping_gives_defaults(self):
        config = ConfigLoader.parse({})
        assert config.base_url == ""
        assert config.panel_admonitions["info"] == "info"

    def test_unknown_field(self):
        with pytest.raises(ConfigError, match="Unknown fields: spaces"):
            ConfigLoader.parse({"spaces": []})

    def test_base_url_must_be_string(self):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.parse({"base_url": 42})
        assert exc_info.value.config_field == "base_url"

    def test_base_url_is_stripped(self):
        assert ConfigLoader.parse({"base_url": "  https://x  "}).base_url == "https://x"

    def test_string_table_must_be_mapping(self):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.parse({"status_icons": ["red"]})
        assert exc_info.value.config_field == "status_icons"

    def test_string_table_values_must_be_strings(self):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.parse({"status_icons": {"green": 1}})
        assert exc_info.value.config_field == "status_icons.green"

    def test_critical_attributes_shape(self):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader.parse({"critical_attributes": {"heading": "level"}})
        assert exc_info.value.config_field == "critical_attributes.heading"


class TestConfigLoaderFromEnv:
    """Test cases for ConfigLoader.from_env."""

    @patch("src.adf_markdown.config_loader.load_dotenv")
    def test_reads_confluence_url(self, mock_load_dotenv, monkeypatch):
        monkeypatch.setenv("CONFLUENCE_URL", "https://env.atlassian.net/wiki")

        config = ConfigLoader.from_env()

        mock_load_dotenv.assert_called_once_with()
        assert config.base_url == "https://env.atlassian.net/wiki"

    @patch("src.adf_markdown.config_loader.load_dotenv")
    def test_explicit_env_file(self, mock_load_dotenv, monkeypatch):
        monkeypatch.delenv("CONFLUENCE_URL", raising=False)

        config = ConfigLoader.from_env(".env.test")

        mock_load_dotenv.assert_called_once_with(".env.test")
        assert config.base_url == ""
