"""Unit tests for adf_markdown.errors module."""

import pytest

from src.adf_markdown.errors import (
    AdfMarkdownError,
    AdfParseError,
    ConfigError,
    ConverterError,
    FilesystemError,
)
from src.cli.errors import CLIError
from src.confluence_client.errors import ConfluenceError, PageNotFoundError


class TestErrorHierarchy:
    """Test cases for the project-wide error root."""

    @pytest.mark.parametrize("error_class", [ConverterError, ConfluenceError, CLIError])
    def test_package_roots_share_one_base(self, error_class):
        assert issubclass(error_class, AdfMarkdownError)

    def test_confluence_errors_caught_by_root(self):
        with pytest.raises(AdfMarkdownError):
            raise PageNotFoundError("123")

    def test_converter_errors_inherit_from_converter_error(self):
        for error_class in (AdfParseError, ConfigError, FilesystemError):
            assert issubclass(error_class, ConverterError)


class TestConverterErrors:
    """Test cases for the converter error messages."""

    def test_parse_error_message(self):
        error = AdfParseError("root must be an object")
        assert str(error) == "Invalid ADF input: root must be an object"
        assert error.original_message == "root must be an object"

    def test_filesystem_error_with_reason(self):
        error = FilesystemError("/tmp/doc.json", "read", "Permission denied")
        assert str(error) == "Filesystem operation 'read' failed for /tmp/doc.json: Permission denied"
        assert error.operation == "read"

    def test_config_error_with_field(self):
        error = ConfigError("must be a string", "base_url")
        assert str(error) == "Configuration error in field 'base_url': must be a string"
        assert error.config_field == "base_url"
