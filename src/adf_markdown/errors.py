"""Typed exception hierarchy for ADF conversion errors.

The conversion core itself degrades gracefully (unknown nodes, bad attributes,
failed lookups); these exceptions are only raised at the edges, when input
cannot be read as ADF at all or when configuration is invalid.
"""

from typing import Optional


class AdfMarkdownError(Exception):
    """Base exception for all adf-markdown errors.

    Use this to catch any application-level error from the converter tool.
    """
    pass


class ConverterError(AdfMarkdownError):
    """Base exception for all converter-related errors."""
    pass


class AdfParseError(ConverterError):
    """Raised when input cannot be parsed as an ADF node tree."""

    def __init__(self, message: str):
        super().__init__(f"Invalid ADF input: {message}")
        self.original_message = message


class FilesystemError(ConverterError):
    """Raised when filesystem operations fail (read, write, permissions, etc)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigError(ConverterError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message
