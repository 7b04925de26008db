"""Typed exception hierarchy for CLI-related errors.

All exceptions inherit from CLIError, which itself derives from the
project-wide AdfMarkdownError base class.
"""

from typing import Optional

from src.adf_markdown.errors import AdfMarkdownError


class CLIError(AdfMarkdownError):
    """Base exception for all CLI-related errors."""
    pass


class InputNotFoundError(CLIError):
    """Raised when the ADF input file does not exist."""

    def __init__(self, input_path: str):
        super().__init__(f"Input file not found at {input_path}")
        self.input_path = input_path


class OutputWriteError(CLIError):
    """Raised when the markdown output cannot be written."""

    def __init__(self, output_path: str, reason: Optional[str] = None):
        message = f"Could not write markdown to {output_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.output_path = output_path
        self.reason = reason
