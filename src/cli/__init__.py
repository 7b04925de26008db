"""Command-line interface for ADF to markdown conversion.

This package provides the `adf2md` CLI tool that reads an ADF JSON file,
converts it with the reversible markdown converter and writes the result,
optionally resolving Confluence page titles for links.
"""

from .convert_command import ConvertCommand
from .models import ExitCode, ConversionSummary
from .errors import (
    CLIError,
    InputNotFoundError,
    OutputWriteError,
)

__all__ = [
    'ConvertCommand',
    'ExitCode',
    'ConversionSummary',
    'CLIError',
    'InputNotFoundError',
    'OutputWriteError',
]
