"""Data models for CLI operations.

This module defines the exit codes and the conversion summary reported by
the adf2md command.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    These exit codes provide meaningful feedback about the operation result:
    - SUCCESS (0): Conversion completed successfully
    - GENERAL_ERROR (1): Unexpected failure, or the output could not be written
    - INVALID_INPUT (3): Input file missing, unreadable or not ADF
    - CONFIG_ERROR (4): Configuration file missing or invalid

    2 is left to Click, which uses it for usage errors.

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_INPUT = 3
    CONFIG_ERROR = 4


@dataclass
class ConversionSummary:
    """Outcome of converting one ADF file.

    Attributes:
        input_path: ADF JSON file that was converted
        output_path: Markdown file written, or None for stdout
        characters: Length of the markdown output
        annotations: Number of ADF-START annotations in the output
        lookups_enabled: Whether Confluence page titles were looked up

    Example:
        >>> summary = ConversionSummary(input_path="page.json", characters=120)
    """
    input_path: str
    output_path: Optional[str] = None
    characters: int = 0
    annotations: int = 0
    lookups_enabled: bool = False
