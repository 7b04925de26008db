"""Main CLI entry point for the adf2md command.

This module provides the Typer application that converts an ADF JSON file
(as returned by the Confluence REST API) into annotated markdown.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer

from src.cli.convert_command import ConvertCommand
from src.cli.models import ExitCode
from src.cli.output import OutputHandler

VERSION = "0.1.0"

app = typer.Typer(
    name="adf2md",
    help="""Convert Atlassian Document Format (ADF) JSON to reversible markdown.

EXAMPLES:
  adf2md page.json                                  # Markdown to stdout
  adf2md page.json -o page.md                       # Markdown to a file
  adf2md page.json --base-url https://x.atlassian.net/wiki --no-lookup""",
    add_completion=False,
    rich_markup_mode=None,  # Disable Rich markup to avoid compatibility issues
)

# Module logger
logger = logging.getLogger(__name__)

CONSOLE_LOG_FORMAT = "%(asctime)s [%(levelname)8s] %(message)s"
FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Verbosity -> level; anything above 2 is DEBUG
VERBOSITY_LEVELS = {0: logging.WARNING, 1: logging.INFO}


def _attach_handler(app_logger: logging.Logger, handler: logging.Handler, level: int, log_format: str) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(log_format, datefmt=LOG_DATE_FORMAT))
    app_logger.addHandler(handler)


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Set up logging for the converter packages.

    Only the 'src' logger is touched, so atlassian-python-api and urllib3
    keep their own levels. Calling this again replaces earlier handlers.

    Args:
        verbosity: 0=WARNING, 1=INFO, 2 or more=DEBUG
        logdir: Directory for an additional adf2md_<timestamp>.log file
    """
    level = VERBOSITY_LEVELS.get(verbosity, logging.DEBUG)

    app_logger = logging.getLogger("src")
    app_logger.setLevel(level)
    app_logger.handlers.clear()
    _attach_handler(app_logger, logging.StreamHandler(sys.stderr), level, CONSOLE_LOG_FORMAT)

    if not logdir:
        return

    log_dir = Path(logdir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"adf2md_{datetime.now():%Y%m%d_%H%M%S}.log"
    _attach_handler(app_logger, logging.FileHandler(log_file, encoding="utf-8"), level, FILE_LOG_FORMAT)
    logger.info(f"Logging to file: {log_file}")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"adf2md version {VERSION}")
        raise typer.Exit()


@app.command()
def main_command(
    input_file: str = typer.Argument(
        ...,
        help="ADF JSON file to convert",
        metavar="INPUT",
    ),
    output_file: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Markdown file to write (defaults to stdout)",
        metavar="FILE",
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="Confluence base URL (overrides config file and CONFLUENCE_URL)",
        metavar="URL",
    ),
    config_file: Optional[str] = typer.Option(
        None,
        "--config",
        help="YAML file with conversion overrides",
        metavar="FILE",
    ),
    lookup: bool = typer.Option(
        True,
        "--lookup/--no-lookup",
        help="Look up Confluence page titles for links (needs CONFLUENCE_* credentials)",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Convert an ADF JSON file to annotated markdown.

    \b
    Nodes markdown cannot express losslessly are wrapped in
    <!-- ADF-START ... --> / <!-- ADF-END ... --> comments.
    """
    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)

    try:
        exit_code = ConvertCommand(output_handler=output).run(
            input_path=input_file,
            output_path=output_file,
            base_url=base_url,
            config_path=config_file,
            lookup=lookup,
        )
    except Exception as e:
        logger.exception("Unexpected error during conversion")
        output.error(f"Unexpected error: {e}")
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    raise typer.Exit(exit_code)


def main() -> None:
    """Main entry point for the CLI application.

    This function is called when the module is executed directly or
    when the console script is invoked.
    """
    app()


# Allow running as: python -m src.cli.main
if __name__ == "__main__":
    main()
