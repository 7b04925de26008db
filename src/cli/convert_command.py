"""ConvertCommand for converting one ADF file to markdown.

This module implements the body of the adf2md command: load configuration,
optionally set up Confluence page-title lookups, convert the input file and
write the markdown to a file or stdout.
"""

import logging
from dataclasses import replace
from typing import Optional

import typer

from src.adf_markdown.config import ConversionConfig
from src.adf_markdown.config_loader import ConfigLoader
from src.adf_markdown.engine import ANNOTATION_START, AdfToMarkdownConverter
from src.adf_markdown.errors import AdfParseError, ConfigError, FilesystemError
from src.adf_markdown.link_resolver import PageLookup
from src.confluence_client.api_wrapper import APIWrapper
from src.confluence_client.auth import Authenticator
from src.confluence_client.page_lookup import ConfluencePageLookup
from .errors import InputNotFoundError, OutputWriteError
from .models import ConversionSummary, ExitCode
from .output import OutputHandler

logger = logging.getLogger(__name__)


class ConvertCommand:
    """Converts an ADF JSON file to annotated markdown.

    Example:
        >>> command = ConvertCommand(OutputHandler())
        >>> exit_code = command.run("page.json", output_path="page.md")
    """

    def __init__(
        self,
        output_handler: OutputHandler,
        authenticator: Optional[Authenticator] = None,
        page_lookup: Optional[PageLookup] = None,
    ):
        """Initialize the convert command.

        Args:
            output_handler: Handler for status messages
            authenticator: Optional Authenticator instance for testing
            page_lookup: Optional page lookup to use instead of the
                Confluence REST API
        """
        self.output = output_handler
        self.authenticator = authenticator
        self.page_lookup = page_lookup

    def run(
        self,
        input_path: str,
        output_path: Optional[str] = None,
        base_url: Optional[str] = None,
        config_path: Optional[str] = None,
        lookup: bool = True,
    ) -> ExitCode:
        """Run the conversion.

        Args:
            input_path: ADF JSON file to convert
            output_path: Markdown file to write (stdout when None)
            base_url: Confluence base URL, overriding the configuration
            config_path: Optional YAML configuration file
            lookup: Whether to look up Confluence page titles for links

        Returns:
            ExitCode describing the outcome
        """
        try:
            config = self.load_config(config_path, base_url)
        except (ConfigError, FilesystemError) as e:
            logger.error(f"Configuration failed: {e}")
            self.output.error(f"Invalid configuration: {e}")
            return ExitCode.CONFIG_ERROR

        page_lookup = self.build_page_lookup() if lookup else None

        try:
            content = self.read_input(input_path)
            self.output.debug(f"Read {len(content)} characters from {input_path}")
            converter = AdfToMarkdownConverter(config, page_lookup=page_lookup)
            markdown = converter.convert(content)
        except (InputNotFoundError, FilesystemError, AdfParseError) as e:
            logger.error(f"Cannot convert {input_path}: {e}")
            self.output.error(str(e))
            return ExitCode.INVALID_INPUT

        try:
            self.write_output(markdown, output_path)
        except OutputWriteError as e:
            logger.error(str(e))
            self.output.error(str(e))
            return ExitCode.GENERAL_ERROR

        summary = ConversionSummary(
            input_path=input_path,
            output_path=output_path,
            characters=len(markdown),
            annotations=markdown.count(ANNOTATION_START),
            lookups_enabled=page_lookup is not None,
        )
        if output_path:
            self.output.success(f"Converted {input_path} to {output_path}")
        if output_path or self.output.verbosity >= 1:
            self.output.print_summary(summary)
        return ExitCode.SUCCESS

    def load_config(self, config_path: Optional[str], base_url: Optional[str]) -> ConversionConfig:
        """Load configuration from a YAML file, or defaults plus CONFLUENCE_URL.

        Raises:
            ConfigError: If the configuration file is invalid
            FilesystemError: If the configuration file cannot be read
        """
        if config_path:
            self.output.info(f"Loading configuration from {config_path}")
            return ConfigLoader.load(config_path, base_url=base_url)

        config = ConfigLoader.from_env()
        if base_url:
            config = replace(config, base_url=base_url)
        return config

    def build_page_lookup(self) -> Optional[PageLookup]:
        """Page lookup for link titles, or None when credentials are missing."""
        if self.page_lookup is not None:
            return self.page_lookup

        auth = self.authenticator or Authenticator()
        missing = auth.missing_variables()
        if missing:
            self.output.info(
                f"Page titles will not be looked up (missing {', '.join(missing)})"
            )
            return None

        logger.debug("Confluence page lookups enabled")
        return ConfluencePageLookup(APIWrapper(auth))

    def read_input(self, input_path: str) -> str:
        """Read the ADF JSON input file.

        Raises:
            InputNotFoundError: If the file does not exist
            FilesystemError: If the file cannot be read
        """
        try:
            with open(input_path, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            raise InputNotFoundError(input_path)
        except (OSError, UnicodeDecodeError) as e:
            raise FilesystemError(input_path, 'read', str(e))

    def write_output(self, markdown: str, output_path: Optional[str]) -> None:
        """Write markdown to output_path, or to stdout when it is None.

        Raises:
            OutputWriteError: If the file cannot be written
        """
        if not output_path:
            typer.echo(markdown)
            return

        try:
            with open(output_path, 'w', encoding='utf-8') as f:
                f.write(markdown)
                if markdown and not markdown.endswith('\n'):
                    f.write('\n')
        except OSError as e:
            raise OutputWriteError(output_path, str(e))
        logger.info(f"Wrote {len(markdown)} characters to {output_path}")
