"""Reversible ADF (Atlassian Document Format) to markdown conversion.

Nodes whose information markdown cannot express are wrapped in HTML-comment
annotations (ADF-START / ADF-END) carrying the critical attributes, so the
original tree can be rebuilt from the markdown. Plain content stays
annotation-free.

Key classes:
    AdfToMarkdownConverter: Traversal engine, the main entry point
    MetadataPolicy: Decides and renders annotations
    LinkResolver: Link display text, with optional Confluence title lookup
    ConversionConfig: Immutable conversion tables and base URL
    ConfigLoader: Loads ConversionConfig from YAML or the environment
    AdfParser: Parses ADF JSON into AdfNode trees
"""

from .config import ALL_ATTRIBUTES, CRITICAL_ATTRIBUTES, ConversionConfig
from .config_loader import ConfigLoader
from .engine import AdfToMarkdownConverter
from .errors import AdfMarkdownError, AdfParseError, ConfigError, ConverterError, FilesystemError
from .link_resolver import LinkResolver, ResolvedLink
from .metadata import MetadataPolicy
from .models import (
    AdfMark,
    AdfNode,
    AdfNodeType,
    ConverterContext,
    ConverterResult,
    DocumentContext,
    HeadingInfo,
    MarkdownBlock,
)
from .parser import AdfParser

__all__ = [
    # Main interface
    "AdfToMarkdownConverter",
    # Core classes
    "AdfParser",
    "MetadataPolicy",
    "LinkResolver",
    "ResolvedLink",
    # Configuration
    "ConversionConfig",
    "ConfigLoader",
    "CRITICAL_ATTRIBUTES",
    "ALL_ATTRIBUTES",
    # Data models
    "AdfMark",
    "AdfNode",
    "AdfNodeType",
    "ConverterContext",
    "ConverterResult",
    "DocumentContext",
    "HeadingInfo",
    "MarkdownBlock",
    # Errors
    "AdfMarkdownError",
    "ConverterError",
    "AdfParseError",
    "ConfigError",
    "FilesystemError",
]
