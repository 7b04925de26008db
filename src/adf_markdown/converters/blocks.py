"""Converters for block nodes: paragraphs, headings, code, quotes and panels."""

import logging
from typing import List

from ..heuristics import coerce_int, is_mermaid
from ..models import AdfNode, ConverterContext, ConverterResult, MarkdownBlock
from ..state import ConversionState
from .text import join_inline

logger = logging.getLogger(__name__)

ADMONITION_INDENT = "    "


def join_blocks(children: List[MarkdownBlock], separator: str = "\n\n") -> str:
    """Join rendered child blocks, skipping the ones that rendered empty."""
    return separator.join(rendered for rendered in (child.render() for child in children) if rendered)


def prefix_lines(text: str, prefix: str, blank: str = "") -> str:
    """Prefix every line of text; empty lines get `blank` instead."""
    return "\n".join(f"{prefix}{line}" if line.strip() else blank for line in text.split("\n"))


def convert_fragment(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    return join_blocks(children)


def convert_paragraph(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    return join_inline(children)


def convert_heading(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    """Render a heading; the level defaults to 1 and is clamped to 1..6."""
    level = coerce_int(node.attrs.get("level"), default=1, minimum=1, maximum=6)
    return f"{'#' * level} {join_inline(children)}"


def convert_code_block(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> ConverterResult:
    """Render a fenced code block.

    Without a declared language, Mermaid sources are fenced as "mermaid" and
    the annotation records that the language was inferred.
    """
    code = "\n".join(child.text or "" for child in node.content)
    if not code and node.text:
        code = node.text

    language = node.attrs.get("language")
    if not isinstance(language, str):
        language = ""

    context = None
    if not language and is_mermaid(code):
        logger.debug("Code block without language detected as mermaid")
        language = "mermaid"
        context = ConverterContext(needs_yaml=True, content_type="mermaid")

    fence = "````" if "```" in code else "```"
    return ConverterResult(f"{fence}{language}\n{code}\n{fence}", context)


def convert_blockquote(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    return prefix_lines(join_blocks(children), "> ", blank=">")


def convert_rule(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    return "---"


def admonition_keyword(panel_type: str, state: ConversionState) -> str:
    """Map a panelType to an admonition keyword ("error" -> "danger")."""
    config = state.config
    if panel_type in config.panel_admonitions:
        return config.panel_admonitions[panel_type]
    return config.panel_fallback_admonitions.get(panel_type, "note")


def render_admonition(keyword: str, title: str, body: str) -> str:
    """Render `!!! keyword "Title"` followed by a 4-space indented body."""
    title = " ".join(title.split()).replace('"', '\\"')
    header = f'!!! {keyword} "{title}"' if title else f"!!! {keyword}"
    if not body.strip():
        return header
    return f"{header}\n{prefix_lines(body, ADMONITION_INDENT)}"


def convert_panel(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    """Render a panel as an admonition.

    The first child block becomes the title, the remaining blocks the body.
    """
    panel_type = node.attrs.get("panelType")
    keyword = admonition_keyword(panel_type if isinstance(panel_type, str) else "", state)

    rendered = [child.render() for child in children]
    rendered = [block for block in rendered if block]
    title = rendered[0] if rendered else ""
    body = "\n\n".join(rendered[1:])
    return render_admonition(keyword, title, body)


def convert_expand(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> ConverterResult:
    """Render an expand section as a blockquote with a bold title.

    Expands always annotate: the blockquote alone reads as a plain quote.
    """
    title = node.attrs.get("title")
    lines = []
    if isinstance(title, str) and title.strip():
        lines.append(f"> **{title.strip()}**")

    body = join_blocks(children)
    if body:
        if lines:
            lines.append(">")
        lines.append(prefix_lines(body, "> ", blank=">"))

    return ConverterResult("\n".join(lines), ConverterContext(needs_yaml=True))
