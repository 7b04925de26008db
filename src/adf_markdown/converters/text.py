"""Converters for inline nodes: text runs, marks and inline entities."""

import logging
from datetime import datetime, timezone
from typing import Any, List

from ..heuristics import title_case
from ..models import AdfMark, AdfNode, ConverterContext, ConverterResult, MarkdownBlock
from ..state import ConversionState

logger = logging.getLogger(__name__)

# Mark types the markdown rendering fully expresses
SUPPORTED_MARKS = {"code", "strong", "em", "strike", "underline", "subsup", "link"}

# Link mark attributes that are implied by the rendered [text](href)
_LINK_SURFACE_ATTRS = {"href"}


def join_inline(children: List[MarkdownBlock]) -> str:
    """Concatenate converted inline children in reading order."""
    return "".join(child.render() for child in children)


def apply_mark(text: str, mark: AdfMark) -> str:
    """Wrap text in the markdown syntax for one mark; unknown marks are a no-op."""
    if mark.type == "code":
        return f"`{text}`"
    if mark.type == "strong":
        return f"**{text}**"
    if mark.type == "em":
        return f"*{text}*"
    if mark.type == "strike":
        return f"~~{text}~~"
    if mark.type == "underline":
        return f"<u>{text}</u>"
    if mark.type == "subsup":
        tag = "sup" if mark.attrs.get("type") == "sup" else "sub"
        return f"<{tag}>{text}</{tag}>"
    if mark.type == "link":
        href = mark.attrs.get("href") or ""
        return f"[{text}]({href})"
    return text


def _needs_preserving(mark: AdfMark) -> bool:
    if mark.type not in SUPPORTED_MARKS:
        return True
    if mark.type == "link":
        return any(key not in _LINK_SURFACE_ATTRS for key in mark.attrs)
    return False


def convert_text(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> ConverterResult:
    """Render a text leaf with its marks applied in encounter order.

    Marks without a markdown form (textColor, link titles, ...) leave the
    text unchanged and are kept in the annotation so they are not lost.
    """
    text = node.text or ""
    for mark in node.marks:
        text = apply_mark(text, mark)

    if any(_needs_preserving(mark) for mark in node.marks):
        marks = [{"type": m.type, **({"attrs": m.attrs} if m.attrs else {})} for m in node.marks]
        return ConverterResult(text, ConverterContext(preserved={"marks": marks}))
    return ConverterResult(text)


def convert_strong(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    return f"**{join_inline(children)}**"


def convert_em(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    return f"*{join_inline(children)}*"


def convert_code(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    return f"`{node.text or join_inline(children)}`"


def convert_hard_break(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    return "  \n"


def convert_mention(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    """Render a user mention as its display text ("@Jane Doe")."""
    text = node.attrs.get("text")
    if not isinstance(text, str) or not text:
        text = str(node.attrs.get("id") or "unknown")
    if not text.startswith("@"):
        text = f"@{text}"
    return text


def convert_emoji(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    """Render an emoji as a glyph.

    attrs.text wins when it already is a glyph; otherwise the shortname is
    looked up in the emoji map, falling back to the shortname itself.
    """
    text = node.attrs.get("text")
    if isinstance(text, str) and text and not text.startswith(":"):
        return text

    short_name = node.attrs.get("shortName") or text or ""
    if not isinstance(short_name, str):
        short_name = str(short_name)
    key = short_name.strip(":")
    return state.config.emoji_shortnames.get(key, short_name)


def convert_status(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    """Render a status lozenge as colour glyph plus title-cased text."""
    raw = node.attrs.get("text")
    text = title_case(raw) if isinstance(raw, str) else (node.text or "")
    icon = state.config.status_icons.get(str(node.attrs.get("color", "")), "")
    if icon and text:
        return f"{icon} {text}"
    return icon or text


def format_timestamp(timestamp: Any) -> str:
    """Format milliseconds since the epoch as a UTC date (YYYY-MM-DD).

    Unparsable values are returned as text.
    """
    try:
        millis = int(float(timestamp))
        return datetime.fromtimestamp(millis / 1000, tz=timezone.utc).strftime("%Y-%m-%d")
    except (TypeError, ValueError, OverflowError, OSError):
        logger.debug(f"Unparsable date timestamp: {timestamp!r}")
        return "" if timestamp is None else str(timestamp)


def convert_date(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    return format_timestamp(node.attrs.get("timestamp"))

