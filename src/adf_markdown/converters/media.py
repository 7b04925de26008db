"""Converters for media and math nodes."""

from typing import Any, Dict, List

from ..models import AdfNode, AdfNodeType, MarkdownBlock
from ..state import ConversionState


def media_url(attrs: Dict[str, Any]) -> str:
    """External media keep their URL; attachments get an attachment:<id> reference."""
    url = attrs.get("url")
    if isinstance(url, str) and url:
        return url
    media_id = attrs.get("id")
    return f"attachment:{media_id}" if media_id else ""


def convert_media(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    alt = node.attrs.get("alt") or node.attrs.get("__fileName") or ""
    return f"![{alt}]({media_url(node.attrs)})"


def convert_media_single(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    return "\n".join(rendered for rendered in (child.render() for child in children) if rendered)


def convert_media_group(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    return "\n\n".join(rendered for rendered in (child.render() for child in children) if rendered)


def latex_source(node: AdfNode) -> str:
    """Get LaTeX from attrs.text, attrs.body, the node text or its text children."""
    for key in ("text", "body", "latex"):
        value = node.attrs.get(key)
        if isinstance(value, str) and value:
            return value
    if node.text:
        return node.text
    return "".join(child.text or "" for child in node.content)


def render_math(latex: str) -> str:
    return f"$$\n{latex}\n$$"


def convert_math(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    """Inline math renders as $...$, block math as a $$ fenced block."""
    latex = latex_source(node)
    if node.node_type == AdfNodeType.MATH:
        return f"${latex.strip()}$"
    return render_math(latex)
