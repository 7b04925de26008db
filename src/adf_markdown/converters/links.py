"""Converters for link nodes and smart cards."""

from typing import Any, Dict, List

from ..models import AdfNode, MarkdownBlock
from ..state import ConversionState
from .text import join_inline


def card_url(attrs: Dict[str, Any]) -> str:
    """Get a card's URL from attrs.url or attrs.data.url."""
    url = attrs.get("url")
    if isinstance(url, str) and url:
        return url
    data = attrs.get("data")
    if isinstance(data, dict):
        url = data.get("url")
        if isinstance(url, str):
            return url
    return ""


async def convert_link(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    """Render a link node; its own child text wins over resolved text."""
    url = node.attrs.get("href") or node.attrs.get("url") or ""
    text = join_inline(children)
    if not text:
        resolved = await state.link_resolver.resolve(url, node.attrs, state.base_url, adf_type=node.type)
        text = resolved.text or url
    return f"[{text}]({url})"


async def convert_card(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    """Render an inline, block or embed card as a markdown link."""
    url = card_url(node.attrs)
    if not url:
        data = node.attrs.get("data")
        name = data.get("name") if isinstance(data, dict) else None
        return str(name) if name else ""

    resolved = await state.link_resolver.resolve(url, node.attrs, state.base_url, adf_type=node.type)
    return f"[{resolved.text or url}]({url})"
