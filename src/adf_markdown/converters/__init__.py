"""Per-type converters and the node type to converter registry.

A converter is called as ``converter(node, children, state)`` where
``children`` are the node's already converted child blocks. It returns a
markdown string, a ConverterResult carrying policy hints, or (fallback only)
a finished MarkdownBlock. Converters may be coroutines.
"""

from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Union

from ..models import AdfNode, AdfNodeType, ConverterResult, MarkdownBlock
from ..state import ConversionState
from .blocks import (
    convert_blockquote,
    convert_code_block,
    convert_expand,
    convert_fragment,
    convert_heading,
    convert_panel,
    convert_paragraph,
    convert_rule,
)
from .extensions import EXTENSION_RULES, ExtensionRule, convert_extension, select_rule
from .fallback import NOT_IMPLEMENTED_TYPE, convert_not_implemented
from .links import convert_card, convert_link
from .lists import (
    convert_bullet_list,
    convert_list_item,
    convert_ordered_list,
    convert_task_item,
    convert_task_list,
    is_nested_list,
)
from .media import convert_math, convert_media, convert_media_group, convert_media_single
from .tables import convert_table, convert_table_cell, convert_table_row
from .text import (
    convert_code,
    convert_date,
    convert_em,
    convert_emoji,
    convert_hard_break,
    convert_mention,
    convert_status,
    convert_strong,
    convert_text,
)
from .toc import convert_toc

ConverterOutput = Union[str, ConverterResult, MarkdownBlock]
Converter = Callable[[AdfNode, List[MarkdownBlock], ConversionState], Any]

CONVERTERS: Mapping[AdfNodeType, Converter] = MappingProxyType({
    AdfNodeType.DOC: convert_fragment,
    AdfNodeType.FRAGMENT: convert_fragment,
    AdfNodeType.PARAGRAPH: convert_paragraph,
    AdfNodeType.HEADING: convert_heading,
    AdfNodeType.BULLET_LIST: convert_bullet_list,
    AdfNodeType.ORDERED_LIST: convert_ordered_list,
    AdfNodeType.LIST_ITEM: convert_list_item,
    AdfNodeType.TASK_LIST: convert_task_list,
    AdfNodeType.TASK_ITEM: convert_task_item,
    AdfNodeType.TABLE: convert_table,
    AdfNodeType.TABLE_ROW: convert_table_row,
    AdfNodeType.TABLE_HEADER: convert_table_cell,
    AdfNodeType.TABLE_CELL: convert_table_cell,
    AdfNodeType.CODE_BLOCK: convert_code_block,
    AdfNodeType.BLOCKQUOTE: convert_blockquote,
    AdfNodeType.RULE: convert_rule,
    AdfNodeType.PANEL: convert_panel,
    AdfNodeType.EXPAND: convert_expand,
    AdfNodeType.NESTED_EXPAND: convert_expand,
    AdfNodeType.MEDIA_SINGLE: convert_media_single,
    AdfNodeType.MEDIA_GROUP: convert_media_group,
    AdfNodeType.MEDIA: convert_media,
    AdfNodeType.BLOCK_CARD: convert_card,
    AdfNodeType.EMBED_CARD: convert_card,
    AdfNodeType.MATH: convert_math,
    AdfNodeType.MATH_BLOCK: convert_math,
    AdfNodeType.EASY_MATH_BLOCK: convert_math,
    AdfNodeType.TEXT: convert_text,
    AdfNodeType.HARD_BREAK: convert_hard_break,
    AdfNodeType.MENTION: convert_mention,
    AdfNodeType.EMOJI: convert_emoji,
    AdfNodeType.EMOTICON: convert_emoji,
    AdfNodeType.INLINE_CARD: convert_card,
    AdfNodeType.STATUS: convert_status,
    AdfNodeType.DATE: convert_date,
    AdfNodeType.LINK: convert_link,
    AdfNodeType.STRONG: convert_strong,
    AdfNodeType.EM: convert_em,
    AdfNodeType.CODE: convert_code,
    AdfNodeType.EXTENSION: convert_extension,
    AdfNodeType.INLINE_EXTENSION: convert_extension,
    AdfNodeType.BODIED_EXTENSION: convert_extension,
    AdfNodeType.TOC: convert_toc,
    AdfNodeType.UNKNOWN: convert_not_implemented,
})


def get_converter(node: AdfNode) -> Converter:
    """Look up the converter for a node; unrecognized types get the fallback."""
    return CONVERTERS.get(node.node_type, convert_not_implemented)


__all__ = [
    "CONVERTERS",
    "Converter",
    "ConverterOutput",
    "EXTENSION_RULES",
    "ExtensionRule",
    "NOT_IMPLEMENTED_TYPE",
    "convert_not_implemented",
    "get_converter",
    "is_nested_list",
    "select_rule",
]
