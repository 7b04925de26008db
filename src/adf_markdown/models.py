"""Data models for ADF (Atlassian Document Format) to markdown conversion.

This module defines the ADF node tree, the per-node conversion outputs
(MarkdownBlock, ConverterResult) and the read-only document context shared
with converters that need whole-document visibility.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class AdfNodeType(Enum):
    """Types of ADF nodes handled by the converter."""

    # Document root
    DOC = "doc"
    FRAGMENT = "fragment"

    # Block nodes
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    BULLET_LIST = "bulletList"
    ORDERED_LIST = "orderedList"
    LIST_ITEM = "listItem"
    TASK_LIST = "taskList"
    TASK_ITEM = "taskItem"
    TABLE = "table"
    TABLE_ROW = "tableRow"
    TABLE_HEADER = "tableHeader"
    TABLE_CELL = "tableCell"
    CODE_BLOCK = "codeBlock"
    BLOCKQUOTE = "blockquote"
    RULE = "rule"
    PANEL = "panel"
    EXPAND = "expand"
    NESTED_EXPAND = "nestedExpand"
    MEDIA_SINGLE = "mediaSingle"
    MEDIA_GROUP = "mediaGroup"
    MEDIA = "media"
    BLOCK_CARD = "blockCard"
    EMBED_CARD = "embedCard"
    MATH = "math"
    MATH_BLOCK = "mathBlock"
    EASY_MATH_BLOCK = "easy-math-block"

    # Inline nodes
    TEXT = "text"
    HARD_BREAK = "hardBreak"
    MENTION = "mention"
    EMOJI = "emoji"
    EMOTICON = "emoticon"
    INLINE_CARD = "inlineCard"
    STATUS = "status"
    DATE = "date"
    LINK = "link"
    STRONG = "strong"
    EM = "em"
    CODE = "code"

    # Extensions (macros)
    EXTENSION = "extension"
    INLINE_EXTENSION = "inlineExtension"
    BODIED_EXTENSION = "bodiedExtension"
    TOC = "toc"

    # Other
    UNKNOWN = "unknown"


# Lists whose nesting depth drives indentation
LIST_NODE_TYPES = {
    AdfNodeType.BULLET_LIST,
    AdfNodeType.ORDERED_LIST,
    AdfNodeType.TASK_LIST,
}

# Items that increase the nesting level of a directly nested list
LIST_ITEM_NODE_TYPES = {
    AdfNodeType.LIST_ITEM,
    AdfNodeType.TASK_ITEM,
}

# Nodes rendered inside a line of text; their annotations use the compact form
INLINE_NODE_TYPES = {
    AdfNodeType.TEXT,
    AdfNodeType.HARD_BREAK,
    AdfNodeType.MENTION,
    AdfNodeType.EMOJI,
    AdfNodeType.EMOTICON,
    AdfNodeType.INLINE_CARD,
    AdfNodeType.STATUS,
    AdfNodeType.DATE,
    AdfNodeType.LINK,
    AdfNodeType.STRONG,
    AdfNodeType.EM,
    AdfNodeType.CODE,
    AdfNodeType.INLINE_EXTENSION,
    AdfNodeType.MATH,
}

# ADF node types that are macros
MACRO_NODE_TYPES = {
    AdfNodeType.EXTENSION,
    AdfNodeType.INLINE_EXTENSION,
    AdfNodeType.BODIED_EXTENSION,
}

TABLE_NODE_TYPES = {
    AdfNodeType.TABLE,
    AdfNodeType.TABLE_ROW,
    AdfNodeType.TABLE_HEADER,
    AdfNodeType.TABLE_CELL,
}


@dataclass
class AdfMark:
    """Represents a text mark (formatting) in ADF.

    Attributes:
        type: Mark type (strong, em, link, code, etc.)
        attrs: Mark-specific attributes
    """

    type: str
    attrs: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AdfNode:
    """Represents a node in the ADF tree.

    Nodes are treated as read-only input: converters never modify them.

    Attributes:
        type: Node type tag (paragraph, heading, text, etc.)
        content: Ordered list of child nodes (reading order)
        text: Text content (for text nodes)
        attrs: Node attributes
        marks: Text formatting marks
    """

    type: str
    content: List["AdfNode"] = field(default_factory=list)
    text: Optional[str] = None
    attrs: Dict[str, Any] = field(default_factory=dict)
    marks: List[AdfMark] = field(default_factory=list)

    @property
    def local_id(self) -> Optional[str]:
        """Get the localId from attrs."""
        value = self.attrs.get("localId")
        return str(value) if value not in (None, "") else None

    @property
    def node_type(self) -> AdfNodeType:
        """Get the AdfNodeType enum value."""
        try:
            return AdfNodeType(self.type)
        except ValueError:
            return AdfNodeType.UNKNOWN

    @property
    def is_macro(self) -> bool:
        """Check if this node is a macro (extension)."""
        return self.node_type in MACRO_NODE_TYPES

    @property
    def is_list(self) -> bool:
        return self.node_type in LIST_NODE_TYPES

    def get_text_content(self) -> str:
        """Extract all text content from this node and its children.

        Returns:
            Concatenated text from all text nodes in the subtree.
        """
        if self.text:
            return self.text
        return "".join(child.get_text_content() for child in self.content)

    def to_dict(self) -> Dict[str, Any]:
        """Convert this node back to ADF JSON format.

        Returns:
            Dictionary suitable for JSON serialization
        """
        result: Dict[str, Any] = {"type": self.type}

        if self.text is not None:
            result["text"] = self.text

        if self.attrs:
            result["attrs"] = self.attrs

        if self.marks:
            result["marks"] = [
                {"type": m.type, **({"attrs": m.attrs} if m.attrs else {})}
                for m in self.marks
            ]

        if self.content:
            result["content"] = [child.to_dict() for child in self.content]

        return result


@dataclass
class ConverterContext:
    """Declarative hints a converter hands to the metadata policy.

    Attributes:
        has_complex_content: Table content the markdown grid cannot express
            (nested lists, several paragraphs)
        needs_yaml: Force an annotation even without critical attributes
        original_type: Type the node was rendered as, when it differs from
            the node's own type
        content_type: Extra content classification (e.g. "mermaid")
        preserved: Values the markdown cannot carry (unsupported marks);
            written to the annotation body as-is
    """

    has_complex_content: bool = False
    needs_yaml: bool = False
    original_type: Optional[str] = None
    content_type: Optional[str] = None
    preserved: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ConverterResult:
    """Markdown produced by a converter plus optional policy hints."""

    markdown: str
    context: Optional[ConverterContext] = None


@dataclass
class MarkdownBlock:
    """The converted fragment for one node.

    Attributes:
        yaml_block: Opening ADF-START annotation, empty when not needed
        markdown: Markdown body of the node
        adf_type: Type written to the annotation markers
        local_id: Identifier shared by the START and END markers
        inline: Whether the node sits inside a line of text
        children: Converted child blocks, for renderers that need the
            grandchildren (tables)
    """

    yaml_block: str = ""
    markdown: str = ""
    adf_type: str = ""
    local_id: Optional[str] = None
    inline: bool = False
    children: List["MarkdownBlock"] = field(default_factory=list, repr=False)

    @property
    def annotated(self) -> bool:
        return bool(self.yaml_block)

    def end_marker(self) -> str:
        """Closing marker matching this block's ADF-START annotation."""
        parts = ["<!-- ADF-END"]
        if self.adf_type:
            parts.append(f'adfType="{self.adf_type}"')
        if self.local_id:
            parts.append(f'localId="{self.local_id}"')
        return " ".join(parts) + " -->"

    def render(self, compact: Optional[bool] = None) -> str:
        """Render the block, wrapped in its annotation markers when present.

        Args:
            compact: Force the single-line form (defaults to the block's
                inline flag)

        Returns:
            Markdown fragment ready to be joined into the parent
        """
        if not self.yaml_block:
            return self.markdown

        if compact is None:
            compact = self.inline

        if compact:
            start = " ".join(
                line.strip() for line in self.yaml_block.splitlines() if line.strip()
            )
            body = self.markdown.replace("\n", " ") if self.inline else self.markdown
            return f"{start}{body}{self.end_marker()}"

        return f"{self.yaml_block}\n{self.markdown}\n{self.end_marker()}"


@dataclass(frozen=True)
class DocumentContext:
    """Whole-document view computed once per conversion.

    Attributes:
        all_nodes: Every node of the document, flattened in pre-order
        root_document: The root doc node
    """

    all_nodes: Tuple[AdfNode, ...]
    root_document: AdfNode


@dataclass
class HeadingInfo:
    """A heading found in the document for TOC generation."""

    level: int
    text: str
    slug: str
    local_id: Optional[str] = None
