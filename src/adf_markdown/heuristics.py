"""Heuristics shared by the converters.

Mermaid sniffing for code blocks without a language, heading slugs for TOC
links, property-table detection and display-text helpers.
"""

import re
from typing import Optional

from .models import AdfNode, AdfNodeType

# Diagram declarations that may open a Mermaid source
_MERMAID_DECLARATIONS = (
    re.compile(r"^(graph|flowchart)\s+(TB|TD|BT|RL|LR)\b"),
    re.compile(
        r"^(sequenceDiagram|classDiagram(-v2)?|stateDiagram(-v2)?|erDiagram|journey|gantt"
        r"|gitGraph|mindmap|timeline|quadrantChart|requirementDiagram"
        r"|C4Context|C4Container|C4Component|C4Dynamic|C4Deployment)\s*$"
    ),
    re.compile(r"^pie(\s+showData)?(\s+title\b.*)?\s*$"),
    re.compile(r"^(sankey|xychart|block|packet|architecture)-beta\s*$"),
)

# "graph" on its own line is only a diagram when edges follow
_BARE_GRAPH = re.compile(r"^(graph|flowchart)\s*$")
_MERMAID_EDGE = re.compile(r"(-->|---|-\.->|==>|--[^-\s][^\n]*-->)")

# Emoji converted to words before punctuation is stripped from slugs
SLUG_EMOJI_TOKENS = {
    "✅": "white-check-mark",
    "✔": "heavy-check-mark",
    "❌": "x",
    "⚠": "warning",
    "ℹ": "information-source",
    "📝": "memo",
    "💡": "bulb",
    "🚀": "rocket",
    "🔥": "fire",
    "⭐": "star",
    "🎉": "tada",
    "📌": "pushpin",
    "📄": "page-facing-up",
    "📎": "paperclip",
    "⚙": "gear",
    "❗": "exclamation",
    "❓": "question",
}

_VARIATION_SELECTOR = "\ufe0f"


def is_mermaid(code: str) -> bool:
    """Guess whether a code block without a language is a Mermaid diagram.

    The first meaningful line must be a diagram declaration; "%%" comment
    lines and a leading "---" front-matter block are skipped.

    Args:
        code: Code block text

    Returns:
        True if the text looks like Mermaid source
    """
    lines = [line.strip() for line in code.splitlines()]
    in_front_matter = False
    for index, line in enumerate(lines):
        if not line or line.startswith("%%"):
            continue
        if line == "---":
            in_front_matter = not in_front_matter
            continue
        if in_front_matter:
            continue

        if any(pattern.match(line) for pattern in _MERMAID_DECLARATIONS):
            return True
        if _BARE_GRAPH.match(line):
            rest = "\n".join(lines[index + 1:])
            return bool(_MERMAID_EDGE.search(rest))
        return False

    return False


def generate_slug(text: str) -> str:
    """Generate an anchor slug for a heading.

    Lower-cases, turns known emoji into words, strips remaining punctuation
    (accented letters are kept) and collapses whitespace and hyphens.

    Args:
        text: Heading text

    Returns:
        Slug such as "getting-started"
    """
    slug = text.lower().replace(_VARIATION_SELECTOR, "")
    for emoji, token in SLUG_EMOJI_TOKENS.items():
        slug = slug.replace(emoji, f" {token} ")
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"[\s-]+", "-", slug.strip())
    return slug.strip("-")


def is_property_table(node: AdfNode) -> bool:
    """Check whether a table is a 2-column key/value table.

    Every row must hold exactly two cells, one header and one plain cell, in
    either order.

    Args:
        node: Table node

    Returns:
        True if the table should render as "**Key:** Value" lines
    """
    if not node.content:
        return False

    for row in node.content:
        cells = row.content
        if len(cells) != 2:
            return False
        types = {cell.node_type for cell in cells}
        if types != {AdfNodeType.TABLE_HEADER, AdfNodeType.TABLE_CELL}:
            return False
    return True


def title_case(text: str) -> str:
    """Capitalize each word and lower-case the rest ("IN PROGRESS" -> "In Progress")."""
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def is_list_line(line: str) -> bool:
    """Check whether a rendered line starts a markdown list item."""
    return bool(re.match(r"^\s*([-*+]|\d+\.)\s", line))


# Annotation comments carry JSON payloads and must reach the output untouched
_ANNOTATION_COMMENT = re.compile(r"(<!-- ADF-(?:START|END)\b.*?-->)", re.DOTALL)


def escape_table_cell(text: str) -> str:
    """Escape pipes so text can sit inside a markdown table cell.

    Pipes inside ADF annotation comments are left alone.
    """
    parts = _ANNOTATION_COMMENT.split(text)
    return "".join(
        part if index % 2 else re.sub(r"(?<!\\)\|", r"\\|", part)
        for index, part in enumerate(parts)
    )


def coerce_int(value: object, default: int, minimum: Optional[int] = None,
               maximum: Optional[int] = None) -> int:
    """Read an integer attribute, falling back to a default when malformed."""
    if isinstance(value, bool):
        return default
    try:
        number = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        return default
    if minimum is not None:
        number = max(minimum, number)
    if maximum is not None:
        number = min(maximum, number)
    return number
