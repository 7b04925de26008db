"""Table renderers: pipe tables and key/value property tables.

Markdown table cells cannot hold newlines, so cell content is flattened to a
single line: blocks are joined with <br> and nested list indentation becomes
a repeated-dash depth marker. Cells whose shape this loses report complex
content so the metadata policy annotates them.
"""

import re
from typing import List

from ..heuristics import escape_table_cell, is_property_table
from ..models import LIST_NODE_TYPES, AdfNode, ConverterContext, ConverterResult, MarkdownBlock
from ..state import ConversionState

CELL_SEPARATOR = "<br>"

_LIST_TYPES = {node_type.value for node_type in LIST_NODE_TYPES}
_LIST_LINE = re.compile(r"^(\s*)([-*+]|\d+\.)\s+(.*)$")


def flatten_list_line(line: str) -> str:
    """Turn an indented list line into a dash depth marker ("    - x" -> "--- x")."""
    match = _LIST_LINE.match(line)
    if not match:
        return line.strip()
    indent, marker, text = match.groups()
    unit = 3 if marker[0].isdigit() else 2
    depth = 1 + len(indent.expandtabs(4)) // unit
    dashes = "-" * depth
    if marker[0].isdigit():
        return f"{dashes} {marker} {text}"
    return f"{dashes} {text}"


def flatten_cell_block(block: MarkdownBlock) -> List[str]:
    """Render one cell child as single-line fragments."""
    rendered = block.render(compact=True)
    if block.adf_type in _LIST_TYPES:
        lines = [flatten_list_line(line) for line in rendered.split("\n")]
    else:
        lines = [line.strip() for line in rendered.split("\n")]
    return [line for line in lines if line]


def convert_table_cell(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> ConverterResult:
    """Render a header or plain cell as one escaped line."""
    fragments: List[str] = []
    for child in children:
        fragments.extend(flatten_cell_block(child))

    blocks = [child for child in children if child.render()]
    complex_content = len(blocks) > 1 or any(child.adf_type in _LIST_TYPES for child in blocks)

    markdown = escape_table_cell(CELL_SEPARATOR.join(fragments))
    context = ConverterContext(has_complex_content=True) if complex_content else None
    return ConverterResult(markdown, context)


def convert_table_row(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    cells = [child.render(compact=True) for child in children]
    return "| " + " | ".join(cells) + " |"


def _row_cells(row: MarkdownBlock) -> List[MarkdownBlock]:
    return list(row.children)


def render_property_table(rows: List[MarkdownBlock]) -> str:
    """Render 1-header/1-cell rows as "**Key:** Value" lines."""
    lines = []
    for row in rows:
        cells = _row_cells(row)
        header = next((cell for cell in cells if cell.adf_type == "tableHeader"), None)
        value = next((cell for cell in cells if cell.adf_type == "tableCell"), None)
        key = header.render(compact=True).strip() if header else ""
        if key.startswith("**") and key.endswith("**") and len(key) > 4:
            key = key[2:-2]
        text = value.render(compact=True).strip() if value else ""
        lines.append(f"**{key}:** {text}".rstrip())
    return "\n\n".join(lines)


def render_pipe_table(rows: List[MarkdownBlock]) -> str:
    """Render rows as a pipe table padded to the widest row.

    The header separator is only emitted when every first-row cell has
    content.
    """
    grid = [[cell.render(compact=True) for cell in _row_cells(row)] for row in rows]
    width = max((len(cells) for cells in grid), default=0)
    if width == 0:
        return ""
    grid = [cells + [""] * (width - len(cells)) for cells in grid]

    lines = ["| " + " | ".join(cells) + " |" for cells in grid]
    if all(cell.strip() for cell in grid[0]):
        lines.insert(1, "| " + " | ".join(["---"] * width) + " |")
    return "\n".join(lines)


def convert_table(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> ConverterResult:
    """Render a table as property lines or as a pipe table."""
    complex_content = any(
        "hasComplexContent: true" in cell.yaml_block
        for row in children
        for cell in _row_cells(row)
    )
    context = ConverterContext(has_complex_content=True) if complex_content else None

    if is_property_table(node):
        return ConverterResult(render_property_table(children), context)
    return ConverterResult(render_pipe_table(children), context)
