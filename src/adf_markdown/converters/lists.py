"""List renderers: bullet, ordered and task lists.

Each item's first line gets the bullet or number; its continuation lines
are re-indented under the first line's text, except nested list lines,
which already carry their own indentation and pass through unchanged.
"""

from typing import Callable, List

from ..heuristics import coerce_int, is_list_line
from ..models import LIST_NODE_TYPES, AdfNode, AdfNodeType, MarkdownBlock
from ..state import ConversionState
from .text import join_inline

BULLET_INDENT = "  "
ORDERED_INDENT = "   "

_LIST_TYPES = {node_type.value for node_type in LIST_NODE_TYPES}


def bullet_for_level(level: int) -> str:
    """Bullet glyph by nesting depth: "-" on even levels, "*" on odd ones."""
    return "-" if level % 2 == 0 else "*"


def render_list_items(children: List[MarkdownBlock], prefix_for: Callable[[int], str]) -> str:
    """Render list items with their prefixes and aligned continuation lines.

    Args:
        children: Converted list items
        prefix_for: Builds the first-line prefix for the n-th item

    Returns:
        The list as markdown lines
    """
    output = []
    item_number = 0
    for child in children:
        if child.adf_type in _LIST_TYPES:
            # Lists nested directly in a list render at their own level
            output.append(child.render())
            continue

        prefix = prefix_for(item_number)
        item_number += 1
        lines = child.render(compact=True).split("\n")
        rendered = [f"{prefix}{lines[0]}"]
        continuation = " " * len(prefix)
        in_nested_list = False
        for line in lines[1:]:
            if not line.strip():
                rendered.append("")
            elif is_list_line(line):
                in_nested_list = True
                rendered.append(line)
            elif in_nested_list and line.startswith(continuation) and len(line) - len(line.lstrip()) > len(continuation):
                # Continuation of a nested item, already indented
                rendered.append(line)
            else:
                in_nested_list = False
                rendered.append(f"{continuation}{line}")
        output.append("\n".join(rendered))

    return "\n".join(output)


def convert_bullet_list(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    prefix = f"{BULLET_INDENT * state.level}{bullet_for_level(state.level)} "
    return render_list_items(children, lambda index: prefix)


def convert_ordered_list(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    """Render a numbered list; the counter starts at attrs.order (default 1)."""
    start = coerce_int(node.attrs.get("order"), default=1, minimum=0)
    indent = ORDERED_INDENT * state.level
    return render_list_items(children, lambda index: f"{indent}{start + index}. ")


def convert_list_item(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    """Join an item's blocks; nested lists follow their paragraph directly."""
    parts = []
    for child in children:
        rendered = child.render()
        if not rendered:
            continue
        if parts:
            parts.append("\n" if child.adf_type in _LIST_TYPES else "\n\n")
        parts.append(rendered)
    return "".join(parts)


def convert_task_list(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    prefix = f"{BULLET_INDENT * state.level}- "
    return render_list_items(children, lambda index: prefix)


def convert_task_item(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    """Render a task as "[ ] text", or "[x] text" when its state is DONE."""
    checkbox = "[x]" if node.attrs.get("state") == "DONE" else "[ ]"
    if all(child.inline for child in children):
        text = join_inline(children)
    else:
        text = convert_list_item(node, children, state)
    return f"{checkbox} {text}".rstrip() if text else checkbox


def is_nested_list(child: AdfNode, parent: AdfNode) -> bool:
    """Whether child is a list nested in a list item (or a task list in a task list)."""
    if child.node_type not in LIST_NODE_TYPES:
        return False
    if parent.node_type in (AdfNodeType.LIST_ITEM, AdfNodeType.TASK_ITEM):
        return True
    return child.node_type == AdfNodeType.TASK_LIST and parent.node_type == AdfNodeType.TASK_LIST
