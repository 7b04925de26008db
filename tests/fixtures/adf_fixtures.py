"""ADF document fixtures for converter tests.

Provides small builders for ADF node dictionaries so tests read as the
document structure they exercise.
"""

from typing import Any, Dict, List, Optional


# Type alias for ADF documents
AdfDocument = Dict[str, Any]
AdfNode = Dict[str, Any]


def create_adf_doc(content: List[AdfNode]) -> AdfDocument:
    """Create a basic ADF document with given content nodes."""
    return {
        "type": "doc",
        "version": 1,
        "content": content
    }


def create_text(text: str, marks: Optional[List[Dict[str, Any]]] = None) -> AdfNode:
    """Create a text node, optionally with marks."""
    node = {"type": "text", "text": text}
    if marks:
        node["marks"] = marks
    return node


def create_paragraph(text: str = "", local_id: str = None) -> AdfNode:
    """Create an ADF paragraph node with optional localId."""
    node = {
        "type": "paragraph",
        "content": [create_text(text)] if text else []
    }
    if local_id:
        node["attrs"] = {"localId": local_id}
    return node


def create_inline_paragraph(*inline_nodes: AdfNode) -> AdfNode:
    """Create a paragraph from already-built inline nodes."""
    return {"type": "paragraph", "content": list(inline_nodes)}


def create_heading(text: str, level: int = 1, local_id: str = None) -> AdfNode:
    """Create an ADF heading node."""
    node = {
        "type": "heading",
        "attrs": {"level": level},
        "content": [create_text(text)]
    }
    if local_id:
        node["attrs"]["localId"] = local_id
    return node


def create_list_item(text: str, *nested: AdfNode) -> AdfNode:
    """Create a list item holding a paragraph and optional nested blocks."""
    return {
        "type": "listItem",
        "content": [create_paragraph(text), *nested]
    }


def create_bullet_list(*items: AdfNode) -> AdfNode:
    return {"type": "bulletList", "content": list(items)}


def create_ordered_list(*items: AdfNode, order: Optional[int] = None) -> AdfNode:
    node = {"type": "orderedList", "content": list(items)}
    if order is not None:
        node["attrs"] = {"order": order}
    return node


def create_task_item(text: str, state: str = "TODO", local_id: str = None) -> AdfNode:
    attrs = {"state": state}
    if local_id:
        attrs["localId"] = local_id
    return {"type": "taskItem", "attrs": attrs, "content": [create_text(text)]}


def create_task_list(*items: AdfNode) -> AdfNode:
    return {"type": "taskList", "attrs": {"localId": "task-list"}, "content": list(items)}


def create_table_cell(content: str, attrs: Optional[Dict[str, Any]] = None) -> AdfNode:
    """Create a table cell with text content."""
    cell = {
        "type": "tableCell",
        "content": [create_paragraph(content)]
    }
    if attrs:
        cell["attrs"] = attrs
    return cell


def create_table_header(content: str, attrs: Optional[Dict[str, Any]] = None) -> AdfNode:
    """Create a table header cell with text content."""
    header = create_table_cell(content, attrs)
    header["type"] = "tableHeader"
    return header


def create_table_row(*cells: AdfNode) -> AdfNode:
    return {"type": "tableRow", "content": list(cells)}


def create_table(*rows: AdfNode, attrs: Optional[Dict[str, Any]] = None) -> AdfNode:
    table = {"type": "table", "content": list(rows)}
    if attrs:
        table["attrs"] = attrs
    return table


def create_panel(panel_type: str, *content: AdfNode) -> AdfNode:
    return {"type": "panel", "attrs": {"panelType": panel_type}, "content": list(content)}


def create_code_block(code: str, language: Optional[str] = None) -> AdfNode:
    node = {"type": "codeBlock", "content": [create_text(code)]}
    if language:
        node["attrs"] = {"language": language}
    return node


def create_extension(
    extension_key: str,
    macro_params: Optional[Dict[str, Any]] = None,
    node_type: str = "extension",
    content: Optional[List[AdfNode]] = None,
    local_id: str = None,
) -> AdfNode:
    """Create a macro node with macroParams in Confluence's {"value": ...} form."""
    attrs: Dict[str, Any] = {
        "extensionType": "com.atlassian.confluence.macro.core",
        "extensionKey": extension_key,
    }
    if macro_params is not None:
        attrs["parameters"] = {
            "macroParams": {name: {"value": value} for name, value in macro_params.items()}
        }
    if local_id:
        attrs["localId"] = local_id
    node = {"type": node_type, "attrs": attrs}
    if content:
        node["content"] = content
    return node


def create_inline_card(url: str) -> AdfNode:
    return {"type": "inlineCard", "attrs": {"url": url}}


def create_document_with_headings(headings: List[tuple]) -> AdfDocument:
    """Create a doc from (level, text) pairs."""
    return create_adf_doc([create_heading(text, level) for level, text in headings])
