"""Parser for ADF (Atlassian Document Format) documents.

This module turns ADF JSON into AdfNode trees and provides the pre-order
flattening used to build the DocumentContext.
"""

import json
import logging
from typing import Any, Dict, List, Union

from .errors import AdfParseError
from .models import AdfMark, AdfNode, DocumentContext

logger = logging.getLogger(__name__)


class AdfParser:
    """Parser for ADF documents.

    Converts ADF JSON to AdfNode objects. Malformed pieces are kept rather
    than dropped: attributes of the wrong shape are treated as absent and
    child entries that are not objects become 'unknown' nodes carrying the
    raw value, so the fallback converter still preserves them.
    """

    def parse(self, adf: Union[AdfNode, Dict[str, Any], str]) -> AdfNode:
        """Parse ADF input into an AdfNode tree.

        Args:
            adf: An AdfNode (returned unchanged), a parsed JSON dictionary,
                or a JSON string

        Returns:
            Root AdfNode

        Raises:
            AdfParseError: If the input is not a JSON object
        """
        if isinstance(adf, AdfNode):
            return adf

        if isinstance(adf, str):
            return self.parse_from_string(adf)

        if not isinstance(adf, dict):
            raise AdfParseError(f"expected an object, got {type(adf).__name__}")

        return self._parse_node(adf)

    def parse_from_string(self, adf_string: str) -> AdfNode:
        """Parse an ADF JSON string into an AdfNode tree.

        Args:
            adf_string: The ADF document as a JSON string

        Returns:
            Root AdfNode

        Raises:
            AdfParseError: If the string is not valid JSON
        """
        try:
            adf_json = json.loads(adf_string)
        except json.JSONDecodeError as e:
            raise AdfParseError(f"malformed JSON ({e.msg} at line {e.lineno})") from e

        if not isinstance(adf_json, dict):
            raise AdfParseError(f"expected an object, got {type(adf_json).__name__}")
        return self._parse_node(adf_json)

    def _parse_node(self, node_data: Any) -> AdfNode:
        """Parse a single ADF node from JSON.

        Args:
            node_data: Node data, normally a dictionary

        Returns:
            Parsed AdfNode object
        """
        if not isinstance(node_data, dict):
            logger.debug(f"Wrapping non-object ADF entry: {str(node_data)[:50]}")
            return AdfNode(type="unknown", attrs={"raw": node_data})

        node_type = node_data.get("type")
        if not isinstance(node_type, str) or not node_type:
            node_type = "unknown"

        text = node_data.get("text")
        if text is not None and not isinstance(text, str):
            text = str(text)

        attrs = node_data.get("attrs")
        if not isinstance(attrs, dict):
            attrs = {}

        marks_data = node_data.get("marks")
        if not isinstance(marks_data, list):
            marks_data = []
        marks = [
            AdfMark(
                type=m.get("type", "unknown"),
                attrs=m.get("attrs") if isinstance(m.get("attrs"), dict) else {},
            )
            for m in marks_data
            if isinstance(m, dict)
        ]

        content_data = node_data.get("content")
        if not isinstance(content_data, list):
            content_data = []
        content = [self._parse_node(child) for child in content_data]

        return AdfNode(
            type=node_type,
            content=content,
            text=text,
            attrs=attrs,
            marks=marks,
        )


def flatten_nodes(root: AdfNode) -> List[AdfNode]:
    """Flatten a node tree in pre-order (document reading order).

    Args:
        root: Root of the tree

    Returns:
        List of every node, the root first
    """
    nodes: List[AdfNode] = []

    def collect(node: AdfNode) -> None:
        nodes.append(node)
        for child in node.content:
            collect(child)

    collect(root)
    return nodes


def build_document_context(root: AdfNode) -> DocumentContext:
    """Build the read-only document context for one conversion."""
    return DocumentContext(all_nodes=tuple(flatten_nodes(root)), root_document=root)
