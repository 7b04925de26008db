"""Reversibility policy: when a node needs an ADF annotation and what it holds.

An annotation is an HTML comment pair around a node's markdown:

    <!-- ADF-START
    adfType="panel"
    localId="abc"
    panelType: "info"
    -->
    ...markdown...
    <!-- ADF-END adfType="panel" localId="abc" -->

Everything the markdown syntax already implies is left out, so plain
paragraphs and plain lists stay annotation-free.
"""

import json
import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from .config import (
    ALL_ATTRIBUTES,
    DEFAULT_ATTRIBUTE_VALUES,
    TABLE_TYPES,
    ConversionConfig,
)
from .models import ConverterContext, MarkdownBlock

logger = logging.getLogger(__name__)

# Attributes carried by the START/END markers rather than the body
MARKER_ATTRIBUTES = ("localId",)


def generate_local_id(path: Sequence[int]) -> str:
    """Build a deterministic identifier from a node's position in the tree.

    Args:
        path: Child indexes from the root down to the node

    Returns:
        Identifier such as "adf-0-2-1" (just "adf" for the root)
    """
    return "-".join(["adf", *(str(index) for index in path)])


def _is_present(value: Any) -> bool:
    return value is not None and value != "" and value != [] and value != {}


def _is_default(name: str, value: Any) -> bool:
    defaults = DEFAULT_ATTRIBUTE_VALUES.get(name)
    if defaults is None:
        return False
    try:
        return value in defaults
    except TypeError:
        # Unhashable values are never defaults
        return False


class MetadataPolicy:
    """Decides, renders and attaches ADF annotations.

    The policy reads its tables from the injected ConversionConfig and holds
    no other state, so one instance can serve concurrent conversions.
    """

    def __init__(self, config: Optional[ConversionConfig] = None):
        self.config = config or ConversionConfig()

    def resolve_local_id(
        self, attrs: Mapping[str, Any], path: Sequence[int] = ()
    ) -> Tuple[str, bool]:
        """Pick the identifier shared by the START and END markers.

        Args:
            attrs: Node attributes
            path: Tree path used to generate an id when the node has none

        Returns:
            Tuple of (identifier, whether attrs.id was used)
        """
        local_id = attrs.get("localId")
        if _is_present(local_id):
            return str(local_id), False

        node_id = attrs.get("id")
        if _is_present(node_id) and isinstance(node_id, (str, int)):
            return str(node_id), True

        return generate_local_id(path), False

    def critical_attributes(
        self,
        node_type: str,
        attrs: Mapping[str, Any],
        id_is_marker: bool = False,
    ) -> Dict[str, Any]:
        """Filter attrs down to what the annotation body must carry.

        Args:
            node_type: ADF node type
            attrs: Node attributes
            id_is_marker: Whether attrs.id is already carried by the markers

        Returns:
            Attribute name to value, in the node's attribute order
        """
        policy = self.config.critical_attributes.get(node_type, ())
        critical: Dict[str, Any] = {}

        for name, value in attrs.items():
            if name in MARKER_ATTRIBUTES:
                continue
            if name == "id" and id_is_marker:
                continue
            if name == "type" and value == node_type:
                continue
            if policy is ALL_ATTRIBUTES:
                critical[name] = value
            elif name in policy and _is_present(value) and not _is_default(name, value):
                critical[name] = value

        return critical

    def should_annotate(
        self,
        node_type: str,
        attrs: Optional[Mapping[str, Any]] = None,
        context: Optional[ConverterContext] = None,
    ) -> bool:
        """Decide whether a node needs an annotation.

        Args:
            node_type: ADF node type
            attrs: Node attributes
            context: Hints reported by the node's converter

        Returns:
            True if markdown alone would lose information about the node
        """
        attrs = attrs or {}

        if node_type in self.config.always_annotate:
            return True

        if context is not None:
            if context.original_type and context.original_type != node_type:
                return True
            if context.needs_yaml or context.preserved:
                return True

        # attrs.id counts here: without an annotation it would be lost
        if self.critical_attributes(node_type, attrs, id_is_marker=False):
            return True

        if context is not None and context.has_complex_content and node_type in TABLE_TYPES:
            return True

        return False

    def render_body(
        self,
        node_type: str,
        attrs: Mapping[str, Any],
        context: Optional[ConverterContext] = None,
        id_is_marker: bool = False,
    ) -> Dict[str, Any]:
        """Collect the key/value pairs written inside the START comment."""
        body = self.critical_attributes(node_type, attrs, id_is_marker)

        if context is not None:
            if context.original_type and context.original_type != node_type:
                body["originalType"] = context.original_type
            if context.content_type:
                body["contentType"] = context.content_type
            if context.has_complex_content and node_type in TABLE_TYPES:
                body["hasComplexContent"] = True
            body.update(context.preserved)

        return body

    def render_annotation(
        self,
        node_type: str,
        attrs: Optional[Mapping[str, Any]],
        context: Optional[ConverterContext],
        local_id: str,
        id_is_marker: bool = False,
    ) -> str:
        """Render the opening ADF-START comment.

        Args:
            node_type: ADF node type written to the marker
            attrs: Node attributes
            context: Hints reported by the node's converter
            local_id: Marker identifier
            id_is_marker: Whether attrs.id is the marker identifier

        Returns:
            The START comment, one "key: <json>" line per body entry
        """
        lines = ["<!-- ADF-START", f'adfType="{node_type}"', f'localId="{local_id}"']
        body = self.render_body(node_type, attrs or {}, context, id_is_marker)
        for key, value in body.items():
            lines.append(f"{key}: {json.dumps(value, ensure_ascii=False)}")
        lines.append("-->")
        return "\n".join(lines)

    def render_end_marker(self, node_type: str, local_id: str) -> str:
        """Render the closing ADF-END comment."""
        return f'<!-- ADF-END adfType="{node_type}" localId="{local_id}" -->'

    def wrap(
        self,
        node_type: str,
        attrs: Optional[Mapping[str, Any]],
        markdown: str,
        context: Optional[ConverterContext] = None,
        path: Sequence[int] = (),
        inline: bool = False,
    ) -> MarkdownBlock:
        """Attach an annotation to a converted fragment when one is needed.

        Args:
            node_type: ADF node type
            attrs: Node attributes
            markdown: Fragment produced by the node's converter
            context: Hints reported by the converter
            path: Tree path of the node
            inline: Whether the node sits inside a line of text

        Returns:
            MarkdownBlock with an empty yaml_block when no annotation is needed
        """
        attrs = attrs or {}
        if not self.should_annotate(node_type, attrs, context):
            return MarkdownBlock(markdown=markdown, adf_type=node_type, inline=inline)

        local_id, id_is_marker = self.resolve_local_id(attrs, path)
        yaml_block = self.render_annotation(node_type, attrs, context, local_id, id_is_marker)
        logger.debug(f"Annotating {node_type} node {local_id}")
        return MarkdownBlock(
            yaml_block=yaml_block,
            markdown=markdown,
            adf_type=node_type,
            local_id=local_id,
            inline=inline,
        )
