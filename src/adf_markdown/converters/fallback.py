"""Fallback for node types without a converter.

The whole original node is kept as the annotation payload and no markdown is
emitted, so unknown input is never silently dropped.
"""

import json
import logging
from typing import List

from ..metadata import generate_local_id
from ..models import AdfNode, MarkdownBlock
from ..state import ConversionState

logger = logging.getLogger(__name__)

NOT_IMPLEMENTED_TYPE = "not-implemented"


def convert_not_implemented(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> MarkdownBlock:
    """Build a finished annotated block carrying the original node."""
    logger.warning(f"No converter for ADF node type '{node.type}', preserving it in metadata")

    local_id = node.local_id or generate_local_id(state.path)
    payload = json.dumps(node.to_dict(), ensure_ascii=False)
    yaml_block = "\n".join([
        "<!-- ADF-START",
        f'adfType="{NOT_IMPLEMENTED_TYPE}"',
        f'localId="{local_id}"',
        f"originalNode: {payload}",
        "-->",
    ])
    return MarkdownBlock(yaml_block=yaml_block, markdown="", adf_type=NOT_IMPLEMENTED_TYPE, local_id=local_id)
