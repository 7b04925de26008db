"""Traversal engine for ADF to markdown conversion.

The engine walks the tree depth-first, converting a node's children before
the node itself. Siblings are converted concurrently (link title lookups are
the only real suspension points) and gathered back in index order, so the
output never depends on completion order. After a node's converter runs,
the metadata policy decides whether the fragment needs an annotation.
"""

import asyncio
import inspect
import logging
from typing import Any, Dict, List, Optional, Union

from .config import ConversionConfig
from .converters import convert_not_implemented, get_converter, is_nested_list
from .link_resolver import LinkResolver, PageLookup
from .metadata import MetadataPolicy
from .models import INLINE_NODE_TYPES, AdfNode, AdfNodeType, ConverterResult, MarkdownBlock
from .parser import AdfParser, build_document_context, flatten_nodes
from .state import ConversionState

logger = logging.getLogger(__name__)

ANNOTATION_START = "<!-- ADF-START"


class AdfToMarkdownConverter:
    """Converts ADF documents to annotated markdown.

    Args:
        config: Conversion tables and base URL (defaults built in)
        page_lookup: Optional get_page_by_id callable used to resolve
            Confluence page titles; sync or async
        link_resolver: Resolver to use instead of one built from page_lookup

    Example:
        >>> converter = AdfToMarkdownConverter(ConversionConfig(base_url="https://x.atlassian.net"))
        >>> converter.convert({"type": "doc", "content": [...]})
    """

    def __init__(
        self,
        config: Optional[ConversionConfig] = None,
        page_lookup: Optional[PageLookup] = None,
        link_resolver: Optional[LinkResolver] = None,
    ):
        self.config = config or ConversionConfig()
        self.link_resolver = link_resolver or LinkResolver(page_lookup)
        self.policy = MetadataPolicy(self.config)
        self.parser = AdfParser()

    def convert(self, adf: Union[AdfNode, Dict[str, Any], str]) -> str:
        """Convert an ADF document to markdown.

        Runs its own event loop; from async code use convert_async().

        Args:
            adf: ADF document as AdfNode, dictionary or JSON string

        Returns:
            Markdown string

        Raises:
            AdfParseError: If the input is not an ADF object
        """
        return asyncio.run(self.convert_async(adf))

    async def convert_async(self, adf: Union[AdfNode, Dict[str, Any], str]) -> str:
        """Convert an ADF document to markdown inside a running event loop.

        Args:
            adf: ADF document as AdfNode, dictionary or JSON string

        Returns:
            Markdown string

        Raises:
            AdfParseError: If the input is not an ADF object
        """
        root = self.parser.parse(adf)

        document_context = None
        if root.node_type == AdfNodeType.DOC:
            document_context = build_document_context(root)

        state = ConversionState(
            config=self.config,
            link_resolver=self.link_resolver,
            document_context=document_context,
        )

        if root.node_type == AdfNodeType.DOC:
            children = await self.convert_children(root, state)
            rendered = (child.render() for child in children)
            markdown = "\n\n".join(fragment for fragment in rendered if fragment)
        else:
            markdown = (await self.convert_node(root, state)).render()

        node_count = len(document_context.all_nodes) if document_context else len(flatten_nodes(root))
        logger.info(
            f"Converted {node_count} ADF nodes "
            f"({markdown.count(ANNOTATION_START)} annotated) to {len(markdown)} characters of markdown"
        )
        return markdown

    async def convert_children(self, node: AdfNode, state: ConversionState) -> List[MarkdownBlock]:
        """Convert all children of a node concurrently, keeping index order."""
        tasks = []
        for index, child in enumerate(node.content):
            level = state.level + 1 if is_nested_list(child, node) else state.level
            tasks.append(self.convert_node(child, state.child(index, node, level)))
        return list(await asyncio.gather(*tasks))

    async def convert_node(self, node: AdfNode, state: ConversionState) -> MarkdownBlock:
        """Convert one node and its subtree to a MarkdownBlock.

        Args:
            node: Node to convert
            state: Conversion state at this node

        Returns:
            The node's block, annotated when the metadata policy requires it
        """
        converter = get_converter(node)
        logger.debug(f"Converting {node.type} at {state.path or 'root'}")

        # The fallback keeps the raw subtree; its children are not converted
        if converter is convert_not_implemented:
            children: List[MarkdownBlock] = []
        else:
            children = await self.convert_children(node, state)

        output = converter(node, children, state)
        if inspect.isawaitable(output):
            output = await output

        if isinstance(output, MarkdownBlock) and output.yaml_block:
            # Already a finished block: pass it through unchanged
            return output

        context = None
        if isinstance(output, MarkdownBlock):
            markdown = output.markdown
        elif isinstance(output, ConverterResult):
            markdown, context = output.markdown, output.context
        else:
            markdown = "" if output is None else str(output)

        block = self.policy.wrap(
            node.type,
            node.attrs,
            markdown,
            context,
            path=state.path,
            inline=node.node_type in INLINE_NODE_TYPES,
        )
        block.children = children
        return block
