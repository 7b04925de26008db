"""Per-node conversion state threaded through the traversal."""

from dataclasses import dataclass, replace
from typing import Optional, Tuple

from .config import ConversionConfig
from .link_resolver import LinkResolver
from .models import AdfNode, DocumentContext


@dataclass(frozen=True)
class ConversionState:
    """Everything a converter may read besides its node and children.

    Attributes:
        config: Immutable conversion tables and base URL
        link_resolver: Resolver for link display text
        document_context: Whole-document view (None when converting a
            fragment without a doc root)
        level: List nesting level
        path: Child indexes from the root down to the current node
        parent_type: Type of the parent node, if any
    """

    config: ConversionConfig
    link_resolver: LinkResolver
    document_context: Optional[DocumentContext] = None
    level: int = 0
    path: Tuple[int, ...] = ()
    parent_type: Optional[str] = None

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def child(self, index: int, parent: AdfNode, level: int) -> "ConversionState":
        """State for the child at `index` of `parent`."""
        return replace(self, level=level, path=self.path + (index,), parent_type=parent.type)
