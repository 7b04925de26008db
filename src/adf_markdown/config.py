"""Static configuration tables for ADF to markdown conversion.

CRITICAL_ATTRIBUTES is the single source of truth for the reversibility
policy: for every node type it lists the attributes whose values cannot be
recovered from the rendered markdown. The icon and admonition maps drive the
human-readable rendering. All tables are immutable and are handed to the
engine through a frozen ConversionConfig.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union


class _AllAttributes:
    """Sentinel: every attribute of the node type is critical."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ALL_ATTRIBUTES"


ALL_ATTRIBUTES = _AllAttributes()

AttributePolicy = Union[Tuple[str, ...], _AllAttributes]

CRITICAL_ATTRIBUTES: Mapping[str, AttributePolicy] = MappingProxyType({
    # Plain structure: fully described by markdown syntax
    "doc": (),
    "fragment": (),
    "paragraph": (),
    "text": (),
    "heading": (),
    "hardBreak": (),
    "rule": (),
    "blockquote": (),
    "bulletList": (),
    "listItem": (),
    "taskList": (),
    "strong": (),
    "em": (),
    "code": (),
    # Numbering / state: only non-default values matter
    "orderedList": ("order",),
    "taskItem": ("state",),
    "codeBlock": ("uniqueId",),
    "link": ("title", "id", "collection", "occurrenceKey"),
    # Layout of tables and cells
    "table": ("isNumberColumnEnabled", "layout", "width", "displayMode"),
    "tableRow": (),
    "tableHeader": ("colspan", "rowspan", "colwidth", "background"),
    "tableCell": ("colspan", "rowspan", "colwidth", "background"),
    # Containers whose rendering loses type information
    "panel": ("panelType", "panelIcon", "panelIconId", "panelIconText", "panelColor"),
    "expand": ("title",),
    "nestedExpand": ("title",),
    # Inline entities
    "mention": ("id", "text", "accessLevel", "userType"),
    "emoji": ("shortName", "id", "text"),
    "emoticon": ("shortName", "id", "text"),
    "status": ("text", "color", "style"),
    "date": ("timestamp",),
    # Cards and media
    "inlineCard": ALL_ATTRIBUTES,
    "blockCard": ALL_ATTRIBUTES,
    "embedCard": ALL_ATTRIBUTES,
    "mediaSingle": ("layout", "width", "widthType"),
    "mediaGroup": (),
    "media": ALL_ATTRIBUTES,
    # Macros
    "extension": ALL_ATTRIBUTES,
    "bodiedExtension": ALL_ATTRIBUTES,
    "inlineExtension": ALL_ATTRIBUTES,
    "math": ALL_ATTRIBUTES,
    "mathBlock": ALL_ATTRIBUTES,
    "easy-math-block": ALL_ATTRIBUTES,
    "toc": ALL_ATTRIBUTES,
    "not-implemented": ALL_ATTRIBUTES,
})

# Node types whose information cannot be reconstructed from markdown at all
ALWAYS_ANNOTATE_TYPES: FrozenSet[str] = frozenset({
    "extension",
    "bodiedExtension",
    "inlineExtension",
    "not-implemented",
    "blockCard",
    "inlineCard",
    "embedCard",
    "toc",
})

# Attribute values that markdown syntax already implies
DEFAULT_ATTRIBUTE_VALUES: Mapping[str, FrozenSet[Any]] = MappingProxyType({
    "order": frozenset({1}),
    "state": frozenset({"TODO", "DONE"}),
    "colspan": frozenset({1}),
    "rowspan": frozenset({1}),
})

# Types where complex cell content forces an annotation
TABLE_TYPES: FrozenSet[str] = frozenset({"table", "tableRow", "tableHeader", "tableCell"})

# panelType -> admonition keyword
PANEL_ADMONITIONS: Mapping[str, str] = MappingProxyType({
    "info": "info",
    "note": "note",
    "tip": "tip",
    "warning": "warning",
    "error": "danger",
    "success": "success",
})

# Fallback keywords for custom or unknown panel types
PANEL_FALLBACK_ADMONITIONS: Mapping[str, str] = MappingProxyType({
    "custom": "note",
    "neutral": "note",
    "": "note",
})

STATUS_ICONS: Mapping[str, str] = MappingProxyType({
    "neutral": "⚪",
    "blue": "🔵",
    "green": "🟢",
    "yellow": "🟡",
    "red": "🔴",
    "purple": "🟣",
})

EMOJI_SHORTNAMES: Mapping[str, str] = MappingProxyType({
    "warning": "⚠️",
    "success": "✅",
    "error": "❌",
    "info": "ℹ️",
    "note": "📝",
    "x": "❌",
    "check_mark": "✔️",
    "white_check_mark": "✅",
    "smile": "😃",
    "sad": "😢",
    "wink": "😉",
    "laugh": "😆",
    "angry": "😠",
    "thumbs_up": "👍",
    "thumbsup": "👍",
    "thumbs_down": "👎",
    "thumbsdown": "👎",
    "blush": "😊",
    "surprised": "😮",
    "cry": "😭",
    "cool": "😎",
    "star": "⭐",
    "bulb": "💡",
    "question": "❓",
    "exclamation": "❗",
})


def _freeze(table: Optional[Mapping[str, Any]], default: Mapping[str, Any]) -> Mapping[str, Any]:
    if table is None:
        return default
    return MappingProxyType(dict(table))


@dataclass(frozen=True)
class ConversionConfig:
    """Immutable configuration injected into one converter instance.

    Attributes:
        base_url: URL of "this" Confluence instance (same-instance links)
        critical_attributes: Reversibility policy table
        always_annotate: Types that annotate unconditionally
        panel_admonitions: panelType -> admonition keyword
        panel_fallback_admonitions: Keywords for custom/unknown panels
        status_icons: Status colour -> glyph
        emoji_shortnames: Emoji shortname (without colons) -> glyph
    """

    base_url: str = ""
    critical_attributes: Mapping[str, AttributePolicy] = field(default_factory=lambda: CRITICAL_ATTRIBUTES)
    always_annotate: FrozenSet[str] = field(default_factory=lambda: ALWAYS_ANNOTATE_TYPES)
    panel_admonitions: Mapping[str, str] = field(default_factory=lambda: PANEL_ADMONITIONS)
    panel_fallback_admonitions: Mapping[str, str] = field(default_factory=lambda: PANEL_FALLBACK_ADMONITIONS)
    status_icons: Mapping[str, str] = field(default_factory=lambda: STATUS_ICONS)
    emoji_shortnames: Mapping[str, str] = field(default_factory=lambda: EMOJI_SHORTNAMES)

    @classmethod
    def build(
        cls,
        base_url: str = "",
        critical_attributes: Optional[Dict[str, Any]] = None,
        panel_admonitions: Optional[Dict[str, str]] = None,
        status_icons: Optional[Dict[str, str]] = None,
        emoji_shortnames: Optional[Dict[str, str]] = None,
    ) -> "ConversionConfig":
        """Build a config, layering overrides on top of the default tables.

        Critical-attribute overrides accept either a list of attribute names
        or the string "all".
        """
        critical = None
        if critical_attributes:
            merged: Dict[str, AttributePolicy] = dict(CRITICAL_ATTRIBUTES)
            for node_type, names in critical_attributes.items():
                if names == "all":
                    merged[node_type] = ALL_ATTRIBUTES
                else:
                    merged[node_type] = tuple(names)
            critical = merged

        def layered(default: Mapping[str, str], override: Optional[Dict[str, str]]):
            if not override:
                return None
            return {**default, **override}

        return cls(
            base_url=base_url or "",
            critical_attributes=_freeze(critical, CRITICAL_ATTRIBUTES),
            panel_admonitions=_freeze(layered(PANEL_ADMONITIONS, panel_admonitions), PANEL_ADMONITIONS),
            status_icons=_freeze(layered(STATUS_ICONS, status_icons), STATUS_ICONS),
            emoji_shortnames=_freeze(layered(EMOJI_SHORTNAMES, emoji_shortnames), EMOJI_SHORTNAMES),
        )
