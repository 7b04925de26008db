"""Table of contents generation from the document's headings.

A filtering and formatting pipeline: read the macro parameters, collect the
headings in range that pass the include/exclude filters, number them for
outline mode, then render a nested list or a flat, separator-joined line.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from ..heuristics import coerce_int, generate_slug
from ..models import AdfNode, AdfNodeType, DocumentContext, HeadingInfo, MarkdownBlock
from ..state import ConversionState

logger = logging.getLogger(__name__)

DEFAULT_BULLETS = ("•", "◦", "▪", "▫")
STYLE_BULLETS = {"none": "", "disc": "•", "circle": "◦", "square": "▪"}
FLAT_WRAPPERS = {"brackets": "[{}]", "braces": "{{{}}}", "parens": "({})"}

NO_HEADINGS_LIST = "*No headings found in the specified criteria.*"
NO_HEADINGS_FLAT = "*No headings found*"
NOT_PRINTABLE_NOTE = "> *This table of contents is set to not appear in print mode.*"


@dataclass
class TocParameters:
    """Table of contents macro options, defaults filled in."""

    type: str = "list"
    outline: bool = False
    style: str = "default"
    indent: str = ""
    separator: str = "pipe"
    min_level: int = 1
    max_level: int = 6
    include: str = ""
    exclude: str = ""
    printable: bool = True
    css_class: str = ""
    absolute_url: bool = False


def read_macro_params(attrs: Dict[str, Any]) -> Dict[str, Any]:
    """Get attrs.parameters.macroParams, empty when missing or malformed."""
    parameters = attrs.get("parameters")
    macro_params = parameters.get("macroParams") if isinstance(parameters, dict) else None
    return macro_params if isinstance(macro_params, dict) else {}


def param_value(macro_params: Dict[str, Any], name: str) -> str:
    """Read a macro parameter, accepting both {"value": x} entries and bare values."""
    entry = macro_params.get(name)
    if isinstance(entry, dict):
        entry = entry.get("value")
    if entry is None:
        return ""
    return str(entry)


def parse_toc_parameters(attrs: Dict[str, Any]) -> TocParameters:
    """Read TOC options from attrs.parameters.macroParams."""
    macro_params = read_macro_params(attrs)
    toc_type = param_value(macro_params, "type").lower()
    return TocParameters(
        type="flat" if toc_type == "flat" else "list",
        outline=param_value(macro_params, "outline").lower() == "true",
        style=param_value(macro_params, "style") or "default",
        indent=param_value(macro_params, "indent"),
        separator=param_value(macro_params, "separator") or "pipe",
        min_level=coerce_int(param_value(macro_params, "minLevel") or None, default=1, minimum=1, maximum=6),
        max_level=coerce_int(param_value(macro_params, "maxLevel") or None, default=6, minimum=1, maximum=6),
        include=param_value(macro_params, "include"),
        exclude=param_value(macro_params, "exclude"),
        printable=param_value(macro_params, "printable").lower() != "false",
        css_class=param_value(macro_params, "class"),
        absolute_url=param_value(macro_params, "absoluteUrl").lower() == "true",
    )


def heading_text(node: AdfNode) -> str:
    """Plain text of a heading, marks and inline wrappers ignored."""
    return node.get_text_content().strip()


def matches_pattern(text: str, pattern: str) -> bool:
    """Case-insensitive regex search; an invalid regex falls back to substring."""
    if not pattern:
        return True
    try:
        return re.search(pattern, text, re.IGNORECASE) is not None
    except re.error:
        logger.debug(f"Invalid TOC filter regex '{pattern}', using substring match")
        return pattern.lower() in text.lower()


def collect_headings(document_context: DocumentContext, params: TocParameters) -> List[HeadingInfo]:
    """Headings in document order within the level range that pass the filters."""
    headings = []
    for node in document_context.all_nodes:
        if node.node_type != AdfNodeType.HEADING:
            continue
        level = coerce_int(node.attrs.get("level"), default=1, minimum=1, maximum=6)
        if not params.min_level <= level <= params.max_level:
            continue
        text = heading_text(node)
        if not text:
            continue
        if not matches_pattern(text, params.include):
            continue
        if params.exclude and matches_pattern(text, params.exclude):
            continue
        headings.append(HeadingInfo(level=level, text=text, slug=generate_slug(text), local_id=node.local_id))
    return headings


def outline_numbers(headings: List[HeadingInfo]) -> List[str]:
    """Hierarchical numbers ("1", "1.1", "1.2", "2") from per-level counters.

    Counters of levels deeper than the current heading reset on each step.
    """
    numbers = []
    counters: Dict[int, int] = {}
    for heading in headings:
        for level in [lvl for lvl in counters if lvl > heading.level]:
            del counters[level]
        counters[heading.level] = counters.get(heading.level, 0) + 1
        numbers.append(".".join(str(counters[lvl]) for lvl in sorted(counters) if lvl <= heading.level))
    return numbers


def bullet_for(style: str, depth: int) -> str:
    """Bullet glyph for a nesting depth; list styles without a glyph use "-"."""
    style = style.lower()
    if style in STYLE_BULLETS:
        return STYLE_BULLETS[style]
    if style == "default":
        return DEFAULT_BULLETS[depth % len(DEFAULT_BULLETS)]
    return "-"


def _link(heading: HeadingInfo, params: TocParameters, base_url: str) -> str:
    target = f"{base_url}#{heading.slug}" if params.absolute_url and base_url else f"#{heading.slug}"
    return f"[{heading.text}]({target})"


def render_list_toc(headings: List[HeadingInfo], params: TocParameters, base_url: str = "") -> str:
    if not headings:
        return NO_HEADINGS_LIST

    base_level = min(heading.level for heading in headings)
    numbers = outline_numbers(headings) if params.outline else []
    lines = []
    for index, heading in enumerate(headings):
        depth = heading.level - base_level
        if params.outline:
            marker = numbers[index]
        else:
            marker = bullet_for(params.style, depth)
        link = _link(heading, params, base_url)
        lines.append(f"{'  ' * depth}{marker} {link}" if marker else f"{'  ' * depth}{link}")
    return "\n".join(lines)


def render_flat_toc(headings: List[HeadingInfo], params: TocParameters, base_url: str = "") -> str:
    if not headings:
        return NO_HEADINGS_FLAT

    links = [_link(heading, params, base_url) for heading in headings]
    separator = params.separator
    if separator.lower() in FLAT_WRAPPERS:
        wrapper = FLAT_WRAPPERS[separator.lower()]
        return " ".join(wrapper.format(link) for link in links)
    if separator.lower() == "pipe" or not separator:
        return " | ".join(links)
    return separator.join(links)


def placeholder(params: TocParameters) -> str:
    """Stand-in text when the TOC is converted without its document."""
    kind = "horizontal menu" if params.type == "flat" else "hierarchical list"
    levels = f"levels {params.min_level}-{params.max_level}"
    filter_text = f' matching "{params.include}"' if params.include else ""
    return (
        f"*({kind}, {levels}{filter_text})*\n\n"
        "> **Note:** TOC will be generated automatically by Confluence based on page headings."
    )


def render_toc(attrs: Dict[str, Any], document_context: Optional[DocumentContext], base_url: str = "") -> str:
    """Render a table of contents for macro attributes."""
    params = parse_toc_parameters(attrs)

    if document_context is None:
        markdown = placeholder(params)
    else:
        headings = collect_headings(document_context, params)
        logger.debug(f"TOC collected {len(headings)} headings")
        if params.type == "flat":
            markdown = render_flat_toc(headings, params, base_url)
        else:
            markdown = render_list_toc(headings, params, base_url)

    if params.css_class:
        markdown = f'<div class="{params.css_class}">\n\n{markdown}\n\n</div>'
    if not params.printable:
        markdown = f"{markdown}\n\n{NOT_PRINTABLE_NOTE}"
    return markdown


def convert_toc(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> str:
    return render_toc(node.attrs, state.document_context, state.base_url)
