"""Readable renderings for Confluence macros (extension nodes).

Macros always keep their full attributes in the annotation; the markdown is
a best-effort readable stand-in chosen by matching substrings of
extensionKey against an ordered rule list. The first matching rule wins and
unrecognized macros fall back to a generic placeholder.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Tuple

from ..models import AdfNode, AdfNodeType, ConverterContext, ConverterResult, MarkdownBlock
from ..state import ConversionState
from .blocks import admonition_keyword, join_blocks, render_admonition
from .media import render_math
from .toc import param_value, read_macro_params, render_toc

logger = logging.getLogger(__name__)

GENERIC_PLACEHOLDER = "⚙️ Extension preserved in metadata"

# Admonition macros, checked in this order against the key
ADMONITION_KEYS = ("warning", "info", "note", "tip")


@dataclass(frozen=True)
class ExtensionRule:
    """One (predicate, handler) entry of the extension dispatch.

    Attributes:
        name: Rule name, for logging and tests
        predicate: Receives the lower-cased extensionKey
        handler: Builds the markdown from the node, its converted body and
            the conversion state
    """

    name: str
    predicate: Callable[[str], bool]
    handler: Callable[[AdfNode, str, ConversionState], ConverterResult]


def _contains(*needles: str) -> Callable[[str], bool]:
    return lambda key: any(needle in key for needle in needles)


def extension_key(node: AdfNode) -> str:
    key = node.attrs.get("extensionKey")
    return key if isinstance(key, str) else ""


def raw_body_text(node: AdfNode, *param_names: str) -> str:
    """Source text of a macro: named parameters first, then its text content."""
    macro_params = read_macro_params(node.attrs)
    for name in param_names:
        value = param_value(macro_params, name)
        if value:
            return value
    text = node.attrs.get("text")
    if isinstance(text, str) and text:
        return text
    return node.get_text_content()


def _with_body(header: str, body: str) -> str:
    return f"{header}\n\n{body}" if body else header


def handle_toc(node: AdfNode, body: str, state: ConversionState) -> ConverterResult:
    return ConverterResult(render_toc(node.attrs, state.document_context, state.base_url))


def handle_mermaid(node: AdfNode, body: str, state: ConversionState) -> ConverterResult:
    code = raw_body_text(node, "code", "body").strip("\n")
    return ConverterResult(f"```mermaid\n{code}\n```", ConverterContext(content_type="mermaid"))


def handle_math(node: AdfNode, body: str, state: ConversionState) -> ConverterResult:
    latex = raw_body_text(node, "body", "latex", "equation").strip()
    return ConverterResult(render_math(latex), ConverterContext(original_type=AdfNodeType.MATH_BLOCK.value))


def handle_jira(node: AdfNode, body: str, state: ConversionState) -> ConverterResult:
    macro_params = read_macro_params(node.attrs)
    issue_key = param_value(macro_params, "key")
    if issue_key:
        if state.base_url:
            url = f"{state.base_url.rstrip('/')}/browse/{issue_key}"
            return ConverterResult(f"🎫 [{issue_key}]({url})")
        return ConverterResult(f"🎫 Jira: {issue_key}")

    jql = param_value(macro_params, "jqlQuery")
    if jql:
        return ConverterResult(f"🎫 Jira issues: `{jql}`")
    return ConverterResult("🎫 Jira issues")


def handle_children(node: AdfNode, body: str, state: ConversionState) -> ConverterResult:
    return ConverterResult(_with_body("📄 Child pages", body))


def handle_attachments(node: AdfNode, body: str, state: ConversionState) -> ConverterResult:
    return ConverterResult(_with_body("📎 Attachments", body))


def handle_admonition(node: AdfNode, body: str, state: ConversionState) -> ConverterResult:
    key = extension_key(node).lower()
    panel_type = next((name for name in ADMONITION_KEYS if name in key), "note")
    title = param_value(read_macro_params(node.attrs), "title")
    return ConverterResult(render_admonition(admonition_keyword(panel_type, state), title, body))


def handle_code(node: AdfNode, body: str, state: ConversionState) -> ConverterResult:
    language = param_value(read_macro_params(node.attrs), "language")
    code = raw_body_text(node, "code", "body").strip("\n")
    return ConverterResult(f"```{language}\n{code}\n```")


def handle_include(node: AdfNode, body: str, state: ConversionState) -> ConverterResult:
    macro_params = read_macro_params(node.attrs)
    page = param_value(macro_params, "") or param_value(macro_params, "page")
    header = f"📌 Included content: {page}" if page else "📌 Included content"
    return ConverterResult(_with_body(header, body))


def handle_layout(node: AdfNode, body: str, state: ConversionState) -> ConverterResult:
    return ConverterResult(body)


def handle_generic(node: AdfNode, body: str, state: ConversionState) -> ConverterResult:
    key = extension_key(node)
    header = f"{GENERIC_PLACEHOLDER} (`{key}`)" if key else GENERIC_PLACEHOLDER
    return ConverterResult(_with_body(header, body))


EXTENSION_RULES: Tuple[ExtensionRule, ...] = (
    ExtensionRule("toc", _contains("toc"), handle_toc),
    ExtensionRule("mermaid", _contains("mermaid"), handle_mermaid),
    ExtensionRule("math", _contains("math"), handle_math),
    ExtensionRule("jira", _contains("jira"), handle_jira),
    ExtensionRule("children", _contains("children"), handle_children),
    ExtensionRule("attachments", _contains("attachments"), handle_attachments),
    ExtensionRule("admonition", _contains(*ADMONITION_KEYS), handle_admonition),
    ExtensionRule("code", _contains("code"), handle_code),
    ExtensionRule("include", _contains("include", "excerpt"), handle_include),
    ExtensionRule("layout", _contains("layout", "column", "section"), handle_layout),
)

FALLBACK_RULE = ExtensionRule("generic", lambda key: True, handle_generic)


def select_rule(key: str) -> ExtensionRule:
    """First rule whose predicate matches the lower-cased key."""
    lowered = key.lower()
    for rule in EXTENSION_RULES:
        if rule.predicate(lowered):
            return rule
    return FALLBACK_RULE


def convert_extension(node: AdfNode, children: List[MarkdownBlock], state: ConversionState) -> ConverterResult:
    """Render extension, bodiedExtension and inlineExtension nodes."""
    key = extension_key(node)
    rule = select_rule(key)
    logger.debug(f"Extension '{key}' handled by rule '{rule.name}'")
    return rule.handler(node, join_blocks(children), state)
