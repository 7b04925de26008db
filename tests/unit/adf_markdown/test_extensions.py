"""Unit tests for macro rendering (adf_markdown.converters.extensions)."""

import pytest

from src.adf_markdown.converters.extensions import GENERIC_PLACEHOLDER, convert_extension, select_rule
from src.adf_markdown.engine import AdfToMarkdownConverter
from src.adf_markdown.parser import AdfParser
from tests.fixtures.adf_fixtures import create_adf_doc, create_extension, create_paragraph


def convert_macro(state, *args, **kwargs):
    node = AdfParser().parse(create_extension(*args, **kwargs))
    result = convert_extension(node, [], state)
    return result.markdown


class TestSelectRule:
    """Test cases for extension rule dispatch."""

    @pytest.mark.parametrize("key, rule_name", [
        ("toc", "toc"),
        ("mermaid-cloud", "mermaid"),
        ("mathblock", "math"),
        ("jira", "jira"),
        ("children", "children"),
        ("attachments", "attachments"),
        ("WARNING", "admonition"),
        ("code", "code"),
        ("excerpt-include", "include"),
        ("section", "layout"),
        ("roadmap-planner", "generic"),
        ("", "generic"),
    ])
    def test_rule_names(self, key, rule_name):
        assert select_rule(key).name == rule_name


class TestExtensionRendering:
    """Test cases for the readable stand-ins."""

    def test_jira_with_base_url(self, confluence_state):
        output = convert_macro(confluence_state, "jira", {"key": "PROJ-1"})
        assert output == "🎫 [PROJ-1](https://example.atlassian.net/wiki/browse/PROJ-1)"

    def test_jira_without_base_url(self, state):
        assert convert_macro(state, "jira", {"key": "PROJ-1"}) == "🎫 Jira: PROJ-1"

    def test_jira_query(self, state):
        assert convert_macro(state, "jira", {"jqlQuery": "project = X"}) == "🎫 Jira issues: `project = X`"

    def test_code_macro(self, state):
        assert convert_macro(state, "code", {"language": "python", "code": "x = 1"}) == "```python\nx = 1\n```"

    def test_mermaid_macro(self, state):
        node = AdfParser().parse(create_extension("mermaid", {"code": "graph TD\nA-->B"}))
        result = convert_extension(node, [], state)

        assert result.markdown == "```mermaid\ngraph TD\nA-->B\n```"
        assert result.context.content_type == "mermaid"

    def test_math_macro(self, state):
        node = AdfParser().parse(create_extension("math", {"body": "a^2"}))
        result = convert_extension(node, [], state)

        assert result.markdown == "$$\na^2\n$$"
        assert result.context.original_type == "mathBlock"

    def test_generic_placeholder(self, state):
        assert convert_macro(state, "roadmap") == f"{GENERIC_PLACEHOLDER} (`roadmap`)"

    def test_children_macro(self, state):
        assert convert_macro(state, "children") == "📄 Child pages"


class TestExtensionAnnotations:
    """Test cases for macros converted through the engine."""

    def test_always_annotated(self):
        output = AdfToMarkdownConverter().convert(create_adf_doc([create_extension("roadmap", {"mode": "team"})]))

        assert output.startswith(
            '<!-- ADF-START\nadfType="extension"\nlocalId="adf-0"\n'
            'extensionType: "com.atlassian.confluence.macro.core"\n'
            'extensionKey: "roadmap"\n'
            'parameters: {"macroParams": {"mode": {"value": "team"}}}\n'
            "-->\n"
        )
        assert output.endswith(f'{GENERIC_PLACEHOLDER} (`roadmap`)\n<!-- ADF-END adfType="extension" localId="adf-0" -->')

    def test_bodied_admonition(self):
        macro = create_extension(
            "warning",
            {"title": "Careful"},
            node_type="bodiedExtension",
            content=[create_paragraph("Do not touch")],
            local_id="m1",
        )
        output = AdfToMarkdownConverter().convert(create_adf_doc([macro]))

        assert '!!! warning "Careful"\n    Do not touch' in output
        assert output.endswith('<!-- ADF-END adfType="bodiedExtension" localId="m1" -->')
