"""Unit tests for the not-implemented fallback."""

import logging

from src.adf_markdown.engine import AdfToMarkdownConverter
from tests.fixtures.adf_fixtures import create_adf_doc, create_paragraph


class TestNotImplemented:
    """Test cases for node types without a converter."""

    def test_original_node_preserved(self):
        output = AdfToMarkdownConverter().convert(create_adf_doc([{"type": "mystery", "attrs": {"foo": 1}}]))

        assert output == (
            '<!-- ADF-START\nadfType="not-implemented"\nlocalId="adf-0"\n'
            'originalNode: {"type": "mystery", "attrs": {"foo": 1}}\n-->\n\n'
            '<!-- ADF-END adfType="not-implemented" localId="adf-0" -->'
        )

    def test_children_are_not_converted(self):
        node = {"type": "mystery", "content": [create_paragraph("hidden text")]}
        output = AdfToMarkdownConverter().convert(create_adf_doc([create_paragraph("before"), node]))

        assert output.startswith("before\n\n")
        assert '"text": "hidden text"' in output
        assert "\nhidden text\n" not in output
        assert output.count("<!-- ADF-START") == 1

    def test_node_local_id_used(self):
        output = AdfToMarkdownConverter().convert(create_adf_doc([{"type": "mystery", "attrs": {"localId": "x1"}}]))
        assert 'localId="x1"' in output
        assert output.endswith('<!-- ADF-END adfType="not-implemented" localId="x1" -->')

    def test_warning_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            AdfToMarkdownConverter().convert(create_adf_doc([{"type": "mystery"}]))

        assert "No converter for ADF node type 'mystery'" in caplog.text
