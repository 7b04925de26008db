"""Unit tests for the traversal engine (adf_markdown.engine)."""

import asyncio
import copy
import json
import logging
import re

import pytest

from src.adf_markdown.config import ConversionConfig
from src.adf_markdown.engine import AdfToMarkdownConverter
from src.adf_markdown.errors import AdfParseError
from tests.fixtures.adf_fixtures import (
    create_adf_doc,
    create_bullet_list,
    create_heading,
    create_inline_card,
    create_inline_paragraph,
    create_list_item,
    create_panel,
    create_paragraph,
    create_table,
    create_table_cell,
    create_table_row,
)

START_PATTERN = re.compile(r'<!-- ADF-START\s+adfType="([^"]+)"\s+localId="([^"]+)"')
END_PATTERN = re.compile(r'<!-- ADF-END adfType="([^"]+)" localId="([^"]+)" -->')
BASE_URL = "https://example.atlassian.net/wiki"


def page_url(page_id):
    return f"{BASE_URL}/spaces/DOC/pages/{page_id}/Page"


class TestConvert:
    """Test cases for whole-document conversion."""

    def test_single_paragraph(self):
        assert AdfToMarkdownConverter().convert(create_adf_doc([create_paragraph("Hello world")])) == "Hello world"

    def test_blocks_joined_with_blank_line(self):
        doc = create_adf_doc([create_heading("Title", 1), create_paragraph(""), create_paragraph("Body")])
        assert AdfToMarkdownConverter().convert(doc) == "# Title\n\nBody"

    def test_json_string_input(self):
        doc = json.dumps(create_adf_doc([create_paragraph("from json")]))
        assert AdfToMarkdownConverter().convert(doc) == "from json"

    def test_non_doc_root(self):
        assert AdfToMarkdownConverter().convert(create_paragraph("fragment")) == "fragment"

    def test_invalid_input_raises(self):
        with pytest.raises(AdfParseError):
            AdfToMarkdownConverter().convert("not json")

    def test_input_not_mutated(self):
        doc = create_adf_doc([
            create_panel("info", create_paragraph("Title")),
            create_table(create_table_row(create_table_cell("a", {"colspan": 2}))),
            {"type": "mystery", "attrs": {"id": "m1"}},
        ])
        snapshot = copy.deepcopy(doc)

        AdfToMarkdownConverter().convert(doc)

        assert doc == snapshot

    def test_start_and_end_markers_match(self):
        doc = create_adf_doc([
            create_panel("warning", create_paragraph("Careful"), create_bullet_list(create_list_item("a"))),
            create_table(create_table_row(create_table_cell("wide", {"colspan": 2}), create_table_cell("x"))),
            create_inline_paragraph({"type": "status", "attrs": {"text": "DONE", "color": "green"}}),
            {"type": "mystery"},
        ])
        output = AdfToMarkdownConverter().convert(doc)

        starts = START_PATTERN.findall(output)
        ends = END_PATTERN.findall(output)
        assert len(starts) == 4
        assert sorted(starts) == sorted(ends)

    def test_info_log(self, caplog):
        with caplog.at_level(logging.INFO, logger="src.adf_markdown.engine"):
            AdfToMarkdownConverter().convert(create_adf_doc([create_paragraph("x")]))

        assert "Converted 3 ADF nodes (0 annotated)" in caplog.text


class TestConcurrency:
    """Test cases for concurrent sibling conversion."""

    def test_sibling_order_with_delayed_lookups(self):
        """Earlier siblings whose lookups finish last still come first."""
        delays = {"1": 0.05, "2": 0.0, "3": 0.02}

        async def lookup(page_id):
            await asyncio.sleep(delays[page_id])
            return {"title": f"Title {page_id}"}

        doc = create_adf_doc([create_inline_paragraph(create_inline_card(page_url(n))) for n in ("1", "2", "3")])
        output = AdfToMarkdownConverter(ConversionConfig(base_url=BASE_URL), page_lookup=lookup).convert(doc)

        assert output.index("Title 1") < output.index("Title 2") < output.index("Title 3")

    def test_convert_async(self):
        converter = AdfToMarkdownConverter()
        output = asyncio.run(converter.convert_async(create_adf_doc([create_paragraph("async")])))
        assert output == "async"
