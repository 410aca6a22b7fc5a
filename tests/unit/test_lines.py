#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for line classification."""

import pytest

from adoc2md.lines import LineKind, classify_line


@pytest.mark.unit
class TestClassifyLine:
    """Tests for classify_line."""

    @pytest.mark.parametrize(
        "text,kind",
        [
            ("", LineKind.BLANK),
            ("   ", LineKind.BLANK),
            (":name: value", LineKind.ATTRIBUTE_ENTRY),
            ("[source,python]", LineKind.BLOCK_ATTRIBUTES),
            ("[]", LineKind.BLOCK_ATTRIBUTES),
            ("[[anchor]]", LineKind.BLOCK_ANCHOR),
            (".Block title", LineKind.BLOCK_TITLE),
            ("== Section", LineKind.SECTION_TITLE),
            ("----", LineKind.DELIMITER),
            ("```python", LineKind.DELIMITER),
            ("* item", LineKind.LIST_ITEM),
            (". step", LineKind.LIST_ITEM),
            ("term:: definition", LineKind.DESCRIPTION_ITEM),
            ("+", LineKind.CONTINUATION),
            ("'''", LineKind.THEMATIC_BREAK),
            ("---", LineKind.THEMATIC_BREAK),
            ("<<<", LineKind.PAGE_BREAK),
            ("toc::[]", LineKind.TOC_MACRO),
            ("image::diagram.png[Diagram]", LineKind.BLOCK_IMAGE),
            ("NOTE: Remember this.", LineKind.ADMONITION),
            ("> quoted", LineKind.MARKDOWN_QUOTE),
            ("  indented text", LineKind.INDENTED),
            ("Just some text.", LineKind.TEXT),
            ("::::", LineKind.TEXT),
        ],
    )
    def test_kinds(self, text: str, kind: LineKind) -> None:
        """Test the kind assigned to representative lines."""
        assert classify_line(text).kind is kind

    def test_attribute_entry_metadata(self) -> None:
        """Test name, value and unset flag of attribute entries."""
        entry = classify_line(":product: ACME Cloud")
        assert entry["name"] == "product"
        assert entry["value"] == "ACME Cloud"
        assert entry["unset"] is False
        assert classify_line(":!draft:")["unset"] is True
        assert classify_line(":draft!:")["unset"] is True
        assert classify_line(":flag:")["value"] is None

    def test_section_level(self) -> None:
        """Test that the level is the number of equals signs minus one."""
        assert classify_line("= Title")["level"] == 0
        section = classify_line("=== Deeper  ")
        assert section["level"] == 2
        assert section["title"] == "Deeper"

    def test_section_requires_space(self) -> None:
        """Test that equals signs without a following space are text."""
        assert classify_line("==Section").kind is LineKind.TEXT

    def test_list_item_metadata(self) -> None:
        """Test marker, family and key of list items."""
        item = classify_line("** nested")
        assert item["family"] == "unordered"
        assert item["key"] == "**"
        assert item["content"] == "nested"
        numbered = classify_line("12. twelve")
        assert numbered["family"] == "ordered"
        assert numbered["key"] == "1."
        callout = classify_line("<2> second")
        assert callout["family"] == "callout"
        assert callout["key"] == "<1>"

    def test_indented_list_item(self) -> None:
        """Test that list items may be indented."""
        item = classify_line("  - indented")
        assert item.kind is LineKind.LIST_ITEM
        assert item.indent == 2

    def test_description_item_metadata(self) -> None:
        """Test term, key and content of description items."""
        item = classify_line("CPU:: The brain")
        assert item["term"] == "CPU"
        assert item["key"] == "::"
        assert item["content"] == "The brain"
        bare = classify_line("Question;;")
        assert bare["key"] == ";;"
        assert bare["content"] == ""

    def test_description_term_with_leading_colons(self) -> None:
        """Test that a term may start with colons as long as it has other text."""
        item = classify_line("::foo:: bar")
        assert item.kind is LineKind.DESCRIPTION_ITEM
        assert item["term"] == "::foo"
        assert item["content"] == "bar"
        assert classify_line(":::fizz::: buzz")["term"] == ":::fizz"
        assert classify_line(":::").kind is LineKind.TEXT

    def test_delimiter_metadata(self) -> None:
        """Test the block kind recorded for delimiters."""
        assert classify_line("====")["block"] == "example"
        assert classify_line("--")["block"] == "open"
        assert classify_line("|===")["block"] == "table"
        fence = classify_line("```ruby")
        assert fence["block"] == "fenced"
        assert fence["delimiter"] == "```"
        assert fence["language"] == "ruby"

    def test_block_anchor_metadata(self) -> None:
        """Test id and reftext of block anchors."""
        anchor = classify_line("[[install,Installation]]")
        assert anchor["id"] == "install"
        assert anchor["reftext"] == "Installation"

    def test_indented_delimiter_is_not_a_delimiter(self) -> None:
        """Test that first-column shapes require the first column."""
        assert classify_line("  ----").kind is LineKind.INDENTED

    def test_url_is_not_a_description_item(self) -> None:
        """Test that a colon inside a URL does not make a term."""
        assert classify_line("See https://example.org for more.").kind is LineKind.TEXT
