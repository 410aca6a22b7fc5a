#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the attribute table."""

import pytest

from adoc2md.attributes import AttributeTable


@pytest.mark.unit
class TestAttributeTable:
    """Tests for defining, locking and resolving attributes."""

    def test_intrinsic_attributes_are_defined(self) -> None:
        """Test that character replacement attributes are always available."""
        table = AttributeTable()
        assert table["empty"] == ""
        assert table["vbar"] == "|"
        assert table["cpp"] == "C++"

    def test_default_markdown_attributes(self) -> None:
        """Test the defaults of the Markdown output attributes."""
        table = AttributeTable()
        assert table.line_break() == "\\"
        assert table["idprefix"] == "_"
        assert table["idseparator"] == "_"

    def test_last_assignment_wins(self) -> None:
        """Test that a later entry replaces an earlier one."""
        table = AttributeTable()
        table.apply_entry("x", "1")
        table.apply_entry("x", "2")
        assert table["x"] == "2"

    def test_value_resolved_at_assignment_time(self) -> None:
        """Test that references in a value are resolved when it is assigned."""
        table = AttributeTable()
        table.apply_entry("a", "one")
        table.apply_entry("b", "{a} two")
        table.apply_entry("a", "changed")
        assert table["b"] == "one two"

    def test_unset_entry(self) -> None:
        """Test that a negated entry removes the attribute."""
        table = AttributeTable()
        table.apply_entry("draft", "")
        assert "draft" in table
        table.apply_entry("draft", None, unset=True)
        assert "draft" not in table

    def test_seeded_attribute_is_locked(self) -> None:
        """Test that document entries cannot override seeded attributes."""
        table = AttributeTable({"product": "ACME"})
        assert table.apply_entry("product", "Widget") is False
        assert table["product"] == "ACME"
        assert table.apply_entry("product", None, unset=True) is False
        assert "product" in table

    def test_seeded_none_locks_attribute_as_unset(self) -> None:
        """Test that a None seed keeps the attribute undefined."""
        table = AttributeTable({"draft": None})
        table.apply_entry("draft", "yes")
        assert "draft" not in table

    def test_doctitle_is_never_locked(self) -> None:
        """Test that the parsed title can always set doctitle."""
        table = AttributeTable({"doctitle": "Seeded"})
        assert table.define("doctitle", "Parsed") is True
        assert table["doctitle"] == "Parsed"

    def test_unknown_reference_left_as_written(self) -> None:
        """Test that a reference to an undefined attribute is kept."""
        assert AttributeTable().resolve_references("{missing} value") == "{missing} value"

    def test_escaped_reference(self) -> None:
        """Test that a backslash suppresses resolution."""
        table = AttributeTable({"name": "value"})
        assert table.resolve_references("\\{name}") == "\\{name}"
        assert table.resolve_references("\\{name}", unescape=True) == "{name}"
        assert table.resolve_references("\\\\{name}", unescape=True) == "\\{name}"

    def test_quote_pair(self) -> None:
        """Test splitting an open/close attribute value."""
        table = AttributeTable()
        assert table.quote_pair("quotes", ("", "")) == ("<q>", "</q>")
        assert table.quote_pair("markdown-strikethrough", ("", "")) == ("~~", "~~")
        assert table.quote_pair("missing", ("[", "]")) == ("[", "]")

    def test_list_indent(self) -> None:
        """Test reading the list indent width."""
        assert AttributeTable().list_indent() is None
        assert AttributeTable({"markdown-list-indent": "4"}).list_indent() == 4
        assert AttributeTable({"markdown-list-indent": "wide"}).list_indent() is None
