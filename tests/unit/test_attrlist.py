#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for attribute list parsing."""

import pytest

from adoc2md.attrlist import AttributeList, is_valid_id, parse_attrlist, split_attrlist


@pytest.mark.unit
class TestParseAttrlist:
    """Tests for parse_attrlist."""

    def test_empty_list(self) -> None:
        """Test that an empty list yields no attributes."""
        attrs = parse_attrlist("")
        assert attrs.is_empty()
        assert attrs.style == ""

    def test_positional_values(self) -> None:
        """Test positional values in order."""
        attrs = parse_attrlist("source,python")
        assert attrs.style == "source"
        assert attrs.positional_at(1) == "python"
        assert attrs.positional_at(5) == ""

    def test_named_values(self) -> None:
        """Test key=value pairs, quoted and unquoted."""
        attrs = parse_attrlist('quote, cols="1,2", title=Hello')
        assert attrs.positional == ["quote"]
        assert attrs.get("cols") == "1,2"
        assert attrs.get("title") == "Hello"
        assert attrs.get("missing", "x") == "x"

    def test_quoted_positional_keeps_commas(self) -> None:
        """Test that a quoted positional value is not split."""
        attrs = parse_attrlist('quote,"Doe, Jane",Book')
        assert attrs.positional == ["quote", "Doe, Jane", "Book"]

    def test_shorthand(self) -> None:
        """Test the style#id.role%option shorthand."""
        attrs = parse_attrlist("#intro.lead%collapsible")
        assert attrs.style == ""
        assert attrs.id == "intro"
        assert attrs.roles == ["lead"]
        assert attrs.has_option("collapsible")

    def test_shorthand_disabled(self) -> None:
        """Test that inline macro lists do not interpret shorthand."""
        attrs = parse_attrlist("v1.2#x", shorthand=False)
        assert attrs.style == "v1.2#x"
        assert attrs.id is None

    def test_named_special_attributes(self) -> None:
        """Test id, role, options and reftext named values."""
        attrs = parse_attrlist('id=main, role="a b", opts="step,open", reftext=Main')
        assert attrs.id == "main"
        assert attrs.roles == ["a", "b"]
        assert attrs.options == ["step", "open"]
        assert attrs.reftext == "Main"

    def test_merge(self) -> None:
        """Test that a later attribute line merges into an earlier one."""
        attrs = parse_attrlist("source,ruby")
        attrs.merge(parse_attrlist("%linenums,python"))
        assert attrs.positional == ["source", "python"]
        assert attrs.options == ["linenums"]


@pytest.mark.unit
class TestAttrlistHelpers:
    """Tests for the splitting and id helpers."""

    def test_split_respects_quotes(self) -> None:
        """Test that commas inside a quoted value do not split."""
        assert split_attrlist("a,'b,c',d") == ["a", "'b,c'", "d"]

    def test_apostrophe_inside_word_is_not_a_quote(self) -> None:
        """Test that an apostrophe in the middle of a value is plain text."""
        assert split_attrlist("it's,fine") == ["it's", "fine"]

    def test_valid_ids(self) -> None:
        """Test id validation."""
        assert is_valid_id("_intro")
        assert is_valid_id("a:b.c-d")
        assert not is_valid_id("1st")
        assert not is_valid_id("has space")
        assert not is_valid_id("")

    def test_default_attribute_list(self) -> None:
        """Test the defaults of a new attribute list."""
        attrs = AttributeList()
        assert attrs.is_empty()
        assert not attrs.has_option("header")
