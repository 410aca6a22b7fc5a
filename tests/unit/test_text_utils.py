#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for the identifier and slug helpers."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from adoc2md.utils.text import generate_section_id, github_slug, make_unique_slug, markdown_to_plain


@pytest.mark.unit
class TestMarkdownToPlain:
    """Tests for markdown_to_plain."""

    def test_strips_emphasis_and_links(self) -> None:
        """Test that markup is removed and link text kept."""
        assert markdown_to_plain("**Bold** and [link](x.md)") == "Bold and link"

    def test_strips_tags_and_code(self) -> None:
        """Test that HTML tags and backticks are removed."""
        assert markdown_to_plain("<q>quoted</q> `code`") == "quoted code"

    def test_keeps_underscores_inside_words(self) -> None:
        """Test that intraword underscores are not emphasis."""
        assert markdown_to_plain("snake_case") == "snake_case"


@pytest.mark.unit
class TestGithubSlug:
    """Tests for github_slug."""

    def test_punctuation_is_removed(self) -> None:
        """Test the basic slug rules."""
        assert github_slug("Hello, World!") == "hello-world"

    def test_hyphens_and_underscores_are_kept(self) -> None:
        """Test characters GitHub keeps."""
        assert github_slug("Set-up my_tool") == "set-up-my_tool"

    def test_duplicates_are_numbered(self) -> None:
        """Test that repeated headings get numbered slugs."""
        seen: dict[str, int] = {}
        assert [github_slug("Usage", seen_slugs=seen) for _ in range(3)] == ["usage", "usage-1", "usage-2"]

    @given(st.text(alphabet=st.characters(whitelist_categories=("Ll", "Lu", "Nd", "Zs")), max_size=40))
    def test_slug_has_no_spaces_or_uppercase(self, text: str) -> None:
        """Test that slugs never contain spaces or uppercase letters."""
        slug = github_slug(text)
        assert " " not in slug
        assert slug == slug.lower()


@pytest.mark.unit
class TestMakeUniqueSlug:
    """Tests for make_unique_slug."""

    def test_skips_taken_candidates(self) -> None:
        """Test that a numbered candidate already in use is skipped."""
        seen = {"intro": 0, "intro-1": 0}
        assert make_unique_slug("intro", seen) == "intro-2"

    def test_custom_separator(self) -> None:
        """Test a custom separator."""
        seen = {"a": 0}
        assert make_unique_slug("a", seen, separator="_") == "a_1"


@pytest.mark.unit
class TestGenerateSectionId:
    """Tests for generate_section_id."""

    def test_defaults(self) -> None:
        """Test the default prefix and separator."""
        assert generate_section_id("Foo Bar") == "_foo_bar"

    def test_runs_of_separators_collapse(self) -> None:
        """Test that spaces, periods and hyphens collapse into one separator."""
        assert generate_section_id("Version 1.2 - Notes") == "_version_1_2_notes"

    def test_empty_prefix_strips_leading_separator(self) -> None:
        """Test that no separator is left at the start without a prefix."""
        assert generate_section_id(" Lead", prefix="", separator="-") == "lead"

    def test_empty_separator(self) -> None:
        """Test that an empty separator joins the words."""
        assert generate_section_id("Foo Bar", prefix="", separator="") == "foobar"

    def test_markup_is_ignored(self) -> None:
        """Test that rendered markup does not leak into the id."""
        assert generate_section_id("The `convert` **API**") == "_the_convert_api"
