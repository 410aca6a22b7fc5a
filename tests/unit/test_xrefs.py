#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for anchor registration and cross reference resolution."""

import pytest

from adoc2md.xrefs import AnchorRegistry, CrossReferenceResolver, XrefPlaceholder


@pytest.mark.unit
class TestAnchorRegistry:
    """Tests for AnchorRegistry."""

    def test_register_and_lookup(self) -> None:
        """Test registering an id with a target and reftext."""
        registry = AnchorRegistry()
        assert registry.register("_install", "install", "Install") is True
        anchor = registry.lookup("_install")
        assert anchor.target == "install"
        assert anchor.reftext == "Install"
        assert len(registry) == 1

    def test_target_defaults_to_id(self) -> None:
        """Test that the link fragment defaults to the id."""
        registry = AnchorRegistry()
        registry.register("note-1")
        assert registry.lookup("note-1").target == "note-1"

    def test_first_registration_wins(self) -> None:
        """Test that duplicate ids are ignored."""
        registry = AnchorRegistry()
        registry.register("dup", "first")
        assert registry.register("dup", "second") is False
        assert registry.lookup("dup").target == "first"

    def test_invalid_id_is_rejected(self) -> None:
        """Test that ids that cannot be anchors are not registered."""
        registry = AnchorRegistry()
        assert registry.register("1abc") is False
        assert "1abc" not in registry

    def test_lookup_title(self) -> None:
        """Test natural references by title."""
        registry = AnchorRegistry()
        registry.register("_usage", "usage")
        registry.register("_usage_2", "usage-1")
        registry.register_title("Usage", "_usage")
        registry.register_title("Usage", "_usage_2")
        assert registry.lookup_title("Usage").target == "usage"
        assert registry.lookup_title("Unknown") is None


@pytest.mark.unit
class TestXrefPlaceholder:
    """Tests for detecting references into other documents."""

    @pytest.mark.parametrize(
        "target,external",
        [
            ("install", False),
            ("#install", False),
            ("guide.adoc", True),
            ("guide.adoc#setup", True),
            ("guide#setup", True),
        ],
    )
    def test_is_external(self, target: str, external: bool) -> None:
        """Test which targets point into another document."""
        assert XrefPlaceholder(target).is_external is external


@pytest.mark.unit
class TestCrossReferenceResolver:
    """Tests for placeholder resolution."""

    def test_forward_and_backward_references(self) -> None:
        """Test that registration order does not matter."""
        registry = AnchorRegistry()
        resolver = CrossReferenceResolver(registry)
        registry.register("a", "a-slug", "A")
        text = f"{resolver.add('a')} {resolver.add('b')}"
        registry.register("b", "b-slug", "B")
        assert resolver.resolve(text) == "[A](#a-slug) [B](#b-slug)"

    def test_reftext_falls_back_to_id(self) -> None:
        """Test the link text of an anchor without reftext."""
        registry = AnchorRegistry()
        resolver = CrossReferenceResolver(registry)
        registry.register("figure-1")
        assert resolver.resolve(resolver.add("#figure-1")) == "[figure-1](#figure-1)"

    def test_external_document_without_fragment(self) -> None:
        """Test a reference to a whole document."""
        resolver = CrossReferenceResolver(AnchorRegistry())
        assert resolver.render(XrefPlaceholder("other.adoc")) == "[other.adoc](other.adoc)"

    def test_text_without_placeholders_is_unchanged(self) -> None:
        """Test that plain text passes through."""
        resolver = CrossReferenceResolver(AnchorRegistry())
        assert resolver.resolve("nothing here") == "nothing here"
