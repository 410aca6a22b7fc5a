#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/context.py
"""Per-conversion state shared by the conversion stages."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from adoc2md.attributes import AttributeTable
from adoc2md.substitutions import Substitutor
from adoc2md.utils.text import generate_section_id, github_slug
from adoc2md.xrefs import AnchorRegistry, CrossReferenceResolver


class ConversionContext:
    """State owned by a single call to :func:`adoc2md.api.convert`.

    Every stage receives the context explicitly; nothing here is shared
    between conversions.

    Parameters
    ----------
    seed_attributes : Mapping[str, str or None], optional
        Attributes supplied by the caller

    """

    def __init__(self, seed_attributes: Optional[Mapping[str, Optional[str]]] = None):
        """Initialize fresh attribute, anchor and placeholder tables."""
        self.attributes = AttributeTable(seed_attributes)
        self.registry = AnchorRegistry()
        self.xrefs = CrossReferenceResolver(self.registry)
        self.substitutor = Substitutor(self.attributes, self.xrefs)

    def substitute(self, text: str) -> str:
        """Apply normal substitutions to ``text``."""
        return self.substitutor.apply_normal(text)

    def register_section(
        self, raw_title: str, rendered_title: str, explicit_id: Optional[str] = None, reftext: Optional[str] = None
    ) -> str:
        """Register a section or discrete heading.

        Both the generated id and the explicit id (if any) resolve to the
        GitHub anchor of the rendered heading.

        Parameters
        ----------
        raw_title : str
            Title as written in the source
        rendered_title : str
            Title after substitutions
        explicit_id : str, optional
            Id assigned with a block anchor or block attribute line
        reftext : str, optional
            Explicit reference text

        Returns
        -------
        str
            GitHub anchor slug of the heading

        """
        slug = github_slug(rendered_title, seen_slugs=self.registry.seen_slugs)
        display = reftext or rendered_title
        generated_id = generate_section_id(
            rendered_title,
            prefix=self.attributes.get("idprefix", ""),
            separator=self.attributes.get("idseparator", ""),
        )
        natural_id = generated_id
        if explicit_id and self.registry.register(explicit_id, slug, display):
            natural_id = explicit_id
        self.registry.register(generated_id, slug, display)
        self.registry.register_title(raw_title, natural_id)
        self.registry.register_title(rendered_title, natural_id)
        return slug

    def resolve_references(self, text: str) -> str:
        """Rewrite the cross reference placeholders in ``text``."""
        return self.xrefs.resolve(text)

    def register_doctitle(
        self, rendered_title: str, explicit_id: Optional[str] = None, reftext: Optional[str] = None
    ) -> str:
        """Register the document title.

        The title always claims its GitHub anchor slug, but only an
        explicit id makes the title a cross reference target.
        """
        slug = github_slug(rendered_title, seen_slugs=self.registry.seen_slugs)
        if explicit_id and self.registry.register(explicit_id, slug, reftext or rendered_title):
            self.registry.register_title(rendered_title, explicit_id)
        return slug
