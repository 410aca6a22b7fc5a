#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/utils/text.py
"""Text utilities for identifiers and anchors.

This module provides the two id schemes the converter has to reconcile:
the ids AsciiDoc generates for section titles, which is what references in
the source document use, and the anchor slugs GitHub generates for Markdown
headings, which is what links in the output document must point to.

Functions
---------
markdown_to_plain : Strip Markdown/HTML markup from rendered text
github_slug : Convert heading text to a GitHub-compatible anchor slug
make_unique_slug : Generate unique slug with duplicate handling
generate_section_id : Generate an AsciiDoc-style section id

Examples
--------
    >>> github_slug("Get Started with ACME")
    'get-started-with-acme'
    >>> generate_section_id("Foo Bar", prefix="_", separator="_")
    '_foo_bar'

"""

from __future__ import annotations

import re

_TAG_RX = re.compile(r"<[^>]+>")
_ENTITY_RX = re.compile(r"&(?:[a-zA-Z][a-zA-Z]+\d{0,2}|#\d{2,5}|#x[\da-fA-F]{2,4});")
_LINK_RX = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
_MARKUP_RX = re.compile(r"\*\*|~~|`|(?<![^\W_])_|_(?![^\W_])")
_CONTROL_RX = re.compile(r"[\x00-\x1f]+\d*[\x00-\x1f]*")

# Characters GitHub keeps in heading anchors besides letters and digits
_SLUG_DROP_RX = re.compile(r"[^\w\- ]")
_SECTION_ID_DROP_RX = re.compile(r"[^\w\-. ]")
_SECTION_ID_SEPARATOR_RX = re.compile(r"[ .\-]+")


def markdown_to_plain(text: str) -> str:
    """Reduce rendered Markdown to the text a reader would see.

    Links keep their text, images their alt text; HTML tags, character
    references, emphasis markers and code ticks are removed.

    Parameters
    ----------
    text : str
        Markdown fragment, typically a rendered heading

    Returns
    -------
    str
        Plain text

    """
    text = _CONTROL_RX.sub("", text)
    text = _LINK_RX.sub(r"\1", text)
    text = _TAG_RX.sub("", text)
    text = _ENTITY_RX.sub("", text)
    text = _MARKUP_RX.sub("", text)
    return text.strip()


def make_unique_slug(slug: str, seen_slugs: dict[str, int], separator: str = "-") -> str:
    """Generate unique slug with duplicate handling.

    Follows GitHub's numbering: the first occurrence keeps the slug as is,
    the second gets ``-1``, the third ``-2`` and so on.

    Parameters
    ----------
    slug : str
        Base slug to make unique
    seen_slugs : dict[str, int]
        Dictionary tracking occurrence counts (mutated in-place)
    separator : str, default = "-"
        Separator to use before numeric suffix

    Returns
    -------
    str
        Unique slug (with numeric suffix if needed)

    Examples
    --------
        >>> seen = {}
        >>> make_unique_slug("intro", seen)
        'intro'
        >>> make_unique_slug("intro", seen)
        'intro-1'

    """
    if slug not in seen_slugs:
        seen_slugs[slug] = 0
        return slug

    count = seen_slugs[slug]
    while True:
        count += 1
        candidate = f"{slug}{separator}{count}"
        if candidate not in seen_slugs:
            break
    seen_slugs[slug] = count
    seen_slugs[candidate] = 0
    return candidate


def github_slug(text: str, *, seen_slugs: dict[str, int] | None = None) -> str:
    """Create the anchor slug GitHub assigns to a Markdown heading.

    Parameters
    ----------
    text : str
        Rendered heading text (Markdown markup is stripped first)
    seen_slugs : dict[str, int] or None, default = None
        Occurrence counts of previously generated slugs; when provided the
        result is made unique and recorded

    Returns
    -------
    str
        Anchor slug without the leading ``#``

    Examples
    --------
        >>> github_slug("Hello, World!")
        'hello-world'
        >>> github_slug("ACME _Config_")
        'acme-config'

    """
    plain = markdown_to_plain(text).lower()
    slug = _SLUG_DROP_RX.sub("", plain).replace(" ", "-")

    if seen_slugs is not None:
        return make_unique_slug(slug, seen_slugs)
    return slug


def generate_section_id(title: str, *, prefix: str = "_", separator: str = "_") -> str:
    """Generate the id AsciiDoc assigns to a section title.

    The title is lowercased, characters other than word characters, spaces,
    hyphens and periods are removed, and each run of spaces, hyphens and
    periods is replaced with ``separator``.

    Parameters
    ----------
    title : str
        Rendered section title (Markdown markup is stripped first)
    prefix : str, default = "_"
        Value of the ``idprefix`` attribute
    separator : str, default = "_"
        Value of the ``idseparator`` attribute

    Returns
    -------
    str
        Generated id

    Examples
    --------
        >>> generate_section_id("Discrete Heading", prefix="_", separator="-")
        '_discrete-heading'
        >>> generate_section_id("System Requirements", prefix="ref_", separator="-")
        'ref_system-requirements'

    """
    plain = _SECTION_ID_DROP_RX.sub("", markdown_to_plain(title).lower())
    if separator:
        body = _SECTION_ID_SEPARATOR_RX.sub(separator, plain)
        if body.endswith(separator):
            body = body[: -len(separator)]
        if not prefix and body.startswith(separator):
            body = body[len(separator) :]
    else:
        body = _SECTION_ID_SEPARATOR_RX.sub("", plain)
    return f"{prefix}{body}"


__all__ = [
    "generate_section_id",
    "github_slug",
    "make_unique_slug",
    "markdown_to_plain",
]
