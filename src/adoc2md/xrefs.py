#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/xrefs.py
"""Cross-reference registration and resolution.

Resolution happens in two phases. While the converter walks the document it
registers every id it encounters (section ids, block ids, inline anchors)
in an :class:`AnchorRegistry` and replaces every reference it finds with a
placeholder token. Once the whole document has been converted, the
:class:`CrossReferenceResolver` rewrites each placeholder into a Markdown
link, so a reference resolves the same way whether it appears before or
after the element it points to.

Section ids are rewritten to the anchor GitHub generates for the rendered
heading, since that is the only anchor a Markdown renderer provides for a
heading. Block ids and inline anchors keep their id, because the converter
emits an explicit ``<a name="id"></a>`` for them.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

from adoc2md.attrlist import is_valid_id

logger = logging.getLogger(__name__)

PLACEHOLDER_START = "\x00"
PLACEHOLDER_END = "\x01"
PLACEHOLDER_RX = re.compile(PLACEHOLDER_START + r"(\d+)" + PLACEHOLDER_END)

EXTERNAL_DOCUMENT_SUFFIX = ".adoc"


@dataclass
class Anchor:
    """Resolved destination of an id.

    Parameters
    ----------
    target : str
        Fragment the Markdown link points to, without the leading ``#``
    reftext : str, optional
        Text used for references that do not supply their own

    """

    target: str
    reftext: Optional[str] = None


@dataclass(frozen=True)
class XrefPlaceholder:
    """A reference found in the source, awaiting resolution.

    Parameters
    ----------
    target : str
        Raw reference target (``id``, ``#id``, ``doc.adoc#frag``, or title text)
    text : str, optional
        Explicit link text

    """

    target: str
    text: Optional[str] = None

    @property
    def is_external(self) -> bool:
        """Return whether the target points into another document."""
        path, hash_mark, _ = self.target.partition("#")
        if hash_mark:
            return bool(path)
        return self.target.endswith(EXTERNAL_DOCUMENT_SUFFIX)


class AnchorRegistry:
    """Registry of ids and titles declared in one document.

    The first registration of an id wins; later duplicates are ignored.
    Titles are tracked separately so that natural references
    (``<<Section Title>>``) bind to the first section with that title.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._anchors: dict[str, Anchor] = {}
        self._titles: dict[str, str] = {}
        self.seen_slugs: dict[str, int] = {}

    def __contains__(self, anchor_id: object) -> bool:
        return anchor_id in self._anchors

    def __len__(self) -> int:
        return len(self._anchors)

    def register(self, anchor_id: str, target: Optional[str] = None, reftext: Optional[str] = None) -> bool:
        """Register an id.

        Parameters
        ----------
        anchor_id : str
            Id as written in the source
        target : str, optional
            Link fragment; defaults to the id itself
        reftext : str, optional
            Default link text for references to this id

        Returns
        -------
        bool
            True if the id was registered, False if it is invalid or taken

        """
        if not is_valid_id(anchor_id):
            logger.debug("Not registering invalid id '%s'", anchor_id)
            return False
        if anchor_id in self._anchors:
            logger.debug("Ignoring duplicate id '%s'", anchor_id)
            return False
        self._anchors[anchor_id] = Anchor(target or anchor_id, reftext)
        return True

    def register_title(self, title: str, anchor_id: str) -> None:
        """Make ``title`` usable as a natural reference to ``anchor_id``."""
        self._titles.setdefault(title, anchor_id)

    def lookup(self, anchor_id: str) -> Optional[Anchor]:
        """Return the anchor registered for ``anchor_id``."""
        return self._anchors.get(anchor_id)

    def lookup_title(self, title: str) -> Optional[Anchor]:
        """Return the anchor of the first section titled ``title``."""
        anchor_id = self._titles.get(title)
        if anchor_id is None:
            return None
        return self._anchors.get(anchor_id)


class CrossReferenceResolver:
    """Create placeholders during conversion and resolve them afterwards.

    Parameters
    ----------
    registry : AnchorRegistry
        Registry filled while the document is converted

    Examples
    --------
        >>> registry = AnchorRegistry()
        >>> resolver = CrossReferenceResolver(registry)
        >>> text = f"See {resolver.add('usage')}."
        >>> registry.register("usage", "usage", "Usage")
        True
        >>> resolver.resolve(text)
        'See [Usage](#usage).'

    """

    def __init__(self, registry: AnchorRegistry):
        """Initialize the resolver."""
        self.registry = registry
        self.placeholders: list[XrefPlaceholder] = []

    def add(self, target: str, text: Optional[str] = None) -> str:
        """Record a reference and return the token standing in for it."""
        self.placeholders.append(XrefPlaceholder(target, text or None))
        return f"{PLACEHOLDER_START}{len(self.placeholders) - 1}{PLACEHOLDER_END}"

    def resolve(self, text: str) -> str:
        """Replace every placeholder token in ``text`` with a Markdown link."""
        if PLACEHOLDER_START not in text:
            return text
        return PLACEHOLDER_RX.sub(lambda match: self.render(self.placeholders[int(match.group(1))]), text)

    def render(self, placeholder: XrefPlaceholder) -> str:
        """Render a single reference as a Markdown link."""
        if placeholder.is_external:
            path, _, fragment = placeholder.target.partition("#")
            destination = f"{path}#{fragment}" if fragment else path
            text = placeholder.text or placeholder.target.rstrip("#")
            return f"[{text}]({destination})"

        anchor_id = placeholder.target[1:] if placeholder.target.startswith("#") else placeholder.target
        anchor = self.registry.lookup(anchor_id) or self.registry.lookup_title(anchor_id)
        if anchor is None:
            logger.debug("Unresolved cross reference to '%s'", anchor_id)
            return f"[{placeholder.text or anchor_id}](#{anchor_id})"
        return f"[{placeholder.text or anchor.reftext or anchor_id}](#{anchor.target})"
