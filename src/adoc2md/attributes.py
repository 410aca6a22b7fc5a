#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/attributes.py
"""Document attribute table.

Attributes are document-scoped string variables referenced as ``{name}``.
Entry values are substituted when the entry is declared, not when the
attribute is referenced, so later redefinitions of an attribute used in a
value do not change that value retroactively.

Names are unicode word characters and hyphens and may not start with a
hyphen. Names seeded by the caller are locked: the document cannot
redefine or unset them, with the exception of ``doctitle``, which the
parsed document title always sets.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Iterator, Optional

from adoc2md.constants import DEFAULT_ATTRIBUTES, DOCTITLE_ATTRIBUTE, INTRINSIC_ATTRIBUTES

logger = logging.getLogger(__name__)

ATTRIBUTE_NAME_PATTERN = r"\w[\w-]*"

# Matches {name}, optionally escaped with one or two backslashes
ATTRIBUTE_REFERENCE_RX = re.compile(r"(\\{1,2})?\{(" + ATTRIBUTE_NAME_PATTERN + r")\}")


class AttributeTable(Mapping[str, str]):
    """Mapping of attribute names to values owned by one conversion.

    Parameters
    ----------
    seed : Mapping[str, str or None], optional
        Attributes supplied by the caller. A ``None`` value locks the
        attribute as unset.

    Examples
    --------
        >>> table = AttributeTable({"product": "ACME"})
        >>> table.define("product", "Widget")
        False
        >>> table.resolve_references("{product} {sp}rocks")
        'ACME  rocks'

    """

    def __init__(self, seed: Optional[Mapping[str, Optional[str]]] = None):
        """Initialize the table with built-in, default and seeded values."""
        self._values: dict[str, str] = dict(INTRINSIC_ATTRIBUTES)
        self._values.update(DEFAULT_ATTRIBUTES)
        self._locked: set[str] = set()
        for name, value in (seed or {}).items():
            if value is None:
                self._values.pop(name, None)
            else:
                self._values[name] = value
            self._locked.add(name)

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def is_locked(self, name: str) -> bool:
        """Return whether ``name`` was seeded by the caller."""
        return name in self._locked and name != DOCTITLE_ATTRIBUTE

    def define(self, name: str, value: str, *, force: bool = False) -> bool:
        """Assign a value that has already been substituted.

        Parameters
        ----------
        name : str
            Attribute name
        value : str
            Attribute value
        force : bool, default False
            Assign even if the name is locked

        Returns
        -------
        bool
            True if the value was stored

        """
        if not force and self.is_locked(name):
            logger.debug("Ignoring redefinition of locked attribute '%s'", name)
            return False
        self._values[name] = value
        return True

    def undefine(self, name: str) -> bool:
        """Unset an attribute; returns False when the name is locked."""
        if self.is_locked(name):
            logger.debug("Ignoring unset of locked attribute '%s'", name)
            return False
        self._values.pop(name, None)
        return True

    def apply_entry(self, name: str, value: Optional[str], unset: bool = False) -> bool:
        """Apply an attribute entry line (``:name: value`` or ``:!name:``).

        The value has its attribute references resolved before it is stored.
        """
        if unset:
            return self.undefine(name)
        return self.define(name, self.resolve_references(value or ""))

    def resolve_references(self, text: str, *, unescape: bool = False) -> str:
        """Replace ``{name}`` references with attribute values.

        Unknown names are left as written. An escaped reference is left
        alone, or, when ``unescape`` is true, loses one backslash and is not
        resolved.

        Parameters
        ----------
        text : str
            Text containing attribute references
        unescape : bool, default False
            Consume one escaping backslash from escaped references

        Returns
        -------
        str
            Text with references resolved

        """
        if "{" not in text:
            return text

        def replace(match: re.Match[str]) -> str:
            escape, name = match.group(1), match.group(2)
            if escape:
                if not unescape:
                    return match.group(0)
                return f"{escape[1:]}{{{name}}}"
            value = self._values.get(name)
            if value is None:
                logger.debug("Unresolved attribute reference '{%s}'", name)
                return match.group(0)
            return value

        return ATTRIBUTE_REFERENCE_RX.sub(replace, text)

    def line_break(self) -> str:
        """Return the Markdown hard line break mark."""
        return self._values.get("markdown-line-break", "")

    def quote_pair(self, name: str, default: tuple[str, str]) -> tuple[str, str]:
        """Split an attribute holding an open/close pair separated by a space.

        A value without a space is used as both the opening and the closing
        mark; an unset attribute yields ``default``.
        """
        value = self._values.get(name)
        if value is None:
            return default
        parts = value.split(None, 1)
        if not parts:
            return ("", "")
        if len(parts) == 1:
            return (parts[0], parts[0])
        return (parts[0], parts[1])

    def list_indent(self) -> Optional[int]:
        """Return the ``markdown-list-indent`` width, if set to a number."""
        value = self._values.get("markdown-list-indent")
        if value is None:
            return None
        try:
            return max(int(value), 0)
        except ValueError:
            logger.debug("Ignoring non-numeric markdown-list-indent value %r", value)
            return None
