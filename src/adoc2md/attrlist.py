#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/attrlist.py
"""Attribute list parsing.

An attribute list is the comma-separated content between square brackets
on a block attribute line (``[source,ruby]``), a block anchor
(``[[id,reftext]]``) or an inline macro (``image:x.png[alt,link=...]``).

The first positional value of a block attribute list may use the
shorthand syntax ``style#id.role%option``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional

SHORTHAND_RX = re.compile(r"([#.%])([^#.%]*)")
NAMED_ATTRIBUTE_RX = re.compile(r"^([A-Za-z_][\w-]*)\s*=\s*(.*)$", re.DOTALL)
VALID_ID_RX = re.compile(r"^(?:[^\W\d]|:)[\w:.\-]*$")


def is_valid_id(value: str) -> bool:
    """Return whether ``value`` is a usable element id.

    Ids start with a letter, an underscore or a colon, followed by word
    characters, colons, periods or hyphens.

        >>> is_valid_id("vérite"), is_valid_id("-nope"), is_valid_id("0")
        (True, False, False)

    """
    return bool(VALID_ID_RX.match(value))


def split_attrlist(text: str) -> list[str]:
    """Split attribute list text at commas outside of quoted values."""
    parts: list[str] = []
    current: list[str] = []
    quote: Optional[str] = None
    for char in text:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
        elif char in "\"'" and _opens_value(current):
            quote = char
            current.append(char)
        elif char == ",":
            parts.append("".join(current))
            current = []
        else:
            current.append(char)
    parts.append("".join(current))
    return parts


def _opens_value(current: list[str]) -> bool:
    """Return whether a quote at this position starts a quoted value."""
    prefix = "".join(current).strip()
    return not prefix or prefix.endswith("=")


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


@dataclass
class AttributeList:
    """Parsed attribute list.

    Parameters
    ----------
    positional : list[str]
        Positional values; index 0 is the block style
    named : dict[str, str]
        Named (``key=value``) values
    id : str, optional
        Element id from ``#id``, ``id=`` or a block anchor
    roles : list[str]
        Roles from ``.role`` or ``role=``
    options : list[str]
        Options from ``%option``, ``options=`` or ``opts=``
    reftext : str, optional
        Reference text from a block anchor or ``reftext=``

    """

    positional: list[str] = field(default_factory=list)
    named: dict[str, str] = field(default_factory=dict)
    id: Optional[str] = None
    roles: list[str] = field(default_factory=list)
    options: list[str] = field(default_factory=list)
    reftext: Optional[str] = None

    @property
    def style(self) -> str:
        """Return the block style (first positional value) or ``""``."""
        return self.positional[0] if self.positional else ""

    def positional_at(self, index: int) -> str:
        """Return the positional value at ``index`` or ``""``."""
        return self.positional[index] if index < len(self.positional) else ""

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return a named value."""
        return self.named.get(name, default)

    def has_option(self, name: str) -> bool:
        """Return whether ``%name`` (or ``options=name``) is set."""
        return name in self.options

    def is_empty(self) -> bool:
        return not (self.positional or self.named or self.id or self.roles or self.options or self.reftext)

    def merge(self, other: AttributeList) -> None:
        """Merge a later attribute line into this one.

        Non-empty positional values and named values of ``other`` win;
        roles and options accumulate.
        """
        for index, value in enumerate(other.positional):
            if not value:
                continue
            while len(self.positional) <= index:
                self.positional.append("")
            self.positional[index] = value
        self.named.update(other.named)
        if other.id:
            self.id = other.id
        if other.reftext:
            self.reftext = other.reftext
        self.roles.extend(role for role in other.roles if role not in self.roles)
        self.options.extend(option for option in other.options if option not in self.options)


def parse_attrlist(text: str, *, shorthand: bool = True) -> AttributeList:
    """Parse the content of an attribute list.

    Parameters
    ----------
    text : str
        Text between the brackets
    shorthand : bool, default True
        Interpret ``#id``, ``.role`` and ``%option`` in the first
        positional value (block attribute lines only)

    Returns
    -------
    AttributeList
        Parsed attributes; an unparseable list yields an empty result

    Examples
    --------
        >>> attrs = parse_attrlist("source.hide#main%linenums,ruby")
        >>> attrs.style, attrs.id, attrs.roles, attrs.options, attrs.positional_at(1)
        ('source', 'main', ['hide'], ['linenums'], 'ruby')

    """
    attrs = AttributeList()
    if not text.strip():
        return attrs

    positional_index = 0
    for raw in split_attrlist(text):
        named = NAMED_ATTRIBUTE_RX.match(raw.strip())
        if named:
            _apply_named(attrs, named.group(1), _unquote(named.group(2)))
            continue

        value = _unquote(raw)
        if positional_index == 0 and shorthand and not raw.strip().startswith(("'", '"')):
            value = _apply_shorthand(attrs, value)
        attrs.positional.append(value)
        positional_index += 1

    return attrs


def _apply_shorthand(attrs: AttributeList, value: str) -> str:
    marker = re.search(r"[#.%]", value)
    if marker is None:
        return value
    style = value[: marker.start()]
    for kind, item in SHORTHAND_RX.findall(value[marker.start() :]):
        if not item:
            continue
        if kind == "#":
            attrs.id = item
        elif kind == ".":
            attrs.roles.append(item)
        else:
            attrs.options.append(item)
    return style


def _apply_named(attrs: AttributeList, name: str, value: str) -> None:
    if name == "id":
        attrs.id = value
    elif name in ("role", "roles"):
        attrs.roles.extend(value.split())
    elif name in ("options", "opts"):
        attrs.options.extend(option.strip() for option in value.split(",") if option.strip())
    elif name == "reftext":
        attrs.reftext = value
    attrs.named[name] = value
