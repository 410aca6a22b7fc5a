#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/lines.py
"""Line classification.

Every physical line is classified into exactly one :class:`LineKind` before
the block converter looks at it. Classification is context free: whether a
list marker inside a paragraph is really a list item, or whether a section
title inside a delimited block is really a section, is decided by the
converter based on its state. The classifier only records what the line
looks like.

"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from adoc2md.attributes import ATTRIBUTE_NAME_PATTERN
from adoc2md.constants import ADMONITION_ICONS


class LineKind(Enum):
    """Shapes a source line can take."""

    BLANK = auto()
    ATTRIBUTE_ENTRY = auto()
    BLOCK_ATTRIBUTES = auto()
    BLOCK_ANCHOR = auto()
    BLOCK_TITLE = auto()
    SECTION_TITLE = auto()
    DELIMITER = auto()
    LIST_ITEM = auto()
    DESCRIPTION_ITEM = auto()
    CONTINUATION = auto()
    THEMATIC_BREAK = auto()
    PAGE_BREAK = auto()
    TOC_MACRO = auto()
    BLOCK_IMAGE = auto()
    ADMONITION = auto()
    MARKDOWN_QUOTE = auto()
    INDENTED = auto()
    TEXT = auto()


@dataclass
class Line:
    """A classified source line.

    Parameters
    ----------
    kind : LineKind
        Shape of the line
    text : str
        Original line content
    line_num : int
        Line number in the source
    indent : int
        Number of leading whitespace characters
    metadata : dict
        Kind-specific values (marker, level, delimiter, ...)

    """

    kind: LineKind
    text: str
    line_num: int
    indent: int = 0
    metadata: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        """Initialize metadata if not provided."""
        if self.metadata is None:
            self.metadata = {}

    def __getitem__(self, key: str) -> Any:
        return self.metadata[key]  # type: ignore[index]


ATTRIBUTE_ENTRY_RX = re.compile(r"^:(!)?(" + ATTRIBUTE_NAME_PATTERN + r")(!)?:(?:[ \t]+(.*?))?[ \t]*$")
BLOCK_ANCHOR_RX = re.compile(r"^\[\[([^\s\[\],]+)(?:,\s*(.+?))?\]\]$")
BLOCK_ATTRIBUTES_RX = re.compile(r"^\[(|[\w.#%{,\"'].*)\]$")
BLOCK_TITLE_RX = re.compile(r"^\.(\.?[^\s.].*)$")
SECTION_TITLE_RX = re.compile(r"^(={1,6})[ \t]+(\S.*?)[ \t]*$")
THEMATIC_BREAK_RX = re.compile(r"^(?:'{3}|(?:-[ ]?){2}-|(?:\*[ ]?){2}\*|(?:_[ ]?){2}_)$")
TOC_MACRO_RX = re.compile(r"^toc::\[.*\]$")
BLOCK_IMAGE_RX = re.compile(r"^image::([^\s:\[`\\][^\[\]\\]*)\[(|.*?[^\\])\]$")
ADMONITION_RX = re.compile(r"^(" + "|".join(ADMONITION_ICONS) + r"):[ \t]+(.*)$")
LIST_ITEM_RX = re.compile(r"^(\*{1,5}|-|\.{1,5}|\d+\.|<(?:\d+|\.)>)[ \t]+(\S.*)$")
DESCRIPTION_ITEM_RX = re.compile(r"^(:*[^\s:].*?)(:{2,4}|;;)(?:[ \t]+(.*))?$")
MARKDOWN_QUOTE_RX = re.compile(r"^>(?:[ \t](.*))?$")
FENCE_RX = re.compile(r"^(`{3,})([\w+#.-]*)[ \t]*$")

# Delimiter runs mapped to the block kind they open
DELIMITER_KINDS = (
    (re.compile(r"^-{4,}$"), "listing"),
    (re.compile(r"^\.{4,}$"), "literal"),
    (re.compile(r"^={4,}$"), "example"),
    (re.compile(r"^\*{4,}$"), "sidebar"),
    (re.compile(r"^_{4,}$"), "quote"),
    (re.compile(r"^\+{4,}$"), "pass"),
    (re.compile(r"^--$"), "open"),
    (re.compile(r"^\|={3,}$"), "table"),
)


def _list_family(marker: str) -> str:
    if marker[0] in "*-":
        return "unordered"
    if marker[0] == "<":
        return "callout"
    return "ordered"


def _list_key(marker: str) -> str:
    """Key used to match list levels; explicit numerals share one level."""
    if marker[0].isdigit():
        return "1."
    if marker[0] == "<":
        return "<1>"
    return marker


def classify_line(text: str, line_num: int = 0) -> Line:
    """Classify a single physical line.

    Parameters
    ----------
    text : str
        Line content
    line_num : int, default 0
        Line number, carried into the result

    Returns
    -------
    Line
        The classified line

    Examples
    --------
        >>> classify_line("== Section").kind
        <LineKind.SECTION_TITLE: 6>
        >>> classify_line("** nested")["key"]
        '**'

    """
    stripped = text.lstrip()
    indent = len(text) - len(stripped)

    if not stripped:
        return Line(LineKind.BLANK, "", line_num)

    if indent == 0:
        line = _classify_unindented(text, line_num)
        if line is not None:
            return line

    item = LIST_ITEM_RX.match(stripped)
    if item:
        marker = item.group(1)
        return Line(
            LineKind.LIST_ITEM,
            text,
            line_num,
            indent,
            {"marker": marker, "family": _list_family(marker), "key": _list_key(marker), "content": item.group(2)},
        )

    term = DESCRIPTION_ITEM_RX.match(stripped)
    if term:
        return Line(
            LineKind.DESCRIPTION_ITEM,
            text,
            line_num,
            indent,
            {"term": term.group(1), "key": term.group(2), "family": "description", "content": term.group(3) or ""},
        )

    if indent:
        return Line(LineKind.INDENTED, text, line_num, indent)

    quote = MARKDOWN_QUOTE_RX.match(text)
    if quote:
        return Line(LineKind.MARKDOWN_QUOTE, text, line_num, 0, {"content": quote.group(1) or ""})

    return Line(LineKind.TEXT, text, line_num)


def _classify_unindented(text: str, line_num: int) -> Line | None:
    """Classify the line shapes that must start in the first column."""
    for pattern, kind in DELIMITER_KINDS:
        if pattern.match(text):
            return Line(LineKind.DELIMITER, text, line_num, 0, {"block": kind, "delimiter": text})

    fence = FENCE_RX.match(text)
    if fence:
        return Line(
            LineKind.DELIMITER,
            text,
            line_num,
            0,
            {"block": "fenced", "delimiter": fence.group(1), "language": fence.group(2)},
        )

    if text == "+":
        return Line(LineKind.CONTINUATION, text, line_num)

    entry = ATTRIBUTE_ENTRY_RX.match(text)
    if entry:
        return Line(
            LineKind.ATTRIBUTE_ENTRY,
            text,
            line_num,
            0,
            {"name": entry.group(2), "value": entry.group(4), "unset": bool(entry.group(1) or entry.group(3))},
        )

    anchor = BLOCK_ANCHOR_RX.match(text)
    if anchor:
        return Line(LineKind.BLOCK_ANCHOR, text, line_num, 0, {"id": anchor.group(1), "reftext": anchor.group(2)})

    if BLOCK_ATTRIBUTES_RX.match(text):
        return Line(LineKind.BLOCK_ATTRIBUTES, text, line_num, 0, {"content": text[1:-1]})

    if THEMATIC_BREAK_RX.match(text):
        return Line(LineKind.THEMATIC_BREAK, text, line_num)

    if text == "<<<":
        return Line(LineKind.PAGE_BREAK, text, line_num)

    title = BLOCK_TITLE_RX.match(text)
    if title:
        return Line(LineKind.BLOCK_TITLE, text, line_num, 0, {"title": title.group(1)})

    section = SECTION_TITLE_RX.match(text)
    if section:
        return Line(
            LineKind.SECTION_TITLE,
            text,
            line_num,
            0,
            {"level": len(section.group(1)) - 1, "title": section.group(2)},
        )

    if TOC_MACRO_RX.match(text):
        return Line(LineKind.TOC_MACRO, text, line_num)

    image = BLOCK_IMAGE_RX.match(text)
    if image:
        return Line(LineKind.BLOCK_IMAGE, text, line_num, 0, {"target": image.group(1), "attrlist": image.group(2)})

    admonition = ADMONITION_RX.match(text)
    if admonition:
        return Line(
            LineKind.ADMONITION, text, line_num, 0, {"label": admonition.group(1), "content": admonition.group(2)}
        )

    return None
