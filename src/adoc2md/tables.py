#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/tables.py
"""Table reshaping.

AsciiDoc tables are a stream of cells: a physical line may hold one cell,
a whole row, or a fragment of a cell that wraps onto the next line. The
:class:`TableAccumulator` collects the cells of one ``|===`` block and
re-segments them into rows using the column count, which comes from the
``cols`` attribute or, failing that, from the number of cells on the first
line. Because the physical line structure is discarded, the rendered table
does not depend on how the source wraps its cells.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from adoc2md.attrlist import AttributeList
from adoc2md.constants import EMPTY_HEADER_CELL

logger = logging.getLogger(__name__)

# An optional cell specifier (2+, 3*, ^, .>, s, ...) is only recognized at
# the start of a line or after whitespace
CELL_SEPARATOR_RX = re.compile(r"(?:(?:^|(?<=\s))(?:\d+(?:\.\d+)?[*+])?[<^>]?(?:\.[<^>])?[a-z]?)?(?<!\\)\|")
COLUMN_SPEC_RX = re.compile(r"(?:(\d+)\*)?([<^>])?(?:\.[<^>])?(\d+%?)?([a-z])?")
COLUMN_SEPARATOR_RX = re.compile(r"[,;]")

HARD_BREAK = " +"
HARD_BREAK_TOKEN = "\x12"
HTML_BREAK = "<br>"

ALIGNMENTS = {"<": ":--", "^": ":-:", ">": "--:"}
DEFAULT_ALIGNMENT = "---"


def parse_cols(value: Optional[str]) -> Optional[list[str]]:
    """Parse the ``cols`` attribute into Markdown column alignments.

    Parameters
    ----------
    value : str or None
        Value of the ``cols`` attribute

    Returns
    -------
    list[str] or None
        One alignment marker per column, or None when no usable column
        specification was given

    Examples
    --------
        >>> parse_cols("2*^.>10;>40;.^40")
        [':-:', ':-:', '--:', '---']
        >>> parse_cols("3")
        ['---', '---', '---']

    """
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if value.isdecimal():
        return [DEFAULT_ALIGNMENT] * int(value)

    alignments: list[str] = []
    for spec in COLUMN_SEPARATOR_RX.split(value):
        match = COLUMN_SPEC_RX.match(spec.strip())
        repeat = int(match.group(1)) if match and match.group(1) else 1
        halign = match.group(2) if match else None
        alignments.extend([ALIGNMENTS.get(halign or "", DEFAULT_ALIGNMENT)] * repeat)
    return alignments or None


def split_cells(line: str) -> tuple[Optional[str], list[str]]:
    r"""Split a physical table line at its cell separators.

    Parameters
    ----------
    line : str
        Line inside a table block

    Returns
    -------
    tuple[str or None, list[str]]
        Text preceding the first separator (None when the line starts with
        a separator) and the text of each cell opened on this line.
        Escaped separators (``\|``) are unescaped.

    Examples
    --------
        >>> split_cells("| A1 2+| B1")
        (None, [' A1 ', ' B1'])
        >>> split_cells("wrapped text")
        ('wrapped text', [])

    """
    separators = list(CELL_SEPARATOR_RX.finditer(line))
    if not separators:
        return _unescape(line), []

    leading = line[: separators[0].start()]
    cells = []
    for index, separator in enumerate(separators):
        end = separators[index + 1].start() if index + 1 < len(separators) else len(line)
        cells.append(_unescape(line[separator.end() : end]))
    return (_unescape(leading) if leading.strip() else None), cells


def _unescape(text: str) -> str:
    return text.replace("\\|", "|")


@dataclass
class TableAccumulator:
    """Cells collected from one table block.

    Parameters
    ----------
    columns : list[str] or None
        Column alignments from the ``cols`` attribute
    header_option : bool or None
        True for ``%header``, False for ``%noheader``, None to infer the
        header from the layout of the first line

    """

    columns: Optional[list[str]] = None
    header_option: Optional[bool] = None
    cells: list[list[str]] = field(default_factory=list)
    first_line_cells: Optional[int] = None
    blank_before_first_row: bool = False
    first_row_followed_by_blank: bool = False
    lines_seen: int = field(default=0, init=False)

    @classmethod
    def from_attributes(cls, attrs: AttributeList) -> TableAccumulator:
        """Create an accumulator configured by the block attributes."""
        header_option: Optional[bool] = None
        if attrs.has_option("header"):
            header_option = True
        elif attrs.has_option("noheader"):
            header_option = False
        return cls(columns=parse_cols(attrs.get("cols")), header_option=header_option)

    @property
    def column_count(self) -> int:
        """Return the number of columns of the table."""
        if self.columns:
            return len(self.columns)
        return self.first_line_cells or 0

    def add_line(self, line: str) -> None:
        """Add one physical line from inside the table block."""
        if not line.strip():
            if self.lines_seen == 0:
                self.blank_before_first_row = True
            elif self.lines_seen == 1:
                self.first_row_followed_by_blank = True
            return

        self.lines_seen += 1
        leading, cells = split_cells(line)
        if leading is not None:
            if self.cells:
                self.cells[-1].append(leading.strip())
            else:
                logger.debug("Dropping table text outside of a cell: %r", leading)
        for cell in cells:
            self.cells.append([cell.strip()])
        if self.first_line_cells is None and cells:
            self.first_line_cells = len(cells)

    def _has_header(self) -> bool:
        if self.header_option is not None:
            return self.header_option
        return (
            not self.blank_before_first_row
            and self.first_row_followed_by_blank
            and self.first_line_cells == self.column_count
        )

    def render(self, substitute: Callable[[str], str]) -> list[str]:
        """Render the table as Markdown lines.

        Parameters
        ----------
        substitute : Callable[[str], str]
            Normal substitutions, applied to the text of each cell

        Returns
        -------
        list[str]
            Table rows; empty when the table has no cells

        """
        ncols = self.column_count
        if not self.cells or not ncols:
            return []

        texts = [self._cell_text(fragments, substitute) for fragments in self.cells]
        alignments = self.columns or [DEFAULT_ALIGNMENT] * ncols

        lines = []
        if self._has_header():
            header, texts = texts[:ncols], texts[ncols:]
            header.extend([""] * (ncols - len(header)))
            lines.append(_format_row(header))
        else:
            lines.append("|" + "|".join([EMPTY_HEADER_CELL] * ncols) + "|")
        lines.append(_format_row(alignments))

        for start in range(0, len(texts), ncols):
            row = texts[start : start + ncols]
            row.extend([""] * (ncols - len(row)))
            lines.append(_format_row(row))
        return lines

    @staticmethod
    def _cell_text(fragments: list[str], substitute: Callable[[str], str]) -> str:
        """Join the wrapped lines of a cell and apply substitutions.

        A hard break at the end of a wrapped line becomes ``<br>``; at the
        end of the cell it is kept as typed.
        """
        parts = [fragment for fragment in fragments if fragment]
        for index in range(len(parts) - 1):
            if parts[index].endswith(HARD_BREAK):
                parts[index] = parts[index][: -len(HARD_BREAK)] + HARD_BREAK_TOKEN
        text = substitute(" ".join(parts))
        return text.replace(HARD_BREAK_TOKEN, HTML_BREAK)


def _format_row(cells: list[str]) -> str:
    return "| " + " | ".join(cells) + " |"
