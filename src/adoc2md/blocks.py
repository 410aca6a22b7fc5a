#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/blocks.py
"""Block contexts and the context stack.

The converter tracks where it is in the document with a stack of frames.
Container frames (the document root, example, sidebar, open, quote and
admonition blocks) and list frames can nest; paragraph, literal paragraph,
verbatim, table and Markdown quote frames are leaves that collect lines
until their termination rule fires.

Every frame carries the absolute output prefix of its content, so
rendering a line never needs to walk the stack: a list item's content
prefix is the marker prefix plus the indent step, a quote block's prefix is
its parent's prefix plus ``"> "``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, TypeVar

from adoc2md.attrlist import AttributeList
from adoc2md.constants import ContainerKind, ListFamily, VerbatimKind
from adoc2md.lines import Line, LineKind
from adoc2md.tables import TableAccumulator

logger = logging.getLogger(__name__)

FrameT = TypeVar("FrameT", bound="Frame")

# Lines that interrupt a paragraph wherever it appears
PARAGRAPH_BREAKS = frozenset({LineKind.BLANK, LineKind.BLOCK_ATTRIBUTES, LineKind.BLOCK_ANCHOR, LineKind.DELIMITER})

# Additional lines that interrupt a paragraph inside a list item
LIST_PARAGRAPH_BREAKS = frozenset({LineKind.LIST_ITEM, LineKind.DESCRIPTION_ITEM, LineKind.CONTINUATION})


@dataclass
class Frame:
    """Base class of all block contexts.

    Parameters
    ----------
    prefix : str
        Output prefix of lines rendered inside this context

    """

    prefix: str


@dataclass
class ContainerFrame(Frame):
    """A delimited block whose content is converted like the document body.

    Parameters
    ----------
    kind : str
        ``"root"`` for the document, else the container kind
    delimiter : str, optional
        Delimiter line that closes the container
    closing : list[str]
        Lines emitted when the container closes
    output_start : int
        Number of output lines emitted before the content started

    """

    kind: ContainerKind | str = "root"
    delimiter: Optional[str] = None
    closing: list[str] = field(default_factory=list)
    output_start: int = 0

    def is_closed_by(self, line: Line) -> bool:
        """Return whether ``line`` is this container's closing delimiter."""
        return self.delimiter is not None and line.kind is LineKind.DELIMITER and line.text == self.delimiter


@dataclass
class ListFrame(Frame):
    """One nesting level of a list.

    Parameters
    ----------
    family : str
        ``"unordered"``, ``"ordered"``, ``"description"`` or ``"callout"``
    key : str
        Marker string identifying the level (``"**"``, ``"1."``, ``":::"``)
    marker_prefix : str
        Output prefix of the item markers; ``prefix`` is the content prefix
    style : str
        Block style of the list (``"qanda"`` for question and answer lists)
    counter : int
        Number of the last item

    """

    family: ListFamily | str = "unordered"
    key: str = "*"
    marker_prefix: str = ""
    style: str = ""
    counter: int = 0

    @property
    def numbered(self) -> bool:
        """Return whether items render with numbers."""
        return self.family in ("ordered", "callout") or (self.family == "description" and self.style == "qanda")

    def next_marker(self) -> str:
        """Advance the item counter and return the Markdown marker."""
        self.counter += 1
        return f"{self.counter}." if self.numbered else "*"


@dataclass
class ParagraphFrame(Frame):
    """A paragraph whose lines are buffered until it ends.

    Parameters
    ----------
    first_prefix : str
        Output prefix of the first line (includes a list marker for the
        principal text of a list item)
    lines : list[str]
        Raw source lines
    attrs : AttributeList
        Block attributes of the paragraph
    admonition : str, optional
        Admonition label (``"NOTE"``...) for admonition paragraphs
    in_list : bool
        True when the paragraph belongs to a list item

    """

    first_prefix: str = ""
    lines: list[str] = field(default_factory=list)
    attrs: AttributeList = field(default_factory=AttributeList)
    admonition: Optional[str] = None
    in_list: bool = False

    def is_terminated_by(self, line: Line, after_comment_block: bool = False) -> bool:
        """Return whether ``line`` ends the paragraph instead of continuing it."""
        if after_comment_block or line.kind in PARAGRAPH_BREAKS:
            return True
        return self.in_list and line.kind in LIST_PARAGRAPH_BREAKS


@dataclass
class LiteralFrame(Frame):
    """A literal paragraph made of indented lines."""

    lines: list[str] = field(default_factory=list)
    attrs: AttributeList = field(default_factory=AttributeList)
    in_list: bool = False

    def is_terminated_by(self, line: Line) -> bool:
        """Return whether ``line`` ends the literal paragraph.

        Only indented lines continue it; inside a list, an indented list
        item starts the next item instead.
        """
        if line.kind in (LineKind.BLANK, LineKind.CONTINUATION) or line.indent == 0:
            return True
        return self.in_list and line.kind in (LineKind.LIST_ITEM, LineKind.DESCRIPTION_ITEM)


@dataclass
class VerbatimFrame(Frame):
    """A listing, literal, fenced or passthrough block.

    Parameters
    ----------
    kind : str
        ``"listing"``, ``"literal"``, ``"fenced"`` or ``"pass"``
    delimiter : str
        Line that closes the block
    language : str
        Fence language of the rendered code block
    attrs : AttributeList
        Block attributes
    lines : list[str]
        Raw content lines

    """

    kind: VerbatimKind | str = "listing"
    delimiter: str = "----"
    language: str = ""
    attrs: AttributeList = field(default_factory=AttributeList)
    lines: list[str] = field(default_factory=list)

    def is_closed_by(self, text: str) -> bool:
        """Return whether ``text`` is the closing delimiter."""
        return text == self.delimiter


@dataclass
class TableFrame(Frame):
    """A table block and the cells collected so far."""

    delimiter: str = "|==="
    accumulator: TableAccumulator = field(default_factory=TableAccumulator)
    title: Optional[str] = None
    attrs: AttributeList = field(default_factory=AttributeList)

    def is_closed_by(self, text: str) -> bool:
        """Return whether ``text`` is the closing delimiter."""
        return text == self.delimiter


@dataclass
class QuoteLinesFrame(Frame):
    """Consecutive Markdown-style ``>`` lines."""

    lines: list[str] = field(default_factory=list)


class ContextStack:
    """LIFO stack of block contexts.

    The bottom of the stack is always the document root container, which
    is never popped. :meth:`push` and :meth:`pop` are the only operations
    that change the stack.
    """

    def __init__(self) -> None:
        """Initialize the stack with the document root."""
        self._frames: list[Frame] = [ContainerFrame(prefix="")]

    @property
    def top(self) -> Frame:
        """Return the innermost context."""
        return self._frames[-1]

    def push(self, frame: FrameT) -> FrameT:
        """Enter ``frame`` and return it."""
        logger.debug("Entering %s", type(frame).__name__)
        self._frames.append(frame)
        return frame

    def pop(self) -> Frame:
        """Leave the innermost context and return it."""
        if len(self._frames) == 1:
            raise IndexError("cannot pop the document root")
        frame = self._frames.pop()
        logger.debug("Leaving %s", type(frame).__name__)
        return frame

    def nearest_container(self) -> ContainerFrame:
        """Return the innermost container frame."""
        for frame in reversed(self._frames):
            if isinstance(frame, ContainerFrame):
                return frame
        raise AssertionError("document root missing from context stack")

    def open_lists(self) -> list[ListFrame]:
        """Return the list frames above the innermost container, outermost first."""
        frames: list[ListFrame] = []
        for frame in reversed(self._frames):
            if isinstance(frame, ContainerFrame):
                break
            if isinstance(frame, ListFrame):
                frames.append(frame)
        frames.reverse()
        return frames

    @property
    def at_top_level(self) -> bool:
        """Return whether only the document root is open."""
        return len(self._frames) == 1
