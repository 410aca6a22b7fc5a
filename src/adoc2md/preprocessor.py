#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/preprocessor.py
"""Preprocessor line filter.

The filter sits between the raw source lines and the block converter. It
evaluates conditional directives, drops include directives and comments,
unescapes escaped directives, and collapses runs of blank lines left
behind by skipped regions.

The filter is lazy: each directive is evaluated against the attribute
table as it stands when the directive is reached, so attribute entries
processed earlier in the document govern later conditionals.

Line comments are dropped wherever they occur outside verbatim blocks,
including in the middle of a paragraph, which continues across them. A
block comment ends an open paragraph; the converter learns about it from
the ``after_comment_block`` flag of the next line.
"""

from __future__ import annotations

import logging
import re
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from adoc2md.attributes import AttributeTable

logger = logging.getLogger(__name__)

CONDITIONAL_RX = re.compile(r"^(\\)?(ifdef|ifndef|endif)::([^\[\]]*)\[(.*)\]$")
INCLUDE_RX = re.compile(r"^(\\)?include::([^\[]*)\[.*\]$")
BLOCK_COMMENT_RX = re.compile(r"^/{4,}$")
LINE_COMMENT_RX = re.compile(r"^//(?:[^/]|$)")


@dataclass(frozen=True)
class SourceLine:
    """A line that survived preprocessing.

    Parameters
    ----------
    text : str
        Line content without the line terminator
    line_num : int
        One-based line number in the source
    after_comment_block : bool
        True when a block comment was skipped directly before this line

    """

    text: str
    line_num: int
    after_comment_block: bool = False


@dataclass
class _Condition:
    kind: str
    target: str
    active: bool


def evaluate_condition(kind: str, target: str, attributes: AttributeTable) -> bool:
    """Evaluate an ``ifdef``/``ifndef`` target against the attribute table.

    A target of ``a,b`` tests whether any of the names is set, ``a+b``
    whether all of them are.

    Parameters
    ----------
    kind : str
        ``"ifdef"`` or ``"ifndef"``
    target : str
        Attribute name or names
    attributes : AttributeTable
        Current attribute table

    Returns
    -------
    bool
        True if the guarded content should be included

    """
    if "," in target:
        names = [name.strip() for name in target.split(",")]
        if kind == "ifdef":
            return any(name in attributes for name in names)
        return not any(name in attributes for name in names)
    if "+" in target:
        names = [name.strip() for name in target.split("+")]
        if kind == "ifdef":
            return all(name in attributes for name in names)
        return not all(name in attributes for name in names)
    if kind == "ifdef":
        return target.strip() in attributes
    return target.strip() not in attributes


class ConditionalFilter:
    """Lazily filter source lines through the preprocessor rules.

    Parameters
    ----------
    lines : Iterable[str]
        Raw source lines
    attributes : AttributeTable
        Attribute table consulted when a conditional is reached

    Attributes
    ----------
    verbatim : bool
        Set by the converter while it is inside a verbatim or passthrough
        block; comments are not recognized there and blank lines are kept

    """

    def __init__(self, lines: Iterable[str], attributes: AttributeTable):
        """Initialize the filter over ``lines``."""
        self._source = iter(lines)
        self._attributes = attributes
        self._conditions: list[_Condition] = []
        self._pushed_back: deque[SourceLine] = deque()
        self._line_num = 0
        self._last_blank = False
        self.verbatim = False

    def __iter__(self) -> Iterator[SourceLine]:
        return self

    def __next__(self) -> SourceLine:
        if self._pushed_back:
            return self._pushed_back.popleft()
        line = self._next_line()
        if line is None:
            raise StopIteration
        return line

    def push_back(self, line: SourceLine) -> None:
        """Return a line to the front of the stream."""
        self._pushed_back.appendleft(line)

    def _read(self) -> Optional[str]:
        try:
            text = next(self._source)
        except StopIteration:
            return None
        self._line_num += 1
        return text

    def _next_line(self) -> Optional[SourceLine]:
        after_comment_block = False
        while True:
            text = self._read()
            if text is None:
                return None

            if not text.strip():
                if self._last_blank and not self.verbatim:
                    continue
                self._last_blank = True
                return SourceLine("", self._line_num, after_comment_block)

            directive = self._process_directive(text)
            if directive is None:
                continue
            text = directive

            if not self.verbatim:
                if BLOCK_COMMENT_RX.match(text):
                    self._skip_comment_block(text)
                    after_comment_block = True
                    continue
                if LINE_COMMENT_RX.match(text):
                    continue

            self._last_blank = not text.strip()
            return SourceLine(text, self._line_num, after_comment_block)

    def _process_directive(self, text: str) -> Optional[str]:
        """Handle preprocessor directives in ``text``.

        Returns the line to pass on (possibly rewritten), or None if the
        line was consumed.
        """
        if not text.startswith(("if", "endif", "include", "\\")):
            return text

        include = INCLUDE_RX.match(text)
        if include:
            if include.group(1):
                return text[1:]
            logger.debug("Dropping include directive at line %d: %s", self._line_num, include.group(2))
            return None

        match = CONDITIONAL_RX.match(text)
        if not match:
            return text

        escaped, kind, target, body = match.groups()
        if escaped:
            return text[1:]

        if kind == "endif":
            if not self._conditions:
                return text
            self._conditions.pop()
            return None

        if body:
            if evaluate_condition(kind, target, self._attributes):
                return self._process_directive(body)
            return None

        active = evaluate_condition(kind, target, self._attributes)
        self._conditions.append(_Condition(kind, target, active))
        if not active:
            self._skip_false_region()
        return None

    def _skip_false_region(self) -> None:
        """Drop lines until the endif matching the condition just pushed."""
        condition = self._conditions[-1]
        logger.debug("Skipping content of %s::%s[] (line %d)", condition.kind, condition.target, self._line_num)
        depth = 1
        while depth:
            text = self._read()
            if text is None:
                break
            match = CONDITIONAL_RX.match(text)
            if not match or match.group(1):
                continue
            _, kind, _, body = match.groups()
            if kind == "endif":
                depth -= 1
            elif not body:
                depth += 1
        self._conditions.pop()

    def _skip_comment_block(self, delimiter: str) -> None:
        """Drop lines up to and including the matching comment delimiter."""
        while True:
            text = self._read()
            if text is None or text == delimiter:
                return
