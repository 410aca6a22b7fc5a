#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/converter.py
"""Block conversion state machine.

The :class:`DocumentConverter` reads preprocessed lines one at a time,
classifies each, and decides from the innermost block context whether the
line continues that context, closes it, or starts something new. Output is
produced in a single forward pass; cross references are left as
placeholders for :mod:`adoc2md.xrefs` to resolve once every anchor is
known.

Leaf contexts (paragraphs, literal paragraphs, verbatim blocks, tables and
Markdown quote lines) buffer their lines and render when they end, so that
options that affect the whole block (unwrapping, hard breaks, common indent
removal, table headers) can be applied.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from adoc2md.attrlist import AttributeList, parse_attrlist
from adoc2md.blocks import (
    ContainerFrame,
    ContextStack,
    ListFrame,
    LiteralFrame,
    ParagraphFrame,
    QuoteLinesFrame,
    TableFrame,
    VerbatimFrame,
)
from adoc2md.constants import (
    ADMONITION_ICONS,
    CIRCLED_NUMBER_BASE,
    DEFAULT_COLLAPSIBLE_SUMMARY,
    LITERAL_PARAGRAPH_INDENT,
    MAX_CIRCLED_NUMBER,
    ORDERED_LIST_INDENT,
    UNORDERED_LIST_INDENT,
)
from adoc2md.context import ConversionContext
from adoc2md.header import HeaderProcessor
from adoc2md.lines import Line, LineKind, classify_line
from adoc2md.preprocessor import ConditionalFilter, SourceLine
from adoc2md.substitutions import render_image
from adoc2md.tables import TableAccumulator

logger = logging.getLogger(__name__)

# A run of callout markers at the end of a verbatim line
CONUM_RUN_RX = re.compile(r"(?:^|(?<=\s))<(?:\d+|\.)>(?:\s+<(?:\d+|\.)>)*[ \t]*$")
CONUM_RX = re.compile(r"<(\d+|\.)>")

VERBATIM_BLOCKS = frozenset({"listing", "literal", "fenced", "pass"})
UNWRAP_ATTRIBUTE = "markdown-unwrap-prose"
HARDBREAKS_ATTRIBUTE = "hardbreaks-option"
COLLAPSIBLE_VARIANT_ATTRIBUTE = "markdown-collapsible-variant"
SOURCE_LANGUAGE_ATTRIBUTE = "source-language"


def dedent_lines(lines: list[str]) -> list[str]:
    """Remove the whitespace common to all non-blank lines.

    Examples
    --------
        >>> dedent_lines(["  a", "    b", ""])
        ['a', '  b', '']

    """
    indents = [len(line) - len(line.lstrip()) for line in lines if line.strip()]
    if not indents:
        return list(lines)
    width = min(indents)
    return [line[width:] for line in lines]


def replace_callouts(lines: list[str]) -> list[str]:
    """Replace trailing callout markers with circled numbers.

    ``<.>`` takes the number after the previous callout in the block;
    ``<N>`` sets the number explicitly.

    Examples
    --------
        >>> replace_callouts(["a() <.> <.>", "b() <.> <4>"])
        ['a() ① ②', 'b() ③ ④']

    """
    counter = 0

    def circled(match: re.Match[str]) -> str:
        nonlocal counter
        value = match.group(1)
        counter = counter + 1 if value == "." else int(value)
        if 1 <= counter <= MAX_CIRCLED_NUMBER:
            return chr(CIRCLED_NUMBER_BASE + counter - 1)
        return match.group(0)

    result = []
    for line in lines:
        run = CONUM_RUN_RX.search(line)
        if run:
            line = line[: run.start()] + CONUM_RX.sub(circled, run.group(0))
        result.append(line)
    return result


def substitutes_attributes(attrs: AttributeList) -> bool:
    """Return whether the ``subs`` attribute opts into attribute references."""
    subs = attrs.get("subs")
    if not subs:
        return False
    return any(token.strip().strip("+") in ("attributes", "normal") for token in subs.split(","))


def is_bold_span(text: str) -> bool:
    """Return whether ``text`` is a single bold span."""
    return len(text) > 4 and text.startswith("**") and text.endswith("**") and "**" not in text[2:-2]


class DocumentConverter:
    """Convert the body of one document.

    Parameters
    ----------
    context : ConversionContext
        State of the running conversion

    """

    def __init__(self, context: ConversionContext):
        """Initialize an empty converter."""
        self.context = context
        self.attributes = context.attributes
        self.stack = ContextStack()
        self.output: list[str] = []
        self._lines: Optional[ConditionalFilter] = None
        self._block_attrs = AttributeList()
        self._block_title: Optional[str] = None
        # The last output line is a blank line produced by the document structure
        self._blank_emitted = False
        # The previous source line was blank
        self._after_blank = False
        # A blank line inside a list, held back until it is known whether the list continues
        self._list_blank = False
        # A list continuation (+) attaches the next block to the current item
        self._attached = False
        # Output index of a description list term that has no description yet
        self._pending_term: Optional[int] = None

    def convert(self, lines: ConditionalFilter) -> list[str]:
        """Convert the document read from ``lines``.

        Parameters
        ----------
        lines : ConditionalFilter
            Preprocessed source lines

        Returns
        -------
        list[str]
            Output lines, with cross reference placeholders

        """
        self._lines = lines
        self.output.extend(HeaderProcessor(self.context).process(lines))
        for source in lines:
            self._process_line(source)
        self._close_all()
        return self.output

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _process_line(self, source: SourceLine) -> None:
        top = self.stack.top

        if isinstance(top, VerbatimFrame):
            if top.is_closed_by(source.text):
                self._close_verbatim()
            else:
                top.lines.append(source.text)
            return

        if isinstance(top, TableFrame):
            if top.is_closed_by(source.text):
                self._close_table()
            else:
                top.accumulator.add_line(source.text)
            return

        line = classify_line(source.text, source.line_num)

        if isinstance(top, ParagraphFrame):
            if not top.is_terminated_by(line, source.after_comment_block):
                top.lines.append(line.text)
                return
            self._close_paragraph()
        elif isinstance(top, LiteralFrame):
            if not top.is_terminated_by(line):
                top.lines.append(line.text)
                return
            self._close_literal()
            if top.in_list and line.kind in (LineKind.BLOCK_ATTRIBUTES, LineKind.BLOCK_ANCHOR):
                self._end_lists()
        elif isinstance(top, QuoteLinesFrame):
            if line.kind is LineKind.MARKDOWN_QUOTE:
                top.lines.append(line["content"])
                return
            self._close_quote_lines()

        self._process_block_line(line)

    def _process_block_line(self, line: Line) -> None:
        """Handle a line that starts a block or changes the block structure."""
        kind = line.kind
        pending_term, self._pending_term = self._pending_term, None
        top = self.stack.top

        if kind is LineKind.BLANK:
            self._after_blank = True
            self._drop_block_metadata(line)
            if isinstance(top, ListFrame):
                self._list_blank = True
            else:
                self._blank()
            return
        after_blank, self._after_blank = self._after_blank, False

        if isinstance(top, ListFrame):
            if kind in (LineKind.LIST_ITEM, LineKind.DESCRIPTION_ITEM):
                self._list_blank = False
                self._attached = False
                attrs, title = self._take_block_metadata()
                self._list_item(line, attrs, title)
                return
            if kind is LineKind.CONTINUATION:
                self._list_blank = False
                self._blank(top.prefix)
                self._attached = True
                return
            if not self._attached:
                if after_blank:
                    if kind is LineKind.INDENTED:
                        self._list_blank = False
                        self._blank(top.prefix)
                        attrs, title = self._take_block_metadata()
                        self._start_literal(line, attrs, title)
                        return
                    self._end_lists()
                elif kind is LineKind.DELIMITER:
                    self._end_lists()
                elif kind not in (LineKind.BLOCK_ATTRIBUTES, LineKind.BLOCK_ANCHOR, LineKind.BLOCK_TITLE):
                    self._continue_list_text(top, line, pending_term)
                    return

        self._process_block_start(line)

    def _process_block_start(self, line: Line) -> None:
        kind = line.kind

        if kind is LineKind.BLOCK_ATTRIBUTES:
            self._block_attrs.merge(parse_attrlist(line["content"]))
            return
        if kind is LineKind.BLOCK_ANCHOR:
            self._block_attrs.id = line["id"]
            if line["reftext"]:
                self._block_attrs.reftext = line["reftext"]
            return
        if kind is LineKind.BLOCK_TITLE:
            self._block_title = line["title"]
            return
        if kind is LineKind.ATTRIBUTE_ENTRY:
            self.attributes.apply_entry(line["name"], line["value"], line["unset"])
            return

        attrs, title = self._take_block_metadata()
        prefix = self.stack.top.prefix

        if kind in (LineKind.LIST_ITEM, LineKind.DESCRIPTION_ITEM):
            self._attached = False
            self._list_item(line, attrs, title)
            return

        if kind is LineKind.DELIMITER:
            self._delimiter(line, attrs, title)
            return

        self._attached = False
        if kind is LineKind.SECTION_TITLE and (attrs.style == "discrete" or self.stack.at_top_level):
            self._section(line, attrs)
        elif kind is LineKind.THEMATIC_BREAK:
            self._emit("---", prefix)
        elif kind in (LineKind.PAGE_BREAK, LineKind.TOC_MACRO):
            logger.debug("Dropping line %d: %s", line.line_num, line.text)
        elif kind is LineKind.BLOCK_IMAGE:
            self._block_image(line, attrs, title)
        elif kind is LineKind.ADMONITION:
            self._start_paragraph([line["content"]], attrs, title, admonition=line["label"])
        elif kind is LineKind.MARKDOWN_QUOTE:
            self.stack.push(QuoteLinesFrame(prefix=prefix, lines=[line["content"]]))
        elif kind is LineKind.INDENTED:
            self._start_literal(line, attrs, title)
        else:
            self._start_paragraph([line.text], attrs, title)

    def _take_block_metadata(self) -> tuple[AttributeList, Optional[str]]:
        """Return and reset the pending block attributes and title."""
        attrs, title = self._block_attrs, self._block_title
        self._block_attrs = AttributeList()
        self._block_title = None
        return attrs, title

    def _drop_block_metadata(self, line: Line) -> None:
        """Discard block attributes and a title separated from their block by a blank line."""
        attrs, title = self._take_block_metadata()
        if title is not None or attrs != AttributeList():
            logger.debug("Dropping block metadata before blank line %d", line.line_num)

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _emit(self, text: str, prefix: str = "") -> None:
        self.output.append(prefix + text if text else prefix.rstrip())
        self._blank_emitted = False

    def _blank(self, prefix: Optional[str] = None) -> None:
        """Emit a structural blank line; consecutive ones collapse."""
        if self._blank_emitted:
            return
        if prefix is None:
            prefix = self.stack.top.prefix
        self.output.append(prefix.rstrip())
        self._blank_emitted = True

    def _emit_title(self, title: str, attrs: AttributeList, prefix: str) -> None:
        rendered = self.context.substitute(title)
        anchor = ""
        if attrs.id:
            self.context.registry.register(attrs.id, attrs.id, attrs.reftext or rendered)
            anchor = f'<a name="{attrs.id}"></a>'
        self._emit(anchor + (rendered if is_bold_span(rendered) else f"**{rendered}**"), prefix)
        self._blank(prefix)

    # ------------------------------------------------------------------
    # Sections, images
    # ------------------------------------------------------------------

    def _section(self, line: Line, attrs: AttributeList) -> None:
        raw_title = line["title"]
        rendered = self.context.substitute(raw_title)
        slug = self.context.register_section(raw_title, rendered, attrs.id, attrs.reftext)
        logger.debug("Section '%s' (anchor #%s)", rendered, slug)
        self._emit(f"{'#' * (line['level'] + 1)} {rendered}", self.stack.top.prefix)

    def _block_image(self, line: Line, attrs: AttributeList, title: Optional[str]) -> None:
        prefix = self.stack.top.prefix
        if title:
            self._emit_title(title, attrs, prefix)
        target = self.attributes.resolve_references(line["target"])
        self._emit(render_image(target, line["attrlist"], self.attributes), prefix)

    # ------------------------------------------------------------------
    # Paragraphs
    # ------------------------------------------------------------------

    def _start_paragraph(
        self, lines: list[str], attrs: AttributeList, title: Optional[str], admonition: Optional[str] = None
    ) -> None:
        top = self.stack.top
        if title:
            self._emit_title(title, attrs, top.prefix)
            attrs.id = None
        if admonition is None and attrs.style in ADMONITION_ICONS:
            admonition = attrs.style
        self.stack.push(
            ParagraphFrame(
                prefix=top.prefix,
                first_prefix=top.prefix,
                lines=lines,
                attrs=attrs,
                admonition=admonition,
                in_list=isinstance(top, ListFrame),
            )
        )

    def _close_paragraph(self) -> None:
        frame = self.stack.pop()
        assert isinstance(frame, ParagraphFrame)
        attrs = frame.attrs

        if attrs.style in ("source", "listing"):
            self._emit_code_block(frame.lines, self._source_language(attrs), frame.prefix)
            return
        if attrs.style == "literal":
            for text in dedent_lines(frame.lines):
                self._emit(LITERAL_PARAGRAPH_INDENT + text, frame.prefix)
            return

        texts = self._render_paragraph_lines(frame)
        anchor = ""
        if attrs.id:
            self.context.registry.register(attrs.id, attrs.id, attrs.reftext or attrs.id)
            anchor = f'<a name="{attrs.id}"></a>'

        if frame.admonition:
            label = f"**{ADMONITION_ICONS[frame.admonition]} {frame.admonition}**"
            if not any(texts):
                self._emit(anchor + label, frame.first_prefix)
                return
            self._emit(anchor + label + self.attributes.line_break(), frame.first_prefix)
            prefixes = [frame.prefix] * len(texts)
        else:
            texts[0] = anchor + texts[0]
            prefixes = [frame.first_prefix] + [frame.prefix] * (len(texts) - 1)

        for prefix, text in zip(prefixes, texts):
            self._emit(text, prefix)

    def _render_paragraph_lines(self, frame: ParagraphFrame) -> list[str]:
        """Substitute the paragraph lines and apply hard breaks and unwrapping."""
        mark = self.attributes.line_break()
        hardbreaks = frame.attrs.has_option("hardbreaks") or HARDBREAKS_ATTRIBUTE in self.attributes
        last = len(frame.lines) - 1
        texts: list[str] = []
        breaks: list[bool] = []
        for index, raw in enumerate(frame.lines):
            hard = raw.endswith(" +")
            if hard:
                raw = raw[:-2]
            text = self.context.substitute(raw)
            hard = hard or (hardbreaks and index < last)
            texts.append(text + mark if hard else text)
            breaks.append(hard)

        if UNWRAP_ATTRIBUTE not in self.attributes:
            return texts
        joined = [texts[0]]
        for index in range(1, len(texts)):
            if breaks[index - 1] or not joined[-1]:
                joined.append(texts[index])
            elif texts[index].strip():
                joined[-1] = f"{joined[-1]} {texts[index].lstrip()}"
        return joined

    def _close_quote_lines(self) -> None:
        frame = self.stack.pop()
        assert isinstance(frame, QuoteLinesFrame)
        texts = [self.context.substitute(content) for content in frame.lines]
        if UNWRAP_ATTRIBUTE in self.attributes:
            joined: list[str] = []
            for text in texts:
                if text and joined and joined[-1]:
                    joined[-1] = f"{joined[-1]} {text}"
                else:
                    joined.append(text)
            texts = joined
        for text in texts:
            self._emit(f"> {text}" if text else ">", frame.prefix)

    # ------------------------------------------------------------------
    # Literal paragraphs and verbatim blocks
    # ------------------------------------------------------------------

    def _start_literal(self, line: Line, attrs: AttributeList, title: Optional[str]) -> None:
        top = self.stack.top
        if title:
            self._emit_title(title, attrs, top.prefix)
        self.stack.push(
            LiteralFrame(prefix=top.prefix, lines=[line.text], attrs=attrs, in_list=isinstance(top, ListFrame))
        )

    def _close_literal(self) -> None:
        frame = self.stack.pop()
        assert isinstance(frame, LiteralFrame)
        lines = dedent_lines(frame.lines)
        if substitutes_attributes(frame.attrs):
            lines = [self.context.substitutor.apply_attributes(text) for text in lines]
        if lines[0].startswith("$ "):
            self._emit_code_block(lines, "console", frame.prefix)
            return
        for text in lines:
            self._emit(LITERAL_PARAGRAPH_INDENT + text, frame.prefix)

    def _emit_code_block(self, lines: list[str], language: str, prefix: str) -> None:
        self._emit(f"```{language}", prefix)
        for text in lines:
            self._emit(text, prefix)
        self._emit("```", prefix)

    def _source_language(self, attrs: AttributeList) -> str:
        return attrs.positional_at(1) or self.attributes.get(SOURCE_LANGUAGE_ATTRIBUTE, "")

    def _verbatim_language(self, line: Line, attrs: AttributeList) -> str:
        block, style = line["block"], attrs.style
        if block == "fenced":
            return line["language"] or attrs.positional_at(1)
        if block == "listing":
            if style in ("", "source"):
                return self._source_language(attrs)
            return "" if style in ("listing", "literal") else style
        if style == "source":
            return self._source_language(attrs)
        return "" if style in ("", "literal", "listing") else style

    def _open_verbatim(self, line: Line, attrs: AttributeList, title: Optional[str]) -> None:
        prefix = self.stack.top.prefix
        if line["block"] == "pass":
            if title:
                logger.debug("Dropping title of passthrough block at line %d", line.line_num)
            language = "math" if attrs.style == "stem" else ""
        else:
            language = self._verbatim_language(line, attrs)
            if title:
                self._emit_title(title, attrs, prefix)
        self.stack.push(
            VerbatimFrame(
                prefix=prefix, kind=line["block"], delimiter=line["delimiter"], language=language, attrs=attrs
            )
        )
        if self._lines is not None:
            self._lines.verbatim = True

    def _close_verbatim(self) -> None:
        frame = self.stack.pop()
        assert isinstance(frame, VerbatimFrame)
        if self._lines is not None:
            self._lines.verbatim = False

        lines = frame.lines
        if frame.kind == "pass":
            if frame.language:
                self._emit_code_block(lines, frame.language, frame.prefix)
            else:
                for text in lines:
                    self._emit(text, frame.prefix)
            return

        indent = frame.attrs.get("indent")
        if indent is not None and indent.isdecimal():
            lines = [" " * int(indent) + text if text.strip() else text for text in dedent_lines(lines)]
        lines = replace_callouts(lines)
        if substitutes_attributes(frame.attrs):
            lines = [self.context.substitutor.apply_attributes(text) for text in lines]
        self._emit_code_block(lines, frame.language, frame.prefix)

    # ------------------------------------------------------------------
    # Tables
    # ------------------------------------------------------------------

    def _open_table(self, line: Line, attrs: AttributeList, title: Optional[str]) -> None:
        self.stack.push(
            TableFrame(
                prefix=self.stack.top.prefix,
                delimiter=line.text,
                accumulator=TableAccumulator.from_attributes(attrs),
                title=title,
                attrs=attrs,
            )
        )

    def _close_table(self) -> None:
        frame = self.stack.pop()
        assert isinstance(frame, TableFrame)
        rows = frame.accumulator.render(self.context.substitute)
        if not rows:
            logger.debug("Dropping empty table")
            return
        if frame.title:
            self._emit_title(frame.title, frame.attrs, frame.prefix)
        for row in rows:
            self._emit(row, frame.prefix)

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _delimiter(self, line: Line, attrs: AttributeList, title: Optional[str]) -> None:
        if self.stack.nearest_container().is_closed_by(line):
            self._attached = False
            if title or not attrs.is_empty():
                logger.debug("Dropping block metadata before closing delimiter at line %d", line.line_num)
            self._end_lists()
            self._close_container()
            return

        self._attached = False
        block = line["block"]
        if block in VERBATIM_BLOCKS:
            self._open_verbatim(line, attrs, title)
        elif block == "table":
            self._open_table(line, attrs, title)
        else:
            self._open_container(line, attrs, title)

    def _open_container(self, line: Line, attrs: AttributeList, title: Optional[str]) -> None:
        block, style = line["block"], attrs.style
        prefix = self.stack.top.prefix
        closing: list[str] = []

        if block == "quote" or (block == "open" and style == "quote"):
            if title:
                self._emit_title(title, attrs, prefix)
            inner = prefix + "> "
            attribution = attrs.positional_at(1)
            if attribution:
                citation = attrs.positional_at(2)
                credit = self.context.substitute(attribution)
                if citation:
                    credit = f"{credit}, {self.context.substitute(citation)}"
                closing = [inner.rstrip(), f"{inner}— {credit}"]
            self._push_container(inner, "quote", line.text, closing)
            return

        if style in ADMONITION_ICONS and block in ("example", "open"):
            heading = f"{ADMONITION_ICONS[style]} {style}"
            anchor = ""
            if title:
                rendered = self.context.substitute(title)
                heading = f"{heading}: {rendered}"
                if attrs.id:
                    self.context.registry.register(attrs.id, attrs.id, attrs.reftext or rendered)
                    anchor = f'<a name="{attrs.id}"></a>'
            self._emit(f"<dl><dt><strong>{anchor}{heading}</strong></dt><dd>", prefix)
            self._blank(prefix)
            self._push_container(prefix, "admonition", line.text, [f"{prefix}</dd></dl>"])
            return

        if block == "example" and attrs.has_option("collapsible"):
            summary = self.context.substitute(title) if title else ""
            if self.attributes.get(COLLAPSIBLE_VARIANT_ATTRIBUTE) == "spoiler":
                self._emit(f"```spoiler {summary}" if summary else "```spoiler", prefix)
                closing = [f"{prefix}```"]
            else:
                self._emit("<details open>" if attrs.has_option("open") else "<details>", prefix)
                self._emit(f"<summary>{summary or DEFAULT_COLLAPSIBLE_SUMMARY}</summary>", prefix)
                self._blank(prefix)
                closing = [f"{prefix}</details>"]
            self._push_container(prefix, "collapsible", line.text, closing)
            return

        if title:
            self._emit_title(title, attrs, prefix)
        self._push_container(prefix, block, line.text, closing)

    def _push_container(self, prefix: str, kind: str, delimiter: str, closing: list[str]) -> None:
        self.stack.push(
            ContainerFrame(
                prefix=prefix, kind=kind, delimiter=delimiter, closing=closing, output_start=len(self.output)
            )
        )

    def _close_container(self) -> None:
        frame = self.stack.pop()
        assert isinstance(frame, ContainerFrame)
        if self._blank_emitted and len(self.output) > frame.output_start:
            self.output.pop()
            self._blank_emitted = False
        for text in frame.closing:
            self.output.append(text)
            self._blank_emitted = False

    # ------------------------------------------------------------------
    # Lists
    # ------------------------------------------------------------------

    def _list_step(self, family: str, style: str) -> int:
        indent = self.attributes.list_indent()
        if indent is not None:
            return indent
        if family in ("ordered", "callout") or style == "qanda":
            return ORDERED_LIST_INDENT
        return UNORDERED_LIST_INDENT

    def _list_item(self, line: Line, attrs: AttributeList, title: Optional[str]) -> None:
        """Start a list item, popping back to its level or opening a new one."""
        key = line["key"]
        for frame in self.stack.open_lists():
            if frame.key == key:
                while self.stack.top is not frame:
                    self.stack.pop()
                if title:
                    logger.debug("Dropping block title inside list at line %d", line.line_num)
                break
        else:
            marker_prefix = self.stack.top.prefix
            if title:
                self._emit_title(title, attrs, marker_prefix)
            style = attrs.style
            frame = ListFrame(
                prefix=marker_prefix + " " * self._list_step(line["family"], style),
                family=line["family"],
                key=key,
                marker_prefix=marker_prefix,
                style=style,
            )
            start = attrs.get("start")
            if start and start.isdecimal():
                frame.counter = int(start) - 1
            self.stack.push(frame)

        marker = frame.next_marker()
        if line.kind is LineKind.LIST_ITEM:
            self.stack.push(
                ParagraphFrame(
                    prefix=frame.marker_prefix,
                    first_prefix=f"{frame.marker_prefix}{marker} ",
                    lines=[line["content"]],
                    in_list=True,
                )
            )
            return

        term = self.context.substitute(line["term"])
        self._emit(f"{marker} _{term}_" if frame.style == "qanda" else f"{marker} **{term}**", frame.marker_prefix)
        description = line["content"]
        if description and self.attributes.resolve_references(description).strip():
            self.output[-1] += self.attributes.line_break()
            self.stack.push(
                ParagraphFrame(
                    prefix=frame.marker_prefix, first_prefix=frame.marker_prefix, lines=[description], in_list=True
                )
            )
        else:
            self._pending_term = len(self.output) - 1

    def _continue_list_text(self, frame: ListFrame, line: Line, pending_term: Optional[int]) -> None:
        """Treat a line directly below a list item as text of that item."""
        text = line.text
        if pending_term is not None:
            self.output[pending_term] += self.attributes.line_break()
            text = text.lstrip()
        self.stack.push(
            ParagraphFrame(prefix=frame.marker_prefix, first_prefix=frame.marker_prefix, lines=[text], in_list=True)
        )

    def _end_lists(self) -> None:
        """Close every list of the current container."""
        if not self.stack.open_lists():
            return
        while isinstance(self.stack.top, ListFrame):
            self.stack.pop()
        if self._list_blank:
            blank = self.stack.top.prefix.rstrip()
            if not self.output or self.output[-1] != blank:
                self.output.append(blank)
            self._blank_emitted = True
        self._list_blank = False
        self._attached = False
        self._pending_term = None

    # ------------------------------------------------------------------
    # End of input
    # ------------------------------------------------------------------

    def _close_all(self) -> None:
        while True:
            top = self.stack.top
            if isinstance(top, ParagraphFrame):
                self._close_paragraph()
            elif isinstance(top, LiteralFrame):
                self._close_literal()
            elif isinstance(top, QuoteLinesFrame):
                self._close_quote_lines()
            elif isinstance(top, VerbatimFrame):
                logger.debug("Closing unterminated %s block at end of input", top.kind)
                self._close_verbatim()
            elif isinstance(top, TableFrame):
                logger.debug("Closing unterminated table at end of input")
                self._close_table()
            elif isinstance(top, ListFrame):
                self.stack.pop()
            elif isinstance(top, ContainerFrame) and top.kind != "root":
                logger.debug("Closing unterminated %s block at end of input", top.kind)
                self._close_container()
            else:
                break
        if self._block_title is not None:
            logger.debug("Dropping dangling block title '%s'", self._block_title)
