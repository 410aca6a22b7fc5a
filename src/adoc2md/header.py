#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/header.py
"""Document header processing.

The header is everything up to the first blank line after the document
title: the title itself, attribute entries, and the implicit author and
revision lines. Attribute entries that precede the title (or the first
content line, when there is no title) are part of the header as well.
"""

from __future__ import annotations

import logging
import re

from adoc2md.attrlist import AttributeList, parse_attrlist
from adoc2md.constants import DOCTITLE_ATTRIBUTE
from adoc2md.context import ConversionContext
from adoc2md.lines import LineKind, classify_line
from adoc2md.preprocessor import ConditionalFilter, SourceLine

logger = logging.getLogger(__name__)

AUTHOR_RX = re.compile(r"^(.+?)(?:\s+<([^<>\s]+)>)?$")
REVISION_RX = re.compile(r"^(?:[vV](\d[^,:\s]*),?\s*)?(\d{4}-\d{2}-\d{2})?(?::\s*(.+))?$")
# A revision line starts with a version or a date; anything else is body text
REVISION_SHAPE_RX = re.compile(r"^[vV]?\d")


class HeaderProcessor:
    """Consume the document header from a line stream.

    Parameters
    ----------
    context : ConversionContext
        State of the running conversion

    """

    def __init__(self, context: ConversionContext):
        """Initialize the processor."""
        self.context = context

    def process(self, lines: ConditionalFilter) -> list[str]:
        """Consume the header and return its rendered output.

        Lines that turn out to belong to the body are pushed back onto
        ``lines``.

        Parameters
        ----------
        lines : ConditionalFilter
            Preprocessed source lines

        Returns
        -------
        list[str]
            ``["# Title"]`` when the document has a title, else empty

        """
        attributes = self.context.attributes
        pending: list[SourceLine] = []
        block_attrs = AttributeList()

        for source in lines:
            line = classify_line(source.text, source.line_num)
            if line.kind is LineKind.BLANK:
                if pending:
                    pending.append(source)
                    break
                continue
            if line.kind is LineKind.ATTRIBUTE_ENTRY:
                if pending:
                    pending.append(source)
                    break
                attributes.apply_entry(line["name"], line["value"], line["unset"])
                continue
            if line.kind is LineKind.BLOCK_ATTRIBUTES:
                pending.append(source)
                block_attrs.merge(parse_attrlist(line["content"]))
                continue
            if line.kind is LineKind.BLOCK_ANCHOR:
                pending.append(source)
                block_attrs.id = line["id"]
                if line["reftext"]:
                    block_attrs.reftext = line["reftext"]
                continue
            if line.kind is LineKind.SECTION_TITLE and line["level"] == 0 and block_attrs.style != "discrete":
                return self._process_title(line["title"], block_attrs, lines)
            pending.append(source)
            break

        for source in reversed(pending):
            lines.push_back(source)
        return []

    def _process_title(self, raw_title: str, block_attrs: AttributeList, lines: ConditionalFilter) -> list[str]:
        attributes = self.context.attributes
        header_lines = 0
        for source in lines:
            if not source.text.strip():
                lines.push_back(source)
                break
            line = classify_line(source.text, source.line_num)
            if line.kind is LineKind.ATTRIBUTE_ENTRY:
                attributes.apply_entry(line["name"], line["value"], line["unset"])
                continue
            header_lines += 1
            if header_lines == 1:
                self._apply_author_line(source.text.strip())
            elif header_lines == 2:
                if not REVISION_SHAPE_RX.match(source.text.strip()):
                    logger.debug("Header ends before line %d: %s", source.line_num, source.text)
                    lines.push_back(source)
                    lines.push_back(SourceLine("", source.line_num))
                    break
                self._apply_revision_line(source.text.strip())
            else:
                logger.debug("Ignoring header line %d: %s", source.line_num, source.text)

        title = self.context.substitute(raw_title)
        attributes.define(DOCTITLE_ATTRIBUTE, title)
        slug = self.context.register_doctitle(title, block_attrs.id, block_attrs.reftext)
        logger.debug("Document title '%s' (anchor #%s)", title, slug)
        return [f"# {title}"]

    def _apply_author_line(self, text: str) -> None:
        """Set the author attributes from an author line.

        Authors are separated by semicolons; each has an optional email in
        angle brackets. The ``author``, ``email``, ``firstname``,
        ``lastname`` and ``authorinitials`` attributes describe the first
        author, ``authors`` lists all of them, and ``author_N`` /
        ``email_N`` describe each additional author.
        """
        attributes = self.context.attributes
        names = []
        for index, entry in enumerate(part.strip() for part in text.split(";")):
            match = AUTHOR_RX.match(entry)
            if not match:
                continue
            name, email = match.group(1).strip(), match.group(2)
            names.append(name)
            if index == 0:
                words = name.split()
                attributes.define("author", name)
                attributes.define("firstname", words[0])
                if len(words) > 1:
                    attributes.define("lastname", words[-1])
                attributes.define("authorinitials", "".join(word[0] for word in words))
                if email:
                    attributes.define("email", email)
            else:
                attributes.define(f"author_{index + 1}", name)
                if email:
                    attributes.define(f"email_{index + 1}", email)
        if names:
            attributes.define("authors", ", ".join(names))

    def _apply_revision_line(self, text: str) -> None:
        match = REVISION_RX.match(text)
        if not match or not any(match.groups()):
            logger.debug("Line '%s' is not a revision line", text)
            return
        number, date, remark = match.groups()
        for name, value in (("revnumber", number), ("revdate", date), ("revremark", remark)):
            if value:
                self.context.attributes.define(name, value)

