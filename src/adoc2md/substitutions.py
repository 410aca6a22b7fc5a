#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/substitutions.py
"""Inline substitution pipeline.

The :class:`Substitutor` turns the inline markup of a line (formatting,
attribute references, quotes, macros and cross references) into Markdown.
Substitutions run in a fixed order:

1. Literal monospace (```+text+```), left untouched by everything else
2. Inline math (``stem:[...]``)
3. Inline anchors (``[[id]]``)
4. Cross references (``<<id>>``, ``xref:target[]``), replaced by placeholders
5. Smart quotes
6. Monospace (attribute references and select escapes only)
7. Escaped URLs, macros and formatting marks
8. Mark, bold and italic spans
9. Attribute references
10. Apostrophes and ``<`` escaping
11. Image, URL and link macros

Text that a later step must not touch is swapped for a protection token
while the pipeline runs and restored at the end. Formatting runs before
attribute references, so markup inside an attribute value stays literal.
"""

from __future__ import annotations

import logging
import posixpath
import re
from typing import Callable, Optional

from adoc2md.attributes import AttributeTable
from adoc2md.attrlist import parse_attrlist
from adoc2md.xrefs import CrossReferenceResolver

logger = logging.getLogger(__name__)

PROTECT_START = "\x10"
PROTECT_END = "\x11"
PROTECTED_RX = re.compile(PROTECT_START + r"(\d+)" + PROTECT_END)

# Constrained spans must not start or end inside a word
_SPAN = r"(\S|\S.*?\S)"

LITERAL_MONOSPACE_RX = re.compile(r"(?<![\w\\])`\+(.+?)\+`(?!\w)")
STEM_RX = re.compile(r"(?<!\\)(?:stem|latexmath|asciimath):\[(|.*?[^\\])\]")
INLINE_ANCHOR_RX = re.compile(r"(?<!\\)\[\[((?:[^\W\d]|:)[\w:.-]*)(?:,\s*([^\]]+?))?\]\]")
XREF_SHORTHAND_RX = re.compile(r"(?<!\\)<<([^\s<>,`\[\\][^<>,]*?)(?:,\s*([^>]*?))?>>")
XREF_MACRO_RX = re.compile(r"(?<!\\)xref:((?:[^\s\[`#:\\][^\[#\\]*?)?(?:#[^\s\[\\]*)?)\[(|.*?[^\\])\]")
DOUBLE_QUOTED_RX = re.compile(r'(?<![\w\\])"`' + _SPAN + r'`"(?!\w)')
SINGLE_QUOTED_RX = re.compile(r"(?<![\w\\])'`" + _SPAN + r"`'(?!\w)")
MONOSPACE_RX = re.compile(r"(?<![\w\\])(?:\[[^\[\]]*\])?`" + _SPAN + r"`(?!\w)")
MONOSPACE_ESCAPE_RX = re.compile(r"\\(https?://|\.\.\.|xref:)")
ESCAPED_URL_RX = re.compile(r"\\(https?://)")
ESCAPED_MACRO_RX = re.compile(r"\\(link:|xref:|image:)")
ESCAPED_SHORTHAND_XREF = "\\<<"
# A doubled backslash before a formatting mark loses one backslash and still escapes it
DOUBLED_ESCAPE_RX = re.compile(r"\\\\(?=[*_#])")
MARK_RX = re.compile(r"(?<![\w\\])(?:\[([^\[\]]*)\])?#" + _SPAN + r"#(?!\w)")
BOLD_RX = re.compile(r"(?<![\w\\])(?:\[[^\[\]]*\])?\*" + _SPAN + r"\*(?!\w)")
ITALIC_RX = re.compile(r"(?<![\w\\])(?:\[[^\[\]]*\])?_" + _SPAN + r"_(?!\w)")
APOSTROPHE_RX = re.compile(r"(?<=\w)'(?=[^\W\d_])|`'(?!`)")
INLINE_IMAGE_RX = re.compile(r"(?<![\w\\])image:([^:\s\[`\\][^\[\]\\]*?)\[(|.*?[^\\])\]")
URL_MACRO_RX = re.compile(r"(?<![\w\\])(?:link:)?(https?://[^\s\[\]]+)\[(|.*?[^\\])\]")
LINK_MACRO_RX = re.compile(r"(?<![\w\\])link:([^\s\[:][^\s\[]*)\[(|.*?[^\\])\]")
BARE_URL_RX = re.compile(r"(?<![\w\\/\"'(\[<=])(https?://)([^\s\[\]<>\"']*[^\s\[\]<>\"'.,;:!?)])")
URL_RX = re.compile(r"^[a-z][a-z0-9+.-]*:", re.IGNORECASE)

RIGHT_SINGLE_QUOTE = "\u2019"
LINE_THROUGH_ROLE = "line-through"


def render_image(target: str, attrlist: str, attributes: AttributeTable) -> str:
    """Render an image macro as a Markdown image.

    Parameters
    ----------
    target : str
        Image path or URL
    attrlist : str
        Content of the macro's attribute list
    attributes : AttributeTable
        Document attributes (``imagesdir`` is prepended to relative paths)

    Returns
    -------
    str
        Markdown image, wrapped in a link when ``link`` is set

    Examples
    --------
        >>> render_image("images/run.png", "", AttributeTable())
        '![run](images/run.png)'

    """
    attrs = parse_attrlist(attrlist, shorthand=False)
    alt = attrs.positional_at(0) or posixpath.splitext(posixpath.basename(target))[0]
    imagesdir = attributes.get("imagesdir")
    if imagesdir and not URL_RX.match(target) and not target.startswith("/"):
        target = f"{imagesdir.rstrip('/')}/{target}"
    image = f"![{alt}]({target})"
    link = attrs.get("link")
    if link:
        image = f"[{image}]({link})"
    return image


class _ProtectedText:
    """Tokens standing in for text that later substitutions must skip."""

    def __init__(self) -> None:
        self._values: list[str] = []

    def protect(self, value: str) -> str:
        self._values.append(value)
        return f"{PROTECT_START}{len(self._values) - 1}{PROTECT_END}"

    def restore(self, text: str) -> str:
        while PROTECT_START in text:
            restored = PROTECTED_RX.sub(lambda match: self._values[int(match.group(1))], text)
            if restored == text:
                break
            text = restored
        return text


class Substitutor:
    """Apply inline substitutions to text.

    Parameters
    ----------
    attributes : AttributeTable
        Attribute table of the conversion
    xrefs : CrossReferenceResolver
        Resolver that hands out placeholders and owns the anchor registry

    """

    def __init__(self, attributes: AttributeTable, xrefs: CrossReferenceResolver):
        """Initialize the substitutor for one conversion."""
        self.attributes = attributes
        self.xrefs = xrefs

    def apply_attributes(self, text: str) -> str:
        """Apply the reduced substitution set used by verbatim blocks."""
        return self.attributes.resolve_references(text, unescape=True)

    def apply_normal(self, text: str) -> str:
        """Apply the full inline substitution pipeline.

        Parameters
        ----------
        text : str
            Source text of one line, title or cell

        Returns
        -------
        str
            Markdown text; cross references are left as placeholders

        """
        if not text:
            return text

        store = _ProtectedText()
        protect = store.protect

        text = LITERAL_MONOSPACE_RX.sub(lambda match: protect(f"`{match.group(1)}`"), text)
        text = STEM_RX.sub(lambda match: protect(self._stem(match.group(1))), text)
        text = INLINE_ANCHOR_RX.sub(lambda match: protect(self._inline_anchor(match)), text)
        text = XREF_SHORTHAND_RX.sub(self._xref, text)
        text = XREF_MACRO_RX.sub(self._xref, text)
        text = self._smart_quotes(text, protect)
        text = MONOSPACE_RX.sub(lambda match: protect(self._monospace(match.group(1))), text)

        text = ESCAPED_URL_RX.sub(lambda match: protect(f"<span>{match.group(1)}</span>"), text)
        text = ESCAPED_MACRO_RX.sub(lambda match: protect(match.group(1)), text)
        if ESCAPED_SHORTHAND_XREF in text:
            text = text.replace(ESCAPED_SHORTHAND_XREF, protect("&lt;&lt;"))

        text = DOUBLED_ESCAPE_RX.sub(r"\\", text)
        text = MARK_RX.sub(lambda match: self._mark(match, protect), text)
        text = BOLD_RX.sub(r"**\1**", text)
        text = ITALIC_RX.sub(r"_\1_", text)

        text = self.attributes.resolve_references(text, unescape=True)
        text = APOSTROPHE_RX.sub(RIGHT_SINGLE_QUOTE, text)
        text = text.replace("<", "&lt;")

        text = INLINE_IMAGE_RX.sub(
            lambda match: protect(render_image(match.group(1), match.group(2), self.attributes)), text
        )
        text = URL_MACRO_RX.sub(lambda match: protect(self._url_macro(match)), text)
        text = LINK_MACRO_RX.sub(lambda match: protect(f"[{match.group(2) or match.group(1)}]({match.group(1)})"), text)
        if "hide-uri-scheme" in self.attributes:
            text = BARE_URL_RX.sub(lambda match: protect(f"[{match.group(2)}]({match.group(0)})"), text)

        return store.restore(text)

    @staticmethod
    def _stem(expression: str) -> str:
        return "$" + expression.replace("\\]", "]") + "$"

    def _inline_anchor(self, match: re.Match[str]) -> str:
        anchor_id, reftext = match.group(1), match.group(2)
        self.xrefs.registry.register(anchor_id, anchor_id, reftext)
        return f'<a name="{anchor_id}"></a>'

    def _xref(self, match: re.Match[str]) -> str:
        target = match.group(1)
        if not target:
            return match.group(0)
        text: Optional[str] = match.group(2)
        target = self.attributes.resolve_references(target)
        if text:
            text = self.attributes.resolve_references(text.strip())
        return self.xrefs.add(target, text)

    def _smart_quotes(self, text: str, protect: Callable[[str], str]) -> str:
        if "`" not in text:
            return text
        double_open, double_close = self.attributes.quote_pair("quotes", ("<q>", "</q>"))
        text = DOUBLE_QUOTED_RX.sub(
            lambda match: f"{protect(double_open)}{match.group(1)}{protect(double_close)}", text
        )
        return SINGLE_QUOTED_RX.sub(lambda match: f"{protect('<q>')}{match.group(1)}{protect('</q>')}", text)

    def _monospace(self, content: str) -> str:
        content = self.attributes.resolve_references(content, unescape=True)
        content = MONOSPACE_ESCAPE_RX.sub(r"\1", content)
        return f"`{content}`"

    def _mark(self, match: re.Match[str], protect: Callable[[str], str]) -> str:
        attrlist, content = match.group(1), match.group(2)
        if attrlist is None:
            return f"{protect('<mark>')}{content}{protect('</mark>')}"
        if LINE_THROUGH_ROLE in parse_attrlist(attrlist).roles:
            opening, closing = self.attributes.quote_pair("markdown-strikethrough", ("~~", "~~"))
            return f"{protect(opening)}{content}{protect(closing)}"
        return content

    def _url_macro(self, match: re.Match[str]) -> str:
        url, text = match.group(1), match.group(2)
        if text.endswith("^"):
            text = text[:-1]
        if not text:
            text = url.split("://", 1)[1] if "hide-uri-scheme" in self.attributes else url
        return f"[{text}]({url})"
