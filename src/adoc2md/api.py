"""The exported API function for AsciiDoc conversion."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/adoc2md/api.py
import logging
from collections.abc import Mapping
from typing import Any, Optional, Union

from adoc2md.context import ConversionContext
from adoc2md.converter import DocumentConverter
from adoc2md.exceptions import InvalidOptionsError, ValidationError
from adoc2md.options import ConversionOptions
from adoc2md.output import assemble
from adoc2md.preprocessor import ConditionalFilter
from adoc2md.utils.timing import debug_timer

logger = logging.getLogger(__name__)

BYTE_ORDER_MARK = "\ufeff"

# Control characters reserved for internal placeholder tokens
RESERVED_CHARACTERS = dict.fromkeys(map(ord, "\x00\x01\x10\x11\x12"))


def _resolve_options(options: Union[ConversionOptions, Mapping[str, Any], None]) -> ConversionOptions:
    """Normalize the ``options`` argument of :func:`convert`.

    Parameters
    ----------
    options : ConversionOptions, Mapping or None
        Options instance, mapping of option fields, or None for defaults

    Returns
    -------
    ConversionOptions
        Validated options

    Raises
    ------
    InvalidOptionsError
        If ``options`` is of any other type

    """
    if options is None:
        return ConversionOptions()
    if isinstance(options, ConversionOptions):
        return options
    if isinstance(options, Mapping):
        return ConversionOptions.from_mapping(options)
    raise InvalidOptionsError("convert", ConversionOptions, type(options))


def convert(source: str, options: Optional[Union[ConversionOptions, Mapping[str, Any]]] = None) -> str:
    """Convert an AsciiDoc document to Markdown.

    Parameters
    ----------
    source : str
        AsciiDoc source text
    options : ConversionOptions or Mapping, optional
        Conversion options, or a mapping of their fields such as
        ``{"attributes": {"product": "ACME"}}``

    Returns
    -------
    str
        Markdown text without a trailing newline

    Raises
    ------
    InvalidOptionsError
        If ``options`` is not a ConversionOptions instance or a mapping
    ValidationError
        If the options contain unknown fields or invalid attribute values

    Examples
    --------
        >>> convert("= Document Title\\n\\nHello, *world*!")
        '# Document Title\\n\\nHello, **world**!'
        >>> convert("Made by {company}.", {"attributes": {"company": "ACME"}})
        'Made by ACME.'

    """
    resolved = _resolve_options(options)
    if not isinstance(source, str):
        raise ValidationError(
            f"convert expected source text of type 'str' but received '{type(source).__name__}'.",
            parameter_name="source",
            parameter_value=type(source),
        )

    if source.startswith(BYTE_ORDER_MARK):
        source = source[len(BYTE_ORDER_MARK) :]
    source = source.translate(RESERVED_CHARACTERS)
    if not source.strip():
        return ""

    context = ConversionContext(resolved.attributes)
    with debug_timer(logger, "Conversion"):
        lines = ConditionalFilter(source.replace("\r\n", "\n").split("\n"), context.attributes)
        output = DocumentConverter(context).convert(lines)
        resolved_text = context.resolve_references("\n".join(output))
    return assemble(resolved_text.split("\n"), context.attributes.line_break())
