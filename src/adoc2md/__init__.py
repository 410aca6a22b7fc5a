"""adoc2md - convert AsciiDoc documents to Markdown.

adoc2md reads an AsciiDoc document line by line and writes GitHub-flavored
Markdown in a single pass. Sections, lists, tables, delimited blocks,
admonitions, attribute references, conditionals and cross references are
translated; constructs Markdown cannot express are rendered with small
HTML fragments or dropped.

Examples
--------
Basic usage:

    >>> from adoc2md import convert
    >>> print(convert("= Guide\\n\\n. First\\n. Second"))
    # Guide
    <BLANKLINE>
    1. First
    2. Second

Seeding document attributes:

    >>> convert("{product} is ready.", {"attributes": {"product": "ACME"}})
    'ACME is ready.'

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

from adoc2md.api import convert
from adoc2md.exceptions import (
    Adoc2MdError,
    ConfigError,
    FileError,
    InvalidOptionsError,
    ValidationError,
)
from adoc2md.options import ConversionOptions

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "convert",
    "ConversionOptions",
    "Adoc2MdError",
    "ConfigError",
    "FileError",
    "InvalidOptionsError",
    "ValidationError",
]
