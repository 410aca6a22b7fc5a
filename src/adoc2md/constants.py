#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for adoc2md.

This module centralizes the hardcoded values used across the converter:
built-in document attributes, admonition labels, list indentation widths,
and the exit codes and configuration file names used by the command line
interface.

Constants are organized by category:
1. Document Attributes - intrinsic and default attribute values
2. Block Rendering - admonitions, indentation, callouts
3. Command Line Interface - exit codes and config discovery
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

ListFamily = Literal["unordered", "ordered", "description", "callout"]
ContainerKind = Literal["example", "sidebar", "open", "quote"]
VerbatimKind = Literal["listing", "literal", "fenced", "pass"]

# =============================================================================
# Document Attributes
# =============================================================================

# Character replacement attributes that are always defined
INTRINSIC_ATTRIBUTES: dict[str, str] = {
    "empty": "",
    "sp": " ",
    "nbsp": "&#160;",
    "zwsp": "&#8203;",
    "wj": "&#8288;",
    "vbar": "|",
    "lt": "&lt;",
    "gt": "&gt;",
    "amp": "&amp;",
    "apos": "&#39;",
    "quot": "&#34;",
    "lsquo": "&#8216;",
    "rsquo": "&#8217;",
    "ldquo": "&#8220;",
    "rdquo": "&#8221;",
    "deg": "&#176;",
    "plus": "&#43;",
    "pp": "&#43;&#43;",
    "cpp": "C++",
    "startsb": "[",
    "endsb": "]",
    "caret": "^",
    "asterisk": "*",
    "tilde": "~",
    "backslash": "\\",
    "backtick": "`",
    "two-colons": "::",
    "two-semicolons": ";;",
}

# Attributes that control Markdown output, overridable by the document
DEFAULT_ATTRIBUTES: dict[str, str] = {
    "idprefix": "_",
    "idseparator": "_",
    "markdown-line-break": "\\",
    "markdown-strikethrough": "~~",
    "quotes": "<q> </q>",
}

# Attribute that a parsed document title always overrides
DOCTITLE_ATTRIBUTE = "doctitle"

# =============================================================================
# Block Rendering
# =============================================================================

ADMONITION_ICONS: dict[str, str] = {
    "CAUTION": "\U0001f525",
    "IMPORTANT": "❗",
    "NOTE": "\U0001f4cc",
    "TIP": "\U0001f4a1",
    "WARNING": "⚠️",
}

# Per-level indent widths when markdown-list-indent is not set
UNORDERED_LIST_INDENT = 2
ORDERED_LIST_INDENT = 3

# Prefix applied to each line of a literal paragraph
LITERAL_PARAGRAPH_INDENT = "    "

# Callout numbers are rendered as circled digits (U+2460..)
CIRCLED_NUMBER_BASE = 0x2460
MAX_CIRCLED_NUMBER = 10

DEFAULT_COLLAPSIBLE_SUMMARY = "Details"

# Empty header cell emitted when a table has no header row
EMPTY_HEADER_CELL = "     "

# =============================================================================
# Command Line Interface
# =============================================================================

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4

CONFIG_FILENAMES = [".adoc2md.toml", ".adoc2md.yaml", ".adoc2md.yml", ".adoc2md.json", "pyproject.toml"]
CONFIG_ENV_VAR = "ADOC2MD_CONFIG"
