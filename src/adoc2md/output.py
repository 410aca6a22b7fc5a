#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/output.py
"""Final assembly of the converted Markdown."""

from __future__ import annotations

from typing import Iterable


def assemble(lines: Iterable[str], line_break: str = "") -> str:
    """Join output lines into the final document.

    Leading blank lines are dropped, trailing whitespace is removed from
    every line and from the end of the document. A line break mark made
    only of whitespace (such as two spaces) is the one exception: it is
    kept at the end of the lines it terminates.

    Parameters
    ----------
    lines : Iterable[str]
        Converted lines, with cross references already resolved
    line_break : str, default ""
        Value of the ``markdown-line-break`` attribute

    Returns
    -------
    str
        Markdown text without a trailing newline

    Examples
    --------
        >>> assemble(["", "# Title ", "", "text", "", ""])
        '# Title\\n\\ntext'
        >>> assemble(["roses  ", "violets"], line_break="  ")
        'roses  \\nviolets'

    """
    keep_break = bool(line_break) and not line_break.strip()
    result: list[str] = []
    for line in lines:
        if not result and not line.strip():
            continue
        stripped = line.rstrip()
        if keep_break and stripped and line.endswith(line_break):
            stripped += line_break
        result.append(stripped)
    while result and not result[-1].strip():
        result.pop()
    if result:
        result[-1] = result[-1].rstrip()
    return "\n".join(result)
