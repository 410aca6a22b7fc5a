#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/cli/output.py
"""Writing converted Markdown to files and terminals."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.markdown import Markdown

from adoc2md.exceptions import FileError


def should_use_rich_output(args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Return whether the output should be rendered with rich.

    Rich rendering is used when ``--rich`` is given, no output file was
    requested, and standard output is a terminal.
    """
    if not args.rich or args.output:
        return False
    stream = stream or sys.stdout
    return bool(getattr(stream, "isatty", lambda: False)())


def render_rich(markdown_content: str, console: Console | None = None) -> None:
    """Print Markdown to the terminal with rich formatting."""
    (console or Console()).print(Markdown(markdown_content))


def write_output(markdown_content: str, output_path: str | None, stream: TextIO | None = None) -> None:
    """Write the converted document to ``output_path`` or standard output.

    Parameters
    ----------
    markdown_content : str
        Converted Markdown, without a trailing newline
    output_path : str or None
        Destination file; None writes to ``stream``
    stream : TextIO, optional
        Stream used when no path is given, defaults to ``sys.stdout``

    Raises
    ------
    FileError
        If the output file cannot be written

    """
    text = markdown_content + "\n" if markdown_content else ""
    if output_path is None:
        (stream or sys.stdout).write(text)
        return
    path = Path(output_path)
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as e:
        raise FileError(f"Could not write output file {path}: {e}", str(path), e) from e
