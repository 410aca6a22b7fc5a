#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Integration tests converting complete AsciiDoc documents.

These tests run whole documents through the public API and the command
line, and check structural properties of the conversion with Hypothesis.
"""

import os
import subprocess
import sys
from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from adoc2md import convert
from adoc2md.constants import ADMONITION_ICONS, EXIT_FILE_ERROR, EXIT_SUCCESS

GUIDE = """= ACME Guide
Jane Doe <jane@acme.test>
v2.0, 2025-03-01
:product: ACME Cloud
:imagesdir: img

Welcome to {product}, written by {author}.

[#setup]
== Setup

. Install the CLI:
+
[source,sh]
----
pip install acme
----
. Run `acme init`.

NOTE: See <<usage>> for details.

[[usage]]
== Usage

|===
| Command | Purpose

| init | Create a project
| deploy | Ship it
|===

.Architecture
image::arch.png[Architecture diagram]

Back to <<setup,the setup steps>>.
"""

GUIDE_MARKDOWN = "\n".join(
    [
        "# ACME Guide",
        "",
        "Welcome to ACME Cloud, written by Jane Doe.",
        "",
        "## Setup",
        "",
        "1. Install the CLI:",
        "",
        "   ```sh",
        "   pip install acme",
        "   ```",
        "2. Run `acme init`.",
        "",
        f"**{ADMONITION_ICONS['NOTE']} NOTE**\\",
        "See [Usage](#usage) for details.",
        "",
        "## Usage",
        "",
        "| Command | Purpose |",
        "| --- | --- |",
        "| init | Create a project |",
        "| deploy | Ship it |",
        "",
        "**Architecture**",
        "",
        "![Architecture diagram](img/arch.png)",
        "",
        "Back to [the setup steps](#setup).",
    ]
)

words = st.from_regex(r"[a-z]{1,8}", fullmatch=True)
plain_lines = st.lists(words, min_size=1, max_size=8).map(" ".join)


def _run_cli(*args: str, cwd: Path, input_text: str | None = None) -> subprocess.CompletedProcess:
    env = {**os.environ, "PYTHONIOENCODING": "utf-8"}
    env.pop("ADOC2MD_CONFIG", None)
    return subprocess.run(
        [sys.executable, "-m", "adoc2md", *args],
        input=input_text,
        capture_output=True,
        text=True,
        encoding="utf-8",
        cwd=cwd,
        env=env,
        timeout=60,
    )


@pytest.mark.integration
class TestDocumentConversion:
    """Convert complete documents through the public API."""

    def test_guide(self) -> None:
        """Test a document mixing header, sections, lists, admonitions, tables and images."""
        assert convert(GUIDE) == GUIDE_MARKDOWN

    def test_seeded_attributes_override_header(self) -> None:
        """Test that attributes passed by the caller win over header entries."""
        markdown = convert(GUIDE, {"attributes": {"product": "Widget"}})
        assert "Welcome to Widget, written by Jane Doe." in markdown.split("\n")

    def test_unset_imagesdir(self) -> None:
        """Test that a locked unset attribute ignores the header assignment."""
        markdown = convert(GUIDE, {"attributes": {"imagesdir": None}})
        assert "![Architecture diagram](arch.png)" in markdown.split("\n")

    def test_repeated_conversion_is_stable(self) -> None:
        """Test that converting the same document twice gives the same result."""
        assert convert(GUIDE) == convert(GUIDE)


@pytest.mark.integration
class TestConversionProperties:
    """Property-based tests for structural guarantees of the conversion."""

    @given(line=plain_lines)
    def test_plain_text_is_unchanged(self, line: str) -> None:
        """Test that a line of plain lowercase words passes through untouched."""
        assert convert(line) == line

    @given(level=st.integers(min_value=0, max_value=5), title=plain_lines)
    def test_heading_levels(self, level: int, title: str) -> None:
        """Test that each section level maps to the matching number of hashes."""
        source = "=" * (level + 1) + " " + title
        assert convert(source) == "#" * (level + 1) + " " + title

    @given(word=words)
    def test_reference_direction_does_not_matter(self, word: str) -> None:
        """Test that references before and after their target resolve identically."""
        link_line = f"See [{word}](#{word})."
        forward = convert(f"See <<_{word}>>.\n\n== {word}")
        backward = convert(f"== {word}\n\nSee <<_{word}>>.")
        assert forward == f"{link_line}\n\n## {word}"
        assert backward == f"## {word}\n\n{link_line}"

    @given(depth=st.integers(min_value=1, max_value=5), text=plain_lines)
    def test_nested_list_indent(self, depth: int, text: str) -> None:
        """Test that each nesting level indents by the unordered list step."""
        source = "\n".join("*" * level + " " + text for level in range(1, depth + 1))
        expected = "\n".join("  " * (level - 1) + "* " + text for level in range(1, depth + 1))
        assert convert(source) == expected


@pytest.mark.integration
@pytest.mark.cli
class TestCommandLine:
    """Run the ``adoc2md`` module as a subprocess."""

    def test_convert_file(self, tmp_path: Path) -> None:
        """Test converting a file to standard output."""
        source = tmp_path / "guide.adoc"
        source.write_text(GUIDE, encoding="utf-8")

        result = _run_cli(str(source), cwd=tmp_path)

        assert result.returncode == EXIT_SUCCESS, result.stderr
        assert result.stdout == GUIDE_MARKDOWN + "\n"

    def test_convert_stdin_to_file(self, tmp_path: Path) -> None:
        """Test reading standard input and writing an output file."""
        output = tmp_path / "out.md"

        result = _run_cli("-", "-o", str(output), "-a", "name=World", cwd=tmp_path, input_text="Hello {name}!\n")

        assert result.returncode == EXIT_SUCCESS, result.stderr
        assert result.stdout == ""
        assert output.read_text(encoding="utf-8") == "Hello World!\n"

    def test_missing_input(self, tmp_path: Path) -> None:
        """Test the exit code and message for a missing input file."""
        result = _run_cli(str(tmp_path / "absent.adoc"), cwd=tmp_path)

        assert result.returncode == EXIT_FILE_ERROR
        assert "Input file not found" in result.stderr
