#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for output assembly and debug timing."""

import logging

import pytest

from adoc2md.output import assemble
from adoc2md.utils.timing import debug_timer


@pytest.mark.unit
class TestAssemble:
    """Tests for assemble."""

    def test_leading_and_trailing_blanks(self) -> None:
        """Test that blank lines at both ends are removed."""
        assert assemble(["", "  ", "text", "", ""]) == "text"

    def test_trailing_whitespace_is_trimmed(self) -> None:
        """Test that each line is right-trimmed."""
        assert assemble(["a  ", "b\t"]) == "a\nb"

    def test_inner_blank_lines_are_kept(self) -> None:
        """Test that blank lines between content survive."""
        assert assemble(["a", "", "", "b"]) == "a\n\n\nb"

    def test_whitespace_break_mark_is_kept(self) -> None:
        """Test the two-space hard break."""
        assert assemble(["one  ", "two  "], line_break="  ") == "one  \ntwo"

    def test_visible_break_mark(self) -> None:
        """Test that a visible break mark is not special."""
        assert assemble(["one\\ ", "two"], line_break="\\") == "one\\\ntwo"

    def test_empty(self) -> None:
        """Test assembling nothing."""
        assert assemble([]) == ""


@pytest.mark.unit
class TestDebugTimer:
    """Tests for debug_timer."""

    def test_logs_when_debug_enabled(self, caplog) -> None:
        """Test that the duration is logged at DEBUG level."""
        logger = logging.getLogger("adoc2md.tests.timing")
        with caplog.at_level(logging.DEBUG, logger="adoc2md.tests.timing"):
            with debug_timer(logger, "Conversion"):
                pass
        assert any("Conversion completed in" in record.getMessage() for record in caplog.records)

    def test_silent_otherwise(self, caplog) -> None:
        """Test that nothing is logged above DEBUG."""
        logger = logging.getLogger("adoc2md.tests.timing")
        with caplog.at_level(logging.INFO, logger="adoc2md.tests.timing"):
            with debug_timer(logger, "Conversion"):
                pass
        assert not caplog.records
