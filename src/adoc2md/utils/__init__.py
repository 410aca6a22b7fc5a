#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/utils/__init__.py
"""Helper functions shared by the conversion stages."""

from adoc2md.utils.text import generate_section_id, github_slug, make_unique_slug, markdown_to_plain
from adoc2md.utils.timing import debug_timer

__all__ = [
    "debug_timer",
    "generate_section_id",
    "github_slug",
    "make_unique_slug",
    "markdown_to_plain",
]
