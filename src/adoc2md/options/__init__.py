#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for adoc2md conversions.

Options are frozen dataclasses providing type safety, default values and a
clean API for configuring a conversion.
"""

from __future__ import annotations

from adoc2md.options.base import CloneFrozenMixin
from adoc2md.options.conversion import ConversionOptions

__all__ = [
    "CloneFrozenMixin",
    "ConversionOptions",
]
