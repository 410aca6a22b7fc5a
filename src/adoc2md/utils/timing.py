#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adoc2md/utils/timing.py
"""Timing helpers for debug logging."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Generator


@contextmanager
def debug_timer(logger: logging.Logger, operation: str) -> Generator[None, None, None]:
    """Log how long the enclosed block took, when DEBUG logging is enabled.

    Parameters
    ----------
    logger : logging.Logger
        Logger receiving the timing message
    operation : str
        Description of the timed operation (e.g., "Conversion")

    Examples
    --------
        >>> with debug_timer(logging.getLogger(__name__), "Conversion"):
        ...     pass

    """
    if not logger.isEnabledFor(logging.DEBUG):
        yield
        return
    start_time = time.perf_counter()
    yield
    logger.debug("%s completed in %.3fs", operation, time.perf_counter() - start_time)
