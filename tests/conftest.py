"""Pytest configuration and shared fixtures for the adoc2md test suite.

This module provides shared fixtures and test configuration used across
the unit and integration tests.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Generator

import pytest
from hypothesis import Phase, Verbosity, settings

from adoc2md import convert
from adoc2md.context import ConversionContext
from adoc2md.logging_utils import PACKAGE_LOGGER

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def context() -> ConversionContext:
    """Provide a fresh conversion context."""
    return ConversionContext()


@pytest.fixture
def adoc() -> Callable[..., str]:
    """Provide a converter that accepts attributes as keyword arguments.

    Returns
    -------
    Callable[..., str]
        ``adoc(source, name=value, ...)`` converts ``source`` with the
        keyword arguments seeded as document attributes

    """

    def _convert(source: str, **attributes: str) -> str:
        return convert(source, {"attributes": attributes} if attributes else None)

    return _convert


@pytest.fixture
def work_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Run the test inside an empty temporary working directory.

    Configuration discovery walks up from the working directory, so the
    environment variable naming a configuration file is cleared as well.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ADOC2MD_CONFIG", raising=False)
    yield tmp_path


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Restore the package logger after tests that configure logging."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    handlers = list(package_logger.handlers)
    level, propagate = package_logger.level, package_logger.propagate
    yield
    for handler in list(package_logger.handlers):
        if handler not in handlers:
            package_logger.removeHandler(handler)
            handler.close()
    package_logger.setLevel(level)
    package_logger.propagate = propagate
