"""Pytest configuration and shared fixtures for sbsdiff test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import shutil
from pathlib import Path
from typing import Generator

import pytest
from utils import FakeRunner, cleanup_test_dir, create_test_temp_dir

from sbsdiff.layout import LayoutPlan, plan_layout

# Configure Hypothesis for property-based testing
try:
    from hypothesis import Phase, Verbosity, settings

    # Register custom Hypothesis profiles
    settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
    settings.register_profile("dev", max_examples=20)
    settings.register_profile(
        "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
    )

    # Load profile from environment or use default
    import os

    profile = os.getenv("HYPOTHESIS_PROFILE", "dev")
    settings.load_profile(profile)
except ImportError:
    # Hypothesis not installed, skip configuration
    pass


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "e2e: End-to-end tests - full pipeline tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for test files.

    Yields
    ------
    Path
        Temporary directory path that will be cleaned up after test.

    """
    temp_path = create_test_temp_dir()
    try:
        yield temp_path
    finally:
        cleanup_test_dir(temp_path)


@pytest.fixture
def layout20() -> LayoutPlan:
    """Layout for a 20-column display (split point 10)."""
    return plan_layout(20)


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Provide a process runner that records calls and returns empty output."""
    return FakeRunner()


@pytest.fixture
def require_gnu_tools():
    """Skip unless diff and wdiff are installed."""
    for tool in ("diff", "wdiff"):
        if shutil.which(tool) is None:
            pytest.skip(f"{tool} is not installed")
