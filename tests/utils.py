"""Test utilities for sbsdiff test suite.

This module provides temporary directory helpers and a fake process runner
that stands in for :func:`subprocess.run` in unit tests.
"""

import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Optional


def create_test_temp_dir() -> Path:
    """Create a temporary directory for test files."""
    return Path(tempfile.mkdtemp())


def cleanup_test_dir(temp_dir: Path) -> None:
    """Clean up test directory and files."""
    if temp_dir.exists():
        shutil.rmtree(temp_dir)


def completed(argv: list[str], stdout: str = "", returncode: int = 0, stderr: str = "") -> subprocess.CompletedProcess:
    """Build a CompletedProcess as subprocess.run would return it."""
    return subprocess.CompletedProcess(argv, returncode, stdout=stdout, stderr=stderr)


class FakeRunner:
    """Record process invocations and answer them without running anything.

    Parameters
    ----------
    handler : callable, optional
        Called with the argument list; returns a CompletedProcess or raises.
        Without one every call succeeds with empty output.

    Attributes
    ----------
    calls : list of list of str
        Argument lists, in call order
    file_contents : list of dict
        For each call, the contents of every existing file argument at call time

    """

    def __init__(self, handler: Optional[Callable[[list[str]], subprocess.CompletedProcess]] = None):
        self.handler = handler
        self.calls: list[list[str]] = []
        self.kwargs: list[dict] = []
        self.file_contents: list[dict[str, str]] = []

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        self.kwargs.append(kwargs)
        contents = {}
        for arg in argv[1:]:
            path = Path(arg)
            if not arg.startswith("-") and path.is_file():
                contents[arg] = path.read_bytes().decode("utf-8", errors="surrogateescape")
        self.file_contents.append(contents)
        if self.handler is None:
            return completed(argv)
        return self.handler(argv)

    @property
    def programs(self) -> list[str]:
        """Executable names of every call."""
        return [call[0] for call in self.calls]

    def file_args(self, index: int) -> list[str]:
        """File arguments (non-option arguments) of one call."""
        return [arg for arg in self.calls[index][1:] if not arg.startswith("-")]


def wdiff_handler(left_marked: str, right_marked: str, line_diff: str = "") -> Callable:
    """Handler answering wdiff passes with fixed results and diff with ``line_diff``."""

    def handler(argv: list[str]) -> subprocess.CompletedProcess:
        if "--no-inserted" in argv:
            return completed(argv, left_marked + "\n", returncode=1)
        if "--no-deleted" in argv:
            return completed(argv, right_marked + "\n", returncode=1)
        return completed(argv, line_diff, returncode=1)

    return handler
