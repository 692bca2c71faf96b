#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sbsdiff/tools.py
"""Plumbing for the external diff tools.

This module owns every subprocess call made by sbsdiff: the side-by-side
``diff``, the ``wdiff`` passes used for word highlighting, and the
``colordiff`` palette probe. Tool failures are translated into
:class:`~sbsdiff.exceptions.SubprocessFailureError` so callers never need
to inspect return codes themselves.

Every function that spawns a process accepts a ``runner`` with the
signature of :func:`subprocess.run`, which lets tests substitute canned
tool output.
"""

from __future__ import annotations

import filecmp
import logging
import os
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterable, Iterator, Sequence

from sbsdiff.constants import (
    BASE_DIFF_OPTIONS,
    DEFAULT_DIFF_COMMAND,
    TOOL_SUCCESS_CODES,
    TOOL_TEXT_ENCODING,
    TOOL_TEXT_ERRORS,
)
from sbsdiff.exceptions import SubprocessFailureError, ToolNotFoundError
from sbsdiff.layout import LayoutPlan

logger = logging.getLogger(__name__)

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


def find_tool(name: str) -> str | None:
    """Return the resolved path of an executable, or None if it is missing."""
    return shutil.which(name)


def missing_tools(names: Iterable[str]) -> list[str]:
    """List the executables from ``names`` that are not on PATH.

    Parameters
    ----------
    names : iterable of str
        Executable names to check

    Returns
    -------
    list of str
        Missing names, in the order given

    """
    return [name for name in names if find_tool(name) is None]


def run_tool(
    command: Sequence[str],
    *,
    runner: Runner = subprocess.run,
    timeout: float | None = None,
    ok_codes: Sequence[int] = TOOL_SUCCESS_CODES,
) -> str:
    """Run an external tool and return its standard output.

    Parameters
    ----------
    command : sequence of str
        Command line to execute
    runner : callable, default subprocess.run
        Process runner with the signature of :func:`subprocess.run`
    timeout : float, optional
        Seconds before the call is abandoned
    ok_codes : sequence of int, default (0, 1)
        Exit statuses that count as success

    Returns
    -------
    str
        Decoded standard output

    Raises
    ------
    ToolNotFoundError
        If the executable does not exist
    SubprocessFailureError
        If the tool times out or exits with a status outside ``ok_codes``

    """
    argv = list(command)
    logger.debug("Running: %s", " ".join(argv))
    try:
        result = runner(
            argv,
            capture_output=True,
            text=True,
            encoding=TOOL_TEXT_ENCODING,
            errors=TOOL_TEXT_ERRORS,
            timeout=timeout,
            check=False,
        )
    except FileNotFoundError as e:
        raise ToolNotFoundError(argv[0], command=argv, original_error=e) from e
    except subprocess.TimeoutExpired as e:
        raise SubprocessFailureError(
            argv, None, message=f"Command timed out after {timeout} seconds: {' '.join(argv)}", original_error=e
        ) from e

    if result.returncode not in ok_codes:
        raise SubprocessFailureError(argv, result.returncode, result.stderr or "")

    return result.stdout or ""


@contextmanager
def scratch_file(content: str, suffix: str = ".txt") -> Iterator[Path]:
    """Write ``content`` to a temporary file that is removed on exit.

    The file is deleted on every exit path, including when the body raises.

    Parameters
    ----------
    content : str
        Text to write, UTF-8 encoded and without newline translation.
        Lone surrogates are written back as the bytes they stand for.
    suffix : str, default ".txt"
        Filename suffix

    Yields
    ------
    Path
        Location of the temporary file

    """
    fd, name = tempfile.mkstemp(prefix="sbsdiff-", suffix=suffix)
    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding=TOOL_TEXT_ENCODING, errors=TOOL_TEXT_ERRORS, newline="") as handle:
            handle.write(content)
        yield path
    finally:
        path.unlink(missing_ok=True)


def files_identical(left_path: str | Path, right_path: str | Path) -> bool:
    """Compare two files byte for byte, like ``cmp --silent``."""
    return filecmp.cmp(str(left_path), str(right_path), shallow=False)


def build_side_by_side_command(
    left_path: str | Path,
    right_path: str | Path,
    layout: LayoutPlan,
    *,
    diff_command: str = DEFAULT_DIFF_COMMAND,
    extra_options: Sequence[str] = (),
) -> list[str]:
    """Build the ``diff`` command line for a fixed-width two-column layout."""
    return [
        diff_command,
        f"--width={layout.total_width}",
        *BASE_DIFF_OPTIONS,
        *extra_options,
        str(left_path),
        str(right_path),
    ]


def run_side_by_side_diff(
    left_path: str | Path,
    right_path: str | Path,
    layout: LayoutPlan,
    *,
    diff_command: str = DEFAULT_DIFF_COMMAND,
    extra_options: Sequence[str] = (),
    runner: Runner = subprocess.run,
    timeout: float | None = None,
) -> list[str]:
    """Run the line-diff producer and return its output lines.

    Parameters
    ----------
    left_path, right_path : str or Path
        Files to compare
    layout : LayoutPlan
        Width contract; ``layout.total_width`` is passed as ``--width``
    diff_command : str, default "diff"
        Executable to run
    extra_options : sequence of str
        Additional options supplied by the caller (e.g. ``--minimal``)
    runner : callable, default subprocess.run
        Process runner
    timeout : float, optional
        Seconds before the call is abandoned

    Returns
    -------
    list of str
        Output lines without line terminators

    """
    command = build_side_by_side_command(
        left_path, right_path, layout, diff_command=diff_command, extra_options=extra_options
    )
    output = run_tool(command, runner=runner, timeout=timeout)
    if not output:
        return []
    # str.splitlines would also break on form feeds inside the content
    return output.removesuffix("\n").split("\n")
