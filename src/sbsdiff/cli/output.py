"""Utility functions for cli output."""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/sbsdiff/cli/output.py
import argparse
import os
import pydoc
import shutil
import sys
from pathlib import Path
from typing import Iterable, TextIO

from sbsdiff.constants import LINE_NUMBER_FORMAT, RESERVED_PROMPT_LINES, TOOL_TEXT_ENCODING, TOOL_TEXT_ERRORS


def check_rich_available() -> bool:
    """Check if Rich library is available.

    Returns
    -------
    bool
        True if Rich is available, False otherwise

    """
    try:
        import rich  # noqa: F401

        return True
    except ImportError:
        return False


def should_use_rich_output(args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Determine if Rich should format notices, based on TTY and args.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command line arguments
    stream : optional, default None
        Uses sys.stderr unless otherwise specified.

    Returns
    -------
    bool
        True if Rich output should be used

    Notes
    -----
    Rich output is used when:
    - The --rich flag is set
    - AND the notice stream is a TTY
    - AND Rich library is available

    """
    if not getattr(args, "rich", False):
        return False

    if not check_rich_available():
        return False

    target = stream or sys.stderr
    isatty = getattr(target, "isatty", None)
    return bool(callable(isatty) and isatty())


def print_notice(message: str, args: argparse.Namespace, style: str = "bold yellow") -> None:
    """Print a notice to stderr unless quiet.

    Parameters
    ----------
    message : str
        Notice text
    args : argparse.Namespace
        Parsed arguments; ``quiet`` and ``rich`` are honored
    style : str, default "bold yellow"
        Rich style used when Rich output is enabled

    """
    if getattr(args, "quiet", False):
        return

    if should_use_rich_output(args):
        from rich.console import Console

        Console(stderr=True).print(message, style=style, highlight=False)
    else:
        print(message, file=sys.stderr)


def print_error(message: str, args: argparse.Namespace | None = None) -> None:
    """Print an error message to stderr, even when quiet."""
    if args is not None and should_use_rich_output(args):
        from rich.console import Console

        Console(stderr=True).print(f"Error: {message}", style="bold red", highlight=False)
    else:
        print(f"Error: {message}", file=sys.stderr)


def number_lines(lines: Iterable[str]) -> list[str]:
    """Prefix each line with its number in ``cat -n`` format."""
    return [LINE_NUMBER_FORMAT.format(number=number, line=line) for number, line in enumerate(lines, start=1)]


def terminal_columns(default: int = 80) -> int:
    """Get the terminal width, or ``default`` when it is unknown."""
    return shutil.get_terminal_size(fallback=(default, 24)).columns


def reserved_screen_lines(args: argparse.Namespace) -> int:
    """Count the terminal rows kept free when deciding whether to page.

    The shell prompt always takes ``RESERVED_PROMPT_LINES``. Unless quiet,
    one more row is kept for the input headers, and one more again for the
    line-number notice when numbers are shown.
    """
    if getattr(args, "quiet", False):
        return RESERVED_PROMPT_LINES
    if getattr(args, "line_numbers", False):
        return RESERVED_PROMPT_LINES + 2
    return RESERVED_PROMPT_LINES + 1


def should_page(line_count: int, args: argparse.Namespace, stream: TextIO | None = None) -> bool:
    """Decide whether output should go through the pager.

    Parameters
    ----------
    line_count : int
        Number of output lines
    args : argparse.Namespace
        Parsed arguments; ``pager``, ``output``, ``quiet`` and
        ``line_numbers`` are honored
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    Returns
    -------
    bool
        True when stdout is a TTY, paging is allowed, and the output does
        not fit above the reserved rows

    """
    if not getattr(args, "pager", True) or getattr(args, "output", None):
        return False

    target = stream or sys.stdout
    isatty = getattr(target, "isatty", None)
    if not (callable(isatty) and isatty()):
        return False

    rows = shutil.get_terminal_size().lines
    return line_count >= rows - reserved_screen_lines(args)


def page_content(content: str) -> bool:
    """Page content using pydoc.pager.

    ``LESS=-R`` is set unless the user already configured ``LESS``, so
    color sequences reach the terminal intact.

    Parameters
    ----------
    content : str
        Content to page

    Returns
    -------
    bool
        True if paging succeeded, False if should fall back to printing

    """
    os.environ.setdefault("LESS", "-R")
    try:
        pydoc.pager(content)
        return True
    except OSError:
        return False


def write_output(content: str, output_path: str | None = None, stream: TextIO | None = None) -> None:
    """Write the final output to a file or a stream.

    Parameters
    ----------
    content : str
        Complete output text
    output_path : str, optional
        Destination file; parent directories are created
    stream : optional, default None
        Uses sys.stdout unless otherwise specified.

    """
    if output_path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=TOOL_TEXT_ENCODING, errors=TOOL_TEXT_ERRORS)
        return

    target = stream or sys.stdout
    buffer = getattr(target, "buffer", None)
    if buffer is None:
        target.write(content)
        target.flush()
        return

    # Undecodable input bytes are carried as lone surrogates; write them back raw
    target.flush()
    buffer.write(content.encode(TOOL_TEXT_ENCODING, errors=TOOL_TEXT_ERRORS))
    buffer.flush()
