#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Argument parser and exit codes for the sbsdiff command line."""

from __future__ import annotations

import argparse

from sbsdiff import __version__
from sbsdiff.constants import DEFAULT_COLORDIFF_COMMAND, DEFAULT_DIFF_COMMAND, DEFAULT_WDIFF_COMMAND
from sbsdiff.exceptions import (
    InputError,
    SubprocessFailureError,
    ToolNotFoundError,
    UnrecognizedLineFormatError,
    ValidationError,
)

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_FORMAT_ERROR = 5
EXIT_SUBPROCESS_ERROR = 6


def positive_int(value: str) -> int:
    """Validate that a CLI value is a positive integer.

    Parameters
    ----------
    value : str
        Raw argument value

    Returns
    -------
    int
        Parsed value

    Raises
    ------
    argparse.ArgumentTypeError
        If value is not a positive integer

    """
    try:
        ivalue = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"must be an integer, got '{value}'") from e

    if ivalue <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {ivalue}")

    return ivalue


def positive_float(value: str) -> float:
    """Validate that a CLI value is a positive number."""
    try:
        fvalue = float(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"must be a number, got '{value}'") from e

    if fvalue <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {fvalue}")

    return fvalue


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for ``sbsdiff``.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser

    """
    parser = argparse.ArgumentParser(
        prog="sbsdiff",
        description=(
            "Perform a side-by-side diff of two files, colorized where possible. "
            "Whitespace-only changes are ignored and wide lines are truncated, not wrapped."
        ),
        epilog="Exit status is 0 when the comparison succeeds or the inputs are identical.",
    )

    parser.add_argument("file1", help="Original file (use '-' for stdin)")
    parser.add_argument("file2", help="Modified file (use '-' for stdin)")

    # Comparison options
    parser.add_argument(
        "--diff-option",
        "-o",
        dest="diff_options",
        action="append",
        default=[],
        metavar="OPTION",
        help="Extra option for diff, e.g. -o=--minimal (stackable)",
    )
    parser.add_argument(
        "--word-highlight",
        "-w",
        action="store_true",
        help="Highlight the changed words of modified lines (requires wdiff; slow)",
    )
    parser.add_argument(
        "--width",
        type=positive_int,
        default=None,
        help="Total output width (default: terminal width)",
    )
    parser.add_argument(
        "--jobs",
        "-j",
        type=positive_int,
        default=1,
        help="Number of modified lines to word-highlight in parallel (default: 1)",
    )

    # Output options
    parser.add_argument(
        "--html",
        "-l",
        action="store_true",
        help="Output a standalone HTML page instead of terminal text (disables pager and line numbers)",
    )
    parser.add_argument("--output", "--out", dest="output", metavar="PATH", help="Write output to file")
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Colorize output: auto (default, if terminal or HTML), always, never",
    )
    parser.add_argument(
        "--no-color",
        "-C",
        dest="color",
        action="store_const",
        const="never",
        help="Do not colorize the output (same as --color never)",
    )
    parser.add_argument(
        "--palette",
        choices=["fixed", "probe"],
        default="fixed",
        help="Color source: fixed palette (default) or colors probed from colordiff",
    )
    parser.add_argument(
        "--no-line-numbers",
        "-N",
        dest="line_numbers",
        action="store_false",
        help="Do not number the output lines",
    )
    parser.add_argument("--no-pager", "-P", dest="pager", action="store_false", help="Never use a pager")
    parser.add_argument("--quiet", "-q", action="store_true", help="Do not show notices or input file names")
    parser.add_argument("--rich", action="store_true", help="Format notices with rich when available")

    # External tools
    parser.add_argument("--diff-command", default=DEFAULT_DIFF_COMMAND, metavar="CMD", help="Line diff executable")
    parser.add_argument("--wdiff-command", default=DEFAULT_WDIFF_COMMAND, metavar="CMD", help="Word diff executable")
    parser.add_argument(
        "--colordiff-command",
        default=DEFAULT_COLORDIFF_COMMAND,
        metavar="CMD",
        help="Executable probed by --palette probe",
    )
    parser.add_argument(
        "--timeout",
        type=positive_float,
        default=None,
        metavar="SECONDS",
        help="Abandon any single external tool call after this many seconds",
    )

    # Configuration
    parser.add_argument("--config", metavar="PATH", help="Configuration file (TOML, YAML or JSON)")
    parser.add_argument("--no-config", action="store_true", help="Ignore configuration files")

    # Logging
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output with detailed logging (equivalent to --log-level DEBUG)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level for debugging (default: WARNING)",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        metavar="PATH",
        help="Write log messages to specified file in addition to console output",
    )
    parser.add_argument("--trace", action="store_true", help="Enable trace mode with timestamps and per-tool-call records")
    parser.add_argument("--version", "-V", action="version", version=f"sbsdiff {__version__}")

    return parser


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to an appropriate CLI exit code.

    Parameters
    ----------
    exception : Exception
        The exception to map to an exit code

    Returns
    -------
    int
        The appropriate exit code for the exception type

    """
    # Missing tools are checked before other subprocess failures
    if isinstance(exception, ToolNotFoundError):
        return EXIT_DEPENDENCY_ERROR

    if isinstance(exception, SubprocessFailureError):
        return EXIT_SUBPROCESS_ERROR

    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR

    if isinstance(exception, (InputError, OSError)):
        return EXIT_FILE_ERROR

    if isinstance(exception, UnrecognizedLineFormatError):
        return EXIT_FORMAT_ERROR

    return EXIT_ERROR
