#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sbsdiff/cli/inputs.py
"""Input preparation for the sbsdiff command line.

Both inputs are read completely before anything is compared. Either may be
a regular file, a readable pipe, or ``-`` for stdin (but not both). The
prepared buffers have CRLF line endings converted to LF and, unless quiet,
start with an ``INPUT: <name>`` header line.
"""

from __future__ import annotations

import logging
import sys
import tempfile
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator

from sbsdiff.constants import INPUT_HEADER_FORMAT, STDIN_LABEL, TOOL_TEXT_ENCODING, TOOL_TEXT_ERRORS
from sbsdiff.exceptions import InputError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedInput:
    """One input buffer ready for comparison.

    Parameters
    ----------
    name : str
        Name given on the command line
    raw : bytes
        Content exactly as read
    text : str
        Decoded content with LF line endings and the optional header

    """

    name: str
    raw: bytes
    text: str


def validate_input_names(left: str, right: str) -> None:
    """Reject reading stdin for both inputs.

    Raises
    ------
    InputError
        If both names are ``-``

    """
    if left == STDIN_LABEL and right == STDIN_LABEL:
        raise InputError("Only one of the inputs may be read from stdin", file_path=STDIN_LABEL)


def read_input(name: str, stdin: BinaryIO | None = None) -> bytes:
    """Read one input completely.

    Parameters
    ----------
    name : str
        File path, or ``-`` for stdin
    stdin : binary stream, optional
        Stream used for ``-``; defaults to ``sys.stdin.buffer``

    Returns
    -------
    bytes
        Raw content

    Raises
    ------
    InputError
        If the input does not exist or cannot be read

    """
    if name == STDIN_LABEL:
        stream = stdin if stdin is not None else sys.stdin.buffer
        try:
            return stream.read()
        except OSError as e:
            raise InputError(f"Cannot read stdin: {e}", file_path=name, original_error=e) from e

    path = Path(name)
    if path.is_dir():
        raise InputError(f"Input is a directory: {name}", file_path=name)
    try:
        # open().read() also accepts pipes such as /dev/fd/N
        with open(path, "rb") as f:
            return f.read()
    except FileNotFoundError as e:
        raise InputError(f"Input file not found: {name}", file_path=name, original_error=e) from e
    except OSError as e:
        raise InputError(f"Cannot read input {name}: {e}", file_path=name, original_error=e) from e


def normalize_text(raw: bytes, name: str, quiet: bool = False) -> str:
    """Decode raw input, convert CRLF to LF and add the header line.

    Bytes that are not valid UTF-8 decode to lone surrogates and are
    written back unchanged when the buffer is handed to the tools.
    """
    text = raw.decode(TOOL_TEXT_ENCODING, errors=TOOL_TEXT_ERRORS)
    if "\r\n" in text:
        logger.debug("Converting CRLF line endings in %s", name)
        text = text.replace("\r\n", "\n")
    if not quiet:
        text = INPUT_HEADER_FORMAT.format(name=name) + text
    return text


def prepare_inputs(
    left: str, right: str, quiet: bool = False, stdin: BinaryIO | None = None
) -> tuple[PreparedInput, PreparedInput]:
    """Read and normalize both inputs.

    Parameters
    ----------
    left, right : str
        Input names from the command line
    quiet : bool, default False
        Omit the ``INPUT:`` header lines
    stdin : binary stream, optional
        Stream used for ``-``

    Returns
    -------
    tuple of PreparedInput
        The left and right inputs

    """
    validate_input_names(left, right)
    prepared = []
    for name in (left, right):
        raw = read_input(name, stdin=stdin)
        prepared.append(PreparedInput(name=name, raw=raw, text=normalize_text(raw, name, quiet=quiet)))
    return prepared[0], prepared[1]


@contextmanager
def materialized(left: PreparedInput, right: PreparedInput) -> Iterator[tuple[Path, Path]]:
    """Write both prepared buffers to a temporary directory.

    The directory is removed when the context exits, whether or not the
    comparison succeeded.

    Yields
    ------
    tuple of Path
        Paths of the left and right buffers

    """
    with tempfile.TemporaryDirectory(prefix="sbsdiff-") as temp_dir:
        left_path = Path(temp_dir) / "left"
        right_path = Path(temp_dir) / "right"
        left_path.write_text(left.text, encoding=TOOL_TEXT_ENCODING, errors=TOOL_TEXT_ERRORS, newline="")
        right_path.write_text(right.text, encoding=TOOL_TEXT_ENCODING, errors=TOOL_TEXT_ERRORS, newline="")
        yield left_path, right_path
