#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sbsdiff/classifier.py
"""Classification of side-by-side diff output lines.

Each line produced by ``diff --side-by-side`` carries a one-character
status flag at the split point. This module maps that flag to a
:class:`ChangeCategory` and, for modified lines, cuts the line into its
plain left and right halves so they can be word-diffed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from sbsdiff.exceptions import UnrecognizedLineFormatError
from sbsdiff.layout import LayoutPlan


class ChangeCategory(str, Enum):
    """What the line-diff tool reported for one output line."""

    UNCHANGED = "unchanged"
    REMOVED = "removed"
    ADDED = "added"
    MODIFIED = "changed"


FLAG_CATEGORIES: dict[str, ChangeCategory] = {
    " ": ChangeCategory.UNCHANGED,
    "<": ChangeCategory.REMOVED,
    ">": ChangeCategory.ADDED,
    "|": ChangeCategory.MODIFIED,
}


@dataclass(frozen=True)
class RenderedLine:
    """A classified diff line.

    Parameters
    ----------
    category : ChangeCategory
        Status reported by the flag column
    raw : str
        The untouched two-column text
    line_number : int, optional
        1-based position within the diff output
    left : str, optional
        Plain left half, trailing spaces removed (modified lines only)
    right : str, optional
        Plain right half (modified lines only)
    left_blank : bool, default False
        True when the left half was empty and replaced by a single space

    """

    category: ChangeCategory
    raw: str
    line_number: int | None = None
    left: str | None = None
    right: str | None = None
    left_blank: bool = False


def classify_line(line: str, layout: LayoutPlan, line_number: int | None = None) -> RenderedLine:
    """Determine the category of one side-by-side line.

    Parameters
    ----------
    line : str
        Raw output line, without its line terminator
    layout : LayoutPlan
        Offsets matching the width the line was produced with
    line_number : int, optional
        Position of the line, used in error messages

    Returns
    -------
    RenderedLine
        The classified line; modified lines also carry their split halves

    Raises
    ------
    UnrecognizedLineFormatError
        If the flag column holds an unknown character, or the line is too
        short to contain a flag and is not entirely blank

    """
    flag_index = layout.flag_index

    if len(line) <= flag_index:
        if not line.strip():
            return RenderedLine(ChangeCategory.UNCHANGED, line, line_number)
        raise UnrecognizedLineFormatError(line, layout.split_point, None, line_number)

    flag = line[flag_index]
    category = FLAG_CATEGORIES.get(flag)
    if category is None:
        raise UnrecognizedLineFormatError(line, layout.split_point, flag, line_number)

    if category is not ChangeCategory.MODIFIED:
        return RenderedLine(category, line, line_number)

    left = line[: layout.lhs_cut_offset].rstrip()
    left_blank = not left
    if left_blank:
        # An empty left half throws off the padding arithmetic downstream
        left = " "
    right = line[layout.rhs_offset :]

    return RenderedLine(category, line, line_number, left=left, right=right, left_blank=left_blank)


def classify_lines(lines: Iterable[str], layout: LayoutPlan) -> list[RenderedLine]:
    """Classify every line of a side-by-side diff.

    All lines are classified before anything is rendered, so a malformed
    line anywhere in the output aborts the run without partial output.

    Parameters
    ----------
    lines : iterable of str
        Raw output lines
    layout : LayoutPlan
        Offsets matching the width the lines were produced with

    Returns
    -------
    list of RenderedLine
        Classified lines in input order

    """
    return [classify_line(line, layout, number) for number, line in enumerate(lines, start=1)]
