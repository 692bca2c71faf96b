#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sbsdiff/layout.py
"""Column layout for side-by-side output.

GNU ``diff --side-by-side --width=W`` places its one-character status flag
at column ``ceil(W / 2)``. The left half is truncated so that one blank
column always precedes the flag, and the right half starts one column after
it. Every downstream step slices lines using the offsets computed here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sbsdiff.constants import MIN_DISPLAY_WIDTH
from sbsdiff.exceptions import InvalidWidthError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutPlan:
    """Offsets shared by every step that slices a side-by-side line.

    Parameters
    ----------
    total_width : int
        Display width handed to the line-diff tool
    split_point : int
        1-based column of the status flag
    lhs_cut_offset : int
        Length of the left-hand slice taken from a modified line
    lhs_budget : int
        Maximum characters the tool shows per side (informational)

    """

    total_width: int
    split_point: int
    lhs_cut_offset: int
    lhs_budget: int

    @property
    def flag_index(self) -> int:
        """0-based offset of the status flag within a line."""
        return self.split_point - 1

    @property
    def rhs_offset(self) -> int:
        """0-based offset where the right-hand text begins."""
        return self.split_point + 1


def plan_layout(total_width: int) -> LayoutPlan:
    """Compute the two-column split for a display width.

    Parameters
    ----------
    total_width : int
        Total columns for one rendered line, both sides and the separator

    Returns
    -------
    LayoutPlan
        Split point and slicing offsets

    Raises
    ------
    InvalidWidthError
        If the width is not an integer or is narrower than ``MIN_DISPLAY_WIDTH``

    Examples
    --------
    >>> plan_layout(80).split_point
    40
    >>> plan_layout(81).split_point
    41

    """
    if isinstance(total_width, bool) or not isinstance(total_width, int) or total_width < MIN_DISPLAY_WIDTH:
        raise InvalidWidthError(total_width, MIN_DISPLAY_WIDTH)

    split_point = -(-total_width // 2)
    plan = LayoutPlan(
        total_width=total_width,
        split_point=split_point,
        lhs_cut_offset=split_point - 2,
        lhs_budget=split_point - 2,
    )
    logger.debug(
        "Layout for width %d: split point %d, max width per side %d", total_width, split_point, plan.lhs_budget
    )
    return plan
