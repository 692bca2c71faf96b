#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sbsdiff/highlight.py
"""Word-level highlighting of modified lines.

For a line the line-diff tool flagged as modified, ``wdiff`` is run twice on
the two halves: once keeping only deletions (the left side) and once keeping
only insertions (the right side). Changed spans are wrapped in the color
scheme's ``changed`` and ``reset`` sequences.

The marked left half contains invisible control bytes, so padding it with a
plain fixed field width would push the separator out of its column.
:func:`alignment_pad_width` widens the field by exactly the number of
invisible characters.
"""

from __future__ import annotations

import logging
import subprocess

from sbsdiff.colors import ColorScheme, visible_length
from sbsdiff.constants import DEFAULT_WDIFF_COMMAND
from sbsdiff.layout import LayoutPlan
from sbsdiff.tools import Runner, run_tool, scratch_file

logger = logging.getLogger(__name__)


def alignment_pad_width(left_marked: str, layout: LayoutPlan) -> int:
    """Field width that puts the separator in the flag column.

    The nominal width is ``split_point - 1`` visible columns; every control
    sequence character in ``left_marked`` is added on top of that.

    Parameters
    ----------
    left_marked : str
        Left half, possibly containing control sequences
    layout : LayoutPlan
        Layout the line was produced with

    Returns
    -------
    int
        Width to pass to ``str.ljust``

    """
    invisible = len(left_marked) - visible_length(left_marked)
    return layout.flag_index + invisible


class WordHighlighter:
    """Mark changed words in the two halves of a modified line.

    Parameters
    ----------
    scheme : ColorScheme
        Supplies the ``changed`` start and ``reset`` sequences used as markers
    wdiff_command : str, default "wdiff"
        Word-diff executable
    runner : callable, default subprocess.run
        Process runner
    timeout : float, optional
        Seconds before a single ``wdiff`` call is abandoned

    Examples
    --------
    >>> from sbsdiff.colors import FIXED_PALETTE
    >>> highlighter = WordHighlighter(FIXED_PALETTE)
    >>> left, right = highlighter.highlight("the old text", "the new text")  # doctest: +SKIP

    """

    def __init__(
        self,
        scheme: ColorScheme,
        wdiff_command: str = DEFAULT_WDIFF_COMMAND,
        runner: Runner = subprocess.run,
        timeout: float | None = None,
    ):
        """Initialize the word highlighter."""
        self.scheme = scheme
        self.wdiff_command = wdiff_command
        self.runner = runner
        self.timeout = timeout

    def highlight(self, left: str, right: str, left_blank: bool = False) -> tuple[str, str]:
        """Word-diff one pair of halves.

        Parameters
        ----------
        left : str
            Plain left half
        right : str
            Plain right half
        left_blank : bool, default False
            True when ``left`` stands in for an empty left half. The tool then
            sees an empty left text and the marked left half is a single space.

        Returns
        -------
        tuple of (str, str)
            Left half with deletions marked, right half with insertions marked

        Raises
        ------
        SubprocessFailureError
            If either ``wdiff`` pass fails

        """
        left_text = "" if left_blank else left

        with scratch_file(left_text) as left_path, scratch_file(right) as right_path:
            left_marked = self._run(
                "--no-inserted",
                f"--start-delete={self.scheme.changed}",
                f"--end-delete={self.scheme.reset}",
                left_path=str(left_path),
                right_path=str(right_path),
            )
            right_marked = self._run(
                "--no-deleted",
                f"--start-insert={self.scheme.changed}",
                f"--end-insert={self.scheme.reset}",
                left_path=str(left_path),
                right_path=str(right_path),
            )

        if left_blank:
            left_marked = " "

        return left_marked, right_marked

    def _run(self, *options: str, left_path: str, right_path: str) -> str:
        command = [self.wdiff_command, *options, left_path, right_path]
        return run_tool(command, runner=self.runner, timeout=self.timeout).rstrip("\n")
