#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sbsdiff/renderers/terminal.py
"""Side-by-side renderer producing ANSI-colored terminal lines.

Unchanged, removed and added lines are wrapped whole in their category
color. Modified lines are either wrapped whole as well or, when a
:class:`~sbsdiff.highlight.WordHighlighter` is supplied, rebuilt from the
word-diffed halves with the separator re-aligned to the flag column.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable

from sbsdiff.classifier import ChangeCategory, RenderedLine
from sbsdiff.colors import ColorScheme
from sbsdiff.highlight import WordHighlighter, alignment_pad_width
from sbsdiff.layout import LayoutPlan

logger = logging.getLogger(__name__)


class SideBySideRenderer:
    """Render classified lines as ANSI text.

    Parameters
    ----------
    scheme : ColorScheme
        Resolved color sequences
    layout : LayoutPlan
        Layout the diff was produced with
    highlighter : WordHighlighter, optional
        When given, modified lines get word-level highlighting
    max_workers : int, default 1
        Number of modified lines highlighted concurrently. Output order is
        always the input order.

    Examples
    --------
    Render a diff without word highlighting:
        >>> from sbsdiff.classifier import classify_lines
        >>> from sbsdiff.colors import DISABLED
        >>> from sbsdiff.layout import plan_layout
        >>> layout = plan_layout(20)
        >>> lines = classify_lines(["same      same"], layout)
        >>> SideBySideRenderer(DISABLED, layout).render(lines)
        ['same      same']

    """

    def __init__(
        self,
        scheme: ColorScheme,
        layout: LayoutPlan,
        highlighter: WordHighlighter | None = None,
        max_workers: int = 1,
    ):
        """Initialize the side-by-side renderer."""
        self.scheme = scheme
        self.layout = layout
        self.highlighter = highlighter
        self.max_workers = max_workers
        self._dispatch: dict[ChangeCategory, Callable[[RenderedLine], str]] = {
            ChangeCategory.UNCHANGED: self._render_whole,
            ChangeCategory.REMOVED: self._render_whole,
            ChangeCategory.ADDED: self._render_whole,
            ChangeCategory.MODIFIED: self._render_modified,
        }

    def render(self, lines: Iterable[RenderedLine]) -> list[str]:
        """Render every line, preserving order.

        Parameters
        ----------
        lines : iterable of RenderedLine
            Classified diff lines

        Returns
        -------
        list of str
            Rendered lines without terminators

        """
        lines = list(lines)
        if self.max_workers > 1 and self.highlighter is not None:
            return self._render_parallel(lines)
        return [self.render_line(line) for line in lines]

    def _render_parallel(self, lines: list[RenderedLine]) -> list[str]:
        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            futures = [executor.submit(self.render_line, line) for line in lines]
            rendered = [future.result() for future in futures]
        except BaseException:
            # Queued lines would each still run two wdiff passes
            executor.shutdown(wait=True, cancel_futures=True)
            raise
        executor.shutdown(wait=True)
        return rendered

    def render_line(self, line: RenderedLine) -> str:
        """Render a single classified line."""
        return self._dispatch[line.category](line)

    def _render_whole(self, line: RenderedLine) -> str:
        return self.scheme.colorize(line.category, line.raw)

    def _render_modified(self, line: RenderedLine) -> str:
        if self.highlighter is None or line.left is None or line.right is None:
            return self._render_whole(line)

        left_marked, right_marked = self.highlighter.highlight(line.left, line.right, left_blank=line.left_blank)
        pad_width = alignment_pad_width(left_marked, self.layout)
        logger.debug(
            "Line %s: left %d chars plain, %d marked; padding to %d",
            line.line_number,
            len(line.left),
            len(left_marked),
            pad_width,
        )
        separator = self.scheme.colorize(ChangeCategory.MODIFIED, "|")
        return f"{left_marked.ljust(pad_width)}{separator} {right_marked}"
