#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/sbsdiff/options.py
"""Options controlling a side-by-side comparison.

:class:`SideBySideOptions` is an immutable bundle of every setting the
pipeline needs, from the display width to the names of the external tools.
Use :meth:`SideBySideOptions.create_updated` to derive modified copies.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any, get_args

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from sbsdiff.constants import (
    DEFAULT_COLORDIFF_COMMAND,
    DEFAULT_DIFF_COMMAND,
    DEFAULT_TOOL_TIMEOUT,
    DEFAULT_WDIFF_COMMAND,
    DEFAULT_WIDTH,
    ColorMode,
    OutputFormat,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class SideBySideOptions(CloneFrozenMixin):
    """Configuration for rendering a side-by-side diff.

    Parameters
    ----------
    width : int, default 80
        Total display width of one rendered line
    word_highlight : bool, default False
        Mark changed words inside modified lines
    output_format : {"ansi", "html"}, default "ansi"
        Terminal text or a standalone HTML document
    color_mode : {"fixed", "probe", "disabled"}, default "fixed"
        Source of the color sequences
    diff_options : tuple of str, default ()
        Extra options passed to the line-diff tool
    diff_command : str, default "diff"
        Line-diff executable
    wdiff_command : str, default "wdiff"
        Word-diff executable
    colordiff_command : str, default "colordiff"
        Executable probed when ``color_mode`` is "probe"
    tool_timeout : float, optional
        Seconds before any single tool call is abandoned
    max_workers : int, default 1
        Modified lines word-highlighted concurrently
    title : str, optional
        Title of the HTML document
    description : str, optional
        Description meta tag of the HTML document

    """

    width: int = field(default=DEFAULT_WIDTH, metadata={"help": "Total display width"})
    word_highlight: bool = field(default=False, metadata={"help": "Highlight changed words in modified lines"})
    output_format: OutputFormat = field(default="ansi", metadata={"help": "Output format"})
    color_mode: ColorMode = field(default="fixed", metadata={"help": "Source of color sequences"})
    diff_options: tuple[str, ...] = field(default=(), metadata={"help": "Extra options for diff"})
    diff_command: str = DEFAULT_DIFF_COMMAND
    wdiff_command: str = DEFAULT_WDIFF_COMMAND
    colordiff_command: str = DEFAULT_COLORDIFF_COMMAND
    tool_timeout: float | None = DEFAULT_TOOL_TIMEOUT
    max_workers: int = field(default=1, metadata={"help": "Parallel word-highlight workers"})
    title: str | None = None
    description: str | None = None

    def __post_init__(self) -> None:
        """Validate option values."""
        if self.output_format not in get_args(OutputFormat):
            raise ValueError(f"Invalid output format: {self.output_format}. Must be one of: ansi, html")
        if self.color_mode not in get_args(ColorMode):
            raise ValueError(f"Invalid color mode: {self.color_mode}. Must be one of: fixed, probe, disabled")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
        if self.tool_timeout is not None and self.tool_timeout <= 0:
            raise ValueError(f"tool_timeout must be positive, got {self.tool_timeout}")
        # Lists from config files are frozen into tuples
        if not isinstance(self.diff_options, tuple):
            object.__setattr__(self, "diff_options", tuple(self.diff_options))
