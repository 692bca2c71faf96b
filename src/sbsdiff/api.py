#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sbsdiff/api.py
"""Python API for side-by-side comparison.

This module wires the pipeline together: plan the layout, resolve the
color scheme, run the line-diff tool, classify its output, optionally
word-highlight modified lines, and render ANSI text or HTML.

Every line is classified and rendered before anything is returned, so a
failure anywhere leaves the caller with an exception and no partial output.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from sbsdiff.classifier import classify_lines
from sbsdiff.colors import FIXED_PALETTE, ColorScheme, resolve_color_scheme
from sbsdiff.constants import TOOL_TEXT_ENCODING, TOOL_TEXT_ERRORS
from sbsdiff.highlight import WordHighlighter
from sbsdiff.layout import LayoutPlan, plan_layout
from sbsdiff.options import SideBySideOptions
from sbsdiff.renderers import AnsiHtmlRenderer, SideBySideRenderer
from sbsdiff.tools import Runner, files_identical, run_side_by_side_diff

logger = logging.getLogger(__name__)


@dataclass
class DiffOutcome:
    """Result of a side-by-side comparison.

    Parameters
    ----------
    identical : bool
        True when the inputs matched byte for byte and no diff was run
    lines : list of str
        Rendered ANSI lines (empty when identical)
    output : str
        Final output: the joined ANSI lines or the HTML document
    output_format : {"ansi", "html"}
        Format of ``output``
    layout : LayoutPlan, optional
        Layout used for the diff
    scheme : ColorScheme, optional
        Color scheme used for rendering

    """

    identical: bool
    lines: list[str] = field(default_factory=list)
    output: str = ""
    output_format: str = "ansi"
    layout: LayoutPlan | None = None
    scheme: ColorScheme | None = None


def render_side_by_side(
    raw_lines: Sequence[str],
    layout: LayoutPlan,
    scheme: ColorScheme,
    highlighter: WordHighlighter | None = None,
    max_workers: int = 1,
) -> list[str]:
    """Classify and render the raw output of the line-diff tool.

    Parameters
    ----------
    raw_lines : sequence of str
        Lines printed by ``diff --side-by-side`` at ``layout.total_width``
    layout : LayoutPlan
        Layout the lines were produced with
    scheme : ColorScheme
        Resolved color sequences
    highlighter : WordHighlighter, optional
        Enables word-level highlighting of modified lines
    max_workers : int, default 1
        Modified lines highlighted concurrently

    Returns
    -------
    list of str
        Rendered lines

    Raises
    ------
    UnrecognizedLineFormatError
        If any line breaks the flag-column contract
    SubprocessFailureError
        If word highlighting fails for any line

    """
    classified = classify_lines(raw_lines, layout)
    renderer = SideBySideRenderer(scheme, layout, highlighter=highlighter, max_workers=max_workers)
    return renderer.render(classified)


def resolve_scheme_for(options: SideBySideOptions, runner: Runner = subprocess.run) -> ColorScheme:
    """Resolve the color scheme once for a run, falling back to the fixed palette."""
    return resolve_color_scheme(
        options.color_mode,
        fallback=FIXED_PALETTE,
        colordiff_command=options.colordiff_command,
        runner=runner,
        timeout=options.tool_timeout,
    )


def compare_files(
    left_path: str | Path,
    right_path: str | Path,
    options: SideBySideOptions | None = None,
    *,
    scheme: ColorScheme | None = None,
    runner: Runner = subprocess.run,
) -> DiffOutcome:
    """Compare two files side by side.

    Parameters
    ----------
    left_path : str or Path
        Original file
    right_path : str or Path
        Modified file
    options : SideBySideOptions, optional
        Rendering options; defaults are used when omitted
    scheme : ColorScheme, optional
        Pre-resolved color scheme. When omitted it is resolved from
        ``options.color_mode``.
    runner : callable, default subprocess.run
        Process runner used for every external tool

    Returns
    -------
    DiffOutcome
        Rendered comparison, or an ``identical`` outcome without output

    Raises
    ------
    InvalidWidthError
        If ``options.width`` is too small
    UnrecognizedLineFormatError
        If the diff output cannot be parsed
    SubprocessFailureError
        If an external tool fails or is missing

    Examples
    --------
    Compare two files with word highlighting:
        >>> from sbsdiff import SideBySideOptions, compare_files
        >>> outcome = compare_files("a.txt", "b.txt", SideBySideOptions(width=120, word_highlight=True))
        >>> print(outcome.output)

    """
    options = options or SideBySideOptions()
    layout = plan_layout(options.width)

    if files_identical(left_path, right_path):
        logger.info("Inputs are identical; skipping diff")
        return DiffOutcome(identical=True, output_format=options.output_format, layout=layout)

    if scheme is None:
        scheme = resolve_scheme_for(options, runner=runner)

    raw_lines = run_side_by_side_diff(
        left_path,
        right_path,
        layout,
        diff_command=options.diff_command,
        extra_options=options.diff_options,
        runner=runner,
        timeout=options.tool_timeout,
    )
    logger.debug("diff produced %d lines", len(raw_lines))

    highlighter = None
    if options.word_highlight:
        highlighter = WordHighlighter(
            scheme, wdiff_command=options.wdiff_command, runner=runner, timeout=options.tool_timeout
        )

    lines = render_side_by_side(raw_lines, layout, scheme, highlighter=highlighter, max_workers=options.max_workers)

    if options.output_format == "html":
        output = AnsiHtmlRenderer(scheme, title=options.title, description=options.description).render(lines)
    else:
        output = "\n".join(lines) + "\n" if lines else ""

    return DiffOutcome(
        identical=False,
        lines=lines,
        output=output,
        output_format=options.output_format,
        layout=layout,
        scheme=scheme,
    )


def compare_texts(
    left_text: str,
    right_text: str,
    options: SideBySideOptions | None = None,
    *,
    scheme: ColorScheme | None = None,
    runner: Runner = subprocess.run,
) -> DiffOutcome:
    """Compare two in-memory texts side by side.

    The texts are written to a temporary directory that is removed when the
    comparison finishes, whether or not it succeeds.

    Parameters
    ----------
    left_text : str
        Original text
    right_text : str
        Modified text
    options : SideBySideOptions, optional
        Rendering options
    scheme : ColorScheme, optional
        Pre-resolved color scheme
    runner : callable, default subprocess.run
        Process runner used for every external tool

    Returns
    -------
    DiffOutcome
        Rendered comparison

    Examples
    --------
    >>> from sbsdiff import compare_texts
    >>> outcome = compare_texts("hello world\\n", "hello there\\n")
    >>> outcome.identical
    False

    """
    options = options or SideBySideOptions()
    if left_text == right_text:
        return DiffOutcome(identical=True, output_format=options.output_format, layout=plan_layout(options.width))

    with tempfile.TemporaryDirectory(prefix="sbsdiff-") as temp_dir:
        left_path = Path(temp_dir) / "left"
        right_path = Path(temp_dir) / "right"
        left_path.write_text(left_text, encoding=TOOL_TEXT_ENCODING, errors=TOOL_TEXT_ERRORS, newline="")
        right_path.write_text(right_text, encoding=TOOL_TEXT_ENCODING, errors=TOOL_TEXT_ERRORS, newline="")
        return compare_files(left_path, right_path, options, scheme=scheme, runner=runner)


__all__ = [
    "DiffOutcome",
    "compare_files",
    "compare_texts",
    "render_side_by_side",
    "resolve_scheme_for",
]
