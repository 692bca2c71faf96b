"""sbsdiff - Colorized side-by-side text comparison.

sbsdiff drives GNU ``diff --side-by-side`` at an exact display width and
decorates its output. Lines are colored by change category, modified lines
can be word-highlighted with ``wdiff``, and the colored result can be
transliterated into a standalone HTML page.

Key Features
------------
- Column-exact two-column layout for any terminal width
- Fixed, probed (``colordiff``) or disabled color schemes
- Word-level highlighting that keeps the separator column aligned
- HTML output with the terminal palette mapped to CSS classes

Requirements
------------
- Python 3.10+
- GNU diffutils; ``wdiff`` for word highlighting; optionally ``colordiff``

Examples
--------
Compare two files:

    >>> from sbsdiff import compare_files
    >>> outcome = compare_files("old.txt", "new.txt")
    >>> print(outcome.output)

Word highlighting as HTML:

    >>> from sbsdiff import SideBySideOptions, compare_files
    >>> options = SideBySideOptions(width=160, word_highlight=True, output_format="html")
    >>> html = compare_files("old.txt", "new.txt", options).output

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "sbsdiff requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "1.0.0"

from sbsdiff.api import DiffOutcome, compare_files, compare_texts, render_side_by_side
from sbsdiff.classifier import ChangeCategory, RenderedLine, classify_line, classify_lines
from sbsdiff.colors import DISABLED, FIXED_PALETTE, ColorScheme, probe_color_scheme, resolve_color_scheme
from sbsdiff.exceptions import (
    ColorProbeError,
    InvalidWidthError,
    SbsDiffError,
    SubprocessFailureError,
    ToolNotFoundError,
    UnrecognizedLineFormatError,
)
from sbsdiff.highlight import WordHighlighter, alignment_pad_width
from sbsdiff.layout import LayoutPlan, plan_layout
from sbsdiff.options import SideBySideOptions
from sbsdiff.renderers import AnsiHtmlRenderer, SideBySideRenderer

__all__ = [
    "__version__",
    # Pipeline
    "compare_files",
    "compare_texts",
    "render_side_by_side",
    "DiffOutcome",
    "SideBySideOptions",
    # Components
    "plan_layout",
    "LayoutPlan",
    "resolve_color_scheme",
    "probe_color_scheme",
    "ColorScheme",
    "FIXED_PALETTE",
    "DISABLED",
    "classify_line",
    "classify_lines",
    "ChangeCategory",
    "RenderedLine",
    "WordHighlighter",
    "alignment_pad_width",
    "SideBySideRenderer",
    "AnsiHtmlRenderer",
    # Errors
    "SbsDiffError",
    "InvalidWidthError",
    "ColorProbeError",
    "UnrecognizedLineFormatError",
    "SubprocessFailureError",
    "ToolNotFoundError",
]
