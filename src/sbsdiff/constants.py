#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for sbsdiff.

This module centralizes the hardcoded values used across the side-by-side
renderer: the width contract with the external ``diff`` tool, the fixed
color palette, the inputs used to probe ``colordiff``, and the HTML colors
that mirror the terminal palette.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Layout - Width and column arithmetic
3. Color Palette - ANSI control sequences
4. External Tools - Command names and probe inputs
5. HTML Output - Document defaults and CSS colors
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

ColorMode = Literal["fixed", "probe", "disabled"]
OutputFormat = Literal["ansi", "html"]

# =============================================================================
# Layout
# =============================================================================

# Narrowest width that still leaves room for a flag column and some content
MIN_DISPLAY_WIDTH = 4

DEFAULT_WIDTH = 80

# Both `cat -n` and `less -N` reserve 8 columns for line numbers
LINE_NUMBER_GUTTER = 8
LINE_NUMBER_FORMAT = "{number:6d}\t{line}"

# Lines the shell prints after the command finishes (blank line, path, prompt)
RESERVED_PROMPT_LINES = 3

LINE_NUMBER_NOTICE = (
    "Note: line numbers are for diff output only (and likely not the actual line numbers of the input files)"
)

# =============================================================================
# Color Palette
# =============================================================================

ANSI_RESET = "\x1b[0;0m"
ANSI_BRIGHT_RED = "\x1b[1;31m"
ANSI_BRIGHT_BLUE = "\x1b[1;34m"
ANSI_BRIGHT_MAGENTA = "\x1b[1;35m"

# Matches any CSI sequence (colors, cursor movement, erase)
ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")

# A color directive at the start of a line, up to and including its terminator
LEADING_COLOR_RE = re.compile(r"^\x1b\[[0-9;]*m")
TRAILING_COLOR_RE = re.compile(r"\x1b\[[0-9;]*m\s*$")

# =============================================================================
# External Tools
# =============================================================================

DEFAULT_DIFF_COMMAND = "diff"
DEFAULT_WDIFF_COMMAND = "wdiff"
DEFAULT_COLORDIFF_COMMAND = "colordiff"

# Exit status 1 means "differences found" for diff, colordiff and wdiff
TOOL_SUCCESS_CODES = (0, 1)

# Text exchanged with the tools is UTF-8; undecodable bytes round-trip as
# lone surrogates so that inputs differing only in them stay different
TOOL_TEXT_ENCODING = "utf-8"
TOOL_TEXT_ERRORS = "surrogateescape"

DEFAULT_TOOL_TIMEOUT: float | None = None

# Always passed to diff: whitespace-only changes are ignored and tabs are
# expanded so they never act as the column separator
BASE_DIFF_OPTIONS = ("--ignore-space-change", "--expand-tabs", "--side-by-side")

PROBE_WIDTH = 40
PROBE_LEFT_LINES = ("only on the left", "identical line", "left version")
PROBE_RIGHT_LINES = ("identical line", "right version", "only on the right")

# =============================================================================
# HTML Output
# =============================================================================

DEFAULT_HTML_TITLE = "Side-by-side comparison"

HTML_CATEGORY_COLORS = {
    "unchanged": "inherit",
    "removed": "red",
    "added": "blue",
    "changed": "magenta",
}

# =============================================================================
# Input Preparation
# =============================================================================

INPUT_HEADER_FORMAT = "INPUT: {name}\n"
STDIN_LABEL = "-"
