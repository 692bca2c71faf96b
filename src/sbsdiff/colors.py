#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/sbsdiff/colors.py
"""Color scheme resolution.

A :class:`ColorScheme` holds one start sequence per change category plus
the shared reset sequence. It is resolved once per run and then passed
explicitly to every renderer.

Three sources are supported:

- ``"fixed"``: the built-in bright red/blue/magenta palette
- ``"probe"``: sequences scraped from ``colordiff`` by diffing a tiny,
  known pair of inputs
- ``"disabled"``: every sequence is the empty string

Probing couples sbsdiff to another program's output format, so any
deviation from the expected shape raises :class:`ColorProbeError` and the
caller decides whether to fall back.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass

from sbsdiff.classifier import ChangeCategory, classify_lines
from sbsdiff.constants import (
    ANSI_BRIGHT_BLUE,
    ANSI_BRIGHT_MAGENTA,
    ANSI_BRIGHT_RED,
    ANSI_ESCAPE_RE,
    ANSI_RESET,
    BASE_DIFF_OPTIONS,
    DEFAULT_COLORDIFF_COMMAND,
    LEADING_COLOR_RE,
    PROBE_LEFT_LINES,
    PROBE_RIGHT_LINES,
    PROBE_WIDTH,
    TRAILING_COLOR_RE,
    ColorMode,
)
from sbsdiff.exceptions import ColorProbeError, SbsDiffError, UnrecognizedLineFormatError
from sbsdiff.layout import plan_layout
from sbsdiff.tools import Runner, run_tool, scratch_file

logger = logging.getLogger(__name__)

# Order in which colordiff prints the probe lines
PROBE_CATEGORY_ORDER = (
    ChangeCategory.REMOVED,
    ChangeCategory.UNCHANGED,
    ChangeCategory.MODIFIED,
    ChangeCategory.ADDED,
)


@dataclass(frozen=True)
class ColorScheme:
    """Control sequences for each change category.

    Parameters
    ----------
    unchanged, removed, added, changed : str
        Start sequence emitted before text of that category
    reset : str
        Sequence emitted after every colorized span

    """

    unchanged: str
    removed: str
    added: str
    changed: str
    reset: str

    def start(self, category: ChangeCategory) -> str:
        """Return the start sequence for ``category``."""
        return getattr(self, category.value)

    def colorize(self, category: ChangeCategory, text: str) -> str:
        """Wrap ``text`` in the category start sequence and the reset."""
        return f"{self.start(category)}{text}{self.reset}"

    @property
    def enabled(self) -> bool:
        """True when any sequence is non-empty."""
        return any((self.unchanged, self.removed, self.added, self.changed, self.reset))


FIXED_PALETTE = ColorScheme(
    unchanged="",
    removed=ANSI_BRIGHT_RED,
    added=ANSI_BRIGHT_BLUE,
    changed=ANSI_BRIGHT_MAGENTA,
    reset=ANSI_RESET,
)

DISABLED = ColorScheme(unchanged="", removed="", added="", changed="", reset="")


def strip_ansi(text: str) -> str:
    """Remove all ANSI control sequences from ``text``."""
    return ANSI_ESCAPE_RE.sub("", text)


def visible_length(text: str) -> int:
    """Number of characters ``text`` occupies once control sequences are interpreted."""
    return len(strip_ansi(text))


def _leading_sequence(line: str) -> str:
    match = LEADING_COLOR_RE.match(line)
    return match.group(0) if match else ""


def _trailing_sequence(line: str) -> str:
    match = TRAILING_COLOR_RE.search(line)
    return match.group(0).rstrip() if match else ""


def probe_color_scheme(
    colordiff_command: str = DEFAULT_COLORDIFF_COMMAND,
    *,
    runner: Runner = subprocess.run,
    timeout: float | None = None,
) -> ColorScheme:
    """Extract a color scheme from ``colordiff``'s side-by-side output.

    Two fixed three-line inputs are compared so that the output contains,
    in order, one removed, one unchanged, one changed and one added line.
    The leading control sequence of each line becomes that category's start
    sequence; the sequence closing the removed line becomes the reset.

    Parameters
    ----------
    colordiff_command : str, default "colordiff"
        Executable to probe
    runner : callable, default subprocess.run
        Process runner
    timeout : float, optional
        Seconds before the probe is abandoned

    Returns
    -------
    ColorScheme
        Sequences emitted by the tool

    Raises
    ------
    ColorProbeError
        If the tool is missing, fails, or emits an unexpected shape

    """
    layout = plan_layout(PROBE_WIDTH)
    left_text = "\n".join(PROBE_LEFT_LINES) + "\n"
    right_text = "\n".join(PROBE_RIGHT_LINES) + "\n"

    with scratch_file(left_text) as left_path, scratch_file(right_text) as right_path:
        command = [
            colordiff_command,
            "--color=yes",
            f"--width={layout.total_width}",
            *BASE_DIFF_OPTIONS,
            str(left_path),
            str(right_path),
        ]
        try:
            output = run_tool(command, runner=runner, timeout=timeout)
        except SbsDiffError as e:
            raise ColorProbeError(e.message, command=command, original_error=e) from e

    lines = [line for line in output.split("\n") if line.strip()]
    if len(lines) != len(PROBE_CATEGORY_ORDER):
        raise ColorProbeError(f"expected {len(PROBE_CATEGORY_ORDER)} output lines, got {len(lines)}", command)

    try:
        categories = tuple(item.category for item in classify_lines([strip_ansi(line) for line in lines], layout))
    except UnrecognizedLineFormatError as e:
        raise ColorProbeError(f"unexpected line layout: {e.message}", command, original_error=e) from e
    if categories != PROBE_CATEGORY_ORDER:
        found = ", ".join(category.value for category in categories)
        raise ColorProbeError(f"unexpected line order: {found}", command)

    starts = {category: _leading_sequence(line) for category, line in zip(PROBE_CATEGORY_ORDER, lines)}
    for category in (ChangeCategory.REMOVED, ChangeCategory.ADDED, ChangeCategory.MODIFIED):
        if not starts[category]:
            raise ColorProbeError(f"no color sequence on the {category.value} line", command)

    reset = _trailing_sequence(lines[0])
    if not reset:
        raise ColorProbeError("no reset sequence after the removed line", command)

    scheme = ColorScheme(
        unchanged=starts[ChangeCategory.UNCHANGED],
        removed=starts[ChangeCategory.REMOVED],
        added=starts[ChangeCategory.ADDED],
        changed=starts[ChangeCategory.MODIFIED],
        reset=reset,
    )
    logger.debug("Probed color scheme from %s: %r", colordiff_command, scheme)
    return scheme


def resolve_color_scheme(
    mode: ColorMode,
    *,
    fallback: ColorScheme | None = None,
    colordiff_command: str = DEFAULT_COLORDIFF_COMMAND,
    runner: Runner = subprocess.run,
    timeout: float | None = None,
) -> ColorScheme:
    """Resolve the color scheme for a run.

    Parameters
    ----------
    mode : {"fixed", "probe", "disabled"}
        Where the sequences come from
    fallback : ColorScheme, optional
        Scheme returned when probing fails. Without one, the probe error
        propagates to the caller.
    colordiff_command : str, default "colordiff"
        Executable probed in ``"probe"`` mode
    runner : callable, default subprocess.run
        Process runner
    timeout : float, optional
        Seconds before the probe is abandoned

    Returns
    -------
    ColorScheme
        The resolved scheme

    Raises
    ------
    ColorProbeError
        If probing fails and no fallback was given
    ValueError
        If ``mode`` is not recognized

    """
    if mode == "fixed":
        return FIXED_PALETTE
    if mode == "disabled":
        return DISABLED
    if mode != "probe":
        raise ValueError(f"Invalid color mode: {mode}. Must be one of: fixed, probe, disabled")

    try:
        return probe_color_scheme(colordiff_command, runner=runner, timeout=timeout)
    except ColorProbeError as e:
        if fallback is None:
            raise
        logger.warning("%s; falling back to the default palette", e.message)
        return fallback
