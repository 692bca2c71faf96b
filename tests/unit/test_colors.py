#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for colors.py scheme resolution and probing."""

import logging
import subprocess
from pathlib import Path

import pytest
from utils import FakeRunner, completed

from sbsdiff.classifier import ChangeCategory
from sbsdiff.colors import (
    DISABLED,
    FIXED_PALETTE,
    ColorScheme,
    probe_color_scheme,
    resolve_color_scheme,
    strip_ansi,
    visible_length,
)
from sbsdiff.constants import ANSI_BRIGHT_MAGENTA, ANSI_BRIGHT_RED, ANSI_RESET
from sbsdiff.exceptions import ColorProbeError, ToolNotFoundError

RED = "\x1b[0;31m"
BLUE = "\x1b[0;34m"
MAGENTA = "\x1b[0;35m"
RESET = "\x1b[0;0m"


def probe_output(lines=None) -> str:
    """Colordiff-like output for the probe inputs at width 40 (flag at index 19)."""
    if lines is None:
        lines = [
            RED + f"{'only on the left':<19}<" + RESET,
            f"{'identical line':<19}  identical line",
            MAGENTA + f"{'left version':<19}| right version" + RESET,
            BLUE + f"{'':<19}> only on the right" + RESET,
        ]
    return "\n".join(lines) + "\n"


def probe_runner(stdout: str, returncode: int = 1) -> FakeRunner:
    return FakeRunner(lambda argv: completed(argv, stdout, returncode=returncode))


@pytest.mark.unit
class TestColorScheme:
    """Tests for the ColorScheme value type."""

    def test_fixed_palette(self):
        """Test the built-in palette."""
        assert FIXED_PALETTE.unchanged == ""
        assert FIXED_PALETTE.removed == ANSI_BRIGHT_RED
        assert FIXED_PALETTE.changed == ANSI_BRIGHT_MAGENTA
        assert FIXED_PALETTE.reset == ANSI_RESET
        assert FIXED_PALETTE.enabled is True

    def test_disabled(self):
        """Test that the disabled scheme has no sequences at all."""
        assert DISABLED.enabled is False
        for category in ChangeCategory:
            assert DISABLED.colorize(category, "text") == "text"

    def test_start_by_category(self):
        """Test category lookup."""
        scheme = ColorScheme(unchanged="u", removed="r", added="a", changed="c", reset="x")
        assert scheme.start(ChangeCategory.UNCHANGED) == "u"
        assert scheme.start(ChangeCategory.REMOVED) == "r"
        assert scheme.start(ChangeCategory.ADDED) == "a"
        assert scheme.start(ChangeCategory.MODIFIED) == "c"

    def test_colorize_resets_once(self):
        """Test that a colorized span carries exactly one reset."""
        colored = FIXED_PALETTE.colorize(ChangeCategory.REMOVED, "gone")
        assert colored == f"{ANSI_BRIGHT_RED}gone{ANSI_RESET}"
        assert colored.count(ANSI_RESET) == 1

    def test_scheme_is_frozen(self):
        """Test that schemes cannot be mutated."""
        with pytest.raises(AttributeError):
            FIXED_PALETTE.removed = "x"


@pytest.mark.unit
class TestAnsiHelpers:
    """Tests for strip_ansi and visible_length."""

    def test_strip(self):
        """Test removal of color and cursor sequences."""
        assert strip_ansi(f"{RED}a{RESET}b\x1b[2K") == "ab"

    def test_visible_length(self):
        """Test that control bytes do not count."""
        assert visible_length(f"{ANSI_BRIGHT_MAGENTA}abc{ANSI_RESET}") == 3
        assert visible_length("plain") == 5


@pytest.mark.unit
class TestProbeColorScheme:
    """Tests for probe_color_scheme with a fake colordiff."""

    def test_extracts_sequences(self):
        """Test that each category takes the leading sequence of its line."""
        runner = probe_runner(probe_output())
        scheme = probe_color_scheme(runner=runner)

        assert scheme == ColorScheme(unchanged="", removed=RED, added=BLUE, changed=MAGENTA, reset=RESET)

    def test_command_line(self):
        """Test the probe invocation."""
        runner = probe_runner(probe_output())
        probe_color_scheme("my-colordiff", runner=runner, timeout=5)

        assert runner.calls[0][:3] == ["my-colordiff", "--color=yes", "--width=40"]
        assert "--side-by-side" in runner.calls[0]
        assert "--expand-tabs" in runner.calls[0]
        assert runner.kwargs[0]["timeout"] == 5

    def test_probe_inputs_and_cleanup(self):
        """Test that the probe files hold the fixed inputs and are removed."""
        runner = probe_runner(probe_output())
        probe_color_scheme(runner=runner)

        left, right = runner.file_args(0)
        assert runner.file_contents[0][left] == "only on the left\nidentical line\nleft version\n"
        assert runner.file_contents[0][right] == "identical line\nright version\nonly on the right\n"
        assert not Path(left).exists()
        assert not Path(right).exists()

    def test_wrong_line_count(self):
        """Test that extra output lines are rejected."""
        runner = probe_runner(probe_output() + "extra line\n")
        with pytest.raises(ColorProbeError, match="expected 4 output lines, got 5"):
            probe_color_scheme(runner=runner)

    def test_wrong_order(self):
        """Test that an unexpected line order is rejected."""
        lines = probe_output().splitlines()
        lines[0], lines[1] = lines[1], lines[0]
        runner = probe_runner("\n".join(lines))

        with pytest.raises(ColorProbeError, match="unexpected line order"):
            probe_color_scheme(runner=runner)

    def test_uncolored_output(self):
        """Test that output without color sequences is rejected."""
        runner = probe_runner(strip_ansi(probe_output()))
        with pytest.raises(ColorProbeError, match="no color sequence"):
            probe_color_scheme(runner=runner)

    def test_unparseable_layout(self):
        """Test that lines without a valid flag column are rejected."""
        runner = probe_runner("a\nb\nc\nd\n")
        with pytest.raises(ColorProbeError, match="unexpected line layout"):
            probe_color_scheme(runner=runner)

    def test_tool_failure(self):
        """Test that a failing tool becomes a probe error."""
        runner = probe_runner("", returncode=2)
        with pytest.raises(ColorProbeError) as exc_info:
            probe_color_scheme(runner=runner)

        assert exc_info.value.command[0] == "colordiff"

    def test_missing_tool(self):
        """Test that a missing tool becomes a probe error."""

        def handler(argv):
            raise FileNotFoundError(argv[0])

        with pytest.raises(ColorProbeError) as exc_info:
            probe_color_scheme(runner=FakeRunner(handler))

        assert isinstance(exc_info.value.original_error, ToolNotFoundError)

    def test_timeout(self):
        """Test that a timeout becomes a probe error."""

        def handler(argv):
            raise subprocess.TimeoutExpired(argv, 1)

        with pytest.raises(ColorProbeError, match="timed out"):
            probe_color_scheme(runner=FakeRunner(handler), timeout=1)


@pytest.mark.unit
class TestResolveColorScheme:
    """Tests for resolve_color_scheme."""

    def test_fixed(self, fake_runner):
        """Test that the fixed mode never runs a tool."""
        assert resolve_color_scheme("fixed", runner=fake_runner) is FIXED_PALETTE
        assert fake_runner.calls == []

    def test_disabled(self, fake_runner):
        """Test the disabled mode."""
        assert resolve_color_scheme("disabled", runner=fake_runner) is DISABLED
        assert fake_runner.calls == []

    def test_probe(self):
        """Test the probe mode."""
        scheme = resolve_color_scheme("probe", runner=probe_runner(probe_output()))
        assert scheme.removed == RED

    def test_invalid_mode(self):
        """Test that unknown modes are rejected."""
        with pytest.raises(ValueError, match="Invalid color mode"):
            resolve_color_scheme("rainbow")

    def test_probe_failure_falls_back(self, caplog):
        """Test the fallback when the probe tool exits with an error."""
        runner = probe_runner("", returncode=2)
        with caplog.at_level(logging.WARNING, logger="sbsdiff.colors"):
            scheme = resolve_color_scheme("probe", fallback=FIXED_PALETTE, runner=runner)

        assert scheme is FIXED_PALETTE
        assert "falling back to the default palette" in caplog.text

    def test_probe_failure_without_fallback(self):
        """Test that the probe error propagates without a fallback."""
        with pytest.raises(ColorProbeError):
            resolve_color_scheme("probe", runner=probe_runner("", returncode=2))
