#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for cli/output.py output helpers."""

import argparse
import io
import os

import pytest

from sbsdiff.cli import output
from sbsdiff.cli.output import (
    number_lines,
    page_content,
    print_notice,
    reserved_screen_lines,
    should_page,
    should_use_rich_output,
    write_output,
)


class TTYStream(io.StringIO):
    """StringIO that claims to be a terminal."""

    def isatty(self):
        return True


def make_args(**overrides) -> argparse.Namespace:
    values = {"pager": True, "output": None, "quiet": False, "rich": False}
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.mark.unit
@pytest.mark.cli
class TestNumberLines:
    """Tests for cat -n style numbering."""

    def test_format(self):
        """Test the six-column number and tab."""
        assert number_lines(["a", "b"]) == ["     1\ta", "     2\tb"]

    def test_numbers_start_at_one(self):
        """Test that numbering starts at one and counts every line."""
        lines = number_lines(["x"] * 3)
        assert lines[-1].startswith("     3\t")


@pytest.mark.unit
@pytest.mark.cli
class TestShouldPage:
    """Tests for the pager decision."""

    @pytest.fixture(autouse=True)
    def small_terminal(self, monkeypatch):
        monkeypatch.setattr(output.shutil, "get_terminal_size", lambda *a, **k: os.terminal_size((80, 10)))

    def test_tall_output_on_tty(self):
        """Test that output taller than the screen is paged."""
        assert should_page(8, make_args(), stream=TTYStream()) is True

    def test_short_output(self):
        """Test that output that fits is not paged."""
        assert should_page(5, make_args(), stream=TTYStream()) is False

    @pytest.mark.parametrize(
        "quiet,line_numbers,reserved",
        [
            (True, True, 3),
            (True, False, 3),
            (False, False, 4),
            (False, True, 5),
        ],
    )
    def test_reserved_rows(self, quiet, line_numbers, reserved):
        """Test the rows kept for the prompt, the input headers and the notice."""
        args = make_args(quiet=quiet, line_numbers=line_numbers)

        assert reserved_screen_lines(args) == reserved
        assert should_page(10 - reserved - 1, args, stream=TTYStream()) is False
        assert should_page(10 - reserved, args, stream=TTYStream()) is True

    def test_not_a_tty(self):
        """Test that redirected output is never paged."""
        assert should_page(100, make_args(), stream=io.StringIO()) is False

    def test_pager_disabled(self):
        """Test --no-pager."""
        assert should_page(100, make_args(pager=False), stream=TTYStream()) is False

    def test_output_file(self):
        """Test that file output is never paged."""
        assert should_page(100, make_args(output="out.txt"), stream=TTYStream()) is False


@pytest.mark.unit
@pytest.mark.cli
class TestPageContent:
    """Tests for page_content."""

    def test_sets_less_raw_control(self, monkeypatch):
        """Test that LESS=-R is set when unset."""
        paged = []
        monkeypatch.setenv("LESS", "placeholder")
        monkeypatch.delenv("LESS")
        monkeypatch.setattr(output.pydoc, "pager", paged.append)

        assert page_content("text") is True
        assert paged == ["text"]
        assert os.environ["LESS"] == "-R"

    def test_keeps_user_less(self, monkeypatch):
        """Test that an existing LESS setting is respected."""
        monkeypatch.setenv("LESS", "-FRX")
        monkeypatch.setattr(output.pydoc, "pager", lambda text: None)

        page_content("text")

        assert os.environ["LESS"] == "-FRX"

    def test_pager_failure(self, monkeypatch):
        """Test the fallback signal when the pager cannot run."""

        def broken(text):
            raise OSError("no pager")

        monkeypatch.setenv("LESS", "-R")
        monkeypatch.setattr(output.pydoc, "pager", broken)

        assert page_content("text") is False


@pytest.mark.unit
@pytest.mark.cli
class TestWriteOutput:
    """Tests for write_output and notices."""

    def test_stream(self):
        """Test writing to a stream."""
        stream = io.StringIO()
        write_output("abc\n", stream=stream)
        assert stream.getvalue() == "abc\n"

    def test_file(self, temp_dir):
        """Test writing to a file in a new directory."""
        path = temp_dir / "nested" / "diff.html"
        write_output("<html></html>", str(path))
        assert path.read_text(encoding="utf-8") == "<html></html>"

    def test_notice(self, capsys):
        """Test that notices go to stderr."""
        print_notice("Files are identical.", make_args())
        captured = capsys.readouterr()
        assert captured.err == "Files are identical.\n"
        assert captured.out == ""

    def test_quiet_notice(self, capsys):
        """Test that quiet suppresses notices."""
        print_notice("Files are identical.", make_args(quiet=True))
        assert capsys.readouterr().err == ""

    def test_rich_requires_flag(self):
        """Test that rich output is opt-in."""
        assert should_use_rich_output(make_args(rich=False), stream=TTYStream()) is False

    def test_rich_requires_tty(self):
        """Test that rich output is skipped when not on a terminal."""
        assert should_use_rich_output(make_args(rich=True), stream=io.StringIO()) is False

    def test_stream_keeps_undecodable_bytes(self):
        """Test that surrogate-escaped input bytes are written back raw."""
        stream = io.TextIOWrapper(io.BytesIO(), encoding="utf-8")
        write_output("caf\udce9\n", stream=stream)
        assert stream.buffer.getvalue() == b"caf\xe9\n"

    def test_file_keeps_undecodable_bytes(self, temp_dir):
        """Test surrogate-escaped bytes in file output."""
        path = temp_dir / "out.txt"
        write_output("caf\udce8\n", str(path))
        assert path.read_bytes() == b"caf\xe8\n"
