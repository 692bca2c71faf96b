#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for cli/inputs.py input preparation."""

import io

import pytest

from sbsdiff.cli.inputs import (
    PreparedInput,
    materialized,
    normalize_text,
    prepare_inputs,
    read_input,
    validate_input_names,
)
from sbsdiff.exceptions import InputError


@pytest.mark.unit
@pytest.mark.cli
class TestReadInput:
    """Tests for reading files and stdin."""

    def test_file(self, temp_dir):
        """Test reading a regular file as bytes."""
        path = temp_dir / "a.txt"
        path.write_bytes(b"one\r\ntwo\n")
        assert read_input(str(path)) == b"one\r\ntwo\n"

    def test_stdin(self):
        """Test reading '-' from the given stream."""
        assert read_input("-", stdin=io.BytesIO(b"piped\n")) == b"piped\n"

    def test_missing_file(self, temp_dir):
        """Test a file that does not exist."""
        with pytest.raises(InputError, match="not found") as exc_info:
            read_input(str(temp_dir / "missing.txt"))
        assert exc_info.value.file_path.endswith("missing.txt")
        assert isinstance(exc_info.value.original_error, FileNotFoundError)

    def test_directory(self, temp_dir):
        """Test that a directory is not an input."""
        with pytest.raises(InputError, match="directory"):
            read_input(str(temp_dir))

    def test_both_stdin_rejected(self):
        """Test that stdin cannot be used twice."""
        with pytest.raises(InputError, match="Only one of the inputs"):
            validate_input_names("-", "-")

    def test_one_stdin_allowed(self):
        """Test that one stdin input is fine."""
        validate_input_names("-", "b.txt")


@pytest.mark.unit
@pytest.mark.cli
class TestNormalizeText:
    """Tests for normalize_text."""

    def test_crlf_converted(self):
        """Test CRLF to LF conversion."""
        assert normalize_text(b"a\r\nb\r\n", "x", quiet=True) == "a\nb\n"

    def test_lone_cr_kept(self):
        """Test that a bare CR is not a line ending."""
        assert normalize_text(b"a\rb\n", "x", quiet=True) == "a\rb\n"

    def test_header(self):
        """Test the input header line."""
        assert normalize_text(b"body\n", "old.txt") == "INPUT: old.txt\nbody\n"

    def test_invalid_utf8_kept_distinct(self):
        """Test that undecodable bytes survive decoding and stay distinguishable."""
        latin1_e_acute = normalize_text(b"caf\xe9\n", "x", quiet=True)
        latin1_e_grave = normalize_text(b"caf\xe8\n", "x", quiet=True)

        assert latin1_e_acute == "caf\udce9\n"
        assert latin1_e_acute != latin1_e_grave


@pytest.mark.unit
@pytest.mark.cli
class TestPrepareInputs:
    """Tests for prepare_inputs and materialized."""

    def test_prepare(self, temp_dir):
        """Test reading both sides."""
        right = temp_dir / "right.txt"
        right.write_bytes(b"r\r\n")

        left_input, right_input = prepare_inputs("-", str(right), stdin=io.BytesIO(b"l\n"))

        assert left_input == PreparedInput(name="-", raw=b"l\n", text="INPUT: -\nl\n")
        assert right_input.raw == b"r\r\n"
        assert right_input.text == f"INPUT: {right}\nr\n"

    def test_prepare_quiet(self, temp_dir):
        """Test that quiet omits the headers."""
        left = temp_dir / "l.txt"
        right = temp_dir / "r.txt"
        left.write_text("a\n", encoding="utf-8")
        right.write_text("b\n", encoding="utf-8")

        left_input, right_input = prepare_inputs(str(left), str(right), quiet=True)

        assert (left_input.text, right_input.text) == ("a\n", "b\n")

    def test_materialized(self):
        """Test that buffers are written out and removed afterwards."""
        left = PreparedInput("a", b"", "left text\n")
        right = PreparedInput("b", b"", "right text\n")

        with materialized(left, right) as (left_path, right_path):
            assert left_path.read_text(encoding="utf-8") == "left text\n"
            assert right_path.read_text(encoding="utf-8") == "right text\n"

        assert not left_path.exists()
        assert not left_path.parent.exists()

    def test_materialized_preserves_bytes(self, temp_dir):
        """Test that non-UTF-8 bytes reach the temporary files unchanged."""
        left = temp_dir / "l.txt"
        right = temp_dir / "r.txt"
        left.write_bytes(b"caf\xe9\r\n")
        right.write_bytes(b"caf\xe8\n")

        left_input, right_input = prepare_inputs(str(left), str(right), quiet=True)

        with materialized(left_input, right_input) as (left_path, right_path):
            assert left_path.read_bytes() == b"caf\xe9\n"
            assert right_path.read_bytes() == b"caf\xe8\n"
