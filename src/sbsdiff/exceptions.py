#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for sbsdiff.

This module defines the error conditions that can occur while laying out,
classifying, highlighting and rendering a side-by-side diff. Each exception
carries enough context to diagnose an incompatibility with the external
tools that produce the raw diff.

Exception Hierarchy
-------------------
- SbsDiffError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidWidthError (display width too small for two columns)

  - InputError (unreadable inputs, bad stdin usage)

  - ColorProbeError (palette extraction failed; recoverable)

  - UnrecognizedLineFormatError (flag column contract broken; fatal)

  - ToolError (external tool problems)
    - SubprocessFailureError (tool exited with an error status)
      - ToolNotFoundError (tool is not installed)

"""

from __future__ import annotations

from typing import Any, Sequence


class SbsDiffError(Exception):
    """Base exception class for all sbsdiff-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(SbsDiffError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidWidthError(ValidationError):
    """Exception raised when a display width cannot hold two columns.

    Parameters
    ----------
    width : any
        The rejected width
    minimum : int
        Smallest width accepted
    message : str, optional
        Custom error message

    """

    def __init__(self, width: Any, minimum: int, message: str | None = None):
        """Initialize the width error."""
        if message is None:
            message = f"Display width must be an integer of at least {minimum}, got {width!r}"
        super().__init__(message, parameter_name="width", parameter_value=width)
        self.width = width
        self.minimum = minimum


class InputError(SbsDiffError):
    """Exception raised when an input source cannot be read.

    Parameters
    ----------
    message : str
        Description of the input problem
    file_path : str, optional
        The offending input path
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the input error."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class ColorProbeError(SbsDiffError):
    """Exception raised when colors cannot be scraped from an external tool.

    This is the one recoverable error in the pipeline: callers are expected
    to fall back to the fixed palette or to disable color.

    Parameters
    ----------
    reason : str
        What went wrong with the probe
    command : sequence of str, optional
        The probe command line
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        reason: str,
        command: Sequence[str] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the probe error."""
        message = f"Color probe failed: {reason}"
        if command:
            message += f" (command: {' '.join(command)})"
        super().__init__(message, original_error=original_error)
        self.reason = reason
        self.command = list(command) if command else []


class UnrecognizedLineFormatError(SbsDiffError):
    """Exception raised when a diff line has no valid flag at the split point.

    Parameters
    ----------
    line : str
        The offending raw line
    flag_column : int
        1-based column where the status flag was expected
    found : str or None
        Character found at that column, or None when the line is too short
    line_number : int, optional
        1-based position of the line in the diff output

    """

    def __init__(self, line: str, flag_column: int, found: str | None, line_number: int | None = None):
        """Initialize the line format error."""
        where = f"line {line_number}" if line_number is not None else "line"
        if found is None:
            detail = f"is only {len(line)} characters long"
        else:
            detail = f"has {found!r}"
        message = (
            f"Unrecognized side-by-side format: {where} {detail} at flag column {flag_column} "
            f"(expected one of ' ', '<', '>', '|'): {line!r}"
        )
        super().__init__(message)
        self.line = line
        self.flag_column = flag_column
        self.found = found
        self.line_number = line_number


class ToolError(SbsDiffError):
    """Base exception for failures of the external diff tools."""


class SubprocessFailureError(ToolError):
    """Exception raised when an external tool fails.

    Parameters
    ----------
    command : sequence of str
        The command line that failed
    returncode : int or None
        Exit status, or None when the process never ran to completion
    stderr : str, optional
        Captured standard error of the tool
    message : str, optional
        Custom error message
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None,
        stderr: str = "",
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the subprocess failure."""
        if message is None:
            message = f"Command failed with exit status {returncode}: {' '.join(command)}"
            if stderr.strip():
                message += f"\n{stderr.strip()}"
        super().__init__(message, original_error=original_error)
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr


class ToolNotFoundError(SubprocessFailureError):
    """Exception raised when a required external tool is not installed.

    Parameters
    ----------
    tool_name : str
        Name of the missing executable
    command : sequence of str, optional
        The command that was about to run
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        tool_name: str,
        command: Sequence[str] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the missing tool error."""
        super().__init__(
            command or [tool_name],
            None,
            message=f"Required command '{tool_name}' is not available on PATH",
            original_error=original_error,
        )
        self.tool_name = tool_name
