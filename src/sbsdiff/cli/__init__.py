"""Command-line interface for the sbsdiff side-by-side comparison tool.

This module provides the ``sbsdiff`` command. It reads two inputs, checks
that the external tools are installed, renders the colored side-by-side
comparison through :func:`sbsdiff.compare_files`, and sends the result to
stdout, a file, or a pager.

Configuration Support
---------------------
Defaults for most options can be stored in ``.sbsdiff.toml``,
``.sbsdiff.yaml``, ``.sbsdiff.json`` or the ``[tool.sbsdiff]`` table of
``pyproject.toml``. The ``SBSDIFF_CONFIG`` environment variable names an
explicit config file. CLI arguments always override config values.

Examples
--------
Basic comparison::

    $ sbsdiff old.txt new.txt

Highlight changed words::

    $ sbsdiff -w old.txt new.txt

Write an HTML page::

    $ sbsdiff --html old.txt new.txt --out diff.html

Compare a pipe with a file::

    $ git show HEAD:README.md | sbsdiff - README.md

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import argparse
import logging
import os
import shlex
import sys
from datetime import datetime

from sbsdiff.api import compare_files
from sbsdiff.cli.builder import (
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
    create_parser,
    get_exit_code_for_exception,
)
from sbsdiff.cli.config import CONFIG_ENV_VAR, config_to_parser_defaults, load_config_with_priority
from sbsdiff.cli.inputs import materialized, prepare_inputs
from sbsdiff.cli.output import (
    number_lines,
    page_content,
    print_error,
    print_notice,
    should_page,
    terminal_columns,
    write_output,
)
from sbsdiff.constants import DEFAULT_WIDTH, LINE_NUMBER_GUTTER, LINE_NUMBER_NOTICE
from sbsdiff.exceptions import SbsDiffError, ToolNotFoundError
from sbsdiff.logging_utils import configure_logging
from sbsdiff.options import SideBySideOptions
from sbsdiff.tools import missing_tools

logger = logging.getLogger(__name__)


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging level based on command-line arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    """
    # --trace takes highest precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _apply_config_defaults(parser: argparse.ArgumentParser, args: list[str] | None) -> None:
    """Load the config file and install its values as parser defaults.

    Raises
    ------
    argparse.ArgumentTypeError
        If the selected config file cannot be loaded

    """
    pre_parser = argparse.ArgumentParser(add_help=False, allow_abbrev=False)
    pre_parser.add_argument("--config")
    pre_parser.add_argument("--no-config", action="store_true")
    known, _ = pre_parser.parse_known_args(args)

    if known.no_config:
        return

    config = load_config_with_priority(explicit_path=known.config, env_var_path=os.environ.get(CONFIG_ENV_VAR))
    if config:
        parser.set_defaults(**config_to_parser_defaults(config))


def _check_required_tools(parsed_args: argparse.Namespace) -> None:
    """Raise ToolNotFoundError for the first missing external tool."""
    required = [parsed_args.diff_command]
    if parsed_args.word_highlight:
        required.append(parsed_args.wdiff_command)

    missing = missing_tools(required)
    if missing:
        raise ToolNotFoundError(missing[0])


def _resolve_color_mode(parsed_args: argparse.Namespace) -> str:
    """Map --color and --palette to a color mode."""
    if parsed_args.color == "never":
        return "disabled"
    if parsed_args.color == "auto" and not (parsed_args.html or sys.stdout.isatty()):
        return "disabled"
    return parsed_args.palette


def _resolve_width(parsed_args: argparse.Namespace, line_numbers: bool) -> int:
    """Compute the width handed to diff.

    An explicit --width is used as given. Otherwise the terminal width is
    used, less the line-number gutter when numbers are shown.
    """
    if parsed_args.width is not None:
        return parsed_args.width

    width = terminal_columns(DEFAULT_WIDTH)
    if line_numbers:
        width -= LINE_NUMBER_GUTTER
    return width


def build_options(parsed_args: argparse.Namespace) -> SideBySideOptions:
    """Build SideBySideOptions from parsed CLI arguments.

    Parameters
    ----------
    parsed_args : argparse.Namespace
        Parsed command-line arguments

    Returns
    -------
    SideBySideOptions
        Options for :func:`sbsdiff.compare_files`

    Raises
    ------
    ValueError
        If the options are inconsistent

    """
    html = parsed_args.html
    line_numbers = parsed_args.line_numbers and not html

    title = None
    description = None
    if html:
        title = f'Comparison of "{parsed_args.file1}" to "{parsed_args.file2}"'
        description = f"Generated {datetime.now():%Y-%m-%d %H:%M:%S} by: {shlex.join(['sbsdiff', *sys.argv[1:]])}"

    return SideBySideOptions(
        width=_resolve_width(parsed_args, line_numbers),
        word_highlight=parsed_args.word_highlight,
        output_format="html" if html else "ansi",
        color_mode=_resolve_color_mode(parsed_args),
        diff_options=tuple(parsed_args.diff_options or ()),
        diff_command=parsed_args.diff_command,
        wdiff_command=parsed_args.wdiff_command,
        colordiff_command=parsed_args.colordiff_command,
        tool_timeout=parsed_args.timeout,
        max_workers=parsed_args.jobs,
        title=title,
        description=description,
    )


def _run(parsed_args: argparse.Namespace) -> int:
    """Compare the inputs and emit the result."""
    _check_required_tools(parsed_args)

    left, right = prepare_inputs(parsed_args.file1, parsed_args.file2, quiet=parsed_args.quiet)
    if left.raw == right.raw:
        print_notice("Files are identical.", parsed_args)
        return EXIT_SUCCESS

    try:
        options = build_options(parsed_args)
    except ValueError as e:
        print_error(str(e), parsed_args)
        return EXIT_VALIDATION_ERROR

    with materialized(left, right) as (left_path, right_path):
        outcome = compare_files(left_path, right_path, options)

    if outcome.identical:
        print_notice("Files are identical.", parsed_args)
        return EXIT_SUCCESS

    if options.output_format == "html":
        content = outcome.output
        use_pager = False
    else:
        lines = number_lines(outcome.lines) if parsed_args.line_numbers else outcome.lines
        if parsed_args.line_numbers:
            print_notice(LINE_NUMBER_NOTICE, parsed_args)
        content = "\n".join(lines) + "\n" if lines else ""
        use_pager = should_page(len(lines), parsed_args)

    if use_pager and page_content(content):
        return EXIT_SUCCESS

    write_output(content, parsed_args.output)
    if parsed_args.output:
        logger.info("Wrote comparison to %s", parsed_args.output)
    return EXIT_SUCCESS


def main(args: list[str] | None = None) -> int:
    """Execute the sbsdiff command.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments; defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    try:
        _apply_config_defaults(parser, args)
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    parsed_args = parser.parse_args(args)
    _setup_logging_level(parsed_args)

    try:
        return _run(parsed_args)
    except (SbsDiffError, OSError) as e:
        logger.debug("Comparison failed", exc_info=True)
        print_error(getattr(e, "message", None) or str(e), parsed_args)
        return get_exit_code_for_exception(e)


if __name__ == "__main__":
    sys.exit(main())
