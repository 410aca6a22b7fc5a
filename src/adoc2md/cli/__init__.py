"""Command-line interface for the adoc2md AsciiDoc to Markdown converter.

Examples
--------
Convert a file and print the result::

    $ adoc2md README.adoc

Write to a file instead::

    $ adoc2md README.adoc -o README.md

Read from standard input and seed attributes::

    $ cat guide.adoc | adoc2md - -a product=ACME -a draft -a toc!

Render in the terminal::

    $ adoc2md README.adoc --rich

Configuration files (``.adoc2md.toml``, ``.adoc2md.yaml``,
``.adoc2md.yml``, ``.adoc2md.json`` or ``[tool.adoc2md]`` in
``pyproject.toml``) are discovered from the working directory upward;
``ADOC2MD_CONFIG`` names one explicitly.

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/adoc2md/cli/__init__.py

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from adoc2md.api import convert
from adoc2md.cli.config import discover_config_file, load_config_file
from adoc2md.cli.output import render_rich, should_use_rich_output, write_output
from adoc2md.constants import (
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from adoc2md.exceptions import Adoc2MdError, FileError, ValidationError
from adoc2md.logging_utils import configure_logging
from adoc2md.options import ConversionOptions

logger = logging.getLogger(__name__)

__all__ = [
    "create_parser",
    "get_exit_code_for_exception",
    "main",
    "parse_attribute_arguments",
]

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
STDIN_MARKER = "-"


def _version() -> str:
    from adoc2md import __version__

    return __version__


def _option_field(name: str) -> dataclasses.Field:
    """Return the ``ConversionOptions`` field whose metadata describes a CLI flag."""
    return next(f for f in dataclasses.fields(ConversionOptions) if f.name == name)


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser of the ``adoc2md`` command."""
    parser = argparse.ArgumentParser(
        prog="adoc2md",
        description="Convert AsciiDoc to Markdown.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "input",
        nargs="?",
        default=STDIN_MARKER,
        help="AsciiDoc file to convert ('-' or omitted reads standard input)",
    )
    parser.add_argument("-o", "--output", help="Write Markdown to this file instead of standard output")
    attribute_field = _option_field("attributes")
    parser.add_argument(
        "-a",
        f"--{attribute_field.metadata['cli_name']}",
        dest="attribute",
        action="append",
        default=[],
        metavar="NAME[=VALUE]",
        help=attribute_field.metadata["help"],
    )

    config_group = parser.add_argument_group("configuration")
    config_group.add_argument("--config", help="Path to a TOML, YAML or JSON configuration file")
    config_group.add_argument(
        "--no-config", action="store_true", help="Do not discover configuration files automatically"
    )

    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--rich", action="store_true", help="Render the Markdown with rich formatting when writing to a terminal"
    )

    logging_group = parser.add_argument_group("logging")
    logging_group.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: WARNING)",
    )
    logging_group.add_argument("--log-file", help="Also write log messages to this file")
    logging_group.add_argument(
        "--trace", action="store_true", help="Debug logging with timestamps and logger names"
    )

    parser.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    return parser


def parse_attribute_arguments(values: list[str]) -> Dict[str, Optional[str]]:
    """Turn ``-a`` arguments into an attribute seed.

    Parameters
    ----------
    values : list[str]
        Arguments of the form ``name=value``, ``name`` or ``name!``

    Returns
    -------
    dict
        Attribute names mapped to their value, ``""`` for a bare name and
        None for an unset attribute

    Raises
    ------
    ValidationError
        If an argument has no attribute name

    Examples
    --------
        >>> parse_attribute_arguments(["product=ACME", "draft", "toc!"])
        {'product': 'ACME', 'draft': '', 'toc': None}

    """
    attributes: Dict[str, Optional[str]] = {}
    for value in values:
        name, separator, assigned = value.partition("=")
        name = name.strip()
        if not separator and name.endswith("!"):
            name, attribute_value = name[:-1], None
        else:
            attribute_value = assigned if separator else ""
        if not name:
            raise ValidationError(
                f"Invalid attribute argument '{value}': expected NAME, NAME=VALUE or NAME!",
                parameter_name="attribute",
                parameter_value=value,
            )
        attributes[name] = attribute_value
    return attributes


def get_exit_code_for_exception(exception: Exception) -> int:
    """Map an exception to the CLI exit code."""
    if isinstance(exception, ValidationError):
        return EXIT_VALIDATION_ERROR
    if isinstance(exception, FileError):
        return EXIT_FILE_ERROR
    return EXIT_ERROR


def _load_config(parsed_args: argparse.Namespace) -> Dict[str, Any]:
    if parsed_args.config:
        return load_config_file(parsed_args.config)
    if parsed_args.no_config:
        return {}
    config_path = discover_config_file()
    return load_config_file(config_path) if config_path else {}


def _setup_logging(parsed_args: argparse.Namespace, config: Dict[str, Any]) -> None:
    if parsed_args.trace:
        log_level: Any = logging.DEBUG
    else:
        log_level = parsed_args.log_level or config.get("log_level") or "WARNING"
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)


def _read_input(source: str) -> str:
    if source == STDIN_MARKER:
        return sys.stdin.read()
    path = Path(source)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FileError(f"Input file not found: {path}", str(path), e) from e
    except (OSError, UnicodeDecodeError) as e:
        raise FileError(f"Could not read input file {path}: {e}", str(path), e) from e


def main(args: list[str] | None = None) -> int:
    """Execute the ``adoc2md`` command.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int
        Process exit code

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    try:
        config = _load_config(parsed_args)
    except Adoc2MdError as e:
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)

    _setup_logging(parsed_args, config)

    try:
        attributes: Dict[str, Optional[str]] = dict(config.get("attributes", {}))
        attributes.update(parse_attribute_arguments(parsed_args.attribute))
        options = ConversionOptions(attributes=attributes)

        markdown = convert(_read_input(parsed_args.input), options)

        if should_use_rich_output(parsed_args):
            render_rich(markdown)
        else:
            write_output(markdown, parsed_args.output)
    except Adoc2MdError as e:
        logger.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return get_exit_code_for_exception(e)
    except Exception as e:
        logger.exception("Unexpected error")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
