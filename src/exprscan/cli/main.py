# Copyright 2026 ExprScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the ExprScan command-line interface."""

import argparse
import os
import sys
from pathlib import Path

from yachalk import chalk

from exprscan.config import SETTINGS_FILE_NAME, ConfigError, ScanSettings, resolve_settings
from exprscan.parser.lexer import LexerError
from exprscan.parser.validator import ParseError
from exprscan.pipeline import SourceError, check_buffer, load_source, scan_buffer

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the ExprScan CLI."""
    parser = argparse.ArgumentParser(
        prog="exprscan",
        description="ExprScan: tokenizer and grammar checker for expression files",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Tokenize a file and validate it against the expression grammar",
        description="Report the first lexical or syntax error in a source file.",
    )
    _add_common_arguments(check_parser)

    # tokens subcommand
    tokens_parser = subparsers.add_parser(
        "tokens",
        help="Print the token stream of a file",
        description="Tokenize a source file and print one line per token.",
    )
    _add_common_arguments(tokens_parser)

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_DEFAULT_SOURCE = "_input"


def _add_common_arguments(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument(
        "file",
        nargs="?",
        default=_DEFAULT_SOURCE,
        help=f"Source file to read (default: {_DEFAULT_SOURCE})",
    )
    subparser.add_argument(
        "--config",
        default=None,
        help=f"Settings file (default: {SETTINGS_FILE_NAME} in the current directory, if present)",
    )
    subparser.add_argument(
        "--debug",
        action="store_true",
        help="Dump the token stream to stderr",
    )
    subparser.add_argument(
        "--flush-trailing",
        action="store_true",
        help="Emit a token still in progress at the end of the file",
    )


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "tokens":
        return _cmd_tokens(args)
    return 0


def _settings_from_args(args: argparse.Namespace) -> ScanSettings:
    """Build settings from the settings file, the environment and the flags.

    Raises:
        ConfigError: If the settings file is invalid.
    """
    if args.config is not None:
        config_path: Path | None = Path(args.config)
    else:
        default_path = Path.cwd() / SETTINGS_FILE_NAME
        config_path = default_path if default_path.exists() else None

    settings = resolve_settings(config_path, os.environ)
    updates: dict[str, bool] = {}
    if args.debug:
        updates["debug"] = True
    if args.flush_trailing:
        updates["flush_trailing"] = True
    return settings.model_copy(update=updates) if updates else settings


def _error(message: str) -> None:
    print(chalk.red(f"Error: {message}"), file=sys.stderr)


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    try:
        settings = _settings_from_args(args)
        buffer = load_source(Path(args.file))
    except (ConfigError, SourceError) as exc:
        _error(str(exc))
        return 1

    try:
        check_buffer(buffer, settings)
    except LexerError as exc:
        _error(f"Lexer: {exc}")
        return 1
    except ParseError as exc:
        _error(f"Parser: {exc}")
        return 1

    print(chalk.green(f"OK: {args.file}"))
    return 0


def _cmd_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens subcommand."""
    try:
        settings = _settings_from_args(args)
        buffer = load_source(Path(args.file))
    except (ConfigError, SourceError) as exc:
        _error(str(exc))
        return 1

    try:
        tokens = scan_buffer(buffer, settings)
    except LexerError as exc:
        _error(f"Lexer: {exc}")
        return 1

    for tok in tokens:
        print(f"{tok.line}:{tok.column}\t{tok.kind.value}\t{tok.text}")
    return 0
