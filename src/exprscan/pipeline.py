# Copyright 2026 ExprScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the tokenizer and the validator over a source buffer or file."""

from pathlib import Path
from typing import TextIO

from exprscan.config import ScanSettings
from exprscan.parser.lexer import Token, Tokenizer
from exprscan.parser.validator import validate

# ###############
# Public Interface
# ###############


class SourceError(Exception):
    """Raised when a source file cannot be read."""


def load_source(path: Path) -> bytes:
    """Read the whole of *path* into memory.

    Raises:
        SourceError: If the file does not exist or cannot be read.
    """
    try:
        return path.read_bytes()
    except FileNotFoundError:
        raise SourceError(f"Source file not found: {path}") from None
    except OSError as exc:
        raise SourceError(f"Cannot read source file '{path}': {exc}") from exc


def scan_buffer(buffer: bytes, settings: ScanSettings, sink: TextIO | None = None) -> tuple[Token, ...]:
    """Tokenize *buffer* according to *settings*.

    Raises:
        LexerError: On the first illegal byte.
    """
    tokenizer = Tokenizer(flush_trailing=settings.flush_trailing, debug=settings.debug, sink=sink)
    return tokenizer.scan(buffer)


def check_buffer(buffer: bytes, settings: ScanSettings, sink: TextIO | None = None) -> tuple[Token, ...]:
    """Tokenize *buffer* and validate the resulting stream.

    Validation only runs when tokenizing succeeded.

    Returns:
        The validated token stream.

    Raises:
        LexerError: If tokenizing fails.
        ParseError: If the stream violates the grammar.
    """
    tokens = scan_buffer(buffer, settings, sink)
    validate(tokens)
    return tokens


def check_file(path: Path, settings: ScanSettings, sink: TextIO | None = None) -> tuple[Token, ...]:
    """Load *path* and run :func:`check_buffer` on its contents.

    Raises:
        SourceError: If the file cannot be read.
        LexerError: If tokenizing fails.
        ParseError: If the stream violates the grammar.
    """
    return check_buffer(load_source(path), settings, sink)
