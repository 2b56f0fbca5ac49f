# Copyright 2026 ExprScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Finite-state tokenizer for expression source buffers.

Classifies a raw byte buffer into an ordered, immutable token stream. Only
ASCII byte classes are recognized; whitespace and newlines separate tokens
and never appear in token text.
"""

import enum
import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TextIO

from exprscan.diagnostics import dump_tokens

# ###############
# Public Interface
# ###############


class TokenKind(enum.Enum):
    """All token kinds produced by the tokenizer."""

    IDENTIFIER = "Identifier"
    NUMBER = "Number"
    PUNCTUATION = "Punctuation"
    OPERATOR = "Operator"
    ASSIGN = "Assign"


@dataclass(frozen=True)
class Cursor:
    """A source position.

    Attributes:
        line: 1-based line number.
        column: Column of the last consumed non-blank byte on the line, 0 at
            the start of a line.
    """

    line: int
    column: int


@dataclass(frozen=True)
class Token:
    """A lexical token with its source location.

    Tokens compare by kind and text only; the location is informational.

    Attributes:
        kind: The kind of token.
        text: The exact source bytes that produced the token.
        line: Line of the token's first byte.
        column: Column of the token's first byte.
    """

    kind: TokenKind
    text: str
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)


class LexErrorKind(enum.Enum):
    """Categories of lexical failure."""

    UNRECOGNIZED_SYMBOL = "Unrecognized symbol"
    MALFORMED_IDENTIFIER = "Malformed identifier"
    UNRECOGNIZED_NUMBER = "Unrecognized number"


class LexerError(Exception):
    """Raised when the tokenizer meets a byte that is illegal in its current state.

    Attributes:
        kind: The category of failure.
        line: Line of the offending byte.
        column: Column of the offending byte.
        byte: The offending byte value.
    """

    def __init__(self, kind: LexErrorKind, line: int, column: int, byte: int) -> None:
        super().__init__(f"Line {line}, column {column}: {kind.value}: {_describe(byte)}")
        self.kind = kind
        self.line = line
        self.column = column
        self.byte = byte


def is_punctuation(byte: int) -> bool:
    return byte == 0x3B


def is_digit(byte: int) -> bool:
    return 0x30 <= byte <= 0x39


def is_letter(byte: int) -> bool:
    return 0x41 <= byte <= 0x5A or 0x61 <= byte <= 0x7A


def is_operator(byte: int) -> bool:
    return byte == 0x21 or 0x3C <= byte <= 0x3E


def is_newline(byte: int) -> bool:
    return byte == 0x0A


def is_whitespace_like(byte: int) -> bool:
    return byte in (0x09, 0x0C, 0x0D, 0x20)


class Tokenizer:
    """Byte-at-a-time tokenizer driven by a small finite automaton.

    A tokenizer can be reused; every call to :meth:`scan` starts from a fresh
    cursor and replaces the previously produced stream.

    Args:
        flush_trailing: Emit a run still in progress at the end of the buffer
            instead of dropping it.
        debug: Dump every successfully produced stream to *sink*.
        sink: Text stream receiving the debug dump (default: ``sys.stderr``).
    """

    def __init__(
        self,
        *,
        flush_trailing: bool = False,
        debug: bool = False,
        sink: TextIO | None = None,
    ) -> None:
        self._flush_trailing = flush_trailing
        self._debug = debug
        self._sink = sink
        self._cursor = Cursor(line=1, column=0)
        self._tokens: tuple[Token, ...] = ()
        self._state = _State.START
        self._pending: list[Token] = []
        self._text: list[str] = []
        self._start = self._cursor

    @property
    def cursor(self) -> Cursor:
        """The position reached by the most recent scan."""
        return self._cursor

    @property
    def tokens(self) -> tuple[Token, ...]:
        """The stream produced by the most recent successful scan."""
        return self._tokens

    def scan(self, buffer: bytes) -> tuple[Token, ...]:
        """Classify *buffer* into a token stream.

        Args:
            buffer: The complete source. An empty buffer yields an empty stream.

        Returns:
            The produced tokens in source order.

        Raises:
            LexerError: On the first byte that is illegal in the current state.
        """
        self._cursor = Cursor(line=1, column=0)
        self._state = _State.START
        self._pending = []
        self._text = []

        for byte in bytes(buffer):
            self._refresh_cursor(byte)
            if not _TRANSITIONS[self._state](self, byte):
                # The byte ended a run without belonging to it.
                self._on_start(byte)

        if self._flush_trailing and self._state is not _State.START:
            self._emit(_TRAILING_KINDS[self._state])

        self._tokens = tuple(self._pending)
        self._pending = []

        if self._debug:
            dump_tokens(self._tokens, self._sink if self._sink is not None else sys.stderr)
        return self._tokens

    # ------------------------------------------------------------------
    # Cursor and token accumulation helpers
    # ------------------------------------------------------------------

    def _refresh_cursor(self, byte: int) -> None:
        """Advance the cursor for one consumed byte."""
        if is_newline(byte):
            self._cursor = Cursor(line=self._cursor.line + 1, column=0)
        elif not is_whitespace_like(byte):
            self._cursor = Cursor(line=self._cursor.line, column=self._cursor.column + 1)

    def _begin(self, byte: int, state: "_State") -> None:
        """Start a new run at the current byte."""
        self._start = self._cursor
        self._text = [chr(byte)]
        self._state = state

    def _emit(self, kind: TokenKind) -> None:
        """Close the current run as a token of *kind* and return to START."""
        self._pending.append(Token(kind, "".join(self._text), self._start.line, self._start.column))
        self._text = []
        self._state = _State.START

    def _fail(self, kind: LexErrorKind, byte: int) -> LexerError:
        return LexerError(kind, self._cursor.line, self._cursor.column, byte)

    # ------------------------------------------------------------------
    # State handlers
    #
    # Each handler returns True when it consumed the byte and False when the
    # byte must be reprocessed under START.
    # ------------------------------------------------------------------

    def _on_start(self, byte: int) -> bool:
        if is_whitespace_like(byte) or is_newline(byte):
            pass
        elif is_letter(byte):
            self._begin(byte, _State.IN_IDENTIFIER)
        elif is_digit(byte):
            self._begin(byte, _State.IN_NUMBER)
        elif is_operator(byte):
            self._begin(byte, _State.IN_OPERATOR_RUN)
        elif is_punctuation(byte):
            self._begin(byte, _State.START)
            self._emit(TokenKind.PUNCTUATION)
        else:
            raise self._fail(LexErrorKind.UNRECOGNIZED_SYMBOL, byte)
        return True

    def _on_identifier(self, byte: int) -> bool:
        if is_letter(byte) or is_digit(byte):
            self._text.append(chr(byte))
            return True
        if is_whitespace_like(byte) or is_operator(byte) or is_punctuation(byte):
            self._emit(TokenKind.IDENTIFIER)
            return False
        raise self._fail(LexErrorKind.MALFORMED_IDENTIFIER, byte)

    def _on_number(self, byte: int) -> bool:
        if is_digit(byte):
            self._text.append(chr(byte))
            return True
        if is_letter(byte):
            raise self._fail(LexErrorKind.UNRECOGNIZED_NUMBER, byte)
        self._emit(TokenKind.NUMBER)
        return False

    def _on_operator_run(self, byte: int) -> bool:
        if is_operator(byte):
            self._text.append(chr(byte))
            self._emit(TokenKind.OPERATOR)
            return True
        self._emit(TokenKind.ASSIGN)
        # A terminator directly after a single operator byte is absorbed.
        return is_punctuation(byte)


def tokenize(buffer: bytes, *, flush_trailing: bool = False) -> tuple[Token, ...]:
    """Tokenize *buffer* with a fresh :class:`Tokenizer`.

    Raises:
        LexerError: On the first illegal byte.
    """
    return Tokenizer(flush_trailing=flush_trailing).scan(buffer)


# ################
# Implementation
# ################


class _State(enum.Enum):
    """Automaton states."""

    START = enum.auto()
    IN_IDENTIFIER = enum.auto()
    IN_NUMBER = enum.auto()
    IN_OPERATOR_RUN = enum.auto()


_TRANSITIONS: dict[_State, Callable[[Tokenizer, int], bool]] = {
    _State.START: Tokenizer._on_start,
    _State.IN_IDENTIFIER: Tokenizer._on_identifier,
    _State.IN_NUMBER: Tokenizer._on_number,
    _State.IN_OPERATOR_RUN: Tokenizer._on_operator_run,
}

_TRAILING_KINDS: dict[_State, TokenKind] = {
    _State.IN_IDENTIFIER: TokenKind.IDENTIFIER,
    _State.IN_NUMBER: TokenKind.NUMBER,
    _State.IN_OPERATOR_RUN: TokenKind.ASSIGN,
}


def _describe(byte: int) -> str:
    """Render a byte for error messages."""
    if 0x20 < byte < 0x7F:
        return repr(chr(byte))
    return f"0x{byte:02x}"
