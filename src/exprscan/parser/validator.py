# Copyright 2026 ExprScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent validator for token streams.

Checks that a token stream derives from the expression grammar::

    E  -> T E'
    E' -> OP T E' | <empty>
    T  -> Identifier | Number
    OP -> Operator

The validator only accepts or rejects; it builds no tree. Productions compare
token kinds, never token text.
"""

from collections.abc import Sequence

from exprscan.parser.lexer import Token, TokenKind

# ###############
# Public Interface
# ###############


class ParseError(Exception):
    """Raised when the token stream violates the grammar.

    Attributes:
        token: The offending token.
        line: Line of the offending token.
        column: Column of the offending token.
    """

    expected = "token"

    def __init__(self, token: Token) -> None:
        super().__init__(
            f"Line {token.line}, column {token.column}: "
            f"Expected {self.expected}, got {token.kind.value} {token.text!r}"
        )
        self.token = token
        self.line = token.line
        self.column = token.column


class ExpectedTermError(ParseError):
    """Raised when a term position holds something other than an Identifier or Number."""

    expected = "Identifier or Number"


class ExpectedOperatorError(ParseError):
    """Raised when an operator position holds something other than an Operator."""

    expected = "Operator"


def validate(tokens: Sequence[Token]) -> None:
    """Validate a token stream against the expression grammar.

    An empty stream is accepted: every production succeeds once the input is
    exhausted.

    Args:
        tokens: The stream produced by the tokenizer.

    Raises:
        ExpectedTermError: If a term position holds a non-term token.
        ExpectedOperatorError: If an operator position holds a non-operator token.
    """
    _Validator(tokens).validate()


# ################
# Implementation
# ################

_TERM_KINDS: frozenset[TokenKind] = frozenset({TokenKind.IDENTIFIER, TokenKind.NUMBER})


class _Validator:
    """Walks the grammar pulling tokens strictly forward."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tuple(tokens)
        self._pos = 0

    def validate(self) -> None:
        self._expression()

    def _next(self) -> Token | None:
        """Consume and return the next token, or None at end of input."""
        if self._pos >= len(self._tokens):
            return None
        tok = self._tokens[self._pos]
        self._pos += 1
        return tok

    # ------------------------------------------------------------------
    # Productions
    # ------------------------------------------------------------------

    def _expression(self) -> None:
        """E -> T E'"""
        self._term()
        self._expression_tail()

    def _expression_tail(self) -> None:
        """E' -> OP T E' | <empty>

        An Operator token ends the derivation here; any other token is handed
        to OP, which rejects it.
        """
        tok = self._next()
        if tok is None:
            return
        if tok.kind is not TokenKind.OPERATOR:
            self._operator(tok)
            self._term()
            self._expression_tail()

    def _term(self) -> None:
        """T -> Identifier | Number"""
        tok = self._next()
        if tok is None:
            return
        if tok.kind not in _TERM_KINDS:
            raise ExpectedTermError(tok)

    def _operator(self, tok: Token) -> None:
        """OP -> Operator"""
        if tok.kind is not TokenKind.OPERATOR:
            raise ExpectedOperatorError(tok)
