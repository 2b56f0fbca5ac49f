# Copyright 2026 ExprScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tokenizer and grammar validator for expression sources."""

from exprscan.parser.lexer import Cursor, LexerError, LexErrorKind, Token, Tokenizer, TokenKind, tokenize
from exprscan.parser.validator import ExpectedOperatorError, ExpectedTermError, ParseError, validate

__all__ = [
    "Cursor",
    "ExpectedOperatorError",
    "ExpectedTermError",
    "LexErrorKind",
    "LexerError",
    "ParseError",
    "Token",
    "TokenKind",
    "Tokenizer",
    "tokenize",
    "validate",
]
