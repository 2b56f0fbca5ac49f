# Copyright 2026 ExprScan Contributors
# SPDX-License-Identifier: Apache-2.0

"""Human-readable dump of token streams for debugging."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, TextIO

import yaml

if TYPE_CHECKING:
    from exprscan.parser.lexer import Token

# ###############
# Public Interface
# ###############


def dump_tokens(tokens: Iterable[Token], sink: TextIO) -> None:
    """Write *tokens* to *sink* as pretty-printed YAML.

    The output is meant for people reading a debug session; its layout is not
    a stable interchange format.
    """
    data = {"tokens": [_token_to_dict(token) for token in tokens]}
    sink.write(yaml.safe_dump(data, default_flow_style=False, sort_keys=False))


# ################
# Implementation
# ################


def _token_to_dict(token: Token) -> dict[str, Any]:
    return {
        "kind": token.kind.value,
        "text": token.text,
        "line": token.line,
        "column": token.column,
    }
