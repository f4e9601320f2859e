"""
Tokenizer for prattcalc expressions.

Converts an expression string into a sequence of tagged tokens using a
small character-driven state machine.
"""

from __future__ import annotations

import re
from enum import StrEnum, auto

from prattcalc.core.errors import MalformedNumberError


class TokenKind(StrEnum):
    """Token types for the expression language."""

    NUMBER = auto()
    IDENTIFIER = auto()
    # Operators and punctuation, looked up by exact lexeme
    SYMBOL = auto()


class Token:
    """A single token from the expression tokenizer."""

    __slots__ = ("kind", "value", "pos")

    def __init__(self, kind: TokenKind, value: str, pos: int) -> None:
        self.kind = kind
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.value!r}, pos={self.pos})"


class _State(StrEnum):
    START = auto()
    NUMBER = auto()
    OPERATOR = auto()
    IDENTIFIER = auto()


# Always emitted as one-character tokens, never accumulated
SYMBOLS = frozenset("+-*/%^()=!")

# Digits with at most one decimal point, on either side of the digits
_NUMBER_RE = re.compile(r"\d+\.?\d*|\.\d+")


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Raises:
        MalformedNumberError: If a numeric literal is not a valid decimal.
    """
    tokens: list[Token] = []
    state = _State.START
    buffer: list[str] = []
    start = 0

    def flush() -> None:
        if buffer:
            tokens.append(_classify(state, "".join(buffer), start))
            buffer.clear()

    for i, c in enumerate(source):
        if c <= " ":
            flush()
            state = _State.START
        elif c.isdigit() or c == ".":
            if state != _State.NUMBER:
                flush()
                state = _State.NUMBER
                start = i
            buffer.append(c)
        elif c in SYMBOLS:
            flush()
            state = _State.OPERATOR
            tokens.append(Token(TokenKind.SYMBOL, c, i))
        else:
            if state != _State.IDENTIFIER:
                flush()
                state = _State.IDENTIFIER
                start = i
            buffer.append(c)

    flush()
    return tokens


def _classify(state: _State, lexeme: str, pos: int) -> Token:
    """Tag a completed lexeme according to the state that produced it."""
    if state == _State.NUMBER:
        if not _NUMBER_RE.fullmatch(lexeme):
            raise MalformedNumberError(f"Malformed number: {lexeme!r}", pos)
        return Token(TokenKind.NUMBER, lexeme, pos)

    if lexeme[0].isalpha() or lexeme[0] == "_":
        return Token(TokenKind.IDENTIFIER, lexeme, pos)
    return Token(TokenKind.SYMBOL, lexeme, pos)
