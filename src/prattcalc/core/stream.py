"""
Forward-only token cursor shared by the evaluator and its parselets.
"""

from __future__ import annotations

from prattcalc.core.tokenizer import Token, TokenKind


class TokenStream:
    """A cursor over a token list that only ever moves forward."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.pos = 0

    @property
    def is_exhausted(self) -> bool:
        return self.pos >= len(self.tokens)

    def peek(self) -> Token | None:
        """Return the next token without consuming it, or None at the end."""
        if self.is_exhausted:
            return None
        return self.tokens[self.pos]

    def consume(self) -> Token:
        """Consume and return the next token.

        Raises:
            IndexError: If the stream is exhausted. Parselets peek before
                consuming, so this signals a bug rather than bad input.
        """
        if self.is_exhausted:
            raise IndexError("consume() past the end of the token stream")
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def next_is(self, symbol: str) -> bool:
        """True if the next token is the given operator or punctuation symbol."""
        tok = self.peek()
        return tok is not None and tok.kind == TokenKind.SYMBOL and tok.value == symbol

    def match(self, symbol: str) -> Token | None:
        """Consume the next token if it is ``symbol``."""
        if self.next_is(symbol):
            return self.consume()
        return None

    @property
    def end_pos(self) -> int:
        """Offset just past the last token, used to report errors at end of input."""
        if not self.tokens:
            return 0
        last = self.tokens[-1]
        return last.pos + len(last.value)
