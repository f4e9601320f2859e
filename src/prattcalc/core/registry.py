"""
Parselet registry: maps each token to its prefix and infix/postfix meaning.

Numbers and identifiers share one entry per kind; symbols are keyed by
their exact lexeme. A key holds at most one parselet per slot, and may
hold both (``-`` is negation and subtraction).
"""

from __future__ import annotations

from prattcalc.core import operations
from prattcalc.core.parselets import (
    BinaryOperation,
    GroupParselet,
    IdentifierParselet,
    InfixParselet,
    LiteralParselet,
    PostfixParselet,
    PrefixOperatorParselet,
    PrefixParselet,
    UnaryOperation,
)
from prattcalc.core.precedence import Precedence
from prattcalc.core.tokenizer import Token, TokenKind

RegistryKey = TokenKind | str


class ParseletRegistry:
    """Token → (prefix parselet, infix/postfix parselet) table."""

    def __init__(self) -> None:
        self._prefix: dict[RegistryKey, PrefixParselet] = {}
        self._infix: dict[RegistryKey, InfixParselet] = {}
        self._frozen = False

    @staticmethod
    def key_for(token: Token) -> RegistryKey:
        if token.kind in (TokenKind.NUMBER, TokenKind.IDENTIFIER):
            return token.kind
        return token.value

    def lookup(self, token: Token) -> tuple[PrefixParselet | None, InfixParselet | None]:
        key = self.key_for(token)
        return self._prefix.get(key), self._infix.get(key)

    def prefix(self, token: Token) -> PrefixParselet | None:
        return self._prefix.get(self.key_for(token))

    def infix(self, token: Token) -> InfixParselet | None:
        return self._infix.get(self.key_for(token))

    # -- Registration --

    def register_prefix(self, key: RegistryKey, parselet: PrefixParselet) -> ParseletRegistry:
        self._check_writable()
        if key in self._prefix:
            raise ValueError(f"Prefix parselet already registered for {key!r}")
        self._prefix[key] = parselet
        return self

    def register_infix(self, key: RegistryKey, parselet: InfixParselet) -> ParseletRegistry:
        self._check_writable()
        if key in self._infix:
            raise ValueError(f"Infix/postfix parselet already registered for {key!r}")
        self._infix[key] = parselet
        return self

    def prefix_operator(
        self,
        symbol: str,
        operation: UnaryOperation,
        precedence: Precedence = Precedence.PREFIX,
    ) -> ParseletRegistry:
        return self.register_prefix(symbol, PrefixOperatorParselet(operation, precedence))

    def infix_left(
        self, symbol: str, operation: BinaryOperation, precedence: Precedence
    ) -> ParseletRegistry:
        return self.register_infix(symbol, InfixParselet(operation, precedence))

    def infix_right(
        self, symbol: str, operation: BinaryOperation, precedence: Precedence
    ) -> ParseletRegistry:
        return self.register_infix(
            symbol, InfixParselet(operation, precedence, right_associative=True)
        )

    def postfix(
        self,
        symbol: str,
        operation: UnaryOperation,
        precedence: Precedence = Precedence.POSTFIX,
    ) -> ParseletRegistry:
        return self.register_infix(symbol, PostfixParselet(operation, precedence))

    # -- Mutability --

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> ParseletRegistry:
        self._frozen = True
        return self

    def copy(self) -> ParseletRegistry:
        """Unfrozen copy, for extending a frozen registry."""
        clone = ParseletRegistry()
        clone._prefix = dict(self._prefix)
        clone._infix = dict(self._infix)
        return clone

    def _check_writable(self) -> None:
        if self._frozen:
            raise RuntimeError("Parselet registry is frozen; use copy() to extend it")


def default_registry() -> ParseletRegistry:
    """Build the standard calculator grammar."""
    return (
        ParseletRegistry()
        .register_prefix("(", GroupParselet())
        .register_prefix(TokenKind.NUMBER, LiteralParselet(operations.number))
        .register_prefix(TokenKind.IDENTIFIER, IdentifierParselet())
        .prefix_operator("-", operations.negate, Precedence.PREFIX)
        .infix_left("-", operations.subtract, Precedence.SUM)
        .infix_left("+", operations.add, Precedence.SUM)
        .infix_left("*", operations.multiply, Precedence.PRODUCT)
        .infix_left("/", operations.divide, Precedence.PRODUCT)
        .infix_left("%", operations.modulo, Precedence.PRODUCT)
        .infix_right("^", operations.power, Precedence.EXPONENT)
        .postfix("!", operations.factorial, Precedence.FACTORIAL)
    )


DEFAULT_REGISTRY = default_registry().freeze()
