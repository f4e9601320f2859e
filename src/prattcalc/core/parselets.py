"""
Parselets: one small parser per grammar production.

Prefix parselets start an expression from the token that triggered them.
Infix parselets continue one, given the value parsed so far; postfix
parselets are infix parselets without a right-hand operand.

Every parselet evaluates as it parses, so the value it returns is a number,
not a tree node.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from prattcalc.core import operations
from prattcalc.core.environment import Number
from prattcalc.core.errors import (
    ExpressionError,
    MissingOperandError,
    UnbalancedParenthesesError,
)
from prattcalc.core.precedence import Precedence
from prattcalc.core.tokenizer import Token

if TYPE_CHECKING:
    from prattcalc.core.evaluator import Evaluation

UnaryOperation = Callable[[Number], Number]
BinaryOperation = Callable[[Number, Number], Number]


def require_operand(value: Number | None, token: Token) -> Number:
    """Turn an absent sub-expression value into a MissingOperandError."""
    if value is None:
        raise MissingOperandError(f"Missing operand for {token.value!r}", token.pos)
    return value


def _at(token: Token, op: Callable[..., Number], *args: Number) -> Number:
    """Apply ``op``, attributing position-less errors to ``token``."""
    try:
        return op(*args)
    except ExpressionError as e:
        if e.position is None:
            e.position = token.pos
        raise


# ---------------------------------------------------------------------------
# Prefix parselets
# ---------------------------------------------------------------------------


class PrefixParselet(ABC):
    """Parses an expression that starts with its triggering token."""

    @abstractmethod
    def parse(self, ev: Evaluation, token: Token) -> Number:
        """Parse after ``token`` has been consumed from ``ev.stream``."""


@dataclass(frozen=True)
class LiteralParselet(PrefixParselet):
    """A token that is a complete value on its own, e.g. a number."""

    operation: Callable[[str], Number] = operations.number

    def parse(self, ev: Evaluation, token: Token) -> Number:
        return _at(token, self.operation, token.value)


@dataclass(frozen=True)
class PrefixOperatorParselet(PrefixParselet):
    """A unary operator such as negation; its operand binds at ``precedence``."""

    operation: UnaryOperation
    precedence: Precedence = Precedence.PREFIX

    def parse(self, ev: Evaluation, token: Token) -> Number:
        operand = require_operand(ev.evaluate(self.precedence), token)
        return _at(token, self.operation, operand)


class GroupParselet(PrefixParselet):
    """``( expr )``"""

    def parse(self, ev: Evaluation, token: Token) -> Number:
        value = require_operand(ev.evaluate(Precedence.BELOW_ASSIGNMENT), token)
        if not ev.stream.match(")"):
            raise UnbalancedParenthesesError(
                "Expected ')' to close '('", ev.position()
            )
        return value


class IdentifierParselet(PrefixParselet):
    """
    A name, disambiguated by one token of lookahead:

        name = expr    assignment
        name ( expr? ) function call
        name           variable reference
    """

    def parse(self, ev: Evaluation, token: Token) -> Number:
        name = token.value

        if ev.stream.match("="):
            value = require_operand(ev.evaluate(Precedence.BELOW_ASSIGNMENT), token)
            return operations.assign(ev.env, name, value)

        if ev.stream.match("("):
            argument = None
            if not ev.stream.next_is(")"):
                argument = ev.evaluate(Precedence.BELOW_ASSIGNMENT)
            if not ev.stream.match(")"):
                raise UnbalancedParenthesesError(
                    f"Expected ')' to close call to {name}()", ev.position()
                )
            return operations.call(ev.env, name, argument, token.pos)

        return operations.reference(ev.env, name, token.pos)


# ---------------------------------------------------------------------------
# Infix and postfix parselets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InfixParselet:
    """A binary operator: ``left op right``.

    A left-associative operator parses its right operand at its own
    precedence, so an equal-precedence operator to the right is left for
    the caller's loop. A right-associative one parses at ``precedence - 1``
    and lets the recursive call take it instead.
    """

    operation: BinaryOperation
    precedence: Precedence
    right_associative: bool = False

    def parse(self, ev: Evaluation, left: Number, token: Token) -> Number:
        min_precedence = self.precedence - 1 if self.right_associative else self.precedence
        right = require_operand(ev.evaluate(min_precedence), token)
        return _at(token, self.operation, left, right)


@dataclass(frozen=True)
class PostfixParselet(InfixParselet):
    """A unary operator written after its operand, e.g. ``5!``."""

    operation: UnaryOperation  # type: ignore[assignment]
    precedence: Precedence = Precedence.POSTFIX

    def parse(self, ev: Evaluation, left: Number, token: Token) -> Number:
        return _at(token, self.operation, left)
