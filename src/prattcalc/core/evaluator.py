"""
Precedence-climbing evaluator for prattcalc expressions.

Parsing and evaluation happen in the same pass: each parselet computes its
value as soon as it has parsed its operands, so no syntax tree is built.
Pure evaluation apart from assignment into the supplied environment.
"""

from __future__ import annotations

import logging

from prattcalc.core.environment import Environment, Number
from prattcalc.core.errors import (
    ExpressionError,
    InvalidExpressionStartError,
    NestingTooDeepError,
    UnexpectedTokenError,
)
from prattcalc.core.precedence import Precedence
from prattcalc.core.registry import DEFAULT_REGISTRY, ParseletRegistry
from prattcalc.core.result import EvalFailure, EvalResult
from prattcalc.core.stream import TokenStream
from prattcalc.core.tokenizer import tokenize

logger = logging.getLogger(__name__)


class Evaluation:
    """State shared by the evaluator loop and parselets for one expression."""

    def __init__(
        self,
        stream: TokenStream,
        env: Environment,
        registry: ParseletRegistry = DEFAULT_REGISTRY,
    ) -> None:
        self.stream = stream
        self.env = env
        self.registry = registry

    def evaluate(self, min_precedence: int = Precedence.BELOW_ASSIGNMENT) -> Number | None:
        """Evaluate the longest expression whose operators bind tighter than
        ``min_precedence``.

        Returns None if the stream is already exhausted; whether that is an
        error depends on the caller.

        Raises:
            InvalidExpressionStartError: If the next token cannot start an
                expression.
        """
        token = self.stream.peek()
        if token is None:
            return None

        prefix = self.registry.prefix(token)
        if prefix is None:
            raise InvalidExpressionStartError(
                f"Unexpected {token.value!r} at start of expression", token.pos
            )
        self.stream.consume()
        value = prefix.parse(self, token)

        # The loop, not recursion, builds left-associative chains
        while (token := self.stream.peek()) is not None:
            infix = self.registry.infix(token)
            if infix is None or infix.precedence <= min_precedence:
                break
            self.stream.consume()
            value = infix.parse(self, value, token)

        return value

    def position(self) -> int:
        """Offset of the next token, or of the end of input."""
        token = self.stream.peek()
        return token.pos if token is not None else self.stream.end_pos


def evaluate(
    stream: TokenStream,
    env: Environment,
    min_precedence: int = Precedence.BELOW_ASSIGNMENT,
    registry: ParseletRegistry = DEFAULT_REGISTRY,
) -> Number | None:
    """Evaluate from the current position of ``stream``; see Evaluation.evaluate."""
    return Evaluation(stream, env, registry).evaluate(min_precedence)


def evaluate_expression(
    source: str,
    env: Environment | None = None,
    registry: ParseletRegistry = DEFAULT_REGISTRY,
) -> EvalResult:
    """Tokenize and evaluate a complete expression.

    Never raises for bad input: failures are reported in the result. If the
    expression fails, variables it assigned before failing are rolled back.

    Args:
        source: Expression text (e.g., "x = 2 * pi").
        env: Environment to read and assign names in. Defaults to a fresh
            environment with the built-in constants and functions.
        registry: Grammar to evaluate with.

    Returns:
        EvalResult holding either the value or the failure.
    """
    if env is None:
        env = Environment.with_builtins()

    saved = env.snapshot()
    try:
        value = _evaluate_all(source, env, registry)
    except ExpressionError as e:
        env.restore(saved)
        logger.info("Evaluation of %r failed: %s", source, e.message)
        return EvalResult(expression=source, error=EvalFailure.from_error(e))

    return EvalResult(expression=source, value=value)


def _evaluate_all(source: str, env: Environment, registry: ParseletRegistry) -> Number | None:
    tokens = tokenize(source)
    logger.debug("Tokens for %r: %s", source, tokens)

    stream = TokenStream(tokens)
    try:
        value = evaluate(stream, env, registry=registry)
    except RecursionError as e:
        raise NestingTooDeepError("Expression is nested too deeply") from e

    leftover = stream.peek()
    if leftover is not None:
        raise UnexpectedTokenError(
            f"Unexpected {leftover.value!r} after expression", leftover.pos
        )
    return value
