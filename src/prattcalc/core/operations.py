"""
Semantic actions invoked by parselets.

Each operation evaluates immediately over already-computed numbers; no
tree is built. Failures raise typed ExpressionError subclasses.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from prattcalc.core.environment import Environment, Number
from prattcalc.core.errors import (
    ArgumentMismatchError,
    MalformedNumberError,
    MathDomainError,
    UndefinedIdentifierError,
)

# Integer results are capped at this many bits, which keeps them below
# Python's limit on int-to-str conversion. Integer powers that would exceed
# it are computed in floating point instead.
_MAX_INT_BITS = 12000

# Bounds the multiplication loop in factorial()
_MAX_FACTORIAL = 1000


def number(lexeme: str) -> Number:
    """Parse a numeric lexeme: int without a decimal point, float with one."""
    try:
        if "." in lexeme:
            return float(lexeme)
        return int(lexeme)
    except ValueError as e:
        raise MalformedNumberError(f"Malformed number: {lexeme!r}") from e


def reference(env: Environment, name: str, position: int | None = None) -> Number:
    value = env.get(name)
    if value is None:
        raise UndefinedIdentifierError(f"Undefined identifier: {name}", position)
    return value


def assign(env: Environment, name: str, value: Number) -> Number:
    env.set(name, value)
    return value


def call(
    env: Environment, name: str, argument: Number | None, position: int | None = None
) -> Number:
    """Call a function from the environment with zero or one argument."""
    try:
        result = env.call_function(name, argument)
    except TypeError as e:
        count = 0 if argument is None else 1
        plural = "argument" if count == 1 else "arguments"
        raise ArgumentMismatchError(
            f"{name}() cannot be called with {count} {plural}", position
        ) from e
    except (ValueError, OverflowError, ZeroDivisionError) as e:
        raise MathDomainError(f"{name}({argument}): {e}", position) from e
    if result is None:
        raise UndefinedIdentifierError(f"Undefined function: {name}()", position)
    return _real(result, f"{name}({argument})")


def negate(x: Number) -> Number:
    return -x


def add(a: Number, b: Number) -> Number:
    with _overflow("+"):
        return _bounded(a + b, "+")


def subtract(a: Number, b: Number) -> Number:
    with _overflow("-"):
        return _bounded(a - b, "-")


def multiply(a: Number, b: Number) -> Number:
    with _overflow("*"):
        return _bounded(a * b, "*")


def divide(a: Number, b: Number) -> Number:
    if b == 0:
        raise MathDomainError("Division by zero")
    with _overflow("/"):
        return a / b


def modulo(a: Number, b: Number) -> Number:
    if b == 0:
        raise MathDomainError("Modulo by zero")
    with _overflow("%"):
        return a % b


def power(base: Number, exponent: Number) -> Number:
    try:
        if isinstance(base, int) and isinstance(exponent, int) and abs(base) > 1:
            if base.bit_length() * exponent > _MAX_INT_BITS:
                base = float(base)
        result = base**exponent
    except ZeroDivisionError as e:
        raise MathDomainError("Zero to a negative power") from e
    except OverflowError as e:
        raise MathDomainError("Result of '^' is too large") from e
    return _real(result, "Power")


def factorial(x: Number) -> int:
    """Iterative factorial, defined for non-negative integers only.

    Integral floats such as ``5.0`` (e.g. from ``10/2``) are accepted.
    """
    if isinstance(x, float):
        if not x.is_integer():
            raise MathDomainError(f"Factorial of non-integer {x}")
        x = int(x)
    if x < 0:
        raise MathDomainError(f"Factorial of negative number {x}")
    if x > _MAX_FACTORIAL:
        raise MathDomainError(f"Factorial of {x} is too large")

    result = 1
    while x > 1:
        result *= x
        x -= 1
    return result


@contextmanager
def _overflow(symbol: str) -> Iterator[None]:
    # Mixing a huge int with a float converts it, which can overflow
    try:
        yield
    except OverflowError as e:
        raise MathDomainError(f"Result of '{symbol}' is too large") from e


def _bounded(value: Number, symbol: str) -> Number:
    if isinstance(value, int) and value.bit_length() > _MAX_INT_BITS:
        raise MathDomainError(f"Result of '{symbol}' is too large")
    return value


def _real(value: Number | complex, description: str) -> Number:
    # Fractional powers of negative numbers produce complex results
    if isinstance(value, complex):
        raise MathDomainError(f"{description} has no real value")
    return value
