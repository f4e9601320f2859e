"""
Error types for prattcalc tokenizing, evaluation, and configuration.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    """Categories of expression failure reported in an EvalResult."""

    UNDEFINED_IDENTIFIER = "undefined_identifier"
    UNBALANCED_PARENTHESES = "unbalanced_parentheses"
    INVALID_EXPRESSION_START = "invalid_expression_start"
    UNEXPECTED_TOKEN = "unexpected_token"
    MALFORMED_NUMBER = "malformed_number"
    MISSING_OPERAND = "missing_operand"
    ARGUMENT_MISMATCH = "argument_mismatch"
    MATH_DOMAIN = "math_domain"
    NESTING_TOO_DEEP = "nesting_too_deep"


class CalcError(Exception):
    """Base exception for all prattcalc errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ConfigError(CalcError):
    """Raised when a configuration file cannot be read or validated."""


class ExpressionError(CalcError):
    """
    Raised when an expression cannot be tokenized or evaluated.

    Subclasses fix ``kind``; ``position`` is the offset of the offending
    token in the source text when it is known.
    """

    kind: ErrorKind

    def __init__(self, message: str, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class UndefinedIdentifierError(ExpressionError):
    """
    Raised when a name is not bound in the environment.

    Examples:
    - A bare reference to an unassigned variable
    - A call to an unknown function
    """

    kind = ErrorKind.UNDEFINED_IDENTIFIER


class UnbalancedParenthesesError(ExpressionError):
    """Raised when a closing ``)`` is required but not found."""

    kind = ErrorKind.UNBALANCED_PARENTHESES


class InvalidExpressionStartError(ExpressionError):
    """
    Raised when the next token has no prefix meaning.

    Examples:
    - An expression beginning with an infix-only operator (``* 2``)
    - A stray ``)``
    """

    kind = ErrorKind.INVALID_EXPRESSION_START


class UnexpectedTokenError(ExpressionError):
    """Raised when tokens remain after a complete expression."""

    kind = ErrorKind.UNEXPECTED_TOKEN


class MalformedNumberError(ExpressionError):
    """Raised by the tokenizer for numeric literals such as ``1.2.3``."""

    kind = ErrorKind.MALFORMED_NUMBER


class MissingOperandError(ExpressionError):
    """Raised when an operator or assignment has nothing to operate on."""

    kind = ErrorKind.MISSING_OPERAND


class ArgumentMismatchError(ExpressionError):
    """Raised when a function is called with the wrong number of arguments."""

    kind = ErrorKind.ARGUMENT_MISMATCH


class MathDomainError(ExpressionError):
    """
    Raised when arithmetic has no real result.

    Examples:
    - Division or modulo by zero
    - ``sqrt(-1)``, ``log(0)``
    - Factorial of a negative or fractional number
    - Overflow
    """

    kind = ErrorKind.MATH_DOMAIN


class NestingTooDeepError(ExpressionError):
    """Raised when an expression nests deeper than the interpreter allows."""

    kind = ErrorKind.NESTING_TOO_DEEP
