"""
prattcalc core: tokenizer, parselet registry, and precedence-climbing evaluator.

Usage:
    from prattcalc.core import Calculator

    calc = Calculator()
    calc.evaluate("x = 2 ^ 2 ^ 3")   # EvalResult(value=256)
    calc.evaluate("x / 4").value     # 64.0
"""

from prattcalc.core.environment import Environment
from prattcalc.core.errors import ErrorKind, ExpressionError
from prattcalc.core.evaluator import evaluate, evaluate_expression
from prattcalc.core.precedence import Precedence
from prattcalc.core.registry import DEFAULT_REGISTRY, ParseletRegistry, default_registry
from prattcalc.core.result import EvalFailure, EvalResult
from prattcalc.core.session import Calculator
from prattcalc.core.tokenizer import Token, TokenKind, tokenize

__all__ = [
    "Calculator",
    "DEFAULT_REGISTRY",
    "Environment",
    "ErrorKind",
    "EvalFailure",
    "EvalResult",
    "ExpressionError",
    "ParseletRegistry",
    "Precedence",
    "Token",
    "TokenKind",
    "default_registry",
    "evaluate",
    "evaluate_expression",
    "tokenize",
]
