"""
prattcalc - an extensible Pratt-parsing arithmetic evaluator.

Expressions are tokenized, then parsed and evaluated in a single pass by
precedence-climbing parselets.
"""

from __future__ import annotations

from ._version import get_version
from .core import Calculator, Environment, EvalResult, evaluate_expression
from .core.errors import CalcError, ConfigError, ExpressionError

__version__ = get_version()

__all__ = [
    "__version__",
    "Calculator",
    "Environment",
    "EvalResult",
    "evaluate_expression",
    "CalcError",
    "ConfigError",
    "ExpressionError",
]
