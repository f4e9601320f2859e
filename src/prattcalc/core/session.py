"""
Calculator session: one environment reused across expressions.
"""

from __future__ import annotations

from collections.abc import Mapping

from prattcalc.core.environment import Environment, Number
from prattcalc.core.evaluator import evaluate_expression
from prattcalc.core.registry import DEFAULT_REGISTRY, ParseletRegistry
from prattcalc.core.result import EvalResult


class Calculator:
    """Evaluates expressions against a persistent environment.

    Assignments made by one successful expression are visible to the next.
    Sessions are independent of each other and are not thread-safe.
    """

    def __init__(
        self,
        env: Environment | None = None,
        registry: ParseletRegistry = DEFAULT_REGISTRY,
        variables: Mapping[str, Number] | None = None,
    ) -> None:
        self.env = env if env is not None else Environment.with_builtins()
        self.registry = registry
        for name, value in (variables or {}).items():
            self.env.set(name, value)

    def evaluate(self, source: str) -> EvalResult:
        return evaluate_expression(source, self.env, self.registry)

    def __call__(self, source: str) -> EvalResult:
        return self.evaluate(source)
