"""
Variable environment: the name table consulted by identifier operations.

Variables and functions live in separate namespaces, so assigning to
``sin`` creates a variable without hiding the ``sin()`` function.
"""

from __future__ import annotations

import logging
import math
import random
from collections.abc import Callable, Mapping
from types import MappingProxyType

logger = logging.getLogger(__name__)

Number = int | float
Function = Callable[..., Number]


def _rnd(scale: Number = 1.0) -> float:
    """Uniform random float in [0, scale)."""
    return random.random() * scale


def _round(x: Number) -> int:
    """Round half up, as calculators do (``round(2.5) == 3``)."""
    return math.floor(x + 0.5)


def _sign(x: Number) -> int:
    if x > 0:
        return 1
    if x < 0:
        return -1
    return 0


BUILTIN_CONSTANTS: dict[str, Number] = {
    "pi": math.pi,
    "e": math.e,
}

BUILTIN_FUNCTIONS: dict[str, Function] = {
    "rnd": _rnd,
    "round": _round,
    "floor": math.floor,
    "ceil": math.ceil,
    "log": math.log,
    "sign": _sign,
    "sqrt": math.sqrt,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": math.asin,
    "acos": math.acos,
    "atan": math.atan,
}


class Environment:
    """Mutable name → value / function table for one calculator session."""

    def __init__(
        self,
        variables: Mapping[str, Number] | None = None,
        functions: Mapping[str, Function] | None = None,
    ) -> None:
        self._variables: dict[str, Number] = dict(variables or {})
        self._functions: dict[str, Function] = dict(functions or {})

    @classmethod
    def with_builtins(cls) -> Environment:
        """Create an environment pre-populated with constants and math functions."""
        return cls(BUILTIN_CONSTANTS, BUILTIN_FUNCTIONS)

    @property
    def variables(self) -> Mapping[str, Number]:
        """Read-only view of the bound variables."""
        return MappingProxyType(self._variables)

    @property
    def functions(self) -> Mapping[str, Function]:
        """Read-only view of the bound functions."""
        return MappingProxyType(self._functions)

    def get(self, name: str) -> Number | None:
        return self._variables.get(name)

    def set(self, name: str, value: Number) -> None:
        logger.debug("assign %s = %r", name, value)
        self._variables[name] = value

    def function(self, name: str) -> Function | None:
        return self._functions.get(name)

    def define_function(self, name: str, fn: Function) -> None:
        self._functions[name] = fn

    def call_function(self, name: str, argument: Number | None = None) -> Number | None:
        """Invoke a function with zero or one argument; None if ``name`` is unknown."""
        fn = self._functions.get(name)
        if fn is None:
            return None
        if argument is None:
            return fn()
        return fn(argument)

    def snapshot(self) -> dict[str, Number]:
        """Copy of the current variables, for :meth:`restore`."""
        return dict(self._variables)

    def restore(self, snapshot: Mapping[str, Number]) -> None:
        self._variables = dict(snapshot)
