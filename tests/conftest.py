"""Shared pytest fixtures for prattcalc tests."""

from __future__ import annotations

import pytest

from prattcalc.core import Calculator, Environment


@pytest.fixture
def env() -> Environment:
    """Return an environment with the built-in constants and functions."""
    return Environment.with_builtins()


@pytest.fixture
def calc(env: Environment) -> Calculator:
    """Return a calculator session over ``env``."""
    return Calculator(env)
