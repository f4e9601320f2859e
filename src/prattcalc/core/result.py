"""
Structured outcome of evaluating one expression.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from prattcalc.core.errors import ErrorKind, ExpressionError


class EvalFailure(BaseModel):
    """Why an expression could not be evaluated."""

    kind: ErrorKind
    message: str
    position: int | None = Field(default=None, description="Offset in the source text")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_error(cls, error: ExpressionError) -> EvalFailure:
        return cls(kind=error.kind, message=error.message, position=error.position)

    def __str__(self) -> str:
        if self.position is None:
            return self.message
        return f"{self.message} (at position {self.position})"


class EvalResult(BaseModel):
    """
    Value or failure of one expression.

    ``value`` is None both for failures and for empty input; check ``ok``
    (or ``error``) to tell them apart.
    """

    expression: str
    value: int | float | None = None
    error: EvalFailure | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def ok(self) -> bool:
        return self.error is None
