"""
Binding-strength levels for prattcalc operators, lowest first.

Only relative order is meaningful.
"""

from __future__ import annotations

from enum import IntEnum


class Precedence(IntEnum):
    BELOW_ASSIGNMENT = 0
    ASSIGNMENT = 1
    CONDITIONAL = 2
    SUM = 3
    PRODUCT = 4
    EXPONENT = 5
    FACTORIAL = 6
    PREFIX = 7
    POSTFIX = 8
    CALL = 9
