"""Allow ``python -m prattcalc``."""

from prattcalc.cli import run

run()
