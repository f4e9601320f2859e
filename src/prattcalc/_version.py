"""prattcalc version lookup."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Version of a source checkout's pyproject.toml, else of the installed distribution."""
    if _PYPROJECT.is_file():
        with open(_PYPROJECT, "rb") as f:
            project = tomllib.load(f).get("project", {})
        if project.get("name") == "prattcalc" and "version" in project:
            return str(project["version"])
    try:
        return version("prattcalc")
    except PackageNotFoundError:
        return "0.0.0"
