"""Tests for CLI commands."""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from prattcalc.cli import app, format_value


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a config file with a preloaded variable."""
    path = tmp_path / "prattcalc.toml"
    path.write_text('[prattcalc]\nprompt = "? "\n\n[prattcalc.variables]\ng = 10\n')
    return path


class TestEvalCommand:
    """prattcalc eval EXPRESSION"""

    def test_prints_value(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "2^2^3"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "256"

    def test_integral_float_printed_as_integer(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "10/2"])
        assert result.stdout.strip() == "5"

    def test_set_assignments(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "x * y", "--set", "x=6", "--set", "y=7"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "42"

    def test_bad_set_assignment(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "1", "--set", "x=foo"])
        assert result.exit_code == 1
        assert "Undefined identifier: foo" in result.output

    def test_failure_exits_nonzero(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "(2+3"])
        assert result.exit_code == 1
        assert "Expected ')'" in result.output

    def test_large_results(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["eval", "1000!"])
        assert result.exit_code == 0
        assert len(result.stdout.strip()) == 2568

        result = cli_runner.invoke(app, ["eval", "1000! * 1000!"])
        assert result.exit_code == 1
        assert "too large" in result.output

    def test_config_variables(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(app, ["eval", "g * 2", "--config", str(config_file)])
        assert result.exit_code == 0
        assert result.stdout.strip() == "20"

    def test_invalid_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        bad = tmp_path / "bad.toml"
        bad.write_text("[prattcalc\n")
        result = cli_runner.invoke(app, ["eval", "1", "--config", str(bad)])
        assert result.exit_code == 1
        assert "Invalid TOML" in result.output


class TestTokensCommand:
    """prattcalc tokens EXPRESSION"""

    def test_lists_tokens(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["tokens", "x = sqrt(2)"])
        assert result.exit_code == 0
        for text in ["identifier", "symbol", "number", "sqrt"]:
            assert text in result.stdout

    def test_malformed_number(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["tokens", "1.2.3"])
        assert result.exit_code == 1
        assert "Malformed number" in result.output


class TestReplCommand:
    """prattcalc repl"""

    def test_session_persists_assignments(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            app,
            ["repl", "--config", str(tmp_path / "none.toml")],
            input="x = 5\nx * 2\n:quit\n",
        )
        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert any(line.endswith("5") for line in lines)
        assert any(line.endswith("10") for line in lines)

    def test_errors_do_not_end_the_session(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            app,
            ["repl", "--config", str(tmp_path / "none.toml")],
            input="foo\n1 + 1\n",
        )
        assert result.exit_code == 0
        assert "Error:" in result.stdout
        assert "Undefined identifier: foo" in result.stdout
        assert any(line.endswith("2") for line in result.stdout.splitlines())

    def test_vars_command(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(
            app, ["repl", "--config", str(config_file)], input="answer = 42\n:vars\nexit\n"
        )
        assert result.exit_code == 0
        assert "answer" in result.stdout
        assert "pi" in result.stdout
        assert "g" in result.stdout

    def test_funcs_and_help(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            app,
            ["repl", "--config", str(tmp_path / "none.toml")],
            input=":funcs\n:help\n:bogus\n",
        )
        assert result.exit_code == 0
        assert "sqrt" in result.stdout
        assert ":vars" in result.stdout
        assert "Unknown command" in result.stdout

    def test_uses_configured_prompt(self, cli_runner: CliRunner, config_file: Path) -> None:
        result = cli_runner.invoke(app, ["repl", "--config", str(config_file)], input="1\n")
        assert "? " in result.stdout


class TestVersion:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert result.stdout.startswith("prattcalc ")


class TestFormatValue:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, ""), (3, "3"), (2.0, "2"), (2.5, "2.5"), (1e20, "1e+20"), (-0.0, "0")],
    )
    def test_format(self, value: int | float | None, expected: str) -> None:
        assert format_value(value) == expected
