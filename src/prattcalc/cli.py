"""
prattcalc CLI.

Commands:

- eval: evaluate one expression and print its value
- tokens: show how an expression is tokenized
- repl: interactive read-evaluate-print loop with a persistent session
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from prattcalc._version import get_version
from prattcalc.config import CalculatorConfig, load_config
from prattcalc.core import Calculator, EvalResult, ExpressionError, tokenize
from prattcalc.core.errors import ConfigError, ErrorKind

app = typer.Typer(
    help="Evaluate arithmetic expressions with a Pratt parser.",
    no_args_is_help=True,
)

console = Console()

QUIT_COMMANDS = {":quit", ":q", "quit", "exit"}

REPL_HELP = """\
Enter an expression to evaluate it, e.g. [bold]x = 2 ^ 10[/bold] or [bold]sqrt(x)[/bold].

Operators: + - * / % ^ (right-associative) ! (factorial), unary -
Commands:
  :vars    list variables
  :funcs   list functions
  :help    show this help
  :quit    leave (also exit, quit, Ctrl-D)"""

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Config file (default: ./prattcalc.toml)"),
]


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"prattcalc {get_version()}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option("--version", callback=version_callback, is_eager=True, help="Show version"),
    ] = False,
) -> None:
    """Evaluate arithmetic expressions with a Pratt parser."""


def format_value(value: int | float | None) -> str:
    """Render a result, dropping the fraction of integral floats (``2.0`` → ``2``)."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return str(value)


def _setup(config_path: Path | None) -> CalculatorConfig:
    try:
        config = load_config(config_path)
    except ConfigError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    logging.basicConfig(
        level=config.logging_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    return config


def _session(config: CalculatorConfig, assignments: list[str] | None = None) -> Calculator:
    calc = Calculator(variables=config.variables)
    for assignment in assignments or []:
        result = calc.evaluate(assignment)
        if not result.ok:
            typer.echo(f"Error: --set {assignment}: {result.error}", err=True)
            raise typer.Exit(code=1)
    return calc


def _tokens_table(source: str) -> Table:
    table = Table(title="Tokens", show_header=True, header_style="bold cyan")
    table.add_column("Kind", style="cyan")
    table.add_column("Lexeme")
    table.add_column("Position", justify="right", style="dim")
    for tok in tokenize(source):
        table.add_row(str(tok.kind), escape(tok.value), str(tok.pos))
    return table


@app.command("eval")
def eval_command(
    expression: Annotated[str, typer.Argument(help="Expression to evaluate")],
    assignments: Annotated[
        list[str] | None,
        typer.Option("--set", "-s", help="Assignment to run first, e.g. --set x=5"),
    ] = None,
    config_path: ConfigOption = None,
) -> None:
    """Evaluate a single expression and print its value."""
    config = _setup(config_path)
    calc = _session(config, assignments)
    result = calc.evaluate(expression)
    if not result.ok:
        typer.echo(f"Error: {result.error}", err=True)
        raise typer.Exit(code=1)
    typer.echo(format_value(result.value))


@app.command("tokens")
def tokens_command(
    expression: Annotated[str, typer.Argument(help="Expression to tokenize")],
) -> None:
    """Show the tokens an expression is split into."""
    try:
        table = _tokens_table(expression)
    except ExpressionError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=1)
    console.print(table)


@app.command("repl")
def repl_command(config_path: ConfigOption = None) -> None:
    """Start an interactive session; assignments persist between lines."""
    config = _setup(config_path)
    calc = _session(config)
    console.print(f"[bold cyan]prattcalc[/bold cyan] {get_version()} - :help for help")

    while True:
        try:
            line = console.input(escape(config.prompt)).strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not line:
            continue
        if line in QUIT_COMMANDS:
            break
        if line.startswith(":"):
            _repl_command(line, calc)
            continue

        result = calc.evaluate(line)
        # A malformed number means there are no tokens to show
        if config.show_tokens and (result.ok or result.error.kind != ErrorKind.MALFORMED_NUMBER):
            console.print(_tokens_table(line))
        _print_result(result)


def _repl_command(line: str, calc: Calculator) -> None:
    if line == ":vars":
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Name", style="cyan")
        table.add_column("Value", justify="right")
        for name, value in sorted(calc.env.variables.items()):
            table.add_row(escape(name), format_value(value))
        console.print(table)
    elif line == ":funcs":
        console.print(", ".join(sorted(calc.env.functions)))
    elif line == ":help":
        console.print(REPL_HELP)
    else:
        console.print(f"[red]Unknown command:[/red] {escape(line)} (try :help)")


def _print_result(result: EvalResult) -> None:
    if result.ok:
        if result.value is not None:
            console.print(format_value(result.value), highlight=False)
        return
    console.print(f"[bold red]Error:[/bold red] {escape(str(result.error))}")


def run() -> None:
    """Console-script entry point."""
    app()


if __name__ == "__main__":
    run()
