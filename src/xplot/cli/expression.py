"""
Expression CLI commands.

- parse:  Check an expression and print its canonical form
- eval:   Evaluate an expression at one or more x values
- sample: Sample an expression across a range and summarize the curve
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from xplot.cli.utils import format_value
from xplot.core.config import XplotConfig, find_config, load_config
from xplot.core.errors import ConfigError, ParseError
from xplot.core.expression_lang import parse, sample
from xplot.core.ir import Expr

console = Console()


def _parse_or_exit(text: str) -> Expr:
    try:
        return parse(text)
    except ParseError as e:
        console.print(f"[red]Parse error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _config_or_exit(config_path: Path | None) -> XplotConfig:
    try:
        if config_path is not None:
            return load_config(config_path)
        return find_config(Path.cwd())
    except ConfigError as e:
        console.print(f"[red]Configuration error:[/red] {escape(e.message)}")
        raise typer.Exit(1)


def parse_command(
    expression: str = typer.Argument(..., help="Expression in x, e.g. 'sin(x) ** 2'"),
) -> None:
    """Check an expression and print its canonical form."""
    expr = _parse_or_exit(expression)
    console.print(escape(expr.to_text()), highlight=False)


def eval_command(
    expression: str = typer.Argument(..., help="Expression in x"),
    xs: list[float] = typer.Argument(..., help="Input values"),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to xplot.toml (default: ./xplot.toml)"
    ),
) -> None:
    """Evaluate an expression at each given x."""
    expr = _parse_or_exit(expression)
    config = _config_or_exit(config_path)
    precision = config.display.precision

    table = Table(title=escape(expr.to_text()))
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")

    for x in xs:
        y = expr.eval(x)
        style = None if y is not None else "yellow"
        table.add_row(format_value(x, precision), format_value(y, precision), style=style)

    console.print(table)


def sample_command(
    expression: str = typer.Argument(..., help="Expression in x"),
    x_min: float | None = typer.Option(None, "--from", help="First x value"),
    x_max: float | None = typer.Option(None, "--to", help="Last x value"),
    step: float | None = typer.Option(None, "--step", help="Distance between samples"),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="Path to xplot.toml (default: ./xplot.toml)"
    ),
) -> None:
    """Sample an expression over a range and list the continuous segments."""
    expr = _parse_or_exit(expression)
    config = _config_or_exit(config_path)

    start = config.sampling.x_min if x_min is None else x_min
    end = config.sampling.x_max if x_max is None else x_max
    resolution = config.sampling.step if step is None else step
    precision = config.display.precision

    try:
        segments = sample(expr, start, end, resolution)
    except ValueError as e:
        console.print(f"[red]Invalid range:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if not segments:
        message = f"{expr.to_text()} is undefined on [{start}, {end}]"
        console.print(f"[yellow]{escape(message)}[/yellow]")
        return

    table = Table(title=escape(expr.to_text()))
    table.add_column("segment", justify="right")
    table.add_column("points", justify="right")
    table.add_column("from x", justify="right")
    table.add_column("to x", justify="right")

    for i, segment in enumerate(segments, start=1):
        table.add_row(
            str(i),
            str(len(segment)),
            format_value(segment.x_start, precision),
            format_value(segment.x_end, precision),
        )

    console.print(table)
