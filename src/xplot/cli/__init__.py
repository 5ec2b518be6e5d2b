"""
xplot CLI package.

- expression.py: parse / eval / sample commands
- utils.py: Shared utilities
"""

import sys

import typer

from xplot.cli.expression import eval_command, parse_command, sample_command
from xplot.cli.utils import configure_logging, get_version, version_callback

app = typer.Typer(
    help="xplot - compile and sample single-variable expressions",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """xplot CLI main callback for global options."""
    configure_logging(verbose)


app.command(name="parse")(parse_command)
app.command(name="eval")(eval_command)
app.command(name="sample")(sample_command)


def main(argv: list[str] | None = None) -> None:
    app(args=argv, standalone_mode=True)


if __name__ == "__main__":
    main(sys.argv[1:])

__all__ = [
    "app",
    "main",
    "get_version",
    "version_callback",
]
