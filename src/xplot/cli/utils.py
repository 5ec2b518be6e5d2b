"""
xplot CLI utilities.

Shared helpers used across CLI modules.
"""

import logging
import platform

import typer


def get_version() -> str:
    """Get xplot version from package metadata."""
    from xplot import __version__

    return __version__


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        python_version = platform.python_version()
        python_impl = platform.python_implementation()

        typer.echo(f"xplot {get_version()}")
        typer.echo(f"Python {python_version} ({python_impl})")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Send library log records to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def format_value(value: float | None, precision: int) -> str:
    if value is None:
        return "undefined"
    return f"{value:.{precision}g}"
