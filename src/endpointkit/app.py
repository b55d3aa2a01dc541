"""Typer application and console-script entry point for endpointkit.

The command line is a developer tool around the library: it loads an
endpoint table from a ``module:attribute`` reference and either lists the
functions it generates (``inspect``) or calls one of them (``call``).

:func:`main` is the ``endpointkit`` console script declared in
``pyproject.toml``.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from endpointkit import __version__
from endpointkit.commands.call import call_command
from endpointkit.commands.inspect import inspect_command
from endpointkit.output import OutputFormat, OutputManager, set_output

app = typer.Typer(
    name="endpointkit",
    help="Inspect and call declarative HTTP endpoint tables.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.command("inspect")(inspect_command)
app.command("call")(call_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"endpointkit {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, no_color: bool) -> None:
    """Send ``endpointkit`` log records to stderr when ``--verbose`` is given."""
    package_logger = logging.getLogger("endpointkit")
    if not verbose:
        return
    handler = RichHandler(
        console=Console(stderr=True, no_color=no_color),
        show_path=False,
        markup=False,
    )
    package_logger.handlers = [handler]
    package_logger.setLevel(logging.DEBUG)


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    plain_output: bool = typer.Option(False, "--plain", help="Plain text output."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Root callback: install the output manager and logging from global flags."""
    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose))
    _configure_logging(verbose, no_color)


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``endpointkit`` console script."""
    _setup_signal_handlers()
    app()
