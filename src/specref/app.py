"""Typer application and CLI entry point for specref.

This module builds the top-level Typer application and registers the
built-in commands (``resolve``, ``inline``, ``schemas``, ``validate``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler, invokes the Typer app,
and turns any escaped :class:`~specref.exceptions.SpecrefError` into a clean
exit with the error's ``exit_code``.

See Also:
    :mod:`specref.config`: Settings resolution used by :func:`main_callback`.
    :mod:`specref.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import logging
import signal
import sys
from typing import Any, Optional

import typer

from specref import __version__
from specref.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="specref",
    help="Resolve $ref pointers in OpenAPI 3.x documents.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


from specref.commands.inspect import schemas_command, validate_command  # noqa: E402
from specref.commands.resolve import inline_command, resolve_command  # noqa: E402

app.command("resolve")(resolve_command)
app.command("inline")(inline_command)
app.command("schemas")(schemas_command)
app.command("validate")(validate_command)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"specref {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    separator: Optional[str] = typer.Option(
        None, "--separator", help="Separator for printed schema locations."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every command.

    Resolves :class:`~specref.models.Settings` from flags, environment, and
    config files, installs the global
    :class:`~specref.output.OutputManager`, and stores the settings in
    ``ctx.obj`` for the commands.
    """
    from specref.config import resolve_config
    from specref.exceptions import ConfigError, InvalidUsageError
    from specref.output import OutputFormat, OutputManager, set_output

    if json_output and plain_output:
        usage = InvalidUsageError("--json and --plain are mutually exclusive")
        OutputManager(no_color=no_color).error(str(usage))
        raise typer.Exit(code=usage.exit_code)

    cli_format: Optional[str] = None
    if json_output:
        cli_format = OutputFormat.JSON.value
    elif plain_output:
        cli_format = OutputFormat.PLAIN.value

    try:
        settings = resolve_config(cli_format=cli_format, cli_separator=separator)
    except ConfigError as exc:
        OutputManager(no_color=no_color).error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    try:
        fmt = OutputFormat(settings.output.format)
    except ValueError:
        OutputManager(no_color=no_color).error(
            f"Unknown output format: {settings.output.format}"
        )
        raise typer.Exit(code=ConfigError.exit_code) from None

    set_output(
        OutputManager(format=fmt, no_color=no_color, quiet=quiet, verbose=verbose)
    )

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(name)s - %(levelname)s - %(message)s",
        )

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def main() -> None:
    """CLI entry point invoked by the ``specref`` console script.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except Exception as exc:
        from specref.exceptions import SpecrefError
        from specref.output import error

        if isinstance(exc, SpecrefError):
            error(str(exc))
            sys.exit(exc.exit_code)
        error(f"Unexpected error: {exc}")
        sys.exit(EXIT_GENERIC_FAILURE)
