"""jsonwebdb CLI entry point and command registration."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Annotated

import sentry_sdk
import typer

from jsonwebdb.__about__ import __version__
from jsonwebdb.cli.commands.sql import sql_command
from jsonwebdb.cli.commands.table import table_app
from jsonwebdb.cli.output import OutputFormat  # noqa: TC001
from jsonwebdb.core.exceptions import JsonWebDBError
from jsonwebdb.core.logging import setup_logging
from jsonwebdb.core.monitoring import setup_sentry

app = typer.Typer(
    help="jsonwebdb - command line client for JsonWebDB",
    no_args_is_help=True,
)

app.add_typer(table_app, name="table")
app.command("sql")(sql_command)


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"jsonwebdb {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable verbose logging"),
    ] = False,
    profile: Annotated[
        str | None,
        typer.Option("--profile", "-P", help="Named connection profile"),
    ] = None,
    url: Annotated[
        str | None,
        typer.Option("--url", "-u", help="JsonWebDB endpoint URL"),
    ] = None,
    user: Annotated[
        str | None,
        typer.Option("--user", "-U", help="User name"),
    ] = None,
    password: Annotated[
        str | None,
        typer.Option("--password", "-W", help="Password"),
    ] = None,
    session: Annotated[
        str | None,
        typer.Option("--session", help="Reuse an existing backend session id"),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", "-t", help="Request timeout in seconds"),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config file"),
    ] = None,
    format: Annotated[
        OutputFormat | None,
        typer.Option("--format", "-f", help="Output format: table|json|csv"),
    ] = None,
    compact: Annotated[
        bool,
        typer.Option("--compact", help="Compact JSON output (no indentation)"),
    ] = False,
    width: Annotated[
        int,
        typer.Option("--width", help="Column width for table format"),
    ] = 40,
    no_header: Annotated[
        bool,
        typer.Option("--no-header", help="Suppress header row in CSV output"),
    ] = False,
) -> None:
    """jsonwebdb - command line client for JsonWebDB."""
    setup_logging(verbose)
    setup_sentry()

    obj = ctx.ensure_object(dict)
    obj["verbose"] = verbose
    obj["profile"] = profile
    obj["url"] = url
    obj["user"] = user
    obj["password"] = password
    obj["session"] = session
    obj["timeout"] = timeout
    obj["config_file"] = config_file

    obj["format"] = format.value if format else None
    obj["compact"] = compact
    obj["width"] = width
    obj["no_header"] = no_header


def run() -> None:
    """Entry point with global error handling."""
    try:
        app()
    except JsonWebDBError as e:
        sentry_sdk.capture_exception(e)
        typer.echo(f"Error: {e.message}", err=True)
        raise SystemExit(e.exit_code) from None
    except SystemExit:
        raise
    except KeyboardInterrupt:
        raise SystemExit(130) from None
    except Exception as e:
        sentry_sdk.capture_exception(e)
        typer.echo(f"Error: {e}", err=True)
        raise SystemExit(1) from None
