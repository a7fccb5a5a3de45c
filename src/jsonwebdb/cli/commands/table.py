from __future__ import annotations

import asyncio
from typing import Annotated

import typer

from jsonwebdb.cli.commands._shared import open_session, output_cursor
from jsonwebdb.core.cursor import Cursor
from jsonwebdb.core.exceptions import BackendError, InputError
from jsonwebdb.core.exit_codes import ExitCode
from jsonwebdb.core.record import Record
from jsonwebdb.core.source import parse_bind_values
from jsonwebdb.core.table import Table

table_app = typer.Typer(help="Table operations", no_args_is_help=True)

_DESCRIBE_COLUMNS = ["name", "type", "sqltype", "precision"]


async def _describe(ctx: typer.Context, source: str) -> None:
    async with open_session(ctx) as session:
        definitions = await Table(session, source).describe()
        rows = [
            [d.name, d.type, d.sqltype, d.precision] for d in definitions.values()
        ]
        cursor = Cursor(session, {}, {"columns": _DESCRIBE_COLUMNS, "rows": rows})
        output_cursor(ctx, cursor)


async def _insert(
    ctx: typer.Context,
    source: str,
    record: Record,
    returning: list[str] | None,
    savepoint: bool | None,
) -> None:
    async with open_session(ctx) as session:
        insert = Table(session, source).insert()
        if returning:
            insert.set_return_columns(returning)
        if savepoint is not None:
            insert.use_savepoint(savepoint)

        if not await insert.execute(record):
            raise BackendError(insert.get_error_message() or "insert failed")

        cursor = insert.get_return_values()
        if cursor is None:
            typer.echo(f"{insert.affected()} row(s) inserted")
        else:
            output_cursor(ctx, cursor, show_types=True)


@table_app.command("describe")
def describe_command(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="Table name")],
) -> None:
    """Show the column definitions of a table."""
    asyncio.run(_describe(ctx, source))


@table_app.command("insert")
def insert_command(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="Table name")],
    value: Annotated[
        list[str],
        typer.Option("--value", "-v", help="Column value as column=value (repeatable)"),
    ],
    returning: Annotated[
        list[str] | None,
        typer.Option("--returning", "-r", help="Column to return (repeatable)"),
    ] = None,
    savepoint: Annotated[
        bool | None,
        typer.Option("--savepoint/--no-savepoint", help="Wrap insert in a savepoint"),
    ] = None,
) -> None:
    """Insert one row into a table."""
    try:
        pairs = parse_bind_values(value)
    except InputError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(ExitCode.INPUT_ERROR) from exc

    record = Record([p.name for p in pairs], [p.value for p in pairs])
    asyncio.run(_insert(ctx, source, record, returning, savepoint))
