from __future__ import annotations

import asyncio
from typing import Annotated

import typer

from jsonwebdb.cli.commands._shared import open_session, output_cursor
from jsonwebdb.core.anysql import AnySQL
from jsonwebdb.core.exceptions import BackendError, InputError
from jsonwebdb.core.exit_codes import ExitCode
from jsonwebdb.core.models import Invoke, NameValuePair
from jsonwebdb.core.source import parse_bind_values, resolve_sql_source


async def _run(
    ctx: typer.Context,
    sql: str,
    invoke: Invoke,
    bindvalues: list[NameValuePair],
    savepoint: bool | None,
    page_size: int,
) -> None:
    async with open_session(ctx) as session:
        stmt = AnySQL(session, sql, bindvalues or None)
        if savepoint is not None:
            stmt.use_savepoint(savepoint)

        if invoke is Invoke.SELECT:
            cursor = await stmt.select(page_size=page_size)
            if cursor is None:
                raise BackendError(stmt.get_error_message() or "select failed")
            while cursor.more():
                if not await cursor.fetch():
                    raise BackendError(cursor.get_error_message() or "fetch failed")
            output_cursor(ctx, cursor)
            return

        ok = await getattr(stmt, invoke.value)()
        if not ok:
            raise BackendError(stmt.get_error_message() or f"{invoke.value} failed")

        if invoke.reports_affected:
            typer.echo(f"{stmt.affected()} row(s) affected")
        else:
            typer.echo("OK")


def sql_command(
    ctx: typer.Context,
    file: Annotated[
        str | None,
        typer.Argument(help="SQL file to run"),
    ] = None,
    execute: Annotated[
        str | None,
        typer.Option("--execute", "-e", help="Inline SQL statement"),
    ] = None,
    invoke: Annotated[
        Invoke,
        typer.Option("--invoke", "-i", help="Statement kind"),
    ] = Invoke.SELECT,
    bind: Annotated[
        list[str] | None,
        typer.Option("--bind", "-b", help="Bind value as name=value (repeatable)"),
    ] = None,
    savepoint: Annotated[
        bool | None,
        typer.Option("--savepoint/--no-savepoint", help="Wrap statement in a savepoint"),
    ] = None,
    page_size: Annotated[
        int,
        typer.Option("--page-size", min=1, help="Rows returned per page"),
    ] = 100,
) -> None:
    """Run a SQL statement from file, inline (-e), or stdin."""
    try:
        sql = resolve_sql_source(inline=execute, file_path=file)
        bindvalues = parse_bind_values(bind)
    except InputError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(ExitCode.INPUT_ERROR) from exc

    asyncio.run(_run(ctx, sql, invoke, bindvalues, savepoint, page_size))
