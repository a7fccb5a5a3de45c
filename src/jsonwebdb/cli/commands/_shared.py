"""Shared CLI plumbing for command modules.

Session creation, format-option handling, and output helpers.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

import structlog

from jsonwebdb.cli.output import get_formatter, write_output
from jsonwebdb.core import messages
from jsonwebdb.core.config import load_config, resolve_config
from jsonwebdb.core.monitoring import setup_sentry
from jsonwebdb.core.session import Session

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    import typer

    from jsonwebdb.core.config import ResolvedConfig
    from jsonwebdb.core.cursor import Cursor


def get_config(ctx: typer.Context) -> ResolvedConfig:
    obj = ctx.ensure_object(dict)
    config = load_config(obj.get("config_file"))

    cli_overrides: dict[str, Any] = {}
    for key in ("url", "user", "password", "session", "timeout"):
        val = obj.get(key)
        if val is not None:
            cli_overrides[key] = val

    resolved = resolve_config(config, profile_name=obj.get("profile"), **cli_overrides)
    messages.set_language(resolved.language)
    if resolved.sentry_dsn:
        setup_sentry(resolved.sentry_dsn)
    obj["default_format"] = resolved.default_format
    return resolved


@asynccontextmanager
async def open_session(ctx: typer.Context) -> AsyncIterator[Session]:
    """Yield a Session, logging in first when credentials are configured.

    A session opened here is disconnected on exit; a session id supplied
    through config or --session is left open.
    """
    resolved = get_config(ctx)
    transport = ctx.ensure_object(dict).get("transport")
    session = Session.from_config(resolved, transport=transport)
    log = structlog.get_logger()

    owned = False
    try:
        if not session.connected and resolved.username:
            await session.connect(resolved.username, resolved.password)
            owned = True
        yield session
    finally:
        if owned:
            try:
                await session.disconnect()
            except Exception as e:  # noqa: BLE001
                log.warning("disconnect failed", error=str(e))
        await session.close()


def output_cursor(ctx: typer.Context, cursor: Cursor, show_types: bool = False) -> None:
    obj = ctx.ensure_object(dict)
    formatter = get_formatter(
        obj.get("format"),
        default=obj.get("default_format"),
        compact=obj.get("compact", False),
        width=obj.get("width", 40),
        no_header=obj.get("no_header", False),
        show_types=show_types,
    )
    write_output(formatter, cursor)
