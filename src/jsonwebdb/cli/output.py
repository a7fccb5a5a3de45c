"""Output format selection and TTY auto-detection."""

from __future__ import annotations

import sys
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from jsonwebdb.core.cursor import Cursor
    from jsonwebdb.formatters.base import Formatter


class OutputFormat(StrEnum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def detect_tty() -> bool:
    return sys.stdout.isatty()


def resolve_format(format_flag: str | None, default: str | None = None) -> str:
    """Explicit --format wins, then the configured default.

    Without either: table for a TTY, csv for pipes.
    """
    if format_flag is not None:
        return format_flag
    if default is not None and default != "table":
        return default
    return "table" if detect_tty() else "csv"


def get_formatter(
    format_flag: str | None = None,
    *,
    default: str | None = None,
    compact: bool = False,
    width: int = 40,
    no_header: bool = False,
    show_types: bool = False,
) -> Formatter:
    # Importing the modules populates the registry.
    import jsonwebdb.formatters.csv  # noqa: F401
    import jsonwebdb.formatters.json  # noqa: F401
    import jsonwebdb.formatters.table  # noqa: F401
    from jsonwebdb.formatters.base import registry

    fmt_name = resolve_format(format_flag, default)

    kwargs: dict[str, object] = {}
    if fmt_name == "table":
        kwargs["width"] = width
        kwargs["show_types"] = show_types
    elif fmt_name == "json":
        kwargs["compact"] = compact
    elif fmt_name == "csv":
        kwargs["no_header"] = no_header

    return registry.get(fmt_name, **kwargs)


def write_output(formatter: Formatter, cursor: Cursor) -> None:
    for line in formatter.format(cursor):
        sys.stdout.write(line + "\n")
