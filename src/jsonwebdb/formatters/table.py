"""Rich table rendering of a Cursor."""

from __future__ import annotations

import shutil
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from jsonwebdb.formatters.base import cell, registry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from jsonwebdb.core.cursor import Cursor

_NO_ROWS = "No rows"


def _truncate(value: str, width: int) -> str:
    if len(value) <= width:
        return value
    return value[: width - 1] + "…"


class TableFormatter:
    def __init__(self, width: int = 40, show_types: bool = False) -> None:
        self.width = width
        self.show_types = show_types

    def _header(self, cursor: Cursor, column: str) -> str:
        definition = cursor.get_column_definition(column)
        if self.show_types and definition is not None and definition.type:
            return f"{column}\n{definition.type.lower()}"
        return column

    def format(self, cursor: Cursor) -> Iterator[str]:
        records = cursor.records()
        if not records:
            yield _NO_ROWS
            return

        table = Table(show_edge=True, pad_edge=True)
        for column in cursor.columns:
            table.add_column(self._header(cursor, column), no_wrap=True)
        for record in records:
            table.add_row(*(_truncate(cell(v), self.width) for v in record.values))

        buf = StringIO()
        term_width = shutil.get_terminal_size((120, 24)).columns
        Console(file=buf, force_terminal=True, width=term_width).print(table)
        yield buf.getvalue().rstrip("\n")


registry.register("table", TableFormatter)
