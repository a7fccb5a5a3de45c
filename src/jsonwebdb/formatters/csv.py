"""CSV rendering of a Cursor (RFC 4180)."""

from __future__ import annotations

import csv
from io import StringIO
from typing import TYPE_CHECKING

from jsonwebdb.formatters.base import cell, registry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from jsonwebdb.core.cursor import Cursor


def _write_row(values: list[str]) -> str:
    buf = StringIO()
    csv.writer(buf).writerow(values)
    return buf.getvalue().rstrip("\r\n")


class CSVFormatter:
    def __init__(self, no_header: bool = False) -> None:
        self.no_header = no_header

    def format(self, cursor: Cursor) -> Iterator[str]:
        if not self.no_header:
            yield _write_row(cursor.columns)
        for record in cursor.records():
            yield _write_row([cell(v) for v in record.values])


registry.register("csv", CSVFormatter)
