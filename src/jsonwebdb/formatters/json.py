"""JSON rendering of a Cursor: one object per row keyed by column name."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from jsonwebdb.formatters.base import registry

if TYPE_CHECKING:
    from collections.abc import Iterator

    from jsonwebdb.core.cursor import Cursor


class JSONFormatter:
    def __init__(self, compact: bool = False) -> None:
        self.compact = compact

    def format(self, cursor: Cursor) -> Iterator[str]:
        rows = [record.to_dict() for record in cursor.records()]
        indent = None if self.compact else 2
        yield json.dumps(rows, indent=indent, default=str)


registry.register("json", JSONFormatter)
