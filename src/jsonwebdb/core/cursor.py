"""Cursor over the rows returned by a select or a returning clause."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from jsonwebdb.core import messages
from jsonwebdb.core.exceptions import BackendError
from jsonwebdb.core.models import ColumnDefinition, Response
from jsonwebdb.core.record import Record

if TYPE_CHECKING:
    from collections.abc import Iterator

    from jsonwebdb.core.session import Session


def parse_columns(
    descriptors: list[Any],
) -> tuple[list[str], dict[str, ColumnDefinition]]:
    """Turn backend column descriptors into names and definitions.

    Definitions are keyed by lower-cased column name.
    """
    names: list[str] = []
    definitions: dict[str, ColumnDefinition] = {}
    for coldef in descriptors:
        column = ColumnDefinition(
            name=coldef["name"],
            type=coldef.get("type"),
            sqltype=coldef.get("sqltype"),
            precision=coldef.get("precision"),
        )
        names.append(column.name)
        definitions[column.name.lower()] = column
    return names, definitions


class Cursor:
    """Buffered rows bound to their column metadata.

    Column names are exposed lower-cased. When the backend keeps a
    server side cursor open (more is true and a cursor id was returned)
    fetch() pulls the next page into the buffer.
    """

    def __init__(
        self,
        session: Session,
        columns: dict[str, ColumnDefinition],
        response: dict[str, Any],
    ) -> None:
        self._session = session
        self._definitions = dict(columns)
        self._columns = [str(name).lower() for name in response.get("columns") or []]
        self._rows: list[Any] = list(response.get("rows") or [])
        self._more = bool(response.get("more", False))
        self._cursor_id: str | int | None = response.get("cursor")
        self._pos = 0
        self._errm: str | None = None

    @property
    def columns(self) -> list[str]:
        return self._columns

    @property
    def rows(self) -> list[Any]:
        return self._rows

    def get_column_definition(self, column: str) -> ColumnDefinition | None:
        return self._definitions.get(column.lower())

    def get_column_definitions(self) -> dict[str, ColumnDefinition]:
        return dict(self._definitions)

    def get_error_message(self) -> str | None:
        return self._errm

    def more(self) -> bool:
        """Whether the backend has rows that are not yet fetched."""
        return self._more

    def _to_record(self, row: Any) -> Record:
        if isinstance(row, dict):
            lowered = {str(k).lower(): v for k, v in row.items()}
            return Record(self._columns, [lowered.get(c) for c in self._columns])
        return Record(self._columns, row)

    def next(self) -> Record | None:
        """Return the next buffered row, or None when the buffer is exhausted."""
        if self._pos >= len(self._rows):
            return None
        row = self._rows[self._pos]
        self._pos += 1
        return self._to_record(row)

    def records(self) -> list[Record]:
        """All buffered rows, independent of the next() position."""
        return [self._to_record(row) for row in self._rows]

    def __iter__(self) -> Iterator[Record]:
        while (record := self.next()) is not None:
            yield record

    def __len__(self) -> int:
        return len(self._rows)

    async def fetch(self) -> bool:
        """Fetch the next page from the backend into the buffer.

        Returns False when there is nothing more to fetch or the backend
        declined; the decline message is available from get_error_message().
        """
        if not self._more:
            return False
        if self._cursor_id is None:
            raise BackendError(messages.get("NO_CURSOR", "Cursor"))

        request: dict[str, Any] = {
            "Cursor": {
                "invoke": "fetch",
                "cursor": self._cursor_id,
                "session": self._session.session_id,
            }
        }
        response = Response.parse(await self._session.invoke(request))
        self._errm = response.message

        if not response.success:
            structlog.get_logger().debug(
                "fetch declined", cursor=self._cursor_id, message=response.message
            )
            self._more = False
            return False

        self._rows.extend(response.rows)
        self._more = response.more
        return True

    async def close(self) -> bool:
        """Release the server side cursor if one is still open."""
        if not self._more or self._cursor_id is None:
            self._more = False
            return True

        request: dict[str, Any] = {
            "Cursor": {
                "invoke": "close",
                "cursor": self._cursor_id,
                "session": self._session.session_id,
            }
        }
        response = Response.parse(await self._session.invoke(request))
        self._errm = response.message
        self._more = False
        return response.success
