"""Insert: the insert method of the JsonWebDB Table object."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from jsonwebdb.core import messages
from jsonwebdb.core.cursor import Cursor
from jsonwebdb.core.exceptions import ConfigError
from jsonwebdb.core.models import Invoke, Response, as_list, bindvalues_payload

if TYPE_CHECKING:
    from jsonwebdb.core.record import Record
    from jsonwebdb.core.table import Table


class Insert:
    """Inserts one record into a table.

    A declined insert is reported through failed() and
    get_error_message(); it is never raised.
    """

    def __init__(self, table: Table) -> None:
        if table is None:
            raise ConfigError(messages.get("TABLE_IS_NULL", "Insert"))

        self._table = table
        self._source = table.source
        self._session = table.session

        self._errm: str | None = None
        self._success = True
        self._affected = 0
        self._cursor: Cursor | None = None
        self._savepoint: bool | None = None
        self._returning: list[str] | None = None

    def failed(self) -> bool:
        return not self._success

    def get_error_message(self) -> str | None:
        return self._errm

    def affected(self) -> int:
        return self._affected

    def get_return_values(self) -> Cursor | None:
        """Rows produced by the returning clause, when one was requested."""
        return self._cursor

    def set_return_columns(self, columns: str | list[str]) -> Insert:
        """Ask the backend to return these columns after the insert.

        Useful when triggers assign or modify columns.
        """
        self._returning = as_list(columns)
        return self

    def use_savepoint(self, flag: bool) -> Insert:
        """Only roll back this statement, not the transaction, on error."""
        self._savepoint = flag
        return self

    def build_request(self, record: Record) -> dict[str, Any]:
        body: dict[str, Any] = {
            "values": [
                {"column": column, "value": value}
                for column, value in zip(record.columns, record.values, strict=True)
            ]
        }
        if self._savepoint is not None:
            body["savepoint"] = self._savepoint
        if self._returning:
            body["returning"] = self._returning

        request: dict[str, Any] = {
            "Table": {
                "invoke": Invoke.INSERT.value,
                "source": self._source,
                "session": self._session.session_id,
                "insert()": body,
            }
        }
        if self._table.bindvalues:
            request["Table"]["bindvalues"] = bindvalues_payload(self._table.bindvalues)
        return request

    async def execute(self, record: Record) -> bool:
        """Insert record. Returns whether the backend accepted it."""
        self._affected = 0
        self._cursor = None

        if not await self._table.try_describe():
            self._success = False
            self._errm = self._table.get_error_message()
            structlog.get_logger().debug(
                "insert declined", source=self._source, message=self._errm
            )
            return False

        request = self.build_request(record)
        response = Response.parse(await self._session.invoke(request))

        self._errm = response.message
        self._success = response.success

        if not self._success:
            structlog.get_logger().debug(
                "insert declined", source=self._source, message=self._errm
            )
            return False

        self._affected = response.affected

        if self._returning:
            curs = {
                "more": False,
                "rows": response.rows,
                "columns": self._returning,
            }
            self._cursor = Cursor(
                self._session, self._table.get_column_definitions(), curs
            )

        return True
