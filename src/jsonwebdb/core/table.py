"""Table: a named backend table reached through a Session."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from jsonwebdb.core import messages
from jsonwebdb.core.cursor import parse_columns
from jsonwebdb.core.exceptions import BackendError, ConfigError
from jsonwebdb.core.models import NameValuePair, Response, as_list, bindvalues_payload

if TYPE_CHECKING:
    from jsonwebdb.core.insert import Insert
    from jsonwebdb.core.models import ColumnDefinition
    from jsonwebdb.core.session import Session


class Table:
    """Client side handle for the JsonWebDB Table object.

    Column definitions are described once and cached for the lifetime
    of the instance.
    """

    def __init__(
        self,
        session: Session,
        source: str,
        bindvalues: NameValuePair | list[NameValuePair] | None = None,
    ) -> None:
        if not source:
            raise ConfigError(messages.get("SOURCE_IS_NULL", "Table"))
        if session is None:
            raise ConfigError(messages.get("SESSION_IS_NULL", "Table"))

        self._source = source
        self._session = session
        self._bindvalues = as_list(bindvalues) if bindvalues is not None else None
        self._definitions: dict[str, ColumnDefinition] | None = None
        self._errm: str | None = None

    @property
    def source(self) -> str:
        return self._source

    @property
    def session(self) -> Session:
        return self._session

    @property
    def bindvalues(self) -> list[NameValuePair] | None:
        return self._bindvalues

    async def try_describe(self) -> bool:
        """Fetch column definitions from the backend, once.

        Returns False when the backend declines; the message is kept in
        get_error_message().
        """
        if self._definitions is not None:
            return True

        request: dict[str, Any] = {
            "Table": {
                "invoke": "describe",
                "source": self._source,
                "session": self._session.session_id,
            }
        }
        if self._bindvalues:
            request["Table"]["bindvalues"] = bindvalues_payload(self._bindvalues)

        response = Response.parse(await self._session.invoke(request))
        self._errm = response.message
        if not response.success:
            structlog.get_logger().debug(
                "describe declined", source=self._source, message=response.message
            )
            return False

        _, self._definitions = parse_columns(response.columns)
        structlog.get_logger().debug(
            "table described", source=self._source, columns=len(self._definitions)
        )
        return True

    async def describe(self) -> dict[str, ColumnDefinition]:
        """Column definitions keyed by lower-cased name.

        Raises BackendError when the backend cannot describe the table.
        """
        if not await self.try_describe():
            msg = messages.get("DESCRIBE_FAILED", "Table", self._source, self._errm)
            raise BackendError(msg)
        return dict(self._definitions or {})

    def get_error_message(self) -> str | None:
        return self._errm

    def get_column_definitions(self) -> dict[str, ColumnDefinition]:
        """Cached definitions; empty until describe() has completed."""
        return dict(self._definitions or {})

    def insert(self) -> Insert:
        from jsonwebdb.core.insert import Insert

        return Insert(self)
