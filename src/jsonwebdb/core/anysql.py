"""AnySQL: run any SQL statement through the JsonWebDB Sql object.

Pick the method that matches the statement:

* execute(): the backend only reports success or failure.
* insert(), update(), delete(): the backend also reports affected rows.
* select(): the backend returns rows, wrapped in a Cursor.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from jsonwebdb.core import messages
from jsonwebdb.core.cursor import Cursor, parse_columns
from jsonwebdb.core.exceptions import ConfigError
from jsonwebdb.core.models import (
    Invoke,
    NameValuePair,
    Response,
    as_list,
    bindvalues_payload,
)

if TYPE_CHECKING:
    from jsonwebdb.core.session import Session


class AnySQL:
    """A raw SQL statement with optional bind values."""

    def __init__(
        self,
        session: Session,
        source: str,
        bindvalues: NameValuePair | list[NameValuePair] | None = None,
    ) -> None:
        if not source:
            raise ConfigError(messages.get("SOURCE_IS_NULL", "AnySQL"))
        if session is None:
            raise ConfigError(messages.get("SESSION_IS_NULL", "AnySQL"))

        self._source = source
        self._session = session
        self._bindvalues = as_list(bindvalues) if bindvalues is not None else None

        self._errm: str | None = None
        self._affected = 0
        self._success = True
        self._savepoint: bool | None = None

    def session(self) -> Session:
        return self._session

    def failed(self) -> bool:
        return not self._success

    def get_error_message(self) -> str | None:
        return self._errm

    def affected(self) -> int:
        return self._affected

    def use_savepoint(self, flag: bool) -> AnySQL:
        """Wrap the statement in a savepoint on the backend."""
        self._savepoint = flag
        return self

    def build_request(self, invoke: Invoke) -> dict[str, Any]:
        body: dict[str, Any] = {
            "invoke": invoke.value,
            "source": self._source,
            "session": self._session.session_id,
        }
        if self._bindvalues:
            body["bindvalues"] = bindvalues_payload(self._bindvalues)
        if self._savepoint is not None:
            body["savepoint"] = self._savepoint
        return {"Sql": body}

    async def _invoke(self, request: dict[str, Any]) -> Response:
        response = Response.parse(await self._session.invoke(request))
        self._errm = response.message
        self._success = response.success
        if not response.success:
            structlog.get_logger().debug(
                "statement declined",
                invoke=request["Sql"]["invoke"],
                message=response.message,
            )
        return response

    async def _modify(self, invoke: Invoke) -> bool:
        self._affected = 0
        response = await self._invoke(self.build_request(invoke))
        if self._success and invoke.reports_affected:
            self._affected = response.affected
        return self._success

    async def execute(self) -> bool:
        return await self._modify(Invoke.EXECUTE)

    async def insert(self) -> bool:
        return await self._modify(Invoke.INSERT)

    async def update(self) -> bool:
        return await self._modify(Invoke.UPDATE)

    async def delete(self) -> bool:
        return await self._modify(Invoke.DELETE)

    async def select(self, close: bool = False, page_size: int = 1) -> Cursor | None:
        """Run the query and return a Cursor, or None if the backend declined.

        Args:
            close: Ask the backend to close its cursor right away instead
                of keeping it open for fetch().
            page_size: Number of rows the backend returns per page.
        """
        request = self.build_request(Invoke.SELECT)
        select: dict[str, Any] = {"page-size": page_size}
        if close:
            select["cursor"] = False
        request["Sql"]["select()"] = select

        response = await self._invoke(request)
        if not response.success:
            return None

        names, definitions = parse_columns(response.columns)
        data = response.model_dump()
        data["columns"] = names
        return Cursor(self._session, definitions, data)
