"""Wire models for JsonWebDB requests and responses.

Pydantic models for bind values, column metadata and the response
envelope returned by Session.invoke().
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    ValidationError,
    ValidationInfo,
    field_validator,
)

from jsonwebdb.core.exceptions import ProtocolError


class Invoke(StrEnum):
    """Operation requested from the backend."""

    EXECUTE = "execute"
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    SELECT = "select"

    @property
    def reports_affected(self) -> bool:
        return self in (Invoke.INSERT, Invoke.UPDATE, Invoke.DELETE)


class NameValuePair(BaseModel):
    """A named bind value substituted into the SQL source by the backend."""

    name: str
    value: Any = None


class ColumnDefinition(BaseModel):
    """Metadata for a single result column."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str | None = None
    sqltype: int | str | None = None
    precision: list[int] | int | None = None


class Response(BaseModel):
    """Parsed backend response.

    Unknown fields are kept so callers can reach backend extensions.
    """

    model_config = ConfigDict(extra="allow")

    success: bool = False
    message: str | None = None
    affected: int = 0
    columns: list[Any] = []
    rows: list[Any] = []
    more: bool = False
    cursor: str | int | None = None
    session: str | None = None

    @field_validator("success", "affected", "columns", "rows", "more", mode="before")
    @classmethod
    def null_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return v

    @field_validator("message", mode="before")
    @classmethod
    def message_to_str(cls, v: Any) -> str | None:
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @classmethod
    def parse(cls, data: Any) -> Response:
        """Validate a decoded body. Raises ProtocolError on a malformed one."""
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            msg = f"Malformed response: {e}"
            raise ProtocolError(msg) from e


def bindvalues_payload(bindvalues: list[NameValuePair]) -> list[dict[str, Any]]:
    return [bv.model_dump() for bv in bindvalues]


def as_list(value: Any) -> list[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]
