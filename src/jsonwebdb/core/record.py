"""Record: an ordered set of column names and matching values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jsonwebdb.core import messages
from jsonwebdb.core.exceptions import InputError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


class Record:
    """A row, either built by the caller for an insert or read from a Cursor."""

    def __init__(self, columns: Iterable[str], values: Iterable[Any] | None = None) -> None:
        self._columns = list(columns)
        if values is None:
            self._values: list[Any] = [None] * len(self._columns)
        else:
            self._values = list(values)

        if len(self._columns) != len(self._values):
            msg = messages.get(
                "COLUMN_VALUE_MISMATCH", "Record", len(self._columns), len(self._values)
            )
            raise InputError(msg)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Record:
        return cls(data.keys(), data.values())

    @property
    def columns(self) -> list[str]:
        return self._columns

    @property
    def values(self) -> list[Any]:
        return self._values

    def _index(self, column: str) -> int | None:
        wanted = column.lower()
        for i, name in enumerate(self._columns):
            if name.lower() == wanted:
                return i
        return None

    def get_value(self, column: str) -> Any:
        """Column lookup is case-insensitive. Raises KeyError for unknown columns."""
        idx = self._index(column)
        if idx is None:
            raise KeyError(column)
        return self._values[idx]

    def set_value(self, column: str, value: Any) -> Record:
        idx = self._index(column)
        if idx is None:
            self._columns.append(column)
            self._values.append(value)
        else:
            self._values[idx] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        return dict(zip(self._columns, self._values, strict=True))

    def __len__(self) -> int:
        return len(self._columns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._columns == other._columns and self._values == other._values

    def __repr__(self) -> str:
        return f"Record({self.to_dict()!r})"
