"""Formatter protocol and registry for rendering cursors."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from jsonwebdb.core.cursor import Cursor


@runtime_checkable
class Formatter(Protocol):
    """Renders the buffered rows of a Cursor as lines of text."""

    def format(self, cursor: Cursor) -> Iterator[str]: ...


def cell(value: Any) -> str:
    return "" if value is None else str(value)


class FormatterRegistry:
    """Look up formatters by name."""

    def __init__(self) -> None:
        self._formatters: dict[str, type[Formatter]] = {}

    def register(self, name: str, formatter_class: type[Formatter]) -> None:
        self._formatters[name] = formatter_class

    def get(self, name: str, **kwargs: object) -> Formatter:
        """Raises KeyError if the format name is not registered."""
        if name not in self._formatters:
            available = ", ".join(sorted(self._formatters))
            msg = f"Unknown format {name!r}. Available: {available}"
            raise KeyError(msg)
        return self._formatters[name](**kwargs)

    @property
    def available(self) -> list[str]:
        return sorted(self._formatters)


registry = FormatterRegistry()
