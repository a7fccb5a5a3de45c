"""Localized messages for errors raised on the client side.

Messages are looked up by code and formatted with positional arguments.
Unknown languages and codes missing from a language fall back to English.
"""

from __future__ import annotations

from typing import Any

DEFAULT_LANGUAGE = "en"

_MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "SOURCE_IS_NULL": "{0}: source cannot be null",
        "SESSION_IS_NULL": "{0}: session cannot be null",
        "TABLE_IS_NULL": "{0}: table cannot be null",
        "DESCRIBE_FAILED": "{0}: unable to describe '{1}': {2}",
        "NO_CURSOR": "{0}: response did not supply a cursor",
        "COLUMN_VALUE_MISMATCH": "{0}: {1} columns but {2} values",
    },
    "da": {
        "SOURCE_IS_NULL": "{0}: source må ikke være tom",
        "SESSION_IS_NULL": "{0}: session må ikke være tom",
        "TABLE_IS_NULL": "{0}: tabel må ikke være tom",
    },
}

_language = DEFAULT_LANGUAGE


def set_language(language: str) -> None:
    """Select the language used by get(). Unknown languages use English."""
    global _language
    _language = language if language in _MESSAGES else DEFAULT_LANGUAGE


def get_language() -> str:
    return _language


def get(code: str, *args: Any) -> str:
    """Return the message for code in the current language.

    Codes that are not defined anywhere are returned as-is.
    """
    template = _MESSAGES[_language].get(code)
    if template is None:
        template = _MESSAGES[DEFAULT_LANGUAGE].get(code)
    if template is None:
        return code
    return template.format(*args)
