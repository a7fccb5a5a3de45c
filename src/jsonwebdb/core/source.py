"""SQL source and bind value parsing for the CLI.

The SQL text comes from the first available of: the -e option, a file
argument, or piped stdin. Bind values are given as name=value; values
that parse as JSON (numbers, booleans, null, quoted strings) keep their
JSON type, anything else is sent as a plain string.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import IO, Any

from jsonwebdb.core.exceptions import InputError
from jsonwebdb.core.models import NameValuePair


def resolve_sql_source(
    inline: str | None,
    file_path: str | None,
    stdin: IO[str] | None = None,
) -> str:
    """Return the SQL text. Raises InputError when there is none."""
    if inline is not None:
        sql = inline
    elif file_path is not None:
        p = Path(file_path)
        if not p.is_file():
            msg = f"SQL file not found: {file_path}"
            raise InputError(msg)
        sql = p.read_text()
    else:
        stream = stdin if stdin is not None else sys.stdin
        if stream.isatty():
            msg = "No SQL provided. Use -e, a file path, or pipe to stdin."
            raise InputError(msg)
        sql = stream.read()

    if not sql.strip():
        raise InputError("SQL source is empty")
    return sql.strip()


def _decode_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def parse_bind_values(pairs: list[str] | None) -> list[NameValuePair]:
    """Parse name=value strings, keeping their order."""
    bindvalues: list[NameValuePair] = []
    for pair in pairs or []:
        name, sep, raw = pair.partition("=")
        name = name.strip()
        if not sep or not name:
            msg = f"Invalid bind value: '{pair}'. Expected name=value"
            raise InputError(msg)
        bindvalues.append(NameValuePair(name=name, value=_decode_value(raw)))
    return bindvalues
