"""Tests for SQL source resolution and bind value parsing."""

import io

import pytest

from jsonwebdb.core.exceptions import InputError
from jsonwebdb.core.source import parse_bind_values, resolve_sql_source


class _Tty(io.StringIO):
    def isatty(self):
        return True


@pytest.mark.unit
class TestResolveSqlSource:
    def test_inline_wins(self, temp_dir):
        path = temp_dir / "q.sql"
        path.write_text("select 2")
        assert resolve_sql_source("select 1", str(path)) == "select 1"

    def test_file(self, temp_dir):
        path = temp_dir / "q.sql"
        path.write_text("select 2\n")
        assert resolve_sql_source(None, str(path)) == "select 2"

    def test_missing_file(self, temp_dir):
        with pytest.raises(InputError, match="SQL file not found"):
            resolve_sql_source(None, str(temp_dir / "nope.sql"))

    def test_stdin(self):
        assert resolve_sql_source(None, None, io.StringIO("select 3")) == "select 3"

    def test_tty_stdin_without_source(self):
        with pytest.raises(InputError, match="No SQL provided"):
            resolve_sql_source(None, None, _Tty())

    def test_blank_source(self):
        with pytest.raises(InputError, match="empty"):
            resolve_sql_source("   ", None)


@pytest.mark.unit
class TestParseBindValues:
    def test_none(self):
        assert parse_bind_values(None) == []

    def test_json_typed_values(self):
        binds = parse_bind_values(["n=42", "f=1.5", "b=true", "z=null", 's="7"'])
        assert [(b.name, b.value) for b in binds] == [
            ("n", 42),
            ("f", 1.5),
            ("b", True),
            ("z", None),
            ("s", "7"),
        ]

    def test_plain_string(self):
        assert parse_bind_values(["name=KING"])[0].value == "KING"

    def test_value_may_contain_equals(self):
        assert parse_bind_values(["expr=a=b"])[0].value == "a=b"

    def test_empty_value(self):
        assert parse_bind_values(["x="])[0].value == ""

    @pytest.mark.parametrize("pair", ["novalue", "=1"])
    def test_invalid(self, pair):
        with pytest.raises(InputError, match="Invalid bind value"):
            parse_bind_values([pair])
