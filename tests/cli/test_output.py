"""Tests for output format selection and TTY detection."""

import pytest

from jsonwebdb.cli.output import OutputFormat, get_formatter, resolve_format
from jsonwebdb.formatters.csv import CSVFormatter
from jsonwebdb.formatters.json import JSONFormatter
from jsonwebdb.formatters.table import TableFormatter


@pytest.mark.unit
def test_output_format_enum_values():
    assert [f.value for f in OutputFormat] == ["table", "json", "csv"]


@pytest.mark.unit
def test_explicit_format_wins(monkeypatch):
    monkeypatch.setattr("jsonwebdb.cli.output.detect_tty", lambda: True)
    assert resolve_format("json", default="csv") == "json"


@pytest.mark.unit
def test_configured_default(monkeypatch):
    monkeypatch.setattr("jsonwebdb.cli.output.detect_tty", lambda: True)
    assert resolve_format(None, default="json") == "json"


@pytest.mark.unit
def test_tty_defaults_to_table(monkeypatch):
    monkeypatch.setattr("jsonwebdb.cli.output.detect_tty", lambda: True)
    assert resolve_format(None) == "table"


@pytest.mark.unit
def test_pipe_defaults_to_csv(monkeypatch):
    monkeypatch.setattr("jsonwebdb.cli.output.detect_tty", lambda: False)
    assert resolve_format(None, default="table") == "csv"


@pytest.mark.unit
def test_get_formatter_kwargs():
    table = get_formatter("table", width=12, show_types=True)
    assert isinstance(table, TableFormatter)
    assert table.width == 12
    assert table.show_types is True

    js = get_formatter("json", compact=True)
    assert isinstance(js, JSONFormatter)
    assert js.compact is True

    csv = get_formatter("csv", no_header=True)
    assert isinstance(csv, CSVFormatter)
    assert csv.no_header is True
