"""Output formatters for cursors."""

from jsonwebdb.formatters.base import Formatter, FormatterRegistry, registry
from jsonwebdb.formatters.csv import CSVFormatter
from jsonwebdb.formatters.json import JSONFormatter
from jsonwebdb.formatters.table import TableFormatter

__all__ = [
    "CSVFormatter",
    "Formatter",
    "FormatterRegistry",
    "JSONFormatter",
    "TableFormatter",
    "registry",
]
