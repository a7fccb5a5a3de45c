"""Client binding for the JsonWebDB database-over-HTTP service."""

from jsonwebdb.__about__ import __version__
from jsonwebdb.core.anysql import AnySQL
from jsonwebdb.core.cursor import Cursor
from jsonwebdb.core.insert import Insert
from jsonwebdb.core.models import ColumnDefinition, NameValuePair
from jsonwebdb.core.record import Record
from jsonwebdb.core.session import Session
from jsonwebdb.core.table import Table

__all__ = [
    "AnySQL",
    "ColumnDefinition",
    "Cursor",
    "Insert",
    "NameValuePair",
    "Record",
    "Session",
    "Table",
    "__version__",
]
