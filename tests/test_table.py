"""Tests for Table describe and the insert factory."""

import pytest

from jsonwebdb.core.exceptions import BackendError, ConfigError
from jsonwebdb.core.insert import Insert
from jsonwebdb.core.models import NameValuePair
from jsonwebdb.core.table import Table


@pytest.mark.unit
class TestConstruction:
    def test_missing_source(self, fake_session):
        with pytest.raises(ConfigError, match="Table: source cannot be null"):
            Table(fake_session(), "")

    def test_missing_session(self):
        with pytest.raises(ConfigError, match="Table: session cannot be null"):
            Table(None, "emp")

    def test_properties(self, fake_session):
        session = fake_session()
        bind = NameValuePair(name="d", value=1)
        table = Table(session, "emp", bind)
        assert table.source == "emp"
        assert table.session is session
        assert table.bindvalues == [bind]

    def test_no_bindvalues(self, fake_session):
        assert Table(fake_session(), "emp").bindvalues is None

    def test_insert_factory(self, fake_session):
        assert isinstance(Table(fake_session(), "emp").insert(), Insert)


@pytest.mark.unit
class TestDescribe:
    async def test_request(self, fake_session):
        session = fake_session({"success": True, "columns": []})
        await Table(session, "emp").describe()
        assert session.requests[0] == {
            "Table": {"invoke": "describe", "source": "emp", "session": "s-1"}
        }

    async def test_definitions_keyed_lowercase(self, fake_session):
        session = fake_session(
            {"success": True, "columns": [{"name": "EMPNO", "type": "INTEGER"}]}
        )
        table = Table(session, "emp")
        assert table.get_column_definitions() == {}

        definitions = await table.describe()
        assert list(definitions) == ["empno"]
        assert table.get_column_definitions()["empno"].name == "EMPNO"

    async def test_cached(self, fake_session):
        session = fake_session({"success": True, "columns": []})
        table = Table(session, "emp")
        await table.describe()
        await table.describe()
        assert len(session.requests) == 1

    async def test_failure_raises(self, fake_session):
        session = fake_session({"success": False, "message": "ORA-00942"})
        with pytest.raises(BackendError, match="unable to describe 'emp': ORA-00942"):
            await Table(session, "emp").describe()

    async def test_try_describe_declined(self, fake_session):
        session = fake_session(
            {"success": False, "message": "ORA-00942"},
            {"success": True, "columns": [{"name": "EMPNO"}]},
        )
        table = Table(session, "emp")
        assert await table.try_describe() is False
        assert table.get_error_message() == "ORA-00942"
        assert table.get_column_definitions() == {}

        assert await table.try_describe() is True
        assert list(table.get_column_definitions()) == ["empno"]
        assert len(session.requests) == 2
