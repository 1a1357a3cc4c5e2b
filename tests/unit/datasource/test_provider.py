"""Tests for the SQLAlchemy connection provider."""

from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import NoSuchModuleError, OperationalError
from sqlalchemy.pool import NullPool

from dbsource.datasource import dispatcher
from dbsource.datasource.base.exceptions import ConfigurationError, ConnectivityError
from dbsource.datasource.engine_kind import EngineKind
from dbsource.datasource.provider import (
    SqlAlchemyConnection,
    SqlAlchemyConnectionProvider,
    SqlAlchemyStatement,
    iter_rows,
)


@pytest.fixture
def descriptor(postgres_params):
    return dispatcher.build_descriptor(postgres_params)


@pytest.fixture
def mock_create_engine():
    with patch("dbsource.datasource.provider.create_engine") as mock_create:
        yield mock_create


class TestSqlAlchemyConnectionProvider:
    def test_opens_unpooled_connection(self, descriptor, mock_create_engine):
        provider = SqlAlchemyConnectionProvider(connect_args={"connect_timeout": 5})

        connection = provider.get_connection(EngineKind.POSTGRESQL, descriptor)

        assert isinstance(connection, SqlAlchemyConnection)
        url = mock_create_engine.call_args[0][0]
        assert url.drivername == "postgresql+psycopg2"
        assert url.host == "pg.internal"
        assert url.username == "Reporter"
        assert url.password == "s3cr3t"
        assert url.database == "analytics"
        kwargs = mock_create_engine.call_args[1]
        assert kwargs["poolclass"] is NullPool
        assert kwargs["connect_args"] == {"connect_timeout": 5}
        mock_create_engine.return_value.connect.assert_called_once_with()

    def test_connect_failure(self, descriptor, mock_create_engine):
        sa_engine = mock_create_engine.return_value
        sa_engine.connect.side_effect = OperationalError(
            "SELECT 1", {}, Exception("could not connect to server")
        )

        with pytest.raises(ConnectivityError) as exc_info:
            SqlAlchemyConnectionProvider().get_connection(EngineKind.POSTGRESQL, descriptor)

        assert exc_info.value.engine == "postgresql"
        assert "s3cr3t" not in str(exc_info.value)
        sa_engine.dispose.assert_called_once()

    def test_missing_driver(self, descriptor, mock_create_engine):
        mock_create_engine.side_effect = NoSuchModuleError(
            "Can't load plugin: sqlalchemy.dialects:postgresql.psycopg2"
        )

        with pytest.raises(ConfigurationError, match="is not installed"):
            SqlAlchemyConnectionProvider().get_connection(EngineKind.POSTGRESQL, descriptor)


class TestSqlAlchemyConnection:
    def test_prepare_and_execute(self):
        sa_connection = MagicMock()
        connection = SqlAlchemyConnection(MagicMock(), sa_connection)

        statement = connection.prepare("SELECT tablename FROM pg_tables WHERE tableowner = :owner")
        result = statement.execute({"owner": "reporter"})

        clause, params = sa_connection.execute.call_args[0]
        assert str(clause) == "SELECT tablename FROM pg_tables WHERE tableowner = :owner"
        assert params == {"owner": "reporter"}
        assert result is sa_connection.execute.return_value

    def test_closed_statement_cannot_execute(self):
        statement = SqlAlchemyStatement(MagicMock(), "SELECT 1")
        statement.close()
        with pytest.raises(RuntimeError, match="closed"):
            statement.execute()

    def test_close_disposes_engine_even_on_error(self):
        sa_engine = MagicMock()
        sa_connection = MagicMock()
        sa_connection.close.side_effect = OSError("broken pipe")

        with pytest.raises(OSError):
            SqlAlchemyConnection(sa_engine, sa_connection).close()
        sa_engine.dispose.assert_called_once()


class _FetchOnlyCursor:
    def __init__(self, rows):
        self._rows = list(rows)

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None


def test_iter_rows():
    assert list(iter_rows([("a",), ("b",)])) == [("a",), ("b",)]
    assert list(iter_rows(_FetchOnlyCursor([("a",), ("b",)]))) == [("a",), ("b",)]
