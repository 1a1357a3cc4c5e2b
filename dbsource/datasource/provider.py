"""Connection providers used by the schema introspector.

A provider opens one physical connection for a descriptor. The objects it
hands back follow a small prepare/execute contract so the introspector can
release the cursor, the statement and the connection separately:

- connection: ``prepare(sql) -> statement`` and ``close()``
- statement: ``execute(params) -> cursor`` and ``close()``
- cursor: iterable over result rows, ``close()``
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, Optional, Sequence

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.exc import NoSuchModuleError, SQLAlchemyError
from sqlalchemy.pool import NullPool

from dbsource.datasource.base.connection_param import ConnectionParam
from dbsource.datasource.base.exceptions import ConfigurationError, ConnectivityError
from dbsource.datasource.engine_kind import EngineKind
from dbsource.logging import get_logger

logger = get_logger(__name__)


class ConnectionProvider(ABC):
    """Opens physical connections for connection descriptors."""

    @abstractmethod
    def get_connection(self, engine: EngineKind, descriptor: ConnectionParam) -> Any:
        """Open a connection for the descriptor.

        Args:
            engine: Engine kind that produced the descriptor
            descriptor: Normalized connection information

        Returns:
            Connection exposing ``prepare`` and ``close``

        Raises:
            ConnectivityError: If the connection cannot be established
        """


class SqlAlchemyStatement:
    """A SQL text bound to one open connection."""

    def __init__(self, connection: Connection, sql: str):
        self._connection = connection
        self._clause = text(sql)
        self._closed = False

    def execute(self, params: Optional[Dict[str, Any]] = None) -> CursorResult:
        if self._closed:
            raise RuntimeError("statement is closed")
        return self._connection.execute(self._clause, params or {})

    def close(self) -> None:
        self._closed = True


class SqlAlchemyConnection:
    """Wraps a SQLAlchemy connection and the throwaway engine that made it."""

    def __init__(self, engine: Engine, connection: Connection):
        self._engine = engine
        self._connection = connection

    def prepare(self, sql: str) -> SqlAlchemyStatement:
        return SqlAlchemyStatement(self._connection, sql)

    def close(self) -> None:
        try:
            self._connection.close()
        finally:
            self._engine.dispose()


class SqlAlchemyConnectionProvider(ConnectionProvider):
    """Opens a fresh, unpooled SQLAlchemy connection per call."""

    def __init__(self, connect_args: Optional[Dict[str, Any]] = None):
        self.connect_args = dict(connect_args or {})

    def get_connection(self, engine: EngineKind, descriptor: ConnectionParam) -> SqlAlchemyConnection:
        # Import here to avoid circular dependencies
        from dbsource.datasource.dispatcher import get_processor

        processor = get_processor(engine)
        url = processor.build_engine_url(descriptor)
        logger.debug(f"Opening {engine.descp} connection to {processor.build_url(descriptor)}")

        try:
            sa_engine = create_engine(url, poolclass=NullPool, connect_args=self.connect_args)
        except (NoSuchModuleError, ImportError) as e:
            raise ConfigurationError(
                f"driver {processor.driver} is not installed: {e}", engine=engine.descp
            ) from e

        try:
            connection = sa_engine.connect()
        except SQLAlchemyError as e:
            sa_engine.dispose()
            raise ConnectivityError(
                f"cannot connect to {processor.build_url(descriptor)}: {e}",
                engine=engine.descp,
            ) from e
        return SqlAlchemyConnection(sa_engine, connection)


def iter_rows(cursor: Any) -> Iterator[Sequence[Any]]:
    """Yield rows from a cursor that is iterable or only supports ``fetchone``."""
    if hasattr(cursor, "__iter__"):
        yield from cursor
        return
    while True:
        row = cursor.fetchone()
        if row is None:
            break
        yield row
