"""Table discovery against a live database.

Each scan owns exactly one connection, statement and cursor. They are released
in reverse order of acquisition (cursor, statement, connection) whatever
happens during the scan; a failing release is logged and never changes what
the caller sees.
"""

import re
from contextlib import ExitStack
from typing import Any, List, Optional, Pattern, Union

from dbsource.datasource.base.connection_param import ConnectionParam
from dbsource.datasource.base.exceptions import (
    ConfigurationError,
    ConnectivityError,
    DatasourceError,
    QueryError,
    ResourceReleaseError,
)
from dbsource.datasource.base.processor import DATABASE_PATTERN
from dbsource.datasource.dispatcher import get_processor
from dbsource.datasource.engine_kind import EngineKind
from dbsource.datasource.provider import (
    ConnectionProvider,
    SqlAlchemyConnectionProvider,
    iter_rows,
)
from dbsource.logging import get_logger

logger = get_logger(__name__)


def _release(resource: str, handle: Any, engine: EngineKind) -> None:
    try:
        handle.close()
    except Exception as e:
        error = ResourceReleaseError(resource, str(e), engine=engine.descp, cause=e)
        logger.warning(str(error))


class SchemaIntrospector:
    """Lists tables whose names fully match a regular expression."""

    def __init__(self, provider: Optional[ConnectionProvider] = None):
        self.provider = provider or SqlAlchemyConnectionProvider()

    def list_tables(
        self,
        address: str,
        database: str,
        pattern: Union[str, Pattern[str]],
        user: str,
        password: str,
        engine: Union[EngineKind, str] = EngineKind.MYSQL,
    ) -> List[str]:
        """Scan the database metadata for matching table names.

        Args:
            address: ``host:port`` or ``driver://host:port``
            database: Database to scan
            pattern: Regular expression every returned name fully matches
            user: Login user; also the table owner on engines that track one
            password: Login password
            engine: Engine kind, MySQL when omitted

        Returns:
            Matching names in the order the metadata query returned them

        Raises:
            ConfigurationError: If the address, database or pattern is malformed
            ConnectivityError: If no connection could be opened
            QueryError: If the metadata query failed
        """
        processor = get_processor(engine)
        matcher = self._compile(pattern, processor.engine)
        descriptor = processor.descriptor_for_address(address, database, user, password)
        return self.scan(processor.engine, descriptor, matcher)

    def scan(
        self,
        engine: Union[EngineKind, str],
        descriptor: ConnectionParam,
        pattern: Union[str, Pattern[str]],
    ) -> List[str]:
        """Like ``list_tables``, for a descriptor that is already built."""
        processor = get_processor(engine)
        kind = processor.engine
        matcher = self._compile(pattern, kind)
        processor.check_descriptor(descriptor)
        database = descriptor.database
        if not database or not DATABASE_PATTERN.match(database):
            raise ConfigurationError(f"illegal database name: {database!r}", engine=kind.descp)
        sql, params = processor.table_listing_query(
            database, processor.normalize_identifier(descriptor.user or "")
        )

        tables: List[str] = []
        with ExitStack() as stack:
            connection = self._connect(kind, descriptor)
            stack.callback(_release, "connection", connection, kind)
            try:
                statement = connection.prepare(sql)
                stack.callback(_release, "statement", statement, kind)
                cursor = statement.execute(params)
                stack.callback(_release, "cursor", cursor, kind)
                for row in iter_rows(cursor):
                    name = processor.table_name_from_row(row)
                    if matcher.fullmatch(name):
                        tables.append(name)
            except DatasourceError:
                raise
            except Exception as e:
                logger.error(f"Metadata scan failed on {descriptor.url}: {e}")
                raise QueryError(f"failed to list tables in '{database}': {e}", engine=kind.descp) from e

        logger.debug(f"Found {len(tables)} table(s) in '{database}' matching {matcher.pattern!r}")
        return tables

    def _connect(self, engine: EngineKind, descriptor: ConnectionParam) -> Any:
        try:
            return self.provider.get_connection(engine, descriptor)
        except DatasourceError:
            raise
        except Exception as e:
            raise ConnectivityError(str(e), engine=engine.descp) from e

    @staticmethod
    def _compile(pattern: Union[str, Pattern[str]], engine: EngineKind) -> Pattern[str]:
        if isinstance(pattern, re.Pattern):
            return pattern
        try:
            return re.compile(pattern)
        except (re.error, TypeError) as e:
            raise ConfigurationError(
                f"invalid table pattern {pattern!r}: {e}", engine=engine.descp
            ) from e


def list_tables(
    address: str,
    database: str,
    pattern: Union[str, Pattern[str]],
    user: str,
    password: str,
    engine: Union[EngineKind, str] = EngineKind.MYSQL,
    provider: Optional[ConnectionProvider] = None,
) -> List[str]:
    """Module-level shortcut for ``SchemaIntrospector(provider).list_tables``."""
    return SchemaIntrospector(provider).list_tables(
        address, database, pattern, user, password, engine=engine
    )


__all__ = ["SchemaIntrospector", "list_tables"]
