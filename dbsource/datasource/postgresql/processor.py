from typing import Any, Dict, Tuple

from dbsource.datasource.base.processor import DatasourceProcessor
from dbsource.datasource.engine_kind import EngineKind


class PostgreSqlDatasourceProcessor(DatasourceProcessor):
    """PostgreSQL over psycopg2."""

    engine = EngineKind.POSTGRESQL
    driver = "postgresql+psycopg2"
    default_port = 5432
    identifier_case = "lower"

    def table_listing_query(self, database: str, owner: str) -> Tuple[str, Dict[str, Any]]:
        # The database is fixed by the connection itself
        return (
            "SELECT tablename FROM pg_catalog.pg_tables "
            "WHERE tableowner = :owner "
            "AND schemaname NOT IN ('pg_catalog', 'information_schema') "
            "ORDER BY schemaname, tablename",
            {"owner": owner},
        )
