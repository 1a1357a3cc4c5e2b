from typing import Any, Dict, Tuple

from dbsource.datasource.base.processor import DatasourceProcessor
from dbsource.datasource.engine_kind import EngineKind


class SqlServerDatasourceProcessor(DatasourceProcessor):
    """Microsoft SQL Server over pymssql."""

    engine = EngineKind.SQLSERVER
    driver = "mssql+pymssql"
    default_port = 1433

    def table_listing_query(self, database: str, owner: str) -> Tuple[str, Dict[str, Any]]:
        # Tables belong to schemas, not logins; the catalog restricts the scan
        return (
            "SELECT TABLE_NAME FROM INFORMATION_SCHEMA.TABLES "
            "WHERE TABLE_CATALOG = :database AND TABLE_TYPE = 'BASE TABLE' "
            "ORDER BY TABLE_NAME",
            {"database": database},
        )
