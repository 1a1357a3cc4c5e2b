from typing import Any, Dict, Tuple

from dbsource.datasource.base.processor import DatasourceProcessor
from dbsource.datasource.engine_kind import EngineKind


class ClickHouseDatasourceProcessor(DatasourceProcessor):
    """ClickHouse over its HTTP interface."""

    engine = EngineKind.CLICKHOUSE
    driver = "clickhouse+http"
    default_port = 8123

    def table_listing_query(self, database: str, owner: str) -> Tuple[str, Dict[str, Any]]:
        return (
            "SELECT name FROM system.tables "
            "WHERE database = :database AND is_temporary = 0 "
            "AND engine NOT IN ('View', 'MaterializedView', 'LiveView') "
            "ORDER BY name",
            {"database": database},
        )
