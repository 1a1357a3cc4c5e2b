from typing import Any, Dict, Tuple

from dbsource.datasource.base.processor import DatasourceProcessor
from dbsource.datasource.engine_kind import EngineKind


class PrestoDatasourceProcessor(DatasourceProcessor):
    """Presto over PyHive; ``database`` names the catalog."""

    engine = EngineKind.PRESTO
    driver = "presto"
    default_port = 8080
    identifier_case = "lower"

    def table_listing_query(self, database: str, owner: str) -> Tuple[str, Dict[str, Any]]:
        return (
            "SELECT table_name FROM information_schema.tables "
            "WHERE table_catalog = :database AND table_type = 'BASE TABLE' "
            "AND table_schema <> 'information_schema' "
            "ORDER BY table_schema, table_name",
            {"database": database},
        )
