from typing import Any, Dict, Tuple

from dbsource.datasource.base.processor import DatasourceProcessor
from dbsource.datasource.engine_kind import EngineKind


class Db2DatasourceProcessor(DatasourceProcessor):
    """IBM DB2 over ibm_db_sa."""

    engine = EngineKind.DB2
    driver = "db2+ibm_db"
    default_port = 50000
    validation_query = "SELECT 1 FROM SYSIBM.SYSDUMMY1"
    identifier_case = "upper"

    def table_listing_query(self, database: str, owner: str) -> Tuple[str, Dict[str, Any]]:
        return (
            "SELECT TABNAME FROM SYSCAT.TABLES WHERE OWNER = :owner AND TYPE = 'T' "
            "ORDER BY TABNAME",
            {"owner": owner},
        )
