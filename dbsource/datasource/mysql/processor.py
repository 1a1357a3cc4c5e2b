from typing import Any, Dict, Tuple

from dbsource.datasource.base.params import DatasourceParams
from dbsource.datasource.base.processor import DatasourceProcessor
from dbsource.datasource.engine_kind import EngineKind

# Driver switches that let a server read files from the client
SENSITIVE_PROPERTIES = {
    "allowloadlocalinfile",
    "autodeserialize",
    "allowlocalinfile",
    "allowurlinlocalinfile",
    "local_infile",
}


class MysqlDatasourceProcessor(DatasourceProcessor):
    """MySQL over PyMySQL."""

    engine = EngineKind.MYSQL
    driver = "mysql+pymysql"
    default_port = 3306

    def check_engine_params(self, params: DatasourceParams, errors: Dict[str, str]) -> None:
        for key in params.other or {}:
            if str(key).lower() in SENSITIVE_PROPERTIES:
                errors[f"other.{key}"] = "property is not allowed for security reasons"

    def table_listing_query(self, database: str, owner: str) -> Tuple[str, Dict[str, Any]]:
        # MySQL has no per-table owner; the schema restricts the scan
        return (
            "SELECT table_name FROM information_schema.tables "
            "WHERE table_schema = :database AND table_type = 'BASE TABLE' "
            "ORDER BY table_name",
            {"database": database},
        )
