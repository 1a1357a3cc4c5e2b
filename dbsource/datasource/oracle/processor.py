from typing import Any, Dict, Optional, Tuple

from dbsource.datasource.base.connection_param import ConnectionParam, OracleConnectionParam
from dbsource.datasource.base.params import (
    ORACLE_SERVICE_NAME,
    ORACLE_SID,
    DatasourceParams,
    OracleDatasourceParams,
)
from dbsource.datasource.base.processor import DatasourceProcessor
from dbsource.datasource.engine_kind import EngineKind


class OracleDatasourceProcessor(DatasourceProcessor):
    """Oracle over python-oracledb, addressed by SID or by service name."""

    engine = EngineKind.ORACLE
    driver = "oracle+oracledb"
    default_port = 1521
    params_class = OracleDatasourceParams
    connection_param_class = OracleConnectionParam
    validation_query = "SELECT 1 FROM DUAL"
    identifier_case = "upper"

    def check_engine_params(self, params: DatasourceParams, errors: Dict[str, str]) -> None:
        connect_type = getattr(params, "connect_type", ORACLE_SERVICE_NAME)
        if connect_type not in (ORACLE_SID, ORACLE_SERVICE_NAME):
            errors["connect_type"] = (
                f"connect_type must be {ORACLE_SID} or {ORACLE_SERVICE_NAME}, got {connect_type!r}"
            )

    def extra_descriptor_fields(self, params: DatasourceParams) -> Dict[str, Any]:
        return {"connect_type": getattr(params, "connect_type", ORACLE_SERVICE_NAME)}

    def extra_raw_fields(self, descriptor: ConnectionParam) -> Dict[str, Any]:
        return {"connect_type": getattr(descriptor, "connect_type", ORACLE_SERVICE_NAME)}

    def _render_url(self, address: str, database: str, params: DatasourceParams) -> str:
        if getattr(params, "connect_type", ORACLE_SERVICE_NAME) == ORACLE_SID:
            return f"{address}/{database}"
        return f"{address}/?service_name={database}"

    def engine_url_database(self, descriptor: ConnectionParam) -> Optional[str]:
        if getattr(descriptor, "connect_type", ORACLE_SERVICE_NAME) == ORACLE_SID:
            return descriptor.database or None
        return None

    def engine_url_query(self, descriptor: ConnectionParam) -> Dict[str, str]:
        query = dict(descriptor.other)
        if getattr(descriptor, "connect_type", ORACLE_SERVICE_NAME) != ORACLE_SID:
            query["service_name"] = descriptor.database
        return query

    def table_listing_query(self, database: str, owner: str) -> Tuple[str, Dict[str, Any]]:
        return (
            "SELECT table_name FROM all_tables WHERE owner = :owner ORDER BY table_name",
            {"owner": owner},
        )
