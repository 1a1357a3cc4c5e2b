from dbsource.datasource.base import (
    ConfigurationError,
    ConnectionParam,
    ConnectivityError,
    DatasourceError,
    DatasourceParams,
    DatasourceProcessor,
    HiveConnectionParam,
    HiveDatasourceParams,
    OracleConnectionParam,
    OracleDatasourceParams,
    QueryError,
    ResourceReleaseError,
    SparkDatasourceParams,
    UnsupportedEngine,
    ValidationError,
)
from dbsource.datasource.dispatcher import (
    build_descriptor,
    build_raw_params,
    build_unique_id,
    build_url,
    get_processor,
    raw_params_from_dict,
    supported_engines,
    validate,
)
from dbsource.datasource.engine_kind import EngineKind
from dbsource.datasource.introspection import SchemaIntrospector, list_tables
from dbsource.datasource.provider import ConnectionProvider, SqlAlchemyConnectionProvider

__all__ = [
    "EngineKind",
    "DatasourceParams",
    "HiveDatasourceParams",
    "OracleDatasourceParams",
    "SparkDatasourceParams",
    "ConnectionParam",
    "HiveConnectionParam",
    "OracleConnectionParam",
    "DatasourceProcessor",
    "get_processor",
    "supported_engines",
    "validate",
    "build_descriptor",
    "build_url",
    "build_raw_params",
    "build_unique_id",
    "raw_params_from_dict",
    "SchemaIntrospector",
    "list_tables",
    "ConnectionProvider",
    "SqlAlchemyConnectionProvider",
    "DatasourceError",
    "ValidationError",
    "UnsupportedEngine",
    "ConfigurationError",
    "ConnectivityError",
    "QueryError",
    "ResourceReleaseError",
]
