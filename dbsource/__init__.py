"""dbsource - one connection contract for many database engines."""

__version__ = "0.1.0"
__package_name__ = "dbsource"

from dbsource.datasource import (
    ConfigurationError,
    ConnectionParam,
    ConnectivityError,
    DatasourceError,
    DatasourceParams,
    EngineKind,
    QueryError,
    ResourceReleaseError,
    SchemaIntrospector,
    UnsupportedEngine,
    ValidationError,
    build_descriptor,
    build_raw_params,
    build_unique_id,
    build_url,
    get_processor,
    list_tables,
    validate,
)

__all__ = [
    "EngineKind",
    "DatasourceParams",
    "ConnectionParam",
    "SchemaIntrospector",
    "get_processor",
    "validate",
    "build_descriptor",
    "build_url",
    "build_raw_params",
    "build_unique_id",
    "list_tables",
    "DatasourceError",
    "ValidationError",
    "UnsupportedEngine",
    "ConfigurationError",
    "ConnectivityError",
    "QueryError",
    "ResourceReleaseError",
]
