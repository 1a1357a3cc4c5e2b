from .connection_param import ConnectionParam, HiveConnectionParam, OracleConnectionParam
from .exceptions import (
    ConfigurationError,
    ConnectivityError,
    DatasourceError,
    QueryError,
    ResourceReleaseError,
    UnsupportedEngine,
    ValidationError,
)
from .params import (
    DatasourceParams,
    HiveDatasourceParams,
    OracleDatasourceParams,
    SparkDatasourceParams,
)
from .processor import DatasourceProcessor

__all__ = [
    "ConnectionParam",
    "HiveConnectionParam",
    "OracleConnectionParam",
    "DatasourceParams",
    "HiveDatasourceParams",
    "OracleDatasourceParams",
    "SparkDatasourceParams",
    "DatasourceProcessor",
    "DatasourceError",
    "ValidationError",
    "UnsupportedEngine",
    "ConfigurationError",
    "ConnectivityError",
    "QueryError",
    "ResourceReleaseError",
]
