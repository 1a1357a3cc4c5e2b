"""Engine dispatch.

One processor instance per engine kind, fixed at import time. Every public
function here resolves the processor for an engine and forwards to it.
"""

from dataclasses import fields
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from dbsource.config import Settings
from dbsource.datasource.base.connection_param import ConnectionParam
from dbsource.datasource.base.exceptions import UnsupportedEngine
from dbsource.datasource.base.params import DatasourceParams
from dbsource.datasource.base.processor import DatasourceProcessor
from dbsource.datasource.clickhouse import ClickHouseDatasourceProcessor
from dbsource.datasource.db2 import Db2DatasourceProcessor
from dbsource.datasource.engine_kind import EngineKind
from dbsource.datasource.hive import HiveDatasourceProcessor
from dbsource.datasource.mysql import MysqlDatasourceProcessor
from dbsource.datasource.oracle import OracleDatasourceProcessor
from dbsource.datasource.postgresql import PostgreSqlDatasourceProcessor
from dbsource.datasource.presto import PrestoDatasourceProcessor
from dbsource.datasource.spark import SparkDatasourceProcessor
from dbsource.datasource.sqlserver import SqlServerDatasourceProcessor
from dbsource.logging import get_logger

logger = get_logger(__name__)

EngineLike = Union[EngineKind, str, int]

_PROCESSORS: Mapping[EngineKind, DatasourceProcessor] = MappingProxyType(
    {
        EngineKind.MYSQL: MysqlDatasourceProcessor(),
        EngineKind.POSTGRESQL: PostgreSqlDatasourceProcessor(),
        EngineKind.HIVE: HiveDatasourceProcessor(),
        EngineKind.SPARK: SparkDatasourceProcessor(),
        EngineKind.CLICKHOUSE: ClickHouseDatasourceProcessor(),
        EngineKind.ORACLE: OracleDatasourceProcessor(),
        EngineKind.SQLSERVER: SqlServerDatasourceProcessor(),
        EngineKind.DB2: Db2DatasourceProcessor(),
        EngineKind.PRESTO: PrestoDatasourceProcessor(),
    }
)


def _check_processors() -> None:
    missing = [kind.name for kind in EngineKind if kind not in _PROCESSORS]
    if missing:
        raise RuntimeError(f"No datasource processor for: {', '.join(missing)}")
    for kind, processor in _PROCESSORS.items():
        if processor.engine is not kind:
            raise RuntimeError(
                f"{type(processor).__name__} handles {processor.engine.name}, "
                f"but is registered for {kind.name}"
            )


_check_processors()


def get_processor(engine: EngineLike) -> DatasourceProcessor:
    """Return the shared processor for an engine kind.

    Raises:
        UnsupportedEngine: If ``engine`` names no supported engine
    """
    kind = EngineKind.parse(engine)
    try:
        return _PROCESSORS[kind]
    except KeyError:
        raise UnsupportedEngine(engine)


def supported_engines() -> List[EngineKind]:
    return list(_PROCESSORS)


def validate(params: DatasourceParams) -> None:
    """Check raw parameters; raises ``ValidationError`` naming every bad field."""
    get_processor(params.type).validate(params)


def build_descriptor(
    params: Union[DatasourceParams, EngineLike],
    connection_json: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> ConnectionParam:
    """Build a connection descriptor.

    Called with raw parameters, validates and normalizes them. Called with an
    engine kind and a persisted JSON string, rebuilds the stored descriptor.
    """
    if connection_json is not None:
        return get_processor(params).load_descriptor(connection_json, settings)

    descriptor = get_processor(params.type).build_descriptor(params)
    logger.debug(f"parameters map: {descriptor.masked()}")
    return descriptor


def build_url(engine: EngineLike, descriptor: ConnectionParam) -> str:
    return get_processor(engine).build_url(descriptor)


def build_raw_params(
    engine: EngineLike, connection_json: str, settings: Optional[Settings] = None
) -> DatasourceParams:
    """Rebuild editable raw parameters from a persisted descriptor."""
    return get_processor(engine).build_raw_params(connection_json, settings)


def build_unique_id(descriptor: ConnectionParam, engine: EngineLike) -> str:
    """Password-free key identifying a connection target, for pooling layers."""
    processor = get_processor(engine)
    return processor.build_unique_id(descriptor, processor.engine)


def raw_params_from_dict(config: Dict[str, Any]) -> DatasourceParams:
    """Build raw parameters from a plain mapping, e.g. a YAML datasource entry.

    ``type`` selects the engine; ``username`` and ``properties`` are accepted
    as aliases for ``user`` and ``other``. Unknown keys are ignored.

    Raises:
        UnsupportedEngine: If ``type`` is missing or unknown
    """
    if "type" not in config:
        raise UnsupportedEngine(None)
    processor = get_processor(config["type"])

    values = dict(config)
    if "username" in values and "user" not in values:
        values["user"] = values.pop("username")
    if "properties" in values and "other" not in values:
        values["other"] = values.pop("properties")

    port = values.get("port")
    if isinstance(port, str) and port.strip().isdigit():
        values["port"] = int(port.strip())

    known = {f.name for f in fields(processor.params_class)}
    ignored = sorted(key for key in values if key not in known)
    if ignored:
        logger.debug(f"Ignoring unknown datasource keys: {', '.join(ignored)}")

    params = {key: value for key, value in values.items() if key in known}
    for key in ("host", "database", "user", "password"):
        if params.get(key) is not None:
            params[key] = str(params[key])
    params["type"] = processor.engine
    return processor.params_class(**params)
