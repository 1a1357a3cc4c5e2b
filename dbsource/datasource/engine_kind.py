from enum import Enum
from typing import Union

from dbsource.datasource.base.exceptions import UnsupportedEngine


class EngineKind(Enum):
    """Supported database engines.

    Each member carries its stable numeric code and the lowercase description
    used in unique ids and configuration files.
    """

    MYSQL = (0, "mysql")
    POSTGRESQL = (1, "postgresql")
    HIVE = (2, "hive")
    SPARK = (3, "spark")
    CLICKHOUSE = (4, "clickhouse")
    ORACLE = (5, "oracle")
    SQLSERVER = (6, "sqlserver")
    DB2 = (7, "db2")
    PRESTO = (8, "presto")

    def __init__(self, code: int, descp: str):
        self.code = code
        self.descp = descp

    @classmethod
    def parse(cls, value: Union["EngineKind", str, int]) -> "EngineKind":
        """Resolve an engine kind from a member, name, description or code.

        Raises:
            UnsupportedEngine: If the value names no supported engine
        """
        if isinstance(value, cls):
            return value
        # bool is an int subclass; True must not resolve to POSTGRESQL
        if isinstance(value, int) and not isinstance(value, bool):
            for kind in cls:
                if kind.code == value:
                    return kind
        elif isinstance(value, str):
            key = value.strip().lower()
            for kind in cls:
                if key in (kind.name.lower(), kind.descp):
                    return kind
        raise UnsupportedEngine(value)

    def __str__(self) -> str:
        return self.descp
