"""Raw, user-supplied datasource parameters.

These are what a configuration form or file hands to the dispatcher before
anything has been validated. Engines that need more than the common
host/port/database/user/password/other set subclass ``DatasourceParams``.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional

from dbsource.datasource.engine_kind import EngineKind

ORACLE_SID = "SID"
ORACLE_SERVICE_NAME = "SERVICE_NAME"


@dataclass
class DatasourceParams:
    """Common parameters accepted by every engine."""

    type: EngineKind
    host: str = ""
    port: Optional[int] = None
    database: str = ""
    user: str = ""
    password: str = ""
    other: Dict[str, str] = field(default_factory=dict)
    name: Optional[str] = None
    note: Optional[str] = None

    def __post_init__(self):
        self.type = EngineKind.parse(self.type)
        if self.other is None:
            self.other = {}

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(type={self.type.descp}, host={self.host!r}, "
            f"port={self.port!r}, database={self.database!r}, user={self.user!r}, "
            f"password='***', other={self.other!r})"
        )


@dataclass(repr=False)
class OracleDatasourceParams(DatasourceParams):
    """Oracle parameters; ``database`` is a SID or a service name."""

    connect_type: str = ORACLE_SERVICE_NAME


@dataclass(repr=False)
class HiveDatasourceParams(DatasourceParams):
    """HiveServer2 parameters with optional Kerberos settings."""

    principal: Optional[str] = None
    java_security_krb5_conf: Optional[str] = None
    login_user_keytab_username: Optional[str] = None
    login_user_keytab_path: Optional[str] = None


@dataclass(repr=False)
class SparkDatasourceParams(HiveDatasourceParams):
    """Spark Thrift Server parameters, which speak the HiveServer2 protocol."""
