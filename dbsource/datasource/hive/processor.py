from typing import Any, Dict, Optional, Tuple

from dbsource.datasource.base.connection_param import ConnectionParam, HiveConnectionParam
from dbsource.datasource.base.params import DatasourceParams, HiveDatasourceParams
from dbsource.datasource.base.processor import DatasourceProcessor
from dbsource.datasource.engine_kind import EngineKind

KERBEROS_FIELDS = (
    "principal",
    "java_security_krb5_conf",
    "login_user_keytab_username",
    "login_user_keytab_path",
)


class HiveDatasourceProcessor(DatasourceProcessor):
    """HiveServer2 over PyHive.

    Accepts a comma-separated host list and renders properties thrift-style:
    ``hive://h1:10000,h2:10000/db;k=v;k2=v2``.
    """

    engine = EngineKind.HIVE
    driver = "hive"
    default_port = 10000
    params_class = HiveDatasourceParams
    connection_param_class = HiveConnectionParam
    identifier_case = "lower"
    multi_host = True
    query_separator = ";"
    pair_separator = ";"

    def check_engine_params(self, params: DatasourceParams, errors: Dict[str, str]) -> None:
        if not getattr(params, "principal", None):
            return
        for name in ("login_user_keytab_username", "login_user_keytab_path"):
            if not getattr(params, name, None):
                errors[name] = f"{name} is required when a principal is set"

    def extra_descriptor_fields(self, params: DatasourceParams) -> Dict[str, Any]:
        return {name: getattr(params, name, None) for name in KERBEROS_FIELDS}

    def extra_raw_fields(self, descriptor: ConnectionParam) -> Dict[str, Any]:
        return {name: getattr(descriptor, name, None) for name in KERBEROS_FIELDS}

    def engine_url_query(self, descriptor: ConnectionParam) -> Dict[str, str]:
        query = dict(descriptor.other)
        principal: Optional[str] = getattr(descriptor, "principal", None)
        if principal:
            query.setdefault("auth", "KERBEROS")
            # hive/_HOST@REALM -> hive
            query.setdefault("kerberos_service_name", principal.split("/", 1)[0].split("@", 1)[0])
        elif descriptor.password:
            # PyHive only sends a password in LDAP or CUSTOM mode
            query.setdefault("auth", "LDAP")
        return query

    def table_listing_query(self, database: str, owner: str) -> Tuple[str, Dict[str, Any]]:
        # HiveQL cannot bind identifiers; the name is checked against
        # DATABASE_PATTERN before it gets here
        return f"SHOW TABLES IN {database}", {}
