"""Per-engine datasource processor contract.

A processor turns raw parameters into a ``ConnectionParam`` descriptor, renders
the descriptor as a connection string and a unique id, and knows how to list
tables for its engine. Processors keep no per-call state; one instance per
engine is shared process-wide.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from sqlalchemy.engine import URL

from dbsource.config import Settings
from dbsource.datasource.base.connection_param import ConnectionParam
from dbsource.datasource.base.exceptions import ConfigurationError, ValidationError
from dbsource.datasource.base.params import DatasourceParams
from dbsource.datasource.engine_kind import EngineKind

HOST_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+$")
DATABASE_PATTERN = re.compile(r"^[a-zA-Z0-9_\-.]+$")
OTHER_KEY_PATTERN = re.compile(r"^[a-zA-Z0-9_\-.]+$")
OTHER_VALUE_PATTERN = re.compile(r"^[a-zA-Z0-9_\-.:@,/]*$")

MIN_PORT = 1
MAX_PORT = 65535


class DatasourceProcessor(ABC):
    """Base class for all engine processors."""

    engine: EngineKind
    driver: str
    default_port: int
    params_class: Type[DatasourceParams] = DatasourceParams
    connection_param_class: Type[ConnectionParam] = ConnectionParam
    validation_query: str = "SELECT 1"
    # "upper", "lower" or "preserve": how unquoted identifiers are stored
    identifier_case: str = "preserve"
    multi_host: bool = False
    # Separators between the url and its properties, and between properties
    query_separator: str = "?"
    pair_separator: str = "&"

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, params: DatasourceParams) -> None:
        """Check raw parameters without touching the network.

        Raises:
            ValidationError: Naming every offending field
        """
        errors: Dict[str, str] = {}
        if params.type is not self.engine:
            errors["type"] = f"expected {self.engine.descp}, got {params.type.descp}"
        self._check_host(params.host, errors)
        self._check_port(params.port, errors)
        self._check_database(params.database, errors)
        if not params.user or not str(params.user).strip():
            errors["user"] = "user is required"
        self._check_other(params.other, errors)
        self.check_engine_params(params, errors)
        if errors:
            raise ValidationError(errors, engine=self.engine.descp)

    def check_engine_params(self, params: DatasourceParams, errors: Dict[str, str]) -> None:
        """Hook for engine-specific checks; add offending fields to ``errors``."""

    def _check_host(self, host: Optional[str], errors: Dict[str, str]) -> None:
        if not host or not str(host).strip():
            errors["host"] = "host is required"
            return
        hosts = [item.strip() for item in str(host).split(",")]
        if len(hosts) > 1 and not self.multi_host:
            errors["host"] = f"{self.engine.descp} accepts a single host"
            return
        invalid = [item for item in hosts if not HOST_PATTERN.match(item)]
        if invalid:
            errors["host"] = f"invalid host: {', '.join(repr(item) for item in invalid)}"

    def _check_port(self, port: Any, errors: Dict[str, str]) -> None:
        if port is None or port == "":
            errors["port"] = "port is required"
        elif isinstance(port, bool) or not isinstance(port, int):
            errors["port"] = f"port must be an integer, got {port!r}"
        elif not MIN_PORT <= port <= MAX_PORT:
            errors["port"] = f"port must be between {MIN_PORT} and {MAX_PORT}, got {port}"

    def _check_database(self, database: Optional[str], errors: Dict[str, str]) -> None:
        if not database or not str(database).strip():
            errors["database"] = "database is required"
        elif not DATABASE_PATTERN.match(str(database)):
            errors["database"] = f"database name contains illegal characters: {database!r}"

    def _check_other(self, other: Optional[Dict[str, Any]], errors: Dict[str, str]) -> None:
        if not other:
            return
        if not isinstance(other, dict):
            errors["other"] = "other must be a mapping of property name to value"
            return
        for key, value in other.items():
            if not OTHER_KEY_PATTERN.match(str(key)):
                errors[f"other.{key}"] = "illegal property name"
            elif not OTHER_VALUE_PATTERN.match(str(value)):
                errors[f"other.{key}"] = f"illegal property value: {value!r}"

    # ------------------------------------------------------------------
    # Descriptor construction
    # ------------------------------------------------------------------

    def build_descriptor(self, params: DatasourceParams) -> ConnectionParam:
        """Validate raw parameters and normalize them into a descriptor."""
        self.validate(params)
        hosts = [item.strip() for item in str(params.host).split(",")]
        address = self._render_address(hosts, params.port)
        database = str(params.database).strip()
        return self.connection_param_class(
            user=str(params.user).strip(),
            password=params.password or "",
            address=address,
            database=database,
            url=self._render_url(address, database, params),
            driver=self.driver,
            validation_query=self.validation_query,
            other={str(key): str(value) for key, value in (params.other or {}).items()},
            **self.extra_descriptor_fields(params),
        )

    def extra_descriptor_fields(self, params: DatasourceParams) -> Dict[str, Any]:
        """Engine-specific descriptor fields taken from the raw parameters."""
        return {}

    def load_descriptor(
        self, connection_json: str, settings: Optional[Settings] = None
    ) -> ConnectionParam:
        """Rebuild a descriptor from the JSON this processor produced.

        Raises:
            ConfigurationError: If the JSON is malformed or lacks an address
        """
        try:
            descriptor = self.connection_param_class.from_json(connection_json, settings)
        except (ValueError, TypeError) as e:
            raise ConfigurationError(str(e), engine=self.engine.descp) from e
        if not descriptor.address:
            raise ConfigurationError(
                "persisted connection has no address", engine=self.engine.descp
            )
        return descriptor

    def build_raw_params(
        self, connection_json: str, settings: Optional[Settings] = None
    ) -> DatasourceParams:
        """Turn a persisted descriptor back into editable raw parameters."""
        descriptor = self.load_descriptor(connection_json, settings)
        hosts, port = self.split_address(descriptor.address)
        return self.params_class(
            type=self.engine,
            host=",".join(hosts),
            port=port,
            database=descriptor.database,
            user=descriptor.user,
            password=descriptor.password,
            other=dict(descriptor.other),
            **self.extra_raw_fields(descriptor),
        )

    def extra_raw_fields(self, descriptor: ConnectionParam) -> Dict[str, Any]:
        """Engine-specific raw parameter fields taken back from a descriptor."""
        return {}

    def descriptor_for_address(
        self, address: str, database: str, user: str, password: str
    ) -> ConnectionParam:
        """Build a descriptor from an ``host:port`` (or ``driver://host:port``)
        address, as used for ad-hoc metadata scans.

        Raises:
            ConfigurationError: If the address or database name is malformed
        """
        hosts, port = self.split_address(address)
        if not database or not DATABASE_PATTERN.match(database):
            raise ConfigurationError(
                f"illegal database name: {database!r}", engine=self.engine.descp
            )
        normalized = self._render_address(hosts, port)
        return self.connection_param_class(
            user=user or "",
            password=password or "",
            address=normalized,
            database=database,
            url=self._render_url(normalized, database, self.params_class(type=self.engine)),
            driver=self.driver,
            validation_query=self.validation_query,
        )

    def split_address(self, address: str) -> Tuple[List[str], int]:
        """Parse ``[driver://]host:port[,host:port...]`` into hosts and port.

        Raises:
            ConfigurationError: If the address cannot be parsed or belongs to
                another driver
        """
        if not address:
            raise ConfigurationError("address is empty", engine=self.engine.descp)
        body = address
        if "://" in address:
            scheme, body = address.split("://", 1)
            if scheme != self.driver:
                raise ConfigurationError(
                    f"address {address!r} does not use the {self.driver} driver",
                    engine=self.engine.descp,
                )
        body = body.rstrip("/")

        hosts: List[str] = []
        ports = set()
        for item in body.split(","):
            host, sep, port_text = item.strip().rpartition(":")
            if not sep or not host or not HOST_PATTERN.match(host) or not port_text.isdigit():
                raise ConfigurationError(
                    f"malformed address {address!r}, expected host:port",
                    engine=self.engine.descp,
                )
            port = int(port_text)
            if not MIN_PORT <= port <= MAX_PORT:
                raise ConfigurationError(
                    f"port out of range in address {address!r}", engine=self.engine.descp
                )
            hosts.append(host)
            ports.add(port)

        if len(hosts) > 1 and not self.multi_host:
            raise ConfigurationError(
                f"{self.engine.descp} accepts a single host, got {address!r}",
                engine=self.engine.descp,
            )
        if len(ports) > 1:
            raise ConfigurationError(
                f"all hosts must share one port, got {address!r}", engine=self.engine.descp
            )
        return hosts, ports.pop()

    def _render_address(self, hosts: Sequence[str], port: int) -> str:
        return f"{self.driver}://" + ",".join(f"{host}:{port}" for host in hosts)

    def _render_url(self, address: str, database: str, params: DatasourceParams) -> str:
        return f"{address}/{database}"

    # ------------------------------------------------------------------
    # URL and unique id
    # ------------------------------------------------------------------

    def build_url(self, descriptor: ConnectionParam) -> str:
        """Render the connection string: ``url`` plus the extra properties.

        The result holds neither the user nor the password.
        """
        self.check_descriptor(descriptor)
        if not descriptor.other:
            return descriptor.url
        pairs = self.pair_separator.join(
            f"{key}={value}" for key, value in descriptor.other.items()
        )
        separator = self.query_separator
        if separator == "?" and "?" in descriptor.url:
            separator = "&"
        return f"{descriptor.url}{separator}{pairs}"

    def build_unique_id(self, descriptor: ConnectionParam, engine: EngineKind) -> str:
        """``descp@user@url``; the password is deliberately left out."""
        return f"{engine.descp}@{descriptor.user}@{self.build_url(descriptor)}"

    def build_engine_url(self, descriptor: ConnectionParam) -> URL:
        """SQLAlchemy URL (credentials included) used to open a connection."""
        self.check_descriptor(descriptor)
        hosts, port = self.split_address(descriptor.address)
        return URL.create(
            self.driver,
            username=descriptor.user or None,
            password=descriptor.password or None,
            host=hosts[0],
            port=port,
            database=self.engine_url_database(descriptor),
            query=self.engine_url_query(descriptor),
        )

    def engine_url_database(self, descriptor: ConnectionParam) -> Optional[str]:
        return descriptor.database or None

    def engine_url_query(self, descriptor: ConnectionParam) -> Dict[str, str]:
        return dict(descriptor.other)

    def check_descriptor(self, descriptor: ConnectionParam) -> None:
        """Reject descriptors this processor did not produce.

        Raises:
            ConfigurationError: On a foreign descriptor class or driver, or a missing url
        """
        if not isinstance(descriptor, self.connection_param_class):
            raise ConfigurationError(
                f"{type(descriptor).__name__} was not produced by the "
                f"{self.engine.descp} processor",
                engine=self.engine.descp,
            )
        if descriptor.driver and descriptor.driver != self.driver:
            raise ConfigurationError(
                f"descriptor uses the {descriptor.driver} driver, expected {self.driver}",
                engine=self.engine.descp,
            )
        if not descriptor.url:
            raise ConfigurationError("descriptor has no url", engine=self.engine.descp)

    # ------------------------------------------------------------------
    # Metadata
    # ------------------------------------------------------------------

    def normalize_identifier(self, value: str) -> str:
        if self.identifier_case == "upper":
            return value.upper()
        if self.identifier_case == "lower":
            return value.lower()
        return value

    @abstractmethod
    def table_listing_query(self, database: str, owner: str) -> Tuple[str, Dict[str, Any]]:
        """Return the SQL and bind parameters listing plain tables.

        Args:
            database: Database (or schema/catalog) to scan
            owner: Owning user, already normalized with ``normalize_identifier``

        Returns:
            Tuple of SQL text using ``:name`` binds and the bind values
        """

    def table_name_from_row(self, row: Sequence[Any]) -> str:
        return str(row[0])
