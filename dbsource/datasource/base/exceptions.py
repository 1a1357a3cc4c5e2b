from typing import Dict, Optional


class DatasourceError(Exception):
    """Base exception for datasource-related errors."""

    def __init__(self, engine: str, message: str):
        self.engine = engine
        self.message = message
        super().__init__(f"[{engine}] {message}")


class ValidationError(DatasourceError):
    """Raw datasource parameters failed validation.

    ``fields`` maps every offending field name to the reason it was rejected.
    """

    def __init__(self, fields: Dict[str, str], engine: str = "unknown"):
        self.fields = dict(fields)
        details = "; ".join(f"{name}: {reason}" for name, reason in self.fields.items())
        super().__init__(engine, f"Invalid datasource parameters: {details}")


class UnsupportedEngine(DatasourceError):
    """Engine kind outside the supported set."""

    def __init__(self, value: object):
        self.value = value
        super().__init__("unknown", f"datasource type illegal: {value!r}")


class ConfigurationError(DatasourceError):
    """Descriptor or URL construction failed."""

    def __init__(self, message: str, engine: str = "unknown", **kwargs):
        super().__init__(engine, f"Configuration error: {message}")


class ConnectivityError(DatasourceError):
    """A connection could not be established."""

    def __init__(self, message: str, engine: str = "unknown", **kwargs):
        super().__init__(engine, f"Connection error: {message}")


class QueryError(DatasourceError):
    """A metadata query failed after connecting."""

    def __init__(self, message: str, engine: str = "unknown", **kwargs):
        super().__init__(engine, f"Query error: {message}")


class ResourceReleaseError(DatasourceError):
    """Closing a cursor, statement or connection failed.

    Only ever logged, never raised out of this package.
    """

    def __init__(
        self,
        resource: str,
        message: str,
        engine: str = "unknown",
        cause: Optional[BaseException] = None,
    ):
        self.resource = resource
        self.cause = cause
        super().__init__(engine, f"Failed to release {resource}: {message}")
