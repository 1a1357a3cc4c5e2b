"""Normalized connection descriptors and their persisted JSON form."""

import json
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional

from dbsource.config import Settings
from dbsource.passwords import decode_password, encode_password

MASK = "***"


@dataclass
class ConnectionParam:
    """Engine-normalized connection information.

    ``address`` is ``driver://host:port`` (Hive and Spark allow a
    comma-separated host list), ``url`` is ``address/database``. The user and
    password are kept out of both so neither leaks into rendered URLs.
    """

    user: str = ""
    password: str = field(default="", repr=False)
    address: str = ""
    database: str = ""
    url: str = ""
    driver: str = ""
    validation_query: str = "SELECT 1"
    other: Dict[str, str] = field(default_factory=dict)

    def to_dict(self, settings: Optional[Settings] = None) -> Dict[str, Any]:
        """Serializable form; the password goes through ``encode_password``."""
        data = asdict(self)
        data["password"] = encode_password(self.password, settings)
        return data

    def to_json(self, settings: Optional[Settings] = None) -> str:
        return json.dumps(self.to_dict(settings), ensure_ascii=False)

    def masked(self) -> Dict[str, Any]:
        """Dictionary form safe for logs and terminal output."""
        data = asdict(self)
        data["password"] = MASK if self.password else ""
        return data

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], settings: Optional[Settings] = None
    ) -> "ConnectionParam":
        """Rebuild a descriptor, ignoring keys this class does not know.

        Raises:
            ValueError: If the mapping has the wrong shape
        """
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known and value is not None}
        for key, value in values.items():
            if key != "other" and not isinstance(value, str):
                raise ValueError(f"'{key}' must be a string, got {type(value).__name__}")
        other = values.get("other", {})
        if not isinstance(other, dict):
            raise ValueError("'other' must be a JSON object")
        for key, value in other.items():
            if isinstance(value, (dict, list)) or value is None:
                raise ValueError(f"property '{key}' must be a scalar value")
        values["other"] = {key: str(value) for key, value in other.items()}
        values["password"] = decode_password(values.get("password"), settings)
        return cls(**values)

    @classmethod
    def from_json(cls, text: str, settings: Optional[Settings] = None) -> "ConnectionParam":
        try:
            data = json.loads(text)
        except (TypeError, json.JSONDecodeError) as e:
            raise ValueError(f"malformed connection JSON: {e}") from e
        return cls.from_dict(data, settings)


@dataclass
class OracleConnectionParam(ConnectionParam):
    connect_type: str = "SERVICE_NAME"


@dataclass
class HiveConnectionParam(ConnectionParam):
    principal: Optional[str] = None
    java_security_krb5_conf: Optional[str] = None
    login_user_keytab_username: Optional[str] = None
    login_user_keytab_path: Optional[str] = None
