"""Settings for dbsource.

Settings come from an optional YAML file, with ``${VAR}`` / ``${VAR|default}``
references resolved from the environment (a ``.env`` file in the working
directory is loaded first). A handful of ``DBSOURCE_*`` environment variables
override whatever the file says.
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from dbsource.logging import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "DBSOURCE_CONFIG"
DEFAULT_CONFIG_FILE = "dbsource.yml"
DEFAULT_PASSWORD_SALT = "!@#$%^&*"

VARIABLE_PATTERN = re.compile(r"\$\{([^}|]+)(?:\|([^}]+))?\}")

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Process-wide dbsource settings."""

    password_encryption: bool = False
    password_salt: str = DEFAULT_PASSWORD_SALT
    log_level: str = "info"
    datasources: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    source_path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], source_path: Optional[str] = None) -> "Settings":
        """Build settings from a parsed configuration mapping.

        Raises:
            ValueError: If a section has the wrong shape
        """
        datasources = data.get("datasources") or {}
        if not isinstance(datasources, dict):
            raise ValueError("'datasources' must be a mapping of name to parameters")
        for name, params in datasources.items():
            if not isinstance(params, dict):
                raise ValueError(f"Datasource '{name}' configuration must be a dictionary")

        return cls(
            password_encryption=_as_bool(data.get("password_encryption", False)),
            password_salt=str(data.get("password_salt") or DEFAULT_PASSWORD_SALT),
            log_level=str(data.get("log_level") or "info"),
            datasources=datasources,
            source_path=source_path,
        )


def substitute_env_vars(value: Any) -> Any:
    """Recursively replace ``${VAR}`` and ``${VAR|default}`` references."""
    if isinstance(value, dict):
        return {key: substitute_env_vars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    if not isinstance(value, str):
        return value

    def _replace(match: "re.Match[str]") -> str:
        name = match.group(1).strip()
        default = match.group(2)
        resolved = os.environ.get(name)
        if resolved is not None:
            return resolved
        if default is not None:
            return default.strip().strip("'\"")
        logger.warning(f"Environment variable '{name}' is not set")
        return ""

    return VARIABLE_PATTERN.sub(_replace, value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _resolve_config_path(path: Optional[str]) -> Optional[Path]:
    if path:
        return Path(path)
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    default = Path.cwd() / DEFAULT_CONFIG_FILE
    return default if default.exists() else None


def _apply_env_overrides(settings: Settings) -> Settings:
    encryption = os.environ.get("DBSOURCE_PASSWORD_ENCRYPTION")
    if encryption is not None:
        settings.password_encryption = _as_bool(encryption)
    salt = os.environ.get("DBSOURCE_PASSWORD_SALT")
    if salt:
        settings.password_salt = salt
    level = os.environ.get("DBSOURCE_LOG_LEVEL")
    if level:
        settings.log_level = level
    return settings


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from YAML and the environment.

    Args:
        path: Explicit config file; falls back to ``$DBSOURCE_CONFIG`` and then
            ``./dbsource.yml``

    Returns:
        Settings instance

    Raises:
        FileNotFoundError: If an explicitly requested file does not exist
        ValueError: If the file is not valid YAML or has the wrong shape
    """
    env_file = Path.cwd() / ".env"
    if env_file.exists():
        load_dotenv(env_file, override=False)
        logger.debug(f"Loaded environment variables from: {env_file}")

    config_path = _resolve_config_path(path)
    if config_path is None:
        logger.debug("No dbsource configuration file found, using defaults")
        return _apply_env_overrides(Settings())

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping")

    settings = Settings.from_dict(substitute_env_vars(raw), source_path=str(config_path))
    logger.debug(
        f"Loaded settings from {config_path} with {len(settings.datasources)} datasource(s)"
    )
    return _apply_env_overrides(settings)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the cached process settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings(settings: Optional[Settings] = None) -> None:
    """Replace (or clear) the cached settings."""
    global _settings
    _settings = settings
