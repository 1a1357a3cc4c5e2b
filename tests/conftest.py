"""Pytest configuration for dbsource tests."""

import logging
from typing import Generator

import pytest

from dbsource.config import Settings, reset_settings
from dbsource.datasource.base.params import DatasourceParams
from dbsource.datasource.engine_kind import EngineKind

SETTINGS_ENV_VARS = (
    "DBSOURCE_CONFIG",
    "DBSOURCE_PASSWORD_ENCRYPTION",
    "DBSOURCE_PASSWORD_SALT",
    "DBSOURCE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def default_settings(monkeypatch) -> Generator[Settings, None, None]:
    """Pin process settings to defaults so no local dbsource.yml leaks in."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    settings = Settings()
    reset_settings(settings)
    yield settings
    reset_settings()


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    """Undo root logger changes made by ``configure_logging``."""
    root = logging.getLogger()
    level, handlers = root.level, root.handlers[:]
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def encrypting_settings() -> Settings:
    return Settings(password_encryption=True, password_salt="pepper")


@pytest.fixture
def mysql_params() -> DatasourceParams:
    """Valid MySQL parameters with one extra driver property."""
    return DatasourceParams(
        type=EngineKind.MYSQL,
        host="db.example.com",
        port=3306,
        database="sales",
        user="etl",
        password="secret",
        other={"serverTimezone": "UTC"},
    )


@pytest.fixture
def postgres_params() -> DatasourceParams:
    return DatasourceParams(
        type=EngineKind.POSTGRESQL,
        host="pg.internal",
        port=5432,
        database="analytics",
        user="Reporter",
        password="s3cr3t",
    )
