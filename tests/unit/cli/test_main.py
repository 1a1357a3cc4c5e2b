"""Tests for the dbsource CLI commands."""

import json
import logging
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from dbsource.cli.main import app
from dbsource.datasource.base.exceptions import ConnectivityError
from dbsource.datasource.engine_kind import EngineKind

CONFIG = """
datasources:
  warehouse:
    type: postgresql
    host: pg.internal
    port: 5432
    database: analytics
    username: reporter
    password: ${WAREHOUSE_PASSWORD|changeme}
    properties:
      sslmode: require
  legacy:
    type: oracle
    host: ora.internal
    port: "1521"
    database: ORCL
    user: scott
    password: tiger
    connect_type: SID
  broken:
    type: mysql
    host: ""
    port: 3306
    database: sales
    user: etl
  mystery:
    type: mongodb
    host: mongo
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    monkeypatch.delenv("WAREHOUSE_PASSWORD", raising=False)
    path = tmp_path / "dbsource.yml"
    path.write_text(CONFIG)
    return str(path)


def _invoke(runner, config_path, *args):
    return runner.invoke(app, ["--config", config_path, *args])


class TestInspectionCommands:
    def test_url(self, runner, config_path):
        result = _invoke(runner, config_path, "url", "warehouse")
        assert result.exit_code == 0
        assert result.output.strip() == (
            "postgresql+psycopg2://pg.internal:5432/analytics?sslmode=require"
        )

    def test_url_oracle_sid(self, runner, config_path):
        result = _invoke(runner, config_path, "url", "legacy")
        assert result.exit_code == 0
        assert result.output.strip() == "oracle+oracledb://ora.internal:1521/ORCL"

    def test_unique_id(self, runner, config_path):
        result = _invoke(runner, config_path, "unique-id", "warehouse")
        assert result.exit_code == 0
        assert result.output.strip() == (
            "postgresql@reporter@postgresql+psycopg2://pg.internal:5432/analytics?sslmode=require"
        )
        assert "changeme" not in result.output

    def test_descriptor_masks_password(self, runner, config_path):
        result = _invoke(runner, config_path, "descriptor", "warehouse")
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["password"] == "***"
        assert data["address"] == "postgresql+psycopg2://pg.internal:5432"
        assert data["other"] == {"sslmode": "require"}
        assert "changeme" not in result.output

    def test_engines(self, runner):
        result = runner.invoke(app, ["engines"])
        assert result.exit_code == 0
        assert "Supported engines (9)" in result.output
        assert "clickhouse" in result.output
        assert "mssql+pymssql" in result.output

    def test_list(self, runner, config_path):
        result = _invoke(runner, config_path, "list")
        assert result.exit_code == 0
        assert "warehouse" in result.output
        assert "legacy" in result.output


class TestValidateCommand:
    def test_valid(self, runner, config_path):
        result = _invoke(runner, config_path, "validate", "warehouse")
        assert result.exit_code == 0
        assert "Datasource 'warehouse' is valid" in result.output

    def test_invalid(self, runner, config_path):
        result = _invoke(runner, config_path, "validate", "broken")
        assert result.exit_code == 1
        assert "validation failed" in result.output
        assert "host is required" in result.output

    def test_unsupported_engine(self, runner, config_path):
        result = _invoke(runner, config_path, "validate", "mystery")
        assert result.exit_code == 1
        assert "datasource type illegal" in result.output

    def test_unknown_datasource(self, runner, config_path):
        result = _invoke(runner, config_path, "validate", "nope")
        assert result.exit_code == 1
        assert "Datasource 'nope' not found" in result.output
        assert "warehouse" in result.output

    def test_missing_config_file(self, runner, tmp_path):
        result = runner.invoke(
            app, ["--config", str(tmp_path / "missing.yml"), "validate", "warehouse"]
        )
        assert result.exit_code == 1
        assert "Configuration file not found" in result.output

    def test_url_of_invalid_datasource(self, runner, config_path):
        result = _invoke(runner, config_path, "url", "broken")
        assert result.exit_code == 1
        assert "host is required" in result.output


class TestTablesCommand:
    def test_lists_matching_tables(self, runner, config_path):
        with patch("dbsource.cli.main.SchemaIntrospector") as mock_introspector:
            mock_introspector.return_value.scan.return_value = ["orders", "order_items"]
            result = _invoke(runner, config_path, "tables", "warehouse", "--pattern", "order.*")

        assert result.exit_code == 0
        assert "Tables in 'analytics' (2)" in result.output
        assert "order_items" in result.output

        engine, descriptor, pattern = mock_introspector.return_value.scan.call_args[0]
        assert engine is EngineKind.POSTGRESQL
        assert descriptor.user == "reporter"
        assert descriptor.password == "changeme"
        assert pattern == "order.*"

    def test_no_matches(self, runner, config_path):
        with patch("dbsource.cli.main.SchemaIntrospector") as mock_introspector:
            mock_introspector.return_value.scan.return_value = []
            result = _invoke(runner, config_path, "tables", "warehouse")

        assert result.exit_code == 0
        assert "No matching tables" in result.output
        assert mock_introspector.return_value.scan.call_args[0][2] == ".*"

    def test_connection_failure(self, runner, config_path):
        with patch("dbsource.cli.main.SchemaIntrospector") as mock_introspector:
            mock_introspector.return_value.scan.side_effect = ConnectivityError(
                "cannot connect", engine="postgresql"
            )
            result = _invoke(runner, config_path, "tables", "warehouse")

        assert result.exit_code == 1
        assert "[postgresql] Connection error: cannot connect" in result.output


class TestLogLevelSetting:
    @pytest.fixture
    def debug_config(self, tmp_path):
        path = tmp_path / "dbsource.yml"
        path.write_text("log_level: debug\n" + CONFIG)
        return str(path)

    def test_log_level_from_config(self, runner, debug_config):
        result = _invoke(runner, debug_config, "list")
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.DEBUG

    def test_quiet_flag_wins(self, runner, debug_config):
        result = runner.invoke(app, ["--quiet", "--config", debug_config, "list"])
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.WARNING

    def test_log_level_from_environment(self, runner, debug_config, monkeypatch):
        monkeypatch.setenv("DBSOURCE_LOG_LEVEL", "error")
        result = _invoke(runner, debug_config, "list")
        assert result.exit_code == 0
        assert logging.getLogger().level == logging.ERROR
