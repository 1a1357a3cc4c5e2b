"""Tests for settings loading and environment variable substitution."""

import os

import pytest

from dbsource.config import (
    DEFAULT_PASSWORD_SALT,
    Settings,
    get_settings,
    load_settings,
    reset_settings,
    substitute_env_vars,
)

SAMPLE_CONFIG = """
password_encryption: true
log_level: debug
datasources:
  warehouse:
    type: postgresql
    host: ${WAREHOUSE_HOST|localhost}
    port: 5432
    database: analytics
    user: reporter
    password: ${WAREHOUSE_PASSWORD}
"""


class TestSubstituteEnvVars:
    def test_set_variable(self, monkeypatch):
        monkeypatch.setenv("DB_HOST", "db.internal")
        assert substitute_env_vars("${DB_HOST}:5432") == "db.internal:5432"

    def test_default_value(self, monkeypatch):
        monkeypatch.delenv("DB_HOST", raising=False)
        assert substitute_env_vars("${DB_HOST|localhost}") == "localhost"
        assert substitute_env_vars("${DB_HOST|'quoted'}") == "quoted"

    def test_missing_variable_becomes_empty(self, monkeypatch):
        monkeypatch.delenv("DB_HOST", raising=False)
        assert substitute_env_vars("${DB_HOST}") == ""

    def test_nested_structures(self, monkeypatch):
        monkeypatch.setenv("DB_USER", "etl")
        data = {"a": ["${DB_USER}", 5], "b": {"c": "${DB_USER}@x"}, "d": None}
        assert substitute_env_vars(data) == {"a": ["etl", 5], "b": {"c": "etl@x"}, "d": None}


class TestLoadSettings:
    def test_defaults_without_a_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        settings = load_settings()
        assert settings == Settings()
        assert settings.password_salt == DEFAULT_PASSWORD_SALT

    def test_explicit_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("WAREHOUSE_PASSWORD", "s3cr3t")
        monkeypatch.delenv("WAREHOUSE_HOST", raising=False)
        path = tmp_path / "dbsource.yml"
        path.write_text(SAMPLE_CONFIG)

        settings = load_settings(str(path))

        assert settings.password_encryption is True
        assert settings.log_level == "debug"
        assert settings.source_path == str(path)
        warehouse = settings.datasources["warehouse"]
        assert warehouse["host"] == "localhost"
        assert warehouse["password"] == "s3cr3t"
        assert warehouse["port"] == 5432

    def test_config_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.yml"
        path.write_text("datasources: {}\n")
        monkeypatch.setenv("DBSOURCE_CONFIG", str(path))
        assert load_settings().source_path == str(path)

    def test_default_file_in_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / "dbsource.yml").write_text("log_level: warning\n")
        monkeypatch.chdir(tmp_path)
        assert load_settings().log_level == "warning"

    def test_dotenv_file(self, tmp_path, monkeypatch):
        # setenv then delenv so monkeypatch removes what load_dotenv sets
        monkeypatch.setenv("WAREHOUSE_HOST", "placeholder")
        monkeypatch.delenv("WAREHOUSE_HOST")
        (tmp_path / ".env").write_text("WAREHOUSE_HOST=from-dotenv\n")
        (tmp_path / "dbsource.yml").write_text(SAMPLE_CONFIG)
        monkeypatch.chdir(tmp_path)

        settings = load_settings()

        assert os.environ["WAREHOUSE_HOST"] == "from-dotenv"
        assert settings.datasources["warehouse"]["host"] == "from-dotenv"

    def test_environment_overrides(self, tmp_path, monkeypatch):
        path = tmp_path / "dbsource.yml"
        path.write_text(SAMPLE_CONFIG)
        monkeypatch.setenv("DBSOURCE_PASSWORD_ENCRYPTION", "false")
        monkeypatch.setenv("DBSOURCE_PASSWORD_SALT", "pepper")
        monkeypatch.setenv("DBSOURCE_LOG_LEVEL", "error")

        settings = load_settings(str(path))

        assert settings.password_encryption is False
        assert settings.password_salt == "pepper"
        assert settings.log_level == "error"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_settings(str(tmp_path / "nope.yml"))

    @pytest.mark.parametrize(
        "content,message",
        [
            ("datasources: [unclosed\n", "Invalid YAML"),
            ("- a\n- b\n", "must contain a mapping"),
            ("datasources:\n  - warehouse\n", "'datasources' must be a mapping"),
            ("datasources:\n  warehouse: postgresql\n", "must be a dictionary"),
        ],
    )
    def test_malformed_files(self, tmp_path, content, message):
        path = tmp_path / "dbsource.yml"
        path.write_text(content)
        with pytest.raises(ValueError, match=message):
            load_settings(str(path))


class TestCachedSettings:
    def test_get_settings_caches(self, tmp_path, monkeypatch):
        reset_settings()
        monkeypatch.chdir(tmp_path)
        first = get_settings()
        assert get_settings() is first

    def test_reset_replaces(self):
        replacement = Settings(password_encryption=True)
        reset_settings(replacement)
        assert get_settings() is replacement
