"""Tests for environment-driven configuration."""
from config_dump.config import ConfigDumpConfig, load_config


ENV_VARS = [
    "CONFIG_DUMP_CONFIG_ROOT",
    "CONFIG_DUMP_DB_BACKEND",
    "CONFIG_DUMP_DB_URI",
    "CONFIG_DUMP_DB_SCHEMA",
    "CONFIG_DUMP_TEMP_ROOT",
    "CONFIG_DUMP_ARCHIVE_FORMAT",
    "CONFIG_DUMP_CLEANUP_WORKDIR",
    "CONFIG_DUMP_VERSION",
    "CONFIG_DUMP_ENABLE_LOGGING",
]


def test_defaults(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    assert load_config() == ConfigDumpConfig()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("CONFIG_DUMP_CONFIG_ROOT", "/data/config")
    monkeypatch.setenv("CONFIG_DUMP_DB_BACKEND", "postgres")
    monkeypatch.setenv("CONFIG_DUMP_DB_URI", "postgresql://u@h/db")
    monkeypatch.setenv("CONFIG_DUMP_TEMP_ROOT", "/scratch")
    monkeypatch.setenv("CONFIG_DUMP_ARCHIVE_FORMAT", "zip")
    monkeypatch.setenv("CONFIG_DUMP_CLEANUP_WORKDIR", "no")
    monkeypatch.setenv("CONFIG_DUMP_VERSION", "0.32.0-alpha")
    monkeypatch.setenv("CONFIG_DUMP_ENABLE_LOGGING", "YES")

    cfg = load_config()

    assert cfg.config_root == "/data/config"
    assert cfg.db_backend == "postgres"
    assert cfg.db_uri == "postgresql://u@h/db"
    assert cfg.temp_root == "/scratch"
    assert cfg.archive_format == "zip"
    assert cfg.cleanup_workdir is False
    assert cfg.version == "0.32.0-alpha"
    assert cfg.enable_logging is True
