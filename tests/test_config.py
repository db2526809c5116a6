"""Environment-driven configuration."""

from __future__ import annotations

import pytest

from habittrail.config import BaseConfig, DevConfig, _env_bool
from habittrail.constants import DEFAULT_STORAGE_KEY


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "HABITTRAIL_DATA_DIR",
        "HABITTRAIL_DATABASE_URL",
        "HABITTRAIL_STORAGE_KEY",
        "HABITTRAIL_DEV_MODE",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_point_into_data_dir(tmp_path):
    config = BaseConfig(data_dir=tmp_path / "data")

    assert config.DATA_DIR == (tmp_path / "data").resolve()
    assert config.DATA_DIR.is_dir()
    assert config.DATABASE_URL == f"sqlite:///{config.DATA_DIR / 'habittrail.db'}"
    assert config.STORAGE_KEY == DEFAULT_STORAGE_KEY
    assert config.DEV_MODE is True


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("HABITTRAIL_DATA_DIR", str(tmp_path / "env-data"))
    monkeypatch.setenv("HABITTRAIL_DATABASE_URL", "sqlite://")
    monkeypatch.setenv("HABITTRAIL_STORAGE_KEY", "habits-v2")
    monkeypatch.setenv("HABITTRAIL_DEV_MODE", "off")

    config = DevConfig()

    assert config.DATA_DIR == (tmp_path / "env-data").resolve()
    assert config.DATABASE_URL == "sqlite://"
    assert config.STORAGE_KEY == "habits-v2"
    assert config.DEV_MODE is False


@pytest.mark.parametrize(
    "raw, expected",
    [("1", True), ("true", True), (" YES ", True), ("on", True), ("0", False), ("nope", False)],
)
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("HABITTRAIL_FLAG", raw)

    assert _env_bool("HABITTRAIL_FLAG") is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("HABITTRAIL_FLAG", raising=False)

    assert _env_bool("HABITTRAIL_FLAG", default=True) is True


def test_sqlite_engine_options(tmp_path):
    config = BaseConfig(data_dir=tmp_path)

    assert config.sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_dev_config_has_no_unused_flags(tmp_path):
    config = DevConfig(data_dir=tmp_path)

    assert not hasattr(config, "DEBUG")
    assert not hasattr(config, "TESTING")
