"""Wiring of the application context."""

from __future__ import annotations

from dataclasses import fields

from habittrail.config import BaseConfig
from habittrail.context import AppContext, create_app_context


def test_context_bundles_only_wired_services(monkeypatch, tmp_path):
    monkeypatch.delenv("HABITTRAIL_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITTRAIL_STORAGE_KEY", raising=False)

    app = create_app_context(BaseConfig(data_dir=tmp_path))

    assert {f.name for f in fields(AppContext)} == {"config", "session_factory", "storage", "store"}
    assert app.store.habits == ()
    assert app.store.storage_key == app.config.STORAGE_KEY
