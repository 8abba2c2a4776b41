from __future__ import annotations

from pathlib import Path

from settings import get_settings


def test_settings_defaults(monkeypatch):
    for name in ("HOST", "PORT", "DATA_DIR", "LMDB_MAP_SIZE", "CORS_ALLOW_ORIGINS", "LOG_LEVEL", "DEBUG_LOG_REQUESTS"):
        monkeypatch.delenv(name, raising=False)

    s = get_settings()
    assert s.port == 4433
    assert s.data_dir is None
    assert s.cors_allow_origins == ["*"]
    assert s.log_level == "INFO"
    assert s.debug_log_requests is False


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("PORT", "8081")
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("LMDB_MAP_SIZE", "1048576")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "http://a.example, http://b.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DEBUG_LOG_REQUESTS", "yes")

    s = get_settings()
    assert s.port == 8081
    assert s.data_dir == Path(tmp_path)
    assert s.lmdb_map_size == 1048576
    assert s.cors_allow_origins == ["http://a.example", "http://b.example"]
    assert s.log_level == "DEBUG"
    assert s.debug_log_requests is True
