from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


@dataclass(frozen=True)
class Settings:
    # Server
    host: str
    port: int

    # Storage (None -> <project>/data)
    data_dir: Path | None
    lmdb_map_size: int

    # CORS
    cors_allow_origins: list[str]

    # Logging / debug
    log_level: str
    debug_log_requests: bool


def get_settings() -> Settings:
    host = os.getenv("HOST", "0.0.0.0")
    port = _env_int("PORT", 4433)

    raw_data_dir = os.getenv("DATA_DIR", "").strip()
    data_dir = Path(raw_data_dir) if raw_data_dir else None
    lmdb_map_size = _env_int("LMDB_MAP_SIZE", 256 * 1024 * 1024)

    cors_allow_origins = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    debug_log_requests = _env_bool("DEBUG_LOG_REQUESTS", False)

    return Settings(
        host=host,
        port=port,
        data_dir=data_dir,
        lmdb_map_size=lmdb_map_size,
        cors_allow_origins=cors_allow_origins or ["*"],
        log_level=log_level,
        debug_log_requests=debug_log_requests,
    )
