from __future__ import annotations

from pathlib import Path
import sys


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from persistence.engine import engine_scope  # noqa: E402
from persistence.paths import engine_dir  # noqa: E402
from persistence.product_store import LmdbProductStore  # noqa: E402
from settings import Settings  # noqa: E402

TEST_MAP_SIZE = 16 * 1024 * 1024


@pytest.fixture
def engine_path(tmp_path: Path) -> Path:
    """
    Same directory the app lifespan opens for DATA_DIR=tmp_path.
    """
    return engine_dir(tmp_path)


@pytest.fixture
def map_size() -> int:
    return TEST_MAP_SIZE


@pytest.fixture
def engine(engine_path: Path, map_size: int):
    with engine_scope(engine_path, map_size=map_size) as env:
        yield env


@pytest.fixture
def store(engine) -> LmdbProductStore:
    return LmdbProductStore(engine)


@pytest.fixture
def app_settings(tmp_path: Path) -> Settings:
    return Settings(
        host="127.0.0.1",
        port=0,
        data_dir=tmp_path,
        lmdb_map_size=TEST_MAP_SIZE,
        cors_allow_origins=["*"],
        log_level="DEBUG",
        debug_log_requests=True,
    )


@pytest.fixture
def client(app_settings: Settings):
    """
    TestClient used as a context manager so the lifespan opens (and closes) the engine.
    """
    from fastapi.testclient import TestClient

    import app as app_module

    with TestClient(app_module.create_app(app_settings)) as c:
        yield c
