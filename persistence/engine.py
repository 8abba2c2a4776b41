from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import Iterator

import lmdb

from .exceptions import StorageFailure
from .paths import ensure_dir

logger = logging.getLogger(__name__)

DEFAULT_MAP_SIZE = 256 * 1024 * 1024


def open_engine(path: Path, *, map_size: int = DEFAULT_MAP_SIZE) -> lmdb.Environment:
    """
    Open (or create) the LMDB environment under ``path``.

    LMDB gives us the engine contract the store relies on: ordered byte keys,
    one serialized writer, snapshot readers and durable commits.
    """
    ensure_dir(path)
    try:
        env = lmdb.open(str(path), map_size=map_size, subdir=True, max_dbs=0)
    except lmdb.Error as e:
        raise StorageFailure(f"cannot open engine at {path}: {e}") from e
    logger.info("ENGINE: opened %s (map_size=%s)", path, map_size)
    return env


@contextlib.contextmanager
def engine_scope(path: Path, *, map_size: int = DEFAULT_MAP_SIZE) -> Iterator[lmdb.Environment]:
    """Hold one engine handle for the duration of the block and always close it."""
    env = open_engine(path, map_size=map_size)
    try:
        yield env
    finally:
        env.close()
        logger.info("ENGINE: closed %s", path)
