from __future__ import annotations

from .engine import engine_scope, open_engine
from .exceptions import DecodeFailure, RecordStoreError, StorageFailure
from .interfaces import ProductStore
from .product_state import ProductDraft, ProductRecord
from .product_store import LmdbProductStore
from .repositories import AsyncLmdbProductRepository, AsyncProductRepository

__all__ = [
    "engine_scope",
    "open_engine",
    "DecodeFailure",
    "RecordStoreError",
    "StorageFailure",
    "ProductStore",
    "ProductDraft",
    "ProductRecord",
    "LmdbProductStore",
    "AsyncProductRepository",
    "AsyncLmdbProductRepository",
]
