from __future__ import annotations

import asyncio
from typing import Protocol

from .interfaces import ProductStore
from .product_state import ProductDraft, ProductRecord


class AsyncProductRepository(Protocol):
    """
    Domain-level product persistence interface used by the endpoints.
    """

    async def create_product(self, draft: ProductDraft) -> ProductRecord: ...
    async def list_products(self) -> list[ProductRecord]: ...


class AsyncLmdbProductRepository(AsyncProductRepository):
    """
    Async wrapper around the LMDB-backed product store.
    Uses asyncio.to_thread to avoid blocking the event loop on engine I/O.
    """

    def __init__(self, store: ProductStore) -> None:
        self._store = store

    async def create_product(self, draft: ProductDraft) -> ProductRecord:
        return await asyncio.to_thread(self._store.create_record, draft)

    async def list_products(self) -> list[ProductRecord]:
        return await asyncio.to_thread(self._store.list_records)
