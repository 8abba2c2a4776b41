from __future__ import annotations

import asyncio

from persistence.product_state import ProductDraft
from persistence.repositories import AsyncLmdbProductRepository


def test_async_lmdb_product_repository_basic_flow(store):
    async def _run():
        repo = AsyncLmdbProductRepository(store)

        assert await repo.list_products() == []

        p1 = await repo.create_product(ProductDraft(name="Widget", quantity=5, price=9.99, description="A widget"))
        assert p1.id == 1

        p2 = await repo.create_product(ProductDraft(name="Gadget"))
        assert p2.id == 2
        assert p2.quantity == 0

        listed = await repo.list_products()
        assert [p.name for p in listed] == ["Widget", "Gadget"]

    asyncio.run(_run())


def test_async_lmdb_product_repository_concurrent_creates(store):
    async def _run():
        repo = AsyncLmdbProductRepository(store)
        created = await asyncio.gather(
            *(repo.create_product(ProductDraft(name=f"p{i}", quantity=i)) for i in range(30))
        )
        assert sorted(p.id for p in created) == list(range(1, 31))

        listed = await repo.list_products()
        assert [p.id for p in listed] == list(range(1, 31))
        by_id = {p.id: p for p in created}
        assert all(by_id[p.id] == p for p in listed)

    asyncio.run(_run())
