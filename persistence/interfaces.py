from __future__ import annotations

from typing import Iterator, Protocol

from .product_state import ProductDraft, ProductRecord


class ProductStore(Protocol):
    """
    Durable product records with store-assigned, strictly increasing ids.
    """

    def create_record(self, draft: ProductDraft) -> ProductRecord:
        """Assign the next id to ``draft`` and persist it atomically."""
        ...

    def iter_records(self) -> Iterator[ProductRecord]:
        """Lazily yield all records in ascending id order."""
        ...

    def list_records(self) -> list[ProductRecord]:
        """Return all records in ascending id order (empty list when none)."""
        ...
