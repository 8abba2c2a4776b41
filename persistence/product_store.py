from __future__ import annotations

from typing import Iterator

import lmdb

from .exceptions import StorageFailure
from .interfaces import ProductStore
from .product_state import (
    COUNTER_KEY,
    MAX_ID,
    RECORD_PREFIX,
    ProductDraft,
    ProductRecord,
    decode_counter,
    decode_product,
    encode_counter,
    encode_product,
    record_key,
)


class LmdbProductStore(ProductStore):
    """
    Product records and the id counter, kept in one LMDB environment:

    - next_id                  -> next id to hand out (ASCII decimal)
    - product:<20-digit id>    -> product record JSON

    The environment is opened and closed by the caller; the store only borrows it.
    """

    def __init__(self, env: lmdb.Environment):
        self._env = env

    def create_record(self, draft: ProductDraft) -> ProductRecord:
        """
        Allocate the next id and write the record in a single write transaction.

        Any failure aborts the transaction, so neither the record nor the
        advanced counter become visible.
        """
        try:
            with self._env.begin(write=True) as txn:
                product_id = self._read_counter(txn)
                record = ProductRecord.from_draft(draft, product_id)
                if not txn.put(record_key(product_id), encode_product(record), overwrite=False):
                    raise StorageFailure(f"record key for id {product_id} already exists")
                txn.put(COUNTER_KEY, encode_counter(product_id + 1))
        except lmdb.Error as e:
            raise StorageFailure(f"create product failed: {e}") from e
        return record

    def iter_records(self) -> Iterator[ProductRecord]:
        """
        Yield stored records in ascending id order from one read snapshot.

        A value that does not decode stops the iteration with DecodeFailure.
        """
        try:
            with self._env.begin(write=False) as txn, txn.cursor() as cursor:
                if not cursor.set_range(RECORD_PREFIX):
                    return
                for key, raw in cursor:
                    if not key.startswith(RECORD_PREFIX):
                        break
                    yield decode_product(key, raw)
        except lmdb.Error as e:
            raise StorageFailure(f"list products failed: {e}") from e

    def list_records(self) -> list[ProductRecord]:
        return list(self.iter_records())

    @staticmethod
    def _read_counter(txn: lmdb.Transaction) -> int:
        raw = txn.get(COUNTER_KEY)
        if raw is None:
            return 1
        try:
            product_id = decode_counter(raw)
        except ValueError as e:
            raise StorageFailure(f"unreadable counter value {raw!r}") from e
        if product_id > MAX_ID:
            raise StorageFailure("product id space exhausted")
        return product_id
