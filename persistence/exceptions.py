from __future__ import annotations


class RecordStoreError(Exception):
    """Base class for failures raised by the product record store."""


class StorageFailure(RecordStoreError):
    """
    The engine failed to read, write or commit.

    The underlying engine error, when there is one, is chained as __cause__.
    """


class DecodeFailure(RecordStoreError):
    """A stored value could not be decoded into a product record."""

    def __init__(self, key: bytes, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"cannot decode record at {key.decode('ascii', 'replace')!r}: {reason}")
