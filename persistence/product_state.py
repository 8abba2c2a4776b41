from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidationInfo, field_validator

from .exceptions import DecodeFailure

COUNTER_KEY = b"next_id"
RECORD_PREFIX = b"product:"

# Wide enough for any unsigned 64-bit id, so key order equals id order.
ID_WIDTH = 20
MAX_ID = 10**ID_WIDTH - 1


class ProductDraft(BaseModel):
    """
    Caller-supplied product fields.

    Missing or null fields fall back to zero values; an ``id`` sent by a client
    is ignored. Values of the wrong JSON type are rejected rather than coerced.
    """

    # NaN/inf would serialize as null and make the stored record undecodable.
    model_config = ConfigDict(strict=True, allow_inf_nan=False)

    name: str = ""
    quantity: int = 0
    price: float = 0.0
    description: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _null_is_zero_value(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class ProductRecord(BaseModel):
    """
    Mirrors the stored value under ``product:<id>``:
      { "id": 1, "name": "...", "quantity": 0, "price": 0.0, "description": "..." }
    """

    model_config = ConfigDict(allow_inf_nan=False)

    id: int = Field(ge=1)
    name: str
    quantity: int
    price: float
    description: str

    @classmethod
    def from_draft(cls, draft: ProductDraft, product_id: int) -> "ProductRecord":
        return cls(id=product_id, **draft.model_dump())


def record_key(product_id: int) -> bytes:
    if product_id < 1 or product_id > MAX_ID:
        raise ValueError(f"product id out of range: {product_id}")
    return RECORD_PREFIX + f"{product_id:0{ID_WIDTH}d}".encode("ascii")


def encode_product(record: ProductRecord) -> bytes:
    return record.model_dump_json().encode("utf-8")


def decode_product(key: bytes, raw: bytes) -> ProductRecord:
    try:
        return ProductRecord.model_validate_json(raw)
    except ValidationError as e:
        raise DecodeFailure(key, str(e)) from e


def encode_counter(next_id: int) -> bytes:
    return str(next_id).encode("ascii")


def decode_counter(raw: bytes) -> int:
    """
    Parse the stored counter. Raises ValueError on anything but a positive decimal.
    """
    value = int(raw.decode("ascii"))
    if value < 1:
        raise ValueError(f"counter must be >= 1, got {value}")
    return value
