# product_endpoints.py
from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from persistence.exceptions import RecordStoreError
from persistence.product_state import ProductDraft
from persistence.repositories import AsyncProductRepository

router = APIRouter(tags=["products"])
logger = logging.getLogger(__name__)


def get_product_repository(request: Request) -> AsyncProductRepository:
    """
    The repository is bound on app.state by the app lifespan (see app.create_app).
    """
    return request.app.state.product_repository


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _bind_draft(payload: Any) -> ProductDraft:
    if not isinstance(payload, dict):
        raise ValueError("request body must be a JSON object")
    return ProductDraft.model_validate(payload)


@router.post("/products")
async def create_product(
    request: Request,
    repo: AsyncProductRepository = Depends(get_product_repository),
) -> JSONResponse:
    try:
        payload = await request.json()
    except ValueError as e:
        return _error(400, f"invalid JSON body: {e}")

    try:
        draft = _bind_draft(payload)
    except ValueError as e:  # pydantic ValidationError included
        return _error(400, str(e))

    try:
        record = await repo.create_product(draft)
    except RecordStoreError as e:
        logger.warning("CREATE PRODUCT: store failure: %r", e)
        return _error(500, str(e))

    logger.debug("CREATE PRODUCT: id=%s name=%s", record.id, record.name)
    return JSONResponse(record.model_dump(mode="json"), status_code=201)


@router.get("/products")
async def list_products(
    repo: AsyncProductRepository = Depends(get_product_repository),
) -> JSONResponse:
    try:
        records = await repo.list_products()
    except RecordStoreError as e:
        logger.warning("LIST PRODUCTS: store failure: %r", e)
        return _error(500, str(e))
    return JSONResponse([r.model_dump(mode="json") for r in records])
