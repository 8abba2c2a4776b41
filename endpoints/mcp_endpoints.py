from __future__ import annotations

import logging
from typing import Any, Callable, Literal

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings
from pydantic import ValidationError
from typing_extensions import TypedDict

from persistence.exceptions import RecordStoreError
from persistence.product_state import ProductDraft, ProductRecord
from persistence.repositories import AsyncProductRepository

logger = logging.getLogger(__name__)


class ToolTextContent(TypedDict):
    type: Literal["text"]
    text: str


class ProductToolResponse(TypedDict, total=False):
    content: list[ToolTextContent]
    structuredContent: dict[str, Any]


def _reply(message: str | None = None, *, products: list[ProductRecord] | None = None) -> ProductToolResponse:
    payload_products = [p.model_dump(mode="json") for p in (products if products is not None else [])]
    return {
        "content": ([{"type": "text", "text": message}] if message else []),
        "structuredContent": {"products": payload_products},
    }


async def create_product_reply(
    repo: AsyncProductRepository,
    *,
    name: str,
    quantity: int,
    price: float,
    description: str,
) -> ProductToolResponse:
    try:
        draft = ProductDraft(name=name, quantity=quantity, price=price, description=description)
    except ValidationError as e:
        return _reply(f"Invalid input: {e.errors()[0]['msg']}.")

    try:
        record = await repo.create_product(draft)
    except RecordStoreError as e:
        logger.warning("MCP create_product: store failure: %r", e)
        return _reply(f"Could not store product: {e}")
    return _reply(f'Stored product {record.id} "{record.name}".', products=[record])


async def list_products_reply(repo: AsyncProductRepository) -> ProductToolResponse:
    try:
        records = await repo.list_products()
    except RecordStoreError as e:
        logger.warning("MCP list_products: store failure: %r", e)
        return _reply(f"Could not list products: {e}")
    if not records:
        return _reply("No products stored yet.")
    return _reply(f"{len(records)} product(s):", products=records)


def build_mcp(get_repository: Callable[[], AsyncProductRepository]) -> FastMCP:
    """
    Build a stateless MCP server whose tools resolve the product repository lazily,
    so the engine can be opened by the app lifespan after the tools are registered.
    """
    mcp = FastMCP(
        "Inventory MCP",
        stateless_http=True,
        json_response=True,
        # FastMCP auto-enables DNS rebinding protection on localhost, which rejects proxied Host headers.
        transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
    )
    mcp.settings.streamable_http_path = "/"

    @mcp.tool()
    async def create_product(
        name: str = "",
        quantity: int = 0,
        price: float = 0.0,
        description: str = "",
    ) -> ProductToolResponse:
        """
        Stores a new product and returns it with its assigned id.
        """
        return await create_product_reply(
            get_repository(), name=name, quantity=quantity, price=price, description=description
        )

    @mcp.tool()
    async def list_products() -> ProductToolResponse:
        """
        Lists every stored product in id order.
        """
        return await list_products_reply(get_repository())

    return mcp
