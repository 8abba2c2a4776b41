from __future__ import annotations

import contextlib
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from dotenv import load_dotenv

from endpoints.mcp_endpoints import build_mcp
from endpoints.product_endpoints import router as products_router
from persistence.engine import engine_scope
from persistence.paths import data_dir, engine_dir
from persistence.product_store import LmdbProductStore
from persistence.repositories import AsyncLmdbProductRepository
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    load_dotenv("local.env")
    settings = settings or get_settings()

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        path = engine_dir(settings.data_dir or data_dir())
        with engine_scope(path, map_size=settings.lmdb_map_size) as env:
            app.state.product_repository = AsyncLmdbProductRepository(LmdbProductStore(env))
            try:
                async with mcp.session_manager.run():
                    yield
            finally:
                del app.state.product_repository

    mcp = build_mcp(lambda: app.state.product_repository)

    app = FastAPI(title="Inventory", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    if settings.debug_log_requests:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            start = time.perf_counter()
            response = await call_next(request)
            logger.info(
                "REQUEST: %s %s -> %s (%.2fms)",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - start) * 1000,
            )
            return response

    @app.post("/mcp")
    async def mcp_redirect_post():
        return RedirectResponse(url="/mcp/", status_code=307)

    @app.get("/mcp")
    async def mcp_redirect_get():
        return RedirectResponse(url="/mcp/", status_code=307)

    app.include_router(products_router)

    app.mount("/mcp", mcp.streamable_http_app())

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    configure_logging(app.state.settings)
    uvicorn.run(app, host=app.state.settings.host, port=app.state.settings.port)
