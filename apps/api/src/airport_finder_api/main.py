"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from airport_finder_api.cache import PersistentAirportCache, close_redis, init_redis
from airport_finder_api.config import ApiSettings, settings
from airport_finder_api.routers import airports
from airport_finder_api.sample_data import SampleDataProvider
from airport_finder_api.schemas import ErrorResponse
from airport_finder_api.services import AirportCache
from airport_finder_api.upstream import AviationstackClient
from airport_finder_core.errors import AirportFinderError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Error al cargar aeropuertos"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Build the airport cache and its collaborators unless one was injected."""
    if getattr(app.state, "airport_cache", None) is not None:
        yield
        return

    cfg: ApiSettings = app.state.settings
    pool = await init_redis(cfg.redis_url)
    upstream = AviationstackClient(
        base_url=cfg.aviationstack_base_url,
        timeout=cfg.upstream_timeout,
    )
    persistent = (
        PersistentAirportCache(
            pool,
            revalidate_seconds=cfg.persistent_cache_ttl,
            stale_seconds=cfg.persistent_cache_stale,
        )
        if pool is not None
        else None
    )
    cache = AirportCache(
        upstream=upstream,
        api_key=cfg.aviationstack_api_key,
        persistent=persistent,
        sample_data=SampleDataProvider(),
        allow_sample_fallback=cfg.allow_sample_fallback,
        page_size=cfg.upstream_page_size,
        max_pages=cfg.upstream_max_pages,
    )
    if not cfg.aviationstack_api_key:
        logger.warning(
            "AVIATIONSTACK_API_KEY not configured (environment=%s, sample fallback %s)",
            cfg.environment,
            "enabled" if cfg.allow_sample_fallback else "disabled",
        )

    app.state.airport_cache = cache
    try:
        yield
    finally:
        await cache.aclose()
        await upstream.close()
        await close_redis(pool)
        app.state.airport_cache = None


async def _airport_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Error serving %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=LOAD_ERROR_MESSAGE).model_dump(),
    )


def create_app(
    app_settings: ApiSettings | None = None,
    *,
    airport_cache: AirportCache | None = None,
) -> FastAPI:
    """Build and configure the FastAPI application.

    Passing *airport_cache* skips building the default collaborators, which
    is how tests inject fakes.
    """
    cfg = app_settings or settings
    _configure_logging(cfg.log_level)

    app = FastAPI(
        title="Airport Finder API",
        version="0.1.0",
        lifespan=_lifespan,
    )
    app.state.settings = cfg
    app.state.airport_cache = airport_cache

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AirportFinderError, _airport_error_handler)

    app.include_router(airports.router, prefix="/api")

    @app.get("/health")
    async def health() -> dict[str, str]:
        cache: AirportCache | None = app.state.airport_cache
        return {"status": "ok", "cache": cache.state if cache else "uninitialised"}

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    uvicorn.run(
        "airport_finder_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
