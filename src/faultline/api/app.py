"""FastAPI application factory for Faultline."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from faultline import __version__
from faultline.api.deps import init_validation_service, reset_validation_service
from faultline.api.middleware import RequestTimingMiddleware
from faultline.api.routers import faults, oracles
from faultline.api.schemas import HealthResponse
from faultline.service.validation import ValidationService
from faultline.settings import Settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Build the ValidationService for the configured oracle."""
    settings: Settings = app.state.settings
    service = ValidationService.from_settings(settings)
    init_validation_service(service)
    try:
        yield
    finally:
        reset_validation_service()
        service.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="Faultline",
        description="Locates the offending line in DRL rule files rejected by a verifier.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Middleware
    app.add_middleware(RequestTimingMiddleware)

    app.include_router(faults.router, tags=["faults"])
    app.include_router(oracles.router, prefix="/oracles", tags=["oracles"])

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    return app


def main() -> None:
    """Run the REST API server using settings from environment / .env file."""
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())
    logger = logging.getLogger("faultline.api")
    logger.info(
        "Faultline API Server v%s starting (host=%s, port=%d, oracle=%s)",
        __version__, settings.api_server_host, settings.effective_port, settings.oracle,
    )

    uvicorn.run(
        "faultline.api.app:create_app",
        factory=True,
        host=settings.api_server_host,
        port=settings.effective_port,
        log_level=settings.log_level.lower(),
    )
