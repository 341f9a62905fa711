"""FastAPI application factory and shared API state."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from scripture_engine import __version__
from scripture_engine.apps.api.errors import register_exception_handlers
from scripture_engine.apps.api.middleware import CorrelationIdMiddleware
from scripture_engine.core.logging import get_logger
from scripture_engine.services import ServiceContainer
from scripture_engine.services import runtime

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register shared services at startup."""
    logger.info("Initializing scripture engine...")
    # Ensure runtime registry is populated even for non-HTTP contexts (e.g., CLI tests)
    services = getattr(app.state, "services", None)
    if isinstance(services, ServiceContainer):
        runtime.set_services(services)
        logger.info("%d books loaded.", len(services.book_matcher.books))
    try:
        yield
    finally:
        logger.info("Scripture engine stopped.")


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """Build the FastAPI application with configured routers."""
    if services is None:
        raise RuntimeError("Service container must be provided when creating the app.")
    app = FastAPI(title="Scripture Engine", version=__version__, lifespan=lifespan)
    app.state.services = services
    runtime.set_services(services)
    app.add_middleware(CorrelationIdMiddleware)
    register_exception_handlers(app)

    # Import lazily to avoid potential circular imports when routers grow.
    from .routes import ai, health, scripture  # pylint: disable=import-outside-toplevel

    app.include_router(health.router)
    app.include_router(scripture.router)
    app.include_router(ai.router)
    return app


__all__ = ["create_app", "lifespan"]
