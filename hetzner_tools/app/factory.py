"""
Application Factory - Creates and configures the FastAPI app.

Each call creates a fresh app with its own registry, so tests can inject a
connector backed by a mock transport.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from .. import __version__
from ..config import HetznerConfig
from ..connectors import HetznerConnector
from ..tools import ToolRegistry, create_registry
from .middleware import ErrorMiddleware, LoggingMiddleware
from .routes import router

__all__ = ["create_app"]

logger = structlog.get_logger(__name__)


def create_app(
    config: HetznerConfig | None = None,
    registry: ToolRegistry | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Tool configuration (uses defaults if None)
        registry: Prebuilt registry (built from config if None)

    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = HetznerConfig()
    if registry is None:
        registry = create_registry(HetznerConnector(config))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("bridge_started", version=__version__, tools=len(registry))
        yield
        await registry.client.close()
        logger.info("bridge_stopped")

    app = FastAPI(
        title="Hetzner Tools",
        description="Hetzner Cloud operations as agent tools",
        version=__version__,
        lifespan=lifespan,
    )

    # Last added runs first
    app.add_middleware(ErrorMiddleware)
    app.add_middleware(LoggingMiddleware)

    app.include_router(router)

    app.state.config = config
    app.state.registry = registry

    return app
