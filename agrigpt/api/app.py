"""FastAPI application factory and configuration.

Hosts the health endpoint; the NiceGUI pages are mounted onto this app by
``agrigpt.main``.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from agrigpt import __version__
from agrigpt.config import get_client_config

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Log startup and shutdown of the chat client server.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    logger.info(f"Starting AgriGPT chat client (backend: {get_client_config().backend_url})")
    yield
    logger.info("Shutting down AgriGPT chat client...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="AgriGPT Chat",
        description="Browser chat client for the AgriGPT agricultural advisory assistant.",
        version=__version__,
        lifespan=lifespan,
    )

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {
            "status": "healthy",
            "service": "agrigpt-chat",
            "backend": get_client_config().backend_url,
        }

    return application
