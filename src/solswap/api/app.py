"""FastAPI application factory."""

from fastapi import FastAPI

from solswap import __version__
from solswap.config import get_settings


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Solswap API",
        description="Liveness endpoints for the Solswap Telegram bot",
        version=__version__,
        debug=settings.debug,
    )

    from solswap.api.routes import health

    app.include_router(health.router, tags=["Health"])

    return app
