"""Health check endpoints."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from solswap import __version__
from solswap.config import get_settings

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
async def root():
    """Plain liveness check."""
    return "Telegram Bot Server is running!"


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "solswap"}


@router.get("/health/detailed")
async def detailed_health():
    """Detailed health check with configuration info."""
    settings = get_settings()
    return {
        "status": "healthy",
        "service": "solswap",
        "version": __version__,
        "config": settings.get_safe_dict(),
    }
