"""Database engine creation."""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from solswap.config import Settings, get_settings


def normalize_database_url(url: str) -> str:
    """Use the aiosqlite driver for plain sqlite URLs."""
    if url.startswith("sqlite:///") and "aiosqlite" not in url:
        return url.replace("sqlite:///", "sqlite+aiosqlite:///")
    return url


def create_engine(settings: Optional[Settings] = None) -> AsyncEngine:
    """Create the async engine for ``DATABASE_URL``."""
    settings = settings or get_settings()
    return create_async_engine(
        normalize_database_url(settings.database_url),
        echo=settings.debug and not settings.is_production,
        future=True,
    )
