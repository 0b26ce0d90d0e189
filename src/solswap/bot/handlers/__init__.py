"""Bot handlers module."""

from aiogram import Router

from solswap.bot.handlers import start, swap, wallet


def setup_routers() -> Router:
    """Create and configure all routers."""
    main_router = Router()

    # Swap goes last: its free-text handler must not shadow commands
    main_router.include_router(start.router)
    main_router.include_router(wallet.router)
    main_router.include_router(swap.router)

    return main_router
