"""Bot initialization and runner."""

import asyncio
import logging
from typing import Optional

from aiogram import Bot, Dispatcher
from aiogram.fsm.storage.memory import MemoryStorage

from solswap.bot.handlers import setup_routers
from solswap.config import get_settings
from solswap.services.conversation import ConversationOrchestrator, create_orchestrator

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    """Configure logging - reduce noise from libraries."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("aiogram").setLevel(logging.INFO)


def create_bot(
    orchestrator: Optional[ConversationOrchestrator] = None,
) -> tuple[Bot, Dispatcher]:
    """Create bot and dispatcher instances."""
    settings = get_settings()

    if not settings.telegram_bot_token:
        raise ValueError("TELEGRAM_BOT_TOKEN is not set")

    bot = Bot(token=settings.telegram_bot_token)

    # Conversation state lives in memory (swap for RedisStorage to survive restarts)
    storage = MemoryStorage()
    dp = Dispatcher(
        storage=storage,
        orchestrator=orchestrator or create_orchestrator(settings),
    )
    dp.include_router(setup_routers())

    return bot, dp


async def run_bot() -> None:
    """Run the bot in polling mode."""
    settings = get_settings()
    configure_logging(settings.debug)

    logger.info("Starting Solswap bot...")

    orchestrator = create_orchestrator(settings)
    await orchestrator.store.initialize()
    logger.info(f"Wallet store initialized ({settings.wallet_store})")

    bot, dp = create_bot(orchestrator)

    try:
        await bot.delete_webhook(drop_pending_updates=True)
        logger.info("Starting polling...")
        await dp.start_polling(bot)
    finally:
        await bot.session.close()
        await orchestrator.store.close()


def main() -> None:
    """Entry point for bot-only mode."""
    asyncio.run(run_bot())


if __name__ == "__main__":
    main()
