"""Main entry point - runs the bot and the liveness API side by side."""

import asyncio
import logging
import signal
from typing import Optional

import uvicorn

from solswap.api.app import create_app
from solswap.bot.bot import configure_logging, create_bot
from solswap.config import Settings, get_settings
from solswap.services.conversation import ConversationOrchestrator, create_orchestrator

logger = logging.getLogger(__name__)


class Application:
    """Supervises the bot and API services until shutdown or a service stops."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.orchestrator: Optional[ConversationOrchestrator] = None
        self._shutdown_event = asyncio.Event()

    async def run(self) -> None:
        configure_logging(self.settings.debug)
        logger.info(f"Starting Solswap ({self.settings.environment})")

        self.orchestrator = create_orchestrator(self.settings)
        await self.orchestrator.store.initialize()

        try:
            await self._supervise(self._services())
        finally:
            await self.orchestrator.store.close()
            logger.info("Wallet store closed")

    def _services(self) -> dict[str, asyncio.Task]:
        services = {"api": asyncio.create_task(self._serve_api())}

        if self.settings.telegram_bot_token:
            if not self.settings.has_privy:
                logger.warning("PRIVY_APP_ID / PRIVY_APP_SECRET not set - wallet commands will fail")
            services["bot"] = asyncio.create_task(self._serve_bot())
        else:
            logger.warning("TELEGRAM_BOT_TOKEN not set - bot disabled")

        return services

    async def _supervise(self, services: dict[str, asyncio.Task]) -> None:
        """Wait for a shutdown request or the first service to stop, then stop the rest."""
        shutdown = asyncio.create_task(self._shutdown_event.wait())
        done, _ = await asyncio.wait(
            [shutdown, *services.values()], return_when=asyncio.FIRST_COMPLETED
        )

        for name, task in services.items():
            if task in done:
                if task.exception():
                    logger.error(f"Service {name} failed: {task.exception()}")
                else:
                    logger.warning(f"Service {name} stopped")

        shutdown.cancel()
        for task in services.values():
            task.cancel()
        await asyncio.gather(shutdown, *services.values(), return_exceptions=True)

    async def _serve_bot(self) -> None:
        bot, dp = create_bot(self.orchestrator)
        try:
            await bot.delete_webhook(drop_pending_updates=True)
            logger.info("Starting bot polling...")
            await dp.start_polling(bot, handle_signals=False)
        finally:
            await bot.session.close()

    async def _serve_api(self) -> None:
        config = uvicorn.Config(
            create_app(),
            host=self.settings.api_host,
            port=self.settings.api_port,
            log_level="debug" if self.settings.debug else "info",
        )
        logger.info(f"Server is running on {self.settings.api_host}:{self.settings.api_port}")
        await uvicorn.Server(config).serve()

    def shutdown(self) -> None:
        logger.info("Shutdown requested")
        self._shutdown_event.set()


def main():
    """Main entry point."""
    app = Application()

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, app.shutdown)

    try:
        loop.run_until_complete(app.run())
    finally:
        loop.close()


if __name__ == "__main__":
    main()
