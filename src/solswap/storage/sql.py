"""SQL wallet store backed by SQLAlchemy."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from solswap.errors import StorageError
from solswap.storage.base import WalletStore
from solswap.storage.models import Base, UserWallet

logger = logging.getLogger(__name__)


class SqlWalletStore(WalletStore):
    """Wallet mappings kept in the ``user_wallets`` table.

    Database failures surface as ``StorageError``.
    """

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    async def initialize(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self.engine.dispose()

    async def get_all(self) -> dict[int, str]:
        try:
            async with self._session_factory() as session:
                result = await session.execute(select(UserWallet))
                return {row.telegram_id: row.wallet_id for row in result.scalars()}
        except SQLAlchemyError as e:
            logger.error(f"Error loading wallet mappings: {e}")
            raise StorageError(f"Cannot read wallet mappings: {e}")

    async def get(self, user_id: int) -> Optional[str]:
        try:
            async with self._session_factory() as session:
                row = await session.get(UserWallet, user_id)
                return row.wallet_id if row else None
        except SQLAlchemyError as e:
            logger.error(f"Error loading wallet mapping for user {user_id}: {e}")
            raise StorageError(f"Cannot read wallet mapping: {e}")

    async def save(self, user_id: int, wallet_id: str) -> None:
        async with self._session_factory() as session:
            try:
                row = await session.get(UserWallet, user_id)
                if row is None:
                    session.add(UserWallet(telegram_id=user_id, wallet_id=wallet_id))
                else:
                    row.wallet_id = wallet_id
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Error saving wallet mapping for user {user_id}: {e}")
                raise StorageError(f"Cannot save wallet mapping: {e}")
        logger.info(f"Saved wallet mapping for user {user_id}")
