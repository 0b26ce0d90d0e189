"""Abstract wallet mapping store."""

from abc import ABC, abstractmethod
from typing import Optional


class WalletStore(ABC):
    """Maps Telegram user ids to custody wallet ids.

    A mapping is written once, when the user's wallet is created, and read on
    every command afterwards.
    """

    async def initialize(self) -> None:
        """Prepare the backing store (create tables, directories)."""

    async def close(self) -> None:
        """Release resources held by the store."""

    @abstractmethod
    async def get_all(self) -> dict[int, str]:
        """Return every user id -> wallet id mapping."""
        pass

    @abstractmethod
    async def save(self, user_id: int, wallet_id: str) -> None:
        """Insert or replace the mapping for a user."""
        pass

    async def get(self, user_id: int) -> Optional[str]:
        """Return the wallet id for a user, if any."""
        mappings = await self.get_all()
        return mappings.get(user_id)
