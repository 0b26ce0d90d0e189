"""Abstract interface for wallet custody providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class Wallet:
    """A custodial wallet held by the provider."""

    wallet_id: str
    address: str
    chain_type: str = "solana"


class WalletProvider(ABC):
    """Abstract base class for custody providers.

    Keys never leave the provider: the bot only sees wallet ids, addresses
    and signed transactions.
    """

    @abstractmethod
    async def create_wallet(self, chain_type: str = "solana") -> Wallet:
        """Create a new custodial wallet."""
        pass

    @abstractmethod
    async def get_wallet(self, wallet_id: str) -> Wallet:
        """Look up an existing wallet."""
        pass

    @abstractmethod
    async def sign_transaction(self, wallet_id: str, transaction: str) -> str:
        """
        Sign a transaction with the wallet's key.

        Args:
            wallet_id: Provider wallet id
            transaction: Base64 serialized unsigned transaction

        Returns:
            Base64 serialized signed transaction
        """
        pass
