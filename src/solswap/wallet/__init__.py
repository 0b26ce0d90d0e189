"""Custodial wallet management through the Privy wallet API."""

from solswap.wallet.base import Wallet, WalletProvider
from solswap.wallet.privy import PrivyWalletClient, create_privy_client

__all__ = ["PrivyWalletClient", "Wallet", "WalletProvider", "create_privy_client"]
