"""User -> wallet mapping storage."""

from solswap.storage.base import WalletStore
from solswap.storage.factory import create_wallet_store
from solswap.storage.json_file import JsonWalletStore
from solswap.storage.sql import SqlWalletStore

__all__ = ["JsonWalletStore", "SqlWalletStore", "WalletStore", "create_wallet_store"]
