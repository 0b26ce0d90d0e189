"""Wallet store factory."""

from typing import Optional

from solswap.config import Settings, get_settings
from solswap.storage.base import WalletStore
from solswap.storage.database import create_engine
from solswap.storage.json_file import JsonWalletStore
from solswap.storage.sql import SqlWalletStore


def create_wallet_store(settings: Optional[Settings] = None) -> WalletStore:
    """Create the wallet store selected by ``WALLET_STORE``."""
    settings = settings or get_settings()
    backend = settings.wallet_store.lower()

    if backend == "json":
        return JsonWalletStore(settings.wallet_mapping_path)
    if backend in ("database", "sql"):
        return SqlWalletStore(create_engine(settings))
    raise ValueError(f"Unknown wallet store backend: {settings.wallet_store}")
