"""Flat JSON file wallet store.

The file holds a single object: ``{"<telegram user id>": "<wallet id>"}``.
Every save reads the whole file and writes it back, which is fine for a store
that only grows by one entry per new user. File access runs in a worker
thread so a slow disk does not stall the event loop.
"""

import asyncio
import json
import logging
import os
from pathlib import Path
from typing import Union

from solswap.errors import StorageError
from solswap.storage.base import WalletStore

logger = logging.getLogger(__name__)


class JsonWalletStore(WalletStore):
    """Wallet mappings kept in a JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        # Serializes read-modify-write cycles
        self._write_lock = asyncio.Lock()

    async def initialize(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def _load(self) -> dict[int, str]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, ValueError) as e:
            logger.error(f"Error reading wallet mappings file {self.path}: {e}")
            raise StorageError(f"Cannot read wallet mappings: {e}")

        if not isinstance(data, dict):
            raise StorageError(f"Wallet mappings file {self.path} is not a JSON object")

        mappings = {}
        for key, wallet_id in data.items():
            try:
                user_id = int(key)
            except ValueError:
                raise StorageError(f"Invalid user id {key!r} in {self.path}")
            if not isinstance(wallet_id, str) or not wallet_id:
                raise StorageError(f"Invalid wallet id for user {key} in {self.path}")
            mappings[user_id] = wallet_id
        return mappings

    def _write(self, mappings: dict[int, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        payload = {str(user_id): wallet_id for user_id, wallet_id in mappings.items()}
        try:
            tmp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            logger.error(f"Error saving wallet mappings to {self.path}: {e}")
            raise StorageError(f"Cannot save wallet mappings: {e}")

    def _save(self, user_id: int, wallet_id: str) -> None:
        mappings = self._load()
        mappings[user_id] = wallet_id
        self._write(mappings)

    async def get_all(self) -> dict[int, str]:
        return await asyncio.to_thread(self._load)

    async def save(self, user_id: int, wallet_id: str) -> None:
        async with self._write_lock:
            await asyncio.to_thread(self._save, user_id, wallet_id)
        logger.info(f"Saved wallet mapping for user {user_id}")
