"""Per-user locking for conversation handlers.

Telegram delivers updates concurrently, so two messages from the same user
can reach the swap flow at the same time. Handlers that read and then write a
user's conversation state (or create their wallet) hold that user's lock for
the whole operation.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

logger = logging.getLogger(__name__)

# telegram user id -> asyncio.Lock
_user_locks: dict[int, asyncio.Lock] = {}
_registry_lock = asyncio.Lock()


class LockTimeoutError(Exception):
    """Raised when a user's lock cannot be acquired within the timeout."""


async def get_user_lock(user_id: int) -> asyncio.Lock:
    """Get or create the lock for a Telegram user."""
    async with _registry_lock:
        lock = _user_locks.get(user_id)
        if lock is None:
            lock = _user_locks[user_id] = asyncio.Lock()
        return lock


@asynccontextmanager
async def user_lock(
    user_id: int,
    timeout: Optional[float] = 30.0,
    operation: str = "request",
) -> AsyncIterator[None]:
    """Hold the user's lock for the duration of the block.

    Args:
        user_id: Telegram user ID
        timeout: Seconds to wait for the lock (None = wait forever)
        operation: Description for logging

    Raises:
        LockTimeoutError: if another operation holds the lock for too long
    """
    lock = await get_user_lock(user_id)

    try:
        if timeout:
            await asyncio.wait_for(lock.acquire(), timeout=timeout)
        else:
            await lock.acquire()
    except asyncio.TimeoutError:
        logger.warning(f"Lock timeout for user {user_id} after {timeout}s: {operation}")
        raise LockTimeoutError(
            f"Could not acquire lock for user {user_id} within {timeout}s"
        )

    logger.debug(f"Lock acquired for user {user_id}: {operation}")
    try:
        yield
    finally:
        lock.release()
        logger.debug(f"Lock released for user {user_id}: {operation}")


def clear_user_locks() -> None:
    """Forget all user locks (used by tests)."""
    _user_locks.clear()
