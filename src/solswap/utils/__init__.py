"""Utility modules for Solswap."""

from solswap.utils.locks import LockTimeoutError, get_user_lock, user_lock
from solswap.utils.retry import retry_async

__all__ = ["LockTimeoutError", "get_user_lock", "retry_async", "user_lock"]
