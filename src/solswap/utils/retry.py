"""Fixed-delay retry for external calls."""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

import httpx

from solswap.errors import VendorError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_ATTEMPTS = 3
DEFAULT_DELAY = 1.0

# Network failures and vendor error payloads are worth another try.
# Validation and slippage errors are not.
TRANSIENT_ERRORS: tuple[type[BaseException], ...] = (httpx.HTTPError, VendorError)


async def retry_async(
    func: Callable[..., Awaitable[T]],
    *args,
    attempts: int = DEFAULT_ATTEMPTS,
    delay: float = DEFAULT_DELAY,
    retry_on: tuple[type[BaseException], ...] = TRANSIENT_ERRORS,
    operation: str = "call",
    **kwargs,
) -> T:
    """Await ``func(*args, **kwargs)``, retrying transient failures.

    Makes at most ``attempts`` calls with a fixed ``delay`` between them (no
    backoff, no jitter). The exception from the final attempt is re-raised
    unchanged; exceptions outside ``retry_on`` propagate immediately.
    """
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    attempt = 1
    while True:
        try:
            return await func(*args, **kwargs)
        except retry_on as e:
            if attempt >= attempts:
                logger.error(f"{operation} failed after {attempts} attempts: {e}")
                raise
            logger.warning(
                f"{operation} failed (attempt {attempt}/{attempts}): {e}. "
                f"Retrying in {delay}s"
            )
            await asyncio.sleep(delay)
            attempt += 1
