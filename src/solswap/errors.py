"""Error taxonomy shared by the vendor clients and the conversation flow.

Clients classify vendor failures at the boundary so the orchestrator can map
each category to a user-facing message without inspecting error text.
"""

from decimal import Decimal
from typing import Optional

# Jupiter / Solana program error for "slippage tolerance exceeded" (0x1771)
SLIPPAGE_ERROR_CODE = 6001
SLIPPAGE_ERROR_HEX = "0x1771"


class SolswapError(Exception):
    """Base class for all application errors."""


class ValidationError(SolswapError):
    """User input failed validation. Never retried."""


class InvalidTokenAddress(ValidationError):
    """Token address is not a well-formed Solana public key."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Invalid token address: {address!r}")


class InvalidAmount(ValidationError):
    """Amount is not a finite positive number."""

    def __init__(self, raw: str, reason: str = "must be a positive number"):
        self.raw = raw
        super().__init__(f"Invalid amount {raw!r}: {reason}")


class InsufficientBalance(SolswapError):
    """Native balance is lower than the requested swap amount."""

    def __init__(self, balance: Decimal, required: Decimal):
        self.balance = balance
        self.required = required
        super().__init__(f"Insufficient balance: have {balance}, need {required}")


class SlippageExceeded(SolswapError):
    """Swap failed because the price moved beyond the allowed slippage."""


class VendorError(SolswapError):
    """A vendor API returned a structured error payload."""

    def __init__(self, detail: str, status_code: Optional[int] = None):
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


class WalletError(VendorError):
    """The wallet custody API failed."""


class StorageError(SolswapError):
    """The wallet mapping store could not be read or written."""


def is_slippage_error(text: Optional[str], code: Optional[int] = None) -> bool:
    """Check whether a vendor error describes a slippage failure."""
    if code == SLIPPAGE_ERROR_CODE:
        return True
    return bool(text) and SLIPPAGE_ERROR_HEX in text.lower()
