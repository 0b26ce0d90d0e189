"""Abstract interface for swap aggregators."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional


@dataclass
class SwapOrder:
    """A priced order returned by the aggregator.

    The unsigned transaction embeds the quote, so an order is signed at most
    once and never reused after a failed signing attempt.
    """

    request_id: str
    transaction: str  # base64, unsigned
    out_amount: int  # quoted output in the output token's smallest unit
    input_mint: str
    output_mint: str
    in_amount: int
    details: dict = field(default_factory=dict)


@dataclass
class ExecutionResult:
    """Settlement result of a submitted order."""

    signature: str
    status: str = "Success"
    slot: Optional[int] = None


@dataclass
class TokenBalance:
    """Balance of one token held by an address."""

    token: str  # "SOL" or mint address
    amount: str  # raw amount in smallest units
    ui_amount: Decimal

    @property
    def is_zero(self) -> bool:
        return self.amount.strip() in ("", "0")


class SwapAggregator(ABC):
    """Abstract base class for swap aggregator clients."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Aggregator name identifier."""
        pass

    @abstractmethod
    async def get_order(
        self,
        input_mint: str,
        output_mint: str,
        amount: int,
        taker: str,
    ) -> SwapOrder:
        """
        Request a priced order.

        Args:
            input_mint: Mint of the token being sold
            output_mint: Mint of the token being bought
            amount: Input amount in smallest units
            taker: Wallet address that will sign the transaction

        Returns:
            SwapOrder with an unsigned transaction
        """
        pass

    @abstractmethod
    async def execute_order(self, signed_transaction: str, request_id: str) -> ExecutionResult:
        """
        Submit a signed order for settlement.

        Args:
            signed_transaction: Base64 signed transaction
            request_id: Correlation id of the order

        Returns:
            ExecutionResult with the transaction signature
        """
        pass

    @abstractmethod
    async def get_balances(self, address: str) -> dict[str, TokenBalance]:
        """Get all token balances for an address, keyed by symbol or mint."""
        pass
