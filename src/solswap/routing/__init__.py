"""Swap routing through the Jupiter Ultra aggregator."""

from solswap.routing.base import ExecutionResult, SwapAggregator, SwapOrder, TokenBalance
from solswap.routing.jupiter import SOL_MINT, JupiterUltraClient, create_jupiter_client

__all__ = [
    "ExecutionResult",
    "JupiterUltraClient",
    "SOL_MINT",
    "SwapAggregator",
    "SwapOrder",
    "TokenBalance",
    "create_jupiter_client",
]
