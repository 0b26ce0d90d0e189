"""Application services."""

from solswap.services.balances import format_balances
from solswap.services.conversation import (
    ConversationOrchestrator,
    SwapStates,
    create_orchestrator,
    parse_amount,
    parse_token_address,
    to_lamports,
)

__all__ = [
    "ConversationOrchestrator",
    "SwapStates",
    "create_orchestrator",
    "format_balances",
    "parse_amount",
    "parse_token_address",
    "to_lamports",
]
