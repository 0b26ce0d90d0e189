"""Wallet and balance handlers."""

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message

from solswap.bot.keyboards import WALLET_BUTTON
from solswap.services.conversation import ConversationOrchestrator

router = Router()


@router.message(Command("wallet", "getwallet"))
@router.message(F.text == WALLET_BUTTON)
async def cmd_wallet(message: Message, orchestrator: ConversationOrchestrator) -> None:
    """Show wallet address and balances."""
    if not message.from_user:
        return
    await orchestrator.show_wallet(message.from_user.id, message.answer)


@router.message(Command("balance"))
async def cmd_balance(message: Message, orchestrator: ConversationOrchestrator) -> None:
    """Show token balances."""
    if not message.from_user:
        return
    await orchestrator.show_balance(message.from_user.id, message.answer)
