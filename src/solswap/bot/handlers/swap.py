"""Swap handlers.

``/swap <token> <amount>`` swaps in one message. ``/swap`` alone (or with just
a token) asks for the missing values in the following messages. ``/buy`` is
an alias.
"""

from typing import Optional

from aiogram import F, Router
from aiogram.filters import Command, CommandObject, StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from solswap.bot.keyboards import SWAP_BUTTON
from solswap.services.conversation import ConversationOrchestrator, SwapStates

router = Router()


def split_swap_args(args: Optional[str]) -> tuple[Optional[str], Optional[str]]:
    """Split command arguments into (token, amount)."""
    parts = (args or "").split(maxsplit=1)
    token = parts[0] if parts else None
    amount = parts[1] if len(parts) > 1 else None
    return token, amount


@router.message(Command("swap", "buy"))
async def cmd_swap(
    message: Message,
    command: CommandObject,
    state: FSMContext,
    orchestrator: ConversationOrchestrator,
) -> None:
    """Start a swap, in one message or as a conversation."""
    if not message.from_user:
        return

    token, amount = split_swap_args(command.args)
    await orchestrator.begin_swap(message.from_user.id, state, message.answer, token, amount)


@router.message(F.text == SWAP_BUTTON)
async def handle_swap_button(
    message: Message, state: FSMContext, orchestrator: ConversationOrchestrator
) -> None:
    """Start the swap conversation from the menu."""
    if not message.from_user:
        return
    await orchestrator.begin_swap(message.from_user.id, state, message.answer)


@router.message(
    StateFilter(SwapStates.awaiting_token_address, SwapStates.awaiting_amount),
    F.text,
    ~F.text.startswith("/"),
)
async def handle_swap_reply(
    message: Message, state: FSMContext, orchestrator: ConversationOrchestrator
) -> None:
    """Handle the token address or amount typed during a swap conversation."""
    if not message.from_user or not message.text:
        return
    await orchestrator.handle_text(message.from_user.id, state, message.text, message.answer)
