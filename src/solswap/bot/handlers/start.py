"""Start and help command handlers."""

from functools import partial

from aiogram import F, Router
from aiogram.filters import Command, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from solswap.bot.keyboards import HELP_BUTTON, main_menu_keyboard
from solswap.services.conversation import ConversationOrchestrator

router = Router()


@router.message(CommandStart())
async def cmd_start(
    message: Message, state: FSMContext, orchestrator: ConversationOrchestrator
) -> None:
    """Handle /start command - create or load the user's wallet."""
    if not message.from_user:
        return

    reply = partial(message.answer, reply_markup=main_menu_keyboard())
    await orchestrator.start(message.from_user.id, state, reply)


@router.message(Command("help"))
@router.message(F.text == HELP_BUTTON)
async def cmd_help(
    message: Message, state: FSMContext, orchestrator: ConversationOrchestrator
) -> None:
    """Handle /help command."""
    await orchestrator.show_help(state, message.answer)
