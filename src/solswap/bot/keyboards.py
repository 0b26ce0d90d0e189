"""Telegram keyboard builders."""

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup

WALLET_BUTTON = "💰 Wallet"
SWAP_BUTTON = "💱 Swap"
HELP_BUTTON = "❓ Help"


def main_menu_keyboard() -> ReplyKeyboardMarkup:
    """Create main menu keyboard."""
    keyboard = [
        [KeyboardButton(text=WALLET_BUTTON), KeyboardButton(text=SWAP_BUTTON)],
        [KeyboardButton(text=HELP_BUTTON)],
    ]
    return ReplyKeyboardMarkup(keyboard=keyboard, resize_keyboard=True)
