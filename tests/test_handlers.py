"""Tests for the Telegram handlers."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.filters import CommandObject

from solswap.bot.handlers.start import cmd_help, cmd_start
from solswap.bot.handlers.swap import cmd_swap, handle_swap_button, handle_swap_reply, split_swap_args
from solswap.bot.handlers.wallet import cmd_balance, cmd_wallet

from conftest import USDC_MINT, USER_ID


@pytest.fixture
def message():
    msg = MagicMock()
    msg.from_user.id = USER_ID
    msg.text = ""
    msg.answer = AsyncMock()
    return msg


@pytest.fixture
def orchestrator():
    return AsyncMock()


class TestSplitSwapArgs:
    """Tests for /swap argument parsing."""

    def test_no_args(self):
        assert split_swap_args(None) == (None, None)
        assert split_swap_args("   ") == (None, None)

    def test_token_only(self):
        assert split_swap_args(USDC_MINT) == (USDC_MINT, None)

    def test_token_and_amount(self):
        assert split_swap_args(f"{USDC_MINT}  0.1") == (USDC_MINT, "0.1")

    def test_extra_words_stay_with_amount(self):
        # The amount parser rejects "0.1 now", so nothing is silently dropped
        assert split_swap_args(f"{USDC_MINT} 0.1 now") == (USDC_MINT, "0.1 now")


class TestHandlers:
    """Handlers delegate to the orchestrator with the sender's id."""

    @pytest.mark.asyncio
    async def test_start(self, message, state, orchestrator):
        await cmd_start(message, state, orchestrator)

        orchestrator.start.assert_awaited_once()
        user_id, passed_state, reply = orchestrator.start.await_args.args
        assert user_id == USER_ID
        assert passed_state is state

        # Replies carry the main menu keyboard
        await reply("hi")
        assert "reply_markup" in message.answer.await_args.kwargs

    @pytest.mark.asyncio
    async def test_help(self, message, state, orchestrator):
        await cmd_help(message, state, orchestrator)

        orchestrator.show_help.assert_awaited_once_with(state, message.answer)

    @pytest.mark.asyncio
    async def test_wallet(self, message, orchestrator):
        await cmd_wallet(message, orchestrator)

        orchestrator.show_wallet.assert_awaited_once_with(USER_ID, message.answer)

    @pytest.mark.asyncio
    async def test_balance(self, message, orchestrator):
        await cmd_balance(message, orchestrator)

        orchestrator.show_balance.assert_awaited_once_with(USER_ID, message.answer)

    @pytest.mark.asyncio
    async def test_swap_with_args(self, message, state, orchestrator):
        command = CommandObject(prefix="/", command="swap", args=f"{USDC_MINT} 0.1")

        await cmd_swap(message, command, state, orchestrator)

        orchestrator.begin_swap.assert_awaited_once_with(
            USER_ID, state, message.answer, USDC_MINT, "0.1"
        )

    @pytest.mark.asyncio
    async def test_buy_without_args(self, message, state, orchestrator):
        command = CommandObject(prefix="/", command="buy", args=None)

        await cmd_swap(message, command, state, orchestrator)

        orchestrator.begin_swap.assert_awaited_once_with(
            USER_ID, state, message.answer, None, None
        )

    @pytest.mark.asyncio
    async def test_swap_button(self, message, state, orchestrator):
        await handle_swap_button(message, state, orchestrator)

        orchestrator.begin_swap.assert_awaited_once_with(USER_ID, state, message.answer)

    @pytest.mark.asyncio
    async def test_swap_reply(self, message, state, orchestrator):
        message.text = USDC_MINT

        await handle_swap_reply(message, state, orchestrator)

        orchestrator.handle_text.assert_awaited_once_with(
            USER_ID, state, USDC_MINT, message.answer
        )

    @pytest.mark.asyncio
    async def test_ignores_messages_without_sender(self, message, state, orchestrator):
        message.from_user = None

        await cmd_wallet(message, orchestrator)
        await handle_swap_button(message, state, orchestrator)

        orchestrator.show_wallet.assert_not_awaited()
        orchestrator.begin_swap.assert_not_awaited()
