"""Pytest configuration and fixtures."""

import os
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["TELEGRAM_BOT_TOKEN"] = ""
os.environ["PRIVY_APP_ID"] = ""
os.environ["PRIVY_APP_SECRET"] = ""
os.environ["WALLET_STORE"] = "json"

from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

from solswap.routing.base import ExecutionResult, SwapOrder, TokenBalance
from solswap.services.conversation import ConversationOrchestrator
from solswap.storage.json_file import JsonWalletStore
from solswap.utils.locks import clear_user_locks
from solswap.wallet.base import Wallet

USER_ID = 42
WALLET_ID = "cm4wallet42"
WALLET_ADDRESS = "8Bxt4uyHCkqVVfBj2Ai54tBEy3WSdWQSRv5C3XqaXnfJ"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def sol_balance(amount: str) -> dict[str, TokenBalance]:
    """Balances response holding only SOL."""
    ui_amount = Decimal(amount)
    raw = str(int(ui_amount * 10**9))
    return {"SOL": TokenBalance(token="SOL", amount=raw, ui_amount=ui_amount)}


def replies(reply: AsyncMock) -> list[str]:
    """Texts passed to a reply mock, in order."""
    return [call.args[0] for call in reply.call_args_list]


@pytest.fixture(autouse=True)
def reset_locks():
    """Each test starts with a fresh lock registry."""
    clear_user_locks()
    yield
    clear_user_locks()


@pytest.fixture
def wallets() -> AsyncMock:
    """Wallet custody provider mock."""
    provider = AsyncMock()
    provider.create_wallet.return_value = Wallet(wallet_id=WALLET_ID, address=WALLET_ADDRESS)
    provider.get_wallet.return_value = Wallet(wallet_id=WALLET_ID, address=WALLET_ADDRESS)
    provider.sign_transaction.return_value = "c2lnbmVkLXR4"
    return provider


@pytest.fixture
def order() -> SwapOrder:
    return SwapOrder(
        request_id="req-1",
        transaction="dW5zaWduZWQtdHg=",
        out_amount=14_250_000,
        input_mint="So11111111111111111111111111111111111111112",
        output_mint=USDC_MINT,
        in_amount=100_000_000,
    )


@pytest.fixture
def aggregator(order: SwapOrder) -> AsyncMock:
    """Swap aggregator mock with 2 SOL in the wallet."""
    client = AsyncMock()
    client.get_balances.return_value = sol_balance("2")
    client.get_order.return_value = order
    client.execute_order.return_value = ExecutionResult(signature="5xSigNaTuRe")
    return client


@pytest.fixture
def store(tmp_path) -> JsonWalletStore:
    return JsonWalletStore(tmp_path / "wallet-mappings.json")


@pytest.fixture
async def registered_store(store: JsonWalletStore) -> JsonWalletStore:
    """Store where USER_ID already owns a wallet."""
    await store.save(USER_ID, WALLET_ID)
    return store


@pytest.fixture
def state() -> FSMContext:
    """Conversation state for USER_ID in a private chat."""
    return FSMContext(
        storage=MemoryStorage(),
        key=StorageKey(bot_id=1, chat_id=USER_ID, user_id=USER_ID),
    )


@pytest.fixture
def reply() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def orchestrator(wallets, aggregator, store) -> ConversationOrchestrator:
    return ConversationOrchestrator(
        wallets=wallets,
        aggregator=aggregator,
        store=store,
        retry_attempts=3,
        retry_delay=0,
        lock_timeout=5.0,
    )
