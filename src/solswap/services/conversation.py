"""Conversation flow for wallet and swap commands.

The orchestrator owns the per-user swap state machine::

    Idle -> awaiting_token_address -> awaiting_amount -> Idle

and drives a swap through the collaborators in a fixed order: validate the
token, validate the amount, check the SOL balance, request an order, sign it
once, execute it, report. Conversation state lives in aiogram FSM storage and
every state-changing operation holds the user's lock, so two messages from the
same user never interleave.

Handlers pass a ``reply`` coroutine (usually ``message.answer``); the
orchestrator never lets an exception escape to the dispatcher.
"""

import logging
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Optional

from aiogram.fsm.context import FSMContext
from aiogram.fsm.state import State, StatesGroup
from solders.pubkey import Pubkey

from solswap.config import Settings, get_settings
from solswap.errors import (
    InsufficientBalance,
    InvalidAmount,
    InvalidTokenAddress,
    SlippageExceeded,
    StorageError,
    VendorError,
)
from solswap.routing.base import SwapAggregator
from solswap.routing.jupiter import SOL_MINT, create_jupiter_client
from solswap.services import messages
from solswap.services.balances import format_balances
from solswap.storage.base import WalletStore
from solswap.storage.factory import create_wallet_store
from solswap.utils.locks import LockTimeoutError, user_lock
from solswap.utils.retry import retry_async
from solswap.wallet.base import WalletProvider
from solswap.wallet.privy import create_privy_client

logger = logging.getLogger(__name__)

Reply = Callable[[str], Awaitable[Any]]

LAMPORTS_PER_SOL = 10**9
# Token amounts are u64 on chain
MAX_LAMPORTS = 2**64 - 1
NATIVE_TOKEN = "SOL"


class SwapStates(StatesGroup):
    """FSM states for the multi-message swap flow."""

    awaiting_token_address = State()
    awaiting_amount = State()


def parse_token_address(raw: Optional[str]) -> str:
    """Return the address if it is a well-formed Solana public key.

    Only the structure is checked; the mint may not exist on chain.
    """
    text = (raw or "").strip()
    try:
        Pubkey.from_string(text)
    except ValueError:
        raise InvalidTokenAddress(text)
    return text


def to_lamports(amount: Decimal) -> int:
    """Convert SOL to lamports, truncating fractions of a lamport."""
    return int((amount * LAMPORTS_PER_SOL).to_integral_value(rounding=ROUND_FLOOR))


def parse_amount(raw: Optional[str]) -> Decimal:
    """Parse a SOL amount that must be finite, positive and at least one lamport."""
    text = (raw or "").strip()
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise InvalidAmount(text, "not a number")

    if not amount.is_finite() or amount <= 0:
        raise InvalidAmount(text)

    try:
        lamports = to_lamports(amount)
    except ArithmeticError:
        raise InvalidAmount(text, "too large")
    if lamports == 0:
        raise InvalidAmount(text, "smaller than one lamport")
    if lamports > MAX_LAMPORTS:
        raise InvalidAmount(text, "too large")
    return amount


class ConversationOrchestrator:
    """Runs bot commands against the wallet, aggregator and store."""

    def __init__(
        self,
        wallets: WalletProvider,
        aggregator: SwapAggregator,
        store: WalletStore,
        explorer_tx_url: str = "https://solscan.io/tx/",
        retry_attempts: int = 3,
        retry_delay: float = 1.0,
        lock_timeout: Optional[float] = 120.0,
    ):
        self.wallets = wallets
        self.aggregator = aggregator
        self.store = store
        self.explorer_tx_url = explorer_tx_url
        self.retry_attempts = retry_attempts
        self.retry_delay = retry_delay
        self.lock_timeout = lock_timeout

    # ------------------------------------------------------------------
    # Wallet commands
    # ------------------------------------------------------------------

    async def start(self, user_id: int, state: FSMContext, reply: Reply) -> None:
        """Create the user's wallet on first use and show its address."""
        logger.info(f"Processing /start for user {user_id}")

        try:
            async with user_lock(user_id, timeout=self.lock_timeout, operation="start"):
                await state.clear()
                address = await self._ensure_wallet(user_id, reply)
        except LockTimeoutError:
            await reply(messages.REQUEST_IN_PROGRESS)
            return

        if address:
            await reply(messages.welcome(address))

    async def _ensure_wallet(self, user_id: int, reply: Reply) -> Optional[str]:
        """Return the user's wallet address, creating the wallet if needed."""
        try:
            wallet_id = await self.store.get(user_id)
        except StorageError as e:
            logger.error(f"Cannot load wallet mapping for user {user_id}: {e}")
            await reply(messages.WALLET_ACCESS_FAILED)
            return None

        if wallet_id is None:
            logger.info(f"User {user_id} does not have a wallet. Creating new wallet.")
            try:
                wallet = await self.wallets.create_wallet(chain_type="solana")
                await self.store.save(user_id, wallet.wallet_id)
            except Exception:
                logger.exception(f"Error creating wallet for user {user_id}")
                await reply(messages.WALLET_CREATE_FAILED)
                return None
            logger.info(f"Created wallet for user {user_id}: {wallet.address}")
            return wallet.address

        logger.info(f"User {user_id} already has a wallet. Using existing wallet.")
        try:
            wallet = await self.wallets.get_wallet(wallet_id)
        except Exception:
            logger.exception(f"Error fetching wallet for user {user_id}")
            await reply(messages.WALLET_ACCESS_FAILED)
            return None
        return wallet.address

    async def show_help(self, state: FSMContext, reply: Reply) -> None:
        await state.clear()
        await reply(messages.HELP)

    async def show_wallet(self, user_id: int, reply: Reply, include_address: bool = True) -> None:
        """Show the wallet address (optionally) and non-zero balances."""
        logger.info(f"Processing wallet overview for user {user_id}")

        wallet_id = await self._lookup_wallet_id(user_id, reply, missing_text=messages.NO_WALLET)
        if wallet_id is None:
            return

        try:
            wallet = await self.wallets.get_wallet(wallet_id)
        except Exception:
            logger.exception(f"Error fetching wallet for user {user_id}")
            await reply(messages.WALLET_ACCESS_FAILED)
            return

        try:
            balances = await self.aggregator.get_balances(wallet.address)
        except Exception:
            logger.exception(f"Error fetching balances for {wallet.address}")
            await reply(messages.BALANCE_FAILED)
            return

        text = format_balances(balances)
        if include_address:
            text = messages.wallet_overview(wallet.address, text)
        await reply(text)

    async def show_balance(self, user_id: int, reply: Reply) -> None:
        await self.show_wallet(user_id, reply, include_address=False)

    async def _lookup_wallet_id(
        self,
        user_id: int,
        reply: Reply,
        missing_text: str = messages.START_FIRST,
    ) -> Optional[str]:
        """Return the stored wallet id, replying when there is none."""
        try:
            wallet_id = await self.store.get(user_id)
        except StorageError as e:
            logger.error(f"Cannot load wallet mapping for user {user_id}: {e}")
            await reply(messages.WALLET_ACCESS_FAILED)
            return None

        if wallet_id is None:
            await reply(missing_text)
        return wallet_id

    # ------------------------------------------------------------------
    # Swap flow
    # ------------------------------------------------------------------

    async def begin_swap(
        self,
        user_id: int,
        state: FSMContext,
        reply: Reply,
        token: Optional[str] = None,
        amount: Optional[str] = None,
    ) -> None:
        """Handle ``/swap [token] [amount]``.

        Any unfinished swap conversation is discarded first. Missing arguments
        are collected from the following messages.
        """
        logger.info(f"Processing /swap for user {user_id}: token={token} amount={amount}")

        try:
            async with user_lock(user_id, timeout=self.lock_timeout, operation="swap"):
                await state.clear()

                wallet_id = await self._lookup_wallet_id(user_id, reply)
                if wallet_id is None:
                    return

                if token is None:
                    await state.set_state(SwapStates.awaiting_token_address)
                    await reply(messages.SWAP_PROMPT)
                    return

                try:
                    token_mint = parse_token_address(token)
                except InvalidTokenAddress:
                    await reply(messages.INVALID_TOKEN)
                    return

                if amount is None:
                    await state.set_state(SwapStates.awaiting_amount)
                    await state.update_data(token_mint=token_mint)
                    await reply(messages.AMOUNT_PROMPT)
                    return

                await self._run_swap(user_id, wallet_id, token_mint, amount, reply)
        except LockTimeoutError:
            await reply(messages.REQUEST_IN_PROGRESS)

    async def handle_text(self, user_id: int, state: FSMContext, text: str, reply: Reply) -> None:
        """Interpret a free-text message inside an active swap conversation."""
        try:
            async with user_lock(user_id, timeout=self.lock_timeout, operation="swap reply"):
                # Re-read under the lock: an earlier message may have finished the flow
                current = await state.get_state()

                if current == SwapStates.awaiting_token_address.state:
                    try:
                        token_mint = parse_token_address(text)
                    except InvalidTokenAddress:
                        await reply(messages.INVALID_TOKEN)
                        return
                    await state.set_state(SwapStates.awaiting_amount)
                    await state.update_data(token_mint=token_mint)
                    await reply(messages.AMOUNT_PROMPT)

                elif current == SwapStates.awaiting_amount.state:
                    data = await state.get_data()
                    try:
                        wallet_id = await self._lookup_wallet_id(user_id, reply)
                        if wallet_id is not None:
                            await self._run_swap(
                                user_id, wallet_id, data["token_mint"], text, reply
                            )
                    finally:
                        await state.clear()

                else:
                    logger.debug(f"Ignoring text from user {user_id} outside a swap flow")
        except LockTimeoutError:
            await reply(messages.REQUEST_IN_PROGRESS)

    async def _run_swap(
        self,
        user_id: int,
        wallet_id: str,
        token_mint: str,
        raw_amount: str,
        reply: Reply,
    ) -> None:
        """Validate the amount, execute the swap and report the outcome."""
        try:
            amount = parse_amount(raw_amount)
            await self._swap(user_id, wallet_id, token_mint, amount, reply)
        except InvalidAmount:
            await reply(messages.INVALID_AMOUNT)
        except InsufficientBalance as e:
            await reply(messages.insufficient_balance(e.balance, e.required))
        except SlippageExceeded as e:
            logger.warning(f"Swap for user {user_id} failed on slippage: {e}")
            await reply(messages.SLIPPAGE_FAILED)
        except VendorError as e:
            logger.error(f"Swap for user {user_id} failed: {e.detail}")
            await reply(messages.vendor_error(e.detail))
        except Exception:
            logger.exception(f"Error in swap flow for user {user_id}")
            await reply(messages.SWAP_FAILED)

    async def _swap(
        self,
        user_id: int,
        wallet_id: str,
        token_mint: str,
        amount: Decimal,
        reply: Reply,
    ) -> None:
        wallet = await self.wallets.get_wallet(wallet_id)

        balances = await self.aggregator.get_balances(wallet.address)
        native = balances.get(NATIVE_TOKEN)
        sol_balance = native.ui_amount if native else Decimal("0")
        if sol_balance < amount:
            raise InsufficientBalance(sol_balance, amount)

        lamports = to_lamports(amount)
        logger.info(f"Creating swap order for user {user_id}: {amount} SOL -> {token_mint}")
        order = await retry_async(
            self.aggregator.get_order,
            SOL_MINT,
            token_mint,
            lamports,
            wallet.address,
            attempts=self.retry_attempts,
            delay=self.retry_delay,
            operation="Jupiter order",
        )

        # One signature per order; a failed signing is never retried with this order
        signed_transaction = await self.wallets.sign_transaction(wallet_id, order.transaction)
        await reply(messages.TRANSACTION_SIGNED)

        result = await retry_async(
            self.aggregator.execute_order,
            signed_transaction,
            order.request_id,
            attempts=self.retry_attempts,
            delay=self.retry_delay,
            operation="Jupiter execute",
        )
        logger.info(f"Swap successful for user {user_id}! Transaction: {result.signature}")

        quoted_out = Decimal(order.out_amount) / LAMPORTS_PER_SOL
        await reply(
            messages.swap_success(
                f"{self.explorer_tx_url}{result.signature}", amount, quoted_out
            )
        )


def create_orchestrator(settings: Optional[Settings] = None) -> ConversationOrchestrator:
    """Wire the orchestrator with the configured Privy, Jupiter and store."""
    settings = settings or get_settings()

    wallets = create_privy_client(
        app_id=settings.privy_app_id,
        app_secret=settings.privy_app_secret,
        authorization_private_key=settings.privy_authorization_private_key,
        base_url=settings.privy_api_url,
        timeout=settings.http_timeout,
    )
    aggregator = create_jupiter_client(
        base_url=settings.jupiter_api_url,
        api_key=settings.jupiter_api_key,
        timeout=settings.http_timeout,
    )

    return ConversationOrchestrator(
        wallets=wallets,
        aggregator=aggregator,
        store=create_wallet_store(settings),
        explorer_tx_url=settings.explorer_tx_url,
        retry_attempts=settings.retry_attempts,
        retry_delay=settings.retry_delay,
        lock_timeout=settings.user_lock_timeout,
    )
