"""Jupiter Ultra API integration for Solana swaps.

Ultra builds the swap transaction, lands it after it is signed and reports
wallet balances, so the bot never talks to a Solana RPC node directly.
API docs: https://dev.jup.ag/docs/ultra-api
"""

import logging
from decimal import Decimal
from typing import Any, Optional

import httpx

from solswap.errors import SlippageExceeded, VendorError, is_slippage_error
from solswap.routing.base import ExecutionResult, SwapAggregator, SwapOrder, TokenBalance

logger = logging.getLogger(__name__)

JUPITER_ULTRA_API = "https://lite-api.jup.ag/ultra/v1"

# Wrapped SOL mint, used as the input of every buy
SOL_MINT = "So11111111111111111111111111111111111111112"


class JupiterUltraClient(SwapAggregator):
    """Client for the Jupiter Ultra order/execute/balances endpoints."""

    def __init__(
        self,
        base_url: str = JUPITER_ULTRA_API,
        api_key: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Jupiter client.

        Args:
            base_url: Ultra API base URL
            api_key: Optional API key for higher rate limits
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests)
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    @property
    def name(self) -> str:
        return "Jupiter Ultra"

    def _get_headers(self) -> dict:
        """Get API headers."""
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["x-api-key"] = self.api_key
        return headers

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers=self._get_headers(),
            transport=self._transport,
        )

    @staticmethod
    def _error_detail(response: httpx.Response) -> tuple[Optional[str], Optional[int]]:
        """Extract the error text and code from an error response body."""
        try:
            data = response.json()
        except ValueError:
            return None, None
        if not isinstance(data, dict):
            return None, None
        detail = data.get("error") or data.get("errorMessage") or data.get("message")
        code = data.get("code") if isinstance(data.get("code"), int) else None
        return (str(detail) if detail else None), code

    def _raise_for_error(self, response: httpx.Response, operation: str) -> None:
        """Translate a failed HTTP response into the error taxonomy."""
        if response.is_success:
            return

        detail, code = self._error_detail(response)
        logger.warning(f"Jupiter {operation} error: {response.status_code} - {response.text}")

        if is_slippage_error(detail, code):
            raise SlippageExceeded(detail or "Slippage tolerance exceeded")
        if detail:
            raise VendorError(detail, status_code=response.status_code)
        response.raise_for_status()

    async def get_order(
        self,
        input_mint: str,
        output_mint: str,
        amount: int,
        taker: str,
    ) -> SwapOrder:
        """Request a swap order from Jupiter Ultra."""
        params = {
            "inputMint": input_mint,
            "outputMint": output_mint,
            "amount": str(amount),
            "taker": taker,
        }
        logger.debug(f"Requesting Jupiter order: {params}")

        async with self._client() as client:
            response = await client.get(f"{self.base_url}/order", params=params)
        self._raise_for_error(response, "order")

        data: dict[str, Any] = response.json()
        transaction = data.get("transaction")
        request_id = data.get("requestId")

        # Ultra answers 200 without a transaction when it cannot route the order
        if not transaction or not request_id:
            detail = data.get("errorMessage") or data.get("error") or "No transaction returned for order"
            raise VendorError(str(detail), status_code=response.status_code)

        order = SwapOrder(
            request_id=request_id,
            transaction=transaction,
            out_amount=int(data.get("outAmount") or 0),
            input_mint=data.get("inputMint", input_mint),
            output_mint=data.get("outputMint", output_mint),
            in_amount=int(data.get("inAmount") or amount),
            details={
                "router": data.get("router"),
                "price_impact_pct": data.get("priceImpactPct"),
                "slippage_bps": data.get("slippageBps"),
            },
        )
        logger.info(
            f"Jupiter order {order.request_id}: {order.in_amount} {input_mint} -> "
            f"{order.out_amount} {output_mint}"
        )
        return order

    async def execute_order(self, signed_transaction: str, request_id: str) -> ExecutionResult:
        """Submit a signed order to Jupiter Ultra."""
        async with self._client() as client:
            response = await client.post(
                f"{self.base_url}/execute",
                json={"signedTransaction": signed_transaction, "requestId": request_id},
            )
        self._raise_for_error(response, "execute")

        data: dict[str, Any] = response.json()
        status = data.get("status", "")
        signature = data.get("signature") or ""

        if status != "Success":
            detail = data.get("error") or f"Swap {status or 'failed'}"
            code = data.get("code") if isinstance(data.get("code"), int) else None
            logger.error(f"Jupiter execute failed for {request_id}: {detail} (code={code})")
            if is_slippage_error(str(detail), code):
                raise SlippageExceeded(str(detail))
            raise VendorError(str(detail), status_code=response.status_code)

        slot = data.get("slot")
        return ExecutionResult(
            signature=signature,
            status=status,
            slot=int(slot) if slot is not None else None,
        )

    async def get_balances(self, address: str) -> dict[str, TokenBalance]:
        """Get token balances for a wallet address."""
        async with self._client() as client:
            response = await client.get(f"{self.base_url}/balances/{address}")
        self._raise_for_error(response, "balances")

        data = response.json() or {}
        if "error" in data and isinstance(data["error"], str):
            raise VendorError(data["error"], status_code=response.status_code)

        balances = {}
        for token, entry in data.items():
            if not isinstance(entry, dict):
                continue
            balances[token] = TokenBalance(
                token=token,
                amount=str(entry.get("amount", "0")),
                ui_amount=Decimal(str(entry.get("uiAmount") or 0)),
            )
        return balances


def create_jupiter_client(
    base_url: str = JUPITER_ULTRA_API,
    api_key: Optional[str] = None,
    timeout: float = 30.0,
) -> JupiterUltraClient:
    """Create a Jupiter Ultra client instance."""
    return JupiterUltraClient(base_url=base_url, api_key=api_key, timeout=timeout)
