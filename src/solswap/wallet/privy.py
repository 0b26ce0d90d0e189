"""Privy server wallet API integration.

API docs: https://docs.privy.io/api-reference/wallets

Requests authenticate with HTTP basic auth (app id / app secret). Wallet RPC
calls additionally carry a ``privy-authorization-signature`` header when an
authorization key is configured: an ECDSA P-256 signature over the canonical
JSON of the request.
"""

import base64
import json
import logging
from typing import Any, Optional

import httpx
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

from solswap.errors import WalletError
from solswap.wallet.base import Wallet, WalletProvider

logger = logging.getLogger(__name__)

PRIVY_API_URL = "https://api.privy.io/v1"
AUTHORIZATION_KEY_PREFIX = "wallet-auth:"


def canonicalize(payload: Any) -> str:
    """Serialize JSON with sorted keys and no whitespace."""
    return json.dumps(payload, sort_keys=True, separators=(",", ":"))


def load_authorization_key(private_key: str) -> ec.EllipticCurvePrivateKey:
    """Load a Privy authorization key (``wallet-auth:<base64 PKCS8 DER>``)."""
    raw = private_key.strip()
    if raw.startswith(AUTHORIZATION_KEY_PREFIX):
        raw = raw[len(AUTHORIZATION_KEY_PREFIX):]

    try:
        key = serialization.load_der_private_key(base64.b64decode(raw), password=None)
    except ValueError as e:
        raise WalletError(f"Invalid Privy authorization key: {e}")

    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise WalletError("Privy authorization key must be an EC P-256 key")
    return key


def build_authorization_signature(
    private_key: ec.EllipticCurvePrivateKey,
    app_id: str,
    url: str,
    body: dict,
    method: str = "POST",
) -> str:
    """Sign a wallet API request with the app's authorization key."""
    payload = {
        "version": 1,
        "method": method,
        "url": url,
        "body": body,
        "headers": {"privy-app-id": app_id},
    }
    signature = private_key.sign(canonicalize(payload).encode(), ec.ECDSA(hashes.SHA256()))
    return base64.b64encode(signature).decode()


class PrivyWalletClient(WalletProvider):
    """Privy REST client for server-side Solana wallets."""

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        authorization_private_key: Optional[str] = None,
        base_url: str = PRIVY_API_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Privy client.

        Args:
            app_id: Privy application ID
            app_secret: Privy application secret
            authorization_private_key: Optional wallet-auth key for RPC signing
            base_url: API base URL
            timeout: Request timeout in seconds
            transport: Custom httpx transport (tests)
        """
        self.app_id = app_id
        self.app_secret = app_secret
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._authorization_key = (
            load_authorization_key(authorization_private_key)
            if authorization_private_key
            else None
        )

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.timeout,
            auth=(self.app_id, self.app_secret),
            headers={"privy-app-id": self.app_id, "Content-Type": "application/json"},
            transport=self._transport,
        )

    @staticmethod
    def _raise_for_error(response: httpx.Response, operation: str) -> None:
        if response.is_success:
            return

        logger.warning(f"Privy {operation} error: {response.status_code} - {response.text}")
        detail = None
        try:
            data = response.json()
            if isinstance(data, dict):
                detail = data.get("error") or data.get("message")
        except ValueError:
            pass
        raise WalletError(
            str(detail) if detail else f"Privy {operation} failed with HTTP {response.status_code}",
            status_code=response.status_code,
        )

    @staticmethod
    def _parse_wallet(data: dict) -> Wallet:
        wallet_id = data.get("id")
        address = data.get("address")
        if not wallet_id or not address:
            raise WalletError("Privy returned a wallet without id or address")
        return Wallet(
            wallet_id=wallet_id,
            address=address,
            chain_type=data.get("chain_type", "solana"),
        )

    async def create_wallet(self, chain_type: str = "solana") -> Wallet:
        """Create a new app-owned wallet."""
        async with self._client() as client:
            response = await client.post(
                f"{self.base_url}/wallets",
                json={"chain_type": chain_type},
            )
        self._raise_for_error(response, "create wallet")

        wallet = self._parse_wallet(response.json())
        logger.info(f"Created Privy {wallet.chain_type} wallet {wallet.wallet_id}: {wallet.address}")
        return wallet

    async def get_wallet(self, wallet_id: str) -> Wallet:
        """Fetch a wallet by id."""
        async with self._client() as client:
            response = await client.get(f"{self.base_url}/wallets/{wallet_id}")
        self._raise_for_error(response, "get wallet")
        return self._parse_wallet(response.json())

    async def sign_transaction(self, wallet_id: str, transaction: str) -> str:
        """Sign a base64 Solana transaction through the wallet RPC endpoint."""
        url = f"{self.base_url}/wallets/{wallet_id}/rpc"
        body = {
            "method": "signTransaction",
            "params": {"transaction": transaction, "encoding": "base64"},
        }

        headers = {}
        if self._authorization_key is not None:
            headers["privy-authorization-signature"] = build_authorization_signature(
                self._authorization_key, self.app_id, url, body
            )

        async with self._client() as client:
            # Send the exact bytes that were signed
            response = await client.post(url, content=canonicalize(body), headers=headers)
        self._raise_for_error(response, "sign transaction")

        data = response.json().get("data") or {}
        signed = data.get("signed_transaction")
        if not signed:
            raise WalletError("Privy returned no signed transaction")

        logger.info(f"Transaction signed by wallet {wallet_id}")
        return signed


def create_privy_client(
    app_id: str,
    app_secret: str,
    authorization_private_key: Optional[str] = None,
    base_url: str = PRIVY_API_URL,
    timeout: float = 30.0,
) -> PrivyWalletClient:
    """Create a Privy wallet client instance."""
    return PrivyWalletClient(
        app_id=app_id,
        app_secret=app_secret,
        authorization_private_key=authorization_private_key,
        base_url=base_url,
        timeout=timeout,
    )
