"""Application configuration using pydantic-settings.

Credentials for Telegram, the Privy wallet API and the Jupiter Ultra API are
read from environment variables (or a local .env file).
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Telegram
    # ======================
    telegram_bot_token: str = Field(default="", description="Telegram bot token from BotFather")

    # ======================
    # Privy (wallet custody)
    # ======================
    privy_app_id: str = Field(default="", description="Privy application ID")
    privy_app_secret: str = Field(default="", description="Privy application secret")
    privy_authorization_private_key: Optional[str] = Field(
        default=None,
        description="Privy authorization key (wallet-auth:...) used to sign wallet RPC requests",
    )
    privy_api_url: str = Field(default="https://api.privy.io/v1", description="Privy REST API URL")

    # ======================
    # Jupiter (swap aggregator)
    # ======================
    jupiter_api_url: str = Field(
        default="https://lite-api.jup.ag/ultra/v1", description="Jupiter Ultra API URL"
    )
    jupiter_api_key: Optional[str] = Field(default=None, description="Jupiter API key")
    explorer_tx_url: str = Field(
        default="https://solscan.io/tx/", description="Block explorer transaction URL prefix"
    )

    # ======================
    # Storage
    # ======================
    wallet_store: str = Field(
        default="json", description="Wallet mapping backend: 'json' or 'database'"
    )
    wallet_mapping_path: str = Field(
        default="./data/wallet-mappings.json", description="Path of the JSON wallet mapping file"
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///./data/solswap.db",
        description="Database connection URL (database wallet store)",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=3001, description="API server port")

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ======================
    # Network behaviour
    # ======================
    http_timeout: float = Field(default=30.0, description="Timeout for vendor HTTP calls (seconds)")
    retry_attempts: int = Field(default=3, description="Attempts for order and execute calls")
    retry_delay: float = Field(default=1.0, description="Fixed delay between attempts (seconds)")
    user_lock_timeout: float = Field(
        default=120.0, description="How long a user's request waits for the previous one"
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def has_privy(self) -> bool:
        """Check if Privy credentials are configured."""
        return bool(self.privy_app_id and self.privy_app_secret)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "telegram_bot_token": "***" if self.telegram_bot_token else "(not set)",
            "privy": {
                "api_url": self.privy_api_url,
                "app_id": self.privy_app_id or "(not set)",
                "app_secret": "***" if self.privy_app_secret else "(not set)",
                "authorization_key": "***" if self.privy_authorization_private_key else "(not set)",
            },
            "jupiter": {
                "api_url": self.jupiter_api_url,
                "api_key": "***" if self.jupiter_api_key else "(not set)",
            },
            "storage": {
                "backend": self.wallet_store,
                "mapping_path": self.wallet_mapping_path,
                "database_url": self._redact_url(self.database_url),
            },
            "retry": {
                "attempts": self.retry_attempts,
                "delay": self.retry_delay,
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact sensitive parts of database URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            if "@" in rest:
                creds, host = rest.rsplit("@", 1)
                if ":" in creds:
                    user, _ = creds.split(":", 1)
                    return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
