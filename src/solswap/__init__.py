"""Solswap - Telegram bot for custodial Solana wallets and Jupiter swaps."""

__version__ = "0.1.0"
