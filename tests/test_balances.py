"""Tests for balance formatting."""

from decimal import Decimal

from solswap.routing.base import TokenBalance
from solswap.services.balances import NO_TOKENS, format_balances


def test_formats_non_zero_balances():
    balances = {
        "SOL": TokenBalance(token="SOL", amount="1500000000", ui_amount=Decimal("1.5")),
        "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v": TokenBalance(
            token="EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v",
            amount="12345678",
            ui_amount=Decimal("12.345678"),
        ),
    }

    assert format_balances(balances) == (
        "💰 Wallet Balance:\n"
        "\n"
        "SOL: 1.5000\n"
        "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v: 12.3457"
    )


def test_skips_zero_balances():
    balances = {
        "SOL": TokenBalance(token="SOL", amount="0", ui_amount=Decimal("0")),
        "BONK": TokenBalance(token="BONK", amount="100", ui_amount=Decimal("0.001")),
    }

    text = format_balances(balances)

    assert "SOL:" not in text
    assert "BONK: 0.0010" in text


def test_empty_wallet():
    assert format_balances({}) == f"💰 Wallet Balance:\n\n{NO_TOKENS}"


def test_only_zero_balances():
    balances = {"SOL": TokenBalance(token="SOL", amount="0", ui_amount=Decimal("0"))}

    assert format_balances(balances).endswith(NO_TOKENS)
