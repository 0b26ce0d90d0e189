"""Balance reporting."""

from solswap.routing.base import TokenBalance

NO_TOKENS = "No tokens found in wallet"


def format_balances(balances: dict[str, TokenBalance]) -> str:
    """Render non-zero balances, one ``TOKEN: 1.2345`` line each."""
    lines = ["💰 Wallet Balance:", ""]

    held = [b for b in balances.values() if not b.is_zero]
    for balance in held:
        lines.append(f"{balance.token}: {balance.ui_amount:.4f}")

    if not held:
        lines.append(NO_TOKENS)

    return "\n".join(lines)
