"""User-facing message texts."""

from decimal import Decimal

EXAMPLE_TOKEN = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"
SWAP_USAGE = "/swap <token_address> <amount>"
SWAP_EXAMPLE = f"/swap {EXAMPLE_TOKEN} 0.1"

SUPPORT_FOOTER = "If this error persists, please contact support."

HELP = f"""Available commands:

/start     - Create or show your wallet
/wallet    - View your wallet address and balances
/balance   - View your token balances
/swap      - Swap SOL for another token
             Usage: {SWAP_USAGE}
/help      - Show this help message

Example: {SWAP_EXAMPLE}"""

NO_WALLET = "❌ You don't have a wallet yet. Use /start to create one."
START_FIRST = "❌ Please use /start first to create a wallet."

WALLET_CREATE_FAILED = (
    "❌ Sorry, there was an error creating your wallet. Please try again later.\n\n"
    + SUPPORT_FOOTER
)
WALLET_ACCESS_FAILED = (
    "❌ Sorry, there was an error accessing your wallet. Please try again later.\n\n"
    + SUPPORT_FOOTER
)
BALANCE_FAILED = (
    "❌ Sorry, there was an error fetching your balance. Please try again later.\n\n"
    + SUPPORT_FOOTER
)

SWAP_PROMPT = f"""Please enter the token mint address you want to buy.

Correct usage:
{SWAP_USAGE}

Example:
{SWAP_EXAMPLE}

You can also just reply with the token address now.
You can find token addresses on Solscan or other Solana explorers."""

AMOUNT_PROMPT = (
    "How much SOL would you like to swap? (e.g., 0.1, 0.5, 1.0)\n\n"
    "Note: Make sure you have enough SOL in your wallet."
)

INVALID_TOKEN = (
    "❌ Invalid token address. Please enter a valid Solana token address.\n\n"
    f"Example:\n{SWAP_EXAMPLE}"
)
INVALID_AMOUNT = (
    "❌ Please enter a valid amount of SOL (e.g., 0.1, 0.5, 1.0)\n\n"
    f"Example:\n{SWAP_EXAMPLE}"
)

TRANSACTION_SIGNED = "🔄 Transaction signed. Processing swap..."

SLIPPAGE_FAILED = (
    "❌ Swap failed due to price movement. "
    "Please try again with a smaller amount or wait a moment."
)
SWAP_FAILED = (
    "❌ Sorry, there was an error processing your swap. Please try again later.\n\n"
    + SUPPORT_FOOTER
)
REQUEST_IN_PROGRESS = "⏳ Your previous request is still being processed. Please wait a moment."


def format_amount(amount: Decimal) -> str:
    """Render a user-entered amount without exponent notation."""
    return format(amount, "f")


def welcome(address: str) -> str:
    return (
        "👋 Welcome to the Solana Trading Bot!\n\n"
        f"Your wallet address is: {address}\n\n"
        "You can use the following commands:\n"
        "/wallet - View your wallet balance\n"
        f"{SWAP_USAGE} - Swap SOL for another token\n\n"
        f"Example: {SWAP_EXAMPLE}"
    )


def wallet_overview(address: str, balances_text: str) -> str:
    return (
        f"Your wallet address is: {address}\n\n"
        f"{balances_text}\n"
        f"Use {SWAP_USAGE} to swap SOL for another token"
    )


def insufficient_balance(balance: Decimal, required: Decimal) -> str:
    return (
        "❌ Insufficient SOL balance.\n"
        f"You have {balance:.4f} SOL but need {format_amount(required)} SOL for this swap.\n"
        "Please try again with a smaller amount."
    )


def vendor_error(detail: str) -> str:
    return f"❌ Error: {detail}\n\nPlease try again with {SWAP_USAGE}"


def swap_success(explorer_url: str, amount: Decimal, out_amount: Decimal) -> str:
    return (
        "✅ Swap successful!\n\n"
        f"Transaction: {explorer_url}\n"
        f"You swapped {format_amount(amount)} SOL for approximately {format_amount(out_amount)} tokens\n\n"
        "Use /wallet to check your new balance"
    )
