"""User-facing reply texts.

Texts marked (Markdown) are sent with parse_mode=Markdown; any value
formatted into them must go through ``safe_text`` first.
"""

from app.schemas.payment import Provider

PROVIDERS_LIST = ", ".join(Provider.values())

# (Markdown)
HELP_MESSAGE = "\n".join(
    [
        "*Welcome to VHub — Premium Edition!*",
        "",
        "Available commands:",
        "/start — show this help",
        "/profile — view your basic profile",
        "/setpayment <provider> <details> — admin only",
        "/getpayments — list payment methods",
        "",
        f"Providers: {PROVIDERS_LIST}",
    ]
)

# (Markdown)
PROFILE_TEMPLATE = "*Profile*\nName: {name}\nID: {user_id}\nTelegram: {handle}"
PROFILE_DEFAULT_NAME = "User"
PROFILE_NO_USERNAME = "—"

RATE_LIMITED = "Slow down, boss — too many commands at once. 😅"

SETPAYMENT_USAGE = (
    "Usage: /setpayment <provider> <details>\n"
    "Example: /setpayment easypaisa 03xx-xxxxxxx"
)
INVALID_PROVIDER = f"Invalid provider. Allowed: {PROVIDERS_LIST}"
# (Markdown)
PAYMENT_UPDATED = "✅ Updated *{provider}* details."
PAYMENT_ECHO = "Configured {provider}: {details}"
PAYMENT_UPDATE_FAILED = "Failed to update payment details — check server logs."

NO_PAYMENTS = "No payment details configured yet."
# (Markdown)
PAYMENTS_HEADER = "*Current Payment Details:*\n"
PAYMENT_LINE = "\n- *{provider}*: {details}"
PAYMENTS_READ_FAILED = "Error reading payment details."

UNKNOWN_COMMAND = "Unknown command. Use /start to see available commands."
PLAIN_TEXT_FALLBACK = "I only understand a few commands for now. Try /start."
UNEXPECTED_ERROR = "Something went wrong. Please try again later."
