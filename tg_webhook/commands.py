"""Reply generation for incoming chat messages.

Commands are matched by prefix in a fixed order, so ``/startfoo`` is handled
as ``/start`` and ``/echoing`` as ``/echo``. Anything else is quoted back.
"""
from typing import Optional

from tg_webhook.models import TelegramMessage

START_COMMAND = "/start"
HELP_COMMAND = "/help"
ECHO_COMMAND = "/echo"

# Checked top to bottom; first match wins.
COMMANDS = [
    ("start", START_COMMAND),
    ("help", HELP_COMMAND),
    ("echo", ECHO_COMMAND),
]

GREETING_PLACEHOLDER = "there"
ECHO_GLYPH = "🔁"
ECHO_USAGE = "Send `/echo <your text>` to hear it back."
# Same set as JavaScript's String.prototype.trim: includes U+FEFF,
# excludes U+001C-U+001F and U+0085.
TRIM_CHARS = " \t\n\v\f\r" + "".join(
    chr(code_point)
    for code_point in (
        0x00A0, 0x1680, *range(0x2000, 0x200B),
        0x2028, 0x2029, 0x202F, 0x205F, 0x3000, 0xFEFF,
    )
)

HELP_TEXT = "\n".join(
    [
        "Here’s what I can do right now:",
        "- /start: Show the welcome flow",
        "- /help: Display this cheat sheet",
        "- /echo <text>: Echo any text you provide",
        "",
        "Extend me by editing `tg_webhook/commands.py`.",
    ]
)


def trim_text(text: str) -> str:
    return text.strip(TRIM_CHARS)


def welcome_text(first_name: Optional[str]) -> str:
    name = first_name if first_name is not None else GREETING_PLACEHOLDER
    return "\n".join(
        [
            f"Hey {name}!",
            "I'm a Telegram bot and I just received your webhook update.",
            "",
            "Available commands:",
            "• /start - show this welcome message",
            "• /help - learn what I can do",
            "• /echo <text> - mirror back what you send",
        ]
    )


def echo_text(text: str) -> str:
    payload = trim_text(text[len(ECHO_COMMAND):])
    if payload:
        return f"{ECHO_GLYPH} {payload}"
    return ECHO_USAGE


def quote_text(text: str) -> str:
    return f'You said: "{text}"'


def match_command(text: str) -> Optional[str]:
    """Return the name of the first command ``text`` starts with, if any."""
    for name, token in COMMANDS:
        if text.startswith(token):
            return name
    return None


def route(message: TelegramMessage) -> Optional[str]:
    """Build the reply for ``message``, or None when there is nothing to answer."""
    text = trim_text(message.text or "")
    if not text:
        return None

    command = match_command(text)
    if command == "start":
        first_name = message.from_user.first_name if message.from_user else None
        return welcome_text(first_name)
    if command == "help":
        return HELP_TEXT
    if command == "echo":
        return echo_text(text)
    return quote_text(text)
