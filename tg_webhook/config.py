"""Environment configuration for the webhook."""
import os
from dataclasses import dataclass

from tg_webhook.errors import ConfigurationError

BOT_TOKEN_ENV = "TELEGRAM_BOT_TOKEN"
SECRET_TOKEN_ENV = "TELEGRAM_SECRET_TOKEN"
WEBHOOK_PATH_ENV = "WEBHOOK_PATH"
PUBLIC_URL_ENV = "PUBLIC_URL"

DEFAULT_WEBHOOK_PATH = "/api/telegram"
REQUIRED_ENV = [BOT_TOKEN_ENV, SECRET_TOKEN_ENV]


@dataclass(frozen=True)
class WebhookConfig:
    bot_token: str
    secret_token: str


def read_required_config(name: str) -> str:
    """Return a required environment variable, refusing unset or blank values.

    The value is returned exactly as configured; surrounding whitespace is
    only ignored when deciding whether it is blank.
    """
    value = os.environ.get(name, "")
    if not value.strip():
        raise ConfigurationError(f"Missing required environment variable: {name}")
    return value


def load_webhook_config() -> WebhookConfig:
    """Load the bot token and shared secret.

    Called once per request so a missing value is reported on every call
    instead of being cached as empty.
    """
    return WebhookConfig(
        bot_token=read_required_config(BOT_TOKEN_ENV),
        secret_token=read_required_config(SECRET_TOKEN_ENV),
    )


def missing_required_env() -> list[str]:
    return [key for key in REQUIRED_ENV if not os.environ.get(key, "").strip()]


def get_webhook_path() -> str:
    path = os.environ.get(WEBHOOK_PATH_ENV, "").strip() or DEFAULT_WEBHOOK_PATH
    if not path.startswith("/"):
        path = "/" + path
    return path
