"""Register (or remove) this deployment's webhook with Telegram.

Usage:
    python -m tg_webhook.setup_webhook [--url URL] [--drop-pending-updates]
    python -m tg_webhook.setup_webhook --delete

Installed as the ``tg-webhook-setup`` console script.

Without --url the webhook URL is PUBLIC_URL followed by WEBHOOK_PATH.
"""
import argparse
import asyncio
import logging
import sys

from telegram import Bot
from telegram.error import TelegramError

from tg_webhook.config import (
    PUBLIC_URL_ENV,
    get_webhook_path,
    load_webhook_config,
    read_required_config,
)
from tg_webhook.errors import ConfigurationError
from tg_webhook.logging_config import setup_logging

logger = logging.getLogger(__name__)

ALLOWED_UPDATES = ["message", "edited_message"]


def resolve_webhook_url(url: str | None = None) -> str:
    if url:
        return url
    return read_required_config(PUBLIC_URL_ENV).strip().rstrip("/") + get_webhook_path()


async def register_webhook(url: str, drop_pending_updates: bool = False) -> bool:
    config = load_webhook_config()
    async with Bot(config.bot_token) as bot:
        return await bot.set_webhook(
            url=url,
            secret_token=config.secret_token,
            allowed_updates=ALLOWED_UPDATES,
            drop_pending_updates=drop_pending_updates,
        )


async def delete_webhook(drop_pending_updates: bool = False) -> bool:
    config = load_webhook_config()
    async with Bot(config.bot_token) as bot:
        return await bot.delete_webhook(drop_pending_updates=drop_pending_updates)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--url", help="public webhook URL (default: PUBLIC_URL + WEBHOOK_PATH)")
    parser.add_argument("--delete", action="store_true", help="remove the webhook instead")
    parser.add_argument("--drop-pending-updates", action="store_true")
    args = parser.parse_args(argv)

    setup_logging()
    try:
        if args.delete:
            asyncio.run(delete_webhook(args.drop_pending_updates))
            logger.info("Webhook removed")
        else:
            url = resolve_webhook_url(args.url)
            asyncio.run(register_webhook(url, args.drop_pending_updates))
            logger.info(f"Webhook set to {url}")
    except ConfigurationError as e:
        logger.error(e.description)
        return 1
    except TelegramError as e:
        logger.error(f"Telegram rejected the webhook request: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
