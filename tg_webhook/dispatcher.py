"""Outbound delivery of replies through the Telegram Bot API."""
import asyncio
import logging
import time

from telegram import Bot
from telegram.constants import MessageLimit
from telegram.error import BadRequest, NetworkError, TelegramError

from tg_webhook.errors import DispatchError
from tg_webhook.metrics import DISPATCH_ERRORS, DISPATCH_LATENCY
from tg_webhook.models import OutboundSendRequest

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = MessageLimit.MAX_TEXT_LENGTH


def split_message(text: str, limit: int = MAX_MESSAGE_LENGTH) -> list[str]:
    """Split text into chunks Telegram will accept in a single sendMessage.

    Splits on the character limit only, so a chunk may end mid-word.
    """
    if len(text) <= limit:
        return [text]
    return [text[i:i + limit] for i in range(0, len(text), limit)]


class TelegramDispatcher:
    """Sends replies to chats. No retries; a failed send raises DispatchError."""

    def __init__(self, bot_factory=Bot):
        self._bot_factory = bot_factory
        # One initialized Bot (and its HTTP connection pool) per token.
        self._bots: dict[str, Bot] = {}
        self._lock = asyncio.Lock()

    async def _get_bot(self, bot_token: str) -> Bot:
        async with self._lock:
            bot = self._bots.get(bot_token)
            if bot is None:
                bot = self._bot_factory(bot_token)
                await bot.initialize()
                self._bots[bot_token] = bot
            return bot

    async def send_message(self, bot_token: str, request: OutboundSendRequest) -> None:
        """Send ``request.text`` to ``request.chat_id``.

        Raises:
            DispatchError: if Telegram rejects the call or cannot be reached.
        """
        start_time = time.monotonic()
        try:
            bot = await self._get_bot(bot_token)
            for chunk in split_message(request.text):
                await bot.send_message(chat_id=request.chat_id, text=chunk)
        except BadRequest as e:
            DISPATCH_ERRORS.labels(type="rejected").inc()
            raise DispatchError(f"Telegram rejected the reply: {e}") from e
        except NetworkError as e:
            DISPATCH_ERRORS.labels(type="network").inc()
            raise DispatchError(f"Failed to reach Telegram: {e}") from e
        except TelegramError as e:
            DISPATCH_ERRORS.labels(type="telegram").inc()
            raise DispatchError(f"Failed to send reply: {e}") from e
        finally:
            DISPATCH_LATENCY.observe(time.monotonic() - start_time)

    async def shutdown(self):
        """Close every Bot opened by this dispatcher."""
        async with self._lock:
            bots = list(self._bots.values())
            self._bots.clear()
        for bot in bots:
            try:
                await bot.shutdown()
            except TelegramError as e:
                logger.warning(f"Error shutting down bot client: {e}")
