"""Telegram webhook handler.

This module holds the only decision logic of the service. It authenticates a
webhook call, decodes the update, picks a reply and hands it to the
dispatcher, then tells main.py which status and JSON body to return.

Request flow:
  Telegram Cloud  ──webhook POST──►  main.py
                                        │
                                        ▼
                         TelegramWebhookHandler.handle_webhook()
                                        │
          load config ─► check secret ─► parse update ─► extract message
                                                                │
                                                                ▼
                                  TelegramDispatcher ◄── commands.route()
                                        │
                                        ▼
                              200 / 401 / 500 JSON response

Every failure ends the request with one of three JSON shapes:
  - 200 {"ok": true}                         processed, or nothing to do
  - 401 {"ok": false, "description": ...}    secret mismatch
  - 500 {"ok": false, "description": ...}    config, payload or send failure

Nothing is kept between requests. The end user only ever sees a reply or
silence; errors are never relayed into the chat.
"""
import logging
from dataclasses import dataclass, field
from typing import Optional

from tg_webhook.auth import validate_secret
from tg_webhook.commands import match_command, route, trim_text
from tg_webhook.config import load_webhook_config
from tg_webhook.errors import AuthenticationError, WebhookError
from tg_webhook.metrics import COMMAND_TOTAL, UPDATE_TOTAL
from tg_webhook.models import OutboundSendRequest
from tg_webhook.updates import classify_update, parse_update

logger = logging.getLogger(__name__)

LIVENESS_MESSAGE = (
    "Telegram bot webhook endpoint is alive. Use POST with Telegram updates."
)


@dataclass(frozen=True)
class WebhookResult:
    status_code: int
    payload: dict = field(default_factory=dict)


def liveness_result() -> WebhookResult:
    """Unauthenticated health answer for GET on the webhook path."""
    return WebhookResult(200, {"ok": True, "message": LIVENESS_MESSAGE})


class TelegramWebhookHandler:
    """Runs one webhook request through validate → extract → route → dispatch."""

    def __init__(self, dispatcher, config_loader=load_webhook_config):
        """
        Args:
            dispatcher: object with an async
                ``send_message(bot_token, OutboundSendRequest)`` method that
                raises DispatchError on failure (see dispatcher.py).
            config_loader: callable returning a WebhookConfig, or raising
                ConfigurationError when a value is missing.
        """
        self.dispatcher = dispatcher
        self.config_loader = config_loader

    async def handle_webhook(
        self, provided_secret: Optional[str], raw_body: bytes
    ) -> WebhookResult:
        """Handle one webhook POST and return the response to send back.

        Never raises: every error is converted into a 401 or 500 result.
        """
        try:
            return await self._process(provided_secret or "", raw_body)
        except WebhookError as e:
            UPDATE_TOTAL.labels(outcome=e.outcome).inc()
            return WebhookResult(
                e.status_code, {"ok": False, "description": e.description}
            )
        except Exception as e:
            logger.exception("Telegram webhook handler failed")
            UPDATE_TOTAL.labels(outcome="error").inc()
            return WebhookResult(
                500, {"ok": False, "description": str(e) or "Unknown error occurred"}
            )

    async def _process(self, provided_secret: str, raw_body: bytes) -> WebhookResult:
        config = self._load_config()

        if not validate_secret(provided_secret, config.secret_token):
            logger.warning("Rejected webhook call: invalid secret token")
            raise AuthenticationError()

        try:
            update = parse_update(raw_body)
        except WebhookError as e:
            logger.warning(f"Malformed webhook payload: {e.description}")
            raise

        kind, message = classify_update(update)
        if message is None or message.chat.id is None:
            logger.info(f"Non-message update processed (update_id={update.update_id})")
            return self._acknowledge("ignored")

        reply = route(message)
        if reply is None:
            logger.info(f"No reply generated for message {message.message_id}")
            return self._acknowledge("ignored")

        command = match_command(trim_text(message.text)) or "text"
        COMMAND_TOTAL.labels(command=command).inc()

        try:
            await self.dispatcher.send_message(
                config.bot_token,
                OutboundSendRequest(chat_id=message.chat.id, text=reply),
            )
        except WebhookError as e:
            logger.error(f"Failed to send reply to chat {message.chat.id}: {e.description}")
            raise

        logger.info(
            f"Replied to {kind.value} {message.message_id} "
            f"in chat {message.chat.id} ({command})"
        )
        return self._acknowledge("replied")

    def _load_config(self):
        try:
            return self.config_loader()
        except WebhookError as e:
            logger.error(f"Webhook configuration error: {e.description}")
            raise

    @staticmethod
    def _acknowledge(outcome: str) -> WebhookResult:
        UPDATE_TOTAL.labels(outcome=outcome).inc()
        return WebhookResult(200, {"ok": True})
