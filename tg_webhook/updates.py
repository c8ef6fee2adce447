"""Decoding of webhook bodies and extraction of the message to answer."""
import enum
import json
from typing import Optional

from pydantic import ValidationError

from tg_webhook.errors import MalformedPayloadError
from tg_webhook.models import TelegramMessage, TelegramUpdate


class UpdateKind(enum.Enum):
    MESSAGE = "message"
    EDITED_MESSAGE = "edited_message"


def parse_update(raw_body: bytes) -> TelegramUpdate:
    """Decode a request body into a TelegramUpdate.

    Raises:
        MalformedPayloadError: if the body is not JSON, not a JSON object, or
            holds a message whose fields have the wrong types.
    """
    try:
        data = json.loads(raw_body)
    except ValueError as e:
        raise MalformedPayloadError(f"Request body is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedPayloadError("Update payload must be a JSON object")

    try:
        return TelegramUpdate.model_validate(data)
    except ValidationError as e:
        raise MalformedPayloadError(
            f"Invalid update payload ({e.error_count()} validation errors)"
        ) from e


def classify_update(
    update: TelegramUpdate,
) -> tuple[Optional[UpdateKind], Optional[TelegramMessage]]:
    """Return which variant carries the message, preferring a new message."""
    if update.message is not None:
        return UpdateKind.MESSAGE, update.message
    if update.edited_message is not None:
        return UpdateKind.EDITED_MESSAGE, update.edited_message
    return None, None


def extract_message(update: TelegramUpdate) -> Optional[TelegramMessage]:
    _, message = classify_update(update)
    return message
