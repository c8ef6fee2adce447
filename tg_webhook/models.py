"""Pydantic models for the subset of the Bot API this webhook reads and sends."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TelegramUser(BaseModel):
    first_name: Optional[str] = None


class TelegramChat(BaseModel):
    id: Optional[int] = None


class TelegramMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message_id: int
    chat: TelegramChat
    text: Optional[str] = None
    from_user: Optional[TelegramUser] = Field(default=None, alias="from")


def is_message_payload(value: Any) -> bool:
    """Return True if ``value`` has the shape of a message object.

    Telegram sends many update kinds (channel posts, callback queries,
    membership changes). Only objects carrying ``message_id`` and a ``chat``
    object are treated as messages.
    """
    return (
        isinstance(value, dict)
        and "message_id" in value
        and isinstance(value.get("chat"), dict)
    )


class TelegramUpdate(BaseModel):
    """Top-level update envelope delivered to the webhook."""

    update_id: Optional[int] = None
    message: Optional[TelegramMessage] = None
    edited_message: Optional[TelegramMessage] = None

    @field_validator("message", "edited_message", mode="before")
    @classmethod
    def _drop_non_messages(cls, value: Any) -> Any:
        if value is None or is_message_payload(value):
            return value
        return None


class OutboundSendRequest(BaseModel):
    chat_id: int
    text: str
