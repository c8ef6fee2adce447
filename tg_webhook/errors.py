"""Error types raised inside the webhook pipeline.

Each error carries the HTTP status and description the handler returns to
Telegram, plus the outcome label used for the update counter.
"""


class WebhookError(Exception):
    """Base class for failures that end a webhook request early."""

    status_code = 500
    outcome = "error"

    def __init__(self, description: str):
        super().__init__(description)
        self.description = description


class ConfigurationError(WebhookError):
    """A required credential or secret is not configured."""

    outcome = "config_error"


class AuthenticationError(WebhookError):
    """The secret header did not match the configured secret."""

    status_code = 401
    outcome = "unauthorized"

    def __init__(self, description: str = "Unauthorized"):
        super().__init__(description)


class MalformedPayloadError(WebhookError):
    """The request body is not a parseable Telegram update."""

    outcome = "malformed"


class DispatchError(WebhookError):
    """Sending the reply back to Telegram failed."""

    outcome = "dispatch_error"
