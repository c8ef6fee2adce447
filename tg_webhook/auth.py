import hmac

SECRET_HEADER = "X-Telegram-Bot-Api-Secret-Token"


def validate_secret(provided_secret: str, expected_secret: str) -> bool:
    """Exact, case-sensitive comparison of the secret header against config."""
    return hmac.compare_digest(
        provided_secret.encode("utf-8"), expected_secret.encode("utf-8")
    )
