import logging
import os

from pythonjsonlogger import jsonlogger


def setup_logging(level: str | None = None) -> None:
    """Configure structured JSON logging on the root logger."""
    log_level = (level or os.environ.get("LOG_LEVEL", "INFO")).upper()

    handler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(log_level)
    root.handlers = [handler]

    # httpx logs every request URL at INFO, and Bot API URLs embed the token.
    logging.getLogger("httpx").setLevel(logging.WARNING)
