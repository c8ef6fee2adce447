"""FastAPI entry point for the Telegram webhook."""
import os
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from tg_webhook.auth import SECRET_HEADER
from tg_webhook.config import (
    BOT_TOKEN_ENV,
    SECRET_TOKEN_ENV,
    get_webhook_path,
    missing_required_env,
)
from tg_webhook.dispatcher import TelegramDispatcher
from tg_webhook.logging_config import setup_logging
from tg_webhook.telegram_handler import TelegramWebhookHandler, liveness_result

setup_logging()
logger = logging.getLogger(__name__)

WEBHOOK_PATH = get_webhook_path()

# Config is re-read on every request; this is only an early warning.
_missing_env = missing_required_env()
if _missing_env:
    logger.warning(
        f"Missing required environment variables: {_missing_env} - "
        "webhook calls will fail until they are set"
    )

dispatcher = TelegramDispatcher()
webhook_handler = TelegramWebhookHandler(dispatcher)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Telegram webhook listening on {WEBHOOK_PATH}")
    yield
    await dispatcher.shutdown()


app = FastAPI(title="tg-webhook", lifespan=lifespan)


@app.post(WEBHOOK_PATH)
async def telegram_webhook(request: Request):
    """Webhook endpoint for Telegram bot updates."""
    raw_body = await request.body()
    result = await webhook_handler.handle_webhook(
        request.headers.get(SECRET_HEADER), raw_body
    )
    return JSONResponse(status_code=result.status_code, content=result.payload)


@app.get(WEBHOOK_PATH)
async def telegram_webhook_alive():
    """Liveness probe on the webhook path. No authentication."""
    result = liveness_result()
    return JSONResponse(status_code=result.status_code, content=result.payload)


@app.get("/")
async def read_root():
    """Describe how to point a bot at this deployment."""
    return {
        "service": "tg-webhook",
        "webhook_path": WEBHOOK_PATH,
        "required_env": [BOT_TOKEN_ENV, SECRET_TOKEN_ENV],
        "secret_header": SECRET_HEADER,
        "set_webhook": (
            "Call setWebhook with url=<public url>" + WEBHOOK_PATH
            + " and secret_token=<" + SECRET_TOKEN_ENV + ">, "
            "or run `tg-webhook-setup`."
        ),
    }


@app.get("/metrics")
async def metrics():
    """Prometheus metrics endpoint."""
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


@app.get("/healthz")
async def healthz():
    """Basic health check for the hosting platform."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", 8080)))
