"""Telegram webhook that answers /start, /help and /echo."""
