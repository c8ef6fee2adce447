from prometheus_client import Counter, Histogram

# Webhook calls by how they ended.
UPDATE_TOTAL = Counter(
    "telegram_updates_total",
    "Total number of Telegram webhook updates handled",
    ["outcome"],
)

# Replies by the command that produced them ("text" for plain messages).
COMMAND_TOTAL = Counter(
    "telegram_commands_total",
    "Total number of replies generated per command",
    ["command"],
)

# Time spent sending a reply through the Bot API.
DISPATCH_LATENCY = Histogram(
    "telegram_dispatch_latency_seconds",
    "Time spent sending replies to Telegram",
)

# Send failures (rejected, network or other Telegram errors).
DISPATCH_ERRORS = Counter(
    "telegram_dispatch_errors_total",
    "Total number of failed reply sends",
    ["type"],
)
