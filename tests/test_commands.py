"""Tests for command routing."""
import pytest

from tg_webhook.commands import (
    ECHO_GLYPH,
    ECHO_USAGE,
    HELP_TEXT,
    match_command,
    route,
    trim_text,
)
from tg_webhook.models import TelegramChat, TelegramMessage, TelegramUser


def _message(text, first_name=None, with_from=True):
    return TelegramMessage(
        message_id=1,
        chat=TelegramChat(id=42),
        text=text,
        from_user=TelegramUser(first_name=first_name) if with_from else None,
    )


# ---------------------------------------------------------------------------
# /start
# ---------------------------------------------------------------------------


class TestStart:
    def test_greets_by_first_name(self):
        reply = route(_message("/start", first_name="Ana"))
        assert reply.startswith("Hey Ana!")

    def test_placeholder_without_sender(self):
        reply = route(_message("/start", with_from=False))
        assert reply.startswith("Hey there!")

    def test_placeholder_without_first_name(self):
        assert route(_message("/start")).startswith("Hey there!")

    def test_lists_commands(self):
        reply = route(_message("/start", first_name="Ana"))
        for command in ("/start", "/help", "/echo"):
            assert command in reply

    def test_prefix_match(self):
        assert route(_message("/startfoo", first_name="Ana")).startswith("Hey Ana!")


# ---------------------------------------------------------------------------
# /help and /echo
# ---------------------------------------------------------------------------


def test_help_returns_fixed_text():
    assert route(_message("/help")) == HELP_TEXT
    assert route(_message("/help me please")) == HELP_TEXT


class TestEcho:
    def test_echoes_payload(self):
        assert route(_message("/echo hello world")) == f"{ECHO_GLYPH} hello world"

    def test_payload_is_trimmed(self):
        assert route(_message("  /echo    spaced out   ")) == f"{ECHO_GLYPH} spaced out"

    def test_without_payload_returns_usage(self):
        assert route(_message("/echo")) == ECHO_USAGE
        assert route(_message("/echo    ")) == ECHO_USAGE

    def test_prefix_match_keeps_remainder(self):
        assert route(_message("/echoing")) == f"{ECHO_GLYPH} ing"


# ---------------------------------------------------------------------------
# Fallback and edge cases
# ---------------------------------------------------------------------------


def test_plain_text_is_quoted():
    assert route(_message("hi there")) == 'You said: "hi there"'


def test_plain_text_is_trimmed_before_quoting():
    assert route(_message("   hi there \n")) == 'You said: "hi there"'


@pytest.mark.parametrize("text", [None, "", "   ", "\n\t"])
def test_no_reply_for_empty_text(text):
    assert route(_message(text)) is None


def test_commands_are_case_sensitive():
    assert route(_message("/START")) == 'You said: "/START"'


def test_command_must_lead_the_text():
    assert route(_message("say /help")) == 'You said: "say /help"'


@pytest.mark.parametrize(
    "text,expected",
    [
        ("/start", "start"),
        ("/starthelp", "start"),
        ("/help/echo", "help"),
        ("/echo /start", "echo"),
        ("/stop", None),
        ("", None),
    ],
)
def test_match_command_order(text, expected):
    assert match_command(text) == expected


@pytest.mark.parametrize(
    "text",
    ["/start", "/help", "/echo x", "hello", "\u200b", "\"quoted\"", "{}", "/" * 5000],
)
def test_route_is_deterministic(text):
    message = _message(text, first_name="Ana")
    assert route(message) == route(message)


# ---------------------------------------------------------------------------
# Trimming
# ---------------------------------------------------------------------------

BOM = chr(0xFEFF)
NBSP = chr(0x00A0)
FILE_SEPARATOR = chr(0x1C)
NEXT_LINE = chr(0x85)


@pytest.mark.parametrize("text", [BOM, NBSP + BOM, chr(0x3000), chr(0x2028)])
def test_unicode_blank_text_gets_no_reply(text):
    assert route(_message(text)) is None


@pytest.mark.parametrize("text", [FILE_SEPARATOR, NEXT_LINE])
def test_control_separators_are_not_trimmed(text):
    assert route(_message(text)) == f'You said: "{text}"'


def test_bom_around_command_is_trimmed():
    assert route(_message(BOM + "/echo hi" + NBSP)) == f"{ECHO_GLYPH} hi"


def test_trim_text_keeps_inner_whitespace():
    assert trim_text(f" {BOM}a  b{NBSP}\n") == "a  b"
