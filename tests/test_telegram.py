import json

import pytest
import requests

from quotedesk.services import telegram
from quotedesk.services.telegram import InlineButton, NotificationError, TelegramNotifier


class FakeResponse:
    def __init__(self, status_code, payload):
        self.status_code = status_code
        self._payload = payload

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@pytest.fixture
def calls(monkeypatch):
    recorded = []
    responses = []

    def fake_post(url, headers=None, data=None, timeout=None):
        recorded.append({"url": url, "payload": json.loads(data), "timeout": timeout})
        result = responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    monkeypatch.setattr(telegram.requests, "post", fake_post)
    return recorded, responses


def _notifier():
    return TelegramNotifier("bot-token", "-100200300", timeout=5)


def test_send_message_payload_and_result(calls):
    recorded, responses = calls
    responses.append(
        FakeResponse(200, {"ok": True, "result": {"message_id": 42, "chat": {"id": -100200300}}})
    )

    sent = _notifier().send_message(
        "hello",
        parse_mode="HTML",
        buttons=[InlineButton(text="open", url="https://quotes.example.com/approve/1")],
    )

    assert sent.message_id == 42
    assert sent.chat_id == "-100200300"
    call = recorded[0]
    assert call["url"] == "https://api.telegram.org/botbot-token/sendMessage"
    assert call["timeout"] == 5
    assert call["payload"] == {
        "chat_id": "-100200300",
        "text": "hello",
        "disable_web_page_preview": True,
        "parse_mode": "HTML",
        "reply_markup": {
            "inline_keyboard": [[{"text": "open", "url": "https://quotes.example.com/approve/1"}]]
        },
    }


def test_missing_config_fails_without_calling_out(calls):
    recorded, _ = calls
    with pytest.raises(NotificationError, match="Missing Telegram config"):
        TelegramNotifier(None, "-1").send_message("hello")
    assert recorded == []


def test_api_error_description_is_surfaced(calls):
    _, responses = calls
    responses.append(FakeResponse(400, {"ok": False, "description": "Bad Request: chat not found"}))

    with pytest.raises(NotificationError, match="chat not found"):
        _notifier().send_message("hello")


def test_non_json_response(calls):
    _, responses = calls
    responses.append(FakeResponse(502, ValueError("no json")))

    with pytest.raises(NotificationError, match="Telegram request failed"):
        _notifier().send_message("hello")


def test_transport_error(calls):
    _, responses = calls
    responses.append(requests.ConnectionError("boom"))

    with pytest.raises(NotificationError):
        _notifier().send_message("hello")


def test_notify_endpoint(client, login, pins, notifier):
    login(pins["user"].pin)
    r = client.post("/telegram/notify", json={"text": "  new lead  "})

    assert r.status_code == 200
    assert r.json() == {"ok": True, "messageId": 101}
    assert notifier.sent[0]["text"] == "new lead"


def test_notify_endpoint_errors(client, login, pins, notifier):
    assert client.post("/telegram/notify", json={"text": "x"}).status_code == 401

    login(pins["user"].pin)
    r = client.post("/telegram/notify", json={"text": " "})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing text"}

    notifier.fail = "Missing Telegram config"
    r = client.post("/telegram/notify", json={"text": "x"})
    assert r.status_code == 502
    assert r.json() == {"error": "Missing Telegram config"}
