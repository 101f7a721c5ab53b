# quotedesk/services/telegram.py
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests

from quotedesk.core.logging_config import logger
from quotedesk.core.settings import Settings, get_settings


class NotificationError(RuntimeError):
    pass


@dataclass(frozen=True)
class InlineButton:
    text: str
    url: str


@dataclass(frozen=True)
class SentMessage:
    message_id: int
    chat_id: str


class TelegramNotifier:
    """Sends chat messages through the Telegram Bot API (sendMessage)."""

    def __init__(
        self,
        token: Optional[str],
        chat_id: Optional[str],
        *,
        api_base: str = "https://api.telegram.org",
        timeout: float = 15.0,
    ):
        self.token = (token or "").strip()
        self.chat_id = (chat_id or "").strip()
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, s: Settings) -> "TelegramNotifier":
        return cls(
            s.telegram_bot_token,
            s.telegram_chat_id,
            api_base=s.telegram_api_base,
            timeout=s.http_timeout_seconds,
        )

    def send_message(
        self,
        text: str,
        *,
        parse_mode: Optional[str] = None,
        disable_web_page_preview: bool = True,
        buttons: Optional[List[InlineButton]] = None,
    ) -> SentMessage:
        """
        Returns the sent message id + chat id on success.
        Raises NotificationError on failure.
        """
        if not self.token or not self.chat_id:
            raise NotificationError("Missing Telegram config")

        payload: Dict[str, Any] = {
            "chat_id": self.chat_id,
            "text": text,
            "disable_web_page_preview": disable_web_page_preview,
        }
        if parse_mode:
            payload["parse_mode"] = parse_mode
        if buttons:
            payload["reply_markup"] = {
                "inline_keyboard": [[{"text": b.text, "url": b.url} for b in buttons]]
            }

        try:
            r = requests.post(
                f"{self.api_base}/bot{self.token}/sendMessage",
                headers={"Content-Type": "application/json"},
                data=json.dumps(payload),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("telegram_send_failed", error=str(e))
            raise NotificationError(f"Telegram request failed: {e}") from e

        try:
            data = r.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if r.status_code >= 300 or not data.get("ok"):
            description = str(data.get("description") or "Telegram request failed")
            logger.warning(
                "telegram_send_failed", status_code=r.status_code, error=description
            )
            raise NotificationError(description)

        result = data.get("result") or {}
        message_id = result.get("message_id")
        chat = result.get("chat") or {}
        chat_id = chat.get("id")

        return SentMessage(
            message_id=message_id if isinstance(message_id, int) else 0,
            chat_id=str(chat_id) if isinstance(chat_id, (int, str)) else self.chat_id,
        )


def get_notifier() -> TelegramNotifier:
    """FastAPI dependency; overridden in tests."""
    return TelegramNotifier.from_settings(get_settings())
