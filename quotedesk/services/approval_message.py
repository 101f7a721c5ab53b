from __future__ import annotations

import html
import ipaddress
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote as urlquote
from urllib.parse import urlparse

from quotedesk.services.telegram import InlineButton
from quotedesk.web.jinja_filters import format_currency

OPEN_QUOTE_LABEL = "เปิดใบเสนอราคา"


@dataclass(frozen=True)
class ApprovalMessage:
    text: str
    buttons: Optional[list[InlineButton]] = None
    parse_mode: str = "HTML"


def format_quote_number(quote_id: str) -> str:
    digits = re.sub(r"\D", "", quote_id)
    return digits or quote_id


def normalize_base_url(value: str) -> str:
    return value.rstrip("/")


def approval_url(base_url: str, quote_id: str) -> str:
    return f"{normalize_base_url(base_url)}/approve/{urlquote(quote_id, safe='')}"


_NON_PUBLIC_V4 = tuple(
    ipaddress.IPv4Network(n)
    for n in (
        "0.0.0.0/8",
        "10.0.0.0/8",
        "100.64.0.0/10",
        "127.0.0.0/8",
        "169.254.0.0/16",
        "172.16.0.0/12",
        "192.168.0.0/16",
    )
)


def _is_private_ipv4(hostname: str) -> bool:
    try:
        ip = ipaddress.IPv4Address(hostname)
    except ValueError:
        return False
    return any(ip in net for net in _NON_PUBLIC_V4)


def can_use_inline_url(url: str) -> bool:
    """Telegram rejects inline buttons that point at local or private hosts."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https"):
        return False
    hostname = (parsed.hostname or "").lower()
    if not hostname or hostname == "localhost" or hostname.endswith(".local"):
        return False
    return not _is_private_ipv4(hostname)


def build_approval_message(
    *,
    quote_id: str,
    company_name: Optional[str],
    system_name: Optional[str],
    total,
    requester_label: str,
    link: str,
) -> ApprovalMessage:
    use_button = can_use_inline_url(link)
    esc = html.escape
    safe_link = esc(link)

    lines = [
        "มีใบเสนอราคาขออนุมัติ",
        f"เลขที่: {esc(format_quote_number(quote_id))}",
        f"ลูกค้า: {esc((company_name or '').strip() or '-')}",
        f"ระบบ: {esc((system_name or '').strip() or '-')}",
        f"ยอดรวม: {esc(format_currency(total))}",
    ]
    if requester_label:
        lines.append(f"ผู้ขอ: {esc(requester_label)}")
    if use_button:
        lines.append(f'ตรวจสอบและอนุมัติ: <a href="{safe_link}">{OPEN_QUOTE_LABEL}</a>')
    else:
        lines.append(f"ตรวจสอบและอนุมัติ: {safe_link}")

    buttons = [InlineButton(text=OPEN_QUOTE_LABEL, url=link)] if use_button else None
    return ApprovalMessage(text="\n".join(lines), buttons=buttons)
