from decimal import Decimal

import pytest

from quotedesk.services.approval_message import (
    approval_url,
    build_approval_message,
    can_use_inline_url,
    format_quote_number,
)


@pytest.mark.parametrize(
    "url, expected",
    [
        ("https://quotes.example.com/approve/1", True),
        ("http://203.0.113.7/approve/1", True),
        ("http://localhost:3000/approve/1", False),
        ("http://printer.local/approve/1", False),
        ("http://192.168.1.20/approve/1", False),
        ("http://10.0.0.5/approve/1", False),
        ("http://172.20.1.1/approve/1", False),
        ("http://100.100.1.1/approve/1", False),
        ("ftp://quotes.example.com/approve/1", False),
        ("not a url", False),
    ],
)
def test_can_use_inline_url(url, expected):
    assert can_use_inline_url(url) is expected


def test_quote_number_keeps_digits_only():
    assert format_quote_number("Q-2026-0042") == "20260042"
    assert format_quote_number("abc") == "abc"


def test_approval_url_trims_trailing_slashes():
    assert approval_url("https://quotes.example.com//", "a b") == "https://quotes.example.com/approve/a%20b"


def test_public_link_gets_a_button():
    msg = build_approval_message(
        quote_id="q-1",
        company_name="Tom & Jerry <Ltd>",
        system_name=None,
        total=Decimal("12345.6"),
        requester_label="Suda Rakdee",
        link="https://quotes.example.com/approve/q-1",
    )

    assert msg.parse_mode == "HTML"
    assert "Tom &amp; Jerry &lt;Ltd&gt;" in msg.text
    assert "ระบบ: -" in msg.text
    assert "฿12,346" in msg.text
    assert "ผู้ขอ: Suda Rakdee" in msg.text
    assert msg.buttons[0].url == "https://quotes.example.com/approve/q-1"


def test_local_link_is_plain_text():
    msg = build_approval_message(
        quote_id="q-1",
        company_name="ACME",
        system_name="CCTV",
        total=0,
        requester_label="",
        link="http://localhost:8000/approve/q-1",
    )

    assert msg.buttons is None
    assert "<a href" not in msg.text
    assert "http://localhost:8000/approve/q-1" in msg.text
    assert "ผู้ขอ" not in msg.text
