from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from quotedesk.core.clock import as_utc
from quotedesk.services.totals import qmoney, to_decimal

CURRENCY_SYMBOL = "฿"


def format_number(value: Any, places: int = 2) -> str:
    # 12345.678 -> 12,345.68
    d = to_decimal(value)
    if places == 0:
        d = d.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    else:
        d = qmoney(d)
    return f"{d:,.{places}f}"


def format_currency(value: Any) -> str:
    """Whole baht, used in chat messages: ฿12,346"""
    d = to_decimal(value)
    sign = "-" if d < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{format_number(abs(d), places=0)}"


def format_currency_plain(value: Any) -> str:
    return format_number(value, places=2)


def format_datetime(value: Optional[datetime], fmt: str = "%d/%m/%Y %H:%M") -> str:
    dt = as_utc(value)
    if dt is None:
        return "-"
    return dt.strftime(fmt)


def format_date(value: Optional[datetime]) -> str:
    return format_datetime(value, "%d/%m/%Y")


FILTERS = {
    "money": format_currency_plain,
    "currency": format_currency,
    "datetime": format_datetime,
    "date": format_date,
}
