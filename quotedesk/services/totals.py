"""Quote totals: subtotal -> discount -> VAT -> grand total.

The stored quote only keeps the discounted total; the discount is derived
back from the recomputed subtotal whenever a quote is displayed, and VAT is
never stored at all. Every place that shows a quote goes through
``document_totals`` so the numbers agree everywhere.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

MONEY = Decimal("0.01")
VAT_RATE = Decimal("0.07")
ZERO = Decimal("0")
# largest value a Numeric(14, 2) column holds
MAX_AMOUNT = Decimal("999999999999.99")


def qmoney(x: Decimal) -> Decimal:
    return x.quantize(MONEY, rounding=ROUND_HALF_UP)


def to_decimal(value: Any) -> Decimal:
    """Lenient number parsing: anything non-numeric or non-finite becomes 0."""
    if isinstance(value, bool) or value is None:
        return ZERO
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, (int, float)):
        d = Decimal(str(value))
    elif isinstance(value, str):
        raw = value.strip()
        if not raw:
            return ZERO
        try:
            d = Decimal(raw)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO
    if not d.is_finite():
        return ZERO
    return d


@dataclass(frozen=True)
class LineItem:
    description: str
    qty: Decimal
    price: Decimal

    @property
    def amount(self) -> Decimal:
        return self.qty * self.price

    def as_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "qty": float(self.qty),
            "price": float(self.price),
        }


@dataclass(frozen=True)
class QuoteTotals:
    subtotal: Decimal
    discount: Decimal
    total: Decimal


@dataclass(frozen=True)
class DocumentTotals:
    subtotal: Decimal
    discount: Decimal
    net: Decimal
    vat_rate: Decimal
    vat: Decimal
    grand_total: Decimal


def _read(item: Any, key: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(key)
    return getattr(item, key, None)


def normalize_items(raw_items: Any) -> list[LineItem]:
    """
    Clamp qty/price at zero and silently drop lines without a description
    or with a non-positive quantity.
    """
    if not isinstance(raw_items, (list, tuple)):
        return []

    items: list[LineItem] = []
    for raw in raw_items:
        if raw is None:
            continue
        description = _read(raw, "description")
        description = description.strip() if isinstance(description, str) else ""
        qty = min(max(to_decimal(_read(raw, "qty")), ZERO), MAX_AMOUNT)
        price = min(max(to_decimal(_read(raw, "price")), ZERO), MAX_AMOUNT)
        if not description or qty <= 0:
            continue
        items.append(LineItem(description=description, qty=qty, price=price))
    return items


def raw_subtotal(items: Iterable[LineItem]) -> Decimal:
    return sum((item.amount for item in items), ZERO)


def within_money_range(items: Iterable[LineItem]) -> bool:
    return raw_subtotal(items) <= MAX_AMOUNT


def subtotal_of(items: Iterable[LineItem]) -> Decimal:
    """Rounded to satang, the same precision the stored total has; capped at MAX_AMOUNT."""
    return qmoney(min(raw_subtotal(items), MAX_AMOUNT))


def calc_totals(items: Iterable[LineItem], discount: Any = 0) -> QuoteTotals:
    subtotal = subtotal_of(items)
    applied = qmoney(min(max(to_decimal(discount), ZERO), subtotal))
    return QuoteTotals(subtotal=subtotal, discount=applied, total=subtotal - applied)


def derive_discount(subtotal: Decimal, stored_total: Any) -> Decimal:
    return max(subtotal - to_decimal(stored_total), ZERO)


def calc_vat(net: Decimal) -> tuple[Decimal, Decimal]:
    vat = qmoney(net * VAT_RATE)
    return vat, qmoney(net + vat)


def document_totals(items: Iterable[LineItem], stored_total: Any) -> DocumentTotals:
    subtotal = subtotal_of(items)
    discount = derive_discount(subtotal, stored_total)
    net = max(subtotal - discount, ZERO)
    vat, grand_total = calc_vat(net)
    return DocumentTotals(
        subtotal=subtotal,
        discount=discount,
        net=net,
        vat_rate=VAT_RATE,
        vat=vat,
        grand_total=grand_total,
    )
