# quotedesk/repositories/quotes.py
from __future__ import annotations

import uuid
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.orm import Session

from quotedesk.core.clock import as_utc
from quotedesk.models.customer import Customer
from quotedesk.models.quote import Quote
from quotedesk.services.totals import LineItem, qmoney


def get_quote_by_id(db: Session, quote_id: str) -> Optional[Quote]:
    return db.get(Quote, quote_id)


def get_customer_for_quote(db: Session, quote: Quote) -> Optional[Customer]:
    if not quote.customer_id:
        return None
    return db.get(Customer, quote.customer_id)


def list_recent_quotes(db: Session, limit: int = 20) -> list[Quote]:
    return db.query(Quote).order_by(Quote.created_at.desc()).limit(limit).all()


def create_quote(
    db: Session,
    *,
    customer_id: Optional[str],
    company_name: str,
    system_name: str,
    items: list[LineItem],
    total: Decimal,
    note: Optional[str],
) -> Quote:
    quote = Quote(
        id=str(uuid.uuid4()),
        customer_id=customer_id,
        company_name=company_name,
        system_name=system_name,
        items=[item.as_dict() for item in items],
        total=qmoney(total),
        note=note,
    )
    db.add(quote)
    db.commit()
    db.refresh(quote)
    return quote


def quote_to_dict(quote: Quote) -> dict[str, Any]:
    created = as_utc(quote.created_at)
    return {
        "id": quote.id,
        "company_name": quote.company_name,
        "system_name": quote.system_name,
        "items": list(quote.items or []),
        "total": float(quote.total or 0),
        "created_at": created.isoformat() if created else None,
        "customer_id": quote.customer_id,
        "note": quote.note,
    }
