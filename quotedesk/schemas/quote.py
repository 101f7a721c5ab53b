from typing import Any, Optional

from pydantic import BaseModel

from quotedesk.schemas.base import CamelModel


class QuoteCreateIn(CamelModel):
    customer_id: Any = None
    company_name: Any = None
    system_name: Any = None
    items: Any = None
    discount: Any = None
    note: Any = None


class QuoteCreatedOut(BaseModel):
    id: str


class QuoteItemOut(BaseModel):
    description: str
    qty: float
    price: float


class QuoteTotalsOut(BaseModel):
    subtotal: float
    discount: float
    net: float
    vat: float
    grand_total: float


class QuoteOut(BaseModel):
    # quote responses keep the table column names (snake_case), totals included
    id: str
    company_name: str
    system_name: str
    items: list[dict[str, Any]]
    total: float
    created_at: Optional[str] = None
    customer_id: Optional[str] = None
    note: Optional[str] = None


class QuoteDetailOut(QuoteOut):
    totals: QuoteTotalsOut


class NotifyIn(BaseModel):
    text: Any = None
