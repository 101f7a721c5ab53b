# quotedesk/models/quote.py
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from quotedesk.db import Base


class Quote(Base):
    __tablename__ = "quotes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    customer_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("customers.id", ondelete="SET NULL"), index=True, nullable=True
    )

    company_name: Mapped[str] = mapped_column(String(300), nullable=False)
    system_name: Mapped[str] = mapped_column(String(300), nullable=False)

    # snapshot of [{description, qty, price}] at quote time
    items: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    # discounted total excluding VAT; the discount itself is not stored
    total: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Quote id={self.id} company={self.company_name!r} total={self.total}>"
