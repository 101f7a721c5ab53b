# quotedesk/models/product.py
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import DateTime, Numeric, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from quotedesk.db import Base


class Product(Base):
    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(300), nullable=False)
    sku: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    unit: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    # three price tiers
    dealer_price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    project_price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)
    user_price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False, default=0)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
