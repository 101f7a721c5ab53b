# quotedesk/models/pin.py
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from quotedesk.db import Base


class PinProfile(Base):
    __tablename__ = "pins"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    pin: Mapped[str] = mapped_column(String(6), unique=True, index=True, nullable=False)
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    role: Mapped[str] = mapped_column(String(20), nullable=False, server_default="user")

    # data:image/... URL
    signature_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    @property
    def display_name(self) -> str:
        parts = [(self.first_name or "").strip(), (self.last_name or "").strip()]
        return " ".join(p for p in parts if p).strip()
