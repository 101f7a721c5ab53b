# quotedesk/repositories/approvals.py
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from quotedesk.models.quote_approval import ApprovalStatus, QuoteApproval


class ApprovalStore:
    """Narrow access to the quote_approvals table; callers own the transaction."""

    def __init__(self, db: Session):
        self.db = db

    def latest_for_quote(self, quote_id: str) -> Optional[QuoteApproval]:
        stmt = (
            select(QuoteApproval)
            .where(QuoteApproval.quote_id == quote_id)
            .order_by(QuoteApproval.requested_at.desc())
            .limit(1)
        )
        return self.db.execute(stmt).scalars().first()

    def latest_for_quotes(self, quote_ids: Iterable[str]) -> dict[str, QuoteApproval]:
        ids = list(dict.fromkeys(quote_ids))
        if not ids:
            return {}
        stmt = (
            select(QuoteApproval)
            .where(QuoteApproval.quote_id.in_(ids))
            .order_by(QuoteApproval.requested_at.desc())
        )
        latest: dict[str, QuoteApproval] = {}
        for row in self.db.execute(stmt).scalars():
            latest.setdefault(row.quote_id, row)
        return latest

    def insert_pending(
        self, quote_id: str, requested_by: Optional[str], requested_at: datetime
    ) -> QuoteApproval:
        row = QuoteApproval(
            id=str(uuid.uuid4()),
            quote_id=quote_id,
            status=ApprovalStatus.PENDING.value,
            requested_by=requested_by or None,
            requested_at=requested_at,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def attach_notification(
        self,
        approval_id: str,
        *,
        chat_id: Optional[int],
        message_id: Optional[int],
    ) -> None:
        values = {}
        if chat_id is not None:
            values["telegram_chat_id"] = chat_id
        if message_id:
            values["telegram_message_id"] = message_id
        if not values:
            return
        self.db.execute(
            update(QuoteApproval).where(QuoteApproval.id == approval_id).values(**values)
        )
        self.db.commit()

    def delete(self, approval_id: str) -> None:
        self.db.execute(delete(QuoteApproval).where(QuoteApproval.id == approval_id))
        self.db.commit()

    def mark_approved(
        self, approval: QuoteApproval, *, approved_by: Optional[str], approved_at: datetime
    ) -> QuoteApproval:
        approval.status = ApprovalStatus.APPROVED.value
        approval.approved_at = approved_at
        approval.approved_by = approved_by
        self.db.commit()
        self.db.refresh(approval)
        return approval
