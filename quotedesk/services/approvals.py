# quotedesk/services/approvals.py
from __future__ import annotations

from typing import Any, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from quotedesk.auth.session import PinSession
from quotedesk.core.clock import Clock, as_utc, utcnow
from quotedesk.core.errors import Forbidden, NotFound, NotificationFailed, Unauthorized
from quotedesk.core.logging_config import logger
from quotedesk.models.quote import Quote
from quotedesk.models.quote_approval import ApprovalStatus
from quotedesk.repositories.approvals import ApprovalStore
from quotedesk.repositories.pins import requester_name, resolve_actor
from quotedesk.services.approval_guard import GuardOutcome, decide
from quotedesk.services.approval_message import approval_url, build_approval_message
from quotedesk.services.telegram import NotificationError, TelegramNotifier


def _parse_chat_id(value: str) -> Optional[int]:
    try:
        return int(str(value).strip())
    except ValueError:
        return None


class ApprovalService:
    """
    Quote approval workflow: request (guarded by a cooldown, announced in the
    chat), approve (admin only, idempotent) and status lookup.
    """

    def __init__(
        self,
        db: Session,
        notifier: TelegramNotifier,
        *,
        master_pins: Iterable[str],
        base_url: Optional[str] = None,
        clock: Clock = utcnow,
    ):
        self.db = db
        self.store = ApprovalStore(db)
        self.notifier = notifier
        self.master_pins = list(master_pins)
        self.base_url = (base_url or "").strip()
        self.clock = clock

    # ---- request ------------------------------------------------------

    def request_approval(
        self, quote_id: str, session: PinSession, *, origin: str
    ) -> dict[str, Any]:
        if not session.is_authenticated:
            raise Unauthorized()

        quote = self.db.get(Quote, quote_id)
        if quote is None:
            raise NotFound("ไม่พบใบเสนอราคา")

        now = self.clock()
        log = logger.bind(quote_id=quote_id)

        decision = decide(self.store.latest_for_quote(quote_id), now)
        if decision.outcome is GuardOutcome.ALREADY_APPROVED:
            return {"status": ApprovalStatus.APPROVED.value}
        if decision.outcome is GuardOutcome.COOLDOWN:
            log.info("approval_cooldown", retry_after_seconds=decision.retry_after_seconds)
            return {
                "status": ApprovalStatus.PENDING.value,
                "requested": False,
                "retryAfterSeconds": decision.retry_after_seconds,
            }

        label = requester_name(self.db, session.pin) or session.requester_fallback
        approval = self.store.insert_pending(quote_id, label, now)
        log = log.bind(approval_id=approval.id)

        message = build_approval_message(
            quote_id=quote.id,
            company_name=quote.company_name,
            system_name=quote.system_name,
            total=quote.total,
            requester_label=label,
            link=approval_url(self.base_url or origin, quote.id),
        )

        try:
            sent = self.notifier.send_message(
                message.text, parse_mode=message.parse_mode, buttons=message.buttons
            )
        except NotificationError as e:
            # no pending request may exist without its notification
            self.store.delete(approval.id)
            log.warning("approval_rollback", error=str(e))
            raise NotificationFailed(str(e)) from e

        try:
            self.store.attach_notification(
                approval.id,
                chat_id=_parse_chat_id(sent.chat_id),
                message_id=sent.message_id,
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            log.warning("approval_notification_ids_not_saved", error=str(e))

        log.info("approval_requested", requested_by=label)
        return {"status": ApprovalStatus.PENDING.value, "requested": True}

    # ---- approve ------------------------------------------------------

    def approve(self, quote_id: str, session: PinSession) -> dict[str, Any]:
        if not session.is_authenticated:
            raise Unauthorized()

        actor = resolve_actor(self.db, session.pin, self.master_pins)
        if not actor.is_admin:
            raise Forbidden()

        latest = self.store.latest_for_quote(quote_id)
        if latest is None:
            raise NotFound("ไม่พบคำขออนุมัติ")

        if latest.status == ApprovalStatus.APPROVED.value:
            return {"status": ApprovalStatus.APPROVED.value}

        self.store.mark_approved(
            latest, approved_by=actor.name or None, approved_at=self.clock()
        )
        logger.bind(quote_id=quote_id, approval_id=latest.id).info(
            "approval_approved", approved_by=actor.name or None
        )
        return {"status": ApprovalStatus.APPROVED.value}

    # ---- lookup -------------------------------------------------------

    def statuses(self, quote_ids: Iterable[str]) -> dict[str, dict[str, Optional[str]]]:
        latest = self.store.latest_for_quotes(quote_ids)
        out: dict[str, dict[str, Optional[str]]] = {}
        for quote_id, row in latest.items():
            requested_at = as_utc(row.requested_at)
            out[quote_id] = {
                "status": row.status,
                "requested_at": requested_at.isoformat() if requested_at else None,
            }
        return out

    def latest(self, quote_id: str):
        return self.store.latest_for_quote(quote_id)
