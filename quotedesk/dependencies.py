from __future__ import annotations

from functools import lru_cache
from urllib.parse import quote as urlquote

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from quotedesk.auth.session import PinSession, get_pin_session
from quotedesk.core.clock import Clock, get_clock
from quotedesk.core.settings import Settings, get_settings
from quotedesk.db import get_db
from quotedesk.services.approvals import ApprovalService
from quotedesk.services.quote_document import QuoteDocumentRenderer
from quotedesk.services.telegram import TelegramNotifier, get_notifier


def request_origin(request: Request) -> str:
    origin = (request.headers.get("origin") or "").strip()
    if origin and origin != "null":
        return origin
    return str(request.base_url).rstrip("/")


def get_approval_service(
    db: Session = Depends(get_db),
    notifier: TelegramNotifier = Depends(get_notifier),
    clock: Clock = Depends(get_clock),
    settings: Settings = Depends(get_settings),
) -> ApprovalService:
    return ApprovalService(
        db,
        notifier,
        master_pins=settings.master_pins,
        base_url=settings.app_base_url,
        clock=clock,
    )


@lru_cache(maxsize=1)
def _renderer(company_name: str) -> QuoteDocumentRenderer:
    return QuoteDocumentRenderer(company_name=company_name)


def get_renderer(settings: Settings = Depends(get_settings)) -> QuoteDocumentRenderer:
    return _renderer(settings.company_name)


def require_pin_html(
    request: Request, session: PinSession = Depends(get_pin_session)
) -> PinSession:
    """HTML pages send unauthenticated visitors to the PIN screen."""
    if not session.is_authenticated:
        path = request.url.path
        qs = request.url.query
        next_url = path + (("?" + qs) if qs else "")
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            detail="Not authenticated",
            headers={"Location": f"/pin?redirectTo={urlquote(next_url, safe='')}"},
        )
    return session
