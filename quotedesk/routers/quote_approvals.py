# quotedesk/routers/quote_approvals.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from quotedesk.auth.session import PinSession, require_pin
from quotedesk.core.errors import ValidationError
from quotedesk.dependencies import get_approval_service, request_origin
from quotedesk.schemas.approval import ApprovalOut, ApprovalRequestIn, ApprovalStatusesOut
from quotedesk.schemas.base import read_string
from quotedesk.services.approvals import ApprovalService

router = APIRouter(prefix="/quote-approvals", tags=["approvals"])


def _split_ids(*raw_values: Optional[str]) -> list[str]:
    ids: list[str] = []
    for raw in raw_values:
        for part in (raw or "").split(","):
            part = part.strip()
            if part and part not in ids:
                ids.append(part)
    return ids


@router.post("", response_model=ApprovalOut, response_model_exclude_none=True)
def request_approval(
    payload: ApprovalRequestIn,
    request: Request,
    session: PinSession = Depends(require_pin),
    service: ApprovalService = Depends(get_approval_service),
):
    quote_id = read_string(payload.quoteId)
    if not quote_id:
        raise ValidationError("Missing quoteId")
    return service.request_approval(quote_id, session, origin=request_origin(request))


@router.get("", response_model=ApprovalStatusesOut)
def approval_statuses(
    ids: Optional[str] = Query(default=None),
    quote_id: Optional[str] = Query(default=None, alias="quoteId"),
    session: PinSession = Depends(require_pin),
    service: ApprovalService = Depends(get_approval_service),
):
    quote_ids = _split_ids(ids, quote_id)
    if not quote_ids:
        raise ValidationError("Missing quoteIds")
    return {"statuses": service.statuses(quote_ids)}


@router.post("/{quote_id}/approve", response_model=ApprovalOut, response_model_exclude_none=True)
def approve_quote(
    quote_id: str,
    session: PinSession = Depends(require_pin),
    service: ApprovalService = Depends(get_approval_service),
):
    return service.approve(quote_id.strip(), session)
