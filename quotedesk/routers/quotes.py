# quotedesk/routers/quotes.py
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, Response
from sqlalchemy.orm import Session

from quotedesk.auth.session import PinSession
from quotedesk.core.errors import Conflict, NotFound, UpstreamFailure, ValidationError
from quotedesk.core.logging_config import logger
from quotedesk.db import get_db
from quotedesk.dependencies import get_approval_service, get_renderer, require_pin_html
from quotedesk.models.quote_approval import ApprovalStatus
from quotedesk.repositories.quotes import (
    create_quote,
    get_customer_for_quote,
    get_quote_by_id,
    list_recent_quotes,
    quote_to_dict,
)
from quotedesk.schemas.base import read_optional_string, read_string
from quotedesk.schemas.quote import QuoteCreatedOut, QuoteCreateIn, QuoteDetailOut, QuoteOut
from quotedesk.services.approvals import ApprovalService
from quotedesk.services.quote_document import QuoteDocumentRenderer
from quotedesk.services.totals import (
    calc_totals,
    document_totals,
    normalize_items,
    within_money_range,
)

router = APIRouter(prefix="/quotes", tags=["quotes"])


def _load_quote(db: Session, quote_id: str):
    quote = get_quote_by_id(db, quote_id)
    if quote is None:
        raise NotFound("ไม่พบใบเสนอราคา")
    return quote


@router.get("", response_model=list[QuoteOut])
def list_quotes(db: Session = Depends(get_db)):
    return [quote_to_dict(q) for q in list_recent_quotes(db, limit=20)]


@router.post("", response_model=QuoteCreatedOut)
def create(payload: QuoteCreateIn, db: Session = Depends(get_db)):
    company_name = read_string(payload.company_name)
    if not company_name:
        raise ValidationError("กรุณาไปเลือกรายชื่อลูกค้าก่อน")

    items = normalize_items(payload.items)
    if not items:
        raise ValidationError("กรุณาเพิ่มรายการสินค้าอย่างน้อย 1 รายการ")
    if not within_money_range(items):
        raise ValidationError("ยอดรวมเกินกว่าที่ระบบรองรับ")

    totals = calc_totals(items, payload.discount)
    quote = create_quote(
        db,
        customer_id=read_optional_string(payload.customer_id),
        company_name=company_name,
        system_name=read_string(payload.system_name) or company_name,
        items=items,
        total=totals.total,
        note=read_optional_string(payload.note),
    )
    logger.bind(quote_id=quote.id).info("quote_created", total=str(quote.total))
    return {"id": quote.id}


@router.get("/{quote_id}", response_model=QuoteDetailOut)
def get_quote(quote_id: str, db: Session = Depends(get_db)):
    quote = _load_quote(db, quote_id)
    totals = document_totals(normalize_items(quote.items), quote.total)
    return {
        **quote_to_dict(quote),
        "totals": {
            "subtotal": float(totals.subtotal),
            "discount": float(totals.discount),
            "net": float(totals.net),
            "vat": float(totals.vat),
            "grand_total": float(totals.grand_total),
        },
    }


@router.get("/{quote_id}/document", response_class=HTMLResponse)
def quote_document(
    quote_id: str,
    db: Session = Depends(get_db),
    session: PinSession = Depends(require_pin_html),
    service: ApprovalService = Depends(get_approval_service),
    renderer: QuoteDocumentRenderer = Depends(get_renderer),
):
    quote = _load_quote(db, quote_id)
    ctx = renderer.prepare_context(
        quote,
        customer=get_customer_for_quote(db, quote),
        approval=service.latest(quote.id),
        is_admin=session.is_admin,
    )
    return HTMLResponse(renderer.render_html("quote_document.html", ctx))


@router.get("/{quote_id}/pdf")
def quote_pdf(
    quote_id: str,
    db: Session = Depends(get_db),
    session: PinSession = Depends(require_pin_html),
    service: ApprovalService = Depends(get_approval_service),
    renderer: QuoteDocumentRenderer = Depends(get_renderer),
):
    quote = _load_quote(db, quote_id)
    approval = service.latest(quote.id)
    if approval is None or approval.status != ApprovalStatus.APPROVED.value:
        raise Conflict("ใบเสนอราคายังไม่ได้รับการอนุมัติ")

    ctx = renderer.prepare_context(
        quote,
        customer=get_customer_for_quote(db, quote),
        approval=approval,
        is_admin=session.is_admin,
    )
    html = renderer.render_html("quote_document.html", ctx)
    try:
        pdf_bytes = renderer.render_pdf(html)
    except RuntimeError as e:
        raise UpstreamFailure(str(e)) from e

    filename = f"quote-{ctx['quote_number']}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )
