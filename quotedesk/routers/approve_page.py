# quotedesk/routers/approve_page.py
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from quotedesk.auth.session import PinSession
from quotedesk.core.settings import Settings, get_settings
from quotedesk.db import get_db
from quotedesk.dependencies import get_approval_service, get_renderer, require_pin_html
from quotedesk.repositories.pins import resolve_actor
from quotedesk.repositories.quotes import get_customer_for_quote, get_quote_by_id
from quotedesk.services.approvals import ApprovalService
from quotedesk.services.quote_document import QuoteDocumentRenderer

router = APIRouter(tags=["pages"])


@router.get("/approve/{quote_id}", response_class=HTMLResponse)
def approve_page(
    quote_id: str,
    db: Session = Depends(get_db),
    session: PinSession = Depends(require_pin_html),
    service: ApprovalService = Depends(get_approval_service),
    renderer: QuoteDocumentRenderer = Depends(get_renderer),
    settings: Settings = Depends(get_settings),
):
    quote = get_quote_by_id(db, quote_id.strip())
    if quote is None:
        html = renderer.render_html(
            "message.html",
            {"company_name": renderer.company_name, "message": "ไม่พบใบเสนอราคา"},
        )
        return HTMLResponse(html, status_code=404)

    # the button is shown to whoever the approve endpoint would accept
    is_admin = resolve_actor(db, session.pin, settings.master_pins).is_admin

    ctx = renderer.prepare_context(
        quote,
        customer=get_customer_for_quote(db, quote),
        approval=service.latest(quote.id),
        is_admin=is_admin,
    )
    return HTMLResponse(renderer.render_html("approve.html", ctx))
