# quotedesk/routers/telegram.py
from fastapi import APIRouter, Depends

from quotedesk.auth.session import PinSession, require_pin
from quotedesk.core.errors import NotificationFailed, ValidationError
from quotedesk.schemas.base import read_string
from quotedesk.schemas.quote import NotifyIn
from quotedesk.services.telegram import NotificationError, TelegramNotifier, get_notifier

router = APIRouter(prefix="/telegram", tags=["telegram"])


@router.post("/notify")
def notify(
    payload: NotifyIn,
    session: PinSession = Depends(require_pin),
    notifier: TelegramNotifier = Depends(get_notifier),
):
    text = read_string(payload.text)
    if not text:
        raise ValidationError("Missing text")

    try:
        sent = notifier.send_message(text)
    except NotificationError as e:
        raise NotificationFailed(str(e)) from e
    return {"ok": True, "messageId": sent.message_id}
