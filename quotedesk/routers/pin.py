# quotedesk/routers/pin.py
import re

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.orm import Session

from quotedesk.auth.session import PIN_COOKIE, ROLE_COOKIE, PinSession, get_pin_session
from quotedesk.core.errors import Unauthorized, ValidationError
from quotedesk.core.logging_config import logger
from quotedesk.core.settings import Settings, get_settings
from quotedesk.db import get_db
from quotedesk.repositories.pins import ADMIN_ROLE, USER_ROLE, find_by_pin
from quotedesk.schemas.base import read_string
from quotedesk.schemas.pin import PinLoginIn, PinProfileOut

router = APIRouter(tags=["pin"])

PIN_LENGTH = 6
_PIN_RE = re.compile(rf"^\d{{{PIN_LENGTH}}}$")


def validate_pin_format(pin: str) -> None:
    if not _PIN_RE.match(pin):
        raise ValidationError(f"กรุณากรอก PIN {PIN_LENGTH} หลัก")


@router.post("/pin")
def login(
    payload: PinLoginIn,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    pin = read_string(payload.pin)
    validate_pin_format(pin)

    profile = find_by_pin(db, pin)
    if profile is None:
        logger.info("pin_login_rejected")
        raise Unauthorized("PIN ไม่ถูกต้อง")

    role = ADMIN_ROLE if profile.role == ADMIN_ROLE else USER_ROLE
    response = JSONResponse({"ok": True})
    for name, value in ((PIN_COOKIE, pin), (ROLE_COOKIE, role)):
        response.set_cookie(
            name,
            value,
            max_age=settings.pin_cookie_max_age,
            path="/",
            httponly=True,
            samesite="lax",
            secure=settings.is_production,
        )
    logger.bind(pin_id=profile.id).info("pin_login", role=role)
    return response


@router.get("/pin", response_model=PinProfileOut)
def current_profile(
    db: Session = Depends(get_db),
    session: PinSession = Depends(get_pin_session),
):
    if not session.is_authenticated:
        return PinProfileOut()

    profile = find_by_pin(db, session.pin)
    if profile is None:
        return PinProfileOut()
    return PinProfileOut(
        first_name=profile.first_name or "",
        last_name=profile.last_name or "",
        role=ADMIN_ROLE if profile.role == ADMIN_ROLE else USER_ROLE,
        signature_image=profile.signature_image or "",
    )


@router.get("/logout")
def logout(settings: Settings = Depends(get_settings)):
    response = RedirectResponse(url="/pin", status_code=302)
    response.delete_cookie(
        PIN_COOKIE,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    return response
