# quotedesk/routers/pins.py
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quotedesk.auth.session import PinSession, require_admin
from quotedesk.core.clock import as_utc
from quotedesk.core.errors import Conflict, NotFound, ValidationError
from quotedesk.core.logging_config import logger
from quotedesk.db import get_db
from quotedesk.models.pin import PinProfile
from quotedesk.repositories.pins import (
    ADMIN_ROLE,
    USER_ROLE,
    create_pin,
    delete_pin,
    list_pins,
    pin_taken,
    update_pin,
)
from quotedesk.routers.pin import validate_pin_format
from quotedesk.schemas.base import read_string
from quotedesk.schemas.pin import PinEntryIn, PinEntryOut

router = APIRouter(tags=["pins"])

ALLOWED_ROLES = (ADMIN_ROLE, USER_ROLE)


def _to_entry(profile: PinProfile) -> PinEntryOut:
    created = as_utc(profile.created_at)
    return PinEntryOut(
        id=profile.id,
        pin=profile.pin or "",
        first_name=profile.first_name or "",
        last_name=profile.last_name or "",
        signature_image=profile.signature_image or "",
        created_at=created.isoformat() if created else "",
    )


def _validate_names(first_name: str, last_name: str) -> None:
    if not first_name or not last_name:
        raise ValidationError("กรุณากรอกชื่อและนามสกุล")


def _validate_signature(signature: Optional[str]) -> None:
    if signature and not signature.startswith("data:image/"):
        raise ValidationError("ลายเซ็นต้องเป็นไฟล์รูปภาพ")


@router.get("/pins", response_model=list[PinEntryOut])
def get_pins(
    db: Session = Depends(get_db),
    admin: PinSession = Depends(require_admin),
):
    return [_to_entry(p) for p in list_pins(db)]


@router.post("/pin/register")
def add_pin(
    payload: PinEntryIn,
    db: Session = Depends(get_db),
    admin: PinSession = Depends(require_admin),
):
    pin = read_string(payload.pin)
    first_name = read_string(payload.first_name)
    last_name = read_string(payload.last_name)
    role = (read_string(payload.role) or USER_ROLE).lower()
    signature = read_string(payload.signature_image)

    _validate_names(first_name, last_name)
    if not pin:
        raise ValidationError("กรุณากรอก PIN")
    validate_pin_format(pin)
    if role not in ALLOWED_ROLES:
        raise ValidationError("กรุณาเลือก Role ให้ถูกต้อง")
    _validate_signature(signature)

    if pin_taken(db, pin):
        raise Conflict("PIN นี้ถูกใช้งานแล้ว")

    profile = create_pin(
        db,
        pin=pin,
        first_name=first_name,
        last_name=last_name,
        role=role,
        signature_image=signature or None,
    )
    logger.bind(pin_id=profile.id).info("pin_created", role=role)
    return {"ok": True}


@router.put("/pins/{pin_id}", response_model=PinEntryOut)
def edit_pin(
    pin_id: str,
    payload: PinEntryIn,
    db: Session = Depends(get_db),
    admin: PinSession = Depends(require_admin),
):
    pin = read_string(payload.pin)
    first_name = read_string(payload.first_name)
    last_name = read_string(payload.last_name)
    has_signature = "signature_image" in payload.model_fields_set
    signature = read_string(payload.signature_image)

    _validate_names(first_name, last_name)
    validate_pin_format(pin)
    if has_signature:
        _validate_signature(signature)

    if pin_taken(db, pin, exclude_id=pin_id):
        raise Conflict("PIN นี้ถูกใช้งานแล้ว")

    values = {"pin": pin, "first_name": first_name, "last_name": last_name}
    if has_signature:
        values["signature_image"] = signature or None

    profile = update_pin(db, pin_id, **values)
    if profile is None:
        raise NotFound("ไม่พบ PIN")
    return _to_entry(profile)


@router.delete("/pins/{pin_id}")
def remove_pin(
    pin_id: str,
    db: Session = Depends(get_db),
    admin: PinSession = Depends(require_admin),
):
    if not delete_pin(db, pin_id):
        raise NotFound("ไม่พบ PIN")
    logger.bind(pin_id=pin_id).info("pin_deleted")
    return {"ok": True}
