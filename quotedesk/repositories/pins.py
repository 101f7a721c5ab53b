# quotedesk/repositories/pins.py
from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from quotedesk.models.pin import PinProfile

ADMIN_ROLE = "admin"
USER_ROLE = "user"


@dataclass(frozen=True)
class ActorProfile:
    is_admin: bool
    name: str


def find_by_pin(db: Session, pin: str) -> Optional[PinProfile]:
    if not pin:
        return None
    return db.execute(select(PinProfile).where(PinProfile.pin == pin).limit(1)).scalars().first()


def requester_name(db: Session, pin: str) -> str:
    profile = find_by_pin(db, pin)
    return profile.display_name if profile else ""


def resolve_actor(db: Session, pin: str, master_pins: Iterable[str]) -> ActorProfile:
    """Approval authority comes from a master PIN or a stored admin role."""
    if pin in set(master_pins):
        return ActorProfile(is_admin=True, name="")

    profile = find_by_pin(db, pin)
    if profile is None:
        return ActorProfile(is_admin=False, name="")
    return ActorProfile(is_admin=profile.role == ADMIN_ROLE, name=profile.display_name)


def list_pins(db: Session) -> list[PinProfile]:
    return list(db.execute(select(PinProfile).order_by(PinProfile.created_at.desc())).scalars())


def pin_taken(db: Session, pin: str, *, exclude_id: Optional[str] = None) -> bool:
    stmt = select(PinProfile.id).where(PinProfile.pin == pin)
    if exclude_id is not None:
        stmt = stmt.where(PinProfile.id != exclude_id)
    return db.execute(stmt.limit(1)).first() is not None


def create_pin(
    db: Session,
    *,
    pin: str,
    first_name: str,
    last_name: str,
    role: str,
    signature_image: Optional[str],
) -> PinProfile:
    profile = PinProfile(
        id=str(uuid.uuid4()),
        pin=pin,
        first_name=first_name,
        last_name=last_name,
        role=role,
        signature_image=signature_image or None,
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


def update_pin(db: Session, pin_id: str, **values) -> Optional[PinProfile]:
    profile = db.get(PinProfile, pin_id)
    if profile is None:
        return None
    for key, value in values.items():
        setattr(profile, key, value)
    db.commit()
    db.refresh(profile)
    return profile


def delete_pin(db: Session, pin_id: str) -> bool:
    profile = db.get(PinProfile, pin_id)
    if profile is None:
        return False
    db.delete(profile)
    db.commit()
    return True
