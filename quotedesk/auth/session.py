from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Request

from quotedesk.core.errors import Forbidden, Unauthorized
from quotedesk.core.settings import Settings, get_settings

PIN_COOKIE = "pin_auth"
ROLE_COOKIE = "pin_role"
# legacy value written by an older login flow; carries no identity
PLACEHOLDER_PIN = "ok"


@dataclass(frozen=True)
class PinSession:
    pin: str
    role: str
    is_authenticated: bool
    is_admin: bool

    @property
    def requester_fallback(self) -> str:
        return f"PIN {self.pin}" if self.pin else ""


def resolve_session(pin: str, role_cookie: str, master_pins) -> PinSession:
    pin = (pin or "").strip()
    role = "admin" if role_cookie == "admin" else "user"
    is_authenticated = bool(pin) and pin != PLACEHOLDER_PIN
    is_admin = is_authenticated and (role == "admin" or pin in set(master_pins))
    return PinSession(pin=pin, role=role, is_authenticated=is_authenticated, is_admin=is_admin)


def get_pin_session(
    request: Request, settings: Settings = Depends(get_settings)
) -> PinSession:
    return resolve_session(
        request.cookies.get(PIN_COOKIE, ""),
        request.cookies.get(ROLE_COOKIE, ""),
        settings.master_pins,
    )


def require_pin(session: PinSession = Depends(get_pin_session)) -> PinSession:
    if not session.is_authenticated:
        raise Unauthorized()
    return session


def require_admin(session: PinSession = Depends(get_pin_session)) -> PinSession:
    # PIN management answers 403 for anyone without the admin cookie or a master PIN
    if not session.is_admin:
        raise Forbidden("สิทธิ์ไม่เพียงพอ")
    return session
