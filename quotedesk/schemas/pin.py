from typing import Any, Optional

from quotedesk.schemas.base import CamelModel


class PinLoginIn(CamelModel):
    pin: Any = None


class PinProfileOut(CamelModel):
    first_name: str = ""
    last_name: str = ""
    role: str = "user"
    signature_image: str = ""


class PinEntryIn(CamelModel):
    pin: Any = None
    first_name: Any = None
    last_name: Any = None
    role: Any = None
    signature_image: Optional[Any] = None


class PinEntryOut(CamelModel):
    id: str
    pin: str = ""
    first_name: str = ""
    last_name: str = ""
    signature_image: str = ""
    created_at: str = ""
