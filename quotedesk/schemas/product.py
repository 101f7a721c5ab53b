from typing import Any

from quotedesk.schemas.base import CamelModel


class ProductIn(CamelModel):
    name: Any = None
    sku: Any = None
    unit: Any = None
    dealer_price: Any = None
    project_price: Any = None
    user_price: Any = None
    # single price from older clients; seeds any missing tier
    unit_price: Any = None
    description: Any = None


class ProductOut(CamelModel):
    id: str
    name: str = ""
    sku: str = ""
    unit: str = ""
    dealer_price: float = 0
    project_price: float = 0
    user_price: float = 0
    description: str = ""
