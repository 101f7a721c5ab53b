from typing import Any

from quotedesk.schemas.base import CamelModel


class CustomerIn(CamelModel):
    company_name: Any = None
    tax_id: Any = None
    contact_name: Any = None
    contact_phone: Any = None
    address: Any = None
    approx_purchase_date: Any = None


class CustomerOut(CamelModel):
    id: str
    company_name: str = ""
    tax_id: str = ""
    contact_name: str = ""
    contact_phone: str = ""
    address: str = ""
    approx_purchase_date: str = ""
    created_at: str = ""
