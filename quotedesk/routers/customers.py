# quotedesk/routers/customers.py
import re
import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quotedesk.core.clock import as_utc
from quotedesk.core.errors import ValidationError
from quotedesk.db import get_db
from quotedesk.models.customer import Customer
from quotedesk.schemas.base import read_string
from quotedesk.schemas.customer import CustomerIn, CustomerOut

router = APIRouter(prefix="/customers", tags=["customers"])

TAX_ID_LENGTH = 13


def normalize_tax_id(value: str) -> str:
    return re.sub(r"\D", "", value)


def _to_out(c: Customer) -> CustomerOut:
    created = as_utc(c.created_at)
    return CustomerOut(
        id=c.id,
        company_name=c.company_name or "",
        tax_id=c.tax_id or "",
        contact_name=c.contact_name or "",
        contact_phone=c.contact_phone or "",
        address=c.address or "",
        approx_purchase_date=c.approx_purchase_date or "",
        created_at=created.isoformat() if created else "",
    )


@router.get("", response_model=list[CustomerOut])
def list_customers(db: Session = Depends(get_db)):
    rows = db.query(Customer).order_by(Customer.created_at.desc()).all()
    return [_to_out(c) for c in rows]


@router.post("", response_model=CustomerOut, status_code=201)
def create_customer(payload: CustomerIn, db: Session = Depends(get_db)):
    company_name = read_string(payload.company_name)
    tax_id = normalize_tax_id(read_string(payload.tax_id))

    if not company_name:
        raise ValidationError("กรุณาระบุ “ชื่อบริษัท”")
    if tax_id and len(tax_id) != TAX_ID_LENGTH:
        raise ValidationError("เลขประจำตัวผู้เสียภาษีต้องเป็นตัวเลข 13 หลัก")

    customer = Customer(
        id=str(uuid.uuid4()),
        company_name=company_name,
        tax_id=tax_id,
        contact_name=read_string(payload.contact_name),
        contact_phone=read_string(payload.contact_phone),
        address=read_string(payload.address),
        approx_purchase_date=read_string(payload.approx_purchase_date),
    )
    db.add(customer)
    db.commit()
    db.refresh(customer)
    return _to_out(customer)
