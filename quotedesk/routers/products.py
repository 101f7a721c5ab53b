# quotedesk/routers/products.py
import uuid
from decimal import Decimal
from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from quotedesk.core.errors import NotFound, ValidationError
from quotedesk.db import get_db
from quotedesk.models.product import Product
from quotedesk.schemas.base import read_string
from quotedesk.schemas.product import ProductIn, ProductOut
from quotedesk.services.totals import ZERO, qmoney, to_decimal

router = APIRouter(prefix="/products", tags=["products"])


def read_price(value: Any) -> Decimal:
    # negative or non-numeric prices are stored as 0
    return qmoney(max(to_decimal(value), ZERO))


def build_values(payload: ProductIn) -> dict[str, Any]:
    legacy = read_price(payload.unit_price)

    def tier(value: Any) -> Decimal:
        return legacy if value is None else read_price(value)

    return {
        "name": read_string(payload.name),
        "sku": read_string(payload.sku),
        "unit": read_string(payload.unit),
        "dealer_price": tier(payload.dealer_price),
        "project_price": tier(payload.project_price),
        "user_price": tier(payload.user_price),
        "description": read_string(payload.description),
    }


def _to_out(p: Product) -> ProductOut:
    return ProductOut(
        id=p.id,
        name=p.name or "",
        sku=p.sku or "",
        unit=p.unit or "",
        dealer_price=float(p.dealer_price or 0),
        project_price=float(p.project_price or 0),
        user_price=float(p.user_price or 0),
        description=p.description or "",
    )


def _require_name(values: dict[str, Any]) -> None:
    if not values["name"]:
        raise ValidationError("กรุณาระบุชื่อสินค้า")


@router.get("", response_model=list[ProductOut])
def list_products(db: Session = Depends(get_db)):
    rows = db.query(Product).order_by(Product.created_at.desc()).all()
    return [_to_out(p) for p in rows]


@router.post("", response_model=ProductOut, status_code=201)
def create_product(payload: ProductIn, db: Session = Depends(get_db)):
    values = build_values(payload)
    _require_name(values)

    product = Product(id=str(uuid.uuid4()), **values)
    db.add(product)
    db.commit()
    db.refresh(product)
    return _to_out(product)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(product_id: str, payload: ProductIn, db: Session = Depends(get_db)):
    values = build_values(payload)
    _require_name(values)

    product = db.get(Product, product_id)
    if product is None:
        raise NotFound("ไม่พบสินค้า")
    for key, value in values.items():
        setattr(product, key, value)
    db.commit()
    db.refresh(product)
    return _to_out(product)


@router.delete("/{product_id}")
def delete_product(product_id: str, db: Session = Depends(get_db)):
    product = db.get(Product, product_id)
    if product is None:
        raise NotFound("ไม่พบสินค้า")
    db.delete(product)
    db.commit()
    return {"ok": True}
