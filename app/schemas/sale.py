# schemas/sale.py

from pydantic import BaseModel, Field
import datetime as dt
from decimal import Decimal

from app.schemas.common import PaymentMethod


class SaleCreate(BaseModel):
    product_id: int
    flavor_id: int
    quantity: int = Field(..., gt=0)

    # Defaults to the product's sale price
    unit_price: Decimal | None = Field(None, ge=0)

    date: dt.date | None = None
    payment_method: PaymentMethod | None = None
    location: str | None = None
    commission: Decimal | None = Field(None, ge=0, le=100)


class SaleResponse(BaseModel):
    id: int
    product_id: int | None
    flavor_id: int | None
    quantity: int
    unit_price: float
    total: float
    date: dt.date
    payment_method: PaymentMethod | None
    location: str | None
    commission: float | None
    revenue_id: int | None

    class Config:
        from_attributes = True


class SaleActionResult(BaseModel):
    success: bool
    message: str
    sale: SaleResponse | None = None
