# schemas/purchase.py

from pydantic import BaseModel, Field
import datetime as dt
from decimal import Decimal


class PurchaseCreate(BaseModel):
    raw_material_id: int
    quantity: Decimal = Field(..., gt=0)
    unit_cost: Decimal = Field(..., ge=0)
    date: dt.date | None = None


class PurchaseResponse(BaseModel):
    id: int
    raw_material_id: int | None
    quantity: float
    unit_cost: float
    total: float
    date: dt.date

    class Config:
        from_attributes = True


class PurchaseActionResult(BaseModel):
    success: bool
    message: str
    purchase: PurchaseResponse | None = None
