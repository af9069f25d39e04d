# schemas/raw_material.py

from decimal import Decimal
from pydantic import BaseModel, Field


class RawMaterialCreate(BaseModel):
    code: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    unit: str = "UN"
    cost: Decimal = Field(Decimal("0"), ge=0)
    supplier: str | None = None
    quantity: Decimal = Field(Decimal("0"), ge=0)
    min_stock: Decimal = Field(Decimal("0"), ge=0)


class RawMaterialUpdate(BaseModel):
    code: str | None = None
    description: str | None = None
    unit: str | None = None
    cost: Decimal | None = Field(None, ge=0)
    supplier: str | None = None
    quantity: Decimal | None = Field(None, ge=0)
    min_stock: Decimal | None = Field(None, ge=0)


class RawMaterialResponse(BaseModel):
    id: int
    code: str
    description: str
    unit: str
    cost: float
    supplier: str | None
    quantity: float
    min_stock: float

    class Config:
        from_attributes = True
