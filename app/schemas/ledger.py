# schemas/ledger.py

from typing import Literal
from pydantic import BaseModel, Field
import datetime as dt
from decimal import Decimal

from app.schemas.common import PaymentMethod

ExpenseCategory = Literal["Marketing", "Sales", "Software", "Team", "Other"]


class RevenueCreate(BaseModel):
    amount: Decimal = Field(..., ge=0, lt=100_000_000)
    source: str = Field(..., min_length=1)
    date: dt.date
    payment_method: PaymentMethod | None = None


class RevenueUpdate(BaseModel):
    amount: Decimal | None = Field(None, ge=0, lt=100_000_000)
    source: str | None = None
    date: dt.date | None = None
    payment_method: PaymentMethod | None = None


class RevenueResponse(BaseModel):
    id: int
    amount: float
    source: str
    date: dt.date
    payment_method: PaymentMethod | None
    sale_id: int | None

    class Config:
        from_attributes = True


class ExpenseCreate(BaseModel):
    amount: Decimal = Field(..., ge=0, lt=100_000_000)
    category: ExpenseCategory = "Other"
    description: str = Field(..., min_length=1)
    date: dt.date
    payment_method: PaymentMethod | None = None


class ExpenseUpdate(BaseModel):
    amount: Decimal | None = Field(None, ge=0, lt=100_000_000)
    category: ExpenseCategory | None = None
    description: str | None = None
    date: dt.date | None = None
    payment_method: PaymentMethod | None = None


class ExpenseResponse(BaseModel):
    id: int
    amount: float
    category: ExpenseCategory
    description: str
    date: dt.date
    payment_method: PaymentMethod | None

    class Config:
        from_attributes = True
