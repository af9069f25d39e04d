# schemas/settings.py

from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field

DEFAULT_PRODUCT_CATEGORIES = ["Bolo", "Pastel", "Bebida"]


class TaxRates(BaseModel):
    icms: Decimal = Field(Decimal("0"), ge=0, le=100)
    iss: Decimal = Field(Decimal("0"), ge=0, le=100)
    pis: Decimal = Field(Decimal("0"), ge=0, le=100)
    cofins: Decimal = Field(Decimal("0"), ge=0, le=100)


class PaymentRates(BaseModel):
    credit: Decimal = Field(Decimal("0"), ge=0, le=100)
    debit: Decimal = Field(Decimal("0"), ge=0, le=100)
    pix: Decimal = Field(Decimal("0"), ge=0, le=100)
    mercado_pago: Decimal = Field(Decimal("0"), ge=0, le=100)


class PlatformFees(BaseModel):
    ifood: Decimal = Field(Decimal("0"), ge=0, le=100)
    ta_na_mesa: Decimal = Field(Decimal("0"), ge=0, le=100)


class SettingsPayload(BaseModel):
    taxes: TaxRates = TaxRates()
    payment_rates: PaymentRates = PaymentRates()
    platform_fees: PlatformFees = PlatformFees()
    default_profit_margin: Decimal = Field(Decimal("30"), ge=0, le=10_000)
    product_categories: List[str] = DEFAULT_PRODUCT_CATEGORIES


class SettingsResponse(BaseModel):
    taxes: dict[str, float]
    payment_rates: dict[str, float]
    platform_fees: dict[str, float]
    default_profit_margin: float
    product_categories: List[str]

    class Config:
        from_attributes = True
