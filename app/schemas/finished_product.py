# schemas/finished_product.py

from decimal import Decimal
from typing import List
from pydantic import BaseModel, Field


class RecipeItemIn(BaseModel):
    raw_material_id: int
    quantity: Decimal = Field(..., gt=0, description="Raw material consumed per produced unit")


class RecipeItemResponse(BaseModel):
    raw_material_id: int
    quantity: float

    class Config:
        from_attributes = True


class FlavorCreate(BaseModel):
    name: str = Field(..., min_length=1)
    stock: int = Field(0, ge=0)


class FlavorResponse(BaseModel):
    id: int
    name: str
    stock: int

    class Config:
        from_attributes = True


class FinishedProductCreate(BaseModel):
    sku: str | None = None
    name: str = Field(..., min_length=1)
    category: str | None = None
    unit: str = "UN"
    recipe: List[RecipeItemIn] = []
    flavors: List[FlavorCreate] = []

    # Falls back to the cost calculated from the recipe
    final_cost: Decimal | None = Field(None, ge=0)

    sale_price: Decimal = Field(
        ...,
        gt=0,
        lt=100_000_000,
        description="Sale price must be below 100 million"
    )


class FinishedProductUpdate(BaseModel):
    sku: str | None = None
    name: str | None = None
    category: str | None = None
    unit: str | None = None
    recipe: List[RecipeItemIn] | None = None
    final_cost: Decimal | None = Field(None, ge=0)
    sale_price: Decimal | None = Field(None, gt=0, lt=100_000_000)


class FinishedProductResponse(BaseModel):
    id: int
    sku: str | None
    name: str
    category: str | None
    unit: str
    recipe: List[RecipeItemResponse]
    flavors: List[FlavorResponse]
    final_cost: float
    sale_price: float

    class Config:
        from_attributes = True


class ProductionCreate(BaseModel):
    flavor_id: int
    quantity: int = Field(..., gt=0)


class PricingResponse(BaseModel):
    product_id: int
    calculated_cost: float
    final_cost: float
    default_profit_margin: float
    margin_price: float
    sale_price: float
    markup_percentage: float
