# app/routers/finished_products.py

from decimal import Decimal

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.core.auth import get_current_user
from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.account_settings import get_account_settings
from app.models.finished_products import FinishedProduct
from app.models.flavors import Flavor
from app.models.raw_materials import RawMaterial
from app.models.recipe_items import RecipeItem
from app.schemas.finished_product import (
    FinishedProductCreate,
    FinishedProductUpdate,
    FinishedProductResponse,
    FlavorCreate,
    FlavorResponse,
    PricingResponse,
    ProductionCreate,
    RecipeItemIn,
)
from app.services import stock

router = APIRouter(
    prefix="/finished-products",
    tags=["Finished Products"],
)


# =========================================================
# HELPERS
# =========================================================
def _get_product(db: Session, business_id: int, product_id: int) -> FinishedProduct:
    product = (
        db.query(FinishedProduct)
        .filter(
            FinishedProduct.id == product_id,
            FinishedProduct.business_id == business_id,
        )
        .first()
    )

    if not product:
        raise NotFoundError("Finished product not found")

    return product


def _load_recipe_materials(db: Session, business_id: int, recipe: list[RecipeItemIn]) -> dict[int, RawMaterial]:
    material_ids = [item.raw_material_id for item in recipe]

    if len(material_ids) != len(set(material_ids)):
        raise ValidationError("Duplicate raw materials in recipe are not allowed")

    if not material_ids:
        return {}

    materials = {
        m.id: m
        for m in db.query(RawMaterial)
        .filter(
            RawMaterial.id.in_(material_ids),
            RawMaterial.business_id == business_id,
        )
        .all()
    }

    missing = [i for i in material_ids if i not in materials]
    if missing:
        raise NotFoundError(f"Raw material not found: {missing[0]}")

    return materials


def _calculate_recipe_cost(recipe, materials: dict[int, RawMaterial]) -> Decimal:
    total = Decimal("0.00")

    for item in recipe:
        material = materials.get(item.raw_material_id)
        if material is not None:
            total += Decimal(material.cost) * Decimal(item.quantity)

    return total.quantize(Decimal("0.01"))


def _check_duplicate_flavors(names: list[str]):
    lowered = [name.strip().lower() for name in names]
    if len(lowered) != len(set(lowered)):
        raise ValidationError("Flavor already exists for this product")


# =========================================================
# CRUD
# =========================================================
@router.post(
    "",
    response_model=FinishedProductResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_finished_product(
    product_data: FinishedProductCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    existing_product = (
        db.query(FinishedProduct)
        .filter(
            FinishedProduct.name == product_data.name,
            FinishedProduct.business_id == current_user.business_id,
        )
        .first()
    )
    if existing_product:
        raise ConflictError("Product with this name already exists")

    _check_duplicate_flavors([f.name for f in product_data.flavors])
    materials = _load_recipe_materials(db, current_user.business_id, product_data.recipe)

    final_cost = product_data.final_cost
    if final_cost is None:
        final_cost = _calculate_recipe_cost(product_data.recipe, materials)

    product = FinishedProduct(
        business_id=current_user.business_id,
        sku=product_data.sku,
        name=product_data.name,
        category=product_data.category,
        unit=product_data.unit,
        final_cost=final_cost,
        sale_price=product_data.sale_price,
        recipe=[
            RecipeItem(raw_material_id=item.raw_material_id, quantity=item.quantity)
            for item in product_data.recipe
        ],
        flavors=[
            Flavor(name=flavor.name.strip(), stock=flavor.stock)
            for flavor in product_data.flavors
        ],
    )

    db.add(product)
    db.commit()
    db.refresh(product)

    return product


@router.get("", response_model=list[FinishedProductResponse])
def list_finished_products(
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return (
        db.query(FinishedProduct)
        .filter(FinishedProduct.business_id == current_user.business_id)
        .order_by(FinishedProduct.name)
        .all()
    )


@router.get("/{product_id}", response_model=FinishedProductResponse)
def get_finished_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    return _get_product(db, current_user.business_id, product_id)


@router.put("/{product_id}", response_model=FinishedProductResponse)
def update_finished_product(
    product_id: int,
    product_data: FinishedProductUpdate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    product = _get_product(db, current_user.business_id, product_id)

    if product_data.name is not None and product_data.name != product.name:
        duplicate = (
            db.query(FinishedProduct)
            .filter(
                FinishedProduct.name == product_data.name,
                FinishedProduct.business_id == current_user.business_id,
                FinishedProduct.id != product.id,
            )
            .first()
        )
        if duplicate:
            raise ConflictError("Product with this name already exists")
        product.name = product_data.name

    if product_data.sku is not None:
        product.sku = product_data.sku

    if product_data.category is not None:
        product.category = product_data.category

    if product_data.unit is not None:
        product.unit = product_data.unit

    if product_data.sale_price is not None:
        product.sale_price = product_data.sale_price

    if product_data.recipe is not None:
        materials = _load_recipe_materials(db, current_user.business_id, product_data.recipe)

        # Flush the removals first so the unique (product, material) pair can be reused
        product.recipe.clear()
        db.flush()
        product.recipe.extend(
            RecipeItem(raw_material_id=item.raw_material_id, quantity=item.quantity)
            for item in product_data.recipe
        )

        if product_data.final_cost is None:
            product.final_cost = _calculate_recipe_cost(product_data.recipe, materials)

    if product_data.final_cost is not None:
        product.final_cost = product_data.final_cost

    db.commit()
    db.refresh(product)

    return product


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_finished_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    product = _get_product(db, current_user.business_id, product_id)

    db.delete(product)
    db.commit()

    return None


# =========================================================
# FLAVORS
# =========================================================
@router.post(
    "/{product_id}/flavors",
    response_model=FlavorResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_flavor(
    product_id: int,
    flavor_data: FlavorCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    product = _get_product(db, current_user.business_id, product_id)

    _check_duplicate_flavors([f.name for f in product.flavors] + [flavor_data.name])

    flavor = Flavor(
        product_id=product.id,
        name=flavor_data.name.strip(),
        stock=flavor_data.stock,
    )

    db.add(flavor)
    db.commit()
    db.refresh(flavor)

    return flavor


@router.delete("/{product_id}/flavors/{flavor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_flavor(
    product_id: int,
    flavor_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    product = _get_product(db, current_user.business_id, product_id)

    flavor = next((f for f in product.flavors if f.id == flavor_id), None)
    if not flavor:
        raise NotFoundError("Flavor not found")

    product.flavors.remove(flavor)
    db.commit()

    return None


# =========================================================
# PRODUCTION RUN
# =========================================================
@router.post("/{product_id}/production")
def register_production(
    product_id: int,
    production: ProductionCreate,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    flavor = stock.produce(
        db,
        current_user.business_id,
        product_id,
        production.flavor_id,
        production.quantity,
    )

    return {
        "success": True,
        "message": "Production recorded and stock updated.",
        "flavor": FlavorResponse.model_validate(flavor),
    }


# =========================================================
# PRICING
# =========================================================
@router.get("/{product_id}/pricing", response_model=PricingResponse)
def product_pricing(
    product_id: int,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_user),
):
    product = _get_product(db, current_user.business_id, product_id)
    account_settings = get_account_settings(db, current_user.business_id)

    materials = {item.raw_material_id: item.raw_material for item in product.recipe}
    calculated_cost = _calculate_recipe_cost(product.recipe, materials)

    final_cost = Decimal(product.final_cost)
    margin = Decimal(account_settings.default_profit_margin)
    margin_price = (final_cost * (1 + margin / 100)).quantize(Decimal("0.01"))

    sale_price = Decimal(product.sale_price)

    if final_cost == 0:
        markup = Decimal("0.00")
    else:
        markup = (((sale_price - final_cost) / final_cost) * 100).quantize(Decimal("0.01"))

    return {
        "product_id": product.id,
        "calculated_cost": calculated_cost,
        "final_cost": final_cost,
        "default_profit_margin": margin,
        "margin_price": margin_price,
        "sale_price": sale_price,
        "markup_percentage": markup,
    }
