# =========================================================
# STOCK TRANSACTIONS
#
# produce      - consume recipe raw materials, add flavor stock
# sell         - take flavor stock, write Sale + paired Revenue
# purchase     - add raw material quantity, update its cost
# cancel_sale  - give stock back, delete Sale + paired Revenue
#
# Preconditions are checked on locked rows inside the
# transaction, never before it
# =========================================================

import logging
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from app.core.errors import InsufficientStockError, NotFoundError
from app.core.transactions import lock_many, lock_one, run_atomic
from app.models.finished_products import FinishedProduct
from app.models.flavors import Flavor
from app.models.purchases import Purchase
from app.models.raw_materials import RawMaterial
from app.models.revenues import Revenue
from app.models.sales import Sale
from app.schemas.purchase import PurchaseCreate
from app.schemas.sale import SaleCreate

logger = logging.getLogger("app")


def _today():
    return datetime.now(timezone.utc).date()


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
        raise NotFoundError("Finished product not found.")

    return product


def _lock_flavor(db: Session, product: FinishedProduct, flavor_id: int) -> Flavor:
    flavor = lock_one(
        db,
        Flavor,
        Flavor.id == flavor_id,
        Flavor.product_id == product.id,
    )

    if not flavor:
        raise NotFoundError(f'Flavor not found for product "{product.name}".')

    return flavor


# =========================================================
# PRODUCTION RUN
# =========================================================
def produce(
    db: Session,
    business_id: int,
    product_id: int,
    flavor_id: int,
    quantity: int,
) -> Flavor:

    def _work(db: Session) -> Flavor:
        product = _get_product(db, business_id, product_id)
        flavor = _lock_flavor(db, product, flavor_id)

        recipe = list(product.recipe)
        material_ids = [item.raw_material_id for item in recipe]

        materials = {}
        if material_ids:
            materials = {
                m.id: m
                for m in lock_many(
                    db,
                    RawMaterial,
                    RawMaterial.id.in_(material_ids),
                    RawMaterial.business_id == business_id,
                )
            }

        # All checks pass before the first write
        updates = []
        for item in recipe:
            material = materials.get(item.raw_material_id)

            if material is None:
                raise NotFoundError(
                    f'Raw material "{item.raw_material_id}" not found in inventory.'
                )

            needed = Decimal(item.quantity) * quantity

            if material.quantity < needed:
                raise InsufficientStockError(material.description, needed, material.quantity)

            updates.append((material, needed))

        for material, needed in updates:
            material.quantity = material.quantity - needed

        flavor.stock = flavor.stock + quantity

        return flavor

    flavor = run_atomic(db, _work)

    logger.info(
        f"Production recorded: business {business_id}, product {product_id}, "
        f"flavor {flavor_id}, quantity {quantity}"
    )

    return flavor


# =========================================================
# SALE
# =========================================================
def sell(db: Session, business_id: int, sale_data: SaleCreate) -> Sale:

    def _work(db: Session) -> Sale:
        product = _get_product(db, business_id, sale_data.product_id)
        flavor = _lock_flavor(db, product, sale_data.flavor_id)

        if flavor.stock < sale_data.quantity:
            raise InsufficientStockError(
                f"{product.name} - {flavor.name}",
                sale_data.quantity,
                flavor.stock,
            )

        flavor.stock = flavor.stock - sale_data.quantity

        unit_price = (
            sale_data.unit_price
            if sale_data.unit_price is not None
            else product.sale_price
        )

        sale = Sale(
            business_id=business_id,
            product_id=product.id,
            flavor_id=flavor.id,
            quantity=sale_data.quantity,
            unit_price=unit_price,
            date=sale_data.date or _today(),
            payment_method=sale_data.payment_method,
            location=sale_data.location,
            commission=sale_data.commission,
        )
        db.add(sale)
        db.flush()

        db.add(
            Revenue(
                business_id=business_id,
                amount=Decimal(unit_price) * sale_data.quantity,
                source=f"Sale: {product.name} ({flavor.name})",
                date=sale.date,
                payment_method=sale.payment_method,
                sale_id=sale.id,
            )
        )

        return sale

    sale = run_atomic(db, _work)
    db.refresh(sale)

    logger.info(f"Sale {sale.id} recorded for business {business_id}")

    return sale


# =========================================================
# CANCEL SALE
# =========================================================
def cancel_sale(db: Session, business_id: int, sale_id: int) -> None:

    def _work(db: Session) -> None:
        sale = lock_one(
            db,
            Sale,
            Sale.id == sale_id,
            Sale.business_id == business_id,
        )

        if not sale:
            raise NotFoundError("Sale not found.")

        if sale.product_id is None:
            raise NotFoundError("The product of this sale no longer exists.")

        product = (
            db.query(FinishedProduct)
            .filter(
                FinishedProduct.id == sale.product_id,
                FinishedProduct.business_id == business_id,
            )
            .first()
        )

        if not product:
            raise NotFoundError("The product of this sale no longer exists.")

        flavor = _lock_flavor(db, product, sale.flavor_id)
        flavor.stock = flavor.stock + sale.quantity

        revenue = (
            db.query(Revenue)
            .filter(Revenue.sale_id == sale.id)
            .first()
        )
        if revenue:
            db.delete(revenue)

        db.delete(sale)

    run_atomic(db, _work)

    logger.info(f"Sale {sale_id} cancelled for business {business_id}")


# =========================================================
# PURCHASE
# =========================================================
def purchase(db: Session, business_id: int, purchase_data: PurchaseCreate) -> Purchase:

    def _work(db: Session) -> Purchase:
        material = lock_one(
            db,
            RawMaterial,
            RawMaterial.id == purchase_data.raw_material_id,
            RawMaterial.business_id == business_id,
        )

        if not material:
            raise NotFoundError("Raw material not found.")

        material.quantity = material.quantity + purchase_data.quantity
        material.cost = purchase_data.unit_cost

        new_purchase = Purchase(
            business_id=business_id,
            raw_material_id=material.id,
            quantity=purchase_data.quantity,
            unit_cost=purchase_data.unit_cost,
            date=purchase_data.date or _today(),
        )
        db.add(new_purchase)

        return new_purchase

    new_purchase = run_atomic(db, _work)
    db.refresh(new_purchase)

    logger.info(
        f"Purchase {new_purchase.id} recorded for business {business_id} "
        f"(raw material {purchase_data.raw_material_id})"
    )

    return new_purchase
