# app/models/finished_products.py

from sqlalchemy import CheckConstraint, Column, Index, Integer, String, Numeric, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class FinishedProduct(Base):
    __tablename__ = "finished_products"

    id = Column(Integer, primary_key=True, index=True)

    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)

    sku = Column(String, nullable=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)
    unit = Column(String, nullable=False, default="UN")

    final_cost = Column(Numeric(10, 2), nullable=False, default=0)
    sale_price = Column(Numeric(10, 2), nullable=False)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    recipe = relationship(
        "RecipeItem",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="RecipeItem.id",
    )

    flavors = relationship(
        "Flavor",
        back_populates="product",
        cascade="all, delete-orphan",
        order_by="Flavor.id",
    )

    __table_args__ = (
        Index("ix_finished_products_business", "business_id"),
        UniqueConstraint("business_id", "name", name="uq_business_finished_product_name"),
        CheckConstraint("final_cost >= 0", name="ck_final_cost_non_negative"),
        CheckConstraint("sale_price > 0", name="ck_sale_price_positive"),
    )
