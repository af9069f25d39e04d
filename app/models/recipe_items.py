# models/recipe_items.py

from sqlalchemy import CheckConstraint, Column, Integer, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship

from app.database import Base


class RecipeItem(Base):
    __tablename__ = "recipe_items"

    id = Column(Integer, primary_key=True, index=True)

    product_id = Column(Integer, ForeignKey("finished_products.id", ondelete="CASCADE"), nullable=False, index=True)
    raw_material_id = Column(Integer, ForeignKey("raw_materials.id"), nullable=False, index=True)

    # Raw material consumed per produced unit
    quantity = Column(Numeric(12, 3), nullable=False)

    product = relationship("FinishedProduct", back_populates="recipe")
    raw_material = relationship("RawMaterial")

    __table_args__ = (
        UniqueConstraint("product_id", "raw_material_id", name="uq_recipe_product_material"),
        CheckConstraint("quantity > 0", name="ck_recipe_quantity_positive"),
    )
