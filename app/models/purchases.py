# models/purchases.py

from sqlalchemy import CheckConstraint, Column, Date, Index, Integer, DateTime, ForeignKey, Numeric
from sqlalchemy.sql import func

from app.database import Base


class Purchase(Base):
    __tablename__ = "purchases"

    id = Column(Integer, primary_key=True, index=True)

    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)
    raw_material_id = Column(Integer, ForeignKey("raw_materials.id", ondelete="SET NULL"), nullable=True, index=True)

    quantity = Column(Numeric(12, 3), nullable=False)
    unit_cost = Column(Numeric(12, 4), nullable=False)
    date = Column(Date, nullable=False, index=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_purchases_business_date", "business_id", "date"),
        CheckConstraint("quantity > 0", name="ck_purchase_quantity_positive"),
        CheckConstraint("unit_cost >= 0", name="ck_purchase_unit_cost_non_negative"),
    )

    @property
    def total(self):
        return self.unit_cost * self.quantity
