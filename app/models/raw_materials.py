# app/models/raw_materials.py

from sqlalchemy import CheckConstraint, Column, Index, Integer, String, Numeric, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.sql import func

from app.database import Base


class RawMaterial(Base):
    __tablename__ = "raw_materials"

    id = Column(Integer, primary_key=True, index=True)

    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)

    code = Column(String, nullable=False)
    description = Column(String, nullable=False)
    unit = Column(String, nullable=False, default="UN")
    cost = Column(Numeric(12, 4), nullable=False, default=0)
    supplier = Column(String, nullable=True)

    quantity = Column(Numeric(12, 3), nullable=False, default=0)
    min_stock = Column(Numeric(12, 3), nullable=False, default=0)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_raw_materials_business", "business_id"),
        UniqueConstraint("business_id", "code", name="uq_business_raw_material_code"),
        CheckConstraint("quantity >= 0", name="ck_raw_material_quantity_non_negative"),
        CheckConstraint("min_stock >= 0", name="ck_raw_material_min_stock_non_negative"),
        CheckConstraint("cost >= 0", name="ck_raw_material_cost_non_negative"),
    )
