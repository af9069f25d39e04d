# models/sales.py

from sqlalchemy import CheckConstraint, Column, Date, Index, Integer, DateTime, ForeignKey, Numeric, String
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)

    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)

    product_id = Column(Integer, ForeignKey("finished_products.id", ondelete="SET NULL"), nullable=True, index=True)
    flavor_id = Column(Integer, ForeignKey("flavors.id", ondelete="SET NULL"), nullable=True, index=True)

    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    date = Column(Date, nullable=False, index=True)

    payment_method = Column(String, nullable=True)
    location = Column(String, nullable=True)
    commission = Column(Numeric(5, 2), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    revenue = relationship("Revenue", back_populates="sale", uselist=False)

    __table_args__ = (
        Index("ix_sales_business_date", "business_id", "date"),
        CheckConstraint("quantity > 0", name="ck_sale_quantity_positive"),
        CheckConstraint("unit_price >= 0", name="ck_sale_unit_price_non_negative"),
        CheckConstraint(
            "payment_method IS NULL OR payment_method IN ('PIX', 'Card', 'Cash')",
            name="ck_sale_payment_method_valid",
        ),
    )

    @property
    def total(self):
        return self.unit_price * self.quantity

    @property
    def revenue_id(self):
        return self.revenue.id if self.revenue else None
