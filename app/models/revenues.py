# models/revenues.py

from sqlalchemy import CheckConstraint, Column, Date, Index, Integer, DateTime, ForeignKey, Numeric, String
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.database import Base


class Revenue(Base):
    __tablename__ = "revenues"

    id = Column(Integer, primary_key=True, index=True)

    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)

    amount = Column(Numeric(10, 2), nullable=False)
    source = Column(String, nullable=False)
    date = Column(Date, nullable=False, index=True)
    payment_method = Column(String, nullable=True)

    # Set only for revenue written by a sale; removed together with it
    sale_id = Column(Integer, ForeignKey("sales.id", ondelete="CASCADE"), nullable=True, unique=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    sale = relationship("Sale", back_populates="revenue")

    __table_args__ = (
        Index("ix_revenues_business_date", "business_id", "date"),
        CheckConstraint("amount >= 0", name="ck_revenue_amount_non_negative"),
        CheckConstraint(
            "payment_method IS NULL OR payment_method IN ('PIX', 'Card', 'Cash')",
            name="ck_revenue_payment_method_valid",
        ),
    )
