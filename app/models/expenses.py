# models/expenses.py

from sqlalchemy import CheckConstraint, Column, Date, Index, Integer, DateTime, ForeignKey, Numeric, String
from sqlalchemy.sql import func

from app.database import Base


class Expense(Base):
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)

    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False, index=True)

    amount = Column(Numeric(10, 2), nullable=False)
    category = Column(String, nullable=False, default="Other")
    description = Column(String, nullable=False)
    date = Column(Date, nullable=False, index=True)
    payment_method = Column(String, nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_expenses_business_date", "business_id", "date"),
        CheckConstraint("amount >= 0", name="ck_expense_amount_non_negative"),
        CheckConstraint(
            "category IN ('Marketing', 'Sales', 'Software', 'Team', 'Other')",
            name="ck_expense_category_valid",
        ),
        CheckConstraint(
            "payment_method IS NULL OR payment_method IN ('PIX', 'Card', 'Cash')",
            name="ck_expense_payment_method_valid",
        ),
    )
