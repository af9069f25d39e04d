# app/models/account_settings.py

from sqlalchemy import Column, Integer, ForeignKey, Numeric, JSON, DateTime
from sqlalchemy.sql import func

from app.database import Base


class AccountSettings(Base):
    __tablename__ = "account_settings"

    id = Column(Integer, primary_key=True, index=True)

    business_id = Column(
        Integer,
        ForeignKey("businesses.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )

    taxes = Column(JSON, nullable=False)
    payment_rates = Column(JSON, nullable=False)
    platform_fees = Column(JSON, nullable=False)
    default_profit_margin = Column(Numeric(6, 2), nullable=False)
    product_categories = Column(JSON, nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
