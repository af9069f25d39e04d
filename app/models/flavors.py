# models/flavors.py

from sqlalchemy import CheckConstraint, Column, Integer, String, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.database import Base


class Flavor(Base):
    __tablename__ = "flavors"

    id = Column(Integer, primary_key=True, index=True)

    product_id = Column(Integer, ForeignKey("finished_products.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String, nullable=False)
    stock = Column(Integer, nullable=False, default=0)

    product = relationship("FinishedProduct", back_populates="flavors")

    __table_args__ = (
        UniqueConstraint("product_id", "name", name="uq_flavor_product_name"),
        CheckConstraint("stock >= 0", name="ck_flavor_stock_non_negative"),
    )
