"""ORM model for the read-only product catalog."""

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, Numeric, String, Text, func

from app.models.base import Base, utcnow


class Product(Base):
    """Catalog entry; globally readable, no owner."""

    __tablename__ = "products"
    __table_args__ = (CheckConstraint("price >= 0", name="ck_products_price_non_negative"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
