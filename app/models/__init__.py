"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.customer import Customer
from app.models.product import Product
from app.models.user import User

__all__ = ["Base", "Customer", "Product", "User"]
