"""ORM model for API consumers (authentication and customer ownership)."""

from sqlalchemy import JSON, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship

from app.models.base import Base, utcnow

DEFAULT_ROLE = "ROLE_USER"


class User(Base):
    """
    Account that authenticates against the API and owns Customers.

    roles: stored list of extra roles; get_roles() always adds ROLE_USER.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(180), nullable=False, unique=True, index=True)
    email = Column(String(180), nullable=False, unique=True, index=True)
    roles = Column(JSON, nullable=False, default=list)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    customers = relationship("Customer", back_populates="user")

    def get_roles(self) -> list[str]:
        """Stored roles plus the default role, deduplicated, order preserved."""
        roles = list(self.roles or [])
        roles.append(DEFAULT_ROLE)
        return list(dict.fromkeys(roles))
