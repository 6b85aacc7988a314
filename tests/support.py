"""Shared fixtures for API tests: in-memory SQLite, fresh cache, auth helpers."""

import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.cache import InMemoryTagCache, get_cache
from app.core.database import get_db
from app.core.security import create_access_token, hash_password
from app.main import app
from app.models import Base, Customer, Product, User

TEST_PASSWORD = "s3cret-password"


def make_session_factory() -> tuple[object, sessionmaker]:
    """One shared in-memory SQLite connection with all tables created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine, sessionmaker(autocommit=False, autoflush=False, bind=engine)


class ApiTestCase(unittest.TestCase):
    """Base class wiring the app to a throwaway database and cache."""

    def setUp(self) -> None:
        self.engine, self.SessionLocal = make_session_factory()
        self.cache = InMemoryTagCache()

        def override_get_db() -> Generator[Session, None, None]:
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_cache] = lambda: self.cache
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        self.engine.dispose()

    def create_user(self, username: str, email: str | None = None, roles: list[str] | None = None) -> User:
        with self.SessionLocal() as db:
            user = User(
                username=username,
                email=email or f"{username}@example.com",
                roles=roles or [],
                password_hash=hash_password(TEST_PASSWORD, rounds=4),
            )
            db.add(user)
            db.commit()
            db.refresh(user)
            db.expunge(user)
            return user

    def auth_headers(self, user: User) -> dict[str, str]:
        token = create_access_token(sub=user.id, roles=user.get_roles())
        return {"Authorization": f"Bearer {token}"}

    def create_product(self, name: str, price: float = 19.99, description: str | None = None) -> int:
        with self.SessionLocal() as db:
            product = Product(name=name, price=price, description=description)
            db.add(product)
            db.commit()
            return product.id

    def count_customers(self) -> int:
        with self.SessionLocal() as db:
            return db.query(Customer).count()
