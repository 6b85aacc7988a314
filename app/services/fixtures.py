"""Demo data: the BileMo account, a few random users, their customers and a product catalog."""

import logging
import random
import secrets
from dataclasses import dataclass

from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models import Customer, Product, User

logger = logging.getLogger(__name__)

DEFAULT_USERNAME = "BileMo"
DEFAULT_EMAIL = "user@bilemo.com"
DEFAULT_PASSWORD = "BileMoP07"

FIRST_NAMES = (
    "Alice", "Bruno", "Camille", "Denis", "Elise", "Fabien", "Gaelle", "Hugo",
    "Ines", "Julien", "Karine", "Louis", "Manon", "Nathan", "Oceane", "Paul",
)
LAST_NAMES = (
    "Martin", "Bernard", "Dubois", "Thomas", "Robert", "Richard", "Petit",
    "Durand", "Leroy", "Moreau", "Simon", "Laurent", "Lefebvre", "Michel",
)
PRODUCT_WORDS = (
    "Nova", "Aura", "Pulse", "Edge", "Orbit", "Flux", "Zenith", "Echo",
    "Prism", "Vertex", "Lumen", "Apex",
)
PRODUCT_SUFFIXES = ("Lite", "Pro", "Max", "Mini", "Plus", "X")


@dataclass
class FixtureReport:
    users: int
    customers: int
    products: int


class FixturesAlreadyLoaded(Exception):
    """Raised when the default BileMo user already exists."""


def _random_user(rng: random.Random, index: int) -> User:
    username = f"{rng.choice(FIRST_NAMES).lower()}{rng.randint(10, 9999)}_{index}"
    return User(
        username=username,
        email=f"{username}@example.com",
        roles=[],
        password_hash=hash_password(secrets.token_urlsafe(12)),
    )


def load_fixtures(
    session: Session,
    customers: int = 50,
    products: int = 10,
    extra_users: int = 3,
    seed: int | None = None,
) -> FixtureReport:
    """
    Insert demo data in one transaction and return what was created.

    Customers are distributed randomly among the default user and the extra
    users; product prices are drawn between 10 and 100 with two decimals.
    """
    if session.query(User).filter(User.username == DEFAULT_USERNAME).first() is not None:
        raise FixturesAlreadyLoaded(f"User '{DEFAULT_USERNAME}' already exists")

    rng = random.Random(seed)
    users = [
        User(
            username=DEFAULT_USERNAME,
            email=DEFAULT_EMAIL,
            roles=["ROLE_USER"],
            password_hash=hash_password(DEFAULT_PASSWORD),
        )
    ]
    users.extend(_random_user(rng, i) for i in range(extra_users))
    session.add_all(users)

    for i in range(customers):
        first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
        session.add(
            Customer(
                first_name=first,
                last_name=last,
                email=f"{first}.{last}.{i}@example.com".lower(),
                user=rng.choice(users),
            )
        )

    for _ in range(products):
        name = f"{rng.choice(PRODUCT_WORDS)} {rng.choice(PRODUCT_SUFFIXES)}"
        session.add(
            Product(
                name=name,
                description=f"The {name} smartphone.",
                price=round(rng.uniform(10, 100), 2),
            )
        )

    session.commit()
    logger.info("Fixtures loaded: users=%s, customers=%s, products=%s", len(users), customers, products)
    return FixtureReport(users=len(users), customers=customers, products=products)
