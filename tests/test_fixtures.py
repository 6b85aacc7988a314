"""Tests for demo data loading (app.services.fixtures)."""

import unittest
from unittest.mock import patch

from app.models import Customer, Product, User
from app.services.fixtures import (
    DEFAULT_EMAIL,
    DEFAULT_USERNAME,
    FixturesAlreadyLoaded,
    load_fixtures,
)
from tests.support import make_session_factory


@patch("app.services.fixtures.hash_password", lambda pw: f"hashed:{pw}")
class TestLoadFixtures(unittest.TestCase):
    def setUp(self) -> None:
        self.engine, SessionLocal = make_session_factory()
        self.db = SessionLocal()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def test_creates_default_user_customers_and_products(self) -> None:
        report = load_fixtures(self.db, customers=20, products=5, seed=7)
        self.assertEqual((report.users, report.customers, report.products), (4, 20, 5))

        default = self.db.query(User).filter(User.username == DEFAULT_USERNAME).one()
        self.assertEqual(default.email, DEFAULT_EMAIL)
        self.assertEqual(default.get_roles(), ["ROLE_USER"])
        self.assertEqual(self.db.query(User).count(), 4)
        self.assertEqual(self.db.query(Customer).count(), 20)

        prices = [p.price for p in self.db.query(Product).all()]
        self.assertEqual(len(prices), 5)
        self.assertTrue(all(10 <= p <= 100 for p in prices))

    def test_customer_emails_are_unique(self) -> None:
        load_fixtures(self.db, customers=50, products=0, seed=1)
        emails = [c.email for c in self.db.query(Customer).all()]
        self.assertEqual(len(emails), len(set(emails)))

    def test_second_run_refused(self) -> None:
        load_fixtures(self.db, customers=1, products=1, seed=3)
        with self.assertRaises(FixturesAlreadyLoaded):
            load_fixtures(self.db, customers=1, products=1, seed=3)


if __name__ == "__main__":
    unittest.main()
