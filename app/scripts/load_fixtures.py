"""
Seed the database with demo data. Run from project root:
  python -m app.scripts.load_fixtures [--customers 50] [--products 10] [--seed 42]

Creates the default user BileMo / BileMoP07 (user@bilemo.com).
"""

import argparse
import logging
import sys

from app.core.cache import CUSTOMERS_TAG, PRODUCTS_TAG, get_cache
from app.core.database import SessionLocal
from app.services.fixtures import FixturesAlreadyLoaded, load_fixtures

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Load BileMo demo fixtures.")
    parser.add_argument("--customers", type=int, default=50, help="Number of customers (default 50)")
    parser.add_argument("--products", type=int, default=10, help="Number of products (default 10)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        report = load_fixtures(db, customers=args.customers, products=args.products, seed=args.seed)
    except FixturesAlreadyLoaded as e:
        logger.error("Fixtures not loaded: %s", e)
        return 1
    except Exception as e:
        db.rollback()
        logger.exception("Fixture loading failed: %s", e)
        return 1
    finally:
        db.close()

    get_cache().invalidate_tags([CUSTOMERS_TAG, PRODUCTS_TAG])
    logger.info(
        "Fixtures completed: users=%s, customers=%s, products=%s",
        report.users,
        report.customers,
        report.products,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
