"""Read-only queries over the product catalog."""

from sqlalchemy.orm import Session

from app.models import Product


def list_products_page(session: Session, page: int, limit: int) -> list[Product]:
    """Return one page of products ordered by id (page is 1-based)."""
    return (
        session.query(Product)
        .order_by(Product.id)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )


def get_product(session: Session, product_id: int) -> Product | None:
    return session.get(Product, product_id)
