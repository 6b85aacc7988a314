"""HATEOAS `_links` built from named routes, plus model-to-representation helpers."""

from fastapi import Request

from app.models import Customer, Product
from app.schemas.base import Link
from app.schemas.customer import CustomerLinks, CustomerRead
from app.schemas.product import ProductLinks, ProductRead


def _href(request: Request, route_name: str, **params: int) -> Link:
    return Link(href=str(request.app.url_path_for(route_name, **{k: str(v) for k, v in params.items()})))


def customer_links(request: Request, customer_id: int) -> CustomerLinks:
    return CustomerLinks(
        detail=_href(request, "customer_detail", customer_id=customer_id),
        update=_href(request, "customer_update", customer_id=customer_id),
        delete=_href(request, "customer_delete", customer_id=customer_id),
    )


def product_links(request: Request, product_id: int) -> ProductLinks:
    return ProductLinks(detail=_href(request, "product_detail", product_id=product_id))


def render_customer(request: Request, customer: Customer) -> CustomerRead:
    return CustomerRead(
        id=customer.id,
        first_name=customer.first_name,
        last_name=customer.last_name,
        email=customer.email,
        user_id=customer.user_id,
        links=customer_links(request, customer.id),
    )


def render_product(request: Request, product: Product) -> ProductRead:
    return ProductRead(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        links=product_links(request, product.id),
    )
