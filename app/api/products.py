"""Public, read-only product catalog."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.api.links import render_product
from app.api.pagination import PageParams, page_params
from app.core.cache import PRODUCTS_TAG, TagCache, get_cache, list_cache_key
from app.core.database import get_db
from app.schemas.errors import ErrorResponse
from app.schemas.product import ProductRead
from app.services import products as product_service

router = APIRouter()


@router.get("", response_model=list[ProductRead], name="product_list")
def list_products(
    request: Request,
    paging: Annotated[PageParams, Depends(page_params)],
    db: Annotated[Session, Depends(get_db)],
    cache: Annotated[TagCache, Depends(get_cache)],
) -> list[dict]:
    """List products ordered by id, paginated (default page=1, limit=3). Cached globally."""
    key = list_cache_key("getAllProducts", paging.page, paging.limit)

    def load() -> list[dict]:
        rows = product_service.list_products_page(db, paging.page, paging.limit)
        return [render_product(request, p).model_dump(mode="json", by_alias=True) for p in rows]

    return cache.get_or_load(key, [PRODUCTS_TAG], load)


@router.get(
    "/{product_id}",
    response_model=ProductRead,
    name="product_detail",
    responses={404: {"model": ErrorResponse}},
)
def get_product(
    request: Request,
    product_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> ProductRead:
    product = product_service.get_product(db, product_id)
    if product is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return render_product(request, product)
