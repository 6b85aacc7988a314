"""Customer CRUD, scoped to the authenticated user that owns each record."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.api.auth import get_current_user
from app.api.links import render_customer
from app.api.pagination import PageParams, page_params
from app.core.cache import CUSTOMERS_TAG, TagCache, get_cache, list_cache_key
from app.core.database import get_db
from app.core.errors import ValidationFailed
from app.models import Customer
from app.schemas.auth import CurrentUser
from app.schemas.customer import CustomerPayload, CustomerRead
from app.schemas.errors import ErrorResponse, ValidationIssue
from app.services import customers as customer_service
from app.services.customer_validation import GENERIC, issue

router = APIRouter()

_ERRORS = {
    401: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}

# The body is read by customer_payload, so describe it for the OpenAPI schema by hand.
_PAYLOAD_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": CustomerPayload.model_json_schema(by_alias=True)}},
    }
}


async def customer_payload(
    request: Request,
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CustomerPayload:
    """
    Parse the customer body once the caller is authenticated.

    Unauthenticated writes get 401 even when the body is malformed. Decode and
    type errors become 400 VALIDATION_ERROR entries, one per error.
    """
    try:
        return CustomerPayload.model_validate_json(await request.body())
    except ValidationError as e:
        raise ValidationFailed([issue(GENERIC) for _ in e.errors()] or [issue(GENERIC)]) from e


def _get_owned_customer(session: Session, customer_id: int, user: CurrentUser) -> Customer:
    """Load a customer, 404 if absent, 401 if the caller does not own it."""
    customer = customer_service.get_customer(session, customer_id)
    if customer is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Customer not found")
    if customer.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="You are not allowed to access this customer.",
        )
    return customer


@router.post(
    "",
    response_model=CustomerRead,
    status_code=status.HTTP_201_CREATED,
    name="customer_create",
    responses={400: {"model": list[ValidationIssue]}, **_ERRORS},
    openapi_extra=_PAYLOAD_BODY,
)
def create_customer(
    request: Request,
    body: Annotated[CustomerPayload, Depends(customer_payload)],
    db: Annotated[Session, Depends(get_db)],
    cache: Annotated[TagCache, Depends(get_cache)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CustomerRead:
    """Create a customer owned by the caller. Returns the representation with userId."""
    customer = customer_service.create_customer(db, body, owner_id=user.id)
    cache.invalidate_tags([CUSTOMERS_TAG])
    return render_customer(request, customer)


@router.get("", response_model=list[CustomerRead], name="customer_list", responses=_ERRORS)
def list_customers(
    request: Request,
    paging: Annotated[PageParams, Depends(page_params)],
    db: Annotated[Session, Depends(get_db)],
    cache: Annotated[TagCache, Depends(get_cache)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[dict]:
    """
    List the caller's customers in creation order, paginated (default page=1, limit=3).

    Pages are cached per user; any customer write invalidates every cached page.
    """
    key = list_cache_key("getAllCustomers", paging.page, paging.limit, scope=user.id)

    def load() -> list[dict]:
        rows = customer_service.list_customers_page(db, user.id, paging.page, paging.limit)
        return [render_customer(request, c).model_dump(mode="json", by_alias=True) for c in rows]

    return cache.get_or_load(key, [CUSTOMERS_TAG], load)


@router.get("/{customer_id}", response_model=CustomerRead, name="customer_detail", responses=_ERRORS)
def get_customer(
    request: Request,
    customer_id: int,
    db: Annotated[Session, Depends(get_db)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CustomerRead:
    customer = _get_owned_customer(db, customer_id, user)
    return render_customer(request, customer)


@router.put(
    "/{customer_id}",
    response_model=CustomerRead,
    name="customer_update",
    responses={400: {"model": list[ValidationIssue]}, **_ERRORS},
    openapi_extra=_PAYLOAD_BODY,
)
def update_customer(
    request: Request,
    customer_id: int,
    body: Annotated[CustomerPayload, Depends(customer_payload)],
    db: Annotated[Session, Depends(get_db)],
    cache: Annotated[TagCache, Depends(get_cache)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CustomerRead:
    """Partial update: only non-null fields of the body are applied."""
    customer = _get_owned_customer(db, customer_id, user)
    customer = customer_service.update_customer(db, customer, body)
    cache.invalidate_tags([CUSTOMERS_TAG])
    return render_customer(request, customer)


@router.delete(
    "/{customer_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    name="customer_delete",
    response_class=Response,
    responses=_ERRORS,
)
def delete_customer(
    customer_id: int,
    db: Annotated[Session, Depends(get_db)],
    cache: Annotated[TagCache, Depends(get_cache)],
    user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Response:
    customer = _get_owned_customer(db, customer_id, user)
    cache.invalidate_tags([CUSTOMERS_TAG])
    customer_service.delete_customer(db, customer)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
