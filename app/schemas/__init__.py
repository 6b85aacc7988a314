"""Pydantic request/response schemas."""

from app.schemas.auth import CurrentUser, LoginRequest, TokenResponse
from app.schemas.base import ApiModel, Link
from app.schemas.customer import CustomerLinks, CustomerPayload, CustomerRead
from app.schemas.errors import ErrorResponse, ValidationIssue
from app.schemas.health import HealthResponse
from app.schemas.product import ProductLinks, ProductRead

__all__ = [
    "ApiModel",
    "CurrentUser",
    "CustomerLinks",
    "CustomerPayload",
    "CustomerRead",
    "ErrorResponse",
    "HealthResponse",
    "Link",
    "LoginRequest",
    "ProductLinks",
    "ProductRead",
    "TokenResponse",
    "ValidationIssue",
]
