"""Shared page/limit query parameters for list endpoints."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Query

from app.core.config import settings


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int


def page_params(
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[
        int,
        Query(ge=1, le=settings.PAGINATION_MAX_LIMIT, description="Items per page"),
    ] = settings.PAGINATION_DEFAULT_LIMIT,
) -> PageParams:
    """Dependency: validated pagination (defaults page=1, limit=PAGINATION_DEFAULT_LIMIT)."""
    return PageParams(page=page, limit=limit)
