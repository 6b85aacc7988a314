"""Response schemas for the product catalog."""

from pydantic import Field

from app.schemas.base import ApiModel, Link


class ProductLinks(ApiModel):
    detail: Link


class ProductRead(ApiModel):
    id: int
    name: str
    description: str | None = None
    price: float = Field(..., ge=0, description="Unit price, two decimals")
    links: ProductLinks = Field(..., alias="_links")
