"""Shared pydantic configuration for API representations (camelCase JSON)."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for request/response bodies: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Link(BaseModel):
    """HATEOAS relation target."""

    href: str = Field(..., description="Path of the related operation")
