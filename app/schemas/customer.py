"""Request/response schemas for the customer resource."""

from pydantic import ConfigDict, Field

from app.schemas.base import ApiModel, Link


class CustomerPayload(ApiModel):
    """
    Body for POST and PUT /customers.

    All fields are optional at the schema level: required-field and format
    checks are done by the customer validator so they map to stable error codes.
    On PUT, null or missing fields leave the stored value untouched.
    """

    model_config = ConfigDict(extra="ignore")

    first_name: str | None = Field(default=None, description="Customer first name")
    last_name: str | None = Field(default=None, description="Customer last name")
    email: str | None = Field(default=None, description="Customer email (unique)")


class CustomerLinks(ApiModel):
    detail: Link
    update: Link
    delete: Link


class CustomerRead(ApiModel):
    """Customer representation returned by list, detail, create and update."""

    id: int
    first_name: str
    last_name: str
    email: str
    user_id: int = Field(..., description="Id of the owning user")
    links: CustomerLinks = Field(..., alias="_links")
