"""Error envelopes shared by every endpoint."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Flat error body: HTTP status code and human-readable message."""

    code: int = Field(..., description="HTTP status code")
    message: str


class ValidationIssue(BaseModel):
    """One entry of a 400 response body."""

    code: str = Field(..., description="Stable machine-readable error code")
    message: str
