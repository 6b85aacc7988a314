"""Domain exceptions translated to HTTP responses by app.api.errors."""

from app.schemas.errors import ValidationIssue


class ValidationFailed(Exception):
    """Input rejected by a validator; rendered as 400 with the list of issues."""

    def __init__(self, issues: list[ValidationIssue]) -> None:
        self.issues = issues
        super().__init__("; ".join(f"{i.code}: {i.message}" for i in issues))
