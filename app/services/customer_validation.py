"""Field-level checks for customer payloads, mapped to stable error codes."""

from email_validator import EmailNotValidError, validate_email

from app.schemas.errors import ValidationIssue

EMAIL_DUPLICATE = "CUSTOMER_EMAIL_DUPLICATE"
EMAIL_INVALID = "CUSTOMER_EMAIL_INVALID"
EMAIL_REQUIRED = "CUSTOMER_EMAIL_REQUIRED"
FIRST_NAME_REQUIRED = "CUSTOMER_FIRST_NAME_REQUIRED"
LAST_NAME_REQUIRED = "CUSTOMER_LAST_NAME_REQUIRED"
NAME_TOO_LONG = "CUSTOMER_NAME_TOO_LONG"
GENERIC = "VALIDATION_ERROR"

NAME_MAX_LEN = 255
EMAIL_MAX_LEN = 180

ERROR_MESSAGES: dict[str, str] = {
    EMAIL_DUPLICATE: "This email is already used by another customer.",
    EMAIL_INVALID: 'The email "{value}" is not a valid email.',
    EMAIL_REQUIRED: "The customer email is required.",
    FIRST_NAME_REQUIRED: "The customer first name is required.",
    LAST_NAME_REQUIRED: "The customer last name is required.",
    NAME_TOO_LONG: f"Names must be at most {NAME_MAX_LEN} characters.",
}
GENERIC_MESSAGE = "Invalid data."


def issue(code: str, **params: str) -> ValidationIssue:
    """Build a ValidationIssue; codes without a message fall back to the generic one."""
    template = ERROR_MESSAGES.get(code)
    if template is None:
        return ValidationIssue(code=code, message=GENERIC_MESSAGE)
    return ValidationIssue(code=code, message=template.format(**params))


def is_valid_email(value: str) -> bool:
    """Syntax-only check; no DNS lookups."""
    if len(value) > EMAIL_MAX_LEN:
        return False
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_customer_fields(
    first_name: str | None,
    last_name: str | None,
    email: str | None,
) -> list[ValidationIssue]:
    """
    Check required names and email format. Uniqueness needs the store and is
    checked by app.services.customers.

    Returns every violation found (empty list when valid), in field order.
    """
    issues: list[ValidationIssue] = []
    if first_name is None or not first_name.strip():
        issues.append(issue(FIRST_NAME_REQUIRED))
    elif len(first_name) > NAME_MAX_LEN:
        issues.append(issue(NAME_TOO_LONG))
    if last_name is None or not last_name.strip():
        issues.append(issue(LAST_NAME_REQUIRED))
    elif len(last_name) > NAME_MAX_LEN:
        issues.append(issue(NAME_TOO_LONG))
    if email is None or not email.strip():
        issues.append(issue(EMAIL_REQUIRED))
    elif not is_valid_email(email):
        issues.append(issue(EMAIL_INVALID, value=email))
    return issues
