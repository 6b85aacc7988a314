"""Persistence operations for owner-scoped customers."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import ValidationFailed
from app.models import Customer
from app.models.base import utcnow
from app.schemas.customer import CustomerPayload
from app.services.customer_validation import (
    EMAIL_DUPLICATE,
    issue,
    validate_customer_fields,
)

logger = logging.getLogger(__name__)


def list_customers_page(session: Session, user_id: int, page: int, limit: int) -> list[Customer]:
    """Return one page of the user's customers in creation order (page is 1-based)."""
    return (
        session.query(Customer)
        .filter(Customer.user_id == user_id)
        .order_by(Customer.id)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )


def get_customer(session: Session, customer_id: int) -> Customer | None:
    return session.get(Customer, customer_id)


def email_taken(session: Session, email: str, exclude_id: int | None = None) -> bool:
    """True if another customer already uses email."""
    query = session.query(Customer.id).filter(Customer.email == email)
    if exclude_id is not None:
        query = query.filter(Customer.id != exclude_id)
    return query.first() is not None


def _clean(value: str | None) -> str | None:
    return value.strip() if value is not None else None


def _validate(session: Session, customer: Customer) -> None:
    issues = validate_customer_fields(customer.first_name, customer.last_name, customer.email)
    if not issues and email_taken(session, customer.email, exclude_id=customer.id):
        issues.append(issue(EMAIL_DUPLICATE))
    if issues:
        raise ValidationFailed(issues)


def _commit(session: Session) -> None:
    """Commit; a unique violation lost to a concurrent writer becomes a duplicate-email error."""
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning("Customer write rejected by store constraint: %s", e.orig)
        raise ValidationFailed([issue(EMAIL_DUPLICATE)]) from e


def create_customer(session: Session, payload: CustomerPayload, owner_id: int) -> Customer:
    """
    Validate and persist a new customer owned by owner_id.

    Raises ValidationFailed on missing/invalid fields or a duplicate email;
    nothing is persisted in that case.
    """
    now = utcnow()
    customer = Customer(
        first_name=_clean(payload.first_name),
        last_name=_clean(payload.last_name),
        email=_clean(payload.email),
        created_at=now,
        updated_at=now,
    )
    _validate(session, customer)
    customer.user_id = owner_id
    session.add(customer)
    _commit(session)
    session.refresh(customer)
    logger.info("Customer created: id=%s, user_id=%s", customer.id, owner_id)
    return customer


def update_customer(session: Session, customer: Customer, payload: CustomerPayload) -> Customer:
    """
    Apply the non-null fields of payload, validate the merged record and persist.

    On ValidationFailed the session is rolled back and the stored row is unchanged.
    """
    changes = payload.model_dump(exclude_none=True)
    for field, value in changes.items():
        setattr(customer, field, _clean(value))
    try:
        _validate(session, customer)
    except ValidationFailed:
        session.rollback()
        raise
    customer.updated_at = utcnow()
    _commit(session)
    session.refresh(customer)
    logger.info("Customer updated: id=%s, fields=%s", customer.id, sorted(changes))
    return customer


def delete_customer(session: Session, customer: Customer) -> None:
    customer_id = customer.id
    session.delete(customer)
    session.commit()
    logger.info("Customer deleted: id=%s", customer_id)
