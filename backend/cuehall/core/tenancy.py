"""
Tenant Access Filter
Resolves the caller's role/company into the company scope of a query

- SELLER / ADMIN: always pinned to their own company
- SUPERADMIN: requested company, else their selected company, else all
"""

from typing import Optional
import uuid
import logging

from cuehall.core.exceptions import AccessDeniedError, BusinessRuleError
from cuehall.models import Profile

logger = logging.getLogger(__name__)


def _pinned_company(profile: Profile, requested_company_id: Optional[uuid.UUID]) -> uuid.UUID:
    """Company of a non-superadmin; rejects requests for any other company"""
    if profile.company_id is None:
        raise AccessDeniedError("User is not associated with a company")

    if requested_company_id is not None and requested_company_id != profile.company_id:
        logger.warning(
            "Profile %s asked for company %s outside its tenant %s",
            profile.id, requested_company_id, profile.company_id
        )
        raise AccessDeniedError("Access denied")

    return profile.company_id


def resolve_read_scope(
    profile: Profile,
    requested_company_id: Optional[uuid.UUID] = None
) -> Optional[uuid.UUID]:
    """
    Company to filter reads by

    Returns:
        A company id, or None when a superadmin may read every company
    """
    if profile.is_superadmin:
        return requested_company_id or profile.company_id

    return _pinned_company(profile, requested_company_id)


def resolve_write_company(
    profile: Profile,
    requested_company_id: Optional[uuid.UUID] = None
) -> uuid.UUID:
    """
    Company a new row is written to

    Raises:
        BusinessRuleError: superadmin without a requested or selected company
        AccessDeniedError: non-superadmin writing to another company
    """
    if profile.is_superadmin:
        company_id = requested_company_id or profile.company_id
        if company_id is None:
            raise BusinessRuleError("Company ID is required")
        return company_id

    return _pinned_company(profile, requested_company_id)


def ensure_company_access(profile: Profile, company_id: uuid.UUID) -> None:
    """Row-level check: may this caller touch a row owned by company_id?"""
    if profile.is_superadmin:
        return

    if profile.company_id is None or profile.company_id != company_id:
        raise AccessDeniedError("You don't have access to this company's data")


def apply_company_filter(query, column, company_id: Optional[uuid.UUID]):
    """Add `column == company_id` to a query unless the scope is unrestricted"""
    if company_id is None:
        return query
    return query.filter(column == company_id)
