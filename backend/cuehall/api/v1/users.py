"""
Profile Endpoints
Staff profile management and superadmin company selection
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
import uuid
import logging

from cuehall.core.database import get_db
from cuehall.core.security import get_current_user, get_password_hash, require_admin
from cuehall.core.tenancy import ensure_company_access, resolve_read_scope, resolve_write_company
from cuehall.models import Company, Profile, RoleEnum
from cuehall.schemas.auth import (
    SelectCompanyRequest,
    UserCreate,
    UserResponse,
    UserUpdate,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_profile(db: Session, current_user: Profile, user_id: uuid.UUID) -> Profile:
    profile = db.query(Profile).filter(Profile.id == user_id).first()
    if not profile:
        raise HTTPException(status_code=404, detail="User not found")
    # Superadmins may have selected any company; only another superadmin manages them
    if profile.is_superadmin or profile.company_id is None:
        if not current_user.is_superadmin:
            raise HTTPException(status_code=403, detail="Access denied")
    else:
        ensure_company_access(current_user, profile.company_id)
    return profile


def _check_role_grant(current_user: Profile, role: RoleEnum) -> None:
    if role == RoleEnum.SUPERADMIN and not current_user.is_superadmin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only superadmins can grant the SUPERADMIN role"
        )


@router.post("/", response_model=UserResponse, status_code=201)
def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Create a staff profile (admin only)"""
    _check_role_grant(current_user, user_data.role)

    existing = db.query(Profile).filter(Profile.email == user_data.email).first()
    if existing:
        raise HTTPException(status_code=400, detail="Email already registered")

    if user_data.role == RoleEnum.SUPERADMIN:
        company_id = user_data.company_id
    else:
        company_id = resolve_write_company(current_user, user_data.company_id)

    profile = Profile(
        email=user_data.email,
        password_hash=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        role=user_data.role,
        company_id=company_id,
        active=True
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)

    logger.info("Profile %s (%s) created by %s", profile.id, profile.role.value, current_user.id)
    return profile


@router.get("/", response_model=List[UserResponse])
def list_users(
    company_id: Optional[uuid.UUID] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """List staff profiles (admin only)"""
    scope = resolve_read_scope(current_user, company_id)
    query = db.query(Profile)
    if scope is not None:
        query = query.filter(Profile.company_id == scope)
    if not current_user.is_superadmin:
        query = query.filter(Profile.role != RoleEnum.SUPERADMIN)
    return query.order_by(Profile.email.asc()).all()


@router.post("/select-company", response_model=UserResponse)
def select_company(
    data: SelectCompanyRequest,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Superadmin: choose the company used as default scope"""
    if not current_user.is_superadmin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only superadmins can select a company"
        )

    if data.company_id is not None:
        company = db.query(Company).filter(Company.id == data.company_id).first()
        if not company:
            raise HTTPException(status_code=404, detail="Company not found")

    current_user.company_id = data.company_id
    db.commit()
    db.refresh(current_user)
    return current_user


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Get profile by ID (admin only)"""
    return _get_profile(db, current_user, user_id)


@router.patch("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: uuid.UUID,
    user_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Update profile (admin only)"""
    profile = _get_profile(db, current_user, user_id)

    if user_data.email is not None and user_data.email != profile.email:
        existing = db.query(Profile).filter(
            Profile.email == user_data.email,
            Profile.id != user_id
        ).first()
        if existing:
            raise HTTPException(status_code=400, detail="Email already in use")
        profile.email = user_data.email

    if user_data.password is not None:
        profile.password_hash = get_password_hash(user_data.password)

    if user_data.role is not None:
        _check_role_grant(current_user, user_data.role)
        profile.role = user_data.role

    if user_data.company_id is not None:
        profile.company_id = resolve_write_company(current_user, user_data.company_id)

    for field in ("first_name", "last_name", "active"):
        value = getattr(user_data, field)
        if value is not None:
            setattr(profile, field, value)

    db.commit()
    db.refresh(profile)
    return profile


@router.delete("/{user_id}")
def deactivate_user(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Deactivate profile (admin only); sessions and orders keep referencing it"""
    if user_id == current_user.id:
        raise HTTPException(status_code=400, detail="You cannot deactivate your own profile")

    profile = _get_profile(db, current_user, user_id)
    profile.active = False
    db.commit()

    logger.info("Profile %s deactivated by %s", profile.id, current_user.id)
    return {"message": "User deactivated successfully"}
