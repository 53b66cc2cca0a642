"""
Authentication Endpoints
Handles login, token refresh and the current profile
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import uuid
import logging

from cuehall.core.config import settings
from cuehall.core.database import get_db
from cuehall.core.security import (
    verify_password,
    create_access_token,
    create_refresh_token,
    build_token_payload,
    decode_token,
    get_current_user,
)
from cuehall.models import Profile
from cuehall.schemas.auth import (
    LoginRequest,
    TokenResponse,
    RefreshTokenRequest,
    CurrentUserResponse,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _issue_tokens(profile: Profile) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(build_token_payload(profile)),
        refresh_token=create_refresh_token({"user_id": str(profile.id)}),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    )


@router.post("/login", response_model=TokenResponse)
def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    Login with email and password
    Returns access and refresh tokens
    """
    profile = db.query(Profile).filter(Profile.email == request.email).first()

    if not profile or not profile.active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    if not verify_password(request.password, profile.password_hash):
        logger.warning("Failed login for %s", request.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    logger.info("Profile %s logged in", profile.id)
    return _issue_tokens(profile)


@router.post("/refresh", response_model=TokenResponse)
def refresh_token(request: RefreshTokenRequest, db: Session = Depends(get_db)):
    """
    Refresh access token using refresh token
    """
    payload = decode_token(request.refresh_token)

    if payload.get("type") != "refresh":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type"
        )

    try:
        profile_id = uuid.UUID(payload.get("user_id") or "")
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token"
        )

    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile or not profile.active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found or inactive"
        )

    return _issue_tokens(profile)


@router.get("/me", response_model=CurrentUserResponse)
def get_current_user_info(current_user: Profile = Depends(get_current_user)):
    """
    Get current authenticated profile
    """
    return CurrentUserResponse(
        id=current_user.id,
        email=current_user.email,
        first_name=current_user.first_name,
        last_name=current_user.last_name,
        role=current_user.role,
        company_id=current_user.company_id,
        active=current_user.active,
        created_at=current_user.created_at,
        company_name=current_user.company.name if current_user.company else None,
        is_superadmin=current_user.is_superadmin
    )
