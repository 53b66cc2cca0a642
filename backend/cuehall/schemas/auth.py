"""
Authentication Schemas
Request/response models for auth and profile endpoints
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
import uuid

from cuehall.models import RoleEnum


class LoginRequest(BaseModel):
    """Login request"""
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """JWT token response"""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


class RefreshTokenRequest(BaseModel):
    """Refresh token request"""
    refresh_token: str


class UserBase(BaseModel):
    """Base profile schema"""
    email: EmailStr
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    role: RoleEnum = RoleEnum.SELLER


class UserCreate(UserBase):
    """Create profile request"""
    password: str = Field(..., min_length=8)
    company_id: Optional[uuid.UUID] = None


class UserUpdate(BaseModel):
    """Update profile request"""
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=8)
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    role: Optional[RoleEnum] = None
    company_id: Optional[uuid.UUID] = None
    active: Optional[bool] = None


class UserResponse(UserBase):
    """Profile response"""
    id: uuid.UUID
    company_id: Optional[uuid.UUID] = None
    active: bool
    created_at: datetime

    class Config:
        from_attributes = True


class CurrentUserResponse(UserResponse):
    """Current authenticated profile"""
    company_name: Optional[str] = None
    is_superadmin: bool = False


class SelectCompanyRequest(BaseModel):
    """Superadmin company selection; null clears it"""
    company_id: Optional[uuid.UUID] = None
