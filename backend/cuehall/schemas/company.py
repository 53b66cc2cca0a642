"""
Company Schemas
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
import uuid

from cuehall.schemas.base import PartialUpdate


class CompanyBase(BaseModel):
    """Base company schema"""
    name: str = Field(..., min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None


class CompanyCreate(CompanyBase):
    """Create company request"""
    pass


class CompanyUpdate(PartialUpdate):
    """Update company request"""
    non_nullable = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    phone: Optional[str] = Field(None, max_length=50)
    email: Optional[EmailStr] = None


class CompanyResponse(CompanyBase):
    """Company response"""
    id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True


class CompanyWithStats(CompanyResponse):
    """Company with usage stats"""
    table_count: int = 0
    profile_count: int = 0
    item_count: int = 0
