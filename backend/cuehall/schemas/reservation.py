"""
Reservation Schemas
Customers and table reservations
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime
import uuid

from cuehall.models import ReservationStatus
from cuehall.schemas.base import PartialUpdate


class CustomerBase(BaseModel):
    """Base customer schema"""
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    notes: Optional[str] = None


class CustomerCreate(CustomerBase):
    """Create customer request"""
    company_id: Optional[uuid.UUID] = None


class CustomerUpdate(PartialUpdate):
    """Update customer request"""
    non_nullable = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=50)
    address: Optional[str] = None
    notes: Optional[str] = None


class CustomerResponse(CustomerBase):
    """Customer response"""
    id: uuid.UUID
    company_id: uuid.UUID
    created_at: datetime
    reservation_count: int = 0

    class Config:
        from_attributes = True


class ReservationCreate(BaseModel):
    """Create reservation request"""
    table_id: uuid.UUID
    customer_id: uuid.UUID
    reserved_from: datetime
    reserved_to: datetime
    status: ReservationStatus = ReservationStatus.PENDING


class ReservationUpdate(BaseModel):
    """Update reservation request"""
    table_id: Optional[uuid.UUID] = None
    customer_id: Optional[uuid.UUID] = None
    reserved_from: Optional[datetime] = None
    reserved_to: Optional[datetime] = None
    status: Optional[ReservationStatus] = None


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: uuid.UUID
    table_id: uuid.UUID
    customer_id: uuid.UUID
    reserved_from: datetime
    reserved_to: datetime
    status: ReservationStatus
    created_at: datetime

    class Config:
        from_attributes = True
