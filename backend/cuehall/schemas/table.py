"""
Table Schemas
Tables, status changes, activity log and maintenance records
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
import uuid

from cuehall.models import TableStatus
from cuehall.schemas.base import PartialUpdate


class TableBase(BaseModel):
    """Base table schema"""
    name: str = Field(..., min_length=1, max_length=100)
    hourly_rate: Optional[float] = Field(None, ge=0)


class TableCreate(TableBase):
    """Create table request"""
    status: TableStatus = TableStatus.AVAILABLE
    company_id: Optional[uuid.UUID] = None


class TableUpdate(PartialUpdate):
    """Update table request"""
    non_nullable = ("name", "status")

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    hourly_rate: Optional[float] = Field(None, ge=0)
    status: Optional[TableStatus] = None


class TableResponse(TableBase):
    """Table response"""
    id: uuid.UUID
    company_id: uuid.UUID
    status: TableStatus
    created_at: datetime

    class Config:
        from_attributes = True


class TableStatusRequest(BaseModel):
    """Manual status change"""
    status: TableStatus
    notes: Optional[str] = None


class ActivityLogResponse(BaseModel):
    """Table activity log entry"""
    id: uuid.UUID
    table_id: uuid.UUID
    previous_status: TableStatus
    new_status: TableStatus
    changed_by_id: Optional[uuid.UUID] = None
    changed_at: datetime
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class TableStatusResponse(BaseModel):
    """Result of a status change"""
    message: str
    table: TableResponse
    activity_log: Optional[ActivityLogResponse] = None


class MaintenanceBase(BaseModel):
    """Base maintenance schema"""
    description: Optional[str] = None
    maintenance_at: datetime
    cost: Optional[float] = Field(None, ge=0)


class MaintenanceCreate(MaintenanceBase):
    """Create maintenance record"""
    table_id: uuid.UUID


class MaintenanceUpdate(PartialUpdate):
    """Update maintenance record"""
    non_nullable = ("maintenance_at",)

    description: Optional[str] = None
    maintenance_at: Optional[datetime] = None
    cost: Optional[float] = Field(None, ge=0)


class MaintenanceResponse(MaintenanceBase):
    """Maintenance record"""
    id: uuid.UUID
    table_id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True
