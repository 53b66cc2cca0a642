"""
Table Session Schemas
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
import uuid

from cuehall.models import SessionStatus


class TableSessionCreate(BaseModel):
    """Start session request"""
    table_id: uuid.UUID
    staff_id: Optional[uuid.UUID] = None
    staff_notes: Optional[str] = None


class TableSessionResponse(BaseModel):
    """Table session response"""
    id: uuid.UUID
    table_id: uuid.UUID
    staff_id: Optional[uuid.UUID] = None
    started_at: datetime
    ended_at: Optional[datetime] = None
    status: SessionStatus
    total_cost: Optional[float] = None
    staff_notes: Optional[str] = None

    class Config:
        from_attributes = True


class SessionMoveRequest(BaseModel):
    """Move session to another table"""
    target_table_id: uuid.UUID


class SessionCostResponse(BaseModel):
    """Current or final cost of a session"""
    session_id: uuid.UUID
    status: SessionStatus
    duration_seconds: int
    hourly_rate: Optional[float] = None
    cost: Optional[float] = None


class TrackedItemCreate(BaseModel):
    """Item added to a session tab"""
    item_id: uuid.UUID
    quantity: int = Field(..., gt=0)
    unit_price: Optional[float] = Field(None, ge=0)


class TrackedItemsRequest(BaseModel):
    """Batch of tracked items"""
    items: List[TrackedItemCreate] = Field(..., min_length=1)


class TrackedItemResponse(BaseModel):
    """Tracked item on a session tab"""
    id: uuid.UUID
    item_id: uuid.UUID
    quantity: int
    unit_price: float
    subtotal: float

    class Config:
        from_attributes = True
