"""
POS Schemas
Orders and order lines
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
import uuid

from cuehall.models import PaymentMethod, PaymentStatus


class OrderItemCreate(BaseModel):
    """Order line request"""
    item_id: uuid.UUID
    quantity: int = Field(..., gt=0)
    unit_price: Optional[float] = Field(None, gt=0)


class OrderItemUpdate(BaseModel):
    """Order line change"""
    quantity: Optional[int] = Field(None, gt=0)
    unit_price: Optional[float] = Field(None, gt=0)


class OrderItemResponse(BaseModel):
    """Order line response"""
    id: uuid.UUID
    item_id: uuid.UUID
    quantity: int
    unit_price: float

    class Config:
        from_attributes = True


class PosOrderCreate(BaseModel):
    """Create order request"""
    company_id: Optional[uuid.UUID] = None
    table_session_id: Optional[uuid.UUID] = None
    items: List[OrderItemCreate] = Field(default_factory=list)
    discount: float = Field(default=0.0, ge=0)
    payment_method: PaymentMethod = PaymentMethod.CASH
    payment_status: PaymentStatus = PaymentStatus.UNPAID


class PosOrderUpdate(BaseModel):
    """Update payment status / method"""
    payment_status: Optional[PaymentStatus] = None
    payment_method: Optional[PaymentMethod] = None


class PosOrderResponse(BaseModel):
    """Order response"""
    id: uuid.UUID
    company_id: uuid.UUID
    staff_id: Optional[uuid.UUID] = None
    table_session_id: Optional[uuid.UUID] = None
    amount: float
    discount: float
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    created_at: datetime
    order_items: List[OrderItemResponse] = []

    class Config:
        from_attributes = True


class PosOrderPage(BaseModel):
    """Paginated orders"""
    orders: List[PosOrderResponse]
    total: int
    page: int
    limit: int
    pages: int
