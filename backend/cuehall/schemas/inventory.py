"""
Inventory Schemas
Categories, items and stock movements
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
import uuid

from cuehall.models import MovementType
from cuehall.schemas.base import PartialUpdate


class CategoryBase(BaseModel):
    """Base category schema"""
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None


class CategoryCreate(CategoryBase):
    """Create category request"""
    company_id: Optional[uuid.UUID] = None


class CategoryUpdate(PartialUpdate):
    """Update category request"""
    non_nullable = ("name",)

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class CategoryResponse(CategoryBase):
    """Category response"""
    id: uuid.UUID
    company_id: uuid.UUID
    created_at: datetime

    class Config:
        from_attributes = True


class InventoryItemBase(BaseModel):
    """Base inventory item schema"""
    name: str = Field(..., min_length=1, max_length=255)
    sku: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    critical_threshold: int = Field(default=5, ge=0)
    price: Optional[float] = Field(None, ge=0)
    category_id: Optional[uuid.UUID] = None


class InventoryItemCreate(InventoryItemBase):
    """Create inventory item request"""
    company_id: Optional[uuid.UUID] = None
    quantity: int = Field(default=0, ge=0)
    cost_price: Optional[float] = Field(None, ge=0)  # unit cost of the initial stock
    active: bool = True


class InventoryItemUpdate(PartialUpdate):
    """Update inventory item request"""
    non_nullable = ("name", "critical_threshold", "active")

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    sku: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    critical_threshold: Optional[int] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0)
    category_id: Optional[uuid.UUID] = None
    active: Optional[bool] = None
    quantity: Optional[int] = None


class InventoryItemResponse(InventoryItemBase):
    """Inventory item response"""
    id: uuid.UUID
    company_id: uuid.UUID
    quantity: int
    active: bool
    last_stock_update: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class StockMovementCreate(BaseModel):
    """Manual stock movement"""
    item_id: uuid.UUID
    type: MovementType
    quantity: int
    cost_price: Optional[float] = Field(None, ge=0)
    reason: Optional[str] = None
    reference: Optional[str] = None


class MovementCorrection(BaseModel):
    """Correct an ADJUSTMENT movement"""
    quantity: int
    reason: Optional[str] = None


class StockMovementResponse(BaseModel):
    """Stock movement (ledger row)"""
    id: uuid.UUID
    item_id: uuid.UUID
    quantity: int
    type: MovementType
    cost_price: Optional[float] = None
    reason: Optional[str] = None
    reference: Optional[str] = None
    created_by: Optional[uuid.UUID] = None
    reversal_of_id: Optional[uuid.UUID] = None
    created_at: datetime

    class Config:
        from_attributes = True
