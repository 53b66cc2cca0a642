"""
Inventory Endpoints
Categories, items, stock movements and inventory reports
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import datetime
from typing import Any, Dict, List, Optional
import uuid

from cuehall.core.database import get_db
from cuehall.core.security import get_current_user, require_admin
from cuehall.models import MovementType, Profile
from cuehall.schemas.inventory import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    InventoryItemCreate,
    InventoryItemResponse,
    InventoryItemUpdate,
    MovementCorrection,
    StockMovementCreate,
    StockMovementResponse,
)
from cuehall.services.inventory_service import InventoryService

router = APIRouter()


# ----------------------------------------------------------------------
# Categories
# ----------------------------------------------------------------------

@router.post("/categories", response_model=CategoryResponse, status_code=201)
def create_category(
    data: CategoryCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    return InventoryService(db).create_category(current_user, data.name, data.description, data.company_id)


@router.get("/categories", response_model=List[CategoryResponse])
def list_categories(
    company_id: Optional[uuid.UUID] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return InventoryService(db).list_categories(current_user, company_id)


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: uuid.UUID,
    data: CategoryUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    return InventoryService(db).update_category(current_user, category_id, data.model_dump(exclude_unset=True))


@router.delete("/categories/{category_id}")
def delete_category(
    category_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    InventoryService(db).delete_category(current_user, category_id)
    return {"message": "Category deleted successfully"}


# ----------------------------------------------------------------------
# Items
# ----------------------------------------------------------------------

@router.post("/items", response_model=InventoryItemResponse, status_code=201)
def create_item(
    data: InventoryItemCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Create item; initial quantity is booked as a PURCHASE movement"""
    return InventoryService(db).create_item(current_user, data.model_dump())


@router.get("/items", response_model=List[InventoryItemResponse])
def list_items(
    company_id: Optional[uuid.UUID] = None,
    category_id: Optional[uuid.UUID] = None,
    active: Optional[bool] = None,
    search: Optional[str] = None,
    low_stock: bool = False,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return InventoryService(db).list_items(current_user, company_id, category_id, active, search, low_stock)


@router.get("/items/low-stock", response_model=List[InventoryItemResponse])
def list_low_stock(
    company_id: Optional[uuid.UUID] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Items at or below their critical threshold"""
    return InventoryService(db).low_stock(current_user, company_id, limit)


@router.get("/items/{item_id}", response_model=InventoryItemResponse)
def get_item(
    item_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return InventoryService(db).get_item(current_user, item_id)


@router.patch("/items/{item_id}", response_model=InventoryItemResponse)
def update_item(
    item_id: uuid.UUID,
    data: InventoryItemUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    return InventoryService(db).update_item(current_user, item_id, data.model_dump(exclude_unset=True))


@router.post("/items/{item_id}/toggle-active", response_model=InventoryItemResponse)
def toggle_item_active(
    item_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    return InventoryService(db).toggle_active(current_user, item_id)


@router.delete("/items/{item_id}")
def delete_item(
    item_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    InventoryService(db).delete_item(current_user, item_id)
    return {"message": "Item deleted successfully"}


# ----------------------------------------------------------------------
# Stock movements (append-only)
# ----------------------------------------------------------------------

@router.post("/movements", response_model=StockMovementResponse, status_code=201)
def create_movement(
    data: StockMovementCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Record a stock movement and apply it to the item"""
    return InventoryService(db).record_movement(
        current_user,
        data.item_id,
        data.type,
        data.quantity,
        cost_price=data.cost_price,
        reason=data.reason,
        reference=data.reference
    )


@router.get("/movements", response_model=List[StockMovementResponse])
def list_movements(
    item_id: Optional[uuid.UUID] = None,
    company_id: Optional[uuid.UUID] = None,
    type: Optional[MovementType] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return InventoryService(db).list_movements(current_user, item_id, company_id, type, start_date, end_date)


@router.post("/movements/{movement_id}/correct", response_model=StockMovementResponse, status_code=201)
def correct_movement(
    movement_id: uuid.UUID,
    data: MovementCorrection,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """
    Correct an ADJUSTMENT movement
    Appends a reversal and a replacement; returns the replacement
    """
    return InventoryService(db).correct_adjustment(current_user, movement_id, data.quantity, data.reason)


@router.post("/movements/{movement_id}/reverse", response_model=StockMovementResponse, status_code=201)
def reverse_movement(
    movement_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Cancel an ADJUSTMENT movement by appending its reversal"""
    return InventoryService(db).reverse_adjustment(current_user, movement_id)


# ----------------------------------------------------------------------
# Reports
# ----------------------------------------------------------------------

@router.get("/reports", response_model=List[Dict[str, Any]])
def inventory_report(
    type: str = Query("stock", pattern="^(stock|movements|categories)$"),
    company_id: Optional[uuid.UUID] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Inventory report: stock levels, recent movements or categories"""
    return InventoryService(db).report(current_user, type, company_id, start_date, end_date)
