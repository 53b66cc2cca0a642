"""
POS Endpoints
Orders and order lines
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from datetime import datetime
from typing import Optional
import math
import uuid

from cuehall.core.database import get_db
from cuehall.core.security import get_current_user
from cuehall.models import PaymentStatus, Profile
from cuehall.schemas.pos import (
    OrderItemCreate,
    OrderItemUpdate,
    PosOrderCreate,
    PosOrderPage,
    PosOrderResponse,
    PosOrderUpdate,
)
from cuehall.services.pos_service import PosService

router = APIRouter()


@router.post("/orders", response_model=PosOrderResponse, status_code=201)
def create_order(
    order_data: PosOrderCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """
    Ring up an order
    Lines draw stock; an attached running session is ended and billed
    """
    data = order_data.model_dump()
    return PosService(db).create_order(current_user, data)


@router.get("/orders", response_model=PosOrderPage)
def list_orders(
    company_id: Optional[uuid.UUID] = None,
    table_session_id: Optional[uuid.UUID] = None,
    payment_status: Optional[PaymentStatus] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    orders, total = PosService(db).list_orders(
        current_user, company_id, table_session_id, payment_status, start_date, end_date, page, limit
    )
    return PosOrderPage(
        orders=orders,
        total=total,
        page=page,
        limit=limit,
        pages=math.ceil(total / limit) if total else 0
    )


@router.get("/orders/{order_id}", response_model=PosOrderResponse)
def get_order(
    order_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return PosService(db).get_order(current_user, order_id)


@router.patch("/orders/{order_id}", response_model=PosOrderResponse)
def update_order(
    order_id: uuid.UUID,
    order_data: PosOrderUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Update payment status and/or method"""
    return PosService(db).update_order(current_user, order_id, order_data.model_dump(exclude_unset=True))


@router.delete("/orders/{order_id}")
def delete_order(
    order_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Cancel an unpaid order; lines go back to stock"""
    PosService(db).delete_order(current_user, order_id)
    return {"message": "Order deleted successfully"}


@router.post("/orders/{order_id}/items", response_model=PosOrderResponse, status_code=201)
def add_order_item(
    order_id: uuid.UUID,
    data: OrderItemCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return PosService(db).add_order_item(current_user, order_id, data.item_id, data.quantity, data.unit_price)


@router.patch("/orders/{order_id}/items/{order_item_id}", response_model=PosOrderResponse)
def update_order_item(
    order_id: uuid.UUID,
    order_item_id: uuid.UUID,
    data: OrderItemUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return PosService(db).update_order_item(current_user, order_id, order_item_id, data.quantity, data.unit_price)


@router.delete("/orders/{order_id}/items/{order_item_id}", response_model=PosOrderResponse)
def remove_order_item(
    order_id: uuid.UUID,
    order_item_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return PosService(db).remove_order_item(current_user, order_id, order_item_id)
