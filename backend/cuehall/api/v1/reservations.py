"""
Reservation Endpoints
Customers and table reservations
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional
import uuid

from cuehall.core.database import get_db
from cuehall.core.security import get_current_user
from cuehall.models import Profile, ReservationStatus
from cuehall.schemas.reservation import (
    CustomerCreate,
    CustomerResponse,
    CustomerUpdate,
    ReservationCreate,
    ReservationResponse,
    ReservationUpdate,
)
from cuehall.services.reservation_service import ReservationService

router = APIRouter()
customers_router = APIRouter()


@router.post("/", response_model=ReservationResponse, status_code=201)
def create_reservation(
    data: ReservationCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Reserve a table; overlapping active reservations are rejected"""
    return ReservationService(db).create_reservation(current_user, data.model_dump())


@router.get("/", response_model=List[ReservationResponse])
def list_reservations(
    company_id: Optional[uuid.UUID] = None,
    table_id: Optional[uuid.UUID] = None,
    customer_id: Optional[uuid.UUID] = None,
    status: Optional[ReservationStatus] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return ReservationService(db).list_reservations(
        current_user, company_id, table_id, customer_id, status, start_date, end_date
    )


@router.get("/{reservation_id}", response_model=ReservationResponse)
def get_reservation(
    reservation_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return ReservationService(db).get_reservation(current_user, reservation_id)


@router.patch("/{reservation_id}", response_model=ReservationResponse)
def update_reservation(
    reservation_id: uuid.UUID,
    data: ReservationUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return ReservationService(db).update_reservation(
        current_user, reservation_id, data.model_dump(exclude_unset=True)
    )


@router.delete("/{reservation_id}")
def delete_reservation(
    reservation_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    ReservationService(db).delete_reservation(current_user, reservation_id)
    return {"message": "Reservation deleted successfully"}


# ----------------------------------------------------------------------
# Customers
# ----------------------------------------------------------------------

@customers_router.post("/", response_model=CustomerResponse, status_code=201)
def create_customer(
    data: CustomerCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return ReservationService(db).create_customer(current_user, data.model_dump())


@customers_router.get("/", response_model=List[CustomerResponse])
def list_customers(
    company_id: Optional[uuid.UUID] = None,
    search: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Customers with their reservation counts"""
    rows = ReservationService(db).list_customers(current_user, company_id, search)
    return [
        CustomerResponse.model_validate(customer).model_copy(update={"reservation_count": count})
        for customer, count in rows
    ]


@customers_router.get("/{customer_id}", response_model=CustomerResponse)
def get_customer(
    customer_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    customer = ReservationService(db).get_customer(current_user, customer_id)
    return CustomerResponse.model_validate(customer).model_copy(
        update={"reservation_count": len(customer.reservations)}
    )


@customers_router.patch("/{customer_id}", response_model=CustomerResponse)
def update_customer(
    customer_id: uuid.UUID,
    data: CustomerUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    customer = ReservationService(db).update_customer(current_user, customer_id, data.model_dump(exclude_unset=True))
    return CustomerResponse.model_validate(customer).model_copy(
        update={"reservation_count": len(customer.reservations)}
    )


@customers_router.delete("/{customer_id}")
def delete_customer(
    customer_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    ReservationService(db).delete_customer(current_user, customer_id)
    return {"message": "Customer deleted successfully"}
