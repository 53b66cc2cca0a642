"""
Reservation Service
Customers and table reservations with overlap detection
"""

from sqlalchemy import func
from sqlalchemy.orm import Session
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
import uuid
import logging

from cuehall.core.database import transaction
from cuehall.core.exceptions import BusinessRuleError, NotFoundError
from cuehall.core.tenancy import (
    apply_company_filter,
    ensure_company_access,
    resolve_read_scope,
    resolve_write_company,
)
from cuehall.models import (
    BLOCKING_RESERVATION_STATUSES,
    Customer,
    Profile,
    ReservationStatus,
    Table,
    TableReservation,
)

logger = logging.getLogger(__name__)


class ReservationService:
    """Customer and reservation management"""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Customers
    # ------------------------------------------------------------------

    def get_customer(self, actor: Profile, customer_id: uuid.UUID) -> Customer:
        customer = self.db.query(Customer).filter(Customer.id == customer_id).first()
        if not customer:
            raise NotFoundError("Customer", customer_id)
        ensure_company_access(actor, customer.company_id)
        return customer

    def list_customers(
        self,
        actor: Profile,
        company_id: Optional[uuid.UUID] = None,
        search: Optional[str] = None
    ) -> List[Tuple[Customer, int]]:
        """Customers with their reservation counts, ordered by name"""
        scope = resolve_read_scope(actor, company_id)

        reservation_count = func.count(TableReservation.id)
        query = (
            self.db.query(Customer, reservation_count)
            .outerjoin(TableReservation, TableReservation.customer_id == Customer.id)
            .group_by(Customer.id)
        )
        query = apply_company_filter(query, Customer.company_id, scope)

        if search:
            pattern = f"%{search}%"
            query = query.filter(
                Customer.name.ilike(pattern) | Customer.email.ilike(pattern) | Customer.phone.ilike(pattern)
            )

        return [(customer, count) for customer, count in query.order_by(Customer.name.asc()).all()]

    def create_customer(self, actor: Profile, data: Dict[str, Any]) -> Customer:
        company_id = resolve_write_company(actor, data.get("company_id"))
        self._check_unique_email(company_id, data.get("email"))

        with transaction(self.db):
            customer = Customer(
                company_id=company_id,
                name=data["name"],
                email=data.get("email"),
                phone=data.get("phone"),
                address=data.get("address"),
                notes=data.get("notes"),
            )
            self.db.add(customer)

        self.db.refresh(customer)
        return customer

    def update_customer(self, actor: Profile, customer_id: uuid.UUID, changes: Dict[str, Any]) -> Customer:
        customer = self.get_customer(actor, customer_id)

        if changes.get("email") and changes["email"] != customer.email:
            self._check_unique_email(customer.company_id, changes["email"], exclude_id=customer.id)

        with transaction(self.db):
            for field in ("name", "email", "phone", "address", "notes"):
                if field in changes:
                    setattr(customer, field, changes[field])

        self.db.refresh(customer)
        return customer

    def delete_customer(self, actor: Profile, customer_id: uuid.UUID) -> None:
        customer = self.get_customer(actor, customer_id)

        if customer.reservations:
            raise BusinessRuleError("Cannot delete customer with existing reservations")

        with transaction(self.db):
            self.db.delete(customer)

    def _check_unique_email(
        self,
        company_id: uuid.UUID,
        email: Optional[str],
        exclude_id: Optional[uuid.UUID] = None
    ) -> None:
        if not email:
            return
        query = self.db.query(Customer).filter(Customer.company_id == company_id, Customer.email == email)
        if exclude_id is not None:
            query = query.filter(Customer.id != exclude_id)
        if query.first():
            raise BusinessRuleError("A customer with this email already exists")

    # ------------------------------------------------------------------
    # Reservations
    # ------------------------------------------------------------------

    def get_reservation(self, actor: Profile, reservation_id: uuid.UUID) -> TableReservation:
        reservation = self.db.query(TableReservation).filter(TableReservation.id == reservation_id).first()
        if not reservation:
            raise NotFoundError("Reservation", reservation_id)
        ensure_company_access(actor, reservation.table.company_id)
        return reservation

    def list_reservations(
        self,
        actor: Profile,
        company_id: Optional[uuid.UUID] = None,
        table_id: Optional[uuid.UUID] = None,
        customer_id: Optional[uuid.UUID] = None,
        status: Optional[ReservationStatus] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> List[TableReservation]:
        scope = resolve_read_scope(actor, company_id)
        query = self.db.query(TableReservation).join(Table, TableReservation.table_id == Table.id)
        query = apply_company_filter(query, Table.company_id, scope)

        if table_id is not None:
            query = query.filter(TableReservation.table_id == table_id)
        if customer_id is not None:
            query = query.filter(TableReservation.customer_id == customer_id)
        if status is not None:
            query = query.filter(TableReservation.status == status)
        if start_date is not None:
            query = query.filter(TableReservation.reserved_to >= start_date)
        if end_date is not None:
            query = query.filter(TableReservation.reserved_from <= end_date)

        return query.order_by(TableReservation.reserved_from.asc()).all()

    def create_reservation(self, actor: Profile, data: Dict[str, Any]) -> TableReservation:
        """
        Reserve a table for a customer

        Raises:
            BusinessRuleError: invalid window, cross-company customer,
                or an overlapping PENDING/CONFIRMED reservation
        """
        table = self._get_table(actor, data["table_id"])
        customer = self.get_customer(actor, data["customer_id"])

        if customer.company_id != table.company_id:
            raise BusinessRuleError("Customer and table must belong to the same company")

        reserved_from = data["reserved_from"]
        reserved_to = data["reserved_to"]
        self._check_window(reserved_from, reserved_to)

        status = data.get("status") or ReservationStatus.PENDING
        if status in BLOCKING_RESERVATION_STATUSES:
            self._check_overlap(table.id, reserved_from, reserved_to)

        with transaction(self.db):
            reservation = TableReservation(
                table_id=table.id,
                customer_id=customer.id,
                reserved_from=reserved_from,
                reserved_to=reserved_to,
                status=status,
            )
            self.db.add(reservation)

        self.db.refresh(reservation)
        logger.info(
            "Reservation %s on table %s: %s - %s",
            reservation.id, table.id, reserved_from, reserved_to
        )
        return reservation

    def update_reservation(
        self,
        actor: Profile,
        reservation_id: uuid.UUID,
        changes: Dict[str, Any]
    ) -> TableReservation:
        """Update window, table, customer or status; overlap is re-checked unless closing it"""
        reservation = self.get_reservation(actor, reservation_id)

        table = reservation.table
        if changes.get("table_id") is not None and changes["table_id"] != reservation.table_id:
            table = self._get_table(actor, changes["table_id"])

        customer = reservation.customer
        if changes.get("customer_id") is not None and changes["customer_id"] != reservation.customer_id:
            customer = self.get_customer(actor, changes["customer_id"])

        if customer.company_id != table.company_id:
            raise BusinessRuleError("Customer and table must belong to the same company")

        reserved_from = changes.get("reserved_from") or reservation.reserved_from
        reserved_to = changes.get("reserved_to") or reservation.reserved_to
        self._check_window(reserved_from, reserved_to)

        status = changes.get("status") or reservation.status
        if status in BLOCKING_RESERVATION_STATUSES:
            self._check_overlap(table.id, reserved_from, reserved_to, exclude_id=reservation.id)

        with transaction(self.db):
            reservation.table_id = table.id
            reservation.customer_id = customer.id
            reservation.reserved_from = reserved_from
            reservation.reserved_to = reserved_to
            reservation.status = status

        self.db.refresh(reservation)
        return reservation

    def delete_reservation(self, actor: Profile, reservation_id: uuid.UUID) -> None:
        reservation = self.get_reservation(actor, reservation_id)

        with transaction(self.db):
            self.db.delete(reservation)

    def _check_window(self, reserved_from: datetime, reserved_to: datetime) -> None:
        if reserved_to <= reserved_from:
            raise BusinessRuleError("Reservation end time must be after start time")

    def _check_overlap(
        self,
        table_id: uuid.UUID,
        reserved_from: datetime,
        reserved_to: datetime,
        exclude_id: Optional[uuid.UUID] = None
    ) -> None:
        """Inclusive bounds: touching windows count as overlapping"""
        query = self.db.query(TableReservation).filter(
            TableReservation.table_id == table_id,
            TableReservation.status.in_(BLOCKING_RESERVATION_STATUSES),
            TableReservation.reserved_from <= reserved_to,
            TableReservation.reserved_to >= reserved_from,
        )
        if exclude_id is not None:
            query = query.filter(TableReservation.id != exclude_id)

        if query.first():
            raise BusinessRuleError("This table is already reserved for the selected time period")

    def _get_table(self, actor: Profile, table_id: uuid.UUID) -> Table:
        table = self.db.query(Table).filter(Table.id == table_id).first()
        if not table:
            raise NotFoundError("Table", table_id)
        ensure_company_access(actor, table.company_id)
        return table
