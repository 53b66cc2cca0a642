"""
Reservation Models
Customers and their table reservations
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SQLEnum, Text, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum

from cuehall.core.database import Base


class ReservationStatus(str, enum.Enum):
    """Reservation status enumeration"""
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


# Statuses that hold the table
BLOCKING_RESERVATION_STATUSES = (ReservationStatus.PENDING, ReservationStatus.CONFIRMED)


class Customer(Base):
    """
    Customer model
    """
    __tablename__ = "customers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id = Column(Uuid, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True, index=True)
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    company = relationship("Company", back_populates="customers")
    reservations = relationship("TableReservation", back_populates="customer")

    def __repr__(self):
        return f"<Customer(id={self.id}, name='{self.name}')>"


class TableReservation(Base):
    """
    Table Reservation model
    Holds a table for a customer over [reserved_from, reserved_to]
    """
    __tablename__ = "table_reservations"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    table_id = Column(Uuid, ForeignKey("tables.id"), nullable=False, index=True)
    customer_id = Column(Uuid, ForeignKey("customers.id"), nullable=False, index=True)
    reserved_from = Column(DateTime, nullable=False, index=True)
    reserved_to = Column(DateTime, nullable=False)
    status = Column(SQLEnum(ReservationStatus, name="reservation_status_t"), nullable=False, default=ReservationStatus.PENDING)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    table = relationship("Table", back_populates="reservations")
    customer = relationship("Customer", back_populates="reservations")

    def __repr__(self):
        return f"<TableReservation(table={self.table_id}, {self.reserved_from} - {self.reserved_to}, '{self.status}')>"
