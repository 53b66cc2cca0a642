"""
Table Models
Billiard tables, their status history and maintenance log
"""

from sqlalchemy import Column, String, Float, DateTime, ForeignKey, Enum as SQLEnum, Text, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum

from cuehall.core.database import Base


class TableStatus(str, enum.Enum):
    """Table status enumeration"""
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    RESERVED = "RESERVED"
    MAINTENANCE = "MAINTENANCE"


class Table(Base):
    """
    Table model
    A billable pool table belonging to one company
    """
    __tablename__ = "tables"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id = Column(Uuid, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    status = Column(SQLEnum(TableStatus, name="table_status_t"), nullable=False, default=TableStatus.AVAILABLE)
    hourly_rate = Column(Float, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    company = relationship("Company", back_populates="tables")
    sessions = relationship("TableSession", back_populates="table")
    reservations = relationship("TableReservation", back_populates="table")
    activity_logs = relationship(
        "TableActivityLog",
        back_populates="table",
        cascade="all, delete-orphan",
        order_by="TableActivityLog.changed_at.desc()"
    )
    maintenances = relationship("TableMaintenance", back_populates="table", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Table(id={self.id}, name='{self.name}', status='{self.status}')>"


class TableActivityLog(Base):
    """
    Table Activity Log model
    One row per status transition of a table
    """
    __tablename__ = "table_activity_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    table_id = Column(Uuid, ForeignKey("tables.id", ondelete="CASCADE"), nullable=False, index=True)
    previous_status = Column(SQLEnum(TableStatus, name="table_status_t"), nullable=False)
    new_status = Column(SQLEnum(TableStatus, name="table_status_t"), nullable=False)
    changed_by_id = Column(Uuid, ForeignKey("profiles.id"), nullable=True)
    changed_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    notes = Column(Text, nullable=True)

    # Relationships
    table = relationship("Table", back_populates="activity_logs")
    changed_by = relationship("Profile")

    def __repr__(self):
        return f"<TableActivityLog(table={self.table_id}, {self.previous_status} -> {self.new_status})>"


class TableMaintenance(Base):
    """
    Table Maintenance model
    Maintenance work done on a table, with optional cost
    """
    __tablename__ = "table_maintenances"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    table_id = Column(Uuid, ForeignKey("tables.id", ondelete="CASCADE"), nullable=False, index=True)
    description = Column(Text, nullable=True)
    maintenance_at = Column(DateTime, nullable=False, index=True)
    cost = Column(Float, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    table = relationship("Table", back_populates="maintenances")

    def __repr__(self):
        return f"<TableMaintenance(table={self.table_id}, at={self.maintenance_at}, cost={self.cost})>"
