"""
Table Session Models
Billed play sessions and the items tracked against them
"""

from sqlalchemy import Column, Float, Integer, DateTime, ForeignKey, Enum as SQLEnum, Text, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
from typing import Optional
import uuid
import enum

from cuehall.core.database import Base


class SessionStatus(str, enum.Enum):
    """Session status enumeration"""
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class TableSession(Base):
    """
    Table Session model
    An open or closed interval during which a table is billed

    Workflow:
    1. Start session (table -> OCCUPIED)
    2. Optionally track items / move to another table
    3. End session (ended_at, total_cost set, table -> AVAILABLE)
       or cancel it (no cost)
    """
    __tablename__ = "table_sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    table_id = Column(Uuid, ForeignKey("tables.id"), nullable=False, index=True)
    staff_id = Column(Uuid, ForeignKey("profiles.id"), nullable=True)
    started_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    ended_at = Column(DateTime, nullable=True)
    status = Column(SQLEnum(SessionStatus, name="session_status_t"), nullable=False, default=SessionStatus.ACTIVE)
    total_cost = Column(Float, nullable=True)
    staff_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    table = relationship("Table", back_populates="sessions")
    staff = relationship("Profile")
    tracked_items = relationship("SessionTrackedItem", back_populates="session", cascade="all, delete-orphan")
    pos_orders = relationship("PosOrder", back_populates="table_session")

    def __repr__(self):
        return f"<TableSession(id={self.id}, table={self.table_id}, status='{self.status}')>"

    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    def duration_seconds(self, as_of: Optional[datetime] = None) -> int:
        """Elapsed seconds, up to ended_at or as_of for a running session"""
        end = self.ended_at or as_of or datetime.utcnow()
        return max(0, int((end - self.started_at).total_seconds()))


class SessionTrackedItem(Base):
    """
    Session Tracked Item model
    Running tab of inventory items consumed at a table before checkout
    """
    __tablename__ = "session_tracked_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    table_session_id = Column(Uuid, ForeignKey("table_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Uuid, ForeignKey("inventory_items.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    session = relationship("TableSession", back_populates="tracked_items")
    item = relationship("InventoryItem")

    def __repr__(self):
        return f"<SessionTrackedItem(session={self.table_session_id}, item={self.item_id}, qty={self.quantity})>"

    @property
    def subtotal(self) -> float:
        return round(self.quantity * self.unit_price, 2)
