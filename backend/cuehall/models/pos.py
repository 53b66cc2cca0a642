"""
POS Models
Point-of-sale orders and their lines
"""

from sqlalchemy import Column, Float, Integer, DateTime, ForeignKey, Enum as SQLEnum, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum

from cuehall.core.database import Base


class PaymentMethod(str, enum.Enum):
    """Payment method enumeration"""
    CASH = "CASH"
    QR = "QR"
    CREDIT_CARD = "CREDIT_CARD"


class PaymentStatus(str, enum.Enum):
    """Payment status enumeration"""
    UNPAID = "UNPAID"
    PAID = "PAID"


class PosOrder(Base):
    """
    POS Order model
    A sale rung up at the counter, optionally settling a table session

    amount = sum(lines) + session cost - discount, floored at 0
    """
    __tablename__ = "pos_orders"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id = Column(Uuid, ForeignKey("companies.id"), nullable=False, index=True)
    staff_id = Column(Uuid, ForeignKey("profiles.id"), nullable=True)
    table_session_id = Column(Uuid, ForeignKey("table_sessions.id"), nullable=True, index=True)
    amount = Column(Float, nullable=False, default=0.0)
    discount = Column(Float, nullable=False, default=0.0)
    payment_method = Column(SQLEnum(PaymentMethod, name="payment_method_t"), nullable=False, default=PaymentMethod.CASH)
    payment_status = Column(SQLEnum(PaymentStatus, name="payment_status_t"), nullable=False, default=PaymentStatus.UNPAID)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    company = relationship("Company")
    staff = relationship("Profile")
    table_session = relationship("TableSession", back_populates="pos_orders")
    order_items = relationship("PosOrderItem", back_populates="order", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<PosOrder(id={self.id}, amount={self.amount}, status='{self.payment_status}')>"

    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID

    def items_subtotal(self) -> float:
        return sum(line.quantity * line.unit_price for line in self.order_items)


class PosOrderItem(Base):
    """
    POS Order Item model
    One inventory item line on an order
    """
    __tablename__ = "pos_order_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    order_id = Column(Uuid, ForeignKey("pos_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Uuid, ForeignKey("inventory_items.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    order = relationship("PosOrder", back_populates="order_items")
    item = relationship("InventoryItem", back_populates="order_items")

    def __repr__(self):
        return f"<PosOrderItem(order={self.order_id}, item={self.item_id}, qty={self.quantity})>"
