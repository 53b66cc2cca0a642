"""
Inventory Models
Handles categories and stocked items
"""

from sqlalchemy import Column, String, Float, Integer, Boolean, DateTime, ForeignKey, Text, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from cuehall.core.database import Base


class InventoryCategory(Base):
    """
    Inventory Category model
    Groups items per company (drinks, snacks, cues, chalk...)
    """
    __tablename__ = "inventory_categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id = Column(Uuid, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    company = relationship("Company", back_populates="inventory_categories")
    items = relationship("InventoryItem", back_populates="category")

    def __repr__(self):
        return f"<InventoryCategory(id={self.id}, name='{self.name}')>"


class InventoryItem(Base):
    """
    Inventory Item model
    `quantity` is a denormalized running total of the item's stock movements
    """
    __tablename__ = "inventory_items"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id = Column(Uuid, ForeignKey("companies.id"), nullable=False, index=True)
    category_id = Column(Uuid, ForeignKey("inventory_categories.id"), nullable=True, index=True)
    name = Column(String, nullable=False)
    sku = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    quantity = Column(Integer, nullable=False, default=0)
    critical_threshold = Column(Integer, nullable=False, default=5)
    price = Column(Float, nullable=True)
    active = Column(Boolean, nullable=False, default=True)
    last_stock_update = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint('company_id', 'sku', name='uq_inventory_item_company_sku'),
    )

    # Relationships
    company = relationship("Company", back_populates="inventory_items")
    category = relationship("InventoryCategory", back_populates="items")
    movements = relationship(
        "StockMovement",
        back_populates="item",
        foreign_keys="StockMovement.item_id",
        passive_deletes=True
    )
    order_items = relationship("PosOrderItem", back_populates="item", passive_deletes=True)

    def __repr__(self):
        return f"<InventoryItem(id={self.id}, name='{self.name}', qty={self.quantity})>"

    def is_low_stock(self) -> bool:
        """Check if quantity is at or below the critical threshold"""
        return self.quantity <= self.critical_threshold
