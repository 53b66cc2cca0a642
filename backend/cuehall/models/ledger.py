"""
Stock Movement Model - APPEND-ONLY LEDGER
Every change to an item's quantity is recorded here
"""

from sqlalchemy import Column, String, Float, Integer, DateTime, ForeignKey, Enum as SQLEnum, Text, Uuid, event
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum

from cuehall.core.database import Base


class MovementType(str, enum.Enum):
    """Stock movement type enumeration"""
    PURCHASE = "PURCHASE"
    SALE = "SALE"
    ADJUSTMENT = "ADJUSTMENT"
    RETURN = "RETURN"
    TRANSFER = "TRANSFER"


# Direction applied to abs(quantity); None keeps the caller's sign
MOVEMENT_DIRECTION = {
    MovementType.PURCHASE: 1,
    MovementType.RETURN: 1,
    MovementType.SALE: -1,
    MovementType.TRANSFER: -1,
    MovementType.ADJUSTMENT: None,
}


class StockMovement(Base):
    """
    Stock Movement model - APPEND-ONLY LEDGER

    - `quantity` is the signed delta applied to InventoryItem.quantity
      in the same transaction
    - Updates and deletes are BLOCKED at the ORM level
    - Adjustments are corrected with reversal + replacement rows
    """
    __tablename__ = "stock_movements"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    item_id = Column(Uuid, ForeignKey("inventory_items.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    type = Column(SQLEnum(MovementType, name="movement_type_t"), nullable=False)
    cost_price = Column(Float, nullable=True)
    reason = Column(Text, nullable=True)
    reference = Column(String, nullable=True, index=True)
    created_by = Column(Uuid, ForeignKey("profiles.id"), nullable=True)
    reversal_of_id = Column(Uuid, ForeignKey("stock_movements.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    # Relationships
    item = relationship("InventoryItem", back_populates="movements", foreign_keys=[item_id])
    creator = relationship("Profile")

    # Self-referential relationship for corrections
    reversal_of = relationship(
        "StockMovement",
        remote_side=[id],
        foreign_keys=[reversal_of_id]
    )

    def __repr__(self):
        return f"<StockMovement(id={self.id}, type='{self.type}', item={self.item_id}, delta={self.quantity})>"

    def is_reversal(self) -> bool:
        """Check if this movement reverses another one"""
        return self.reversal_of_id is not None


@event.listens_for(StockMovement, 'before_update')
def block_stock_movement_update(mapper, connection, target):
    """Prevent updates to stock movements - they are immutable"""
    raise ValueError(
        "StockMovement records are immutable. "
        "Use correction endpoints to create reversal + replacement movements."
    )


@event.listens_for(StockMovement, 'before_delete')
def block_stock_movement_delete(mapper, connection, target):
    """Prevent deletion of stock movements - they are immutable"""
    raise ValueError(
        "StockMovement records cannot be deleted. "
        "Use correction endpoints to create reversal movements."
    )
