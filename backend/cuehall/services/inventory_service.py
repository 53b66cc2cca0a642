"""
Inventory Service
Categories, items and the stock movement ledger

Every change to InventoryItem.quantity goes through apply_movement(),
which inserts the StockMovement row carrying the same signed delta.
"""

from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional
import uuid
import logging

from cuehall.core.config import settings
from cuehall.core.database import transaction
from cuehall.core.exceptions import BusinessRuleError, NotFoundError
from cuehall.core.tenancy import (
    apply_company_filter,
    ensure_company_access,
    resolve_read_scope,
    resolve_write_company,
)
from cuehall.models import (
    InventoryCategory,
    InventoryItem,
    MOVEMENT_DIRECTION,
    MovementType,
    PosOrderItem,
    Profile,
    StockMovement,
)

logger = logging.getLogger(__name__)


def signed_delta(movement_type: MovementType, quantity: int) -> int:
    """
    Signed change a movement applies to an item's quantity

    PURCHASE/RETURN add, SALE/TRANSFER subtract, ADJUSTMENT keeps its sign.
    """
    direction = MOVEMENT_DIRECTION[movement_type]
    if direction is None:
        return quantity
    return direction * abs(quantity)


class InventoryService:
    """Inventory categories, items and stock ledger"""

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    def apply_movement(
        self,
        item: InventoryItem,
        movement_type: MovementType,
        quantity: int,
        reason: Optional[str] = None,
        reference: Optional[str] = None,
        created_by: Optional[uuid.UUID] = None,
        cost_price: Optional[float] = None,
        reversal_of_id: Optional[uuid.UUID] = None
    ) -> StockMovement:
        """
        Insert a ledger row and apply its delta to the item.
        Caller owns the transaction.

        Raises:
            BusinessRuleError: zero quantity, or stock would go negative
        """
        delta = signed_delta(movement_type, quantity)
        if delta == 0:
            raise BusinessRuleError("Quantity must not be zero")

        new_quantity = item.quantity + delta
        if new_quantity < 0:
            raise BusinessRuleError(
                f"Cannot remove {abs(delta)} units. Only {item.quantity} units available in stock."
            )

        movement = StockMovement(
            item_id=item.id,
            quantity=delta,
            type=movement_type,
            cost_price=cost_price,
            reason=reason,
            reference=reference,
            created_by=created_by,
            reversal_of_id=reversal_of_id,
        )
        self.db.add(movement)

        item.quantity = new_quantity
        item.last_stock_update = datetime.utcnow()

        logger.info(
            "Stock movement %s on item %s: %+d -> %d",
            movement_type.value, item.id, delta, new_quantity
        )
        return movement

    def record_movement(
        self,
        actor: Profile,
        item_id: uuid.UUID,
        movement_type: MovementType,
        quantity: int,
        cost_price: Optional[float] = None,
        reason: Optional[str] = None,
        reference: Optional[str] = None
    ) -> StockMovement:
        """Record a manual stock movement"""
        item = self.get_item(actor, item_id)

        with transaction(self.db):
            movement = self.apply_movement(
                item,
                movement_type,
                quantity,
                reason=reason,
                reference=reference,
                created_by=actor.id,
                cost_price=cost_price,
            )

        self.db.refresh(movement)
        return movement

    def get_movement(self, actor: Profile, movement_id: uuid.UUID) -> StockMovement:
        movement = self.db.query(StockMovement).filter(StockMovement.id == movement_id).first()
        if not movement:
            raise NotFoundError("Movement", movement_id)
        ensure_company_access(actor, movement.item.company_id)
        return movement

    def list_movements(
        self,
        actor: Profile,
        item_id: Optional[uuid.UUID] = None,
        company_id: Optional[uuid.UUID] = None,
        movement_type: Optional[MovementType] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> List[StockMovement]:
        query = self.db.query(StockMovement).join(InventoryItem, StockMovement.item_id == InventoryItem.id)

        if item_id is not None:
            item = self.get_item(actor, item_id)
            query = query.filter(StockMovement.item_id == item.id)
        else:
            scope = resolve_read_scope(actor, company_id)
            query = apply_company_filter(query, InventoryItem.company_id, scope)

        if movement_type is not None:
            query = query.filter(StockMovement.type == movement_type)
        if start_date is not None:
            query = query.filter(StockMovement.created_at >= start_date)
        if end_date is not None:
            query = query.filter(StockMovement.created_at <= end_date)

        return query.order_by(StockMovement.created_at.desc()).all()

    def correct_adjustment(
        self,
        actor: Profile,
        movement_id: uuid.UUID,
        quantity: int,
        reason: Optional[str] = None
    ) -> StockMovement:
        """
        Correct an ADJUSTMENT: append a reversal of the original plus a
        replacement row. Returns the replacement, or the reversal alone
        when correcting to zero.

        Only the net change (quantity - original) has to fit in stock;
        the row that adds stock is written first so neither step dips
        below zero on the way.
        """
        original = self._reversible_adjustment(actor, movement_id)
        item = original.item

        net_change = quantity - original.quantity
        if item.quantity + net_change < 0:
            raise BusinessRuleError(
                f"Cannot remove {abs(net_change)} units. Only {item.quantity} units available in stock."
            )

        steps = [(-original.quantity, "reversal")]
        if quantity != 0:
            steps.append((quantity, "replacement"))
        steps.sort(key=lambda step: step[0], reverse=True)

        written = {}
        with transaction(self.db):
            for delta, kind in steps:
                if kind == "reversal":
                    written[kind] = self.apply_movement(
                        item,
                        MovementType.ADJUSTMENT,
                        delta,
                        reason=f"Reversal of {original.id}",
                        reference=str(original.id),
                        created_by=actor.id,
                        reversal_of_id=original.id,
                    )
                else:
                    written[kind] = self.apply_movement(
                        item,
                        MovementType.ADJUSTMENT,
                        delta,
                        reason=reason or original.reason,
                        reference=str(original.id),
                        created_by=actor.id,
                        cost_price=original.cost_price,
                    )

        result = written.get("replacement", written["reversal"])
        self.db.refresh(result)
        logger.info("Adjustment %s corrected to %+d on item %s", original.id, quantity, item.id)
        return result

    def reverse_adjustment(self, actor: Profile, movement_id: uuid.UUID) -> StockMovement:
        """Cancel an ADJUSTMENT by appending its reversal"""
        original = self._reversible_adjustment(actor, movement_id)

        with transaction(self.db):
            reversal = self.apply_movement(
                original.item,
                MovementType.ADJUSTMENT,
                -original.quantity,
                reason=f"Reversal of {original.id}",
                reference=str(original.id),
                created_by=actor.id,
                reversal_of_id=original.id,
            )

        self.db.refresh(reversal)
        return reversal

    def _reversible_adjustment(self, actor: Profile, movement_id: uuid.UUID) -> StockMovement:
        movement = self.get_movement(actor, movement_id)

        if movement.type != MovementType.ADJUSTMENT:
            raise BusinessRuleError("Only ADJUSTMENT type movements can be corrected")
        if movement.is_reversal():
            raise BusinessRuleError("Reversal movements cannot be corrected")

        already_reversed = self.db.query(StockMovement).filter(
            StockMovement.reversal_of_id == movement.id
        ).first()
        if already_reversed:
            raise BusinessRuleError("Movement has already been reversed")

        return movement

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def list_categories(self, actor: Profile, company_id: Optional[uuid.UUID] = None) -> List[InventoryCategory]:
        scope = resolve_read_scope(actor, company_id)
        query = apply_company_filter(self.db.query(InventoryCategory), InventoryCategory.company_id, scope)
        return query.order_by(InventoryCategory.name.asc()).all()

    def get_category(self, actor: Profile, category_id: uuid.UUID) -> InventoryCategory:
        category = self.db.query(InventoryCategory).filter(InventoryCategory.id == category_id).first()
        if not category:
            raise NotFoundError("Category", category_id)
        ensure_company_access(actor, category.company_id)
        return category

    def create_category(
        self,
        actor: Profile,
        name: str,
        description: Optional[str] = None,
        company_id: Optional[uuid.UUID] = None
    ) -> InventoryCategory:
        target_company = resolve_write_company(actor, company_id)

        with transaction(self.db):
            category = InventoryCategory(company_id=target_company, name=name, description=description)
            self.db.add(category)

        self.db.refresh(category)
        return category

    def update_category(self, actor: Profile, category_id: uuid.UUID, changes: Dict[str, Any]) -> InventoryCategory:
        category = self.get_category(actor, category_id)

        with transaction(self.db):
            for field in ("name", "description"):
                if field in changes:
                    setattr(category, field, changes[field])

        self.db.refresh(category)
        return category

    def delete_category(self, actor: Profile, category_id: uuid.UUID) -> None:
        category = self.get_category(actor, category_id)

        if category.items:
            raise BusinessRuleError("Cannot delete category with associated items")

        with transaction(self.db):
            self.db.delete(category)

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def get_item(self, actor: Profile, item_id: uuid.UUID) -> InventoryItem:
        item = self.db.query(InventoryItem).filter(InventoryItem.id == item_id).first()
        if not item:
            raise NotFoundError("Item", item_id)
        ensure_company_access(actor, item.company_id)
        return item

    def list_items(
        self,
        actor: Profile,
        company_id: Optional[uuid.UUID] = None,
        category_id: Optional[uuid.UUID] = None,
        active: Optional[bool] = None,
        search: Optional[str] = None,
        low_stock: bool = False
    ) -> List[InventoryItem]:
        scope = resolve_read_scope(actor, company_id)
        query = apply_company_filter(self.db.query(InventoryItem), InventoryItem.company_id, scope)

        if category_id is not None:
            query = query.filter(InventoryItem.category_id == category_id)
        if active is not None:
            query = query.filter(InventoryItem.active == active)
        if search:
            pattern = f"%{search}%"
            query = query.filter(InventoryItem.name.ilike(pattern) | InventoryItem.sku.ilike(pattern))
        if low_stock:
            query = query.filter(InventoryItem.quantity <= InventoryItem.critical_threshold)

        return query.order_by(InventoryItem.name.asc()).all()

    def create_item(self, actor: Profile, data: Dict[str, Any]) -> InventoryItem:
        """
        Create an item; an initial quantity is booked as a PURCHASE movement
        so the ledger sums to the item's quantity from day one
        """
        target_company = resolve_write_company(actor, data.get("company_id"))

        if data.get("category_id") is not None:
            category = self.get_category(actor, data["category_id"])
            if category.company_id != target_company:
                raise BusinessRuleError("Category belongs to another company")

        self._check_unique_sku(target_company, data.get("sku"))

        initial_quantity = data.get("quantity") or 0
        if initial_quantity < 0:
            raise BusinessRuleError("Initial quantity cannot be negative")

        with transaction(self.db):
            item = InventoryItem(
                company_id=target_company,
                category_id=data.get("category_id"),
                name=data["name"],
                sku=data.get("sku"),
                description=data.get("description"),
                quantity=0,
                critical_threshold=data.get("critical_threshold", 5),
                price=data.get("price"),
                active=data.get("active", True),
            )
            self.db.add(item)
            self.db.flush()

            if initial_quantity > 0:
                self.apply_movement(
                    item,
                    MovementType.PURCHASE,
                    initial_quantity,
                    reason="Initial stock",
                    created_by=actor.id,
                    cost_price=data.get("cost_price"),
                )

        self.db.refresh(item)
        logger.info("Inventory item %s (%s) created with %d units", item.name, item.id, item.quantity)
        return item

    def update_item(self, actor: Profile, item_id: uuid.UUID, changes: Dict[str, Any]) -> InventoryItem:
        """Update descriptive fields; quantity only moves through the ledger"""
        item = self.get_item(actor, item_id)

        if "quantity" in changes and changes["quantity"] != item.quantity:
            raise BusinessRuleError("Quantity can only be changed through stock movements")

        if changes.get("category_id") is not None:
            category = self.get_category(actor, changes["category_id"])
            if category.company_id != item.company_id:
                raise BusinessRuleError("Category belongs to another company")

        if "sku" in changes and changes["sku"] != item.sku:
            self._check_unique_sku(item.company_id, changes["sku"], exclude_id=item.id)

        with transaction(self.db):
            for field in ("name", "sku", "description", "critical_threshold", "price", "category_id", "active"):
                if field in changes:
                    setattr(item, field, changes[field])

        self.db.refresh(item)
        return item

    def toggle_active(self, actor: Profile, item_id: uuid.UUID) -> InventoryItem:
        item = self.get_item(actor, item_id)

        with transaction(self.db):
            item.active = not item.active

        self.db.refresh(item)
        return item

    def delete_item(self, actor: Profile, item_id: uuid.UUID) -> None:
        """Items with ledger history or order lines are kept; deactivate them instead"""
        item = self.get_item(actor, item_id)

        has_orders = self.db.query(PosOrderItem).filter(PosOrderItem.item_id == item.id).first()
        has_movements = self.db.query(StockMovement).filter(StockMovement.item_id == item.id).first()
        if has_orders or has_movements:
            raise BusinessRuleError("Cannot delete item with associated movements or orders")

        with transaction(self.db):
            self.db.delete(item)

    def low_stock(
        self,
        actor: Profile,
        company_id: Optional[uuid.UUID] = None,
        limit: Optional[int] = None
    ) -> List[InventoryItem]:
        """Items at or below their critical threshold, emptiest first"""
        scope = resolve_read_scope(actor, company_id)
        query = apply_company_filter(self.db.query(InventoryItem), InventoryItem.company_id, scope)
        query = query.filter(
            InventoryItem.quantity <= InventoryItem.critical_threshold
        ).order_by(InventoryItem.quantity.asc(), InventoryItem.name.asc())

        return query.limit(limit or settings.LOW_STOCK_DEFAULT_LIMIT).all()

    def report(
        self,
        actor: Profile,
        report_type: str,
        company_id: Optional[uuid.UUID] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None
    ) -> List[Dict[str, Any]]:
        """Inventory report: stock, movements or categories"""
        scope = resolve_read_scope(actor, company_id)

        if report_type == "stock":
            query = apply_company_filter(self.db.query(InventoryItem), InventoryItem.company_id, scope)
            items = query.order_by(InventoryItem.quantity.asc(), InventoryItem.name.asc()).all()
            return [
                {
                    "id": item.id,
                    "name": item.name,
                    "sku": item.sku,
                    "category": item.category.name if item.category else None,
                    "quantity": item.quantity,
                    "critical_threshold": item.critical_threshold,
                    "price": item.price,
                    "stock_value": round(item.quantity * (item.price or 0.0), 2),
                    "low_stock": item.is_low_stock(),
                }
                for item in items
            ]

        if report_type == "movements":
            end = end_date or datetime.utcnow()
            start = start_date or end - timedelta(days=settings.MOVEMENTS_REPORT_DEFAULT_DAYS)
            movements = self.list_movements(actor, company_id=scope, start_date=start, end_date=end)
            return [
                {
                    "id": movement.id,
                    "item_id": movement.item_id,
                    "item_name": movement.item.name,
                    "type": movement.type.value,
                    "quantity": movement.quantity,
                    "reason": movement.reason,
                    "created_at": movement.created_at,
                }
                for movement in movements
            ]

        if report_type == "categories":
            categories = self.list_categories(actor, scope)
            return [
                {
                    "id": category.id,
                    "name": category.name,
                    "company_id": category.company_id,
                    "item_count": len(category.items),
                }
                for category in categories
            ]

        raise BusinessRuleError("Invalid report type")

    def _check_unique_sku(
        self,
        company_id: uuid.UUID,
        sku: Optional[str],
        exclude_id: Optional[uuid.UUID] = None
    ) -> None:
        if not sku:
            return
        query = self.db.query(InventoryItem).filter(
            InventoryItem.company_id == company_id,
            InventoryItem.sku == sku
        )
        if exclude_id is not None:
            query = query.filter(InventoryItem.id != exclude_id)
        if query.first():
            raise BusinessRuleError("An item with this SKU already exists")
