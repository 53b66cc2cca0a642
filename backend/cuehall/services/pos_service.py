"""
POS Service
Orders and order lines; stock is drawn and returned through the ledger
"""

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
    InventoryItem,
    MovementType,
    PaymentMethod,
    PaymentStatus,
    PosOrder,
    PosOrderItem,
    Profile,
    TableSession,
)
from cuehall.services.inventory_service import InventoryService
from cuehall.services.session_service import SessionService

logger = logging.getLogger(__name__)


class PosService:
    """Point-of-sale orders"""

    def __init__(self, db: Session):
        self.db = db
        self.inventory = InventoryService(db)
        self.sessions = SessionService(db)

    def get_order(self, actor: Profile, order_id: uuid.UUID) -> PosOrder:
        order = self.db.query(PosOrder).filter(PosOrder.id == order_id).first()
        if not order:
            raise NotFoundError("Order", order_id)
        ensure_company_access(actor, order.company_id)
        return order

    def list_orders(
        self,
        actor: Profile,
        company_id: Optional[uuid.UUID] = None,
        table_session_id: Optional[uuid.UUID] = None,
        payment_status: Optional[PaymentStatus] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        page: int = 1,
        limit: int = 50
    ) -> Tuple[List[PosOrder], int]:
        """
        Paginated order listing, newest first

        Returns:
            (orders on the requested page, total matching orders)
        """
        scope = resolve_read_scope(actor, company_id)
        query = apply_company_filter(self.db.query(PosOrder), PosOrder.company_id, scope)

        if table_session_id is not None:
            query = query.filter(PosOrder.table_session_id == table_session_id)
        if payment_status is not None:
            query = query.filter(PosOrder.payment_status == payment_status)
        if start_date is not None:
            query = query.filter(PosOrder.created_at >= start_date)
        if end_date is not None:
            query = query.filter(PosOrder.created_at <= end_date)

        total = query.count()
        orders = (
            query.order_by(PosOrder.created_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        return orders, total

    def create_order(self, actor: Profile, data: Dict[str, Any]) -> PosOrder:
        """
        Ring up an order

        Workflow:
        1. Resolve company and optional table session
        2. End the session if it is still running (cost computed)
        3. Insert lines, each drawing stock with a SALE movement
        4. Consume matching tracked items from the session tab
        5. amount = lines + session cost - discount, floored at 0
        """
        lines = data.get("items") or []
        session_id = data.get("table_session_id")

        if not lines and session_id is None:
            raise BusinessRuleError("Order must contain at least one item or a table session")

        company_id = resolve_write_company(actor, data.get("company_id"))

        session = None
        if session_id is not None:
            session = self.sessions.get_session(actor, session_id)
            if session.table.company_id != company_id:
                raise BusinessRuleError("Table session belongs to another company")

        with transaction(self.db):
            if session is not None and session.is_active():
                self.sessions.close_active_session(session, actor.id)

            order = PosOrder(
                company_id=company_id,
                staff_id=actor.id,
                table_session_id=session.id if session else None,
                discount=data.get("discount") or 0.0,
                payment_method=data.get("payment_method") or PaymentMethod.CASH,
                payment_status=data.get("payment_status") or PaymentStatus.UNPAID,
            )
            self.db.add(order)
            self.db.flush()

            for line in lines:
                self._add_line(actor, order, line["item_id"], line["quantity"], line.get("unit_price"))
                if session is not None:
                    self._consume_tracked(session, line["item_id"], line["quantity"])

            self._recompute_amount(order)

        self.db.refresh(order)
        logger.info(
            "Order %s created for company %s: amount %.2f (%s)",
            order.id, company_id, order.amount, order.payment_status.value
        )
        return order

    def update_order(self, actor: Profile, order_id: uuid.UUID, changes: Dict[str, Any]) -> PosOrder:
        """Change payment status and/or method"""
        order = self.get_order(actor, order_id)

        updates = {
            field: changes[field]
            for field in ("payment_status", "payment_method")
            if changes.get(field) is not None
        }
        if not updates:
            raise BusinessRuleError("No valid fields to update")

        with transaction(self.db):
            for field, value in updates.items():
                setattr(order, field, value)

        self.db.refresh(order)
        return order

    def delete_order(self, actor: Profile, order_id: uuid.UUID) -> None:
        """Cancel an unpaid order, returning every line to stock"""
        order = self.get_order(actor, order_id)

        if order.is_paid():
            raise BusinessRuleError("Cannot delete a paid order")

        with transaction(self.db):
            for line in order.order_items:
                self.inventory.apply_movement(
                    line.item,
                    MovementType.RETURN,
                    line.quantity,
                    reason="Order cancelled",
                    reference=str(order.id),
                    created_by=actor.id,
                )
            self.db.delete(order)

        logger.info("Order %s cancelled, stock returned", order_id)

    def add_order_item(
        self,
        actor: Profile,
        order_id: uuid.UUID,
        item_id: uuid.UUID,
        quantity: int,
        unit_price: Optional[float] = None
    ) -> PosOrder:
        order = self._unpaid_order(actor, order_id)

        with transaction(self.db):
            self._add_line(actor, order, item_id, quantity, unit_price)
            self._recompute_amount(order)

        self.db.refresh(order)
        return order

    def update_order_item(
        self,
        actor: Profile,
        order_id: uuid.UUID,
        order_item_id: uuid.UUID,
        quantity: Optional[int] = None,
        unit_price: Optional[float] = None
    ) -> PosOrder:
        """Change a line's quantity or price; the quantity difference moves stock"""
        order = self._unpaid_order(actor, order_id)
        line = self._get_line(order, order_item_id)

        if quantity is not None and quantity <= 0:
            raise BusinessRuleError("Quantity must be greater than zero")
        if unit_price is not None and unit_price <= 0:
            raise BusinessRuleError("Unit price must be greater than zero")

        with transaction(self.db):
            if quantity is not None and quantity != line.quantity:
                difference = quantity - line.quantity
                movement_type = MovementType.SALE if difference > 0 else MovementType.RETURN
                self.inventory.apply_movement(
                    line.item,
                    movement_type,
                    abs(difference),
                    reason="Order line updated",
                    reference=str(order.id),
                    created_by=actor.id,
                )
                line.quantity = quantity
            if unit_price is not None:
                line.unit_price = unit_price
            self._recompute_amount(order)

        self.db.refresh(order)
        return order

    def remove_order_item(self, actor: Profile, order_id: uuid.UUID, order_item_id: uuid.UUID) -> PosOrder:
        order = self._unpaid_order(actor, order_id)
        line = self._get_line(order, order_item_id)

        with transaction(self.db):
            self.inventory.apply_movement(
                line.item,
                MovementType.RETURN,
                line.quantity,
                reason="Order line removed",
                reference=str(order.id),
                created_by=actor.id,
            )
            order.order_items.remove(line)
            self._recompute_amount(order)

        self.db.refresh(order)
        return order

    def _add_line(
        self,
        actor: Profile,
        order: PosOrder,
        item_id: uuid.UUID,
        quantity: int,
        unit_price: Optional[float]
    ) -> PosOrderItem:
        item = self.db.query(InventoryItem).filter(InventoryItem.id == item_id).first()
        if not item or item.company_id != order.company_id:
            raise NotFoundError("Item", item_id)

        if quantity <= 0:
            raise BusinessRuleError("Quantity must be greater than zero")

        if unit_price is None:
            unit_price = item.price
        if unit_price is None or unit_price <= 0:
            raise BusinessRuleError(f"Unit price for {item.name} must be greater than zero")

        self.inventory.apply_movement(
            item,
            MovementType.SALE,
            quantity,
            reason="POS sale",
            reference=str(order.id),
            created_by=actor.id,
        )

        line = PosOrderItem(item_id=item.id, quantity=quantity, unit_price=unit_price)
        order.order_items.append(line)
        return line

    def _consume_tracked(self, session: TableSession, item_id: uuid.UUID, quantity: int) -> None:
        """Take sold quantity off the session tab"""
        for tracked in list(session.tracked_items):
            if tracked.item_id != item_id:
                continue
            consumed = min(quantity, tracked.quantity)
            tracked.quantity -= consumed
            if tracked.quantity <= 0:
                session.tracked_items.remove(tracked)
            return

    def _recompute_amount(self, order: PosOrder) -> None:
        session_cost = 0.0
        if order.table_session_id is not None:
            session = self.db.query(TableSession).filter(TableSession.id == order.table_session_id).first()
            session_cost = (session.total_cost or 0.0) if session else 0.0

        gross = order.items_subtotal() + session_cost
        order.amount = round(max(0.0, gross - (order.discount or 0.0)), 2)

    def _unpaid_order(self, actor: Profile, order_id: uuid.UUID) -> PosOrder:
        order = self.get_order(actor, order_id)
        if order.is_paid():
            raise BusinessRuleError("Paid orders cannot be modified")
        return order

    def _get_line(self, order: PosOrder, order_item_id: uuid.UUID) -> PosOrderItem:
        line = next((line for line in order.order_items if line.id == order_item_id), None)
        if not line:
            raise NotFoundError("Order item", order_item_id)
        return line
