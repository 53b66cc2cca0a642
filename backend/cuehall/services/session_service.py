"""
Session Service
Table session lifecycle: start, end, cancel, move, delete

Every operation commits once. Table status and the activity log move
together with the session inside that transaction.
"""

from sqlalchemy.orm import Session
from datetime import datetime
from typing import Any, Dict, List, Optional
import uuid
import logging

from cuehall.core.database import transaction
from cuehall.core.exceptions import BusinessRuleError, NotFoundError
from cuehall.core.tenancy import apply_company_filter, ensure_company_access, resolve_read_scope
from cuehall.models import (
    InventoryItem,
    Profile,
    SessionStatus,
    SessionTrackedItem,
    Table,
    TableSession,
    TableStatus,
)
from cuehall.services.table_service import set_table_status

logger = logging.getLogger(__name__)


def calculate_session_cost(
    started_at: datetime,
    ended_at: datetime,
    hourly_rate: Optional[float]
) -> Optional[float]:
    """
    Cost of a session: hours played * hourly rate, rounded to cents

    Returns None when the table has no hourly rate.
    """
    if not hourly_rate:
        return None

    duration_hours = (ended_at - started_at).total_seconds() / 3600
    return round(duration_hours * hourly_rate, 2)


class SessionService:
    """Table Session Management"""

    def __init__(self, db: Session):
        self.db = db

    def get_session(self, actor: Profile, session_id: uuid.UUID) -> TableSession:
        session = self.db.query(TableSession).filter(TableSession.id == session_id).first()
        if not session:
            raise NotFoundError("Session", session_id)
        ensure_company_access(actor, session.table.company_id)
        return session

    def list_sessions(
        self,
        actor: Profile,
        company_id: Optional[uuid.UUID] = None,
        table_id: Optional[uuid.UUID] = None,
        status: Optional[SessionStatus] = None
    ) -> List[TableSession]:
        scope = resolve_read_scope(actor, company_id)
        query = self.db.query(TableSession).join(Table, TableSession.table_id == Table.id)
        query = apply_company_filter(query, Table.company_id, scope)

        if table_id is not None:
            query = query.filter(TableSession.table_id == table_id)
        if status is not None:
            query = query.filter(TableSession.status == status)

        return query.order_by(TableSession.started_at.desc()).all()

    def start_session(
        self,
        actor: Profile,
        table_id: uuid.UUID,
        staff_id: Optional[uuid.UUID] = None,
        notes: Optional[str] = None
    ) -> TableSession:
        """
        Open a session on an AVAILABLE table and mark it OCCUPIED

        Raises:
            NotFoundError: table does not exist
            BusinessRuleError: table not available or already in use
        """
        table = self._get_table(actor, table_id)

        if table.status != TableStatus.AVAILABLE:
            raise BusinessRuleError(f"Table is not available (current status: {table.status.value})")
        if self._active_session_for(table.id):
            raise BusinessRuleError("Table already has an active session")

        with transaction(self.db):
            session = TableSession(
                table_id=table.id,
                staff_id=staff_id or actor.id,
                started_at=datetime.utcnow(),
                status=SessionStatus.ACTIVE,
                staff_notes=notes,
            )
            self.db.add(session)
            set_table_status(self.db, table, TableStatus.OCCUPIED, actor.id, "Table session started")

        self.db.refresh(session)
        logger.info("Session %s started on table %s", session.id, table.id)
        return session

    def end_session(self, actor: Profile, session_id: uuid.UUID) -> TableSession:
        """Close an ACTIVE session, bill it and free the table"""
        session = self.get_session(actor, session_id)

        if not session.is_active():
            raise BusinessRuleError("Session is not active")

        with transaction(self.db):
            self.close_active_session(session, actor.id)

        self.db.refresh(session)
        logger.info("Session %s ended, total cost %s", session.id, session.total_cost)
        return session

    def close_active_session(self, session: TableSession, changed_by_id: Optional[uuid.UUID] = None) -> None:
        """
        Set ended_at, total cost and COMPLETED; table back to AVAILABLE.
        Caller owns the transaction.
        """
        ended_at = datetime.utcnow()
        session.ended_at = ended_at
        session.total_cost = calculate_session_cost(session.started_at, ended_at, session.table.hourly_rate)
        session.status = SessionStatus.COMPLETED
        set_table_status(self.db, session.table, TableStatus.AVAILABLE, changed_by_id, "Table session ended")

    def cancel_session(self, actor: Profile, session_id: uuid.UUID) -> TableSession:
        """Cancel without billing"""
        session = self.get_session(actor, session_id)

        if session.status in (SessionStatus.COMPLETED, SessionStatus.CANCELLED):
            raise BusinessRuleError(f"Session is already {session.status.value.lower()}")

        was_active = session.is_active()

        with transaction(self.db):
            session.status = SessionStatus.CANCELLED
            session.ended_at = datetime.utcnow()
            if was_active:
                set_table_status(
                    self.db, session.table, TableStatus.AVAILABLE, actor.id, "Table session cancelled"
                )

        self.db.refresh(session)
        logger.info("Session %s cancelled", session.id)
        return session

    def move_session(self, actor: Profile, session_id: uuid.UUID, target_table_id: uuid.UUID) -> TableSession:
        """Move a running session to another available table of the same company"""
        session = self.get_session(actor, session_id)

        if not session.is_active():
            raise BusinessRuleError("Only active sessions can be moved")

        source = session.table
        target = self._get_table(actor, target_table_id)

        if target.id == source.id:
            raise BusinessRuleError("Session is already on this table")
        if target.company_id != source.company_id:
            raise BusinessRuleError("Target table belongs to another company")
        if target.status != TableStatus.AVAILABLE:
            raise BusinessRuleError(f"Target table is not available (current status: {target.status.value})")
        if self._active_session_for(target.id):
            raise BusinessRuleError("Target table already has an active session")

        with transaction(self.db):
            session.table = target
            set_table_status(
                self.db, source, TableStatus.AVAILABLE, actor.id, f"Session moved to table {target.name}"
            )
            set_table_status(
                self.db, target, TableStatus.OCCUPIED, actor.id, f"Session moved from table {source.name}"
            )

        self.db.refresh(session)
        logger.info("Session %s moved from table %s to %s", session.id, source.id, target.id)
        return session

    def delete_session(self, actor: Profile, session_id: uuid.UUID) -> None:
        session = self.get_session(actor, session_id)

        if session.pos_orders:
            raise BusinessRuleError("Cannot delete session with associated orders")

        with transaction(self.db):
            if session.is_active():
                set_table_status(
                    self.db, session.table, TableStatus.AVAILABLE, actor.id,
                    "Table session cancelled and deleted"
                )
            self.db.delete(session)

        logger.info("Session %s deleted", session_id)

    def current_cost(self, actor: Profile, session_id: uuid.UUID) -> Dict[str, Any]:
        """Running cost of a session; stored values once it has ended"""
        session = self.get_session(actor, session_id)
        hourly_rate = session.table.hourly_rate

        if session.is_active():
            now = datetime.utcnow()
            duration = session.duration_seconds(now)
            cost = calculate_session_cost(session.started_at, now, hourly_rate)
        else:
            duration = session.duration_seconds()
            cost = session.total_cost

        return {
            "session_id": session.id,
            "status": session.status,
            "duration_seconds": duration,
            "hourly_rate": hourly_rate,
            "cost": cost,
        }

    # ------------------------------------------------------------------
    # Tracked items
    # ------------------------------------------------------------------

    def list_tracked_items(self, actor: Profile, session_id: uuid.UUID) -> List[SessionTrackedItem]:
        session = self.get_session(actor, session_id)
        return list(session.tracked_items)

    def add_tracked_items(
        self,
        actor: Profile,
        session_id: uuid.UUID,
        entries: List[Dict[str, Any]]
    ) -> List[SessionTrackedItem]:
        """
        Add items to a session's tab; an item already on the tab
        has its quantity increased. Stock is untouched until checkout.
        """
        session = self.get_session(actor, session_id)
        company_id = session.table.company_id

        if not entries:
            raise BusinessRuleError("No items to track")

        with transaction(self.db):
            for entry in entries:
                quantity = entry["quantity"]
                if quantity <= 0:
                    raise BusinessRuleError("Quantity must be greater than zero")

                item = self.db.query(InventoryItem).filter(InventoryItem.id == entry["item_id"]).first()
                if not item or item.company_id != company_id:
                    raise NotFoundError("Item", entry["item_id"])

                existing = next(
                    (tracked for tracked in session.tracked_items if tracked.item_id == item.id),
                    None
                )
                if existing:
                    existing.quantity += quantity
                    if entry.get("unit_price") is not None:
                        existing.unit_price = entry["unit_price"]
                else:
                    unit_price = entry.get("unit_price")
                    if unit_price is None:
                        unit_price = item.price or 0.0
                    session.tracked_items.append(
                        SessionTrackedItem(item_id=item.id, quantity=quantity, unit_price=unit_price)
                    )

        self.db.refresh(session)
        return list(session.tracked_items)

    def clear_tracked_items(self, actor: Profile, session_id: uuid.UUID) -> None:
        session = self.get_session(actor, session_id)

        with transaction(self.db):
            session.tracked_items.clear()

    def _get_table(self, actor: Profile, table_id: uuid.UUID) -> Table:
        table = self.db.query(Table).filter(Table.id == table_id).first()
        if not table:
            raise NotFoundError("Table", table_id)
        ensure_company_access(actor, table.company_id)
        return table

    def _active_session_for(self, table_id: uuid.UUID) -> Optional[TableSession]:
        return self.db.query(TableSession).filter(
            TableSession.table_id == table_id,
            TableSession.status == SessionStatus.ACTIVE
        ).first()
