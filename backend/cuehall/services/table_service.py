"""
Table Service
Table CRUD and status transitions with activity logging
"""

from sqlalchemy.orm import Session
from typing import Dict, List, Optional, Tuple, Any
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
    Profile,
    SessionStatus,
    Table,
    TableActivityLog,
    TableSession,
    TableStatus,
)

logger = logging.getLogger(__name__)


def set_table_status(
    db: Session,
    table: Table,
    new_status: TableStatus,
    changed_by_id: Optional[uuid.UUID] = None,
    notes: Optional[str] = None
) -> TableActivityLog:
    """
    Change a table's status and append the matching activity log row.
    Caller owns the transaction.
    """
    log = TableActivityLog(
        table_id=table.id,
        previous_status=table.status,
        new_status=new_status,
        changed_by_id=changed_by_id,
        notes=notes,
    )
    table.status = new_status
    db.add(log)
    return log


class TableService:
    """Table management"""

    def __init__(self, db: Session):
        self.db = db

    def get_table(self, actor: Profile, table_id: uuid.UUID) -> Table:
        table = self.db.query(Table).filter(Table.id == table_id).first()
        if not table:
            raise NotFoundError("Table", table_id)
        ensure_company_access(actor, table.company_id)
        return table

    def list_tables(
        self,
        actor: Profile,
        company_id: Optional[uuid.UUID] = None,
        status: Optional[TableStatus] = None
    ) -> List[Table]:
        scope = resolve_read_scope(actor, company_id)
        query = apply_company_filter(self.db.query(Table), Table.company_id, scope)
        if status is not None:
            query = query.filter(Table.status == status)
        return query.order_by(Table.name.asc()).all()

    def create_table(
        self,
        actor: Profile,
        name: str,
        hourly_rate: Optional[float] = None,
        status: TableStatus = TableStatus.AVAILABLE,
        company_id: Optional[uuid.UUID] = None
    ) -> Table:
        target_company = resolve_write_company(actor, company_id)

        with transaction(self.db):
            table = Table(
                company_id=target_company,
                name=name,
                hourly_rate=hourly_rate,
                status=status,
            )
            self.db.add(table)

        self.db.refresh(table)
        logger.info("Table %s (%s) created for company %s", table.name, table.id, target_company)
        return table

    def update_table(self, actor: Profile, table_id: uuid.UUID, changes: Dict[str, Any]) -> Table:
        """Update name / hourly rate; status goes through change_status"""
        table = self.get_table(actor, table_id)

        with transaction(self.db):
            for field in ("name", "hourly_rate"):
                if field in changes:
                    setattr(table, field, changes[field])

            if changes.get("status") is not None and changes["status"] != table.status:
                self._check_status_change(table, changes["status"])
                set_table_status(self.db, table, changes["status"], actor.id, "Status changed from table edit")

        self.db.refresh(table)
        return table

    def delete_table(self, actor: Profile, table_id: uuid.UUID) -> None:
        table = self.get_table(actor, table_id)

        if table.sessions:
            raise BusinessRuleError(
                "Cannot delete table with existing sessions. Please delete all sessions first."
            )
        if table.reservations:
            raise BusinessRuleError(
                "Cannot delete table with existing reservations. Please delete all reservations first."
            )

        with transaction(self.db):
            self.db.delete(table)

        logger.info("Table %s deleted", table_id)

    def change_status(
        self,
        actor: Profile,
        table_id: uuid.UUID,
        new_status: TableStatus,
        notes: Optional[str] = None
    ) -> Tuple[Table, Optional[TableActivityLog]]:
        """
        Manually change a table's status

        Returns:
            (table, activity_log) - activity_log is None when status is unchanged
        """
        table = self.get_table(actor, table_id)

        if new_status == table.status:
            return table, None

        self._check_status_change(table, new_status)

        with transaction(self.db):
            log = set_table_status(self.db, table, new_status, actor.id, notes)

        self.db.refresh(table)
        self.db.refresh(log)
        logger.info("Table %s status %s -> %s", table.id, log.previous_status.value, new_status.value)
        return table, log

    def list_activity(self, actor: Profile, table_id: uuid.UUID, limit: int = 100) -> List[TableActivityLog]:
        table = self.get_table(actor, table_id)
        return (
            self.db.query(TableActivityLog)
            .filter(TableActivityLog.table_id == table.id)
            .order_by(TableActivityLog.changed_at.desc())
            .limit(limit)
            .all()
        )

    def _check_status_change(self, table: Table, new_status: TableStatus) -> None:
        """An occupied table stays OCCUPIED while its session runs"""
        if new_status == TableStatus.OCCUPIED:
            return

        active = self.db.query(TableSession).filter(
            TableSession.table_id == table.id,
            TableSession.status == SessionStatus.ACTIVE
        ).first()
        if active:
            raise BusinessRuleError("Table has an active session; end or move it first")
