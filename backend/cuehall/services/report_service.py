"""
Report Service
Dashboard stats, sales summary and persisted financial reports
"""

from sqlalchemy import func
from sqlalchemy.orm import Session
from datetime import date, datetime, time, timedelta
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
    Expense,
    ExpenseCategory,
    FinancialReport,
    InventoryItem,
    MovementType,
    PaymentStatus,
    PosOrder,
    Profile,
    ReportType,
    SessionStatus,
    StockMovement,
    Table,
    TableMaintenance,
    TableSession,
)

logger = logging.getLogger(__name__)


def build_report_name(report_type: ReportType, start: datetime, end: datetime) -> str:
    """Human readable report title derived from type and range"""
    if report_type == ReportType.DAILY:
        return f"Daily Report {start:%Y-%m-%d}"
    if report_type == ReportType.WEEKLY:
        return f"Weekly Report {start:%Y-%m-%d} - {end:%Y-%m-%d}"
    if report_type == ReportType.MONTHLY:
        return f"Monthly Report {start:%B %Y}"
    if report_type == ReportType.QUARTERLY:
        return f"Quarterly Report Q{(start.month - 1) // 3 + 1} {start.year}"
    if report_type == ReportType.ANNUAL:
        return f"Annual Report {start.year}"
    return f"Custom Report {start:%Y-%m-%d} - {end:%Y-%m-%d}"


class ReportService:
    """Reporting aggregator"""

    def __init__(self, db: Session):
        self.db = db

    def dashboard_stats(self, actor: Profile, company_id: Optional[uuid.UUID] = None) -> Dict[str, Any]:
        scope = resolve_read_scope(actor, company_id)

        now = datetime.utcnow()
        today_start = datetime.combine(now.date(), time.min)
        month_start = today_start.replace(day=1)

        tables_count = apply_company_filter(self.db.query(Table), Table.company_id, scope).count()

        active_sessions = self.db.query(TableSession).join(Table, TableSession.table_id == Table.id).filter(
            TableSession.status == SessionStatus.ACTIVE
        )
        active_sessions_count = apply_company_filter(active_sessions, Table.company_id, scope).count()

        items = apply_company_filter(self.db.query(InventoryItem), InventoryItem.company_id, scope)
        inventory_items_count = items.count()
        low_stock_items_count = items.filter(InventoryItem.quantity <= InventoryItem.critical_threshold).count()

        return {
            "tables_count": tables_count,
            "active_sessions_count": active_sessions_count,
            "inventory_items_count": inventory_items_count,
            "low_stock_items_count": low_stock_items_count,
            "today_sales": self._paid_sales_since(scope, today_start),
            "month_sales": self._paid_sales_since(scope, month_start),
        }

    def sales_summary(
        self,
        actor: Profile,
        company_id: Optional[uuid.UUID] = None,
        days: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        """
        Daily totals for the last `days` days including today

        POS orders are bucketed by created_at, sessions by ended_at.
        """
        days = days or settings.SALES_SUMMARY_DEFAULT_DAYS
        if days < 1:
            raise BusinessRuleError("Days must be at least 1")

        scope = resolve_read_scope(actor, company_id)

        today = datetime.utcnow().date()
        first_day = today - timedelta(days=days - 1)
        start = datetime.combine(first_day, time.min)
        end = datetime.combine(today, time.max)

        buckets: Dict[date, Dict[str, Any]] = {}
        for offset in range(days):
            day = first_day + timedelta(days=offset)
            buckets[day] = {"date": day, "pos_amount": 0.0, "table_amount": 0.0}

        orders = apply_company_filter(self.db.query(PosOrder), PosOrder.company_id, scope).filter(
            PosOrder.payment_status == PaymentStatus.PAID,
            PosOrder.created_at >= start,
            PosOrder.created_at <= end
        )
        for order in orders:
            buckets[order.created_at.date()]["pos_amount"] += order.amount or 0.0

        sessions = self.db.query(TableSession).join(Table, TableSession.table_id == Table.id).filter(
            TableSession.status == SessionStatus.COMPLETED,
            TableSession.ended_at.isnot(None),
            TableSession.ended_at >= start,
            TableSession.ended_at <= end
        )
        for session in apply_company_filter(sessions, Table.company_id, scope):
            buckets[session.ended_at.date()]["table_amount"] += session.total_cost or 0.0

        summary = []
        for bucket in buckets.values():
            bucket["pos_amount"] = round(bucket["pos_amount"], 2)
            bucket["table_amount"] = round(bucket["table_amount"], 2)
            bucket["total"] = round(bucket["pos_amount"] + bucket["table_amount"], 2)
            summary.append(bucket)
        return summary

    # ------------------------------------------------------------------
    # Financial reports
    # ------------------------------------------------------------------

    def compute_financials(self, company_id: uuid.UUID, start: datetime, end: datetime) -> Dict[str, float]:
        """Income and expense breakdown of a company over [start, end]"""
        if end < start:
            raise BusinessRuleError("End date must be after start date")

        sales_income = self.db.query(func.coalesce(func.sum(PosOrder.amount), 0.0)).filter(
            PosOrder.company_id == company_id,
            PosOrder.payment_status == PaymentStatus.PAID,
            PosOrder.created_at >= start,
            PosOrder.created_at <= end
        ).scalar()

        table_rent_income = self.db.query(func.coalesce(func.sum(TableSession.total_cost), 0.0)).join(
            Table, TableSession.table_id == Table.id
        ).filter(
            Table.company_id == company_id,
            TableSession.status == SessionStatus.COMPLETED,
            TableSession.ended_at.isnot(None),
            TableSession.started_at >= start,
            TableSession.started_at <= end
        ).scalar()

        purchases = self.db.query(StockMovement).join(
            InventoryItem, StockMovement.item_id == InventoryItem.id
        ).filter(
            InventoryItem.company_id == company_id,
            StockMovement.type == MovementType.PURCHASE,
            StockMovement.created_at >= start,
            StockMovement.created_at <= end
        )
        inventory_cost = sum((movement.cost_price or 0.0) * movement.quantity for movement in purchases)

        table_maintenance = self.db.query(func.coalesce(func.sum(TableMaintenance.cost), 0.0)).join(
            Table, TableMaintenance.table_id == Table.id
        ).filter(
            Table.company_id == company_id,
            TableMaintenance.maintenance_at >= start,
            TableMaintenance.maintenance_at <= end
        ).scalar()

        expenses_by_category = dict(
            self.db.query(Expense.category, func.sum(Expense.amount)).filter(
                Expense.company_id == company_id,
                Expense.expense_date >= start,
                Expense.expense_date <= end
            ).group_by(Expense.category).all()
        )

        staff_cost = expenses_by_category.pop(ExpenseCategory.STAFF, 0.0) or 0.0
        utility_cost = expenses_by_category.pop(ExpenseCategory.UTILITIES, 0.0) or 0.0
        maintenance_expenses = expenses_by_category.pop(ExpenseCategory.MAINTENANCE, 0.0) or 0.0
        other_expenses = sum(amount or 0.0 for amount in expenses_by_category.values())

        maintenance_cost = table_maintenance + maintenance_expenses
        other_income = 0.0

        total_income = sales_income + table_rent_income + other_income
        total_expense = inventory_cost + maintenance_cost + staff_cost + utility_cost + other_expenses

        figures = {
            "sales_income": sales_income,
            "table_rent_income": table_rent_income,
            "other_income": other_income,
            "total_income": total_income,
            "inventory_cost": inventory_cost,
            "maintenance_cost": maintenance_cost,
            "staff_cost": staff_cost,
            "utility_cost": utility_cost,
            "other_expenses": other_expenses,
            "total_expense": total_expense,
            "net_profit": total_income - total_expense,
        }
        return {key: round(float(value), 2) for key, value in figures.items()}

    def preview_financials(
        self,
        actor: Profile,
        start: datetime,
        end: datetime,
        company_id: Optional[uuid.UUID] = None
    ) -> Dict[str, float]:
        """Figures of a report without persisting it"""
        target_company = resolve_write_company(actor, company_id)
        return self.compute_financials(target_company, start, end)

    def generate_report(
        self,
        actor: Profile,
        report_type: ReportType,
        start: datetime,
        end: datetime,
        company_id: Optional[uuid.UUID] = None
    ) -> FinancialReport:
        target_company = resolve_write_company(actor, company_id)
        figures = self.compute_financials(target_company, start, end)

        with transaction(self.db):
            report = FinancialReport(
                company_id=target_company,
                name=build_report_name(report_type, start, end),
                report_type=report_type,
                start_date=start,
                end_date=end,
                generated_by_id=actor.id,
                **figures,
            )
            self.db.add(report)

        self.db.refresh(report)
        logger.info(
            "Financial report %s generated for company %s: net %.2f",
            report.id, target_company, report.net_profit
        )
        return report

    def list_reports(
        self,
        actor: Profile,
        company_id: Optional[uuid.UUID] = None,
        report_type: Optional[ReportType] = None
    ) -> List[FinancialReport]:
        scope = resolve_read_scope(actor, company_id)
        query = apply_company_filter(self.db.query(FinancialReport), FinancialReport.company_id, scope)
        if report_type is not None:
            query = query.filter(FinancialReport.report_type == report_type)
        return query.order_by(FinancialReport.created_at.desc()).all()

    def get_report(self, actor: Profile, report_id: uuid.UUID) -> FinancialReport:
        report = self.db.query(FinancialReport).filter(FinancialReport.id == report_id).first()
        if not report:
            raise NotFoundError("Report", report_id)
        ensure_company_access(actor, report.company_id)
        return report

    def delete_report(self, actor: Profile, report_id: uuid.UUID) -> None:
        report = self.get_report(actor, report_id)

        with transaction(self.db):
            self.db.delete(report)

    def _paid_sales_since(self, scope: Optional[uuid.UUID], since: datetime) -> float:
        query = self.db.query(func.coalesce(func.sum(PosOrder.amount), 0.0)).filter(
            PosOrder.payment_status == PaymentStatus.PAID,
            PosOrder.created_at >= since
        )
        query = apply_company_filter(query, PosOrder.company_id, scope)
        return round(float(query.scalar() or 0.0), 2)
