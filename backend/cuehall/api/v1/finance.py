"""
Finance Endpoints
Expenses and financial reports
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional
import uuid
import logging

from cuehall.core.database import get_db
from cuehall.core.security import get_current_user, require_admin
from cuehall.core.tenancy import (
    apply_company_filter,
    ensure_company_access,
    resolve_read_scope,
    resolve_write_company,
)
from cuehall.models import Expense, ExpenseCategory, Profile, ReportType
from cuehall.schemas.finance import (
    ExpenseCreate,
    ExpenseResponse,
    ExpenseUpdate,
    FinancialFigures,
    FinancialReportRequest,
    FinancialReportResponse,
)
from cuehall.services.report_service import ReportService

expenses_router = APIRouter()
reports_router = APIRouter()
logger = logging.getLogger(__name__)


def _get_expense(db: Session, current_user: Profile, expense_id: uuid.UUID) -> Expense:
    expense = db.query(Expense).filter(Expense.id == expense_id).first()
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    ensure_company_access(current_user, expense.company_id)
    return expense


@expenses_router.post("/", response_model=ExpenseResponse, status_code=201)
def create_expense(
    data: ExpenseCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Record an expense (admin only)"""
    company_id = resolve_write_company(current_user, data.company_id)

    expense = Expense(
        company_id=company_id,
        category=data.category,
        description=data.description,
        amount=data.amount,
        expense_date=data.expense_date,
        notes=data.notes,
        created_by_id=current_user.id
    )
    db.add(expense)
    db.commit()
    db.refresh(expense)

    logger.info("Expense %s (%s, %.2f) recorded for company %s",
                expense.id, expense.category.value, expense.amount, company_id)
    return expense


@expenses_router.get("/", response_model=List[ExpenseResponse])
def list_expenses(
    company_id: Optional[uuid.UUID] = None,
    category: Optional[ExpenseCategory] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    scope = resolve_read_scope(current_user, company_id)
    query = apply_company_filter(db.query(Expense), Expense.company_id, scope)

    if category is not None:
        query = query.filter(Expense.category == category)
    if start_date is not None:
        query = query.filter(Expense.expense_date >= start_date)
    if end_date is not None:
        query = query.filter(Expense.expense_date <= end_date)

    return query.order_by(Expense.expense_date.desc()).all()


@expenses_router.get("/{expense_id}", response_model=ExpenseResponse)
def get_expense(
    expense_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    return _get_expense(db, current_user, expense_id)


@expenses_router.patch("/{expense_id}", response_model=ExpenseResponse)
def update_expense(
    expense_id: uuid.UUID,
    data: ExpenseUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    expense = _get_expense(db, current_user, expense_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(expense, field, value)

    db.commit()
    db.refresh(expense)
    return expense


@expenses_router.delete("/{expense_id}")
def delete_expense(
    expense_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    expense = _get_expense(db, current_user, expense_id)
    db.delete(expense)
    db.commit()
    return {"message": "Expense deleted successfully"}


# ----------------------------------------------------------------------
# Financial reports
# ----------------------------------------------------------------------

@reports_router.post("/generate", response_model=FinancialReportResponse, status_code=201)
def generate_report(
    data: FinancialReportRequest,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Compute and persist a financial report for a date range"""
    return ReportService(db).generate_report(
        current_user, data.report_type, data.start_date, data.end_date, data.company_id
    )


@reports_router.post("/data", response_model=FinancialFigures)
def preview_report(
    data: FinancialReportRequest,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Compute report figures without saving them"""
    return ReportService(db).preview_financials(current_user, data.start_date, data.end_date, data.company_id)


@reports_router.get("/", response_model=List[FinancialReportResponse])
def list_reports(
    company_id: Optional[uuid.UUID] = None,
    report_type: Optional[ReportType] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    return ReportService(db).list_reports(current_user, company_id, report_type)


@reports_router.get("/{report_id}", response_model=FinancialReportResponse)
def get_report(
    report_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    return ReportService(db).get_report(current_user, report_id)


@reports_router.delete("/{report_id}")
def delete_report(
    report_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    ReportService(db).delete_report(current_user, report_id)
    return {"message": "Report deleted successfully"}
