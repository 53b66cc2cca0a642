"""
Finance Schemas
Expenses and financial reports
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
import uuid

from cuehall.models import ExpenseCategory, ReportType
from cuehall.schemas.base import PartialUpdate


class ExpenseBase(BaseModel):
    """Base expense schema"""
    category: ExpenseCategory
    description: str = Field(..., min_length=1, max_length=255)
    amount: float = Field(..., gt=0)
    expense_date: datetime
    notes: Optional[str] = None


class ExpenseCreate(ExpenseBase):
    """Create expense request"""
    company_id: Optional[uuid.UUID] = None


class ExpenseUpdate(PartialUpdate):
    """Update expense request"""
    non_nullable = ("category", "description", "amount", "expense_date")

    category: Optional[ExpenseCategory] = None
    description: Optional[str] = Field(None, min_length=1, max_length=255)
    amount: Optional[float] = Field(None, gt=0)
    expense_date: Optional[datetime] = None
    notes: Optional[str] = None


class ExpenseResponse(ExpenseBase):
    """Expense response"""
    id: uuid.UUID
    company_id: uuid.UUID
    created_by_id: Optional[uuid.UUID] = None
    created_at: datetime

    class Config:
        from_attributes = True


class FinancialReportRequest(BaseModel):
    """Generate / preview a financial report"""
    company_id: Optional[uuid.UUID] = None
    report_type: ReportType = ReportType.CUSTOM
    start_date: datetime
    end_date: datetime


class FinancialFigures(BaseModel):
    """Income and expense breakdown"""
    sales_income: float
    table_rent_income: float
    other_income: float
    total_income: float
    inventory_cost: float
    maintenance_cost: float
    staff_cost: float
    utility_cost: float
    other_expenses: float
    total_expense: float
    net_profit: float


class FinancialReportResponse(FinancialFigures):
    """Persisted financial report"""
    id: uuid.UUID
    company_id: uuid.UUID
    name: str
    report_type: ReportType
    start_date: datetime
    end_date: datetime
    generated_by_id: Optional[uuid.UUID] = None
    created_at: datetime

    class Config:
        from_attributes = True
