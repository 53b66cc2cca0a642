"""
Finance Models
Expenses and persisted financial reports
"""

from sqlalchemy import Column, String, Float, DateTime, ForeignKey, Enum as SQLEnum, Text, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum

from cuehall.core.database import Base


class ExpenseCategory(str, enum.Enum):
    """Expense category enumeration"""
    STAFF = "STAFF"
    RENT = "RENT"
    UTILITIES = "UTILITIES"
    MAINTENANCE = "MAINTENANCE"
    SUPPLIES = "SUPPLIES"
    MARKETING = "MARKETING"
    INSURANCE = "INSURANCE"
    OTHER = "OTHER"


class ReportType(str, enum.Enum):
    """Financial report type enumeration"""
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    ANNUAL = "ANNUAL"
    CUSTOM = "CUSTOM"


class Expense(Base):
    """
    Expense model
    """
    __tablename__ = "expenses"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id = Column(Uuid, ForeignKey("companies.id"), nullable=False, index=True)
    category = Column(SQLEnum(ExpenseCategory, name="expense_category_t"), nullable=False)
    description = Column(String, nullable=False)
    amount = Column(Float, nullable=False)
    expense_date = Column(DateTime, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    created_by_id = Column(Uuid, ForeignKey("profiles.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    company = relationship("Company", back_populates="expenses")
    created_by = relationship("Profile")

    def __repr__(self):
        return f"<Expense(id={self.id}, category='{self.category}', amount={self.amount})>"


class FinancialReport(Base):
    """
    Financial Report model
    Snapshot of income and expenses for a company over a date range
    """
    __tablename__ = "financial_reports"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    company_id = Column(Uuid, ForeignKey("companies.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    report_type = Column(SQLEnum(ReportType, name="report_type_t"), nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)

    # Income
    sales_income = Column(Float, nullable=False, default=0.0)
    table_rent_income = Column(Float, nullable=False, default=0.0)
    other_income = Column(Float, nullable=False, default=0.0)
    total_income = Column(Float, nullable=False, default=0.0)

    # Expenses
    inventory_cost = Column(Float, nullable=False, default=0.0)
    maintenance_cost = Column(Float, nullable=False, default=0.0)
    staff_cost = Column(Float, nullable=False, default=0.0)
    utility_cost = Column(Float, nullable=False, default=0.0)
    other_expenses = Column(Float, nullable=False, default=0.0)
    total_expense = Column(Float, nullable=False, default=0.0)

    net_profit = Column(Float, nullable=False, default=0.0)

    generated_by_id = Column(Uuid, ForeignKey("profiles.id"), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    company = relationship("Company", back_populates="financial_reports")
    generated_by = relationship("Profile")

    def __repr__(self):
        return f"<FinancialReport(id={self.id}, name='{self.name}', net={self.net_profit})>"
