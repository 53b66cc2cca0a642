"""
Dashboard Endpoints
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
import uuid

from cuehall.core.config import settings
from cuehall.core.database import get_db
from cuehall.core.security import get_current_user
from cuehall.models import Profile
from cuehall.schemas.reports import DashboardStatsResponse, SalesSummaryResponse
from cuehall.services.report_service import ReportService

router = APIRouter()


@router.get("/stats", response_model=DashboardStatsResponse)
def dashboard_stats(
    company_id: Optional[uuid.UUID] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Table, session and stock counters plus today's / this month's paid sales"""
    return ReportService(db).dashboard_stats(current_user, company_id)


@router.get("/sales-summary", response_model=SalesSummaryResponse)
def sales_summary(
    company_id: Optional[uuid.UUID] = None,
    days: int = Query(settings.SALES_SUMMARY_DEFAULT_DAYS, ge=1, le=366),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Daily POS and table income over the last N days"""
    items = ReportService(db).sales_summary(current_user, company_id, days)
    return SalesSummaryResponse(days=days, items=items)
