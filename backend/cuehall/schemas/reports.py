"""
Reports Schemas
Dashboard and sales summary
"""

from pydantic import BaseModel
from typing import List
import datetime


class DashboardStatsResponse(BaseModel):
    """Dashboard counters and sales totals"""
    tables_count: int
    active_sessions_count: int
    inventory_items_count: int
    low_stock_items_count: int
    today_sales: float
    month_sales: float


class SalesDayResponse(BaseModel):
    """One day of the sales summary"""
    date: datetime.date
    pos_amount: float
    table_amount: float
    total: float


class SalesSummaryResponse(BaseModel):
    """Sales summary over the last N days"""
    days: int
    items: List[SalesDayResponse]
