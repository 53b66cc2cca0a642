"""
Services Package
Business logic services
"""

from cuehall.services.table_service import TableService, set_table_status
from cuehall.services.session_service import SessionService, calculate_session_cost
from cuehall.services.inventory_service import InventoryService, signed_delta
from cuehall.services.pos_service import PosService
from cuehall.services.reservation_service import ReservationService
from cuehall.services.report_service import ReportService, build_report_name

__all__ = [
    "TableService",
    "set_table_status",
    "SessionService",
    "calculate_session_cost",
    "InventoryService",
    "signed_delta",
    "PosService",
    "ReservationService",
    "ReportService",
    "build_report_name",
]
