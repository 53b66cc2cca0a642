"""
Models Package
Imports all SQLAlchemy models for the CueHall platform
"""

from cuehall.models.company import Company
from cuehall.models.user import Profile, RoleEnum
from cuehall.models.table import Table, TableStatus, TableActivityLog, TableMaintenance
from cuehall.models.session import TableSession, SessionTrackedItem, SessionStatus
from cuehall.models.inventory import InventoryCategory, InventoryItem
from cuehall.models.ledger import StockMovement, MovementType, MOVEMENT_DIRECTION
from cuehall.models.pos import PosOrder, PosOrderItem, PaymentMethod, PaymentStatus
from cuehall.models.reservation import (
    Customer,
    TableReservation,
    ReservationStatus,
    BLOCKING_RESERVATION_STATUSES
)
from cuehall.models.finance import Expense, ExpenseCategory, FinancialReport, ReportType

__all__ = [
    # Core
    "Company",
    "Profile",
    "RoleEnum",

    # Tables
    "Table",
    "TableStatus",
    "TableActivityLog",
    "TableMaintenance",

    # Sessions
    "TableSession",
    "SessionTrackedItem",
    "SessionStatus",

    # Inventory
    "InventoryCategory",
    "InventoryItem",

    # Ledger (APPEND-ONLY)
    "StockMovement",
    "MovementType",
    "MOVEMENT_DIRECTION",

    # POS
    "PosOrder",
    "PosOrderItem",
    "PaymentMethod",
    "PaymentStatus",

    # Reservations
    "Customer",
    "TableReservation",
    "ReservationStatus",
    "BLOCKING_RESERVATION_STATUSES",

    # Finance
    "Expense",
    "ExpenseCategory",
    "FinancialReport",
    "ReportType",
]
