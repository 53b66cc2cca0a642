"""
Schemas Package
Pydantic models for request/response validation
"""

from cuehall.schemas.auth import (
    LoginRequest,
    TokenResponse,
    RefreshTokenRequest,
    UserCreate,
    UserUpdate,
    UserResponse,
    CurrentUserResponse,
    SelectCompanyRequest,
)

from cuehall.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
    CompanyWithStats,
)

from cuehall.schemas.table import (
    TableCreate,
    TableUpdate,
    TableResponse,
    TableStatusRequest,
    TableStatusResponse,
    ActivityLogResponse,
    MaintenanceCreate,
    MaintenanceUpdate,
    MaintenanceResponse,
)

from cuehall.schemas.session import (
    TableSessionCreate,
    TableSessionResponse,
    SessionMoveRequest,
    SessionCostResponse,
    TrackedItemCreate,
    TrackedItemsRequest,
    TrackedItemResponse,
)

from cuehall.schemas.inventory import (
    CategoryCreate,
    CategoryUpdate,
    CategoryResponse,
    InventoryItemCreate,
    InventoryItemUpdate,
    InventoryItemResponse,
    StockMovementCreate,
    MovementCorrection,
    StockMovementResponse,
)

from cuehall.schemas.pos import (
    OrderItemCreate,
    OrderItemUpdate,
    OrderItemResponse,
    PosOrderCreate,
    PosOrderUpdate,
    PosOrderResponse,
    PosOrderPage,
)

from cuehall.schemas.reservation import (
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    ReservationCreate,
    ReservationUpdate,
    ReservationResponse,
)

from cuehall.schemas.finance import (
    ExpenseCreate,
    ExpenseUpdate,
    ExpenseResponse,
    FinancialReportRequest,
    FinancialFigures,
    FinancialReportResponse,
)

from cuehall.schemas.reports import (
    DashboardStatsResponse,
    SalesDayResponse,
    SalesSummaryResponse,
)

__all__ = [
    # Auth
    "LoginRequest",
    "TokenResponse",
    "RefreshTokenRequest",
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "CurrentUserResponse",
    "SelectCompanyRequest",

    # Companies
    "CompanyCreate",
    "CompanyUpdate",
    "CompanyResponse",
    "CompanyWithStats",

    # Tables & maintenance
    "TableCreate",
    "TableUpdate",
    "TableResponse",
    "TableStatusRequest",
    "TableStatusResponse",
    "ActivityLogResponse",
    "MaintenanceCreate",
    "MaintenanceUpdate",
    "MaintenanceResponse",

    # Sessions
    "TableSessionCreate",
    "TableSessionResponse",
    "SessionMoveRequest",
    "SessionCostResponse",
    "TrackedItemCreate",
    "TrackedItemsRequest",
    "TrackedItemResponse",

    # Inventory
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "InventoryItemCreate",
    "InventoryItemUpdate",
    "InventoryItemResponse",
    "StockMovementCreate",
    "MovementCorrection",
    "StockMovementResponse",

    # POS
    "OrderItemCreate",
    "OrderItemUpdate",
    "OrderItemResponse",
    "PosOrderCreate",
    "PosOrderUpdate",
    "PosOrderResponse",
    "PosOrderPage",

    # Reservations
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerResponse",
    "ReservationCreate",
    "ReservationUpdate",
    "ReservationResponse",

    # Finance
    "ExpenseCreate",
    "ExpenseUpdate",
    "ExpenseResponse",
    "FinancialReportRequest",
    "FinancialFigures",
    "FinancialReportResponse",

    # Reports
    "DashboardStatsResponse",
    "SalesDayResponse",
    "SalesSummaryResponse",
]
