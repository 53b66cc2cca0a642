"""
API v1 Router
Aggregates all v1 endpoints
"""

from fastapi import APIRouter

from cuehall.core.config import settings
from cuehall.api.v1 import (
    auth,
    companies,
    dashboard,
    finance,
    inventory,
    maintenance,
    pos,
    reservations,
    sessions,
    tables,
    users,
)

api_router = APIRouter()

# Include route modules
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(companies.router, prefix="/companies", tags=["Companies"])
api_router.include_router(tables.router, prefix="/tables", tags=["Tables"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["Sessions"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["Inventory"])
api_router.include_router(pos.router, prefix="/pos", tags=["POS"])
api_router.include_router(reservations.router, prefix="/reservations", tags=["Reservations"])
api_router.include_router(reservations.customers_router, prefix="/customers", tags=["Customers"])
api_router.include_router(maintenance.router, prefix="/maintenance", tags=["Maintenance"])
api_router.include_router(finance.expenses_router, prefix="/expenses", tags=["Expenses"])
api_router.include_router(finance.reports_router, prefix="/financial-reports", tags=["Financial Reports"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["Dashboard"])


@api_router.get("/")
def api_root():
    return {
        "message": "CueHall API v1",
        "version": settings.VERSION,
        "status": "active",
        "endpoints": {
            "auth": "/v1/auth",
            "companies": "/v1/companies",
            "tables": "/v1/tables",
            "sessions": "/v1/sessions",
            "inventory": "/v1/inventory",
            "pos": "/v1/pos",
            "reservations": "/v1/reservations",
            "dashboard": "/v1/dashboard",
            "docs": "/docs"
        }
    }
