"""
Table Endpoints
Table CRUD, manual status changes and activity history
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional
import uuid

from cuehall.core.database import get_db
from cuehall.core.security import get_current_user, require_admin
from cuehall.models import Profile, TableStatus
from cuehall.schemas.table import (
    ActivityLogResponse,
    TableCreate,
    TableResponse,
    TableStatusRequest,
    TableStatusResponse,
    TableUpdate,
)
from cuehall.services.table_service import TableService

router = APIRouter()


@router.post("/", response_model=TableResponse, status_code=201)
def create_table(
    table_data: TableCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Create table (admin only)"""
    return TableService(db).create_table(
        current_user,
        name=table_data.name,
        hourly_rate=table_data.hourly_rate,
        status=table_data.status,
        company_id=table_data.company_id
    )


@router.get("/", response_model=List[TableResponse])
def list_tables(
    company_id: Optional[uuid.UUID] = None,
    status: Optional[TableStatus] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """List tables in the caller's scope"""
    return TableService(db).list_tables(current_user, company_id, status)


@router.get("/{table_id}", response_model=TableResponse)
def get_table(
    table_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return TableService(db).get_table(current_user, table_id)


@router.patch("/{table_id}", response_model=TableResponse)
def update_table(
    table_id: uuid.UUID,
    table_data: TableUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Update table (admin only)"""
    return TableService(db).update_table(current_user, table_id, table_data.model_dump(exclude_unset=True))


@router.delete("/{table_id}")
def delete_table(
    table_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Delete table (admin only)"""
    TableService(db).delete_table(current_user, table_id)
    return {"message": "Table deleted successfully"}


@router.patch("/{table_id}/status", response_model=TableStatusResponse)
def change_table_status(
    table_id: uuid.UUID,
    data: TableStatusRequest,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Manually change table status; writes an activity log entry"""
    table, log = TableService(db).change_status(current_user, table_id, data.status, data.notes)

    if log is None:
        return TableStatusResponse(message="Status unchanged", table=table)

    return TableStatusResponse(message="Status updated", table=table, activity_log=log)


@router.get("/{table_id}/activity", response_model=List[ActivityLogResponse])
def list_table_activity(
    table_id: uuid.UUID,
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Status history of a table, newest first"""
    return TableService(db).list_activity(current_user, table_id, limit)
