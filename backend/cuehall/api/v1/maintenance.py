"""
Table Maintenance Endpoints
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from datetime import datetime
from typing import List, Optional
import uuid

from cuehall.core.database import get_db
from cuehall.core.security import get_current_user, require_admin
from cuehall.core.tenancy import apply_company_filter, ensure_company_access, resolve_read_scope
from cuehall.models import Profile, Table, TableMaintenance
from cuehall.schemas.table import MaintenanceCreate, MaintenanceResponse, MaintenanceUpdate

router = APIRouter()


def _get_maintenance(db: Session, current_user: Profile, maintenance_id: uuid.UUID) -> TableMaintenance:
    maintenance = db.query(TableMaintenance).filter(TableMaintenance.id == maintenance_id).first()
    if not maintenance:
        raise HTTPException(status_code=404, detail="Maintenance record not found")
    ensure_company_access(current_user, maintenance.table.company_id)
    return maintenance


@router.post("/", response_model=MaintenanceResponse, status_code=201)
def create_maintenance(
    data: MaintenanceCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Log maintenance work on a table (admin only)"""
    table = db.query(Table).filter(Table.id == data.table_id).first()
    if not table:
        raise HTTPException(status_code=404, detail="Table not found")
    ensure_company_access(current_user, table.company_id)

    maintenance = TableMaintenance(**data.model_dump())
    db.add(maintenance)
    db.commit()
    db.refresh(maintenance)
    return maintenance


@router.get("/", response_model=List[MaintenanceResponse])
def list_maintenance(
    company_id: Optional[uuid.UUID] = None,
    table_id: Optional[uuid.UUID] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Maintenance records, most recent first"""
    scope = resolve_read_scope(current_user, company_id)
    query = db.query(TableMaintenance).join(Table, TableMaintenance.table_id == Table.id)
    query = apply_company_filter(query, Table.company_id, scope)

    if table_id is not None:
        query = query.filter(TableMaintenance.table_id == table_id)
    if start_date is not None:
        query = query.filter(TableMaintenance.maintenance_at >= start_date)
    if end_date is not None:
        query = query.filter(TableMaintenance.maintenance_at <= end_date)

    return query.order_by(TableMaintenance.maintenance_at.desc()).all()


@router.get("/{maintenance_id}", response_model=MaintenanceResponse)
def get_maintenance(
    maintenance_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    return _get_maintenance(db, current_user, maintenance_id)


@router.patch("/{maintenance_id}", response_model=MaintenanceResponse)
def update_maintenance(
    maintenance_id: uuid.UUID,
    data: MaintenanceUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    maintenance = _get_maintenance(db, current_user, maintenance_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(maintenance, field, value)

    db.commit()
    db.refresh(maintenance)
    return maintenance


@router.delete("/{maintenance_id}")
def delete_maintenance(
    maintenance_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    maintenance = _get_maintenance(db, current_user, maintenance_id)
    db.delete(maintenance)
    db.commit()
    return {"message": "Maintenance record deleted successfully"}
