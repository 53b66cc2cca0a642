"""
Company Endpoints
Tenant management
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
import uuid
import logging

from cuehall.core.database import get_db
from cuehall.core.security import get_current_user, require_admin, require_superadmin
from cuehall.core.tenancy import ensure_company_access
from cuehall.models import Company, InventoryItem, PosOrder, Profile, Table
from cuehall.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
    CompanyWithStats,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def _get_company(db: Session, company_id: uuid.UUID) -> Company:
    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


@router.post("/", response_model=CompanyResponse, status_code=201)
def create_company(
    company_data: CompanyCreate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_superadmin)
):
    """Create new company (superadmin only)"""
    company = Company(**company_data.model_dump())
    db.add(company)
    db.commit()
    db.refresh(company)

    logger.info("Company %s (%s) created", company.name, company.id)
    return company


@router.get("/", response_model=List[CompanyResponse])
def list_companies(
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """List companies visible to the caller"""
    query = db.query(Company)
    if not current_user.is_superadmin:
        if current_user.company_id is None:
            return []
        query = query.filter(Company.id == current_user.company_id)
    return query.order_by(Company.name.asc()).all()


@router.get("/{company_id}", response_model=CompanyWithStats)
def get_company(
    company_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(get_current_user)
):
    """Get company by ID with usage stats"""
    ensure_company_access(current_user, company_id)
    company = _get_company(db, company_id)

    return CompanyWithStats(
        id=company.id,
        name=company.name,
        address=company.address,
        phone=company.phone,
        email=company.email,
        created_at=company.created_at,
        table_count=db.query(Table).filter(Table.company_id == company.id).count(),
        profile_count=db.query(Profile).filter(Profile.company_id == company.id).count(),
        item_count=db.query(InventoryItem).filter(InventoryItem.company_id == company.id).count()
    )


@router.patch("/{company_id}", response_model=CompanyResponse)
def update_company(
    company_id: uuid.UUID,
    company_data: CompanyUpdate,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_admin)
):
    """Update company (admin only)"""
    ensure_company_access(current_user, company_id)
    company = _get_company(db, company_id)

    for field, value in company_data.model_dump(exclude_unset=True).items():
        setattr(company, field, value)

    db.commit()
    db.refresh(company)
    return company


@router.delete("/{company_id}")
def delete_company(
    company_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: Profile = Depends(require_superadmin)
):
    """Delete an empty company (superadmin only)"""
    company = _get_company(db, company_id)

    in_use = (
        db.query(Profile).filter(Profile.company_id == company.id).first()
        or db.query(Table).filter(Table.company_id == company.id).first()
        or db.query(InventoryItem).filter(InventoryItem.company_id == company.id).first()
        or db.query(PosOrder).filter(PosOrder.company_id == company.id).first()
    )
    if in_use:
        raise HTTPException(
            status_code=400,
            detail="Cannot delete company with existing data"
        )

    db.delete(company)
    db.commit()

    logger.info("Company %s deleted", company_id)
    return {"message": "Company deleted successfully"}
