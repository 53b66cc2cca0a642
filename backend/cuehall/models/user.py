"""
Profile Model
Handles authentication, role and tenant membership
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Enum as SQLEnum, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid
import enum

from cuehall.core.database import Base


class RoleEnum(str, enum.Enum):
    """User role enumeration"""
    SELLER = "SELLER"
    ADMIN = "ADMIN"
    SUPERADMIN = "SUPERADMIN"


class Profile(Base):
    """
    Profile model
    A staff login bound to at most one company.
    SUPERADMIN profiles may have no company, or a selected one.
    """
    __tablename__ = "profiles"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    first_name = Column(String, nullable=True)
    last_name = Column(String, nullable=True)
    role = Column(SQLEnum(RoleEnum, name="role_t"), nullable=False, default=RoleEnum.SELLER)
    company_id = Column(Uuid, ForeignKey("companies.id"), nullable=True, index=True)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    company = relationship("Company", back_populates="profiles")

    def __repr__(self):
        return f"<Profile(id={self.id}, email='{self.email}', role='{self.role}')>"

    @property
    def is_superadmin(self) -> bool:
        return self.role == RoleEnum.SUPERADMIN

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)
