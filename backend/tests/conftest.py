"""
Pytest configuration and fixtures for backend tests.
"""

import os
import uuid

# Point the app at SQLite before any cuehall module builds its engine
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from cuehall.main import app
from cuehall.core.database import Base, get_db
from cuehall.core.security import build_token_payload, create_access_token, get_password_hash
from cuehall.models import (
    Company,
    InventoryCategory,
    InventoryItem,
    Profile,
    RoleEnum,
    Table,
)


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Hashing is slow; every seeded profile shares one password
TEST_PASSWORD = "testpass123"
_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def make_profile(db_session, email, role, company=None):
    profile = Profile(
        email=email,
        password_hash=_PASSWORD_HASH,
        first_name="Test",
        last_name=role.value.title(),
        role=role,
        company_id=company.id if company else None,
        active=True,
    )
    db_session.add(profile)
    db_session.commit()
    db_session.refresh(profile)
    return profile


def headers_for(profile):
    """Bearer headers for a profile without going through /auth/login."""
    token = create_access_token(build_token_payload(profile))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed_company(db_session):
    """Create the main test company."""
    company = Company(name="Corner Pocket", email="hello@cornerpocket.io")
    db_session.add(company)
    db_session.commit()
    db_session.refresh(company)
    return company


@pytest.fixture
def other_company(db_session):
    """Create a second tenant for isolation tests."""
    company = Company(name="Eight Ball Club")
    db_session.add(company)
    db_session.commit()
    db_session.refresh(company)
    return company


@pytest.fixture
def seed_admin(db_session, seed_company):
    return make_profile(db_session, "admin@poolhall.io", RoleEnum.ADMIN, seed_company)


@pytest.fixture
def seed_seller(db_session, seed_company):
    return make_profile(db_session, "seller@poolhall.io", RoleEnum.SELLER, seed_company)


@pytest.fixture
def seed_superadmin(db_session):
    return make_profile(db_session, "root@poolhall.io", RoleEnum.SUPERADMIN)


@pytest.fixture
def other_admin(db_session, other_company):
    return make_profile(db_session, "admin@eightball.io", RoleEnum.ADMIN, other_company)


@pytest.fixture
def admin_headers(seed_admin):
    return headers_for(seed_admin)


@pytest.fixture
def seller_headers(seed_seller):
    return headers_for(seed_seller)


@pytest.fixture
def superadmin_headers(seed_superadmin):
    return headers_for(seed_superadmin)


@pytest.fixture
def other_admin_headers(other_admin):
    return headers_for(other_admin)


@pytest.fixture
def seed_table(db_session, seed_company):
    """An available table billed at 12.00 per hour."""
    table = Table(company_id=seed_company.id, name="Table 1", hourly_rate=12.0)
    db_session.add(table)
    db_session.commit()
    db_session.refresh(table)
    return table


@pytest.fixture
def second_table(db_session, seed_company):
    table = Table(company_id=seed_company.id, name="Table 2", hourly_rate=20.0)
    db_session.add(table)
    db_session.commit()
    db_session.refresh(table)
    return table


@pytest.fixture
def seed_category(db_session, seed_company):
    category = InventoryCategory(company_id=seed_company.id, name="Drinks")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def seed_item(client, admin_headers, seed_category):
    """A stocked item created through the API so its initial stock is on the ledger."""
    response = client.post(
        "/v1/inventory/items",
        json={
            "name": "Cola 355ml",
            "sku": "DRK-COLA",
            "price": 2.5,
            "quantity": 20,
            "cost_price": 1.0,
            "critical_threshold": 5,
            "category_id": str(seed_category.id),
        },
        headers=admin_headers,
    )
    assert response.status_code == 201, response.json()
    return response.json()


@pytest.fixture
def stocked_item(db_session, seed_item):
    """ORM instance of seed_item."""
    return db_session.get(InventoryItem, uuid.UUID(seed_item["id"]))
