#!/usr/bin/env python3
"""
CueHall Database Setup Script
Creates a demo company, staff profiles, tables and stocked inventory
"""

import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from cuehall.core.database import SessionLocal, init_db
from cuehall.core.security import get_password_hash
from cuehall.models import (
    Company,
    InventoryCategory,
    InventoryItem,
    MovementType,
    Profile,
    RoleEnum,
    Table,
)
from cuehall.services.inventory_service import InventoryService


def setup_database():
    """Initialize database with demo data"""

    print("🚀 Setting up CueHall database...")

    # Create all tables
    print("📊 Creating database tables...")
    init_db()
    print("✅ Tables created")

    db = SessionLocal()

    try:
        # Check if data already exists
        existing_company = db.query(Company).first()
        if existing_company:
            print("⚠️  Database already has data. Skipping setup.")
            print(f"   Existing company: {existing_company.name}")
            return

        # Create company
        print("\n🏢 Creating company...")
        company = Company(
            name="Corner Pocket Billiards",
            address="12 Main Street",
            phone="+1 555 0100",
            email="hello@cornerpocket.io"
        )
        db.add(company)
        db.flush()
        print(f"✅ Created company: {company.name} (ID: {company.id})")

        # Create profiles
        print("\n👤 Creating profiles...")
        superadmin = Profile(
            email="superadmin@cuehall.io",
            password_hash=get_password_hash("superadmin123"),
            first_name="Super",
            last_name="Admin",
            role=RoleEnum.SUPERADMIN,
            company_id=None,
            active=True
        )
        admin = Profile(
            email="admin@cornerpocket.io",
            password_hash=get_password_hash("admin123"),
            first_name="Hall",
            last_name="Manager",
            role=RoleEnum.ADMIN,
            company_id=company.id,
            active=True
        )
        seller = Profile(
            email="seller@cornerpocket.io",
            password_hash=get_password_hash("seller123"),
            first_name="Front",
            last_name="Desk",
            role=RoleEnum.SELLER,
            company_id=company.id,
            active=True
        )
        db.add_all([superadmin, admin, seller])
        db.flush()
        for profile in (superadmin, admin, seller):
            print(f"✅ Created {profile.role.value}: {profile.email}")

        # Create tables
        print("\n🎱 Creating tables...")
        for number, rate in ((1, 12.0), (2, 12.0), (3, 15.0), (4, 20.0)):
            db.add(Table(company_id=company.id, name=f"Table {number}", hourly_rate=rate))
        db.flush()
        print("✅ Created 4 tables")

        # Create inventory
        print("\n📦 Creating inventory...")
        drinks = InventoryCategory(company_id=company.id, name="Drinks", description="Soft drinks and beer")
        supplies = InventoryCategory(company_id=company.id, name="Supplies", description="Chalk, tips, gloves")
        db.add_all([drinks, supplies])
        db.flush()

        inventory = InventoryService(db)
        catalog = [
            (drinks, "Cola 355ml", "DRK-COLA", 2.50, 1.10, 48),
            (drinks, "Lager 330ml", "DRK-LAGER", 4.00, 1.80, 72),
            (drinks, "Sparkling Water", "DRK-WATER", 2.00, 0.60, 24),
            (supplies, "Chalk (box of 12)", "SUP-CHALK", 6.00, 2.50, 10),
            (supplies, "Billiard Glove", "SUP-GLOVE", 9.00, 3.75, 3),
        ]
        for category, name, sku, price, cost, quantity in catalog:
            item = InventoryItem(
                company_id=company.id,
                category_id=category.id,
                name=name,
                sku=sku,
                price=price,
                quantity=0,
                critical_threshold=5
            )
            db.add(item)
            db.flush()
            inventory.apply_movement(
                item,
                MovementType.PURCHASE,
                quantity,
                reason="Initial stock",
                created_by=admin.id,
                cost_price=cost
            )
            print(f"✅ {name}: {quantity} units")

        db.commit()

        print("\n" + "=" * 60)
        print("🎉 Database setup complete!")
        print("=" * 60)
        print("\n📝 Login credentials:")
        print("   superadmin@cuehall.io / superadmin123")
        print("   admin@cornerpocket.io / admin123")
        print("   seller@cornerpocket.io / seller123")
        print(f"\n🏢 Company ID: {company.id}")
        print("\n🚀 Start the API with: uvicorn cuehall.main:app --reload")

    except Exception as e:
        print(f"\n❌ Error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    setup_database()
