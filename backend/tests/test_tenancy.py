"""
Tests for tenant scoping of reads and writes.
"""

import uuid
import pytest

from cuehall.core.exceptions import AccessDeniedError, BusinessRuleError
from cuehall.core.tenancy import resolve_read_scope, resolve_write_company
from cuehall.models import Profile, RoleEnum


def _profile(role, company_id=None):
    return Profile(id=uuid.uuid4(), email="x@poolhall.io", password_hash="-", role=role, company_id=company_id)


class TestResolveScope:

    def test_seller_pinned_to_own_company(self):
        company = uuid.uuid4()
        assert resolve_read_scope(_profile(RoleEnum.SELLER, company)) == company
        assert resolve_read_scope(_profile(RoleEnum.SELLER, company), company) == company

    def test_seller_asking_for_other_company_denied(self):
        with pytest.raises(AccessDeniedError):
            resolve_read_scope(_profile(RoleEnum.SELLER, uuid.uuid4()), uuid.uuid4())

    def test_admin_without_company_denied(self):
        with pytest.raises(AccessDeniedError):
            resolve_read_scope(_profile(RoleEnum.ADMIN))

    def test_superadmin_reads_everything_by_default(self):
        assert resolve_read_scope(_profile(RoleEnum.SUPERADMIN)) is None

    def test_superadmin_uses_selected_then_requested_company(self):
        selected, requested = uuid.uuid4(), uuid.uuid4()
        superadmin = _profile(RoleEnum.SUPERADMIN, selected)

        assert resolve_read_scope(superadmin) == selected
        assert resolve_read_scope(superadmin, requested) == requested

    def test_superadmin_write_needs_company(self):
        with pytest.raises(BusinessRuleError, match="Company ID is required"):
            resolve_write_company(_profile(RoleEnum.SUPERADMIN))


class TestTenantIsolation:

    def test_cannot_read_other_company_table(self, client, other_admin_headers, seed_table):
        response = client.get(f"/v1/tables/{seed_table.id}", headers=other_admin_headers)

        assert response.status_code == 403
        assert "error" in response.json()

    def test_cannot_list_other_company_explicitly(self, client, other_admin_headers, seed_company):
        response = client.get("/v1/tables/", params={"company_id": str(seed_company.id)}, headers=other_admin_headers)
        assert response.status_code == 403

    def test_superadmin_sees_all_companies(self, client, superadmin_headers, other_admin_headers, seed_table):
        client.post("/v1/tables/", json={"name": "Foreign"}, headers=other_admin_headers)

        response = client.get("/v1/tables/", headers=superadmin_headers)
        assert {table["name"] for table in response.json()} == {"Table 1", "Foreign"}

    def test_superadmin_write_without_company_rejected(self, client, superadmin_headers):
        response = client.post("/v1/tables/", json={"name": "Orphan"}, headers=superadmin_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Company ID is required"}

    def test_superadmin_selected_company_scopes_reads(self, client, superadmin_headers, other_admin_headers,
                                                      seed_company, seed_table):
        client.post("/v1/tables/", json={"name": "Foreign"}, headers=other_admin_headers)

        selected = client.post(
            "/v1/users/select-company", json={"company_id": str(seed_company.id)}, headers=superadmin_headers
        )
        assert selected.status_code == 200

        response = client.get("/v1/tables/", headers=superadmin_headers)
        assert [table["name"] for table in response.json()] == ["Table 1"]

    def test_seller_cannot_select_company(self, client, seller_headers, seed_company):
        response = client.post(
            "/v1/users/select-company", json={"company_id": str(seed_company.id)}, headers=seller_headers
        )
        assert response.status_code == 403
