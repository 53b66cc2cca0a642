"""
Tests for staff profiles and companies.
"""

from cuehall.models import Profile, RoleEnum, Table


class TestUsers:

    def test_admin_creates_seller_in_own_company(self, client, admin_headers, seed_company):
        response = client.post(
            "/v1/users/",
            json={"email": "new@poolhall.io", "password": "longenough", "role": "SELLER"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["company_id"] == str(seed_company.id)

    def test_duplicate_email_rejected(self, client, admin_headers, seed_seller):
        response = client.post(
            "/v1/users/",
            json={"email": "seller@poolhall.io", "password": "longenough"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json() == {"error": "Email already registered"}

    def test_admin_cannot_grant_superadmin(self, client, admin_headers):
        response = client.post(
            "/v1/users/",
            json={"email": "boss@poolhall.io", "password": "longenough", "role": "SUPERADMIN"},
            headers=admin_headers,
        )
        assert response.status_code == 403

    def test_seller_cannot_manage_users(self, client, seller_headers):
        assert client.get("/v1/users/", headers=seller_headers).status_code == 403

    def test_list_is_tenant_scoped(self, client, admin_headers, seed_seller, other_admin):
        emails = [user["email"] for user in client.get("/v1/users/", headers=admin_headers).json()]
        assert emails == ["admin@poolhall.io", "seller@poolhall.io"]

    def test_cannot_read_other_company_profile(self, client, admin_headers, other_admin):
        response = client.get(f"/v1/users/{other_admin.id}", headers=admin_headers)
        assert response.status_code == 403

    def test_delete_deactivates(self, client, admin_headers, db_session, seed_seller):
        response = client.delete(f"/v1/users/{seed_seller.id}", headers=admin_headers)

        assert response.status_code == 200
        db_session.refresh(seed_seller)
        assert seed_seller.active is False
        assert db_session.get(Profile, seed_seller.id) is not None

    def test_cannot_deactivate_self(self, client, admin_headers, seed_admin):
        response = client.delete(f"/v1/users/{seed_admin.id}", headers=admin_headers)
        assert response.status_code == 400

    def test_update_profile(self, client, admin_headers, seed_seller):
        response = client.patch(
            f"/v1/users/{seed_seller.id}", json={"first_name": "Minnesota", "role": "ADMIN"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["first_name"] == "Minnesota"
        assert response.json()["role"] == "ADMIN"

    def test_admin_cannot_touch_superadmin_in_selected_company(self, client, admin_headers, superadmin_headers,
                                                               db_session, seed_superadmin, seed_company):
        client.post("/v1/users/select-company", json={"company_id": str(seed_company.id)}, headers=superadmin_headers)

        listed = [user["email"] for user in client.get("/v1/users/", headers=admin_headers).json()]
        assert "root@poolhall.io" not in listed

        patched = client.patch(
            f"/v1/users/{seed_superadmin.id}", json={"password": "takeover123", "role": "SELLER"}, headers=admin_headers
        )
        assert patched.status_code == 403
        assert client.delete(f"/v1/users/{seed_superadmin.id}", headers=admin_headers).status_code == 403

        db_session.refresh(seed_superadmin)
        assert seed_superadmin.role == RoleEnum.SUPERADMIN
        assert seed_superadmin.active is True
        login = client.post("/v1/auth/login", json={"email": "root@poolhall.io", "password": "takeover123"})
        assert login.status_code == 401


class TestCompanies:

    def test_superadmin_creates_company(self, client, superadmin_headers):
        response = client.post("/v1/companies/", json={"name": "Rack 'Em"}, headers=superadmin_headers)

        assert response.status_code == 201
        assert response.json()["name"] == "Rack 'Em"

    def test_admin_cannot_create_company(self, client, admin_headers):
        response = client.post("/v1/companies/", json={"name": "Rack 'Em"}, headers=admin_headers)
        assert response.status_code == 403

    def test_admin_sees_only_own_company(self, client, admin_headers, other_company):
        names = [company["name"] for company in client.get("/v1/companies/", headers=admin_headers).json()]
        assert names == ["Corner Pocket"]

    def test_company_stats(self, client, admin_headers, seed_company, seed_table, seed_item):
        response = client.get(f"/v1/companies/{seed_company.id}", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["table_count"] == 1
        assert data["profile_count"] == 1
        assert data["item_count"] == 1

    def test_admin_updates_own_company(self, client, admin_headers, seed_company):
        response = client.patch(
            f"/v1/companies/{seed_company.id}", json={"phone": "+1 555 0100"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["phone"] == "+1 555 0100"

    def test_admin_cannot_update_other_company(self, client, admin_headers, other_company):
        response = client.patch(f"/v1/companies/{other_company.id}", json={"phone": "0"}, headers=admin_headers)
        assert response.status_code == 403

    def test_delete_company_in_use_refused(self, client, superadmin_headers, db_session, seed_company):
        db_session.add(Table(company_id=seed_company.id, name="Table 1"))
        db_session.commit()

        response = client.delete(f"/v1/companies/{seed_company.id}", headers=superadmin_headers)

        assert response.status_code == 400
        assert response.json() == {"error": "Cannot delete company with existing data"}

    def test_delete_empty_company(self, client, superadmin_headers, other_company):
        response = client.delete(f"/v1/companies/{other_company.id}", headers=superadmin_headers)

        assert response.status_code == 200
        assert client.get(f"/v1/companies/{other_company.id}", headers=superadmin_headers).status_code == 404
