"""
Tests for customers and table reservations.
"""

import uuid
import pytest
from datetime import datetime, timedelta

from cuehall.models import ReservationStatus, TableReservation


BASE = datetime(2030, 5, 10, 18, 0)


def _window(start_hours, end_hours):
    return {
        "reserved_from": (BASE + timedelta(hours=start_hours)).isoformat(),
        "reserved_to": (BASE + timedelta(hours=end_hours)).isoformat(),
    }


@pytest.fixture
def customer(client, seller_headers, seed_company):
    response = client.post(
        "/v1/customers/",
        json={"name": "Minnesota Fats", "email": "fats@poolhall.io", "phone": "555-0101"},
        headers=seller_headers,
    )
    assert response.status_code == 201, response.json()
    return response.json()


def _reserve(client, headers, table, customer, start_hours, end_hours, **extra):
    payload = {"table_id": str(table.id), "customer_id": customer["id"], **_window(start_hours, end_hours), **extra}
    return client.post("/v1/reservations/", json=payload, headers=headers)


class TestCustomers:

    def test_duplicate_email_rejected(self, client, seller_headers, customer):
        response = client.post(
            "/v1/customers/", json={"name": "Impostor", "email": "fats@poolhall.io"}, headers=seller_headers
        )
        assert response.status_code == 400

    def test_same_email_in_other_company(self, client, other_admin_headers, customer):
        response = client.post(
            "/v1/customers/", json={"name": "Other Fats", "email": "fats@poolhall.io"}, headers=other_admin_headers
        )
        assert response.status_code == 201

    def test_list_includes_reservation_count(self, client, seller_headers, seed_table, customer):
        _reserve(client, seller_headers, seed_table, customer, 0, 2)
        _reserve(client, seller_headers, seed_table, customer, 3, 4)

        response = client.get("/v1/customers/", headers=seller_headers)

        assert response.status_code == 200
        assert response.json()[0]["reservation_count"] == 2

    def test_customer_with_reservations_cannot_be_deleted(self, client, seller_headers, seed_table, customer):
        _reserve(client, seller_headers, seed_table, customer, 0, 2)

        response = client.delete(f"/v1/customers/{customer['id']}", headers=seller_headers)
        assert response.status_code == 400

    def test_search(self, client, seller_headers, customer):
        assert len(client.get("/v1/customers/", params={"search": "fats"}, headers=seller_headers).json()) == 1
        assert client.get("/v1/customers/", params={"search": "zzz"}, headers=seller_headers).json() == []


class TestReservationOverlap:

    def test_overlapping_reservation_rejected(self, client, seller_headers, seed_table, customer):
        assert _reserve(client, seller_headers, seed_table, customer, 0, 2).status_code == 201

        response = _reserve(client, seller_headers, seed_table, customer, 1, 3)

        assert response.status_code == 400
        assert response.json()["error"] == "This table is already reserved for the selected time period"

    def test_touching_windows_overlap(self, client, seller_headers, seed_table, customer):
        _reserve(client, seller_headers, seed_table, customer, 0, 2)

        response = _reserve(client, seller_headers, seed_table, customer, 2, 4)
        assert response.status_code == 400

    def test_disjoint_windows_allowed(self, client, seller_headers, seed_table, customer):
        _reserve(client, seller_headers, seed_table, customer, 0, 2)

        response = _reserve(client, seller_headers, seed_table, customer, 3, 5)
        assert response.status_code == 201

    def test_other_table_not_affected(self, client, seller_headers, seed_table, second_table, customer):
        _reserve(client, seller_headers, seed_table, customer, 0, 2)

        response = _reserve(client, seller_headers, second_table, customer, 0, 2)
        assert response.status_code == 201

    def test_cancelled_reservation_does_not_block(self, client, seller_headers, seed_table, customer):
        first = _reserve(client, seller_headers, seed_table, customer, 0, 2).json()
        client.patch(f"/v1/reservations/{first['id']}", json={"status": "CANCELLED"}, headers=seller_headers)

        response = _reserve(client, seller_headers, seed_table, customer, 1, 3)
        assert response.status_code == 201

    def test_end_before_start_rejected(self, client, seller_headers, seed_table, customer):
        response = _reserve(client, seller_headers, seed_table, customer, 2, 1)

        assert response.status_code == 400
        assert response.json()["error"] == "Reservation end time must be after start time"


class TestReservationUpdate:

    def test_update_excludes_itself_from_overlap(self, client, seller_headers, seed_table, customer):
        created = _reserve(client, seller_headers, seed_table, customer, 0, 2).json()

        response = client.patch(
            f"/v1/reservations/{created['id']}", json=_window(1, 3), headers=seller_headers
        )
        assert response.status_code == 200

    def test_update_into_other_window_rejected(self, client, seller_headers, seed_table, customer):
        _reserve(client, seller_headers, seed_table, customer, 0, 2)
        second = _reserve(client, seller_headers, seed_table, customer, 5, 6).json()

        response = client.patch(f"/v1/reservations/{second['id']}", json=_window(1, 6), headers=seller_headers)
        assert response.status_code == 400

    def test_closing_skips_overlap_check(self, client, seller_headers, db_session, seed_table, customer):
        first = _reserve(client, seller_headers, seed_table, customer, 0, 2).json()
        # A clash that predates the rule, written straight to the table
        clash = _reserve(client, seller_headers, seed_table, customer, 3, 4).json()
        row = db_session.get(TableReservation, uuid.UUID(clash["id"]))
        row.reserved_from = BASE
        db_session.commit()

        response = client.patch(
            f"/v1/reservations/{first['id']}", json={"status": "COMPLETED"}, headers=seller_headers
        )

        assert response.status_code == 200
        assert response.json()["status"] == ReservationStatus.COMPLETED.value

    def test_other_tenant_cannot_read(self, client, seller_headers, other_admin_headers, seed_table, customer):
        created = _reserve(client, seller_headers, seed_table, customer, 0, 2).json()

        response = client.get(f"/v1/reservations/{created['id']}", headers=other_admin_headers)
        assert response.status_code == 403
