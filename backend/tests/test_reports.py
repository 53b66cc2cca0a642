"""
Tests for dashboard statistics, sales summary and financial reports.
"""

from datetime import datetime, timedelta

import pytest

from cuehall.models import ReportType, SessionStatus, TableSession
from cuehall.services.report_service import build_report_name


@pytest.fixture
def paid_order(client, seller_headers, stocked_item):
    """Four colas at 2.50, paid."""
    response = client.post(
        "/v1/pos/orders",
        json={"items": [{"item_id": str(stocked_item.id), "quantity": 4}], "payment_status": "PAID"},
        headers=seller_headers,
    )
    assert response.status_code == 201, response.json()
    return response.json()


@pytest.fixture
def completed_session(db_session, seed_table):
    """A finished hour of play billed at 12.00."""
    ended_at = datetime.utcnow() - timedelta(minutes=1)
    session = TableSession(
        table_id=seed_table.id,
        started_at=ended_at - timedelta(hours=1),
        ended_at=ended_at,
        status=SessionStatus.COMPLETED,
        total_cost=12.0,
    )
    db_session.add(session)
    db_session.commit()
    db_session.refresh(session)
    return session


def _window():
    now = datetime.utcnow()
    return {
        "start_date": (now - timedelta(days=1)).isoformat(),
        "end_date": (now + timedelta(days=1)).isoformat(),
    }


class TestReportNames:

    @pytest.mark.parametrize("report_type,expected", [
        (ReportType.DAILY, "Daily Report 2026-04-01"),
        (ReportType.WEEKLY, "Weekly Report 2026-04-01 - 2026-06-30"),
        (ReportType.MONTHLY, "Monthly Report April 2026"),
        (ReportType.QUARTERLY, "Quarterly Report Q2 2026"),
        (ReportType.ANNUAL, "Annual Report 2026"),
        (ReportType.CUSTOM, "Custom Report 2026-04-01 - 2026-06-30"),
    ])
    def test_name_follows_type(self, report_type, expected):
        assert build_report_name(report_type, datetime(2026, 4, 1), datetime(2026, 6, 30)) == expected


class TestDashboard:

    def test_stats(self, client, seller_headers, second_table, paid_order, seed_table):
        client.post("/v1/sessions/", json={"table_id": str(second_table.id)}, headers=seller_headers)

        response = client.get("/v1/dashboard/stats", headers=seller_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["tables_count"] == 2
        assert data["active_sessions_count"] == 1
        assert data["inventory_items_count"] == 1
        assert data["low_stock_items_count"] == 0
        assert data["today_sales"] == 10.0
        assert data["month_sales"] == 10.0

    def test_unpaid_orders_not_counted(self, client, seller_headers, stocked_item):
        client.post(
            "/v1/pos/orders",
            json={"items": [{"item_id": str(stocked_item.id), "quantity": 1}]},
            headers=seller_headers,
        )

        response = client.get("/v1/dashboard/stats", headers=seller_headers)
        assert response.json()["today_sales"] == 0.0

    def test_stats_are_tenant_scoped(self, client, other_admin_headers, paid_order):
        response = client.get("/v1/dashboard/stats", headers=other_admin_headers)

        data = response.json()
        assert data["inventory_items_count"] == 0
        assert data["today_sales"] == 0.0

    def test_sales_summary(self, client, seller_headers, paid_order, completed_session):
        response = client.get("/v1/dashboard/sales-summary", params={"days": 7}, headers=seller_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["days"] == 7
        assert len(data["items"]) == 7
        assert data["items"][-1]["date"] == datetime.utcnow().date().isoformat()

        totals = {day["date"]: day for day in data["items"]}
        assert totals[completed_session.ended_at.date().isoformat()]["table_amount"] == 12.0
        assert sum(day["pos_amount"] for day in data["items"]) == 10.0
        assert sum(day["total"] for day in data["items"]) == 22.0

    def test_sales_summary_rejects_zero_days(self, client, seller_headers):
        response = client.get("/v1/dashboard/sales-summary", params={"days": 0}, headers=seller_headers)
        assert response.status_code == 400


class TestFinancialReports:

    @pytest.fixture
    def costs(self, client, admin_headers, seed_table):
        when = (datetime.utcnow() - timedelta(hours=1)).isoformat()
        client.post(
            "/v1/maintenance/",
            json={"table_id": str(seed_table.id), "maintenance_at": when, "cost": 30, "description": "New cloth"},
            headers=admin_headers,
        )
        for category, amount in (("STAFF", 100), ("UTILITIES", 40), ("MAINTENANCE", 10), ("RENT", 500)):
            response = client.post(
                "/v1/expenses/",
                json={"category": category, "description": category.title(), "amount": amount, "expense_date": when},
                headers=admin_headers,
            )
            assert response.status_code == 201

    def test_preview_figures(self, client, admin_headers, paid_order, completed_session, costs):
        response = client.post("/v1/financial-reports/data", json=_window(), headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {
            "sales_income": 10.0,
            "table_rent_income": 12.0,
            "other_income": 0.0,
            "total_income": 22.0,
            "inventory_cost": 20.0,
            "maintenance_cost": 40.0,
            "staff_cost": 100.0,
            "utility_cost": 40.0,
            "other_expenses": 500.0,
            "total_expense": 700.0,
            "net_profit": -678.0,
        }

    def test_generate_persists_report(self, client, admin_headers, paid_order, completed_session, costs):
        response = client.post(
            "/v1/financial-reports/generate", json={**_window(), "report_type": "CUSTOM"}, headers=admin_headers
        )

        assert response.status_code == 201
        report = response.json()
        assert report["name"].startswith("Custom Report ")
        assert report["net_profit"] == -678.0

        listed = client.get("/v1/financial-reports/", headers=admin_headers).json()
        assert [item["id"] for item in listed] == [report["id"]]

        assert client.get(f"/v1/financial-reports/{report['id']}", headers=admin_headers).status_code == 200

    def test_delete_report(self, client, admin_headers):
        report = client.post("/v1/financial-reports/generate", json=_window(), headers=admin_headers).json()

        response = client.delete(f"/v1/financial-reports/{report['id']}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get(f"/v1/financial-reports/{report['id']}", headers=admin_headers).status_code == 404

    def test_inverted_range_rejected(self, client, admin_headers):
        window = _window()
        response = client.post(
            "/v1/financial-reports/data",
            json={"start_date": window["end_date"], "end_date": window["start_date"]},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json() == {"error": "End date must be after start date"}

    def test_seller_cannot_generate(self, client, seller_headers):
        response = client.post("/v1/financial-reports/generate", json=_window(), headers=seller_headers)
        assert response.status_code == 403

    def test_other_company_cannot_read_report(self, client, admin_headers, other_admin_headers):
        report = client.post("/v1/financial-reports/generate", json=_window(), headers=admin_headers).json()

        response = client.get(f"/v1/financial-reports/{report['id']}", headers=other_admin_headers)
        assert response.status_code == 403
