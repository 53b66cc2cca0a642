"""
Tests for POS orders: stock draw/return and session checkout.
"""

import uuid
import pytest
from datetime import datetime, timedelta

from cuehall.models import (
    MovementType,
    PosOrder,
    SessionStatus,
    SessionTrackedItem,
    StockMovement,
    TableSession,
    TableStatus,
)


def _order(client, headers, **payload):
    return client.post("/v1/pos/orders", json=payload, headers=headers)


def _line(item, quantity, unit_price=None):
    line = {"item_id": str(item.id), "quantity": quantity}
    if unit_price is not None:
        line["unit_price"] = unit_price
    return line


class TestCreateOrder:

    def test_lines_draw_stock_through_ledger(self, client, seller_headers, db_session, stocked_item):
        response = _order(client, seller_headers, items=[_line(stocked_item, 3)])

        assert response.status_code == 201
        order = response.json()
        assert order["amount"] == 7.5
        assert order["payment_status"] == "UNPAID"
        assert len(order["order_items"]) == 1

        db_session.refresh(stocked_item)
        assert stocked_item.quantity == 17

        sale = db_session.query(StockMovement).filter(StockMovement.reference == order["id"]).one()
        assert sale.type == MovementType.SALE
        assert sale.quantity == -3

    def test_explicit_unit_price_and_discount(self, client, seller_headers, stocked_item):
        response = _order(client, seller_headers, items=[_line(stocked_item, 2, 3.0)], discount=1.5)

        assert response.status_code == 201
        assert response.json()["amount"] == 4.5

    def test_discount_floored_at_zero(self, client, seller_headers, stocked_item):
        response = _order(client, seller_headers, items=[_line(stocked_item, 1)], discount=100)

        assert response.status_code == 201
        assert response.json()["amount"] == 0.0

    def test_insufficient_stock_writes_nothing(self, client, seller_headers, db_session, stocked_item):
        response = _order(client, seller_headers, items=[_line(stocked_item, 15), _line(stocked_item, 10)])

        assert response.status_code == 400
        assert "Only 5 units available" in response.json()["error"]
        assert db_session.query(PosOrder).count() == 0

        db_session.refresh(stocked_item)
        assert stocked_item.quantity == 20

    def test_empty_order_rejected(self, client, seller_headers, seed_company):
        response = _order(client, seller_headers, items=[])

        assert response.status_code == 400
        assert response.json()["error"] == "Order must contain at least one item or a table session"

    def test_item_from_other_company_rejected(self, client, other_admin_headers, stocked_item):
        response = _order(client, other_admin_headers, items=[_line(stocked_item, 1)])
        assert response.status_code == 404

    def test_zero_quantity_is_validation_error(self, client, seller_headers, stocked_item):
        response = _order(client, seller_headers, items=[_line(stocked_item, 0)])

        assert response.status_code == 400
        assert "details" in response.json()


class TestSessionCheckout:

    @pytest.fixture
    def running_session(self, client, seller_headers, db_session, seed_table):
        started = client.post("/v1/sessions/", json={"table_id": str(seed_table.id)}, headers=seller_headers).json()
        session = db_session.get(TableSession, uuid.UUID(started["id"]))
        session.started_at = datetime.utcnow() - timedelta(hours=1)
        db_session.commit()
        return session

    def test_checkout_ends_session_and_bills_it(self, client, seller_headers, db_session, seed_table,
                                                running_session, stocked_item):
        response = _order(
            client, seller_headers,
            table_session_id=str(running_session.id),
            items=[_line(stocked_item, 2)],
            payment_status="PAID",
        )

        assert response.status_code == 201
        db_session.refresh(running_session)
        db_session.refresh(seed_table)

        assert running_session.status == SessionStatus.COMPLETED
        assert running_session.total_cost == pytest.approx(12.0, abs=0.05)
        assert seed_table.status == TableStatus.AVAILABLE
        assert response.json()["amount"] == pytest.approx(5.0 + running_session.total_cost, abs=0.001)

    def test_checkout_consumes_tracked_items(self, client, seller_headers, db_session,
                                             running_session, stocked_item):
        client.post(
            f"/v1/sessions/{running_session.id}/items",
            json={"items": [_line(stocked_item, 3)]},
            headers=seller_headers,
        )

        response = _order(
            client, seller_headers,
            table_session_id=str(running_session.id),
            items=[_line(stocked_item, 2)],
        )

        assert response.status_code == 201
        remaining = db_session.query(SessionTrackedItem).filter(
            SessionTrackedItem.table_session_id == running_session.id
        ).all()
        assert len(remaining) == 1
        assert remaining[0].quantity == 1

    def test_checkout_removes_fully_consumed_tab_entries(self, client, seller_headers, db_session,
                                                          running_session, stocked_item):
        client.post(
            f"/v1/sessions/{running_session.id}/items",
            json={"items": [_line(stocked_item, 2)]},
            headers=seller_headers,
        )

        _order(client, seller_headers, table_session_id=str(running_session.id), items=[_line(stocked_item, 2)])

        assert db_session.query(SessionTrackedItem).count() == 0

    def test_session_only_order(self, client, seller_headers, db_session, running_session):
        response = _order(client, seller_headers, table_session_id=str(running_session.id))

        assert response.status_code == 201
        assert response.json()["order_items"] == []
        assert response.json()["amount"] == pytest.approx(12.0, abs=0.05)


class TestModifyOrder:

    @pytest.fixture
    def open_order(self, client, seller_headers, stocked_item):
        return _order(client, seller_headers, items=[_line(stocked_item, 4)]).json()

    def test_delete_unpaid_returns_stock(self, client, seller_headers, db_session, stocked_item, open_order):
        response = client.delete(f"/v1/pos/orders/{open_order['id']}", headers=seller_headers)

        assert response.status_code == 200
        assert db_session.query(PosOrder).count() == 0

        db_session.refresh(stocked_item)
        assert stocked_item.quantity == 20

        returned = db_session.query(StockMovement).filter(
            StockMovement.reference == open_order["id"],
            StockMovement.type == MovementType.RETURN
        ).one()
        assert returned.quantity == 4

    def test_paid_order_cannot_be_deleted(self, client, seller_headers, open_order):
        client.patch(f"/v1/pos/orders/{open_order['id']}", json={"payment_status": "PAID"}, headers=seller_headers)

        response = client.delete(f"/v1/pos/orders/{open_order['id']}", headers=seller_headers)
        assert response.status_code == 400

    def test_update_requires_a_field(self, client, seller_headers, open_order):
        response = client.patch(f"/v1/pos/orders/{open_order['id']}", json={}, headers=seller_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "No valid fields to update"

    def test_update_payment_method(self, client, seller_headers, open_order):
        response = client.patch(
            f"/v1/pos/orders/{open_order['id']}", json={"payment_method": "QR"}, headers=seller_headers
        )
        assert response.status_code == 200
        assert response.json()["payment_method"] == "QR"

    def test_line_quantity_change_moves_stock(self, client, seller_headers, db_session, stocked_item, open_order):
        line_id = open_order["order_items"][0]["id"]

        response = client.patch(
            f"/v1/pos/orders/{open_order['id']}/items/{line_id}", json={"quantity": 6}, headers=seller_headers
        )
        assert response.status_code == 200
        assert response.json()["amount"] == 15.0
        db_session.refresh(stocked_item)
        assert stocked_item.quantity == 14

        response = client.patch(
            f"/v1/pos/orders/{open_order['id']}/items/{line_id}", json={"quantity": 1}, headers=seller_headers
        )
        assert response.json()["amount"] == 2.5
        db_session.refresh(stocked_item)
        assert stocked_item.quantity == 19

    def test_add_and_remove_line(self, client, seller_headers, db_session, stocked_item, open_order):
        added = client.post(
            f"/v1/pos/orders/{open_order['id']}/items", json=_line(stocked_item, 2), headers=seller_headers
        )
        assert added.status_code == 201
        assert added.json()["amount"] == 15.0

        new_line = next(line for line in added.json()["order_items"] if line["quantity"] == 2)
        removed = client.delete(f"/v1/pos/orders/{open_order['id']}/items/{new_line['id']}", headers=seller_headers)

        assert removed.status_code == 200
        assert removed.json()["amount"] == 10.0
        db_session.refresh(stocked_item)
        assert stocked_item.quantity == 16

    def test_paid_order_lines_are_frozen(self, client, seller_headers, stocked_item, open_order):
        client.patch(f"/v1/pos/orders/{open_order['id']}", json={"payment_status": "PAID"}, headers=seller_headers)

        response = client.post(
            f"/v1/pos/orders/{open_order['id']}/items", json=_line(stocked_item, 1), headers=seller_headers
        )
        assert response.status_code == 400


class TestListOrders:

    def test_pagination(self, client, seller_headers, stocked_item):
        for _ in range(3):
            _order(client, seller_headers, items=[_line(stocked_item, 1)])

        response = client.get("/v1/pos/orders", params={"page": 2, "limit": 2}, headers=seller_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["pages"] == 2
        assert len(data["orders"]) == 1

    def test_filter_by_payment_status(self, client, seller_headers, stocked_item):
        _order(client, seller_headers, items=[_line(stocked_item, 1)], payment_status="PAID")
        _order(client, seller_headers, items=[_line(stocked_item, 1)])

        response = client.get("/v1/pos/orders", params={"payment_status": "PAID"}, headers=seller_headers)
        assert response.json()["total"] == 1

    def test_other_tenant_sees_nothing(self, client, seller_headers, other_admin_headers, stocked_item):
        _order(client, seller_headers, items=[_line(stocked_item, 1)])

        response = client.get("/v1/pos/orders", headers=other_admin_headers)
        assert response.json()["total"] == 0
