"""
Integration Tests — Order Endpoints

Tests:
- POST/GET/PUT/DELETE /api/v1/orders
- Status changes and stock restoration
- Order stats
"""
from fastapi.testclient import TestClient


def _sales_payload(inventory_id: int, quantity: int, **overrides) -> dict:
    payload = {
        "type": "sales",
        "customer": {"name": "Jane Buyer", "email": "jane@buyer.example", "company": "Buyer Co"},
        "items": [{"inventory_id": inventory_id, "quantity": quantity, "unit_price": "4.00"}],
        "shipping": {"address": {"city": "Austin", "country": "USA"}, "method": "express"},
        "priority": "high",
    }
    payload.update(overrides)
    return payload


def _create(client: TestClient, headers: dict, payload: dict) -> dict:
    resp = client.post("/api/v1/orders", headers=headers, json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestOrderLifecycle:

    def test_create_sales_order_deducts_stock(self, client: TestClient, admin_headers, inventory):
        order = _create(client, admin_headers, _sales_payload(inventory.id, 140))

        assert order["order_number"] == "SO-000001"
        assert order["status"] == "pending"
        assert order["priority"] == "high"
        assert order["customer"]["company"] == "Buyer Co"
        assert order["shipping"]["method"] == "express"
        assert order["shipping"]["address"]["city"] == "Austin"
        assert order["items"][0]["sku"] == "WGT-001"
        assert float(order["pricing"]["subtotal"]) == 560.0
        assert order["pricing"]["currency"] == "USD"
        assert order["history"][0]["action"] == "created"
        assert order["history"][0]["user_name"] == "Aarav Sharma"

        item = client.get(f"/api/v1/inventory/{inventory.id}", headers=admin_headers).json()
        assert item["quantity"] == 10
        assert item["status"] == "low_stock"

    def test_cancel_restores_stock(self, client: TestClient, admin_headers, inventory):
        order = _create(client, admin_headers, _sales_payload(inventory.id, 140))

        resp = client.put(
            f"/api/v1/orders/{order['id']}/status",
            headers=admin_headers,
            json={"status": "cancelled", "notes": "Customer withdrew"},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "cancelled"
        assert data["history"][-1]["description"] == (
            "Status changed from pending to cancelled. Note: Customer withdrew"
        )

        item = client.get(f"/api/v1/inventory/{inventory.id}", headers=admin_headers).json()
        assert item["quantity"] == 150
        assert item["status"] == "in_stock"

    def test_reopening_cancelled_order_takes_stock_again(self, client: TestClient, admin_headers, inventory):
        order = _create(client, admin_headers, _sales_payload(inventory.id, 100))
        url = f"/api/v1/orders/{order['id']}/status"

        for status, expected in (("cancelled", 150), ("pending", 50), ("cancelled", 150)):
            assert client.put(url, headers=admin_headers, json={"status": status}).status_code == 200
            item = client.get(f"/api/v1/inventory/{inventory.id}", headers=admin_headers).json()
            assert item["quantity"] == expected

    def test_insufficient_stock_returns_400(self, client: TestClient, admin_headers, inventory):
        resp = client.post("/api/v1/orders", headers=admin_headers, json=_sales_payload(inventory.id, 500))
        assert resp.status_code == 400
        error = resp.json()["error"]
        assert error["code"] == "INSUFFICIENT_STOCK"
        assert error["message"] == "Insufficient stock for Widget. Available: 150, Requested: 500"

        listing = client.get("/api/v1/orders", headers=admin_headers).json()
        assert listing["total"] == 0

    def test_purchase_order_totals(self, client: TestClient, manager_headers, supplier, inventory, gadget):
        order = _create(client, manager_headers, {
            "type": "purchase",
            "supplier_id": supplier.id,
            "items": [
                {"inventory_id": inventory.id, "quantity": 10, "unit_price": "5"},
                {"inventory_id": gadget.id, "quantity": 3, "unit_price": "20"},
            ],
            "pricing": {"tax": "5", "shipping": "2", "discount": "1"},
        })

        assert order["order_number"] == "PO-000001"
        assert order["supplier"]["code"] == "ACME"
        pricing = order["pricing"]
        assert float(pricing["subtotal"]) == 110.0
        assert float(pricing["total"]) == 116.0

    def test_unknown_inventory_returns_404(self, client: TestClient, admin_headers):
        resp = client.post("/api/v1/orders", headers=admin_headers, json=_sales_payload(424242, 1))
        assert resp.status_code == 404

    def test_empty_items_returns_400(self, client: TestClient, admin_headers):
        resp = client.post("/api/v1/orders", headers=admin_headers, json={"type": "sales", "items": []})
        assert resp.status_code == 400

    def test_update_order_fields(self, client: TestClient, admin_headers, inventory):
        order = _create(client, admin_headers, _sales_payload(inventory.id, 5))

        resp = client.put(f"/api/v1/orders/{order['id']}", headers=admin_headers, json={
            "notes": "Gift wrap",
            "shipping": {"carrier": "UPS", "tracking_number": "1Z999"},
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["notes"] == "Gift wrap"
        assert data["shipping"]["carrier"] == "UPS"
        assert data["shipping"]["method"] == "express"
        assert [h["action"] for h in data["history"]] == ["created", "updated"]

    def test_clearing_order_date_returns_400(self, client: TestClient, admin_headers, inventory):
        order = _create(client, admin_headers, _sales_payload(inventory.id, 5))

        resp = client.put(f"/api/v1/orders/{order['id']}", headers=admin_headers, json={"dates": {"order_date": None}})
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_delivered_order_is_locked(self, client: TestClient, admin_headers, inventory):
        order = _create(client, admin_headers, _sales_payload(inventory.id, 5))
        resp = client.put(f"/api/v1/orders/{order['id']}/status", headers=admin_headers, json={"status": "delivered"})
        assert resp.json()["dates"]["completed_date"] is not None

        resp = client.put(f"/api/v1/orders/{order['id']}", headers=admin_headers, json={"notes": "late"})
        assert resp.status_code == 409

        resp = client.delete(f"/api/v1/orders/{order['id']}", headers=admin_headers)
        assert resp.status_code == 409
        assert resp.json()["error"]["message"] == "Cannot delete delivered orders"

    def test_delete_pending_order_restores_stock(self, client: TestClient, admin_headers, inventory):
        order = _create(client, admin_headers, _sales_payload(inventory.id, 60))

        resp = client.delete(f"/api/v1/orders/{order['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["message"] == "Order deleted successfully"

        item = client.get(f"/api/v1/inventory/{inventory.id}", headers=admin_headers).json()
        assert item["quantity"] == 150
        assert client.get(f"/api/v1/orders/{order['id']}", headers=admin_headers).status_code == 404

    def test_invalid_status_returns_400(self, client: TestClient, admin_headers, inventory):
        order = _create(client, admin_headers, _sales_payload(inventory.id, 1))
        resp = client.put(f"/api/v1/orders/{order['id']}/status", headers=admin_headers, json={"status": "lost"})
        assert resp.status_code == 400


class TestOrderQueries:

    def test_list_orders_with_filters(self, client: TestClient, admin_headers, supplier, inventory):
        _create(client, admin_headers, _sales_payload(inventory.id, 1))
        _create(client, admin_headers, {
            "type": "purchase",
            "supplier_id": supplier.id,
            "items": [{"inventory_id": inventory.id, "quantity": 5, "unit_price": "2"}],
        })

        resp = client.get("/api/v1/orders?type=purchase", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 1
        assert data["items"][0]["order_number"] == "PO-000002"

        resp = client.get("/api/v1/orders?search=buyer", headers=admin_headers)
        assert [o["order_number"] for o in resp.json()["items"]] == ["SO-000001"]

    def test_order_stats(self, client: TestClient, admin_headers, inventory):
        _create(client, admin_headers, _sales_payload(inventory.id, 10))
        order = _create(client, admin_headers, _sales_payload(inventory.id, 5))
        client.put(f"/api/v1/orders/{order['id']}/status", headers=admin_headers, json={"status": "cancelled"})

        resp = client.get("/api/v1/orders/stats", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["overview"]["total_orders"] == 2
        assert data["overview"]["pending_orders"] == 1
        assert data["overview"]["cancelled_orders"] == 1
        assert float(data["overview"]["total_revenue"]) == 60.0
        assert {g["key"] for g in data["by_status"]} == {"pending", "cancelled"}
        assert len(data["recent_trends"]) == 1


class TestOrderAccess:

    def test_viewer_cannot_create_orders(self, client: TestClient, viewer_headers, inventory):
        resp = client.post("/api/v1/orders", headers=viewer_headers, json=_sales_payload(inventory.id, 1))
        assert resp.status_code == 403

    def test_manager_cannot_delete_orders(self, client: TestClient, admin_headers, manager_headers, inventory):
        order = _create(client, admin_headers, _sales_payload(inventory.id, 1))
        resp = client.delete(f"/api/v1/orders/{order['id']}", headers=manager_headers)
        assert resp.status_code == 403
