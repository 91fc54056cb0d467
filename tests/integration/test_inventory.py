"""
Integration Tests — Inventory Endpoints

Tests:
- GET/POST/PUT/DELETE /api/v1/inventory
- Quantity adjustment
- Low stock alerts and stats
- Role guards
"""
from fastapi.testclient import TestClient


def _item_payload(**overrides) -> dict:
    payload = {
        "sku": "bolt-m8",
        "name": "M8 Bolt",
        "category": "components",
        "quantity": 40,
        "reorder_point": 50,
        "unit_cost": "0.25",
        "warehouse": {"location": "Plant 2", "zone": "B", "bin": "B-14"},
    }
    payload.update(overrides)
    return payload


class TestInventoryCRUD:

    def test_list_inventory(self, client: TestClient, admin_headers, inventory, gadget):
        resp = client.get("/api/v1/inventory", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 2
        assert data["total_pages"] == 1
        assert {item["sku"] for item in data["items"]} == {"WGT-001", "GDG-001"}

    def test_list_inventory_filters(self, client: TestClient, admin_headers, inventory, gadget):
        resp = client.get("/api/v1/inventory?category=finished_goods", headers=admin_headers)
        assert [item["sku"] for item in resp.json()["items"]] == ["GDG-001"]

        resp = client.get("/api/v1/inventory?search=widg", headers=admin_headers)
        assert [item["sku"] for item in resp.json()["items"]] == ["WGT-001"]

    def test_list_inventory_pagination(self, client: TestClient, admin_headers, inventory, gadget):
        resp = client.get("/api/v1/inventory?page=2&page_size=1&sort_by=sku&sort_order=asc", headers=admin_headers)
        data = resp.json()
        assert data["total_pages"] == 2
        assert [item["sku"] for item in data["items"]] == ["WGT-001"]

    def test_get_inventory_by_id(self, client: TestClient, admin_headers, inventory):
        resp = client.get(f"/api/v1/inventory/{inventory.id}", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["id"] == inventory.id
        assert data["status"] == "in_stock"
        assert float(data["total_value"]) == 375.0
        assert data["supplier"]["code"] == "ACME"
        assert data["warehouse"]["location"] == "Main Warehouse"

    def test_get_nonexistent_inventory_returns_404(self, client: TestClient, admin_headers):
        resp = client.get("/api/v1/inventory/99999", headers=admin_headers)
        assert resp.status_code == 404
        body = resp.json()
        assert body["success"] is False
        assert body["error"]["code"] == "NOT_FOUND"

    def test_create_inventory(self, client: TestClient, manager_headers):
        resp = client.post("/api/v1/inventory", headers=manager_headers, json=_item_payload())
        assert resp.status_code == 201
        data = resp.json()
        assert data["sku"] == "BOLT-M8"
        assert data["status"] == "low_stock"
        assert float(data["total_value"]) == 10.0
        assert data["warehouse"] == {"location": "Plant 2", "zone": "B", "bin": "B-14"}

    def test_create_duplicate_sku_returns_409(self, client: TestClient, admin_headers, inventory):
        resp = client.post("/api/v1/inventory", headers=admin_headers, json=_item_payload(sku="wgt-001"))
        assert resp.status_code == 409
        assert resp.json()["error"]["code"] == "DUPLICATE"

    def test_create_invalid_category_returns_400(self, client: TestClient, admin_headers):
        resp = client.post("/api/v1/inventory", headers=admin_headers, json=_item_payload(category="gizmos"))
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_update_inventory(self, client: TestClient, admin_headers, inventory):
        resp = client.put(f"/api/v1/inventory/{inventory.id}", headers=admin_headers, json={
            "quantity": 0,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["quantity"] == 0
        assert data["status"] == "out_of_stock"
        assert float(data["total_value"]) == 0.0

    def test_delete_inventory_admin_only(self, client: TestClient, admin_headers, manager_headers, gadget):
        resp = client.delete(f"/api/v1/inventory/{gadget.id}", headers=manager_headers)
        assert resp.status_code == 403

        resp = client.delete(f"/api/v1/inventory/{gadget.id}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "message": "Inventory item deleted successfully"}

        resp = client.get(f"/api/v1/inventory/{gadget.id}", headers=admin_headers)
        assert resp.status_code == 404


class TestInventoryAdjustment:

    def test_adjust_inventory_quantity(self, client: TestClient, manager_headers, inventory):
        resp = client.put(
            f"/api/v1/inventory/{inventory.id}/adjust",
            headers=manager_headers,
            json={"adjustment": -100, "reason": "Damaged in transit"},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["quantity"] == 50
        assert data["status"] == "low_stock"
        assert "Adjustment: -100 units. Reason: Damaged in transit. By: Neha Verma" in data["notes"]

    def test_adjust_below_zero_returns_400(self, client: TestClient, admin_headers, inventory):
        resp = client.put(
            f"/api/v1/inventory/{inventory.id}/adjust",
            headers=admin_headers,
            json={"adjustment": -500, "reason": "Shrinkage"},
        )
        assert resp.status_code == 400
        error = resp.json()["error"]
        assert error["message"] == "Insufficient inventory"
        assert error["details"] == {"available": 150, "adjustment": -500}

    def test_zero_adjustment_is_rejected(self, client: TestClient, admin_headers, inventory):
        resp = client.put(
            f"/api/v1/inventory/{inventory.id}/adjust",
            headers=admin_headers,
            json={"adjustment": 0, "reason": "noop"},
        )
        assert resp.status_code == 400


class TestInventoryInsights:

    def test_low_stock_alerts(self, client: TestClient, admin_headers, inventory, gadget):
        client.put(f"/api/v1/inventory/{gadget.id}", headers=admin_headers, json={"quantity": 3})

        resp = client.get("/api/v1/inventory/low-stock/alerts", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["count"] == 1
        assert data["items"][0]["sku"] == "GDG-001"

    def test_inventory_stats(self, client: TestClient, admin_headers, inventory, gadget):
        resp = client.get("/api/v1/inventory/stats", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["overview"]["total_items"] == 2
        assert data["overview"]["total_quantity"] == 170
        assert float(data["overview"]["total_value"]) == 775.0
        assert {row["category"] for row in data["by_category"]} == {"components", "finished_goods"}


class TestInventoryAccess:

    def test_list_inventory_unauthenticated_returns_401(self, client: TestClient):
        resp = client.get("/api/v1/inventory")
        assert resp.status_code == 401
        assert resp.json()["error"]["message"] == "Not authorized to access this route"

    def test_viewer_can_read_but_not_write(self, client: TestClient, viewer_headers, inventory):
        assert client.get("/api/v1/inventory", headers=viewer_headers).status_code == 200

        resp = client.post("/api/v1/inventory", headers=viewer_headers, json=_item_payload())
        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "FORBIDDEN"
