"""
Integration Tests — Supplier Endpoints

Tests:
- GET/POST/PUT/DELETE /api/v1/suppliers
- Performance updates, linked products and stats
"""
from fastapi.testclient import TestClient


def _supplier_payload(**overrides) -> dict:
    payload = {
        "code": "glob-01",
        "name": "Global Packaging",
        "contact_person": {
            "name": "Mina Park",
            "email": "Mina@GlobalPack.example",
            "phone": "+82 2 555 0199",
            "position": "Account Manager",
        },
        "address": {
            "street": "12 Harbor Way",
            "city": "Busan",
            "state": "Busan",
            "country": "South Korea",
            "postal_code": "48058",
        },
        "categories": ["packaging", "supplies"],
        "payment_terms": "net_60",
        "rating": "4",
    }
    payload.update(overrides)
    return payload


class TestSupplierCRUD:

    def test_create_supplier(self, client: TestClient, manager_headers):
        resp = client.post("/api/v1/suppliers", headers=manager_headers, json=_supplier_payload())
        assert resp.status_code == 201
        data = resp.json()
        assert data["code"] == "GLOB-01"
        assert data["status"] == "active"
        assert data["contact_person"]["email"] == "mina@globalpack.example"
        assert data["address"]["city"] == "Busan"
        assert float(data["performance_metrics"]["on_time_delivery_rate"]) == 100.0

    def test_duplicate_code_returns_409(self, client: TestClient, admin_headers, supplier):
        resp = client.post("/api/v1/suppliers", headers=admin_headers, json=_supplier_payload(code="acme"))
        assert resp.status_code == 409

    def test_invalid_category_returns_400(self, client: TestClient, admin_headers):
        resp = client.post(
            "/api/v1/suppliers", headers=admin_headers, json=_supplier_payload(categories=["widgets"])
        )
        assert resp.status_code == 400

    def test_rating_out_of_range_returns_400(self, client: TestClient, admin_headers):
        resp = client.post("/api/v1/suppliers", headers=admin_headers, json=_supplier_payload(rating="6"))
        assert resp.status_code == 400

    def test_list_and_filter_suppliers(self, client: TestClient, admin_headers, supplier):
        client.post("/api/v1/suppliers", headers=admin_headers, json=_supplier_payload(status="inactive"))

        resp = client.get("/api/v1/suppliers", headers=admin_headers)
        assert resp.json()["total"] == 2

        resp = client.get("/api/v1/suppliers?status=active", headers=admin_headers)
        assert [s["code"] for s in resp.json()["items"]] == ["ACME"]

        resp = client.get("/api/v1/suppliers?category=packaging", headers=admin_headers)
        assert [s["code"] for s in resp.json()["items"]] == ["GLOB-01"]

    def test_update_supplier_nested_block(self, client: TestClient, admin_headers, supplier):
        resp = client.put(f"/api/v1/suppliers/{supplier.id}", headers=admin_headers, json={
            "address": {
                "street": "9 Mesa Blvd",
                "city": "Tucson",
                "state": "AZ",
                "country": "USA",
                "postal_code": "85701",
            },
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["address"]["city"] == "Tucson"
        assert data["contact_person"]["name"] == "Road Runner"

    def test_update_performance(self, client: TestClient, manager_headers, supplier):
        resp = client.put(f"/api/v1/suppliers/{supplier.id}/performance", headers=manager_headers, json={
            "on_time_delivery_rate": "92.5",
            "rating": "3.5",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert float(data["performance_metrics"]["on_time_delivery_rate"]) == 92.5
        assert float(data["rating"]) == 3.5

    def test_get_missing_supplier_returns_404(self, client: TestClient, admin_headers):
        assert client.get("/api/v1/suppliers/4040", headers=admin_headers).status_code == 404


class TestSupplierLinks:

    def test_products_lists_linked_inventory(self, client: TestClient, admin_headers, supplier, inventory, gadget):
        resp = client.get(f"/api/v1/suppliers/{supplier.id}/products", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["supplier"]["code"] == "ACME"
        assert data["count"] == 1
        assert data["products"][0]["sku"] == "WGT-001"

    def test_delete_blocked_by_linked_inventory(self, client: TestClient, admin_headers, supplier, inventory):
        resp = client.delete(f"/api/v1/suppliers/{supplier.id}", headers=admin_headers)
        assert resp.status_code == 409
        assert resp.json()["error"]["message"] == (
            "Cannot delete supplier. 1 inventory items are linked to this supplier."
        )

    def test_delete_unlinked_supplier(self, client: TestClient, admin_headers):
        created = client.post("/api/v1/suppliers", headers=admin_headers, json=_supplier_payload()).json()

        resp = client.delete(f"/api/v1/suppliers/{created['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["message"] == "Supplier deleted successfully"

    def test_delete_blocked_by_orders(self, client: TestClient, admin_headers, inventory):
        created = client.post("/api/v1/suppliers", headers=admin_headers, json=_supplier_payload()).json()
        resp = client.post("/api/v1/orders", headers=admin_headers, json={
            "type": "purchase",
            "supplier_id": created["id"],
            "items": [{"inventory_id": inventory.id, "quantity": 10, "unit_price": "2.50"}],
        })
        assert resp.status_code == 201

        resp = client.delete(f"/api/v1/suppliers/{created['id']}", headers=admin_headers)
        assert resp.status_code == 409
        assert resp.json()["error"]["message"] == "Cannot delete supplier. 1 orders reference this supplier."

    def test_manager_cannot_delete(self, client: TestClient, manager_headers, supplier):
        assert client.delete(f"/api/v1/suppliers/{supplier.id}", headers=manager_headers).status_code == 403


class TestSupplierStats:

    def test_stats(self, client: TestClient, admin_headers, supplier):
        client.post("/api/v1/suppliers", headers=admin_headers, json=_supplier_payload())

        resp = client.get("/api/v1/suppliers/stats", headers=admin_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["overview"]["total_suppliers"] == 2
        assert data["overview"]["active_suppliers"] == 2
        assert {c["category"] for c in data["by_category"]} == {"components", "packaging", "supplies"}
        assert [s["code"] for s in data["top_suppliers"]] == ["ACME", "GLOB-01"]
