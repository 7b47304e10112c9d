"""Tests for property and tenant endpoints."""

from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy import insert

from propdash.models.property import Property
from propdash.services.property import get_active_properties, get_linkable_properties


class TestPropertyEndpoints:
    """Tests for property API endpoints."""

    def test_create_property(self, client: TestClient) -> None:
        """Test creating a new property."""
        response = client.post(
            "/api/properties/",
            json={
                "display_name": "Test Property",
                "address": "123 Test St",
                "energy_unit_name": "Unit 101",
                "status": "rented",
                "purchase_price": "250000",
                "monthly_rent": "1800",
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["display_name"] == "Test Property"
        assert data["address"] == "123 Test St"
        assert data["energy_unit_name"] == "Unit 101"
        assert data["status"] == "rented"
        assert Decimal(data["purchase_price"]) == Decimal("250000")
        assert data["tenant"] is None
        assert data["is_active"] is True
        assert "id" in data
        assert "created_at" in data

    def test_create_property_minimal(self, client: TestClient) -> None:
        """Test creating a property with minimal data."""
        response = client.post("/api/properties/", json={"display_name": "Minimal Property"})
        assert response.status_code == 201
        data = response.json()
        assert data["address"] is None
        assert data["status"] == "vacant"

    def test_create_property_with_tenant(self, client: TestClient) -> None:
        tenant = client.post(
            "/api/tenants/", json={"name": "Dora Alves", "email": "dora@example.com"}
        ).json()

        response = client.post(
            "/api/properties/",
            json={"display_name": "Rented Flat", "status": "rented", "tenant_id": tenant["id"]},
        )

        assert response.status_code == 201
        assert response.json()["tenant"]["name"] == "Dora Alves"

    def test_create_property_unknown_tenant(self, client: TestClient) -> None:
        response = client.post(
            "/api/properties/", json={"display_name": "Orphan", "tenant_id": 99999}
        )
        assert response.status_code == 404

    def test_invalid_status(self, client: TestClient) -> None:
        response = client.post(
            "/api/properties/", json={"display_name": "Odd", "status": "sold"}
        )
        assert response.status_code == 422

    def test_get_property(self, client: TestClient) -> None:
        """Test getting a property by ID."""
        create_response = client.post("/api/properties/", json={"display_name": "Get Test"})
        property_id = create_response.json()["id"]

        response = client.get(f"/api/properties/{property_id}")
        assert response.status_code == 200
        assert response.json()["display_name"] == "Get Test"

    def test_get_property_not_found(self, client: TestClient) -> None:
        """Test getting a non-existent property."""
        response = client.get("/api/properties/99999")
        assert response.status_code == 404

    def test_list_properties(self, client: TestClient) -> None:
        """Test listing properties."""
        client.post("/api/properties/", json={"display_name": "List Test 1"})
        client.post("/api/properties/", json={"display_name": "List Test 2"})

        response = client.get("/api/properties/")
        assert response.status_code == 200
        names = [p["display_name"] for p in response.json()]
        assert names == ["List Test 1", "List Test 2"]

    def test_update_property(self, client: TestClient) -> None:
        """Test updating a property."""
        property_id = client.post(
            "/api/properties/", json={"display_name": "Original Name"}
        ).json()["id"]

        response = client.patch(
            f"/api/properties/{property_id}",
            json={"display_name": "Updated Name", "status": "maintenance"},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["display_name"] == "Updated Name"
        assert data["status"] == "maintenance"

    def test_update_property_requires_a_field(self, client: TestClient) -> None:
        property_id = client.post("/api/properties/", json={"display_name": "Same"}).json()["id"]
        response = client.patch(f"/api/properties/{property_id}", json={})
        assert response.status_code == 422

    def test_delete_property_deactivates(self, client: TestClient) -> None:
        property_id = client.post("/api/properties/", json={"display_name": "Gone"}).json()["id"]

        response = client.delete(f"/api/properties/{property_id}")

        assert response.status_code == 204
        assert client.get(f"/api/properties/{property_id}").json()["is_active"] is False
        active = client.get("/api/properties/", params={"active_only": True}).json()
        assert active == []


class TestTenantEndpoints:
    """Tests for tenant API endpoints."""

    def test_create_and_list_tenants(self, client: TestClient) -> None:
        response = client.post("/api/tenants/", json={"name": "Eva", "phone": "555-0101"})
        assert response.status_code == 201
        assert response.json()["phone"] == "555-0101"

        tenants = client.get("/api/tenants/").json()
        assert [t["name"] for t in tenants] == ["Eva"]


class TestPropertyQueries:
    """Tests for the unpaginated property queries."""

    def test_linkable_properties(self, db) -> None:
        db.add_all(
            [
                Property(display_name="Linked", energy_unit_name="Unit 101"),
                Property(display_name="No unit"),
                Property(display_name="Retired", energy_unit_name="Unit 102", is_active=False),
            ]
        )
        db.commit()

        assert [p.display_name for p in get_linkable_properties(db)] == ["Linked"]

    def test_active_properties_are_not_capped(self, db) -> None:
        db.execute(insert(Property), [{"display_name": f"Flat {i}"} for i in range(150)])
        db.add(Property(display_name="Retired", is_active=False))
        db.commit()

        assert len(get_active_properties(db)) == 150
