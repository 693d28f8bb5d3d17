"""Tests for properties module."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.db.models import Field, Property


class TestPropertyService:
    """Tests for PropertyService."""

    def test_create_property(self, db: Session):
        """Test creating a leased property."""
        from app.properties.schemas import PropertyCreate
        from app.properties.service import PropertyService

        prop = PropertyService(db).create_property(
            PropertyCreate(
                name="River Block",
                is_leased=True,
                lease_start_date="2024-01-01",
                lease_end_date="2026-12-31",
                lessor_name="J. Smith",
            )
        )

        assert prop.id is not None
        assert prop.is_leased is True
        assert prop.lessor_name == "J. Smith"

    def test_lease_dates_ordered(self):
        """Test a lease cannot end before it starts."""
        from pydantic import ValidationError

        from app.properties.schemas import PropertyCreate

        with pytest.raises(ValidationError):
            PropertyCreate(name="Bad", lease_start_date="2024-05-01", lease_end_date="2024-01-01")

    def test_duplicate_name(self, db: Session, test_property: Property):
        """Test property names are unique."""
        from app.properties.schemas import PropertyCreate
        from app.properties.service import PropertyService

        with pytest.raises(ValueError, match="already exists"):
            PropertyService(db).create_property(PropertyCreate(name="Home Farm"))

    def test_get_by_name(self, db: Session, test_property: Property):
        """Test natural-key lookup."""
        from app.properties.service import PropertyService

        assert PropertyService(db).get_property_by_name("Home Farm").id == test_property.id
        assert PropertyService(db).get_property_by_name("Nowhere") is None

    def test_delete_leaves_fields(self, db: Session, test_field: Field, test_property: Property):
        """Test deleting a property keeps its fields pointing at the old id."""
        from app.properties.service import PropertyService

        assert PropertyService(db).delete_property(test_property.id) is True
        db.refresh(test_field)
        assert test_field.property_id == test_property.id


class TestPropertyRouter:
    """Tests for property API endpoints."""

    def test_crud(self, authenticated_client: TestClient):
        """Test create, list, update and delete."""
        response = authenticated_client.post("/api/properties", json={"name": "Hill Farm"})
        assert response.status_code == 201
        property_id = response.json()["id"]

        assert [p["name"] for p in authenticated_client.get("/api/properties").json()] == [
            "Hill Farm"
        ]

        response = authenticated_client.patch(
            f"/api/properties/{property_id}", json={"size_acres": 55.5}
        )
        assert response.json()["size_acres"] == 55.5
        assert response.json()["name"] == "Hill Farm"

        assert authenticated_client.delete(f"/api/properties/{property_id}").status_code == 204
        assert authenticated_client.get(f"/api/properties/{property_id}").status_code == 404

    def test_rename_to_existing(self, authenticated_client: TestClient, test_property: Property):
        """Test renaming onto a taken name returns 400."""
        other = authenticated_client.post("/api/properties", json={"name": "Hill Farm"}).json()

        response = authenticated_client.patch(
            f"/api/properties/{other['id']}", json={"name": "Home Farm"}
        )
        assert response.status_code == 400

    def test_update_missing(self, authenticated_client: TestClient):
        """Test updating a missing property returns 404."""
        response = authenticated_client.patch("/api/properties/missing", json={"name": "X"})
        assert response.status_code == 404

    def test_name_cannot_be_cleared(
        self, authenticated_client: TestClient, test_property: Property
    ):
        """Test an explicit null name is rejected rather than stored."""
        response = authenticated_client.patch(
            f"/api/properties/{test_property.id}", json={"name": None}
        )
        assert response.status_code == 400
        assert "cannot be cleared" in response.json()["detail"]

    def test_update_lease_end_before_start(
        self, authenticated_client: TestClient, db: Session
    ):
        """Test a lease end date moved before the stored start date is rejected."""
        created = authenticated_client.post(
            "/api/properties",
            json={"name": "Rented Block", "is_leased": True, "lease_start_date": "2024-01-01"},
        ).json()

        response = authenticated_client.patch(
            f"/api/properties/{created['id']}", json={"lease_end_date": "2023-06-30"}
        )

        assert response.status_code == 400
        assert db.query(Property).one().lease_end_date is None
