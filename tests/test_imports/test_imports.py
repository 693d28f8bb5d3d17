"""Tests for the CSV/Excel import module."""

import io

import pandas as pd
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from app.db.models import (
    Animal,
    AnimalSex,
    AnimalType,
    CalvingRecord,
    Field,
    Property,
    Vaccination,
)
from app.imports.parsers import (
    build_column_mapping,
    generate_csv_template,
    normalize_column_name,
    parse_csv_raw,
    parse_excel_raw,
    parse_file,
)


def _csv(text: str) -> io.BytesIO:
    return io.BytesIO(text.encode("utf-8"))


class TestColumnMapping:
    """Tests for header normalization."""

    def test_tag_number_aliases(self):
        """Test common spellings of the tag number column."""
        for col in ("tag", "Tag Number", "TAG_NUMBER", " ear tag "):
            assert normalize_column_name(col, "animals") == "tag_number"

    def test_aliases_are_per_resource(self):
        """Test the same header can mean different fields per resource."""
        assert normalize_column_name("type", "animals") == "type"
        assert normalize_column_name("type", "events") == "event_type"
        assert normalize_column_name("sex", "calving-records") == "calf_sex"

    def test_unknown_column(self):
        """Test unrecognized headers are reported as unmapped."""
        mapping, unmapped = build_column_mapping(["Tag", "Colour"], "animals")

        assert mapping == {"Tag": "tag_number"}
        assert unmapped == ["Colour"]

    def test_first_duplicate_wins(self):
        """Test two headers for the same field do not overwrite each other."""
        mapping, unmapped = build_column_mapping(["tag", "tag number"], "animals")

        assert mapping == {"tag": "tag_number"}
        assert unmapped == ["tag number"]


class TestParsers:
    """Tests for CSV and Excel parsing."""

    def test_parse_csv_with_bom(self):
        """Test a UTF-8 BOM does not leak into the first header."""
        columns, rows = parse_csv_raw(io.BytesIO("\ufefftag,sex\n101,F\n".encode("utf-8")))

        assert columns == ["tag", "sex"]
        assert rows == [{"tag": "101", "sex": "F"}]

    def test_blank_lines_skipped(self):
        """Test rows with only empty cells are dropped."""
        _, rows = parse_csv_raw(_csv("tag,sex\n101,F\n,\n102,M\n"))
        assert len(rows) == 2

    def test_blank_cells_become_none(self):
        """Test empty strings are normalized to None."""
        rows = parse_file("herd.csv", _csv("Tag,Name\n101,  \n"), "animals")
        assert rows == [{"tag_number": "101", "name": None}]

    def test_non_utf8_rejected(self):
        """Test binary garbage is reported as a ValueError."""
        with pytest.raises(ValueError):
            parse_csv_raw(io.BytesIO(b"\xff\xfe\x00\x01"))

    def test_unsupported_extension(self):
        """Test only CSV and xlsx are accepted."""
        with pytest.raises(ValueError, match="Unsupported"):
            parse_file("herd.txt", _csv("tag\n1\n"), "animals")

    def test_parse_excel(self):
        """Test Excel cells are rendered like CSV text."""
        buffer = io.BytesIO()
        pd.DataFrame(
            {
                "Tag": [101, 102],
                "DOB": [pd.Timestamp("2021-03-14"), None],
                "Sex": ["F", "M"],
            }
        ).to_excel(buffer, index=False, engine="openpyxl")
        buffer.seek(0)

        columns, rows = parse_excel_raw(buffer)

        assert columns == ["Tag", "DOB", "Sex"]
        assert rows[0] == {"Tag": "101", "DOB": "2021-03-14", "Sex": "F"}
        assert rows[1]["DOB"] is None

    def test_template(self):
        """Test templates start with the canonical headers."""
        header = generate_csv_template("fields").splitlines()[0]
        assert header == "name,property_name,size_acres,notes"


class TestBulkCreate:
    """Tests for bulk_create."""

    def test_distinct_ids_and_empty_result(self, db: Session):
        """Test every row gets its own fresh id and nothing is returned."""
        from app.imports.bulk import bulk_create

        rows = [{"name": f"Farm {i}", "is_leased": False} for i in range(5)]
        result = bulk_create(db, Property, rows)

        assert result == []
        ids = [p.id for p in db.query(Property).all()]
        assert len(ids) == 5
        assert len(set(ids)) == 5

    def test_supplied_ids_are_replaced(self, db: Session):
        """Test ids in the input are not trusted."""
        from app.imports.bulk import bulk_create

        bulk_create(db, Property, [{"id": "fixed", "name": "Farm", "is_leased": False}])

        assert db.query(Property).one().id != "fixed"

    def test_empty_input(self, db: Session):
        """Test an empty batch is a no-op."""
        from app.imports.bulk import bulk_create

        assert bulk_create(db, Property, []) == []
        assert db.query(Property).count() == 0


class TestImportService:
    """Tests for ImportService row resolution and validation."""

    def test_animals_resolve_natural_keys(
        self, db: Session, test_cow: Animal, test_bull: Animal, test_field: Field
    ):
        """Test parents resolve by tag and fields by name and property."""
        from app.imports.service import ImportService

        rows = [
            {
                "tag_number": "150",
                "type": "Dairy",
                "sex": "F",
                "sire_tag_number": "900",
                "dam_tag_number": "101",
                "field_name": "North Paddock",
                "property_name": "Home Farm",
            }
        ]
        response = ImportService(db).import_rows("animals", rows)

        assert response.imported == 1
        calf = db.query(Animal).filter(Animal.tag_number == "150").one()
        assert calf.type == AnimalType.DAIRY
        assert calf.sex == AnimalSex.FEMALE
        assert calf.sire_id == test_bull.id
        assert calf.dam_id == test_cow.id
        assert calf.current_field_id == test_field.id

    def test_animals_row_errors(self, db: Session, test_cow: Animal, test_bull: Animal):
        """Test bad rows are reported with 1-based numbers and good rows still import."""
        from app.imports.service import ImportService

        rows = [
            {"tag_number": "201", "type": "beef", "sex": "male"},
            {"tag_number": "101", "type": "beef", "sex": "male"},
            {"tag_number": "202", "type": "goat", "sex": "male"},
            {"tag_number": "203", "type": "beef", "sex": "male", "sire_tag_number": "101"},
            {"tag_number": "201", "type": "beef", "sex": "male"},
        ]
        response = ImportService(db).import_rows("animals", rows)

        assert response.total_rows == 5
        assert response.imported == 1
        assert response.error_count == 4
        errors = {e.row: e.errors for e in response.errors}
        assert "Tag number already exists: 101" in errors[2]
        assert errors[3][0].startswith("type:")
        assert "is not male" in errors[4][0]
        assert "Duplicate in file" in errors[5][0]

    def test_field_requires_known_property(self, db: Session, test_property: Property):
        """Test fields resolve their property by name."""
        from app.imports.service import ImportService

        rows = [
            {"name": "Creek", "property_name": "Home Farm"},
            {"name": "Hill", "property_name": "Nowhere"},
            {"name": "Orphan"},
        ]
        response = ImportService(db).import_rows("fields", rows)

        assert response.imported == 1
        assert [e.row for e in response.errors] == [2, 3]
        assert db.query(Field).one().property_id == test_property.id

    def test_ambiguous_field_name(self, db: Session, test_field: Field):
        """Test a field name on two properties needs property_name."""
        from app.imports.service import ImportService

        other = Property(name="River Block")
        db.add(other)
        db.commit()
        db.add(Field(name="North Paddock", property_id=other.id))
        db.commit()

        result = ImportService(db).validate(
            "animals",
            [{"tag_number": "1", "type": "beef", "sex": "male", "field_name": "North Paddock"}],
        )
        assert "several properties" in result.errors[0].errors[0]

    def test_calving_dam_must_be_female(
        self, db: Session, test_cow: Animal, test_bull: Animal
    ):
        """Test calving imports resolve and check the dam."""
        from app.imports.service import ImportService

        rows = [
            {"dam_tag_number": "101", "calving_date": "2024-02-20", "calf_sex": "heifer"},
            {"dam_tag_number": "900", "calving_date": "2024-02-21"},
        ]
        response = ImportService(db).import_rows("calving-records", rows)

        assert response.imported == 1
        assert response.errors[0].row == 2
        record = db.query(CalvingRecord).one()
        assert record.dam_id == test_cow.id
        assert record.calf_sex == AnimalSex.FEMALE

    def test_properties_parse_lease_flag(self, db: Session):
        """Test yes/no lease flags and blank optional cells."""
        from app.imports.service import ImportService

        rows = [
            {"name": "Own", "is_leased": "no", "size_acres": "240"},
            {"name": "Rented", "is_leased": "yes", "lease_start_date": "2024-01-01"},
        ]
        response = ImportService(db).import_rows("properties", rows)

        assert response.imported == 2
        leased = {p.name: p.is_leased for p in db.query(Property).all()}
        assert leased == {"Own": False, "Rented": True}


class TestImportRouter:
    """Tests for the import endpoints."""

    def test_import_vaccinations_csv(
        self, authenticated_client: TestClient, db: Session, test_cow: Animal
    ):
        """Test uploading a CSV with aliased headers."""
        content = (
            "Tag,Vaccine,Date Administered,Dose\n"
            "101,Bovilis BVD,2024-04-01,2 ml\n"
            "999,Bovilis BVD,2024-04-01,2 ml\n"
        )
        response = authenticated_client.post(
            "/api/import/vaccinations",
            files={"file": ("vaccinations.csv", content.encode("utf-8"), "text/csv")},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["resource"] == "vaccinations"
        assert (data["total_rows"], data["imported"], data["error_count"]) == (2, 1, 1)
        assert data["errors"][0]["row"] == 2
        assert db.query(Vaccination).one().animal_id == test_cow.id

    def test_validate_does_not_insert(self, authenticated_client: TestClient, db: Session):
        """Test the validate endpoint only reports."""
        response = authenticated_client.post(
            "/api/import/properties/validate",
            files={"file": ("farms.csv", b"name\nHome Farm\n", "text/csv")},
        )

        assert response.status_code == 200
        assert response.json()["imported"] == 0
        assert db.query(Property).count() == 0

    def test_unknown_resource(self, authenticated_client: TestClient):
        """Test 404 for resources that cannot be imported."""
        response = authenticated_client.post(
            "/api/import/users", files={"file": ("u.csv", b"email\n", "text/csv")}
        )
        assert response.status_code == 404

    def test_bad_extension(self, authenticated_client: TestClient):
        """Test 400 for unsupported files."""
        response = authenticated_client.post(
            "/api/import/animals", files={"file": ("herd.pdf", b"%PDF", "application/pdf")}
        )
        assert response.status_code == 400

    def test_template_download(self, authenticated_client: TestClient):
        """Test the CSV template download."""
        response = authenticated_client.get("/api/import/animals/template")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.text.startswith("tag_number,name,type,sex")

    def test_requires_session(self, client: TestClient):
        """Test anonymous uploads are rejected."""
        response = client.post(
            "/api/import/animals", files={"file": ("herd.csv", b"tag\n1\n", "text/csv")}
        )
        assert response.status_code == 401
