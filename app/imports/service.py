"""Import service: resolves natural keys, validates rows and bulk inserts them."""

import logging
from collections.abc import Callable

from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from app.animals.schemas import AnimalCreate
from app.calving.schemas import CalvingRecordCreate
from app.db.models import (
    Animal,
    AnimalSex,
    Base,
    CalvingRecord,
    Event,
    Field,
    Property,
    SlaughterRecord,
    Vaccination,
)
from app.events.schemas import EventCreate
from app.fields.schemas import FieldCreate
from app.imports.bulk import bulk_create
from app.imports.schemas import ImportResponse, ImportResult, ImportRowError
from app.properties.schemas import PropertyCreate
from app.slaughter.schemas import SlaughterRecordCreate
from app.vaccinations.schemas import VaccinationCreate

logger = logging.getLogger(__name__)

# resource -> (mapped class, row schema)
RESOURCES: dict[str, tuple[type[Base], type[BaseModel]]] = {
    "animals": (Animal, AnimalCreate),
    "properties": (Property, PropertyCreate),
    "fields": (Field, FieldCreate),
    "vaccinations": (Vaccination, VaccinationCreate),
    "events": (Event, EventCreate),
    "calving-records": (CalvingRecord, CalvingRecordCreate),
    "slaughter-records": (SlaughterRecord, SlaughterRecordCreate),
}

SEX_ALIASES = {
    "m": "male",
    "bull": "male",
    "steer": "male",
    "f": "female",
    "cow": "female",
    "heifer": "female",
}


def normalize_sex(value: str | None) -> str | None:
    """Map common spellings ("F", "Cow", "bull") onto male/female."""
    if not value:
        return None
    value = value.strip().lower()
    return SEX_ALIASES.get(value, value)


def format_validation_error(error: ValidationError) -> list[str]:
    """Flatten a pydantic error into ``"field: message"`` strings."""
    messages = []
    for err in error.errors():
        loc = err["loc"][0] if err["loc"] else "row"
        messages.append(f"{loc}: {err['msg']}")
    return messages


class _Lookups:
    """Natural-key indexes over existing rows, loaded once per import."""

    def __init__(self, db: Session):
        self.animals: dict[str, tuple[str, AnimalSex]] = {
            tag: (animal_id, sex)
            for tag, animal_id, sex in db.query(Animal.tag_number, Animal.id, Animal.sex)
        }
        self.properties: dict[str, str] = {
            name: property_id for name, property_id in db.query(Property.name, Property.id)
        }
        self.fields: dict[tuple[str, str], str] = {}
        self.fields_by_name: dict[str, list[str]] = {}
        for name, property_id, field_id in db.query(Field.name, Field.property_id, Field.id):
            self.fields[(name, property_id)] = field_id
            self.fields_by_name.setdefault(name, []).append(field_id)


class ImportService:
    """Service class for CSV/Excel bulk import."""

    def __init__(self, db: Session):
        """Initialize import service.

        Args:
            db: Database session.
        """
        self.db = db

    # --- natural key resolution ---

    @staticmethod
    def _animal_id(
        lookups: _Lookups,
        tag_number: str | None,
        column: str,
        errors: list[str],
        expected_sex: AnimalSex | None = None,
    ) -> str | None:
        if not tag_number:
            return None
        found = lookups.animals.get(tag_number)
        if not found:
            errors.append(f"{column}: no animal with tag number '{tag_number}'")
            return None
        animal_id, sex = found
        if expected_sex and sex != expected_sex:
            errors.append(f"{column}: animal '{tag_number}' is not {expected_sex.value}")
            return None
        return animal_id

    @staticmethod
    def _property_id(lookups: _Lookups, name: str | None, errors: list[str]) -> str | None:
        if not name:
            return None
        property_id = lookups.properties.get(name)
        if not property_id:
            errors.append(f"property_name: no property named '{name}'")
        return property_id

    def _resolve_animals(self, row: dict, lookups: _Lookups, errors: list[str]) -> dict:
        values = {
            key: row.get(key)
            for key in ("tag_number", "name", "type", "date_of_birth", "breeding_method")
        }
        if values["type"]:
            values["type"] = values["type"].lower()
        values["sex"] = normalize_sex(row.get("sex"))
        values["sire_id"] = self._animal_id(
            lookups, row.get("sire_tag_number"), "sire_tag_number", errors, AnimalSex.MALE
        )
        values["dam_id"] = self._animal_id(
            lookups, row.get("dam_tag_number"), "dam_tag_number", errors, AnimalSex.FEMALE
        )

        field_name = row.get("field_name")
        if field_name:
            if row.get("property_name"):
                property_id = self._property_id(lookups, row["property_name"], errors)
                field_id = lookups.fields.get((field_name, property_id)) if property_id else None
                if property_id and not field_id:
                    errors.append(
                        f"field_name: no field '{field_name}' on property '{row['property_name']}'"
                    )
            else:
                matches = lookups.fields_by_name.get(field_name, [])
                field_id = matches[0] if len(matches) == 1 else None
                if not matches:
                    errors.append(f"field_name: no field named '{field_name}'")
                elif len(matches) > 1:
                    errors.append(
                        f"field_name: '{field_name}' exists on several properties; "
                        "add a property_name column"
                    )
            values["current_field_id"] = field_id
        return values

    def _resolve_properties(self, row: dict, lookups: _Lookups, errors: list[str]) -> dict:
        return dict(row)

    def _resolve_fields(self, row: dict, lookups: _Lookups, errors: list[str]) -> dict:
        values = {key: row.get(key) for key in ("name", "size_acres", "notes")}
        if not row.get("property_name"):
            errors.append("property_name: required")
        values["property_id"] = self._property_id(lookups, row.get("property_name"), errors)
        return values

    def _resolve_animal_log(self, row: dict, lookups: _Lookups, errors: list[str]) -> dict:
        values = {key: value for key, value in row.items() if key != "tag_number"}
        if not row.get("tag_number"):
            errors.append("tag_number: required")
        values["animal_id"] = self._animal_id(lookups, row.get("tag_number"), "tag_number", errors)
        return values

    def _resolve_calving_records(self, row: dict, lookups: _Lookups, errors: list[str]) -> dict:
        values = {key: value for key, value in row.items() if key != "dam_tag_number"}
        if not row.get("dam_tag_number"):
            errors.append("dam_tag_number: required")
        values["dam_id"] = self._animal_id(
            lookups, row.get("dam_tag_number"), "dam_tag_number", errors, AnimalSex.FEMALE
        )
        values["calf_sex"] = normalize_sex(row.get("calf_sex"))
        # Link the calf's own record when it is already registered
        calf = lookups.animals.get(row.get("calf_tag_number") or "")
        values["calf_id"] = calf[0] if calf else None
        return values

    def _resolver(self, resource: str) -> Callable[[dict, _Lookups, list[str]], dict]:
        if resource in ("vaccinations", "events", "slaughter-records"):
            return self._resolve_animal_log
        return getattr(self, f"_resolve_{resource.replace('-', '_')}")

    # --- uniqueness within the file and against stored rows ---

    @staticmethod
    def _unique_key(resource: str, values: dict, lookups: _Lookups) -> tuple[object, str] | None:
        """Return ``(key, message_if_taken)`` for resources with a natural key."""
        if resource == "animals" and values.get("tag_number"):
            tag = values["tag_number"]
            return tag, f"Tag number already exists: {tag}" if tag in lookups.animals else ""
        if resource == "properties" and values.get("name"):
            name = values["name"]
            return name, f"Property already exists: {name}" if name in lookups.properties else ""
        if resource == "fields" and values.get("name") and values.get("property_id"):
            key = (values["name"], values["property_id"])
            return key, f"Field already exists: {values['name']}" if key in lookups.fields else ""
        return None

    def validate(self, resource: str, rows: list[dict]) -> ImportResult:
        """Resolve references and validate every row.

        Args:
            resource: Import resource (see ``RESOURCES``).
            rows: Normalized rows from ``parse_file``.

        Returns:
            ImportResult: Insertable rows and per-row errors (1-based).
        """
        _, row_model = RESOURCES[resource]
        resolve = self._resolver(resource)
        lookups = _Lookups(self.db)

        valid_rows = []
        errors = []
        seen = set()

        for i, row in enumerate(rows, start=1):
            row_errors: list[str] = []
            values = resolve(row, lookups, row_errors)

            unique = self._unique_key(resource, values, lookups)
            if unique:
                key, taken = unique
                if key in seen:
                    row_errors.append(f"Duplicate in file: {key if isinstance(key, str) else key[0]}")
                elif taken:
                    row_errors.append(taken)
                else:
                    seen.add(key)

            if not row_errors:
                try:
                    model = row_model.model_validate(
                        {k: v for k, v in values.items() if v is not None}
                    )
                except ValidationError as e:
                    row_errors.extend(format_validation_error(e))

            if row_errors:
                errors.append(ImportRowError(row=i, data=row, errors=row_errors))
            else:
                valid_rows.append(model.model_dump())

        return ImportResult(valid_rows=valid_rows, errors=errors, total_rows=len(rows))

    def import_rows(self, resource: str, rows: list[dict]) -> ImportResponse:
        """Validate rows and insert the valid ones in one statement.

        Invalid rows are skipped and reported; they do not block the rest.

        Args:
            resource: Import resource.
            rows: Normalized rows from ``parse_file``.

        Returns:
            ImportResponse: Counts and row errors.
        """
        result = self.validate(resource, rows)
        model, _ = RESOURCES[resource]
        bulk_create(self.db, model, result.valid_rows)

        logger.info(
            "Imported %d/%d %s rows (%d rejected)",
            result.valid_count,
            result.total_rows,
            resource,
            result.error_count,
        )
        return ImportResponse(
            resource=resource,
            total_rows=result.total_rows,
            imported=result.valid_count,
            error_count=result.error_count,
            errors=result.errors,
        )


def get_import_service(db: Session) -> ImportService:
    """Factory function for ImportService."""
    return ImportService(db)
