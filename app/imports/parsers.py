"""CSV and Excel parsing utilities for bulk import."""

import csv
import io
from datetime import date, datetime
from typing import BinaryIO

import pandas as pd

# Resources that can be bulk imported, in URL form
IMPORT_RESOURCES = (
    "animals",
    "properties",
    "fields",
    "vaccinations",
    "events",
    "calving-records",
    "slaughter-records",
)

# Aliases shared by several resources (case-insensitive)
_TAG_NUMBER = ["tag_number", "tag number", "tagnumber", "tag", "tag #", "tag#", "ear tag", "eartag"]
_NOTES = ["notes", "note", "comments", "comment", "remarks"]
_PROPERTY_NAME = ["property_name", "property name", "property", "farm", "property/farm"]
_FIELD_NAME = ["field_name", "field name", "field", "paddock", "pasture", "current field"]
_SIZE = ["size_acres", "size acres", "size (acres)", "acres", "size", "area"]

# Expected column mappings per resource: normalized field -> accepted header spellings
COLUMN_MAPPINGS: dict[str, dict[str, list[str]]] = {
    "animals": {
        "tag_number": _TAG_NUMBER,
        "name": ["name", "animal name", "animal_name"],
        "type": ["type", "animal type", "animal_type", "breed type", "production type"],
        "sex": ["sex", "gender"],
        "date_of_birth": ["date_of_birth", "date of birth", "dob", "birth date", "birthdate", "born"],
        "breeding_method": ["breeding_method", "breeding method", "breeding", "bred by"],
        "sire_tag_number": ["sire_tag_number", "sire tag number", "sire tag", "sire", "father"],
        "dam_tag_number": ["dam_tag_number", "dam tag number", "dam tag", "dam", "mother"],
        "field_name": _FIELD_NAME,
        "property_name": _PROPERTY_NAME,
    },
    "properties": {
        "name": ["name", "property name", "property_name", "property", "farm"],
        "address": ["address", "location"],
        "size_acres": _SIZE,
        "is_leased": ["is_leased", "is leased", "leased", "lease"],
        "lease_start_date": ["lease_start_date", "lease start date", "lease start"],
        "lease_end_date": ["lease_end_date", "lease end date", "lease end"],
        "lessor_name": ["lessor_name", "lessor name", "lessor", "landlord"],
        "lease_notes": ["lease_notes", "lease notes", "lease terms"],
    },
    "fields": {
        "name": ["name", "field name", "field_name", "field", "paddock"],
        "property_name": _PROPERTY_NAME,
        "size_acres": _SIZE,
        "notes": _NOTES,
    },
    "vaccinations": {
        "tag_number": _TAG_NUMBER,
        "vaccine_name": ["vaccine_name", "vaccine name", "vaccine", "product"],
        "administered_date": [
            "administered_date",
            "administered date",
            "date administered",
            "date",
            "given",
        ],
        "dose": ["dose", "dosage", "amount"],
        "administered_by": ["administered_by", "administered by", "given by", "vet", "by"],
        "next_due_date": ["next_due_date", "next due date", "next due", "due date", "booster"],
        "notes": _NOTES,
    },
    "events": {
        "tag_number": _TAG_NUMBER,
        "event_type": ["event_type", "event type", "type", "event"],
        "event_date": ["event_date", "event date", "date"],
        "description": ["description", "details"],
        "notes": _NOTES,
    },
    "calving-records": {
        "dam_tag_number": ["dam_tag_number", "dam tag number", "dam tag", "dam", "cow", "mother"],
        "calving_date": ["calving_date", "calving date", "date", "birth date", "calved"],
        "calf_tag_number": ["calf_tag_number", "calf tag number", "calf tag", "calf"],
        "calf_sex": ["calf_sex", "calf sex", "sex"],
        "birth_weight": ["birth_weight", "birth weight", "weight", "bw"],
        "complications": ["complications", "difficulty", "calving ease", "problems"],
        "notes": _NOTES,
    },
    "slaughter-records": {
        "tag_number": _TAG_NUMBER,
        "slaughter_date": ["slaughter_date", "slaughter date", "date", "kill date"],
        "live_weight": ["live_weight", "live weight", "liveweight"],
        "carcass_weight": ["carcass_weight", "carcass weight", "hot carcass weight", "hcw"],
        "processor": ["processor", "abattoir", "plant", "butcher"],
        "notes": _NOTES,
    },
}

# Column order and example rows for downloadable templates
_TEMPLATES: dict[str, list[list[str]]] = {
    "animals": [
        ["101", "Daisy", "dairy", "female", "2021-03-14", "AI", "", "", "North Paddock", "Home Farm"],
        ["102", "", "beef", "male", "2022-05-02", "natural", "", "101", "", ""],
    ],
    "properties": [
        ["Home Farm", "12 Mill Road", "240", "no", "", "", "", ""],
        ["River Block", "", "80", "yes", "2024-01-01", "2026-12-31", "J. Smith", "Annual rent"],
    ],
    "fields": [
        ["North Paddock", "Home Farm", "25", ""],
        ["River Flat", "River Block", "40", "Floods in spring"],
    ],
    "vaccinations": [
        ["101", "Bovilis BVD", "2024-04-01", "2 ml", "Dr. Jones", "2025-04-01", ""],
    ],
    "events": [
        ["101", "treatment", "2024-06-12", "Lameness, front left", "Hoof trimmed"],
    ],
    "calving-records": [
        ["101", "2024-02-20", "150", "female", "34.5", "", "Unassisted"],
    ],
    "slaughter-records": [
        ["102", "2024-09-30", "610", "345", "Valley Meats", ""],
    ],
}


def normalize_column_name(col: str, resource: str) -> str | None:
    """Normalize a column name to the resource's field name.

    Args:
        col: Column name from file.
        resource: Import resource (e.g. "animals").

    Returns:
        str | None: Normalized field name or None if not recognized.
    """
    col_lower = col.lower().strip()
    for field, aliases in COLUMN_MAPPINGS[resource].items():
        if col_lower == field or col_lower in aliases:
            return field
    return None


def build_column_mapping(columns: list[str], resource: str) -> tuple[dict[str, str], list[str]]:
    """Build column mapping from raw column names.

    The first column that maps to a field wins; later duplicates are
    reported as unmapped.

    Args:
        columns: Original column names from file.
        resource: Import resource.

    Returns:
        tuple: (mapping dict, unmapped columns list).
    """
    mapping = {}
    unmapped = []
    taken = set()

    for col in columns:
        normalized = normalize_column_name(col, resource)
        if normalized and normalized not in taken:
            mapping[col] = normalized
            taken.add(normalized)
        else:
            unmapped.append(col)

    return mapping, unmapped


def normalize_rows(rows: list[dict], column_map: dict[str, str]) -> list[dict]:
    """Rename columns and turn blank cells into None.

    Args:
        rows: Raw row dictionaries.
        column_map: Map of original column name to normalized field name.

    Returns:
        list[dict]: Normalized row dictionaries.
    """
    normalized = []
    for raw_row in rows:
        norm_row = {}
        for orig_col, value in raw_row.items():
            mapped = column_map.get(orig_col)
            if mapped:
                norm_row[mapped] = (value.strip() or None) if isinstance(value, str) else value
        normalized.append(norm_row)
    return normalized


def _cell_to_str(value) -> str | None:
    """Render an Excel cell the way it would appear in a CSV export."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return None
    if isinstance(value, (datetime, pd.Timestamp)):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, float) and value.is_integer():
        # Tag numbers and whole weights come back as floats
        return str(int(value))
    return str(value).strip()


def parse_csv_raw(file: BinaryIO) -> tuple[list[str], list[dict]]:
    """Parse CSV file into column names and raw row dictionaries.

    Args:
        file: File-like object containing CSV data.

    Returns:
        tuple: (list of column names, list of raw row dicts).

    Raises:
        ValueError: If the file is not UTF-8 text.
    """
    try:
        content = file.read().decode("utf-8-sig")  # Handle BOM
    except UnicodeDecodeError as e:
        raise ValueError("CSV file must be UTF-8 encoded") from e
    reader = csv.DictReader(io.StringIO(content))
    columns = reader.fieldnames or []
    rows = []
    for row in reader:
        # Skip blank lines padded with delimiters
        if any(isinstance(v, str) and v.strip() for v in row.values()):
            rows.append(dict(row))
    return list(columns), rows


def parse_excel_raw(file: BinaryIO) -> tuple[list[str], list[dict]]:
    """Parse Excel file into column names and raw row dictionaries.

    Args:
        file: File-like object containing Excel data.

    Returns:
        tuple: (list of column names, list of raw row dicts).
    """
    df = pd.read_excel(file, engine="openpyxl", dtype=object)
    df = df.dropna(how="all")
    columns = [str(c) for c in df.columns]

    rows = []
    for _, row in df.iterrows():
        rows.append({col: _cell_to_str(row[orig]) for col, orig in zip(columns, df.columns)})

    return columns, rows


def parse_file(filename: str, file: BinaryIO, resource: str) -> list[dict]:
    """Parse an uploaded CSV or Excel file into normalized rows.

    Args:
        filename: Original file name; its extension selects the parser.
        file: File-like object.
        resource: Import resource.

    Returns:
        list[dict]: Normalized row dictionaries.

    Raises:
        ValueError: If the file format is unsupported or unreadable.
    """
    name = filename.lower()
    if name.endswith(".csv"):
        columns, raw_rows = parse_csv_raw(file)
    elif name.endswith(".xlsx"):
        columns, raw_rows = parse_excel_raw(file)
    else:
        raise ValueError("Unsupported file format. Use CSV or Excel (.xlsx)")

    column_map, _ = build_column_mapping(columns, resource)
    return normalize_rows(raw_rows, column_map)


def generate_csv_template(resource: str) -> str:
    """Generate a CSV template for a resource.

    Args:
        resource: Import resource.

    Returns:
        str: CSV template content.
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(list(COLUMN_MAPPINGS[resource]))
    for row in _TEMPLATES[resource]:
        writer.writerow(row)
    return output.getvalue()
