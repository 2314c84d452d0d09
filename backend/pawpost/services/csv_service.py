"""
CSV export/import of incidents.

Export columns: ID,Title,Severity,Status,CreatedAt (ISO-8601, UTC).
Import reads the same columns minus ID. Every row is validated before the
caller writes anything, so a bad row means nothing is imported.
"""

import csv
import io
from datetime import datetime
from typing import Iterable, List

from pydantic import ValidationError

from pawpost.core.exceptions import CsvImportError, field_errors
from pawpost.core.time_utils import format_iso
from pawpost.models.incident import Incident
from pawpost.schemas.incident import IncidentCreate

EXPORT_COLUMNS = ["ID", "Title", "Severity", "Status", "CreatedAt"]
IMPORT_COLUMNS = ["Title", "Severity", "Status", "CreatedAt"]


def export_incidents_csv(incidents: Iterable[Incident]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for incident in incidents:
        writer.writerow({
            "ID": incident.id,
            "Title": incident.title,
            "Severity": incident.severity.value,
            "Status": incident.status.value,
            "CreatedAt": format_iso(incident.created_at),
        })
    return buffer.getvalue()


def _parse_created_at(raw: str, row_number: int) -> datetime:
    value = raw.strip()
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise CsvImportError(f"Row {row_number}: CreatedAt '{raw}' is not an ISO-8601 timestamp")


def parse_incidents_csv(content: bytes) -> List[IncidentCreate]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise CsvImportError("CSV file must be UTF-8 encoded")

    reader = csv.DictReader(io.StringIO(text))
    if reader.fieldnames is None:
        raise CsvImportError("CSV file is empty")
    missing = [column for column in IMPORT_COLUMNS if column not in reader.fieldnames]
    if missing:
        raise CsvImportError(f"CSV is missing required columns: {', '.join(missing)}")

    records = []
    try:
        # Row 1 is the header
        for row_number, row in enumerate(reader, start=2):
            # DictReader keys surplus fields under None and pads short rows with None
            if None in row or None in row.values():
                raise CsvImportError(f"Row {row_number}: expected {len(reader.fieldnames)} fields")
            created_raw = (row.get("CreatedAt") or "").strip()
            try:
                record = IncidentCreate(
                    title=(row.get("Title") or "").strip(),
                    severity=(row.get("Severity") or "").strip().lower(),
                    status=(row.get("Status") or "").strip().lower(),
                    created_at=_parse_created_at(created_raw, row_number) if created_raw else None,
                    data={},
                )
            except ValidationError as exc:
                raise CsvImportError(f"Row {row_number}: invalid incident", errors=field_errors(exc.errors()))
            records.append(record)
    except csv.Error as exc:
        raise CsvImportError(f"Error parsing CSV: {exc}")

    if not records:
        raise CsvImportError("CSV file contains no incidents")
    return records
