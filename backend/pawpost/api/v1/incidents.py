from typing import Any, List

import structlog
from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from pawpost.api.deps import get_incident_store, parse_id
from pawpost.core.config import settings
from pawpost.core.exceptions import CsvImportError, NotFoundError
from pawpost.schemas.incident import ImportResult, IncidentCreate, IncidentRead, IncidentUpdate
from pawpost.services.csv_service import export_incidents_csv, parse_incidents_csv
from pawpost.services.incident_service import IncidentStore
from pawpost.services.storage_service import StorageService

router = APIRouter()
logger = structlog.get_logger()


# Fixed paths first so they are not captured by /{incident_id}
@router.get("/export")
async def export_incidents(store: IncidentStore = Depends(get_incident_store)):
    """
    All incidents as a CSV attachment.
    """
    incidents = await store.list()
    return Response(
        content=export_incidents_csv(incidents),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="incidents.csv"'},
    )


@router.post("/import", response_model=ImportResult, status_code=status.HTTP_201_CREATED)
async def import_incidents(
    file: UploadFile = File(...),
    store: IncidentStore = Depends(get_incident_store),
) -> Any:
    """
    Bulk import from CSV. Either every row is imported or none is.
    """
    content = await StorageService.read_upload(file, allowed_types=settings.ALLOWED_IMPORT_TYPES)
    if not content:
        raise CsvImportError("No file uploaded")
    records = parse_incidents_csv(content)
    logger.info("incident_import_parsed", filename=file.filename, rows=len(records))
    incidents = await store.bulk_create(records)
    return ImportResult(imported=len(incidents), message="Incidents imported successfully")


@router.get("", response_model=List[IncidentRead])
async def read_incidents(newest_first: bool = False, store: IncidentStore = Depends(get_incident_store)) -> Any:
    return await store.list(newest_first=newest_first)


@router.get("/{incident_id}", response_model=IncidentRead)
async def read_incident(incident_id: str, store: IncidentStore = Depends(get_incident_store)) -> Any:
    return await store.require(parse_id(incident_id, "incident"))


@router.post("", response_model=IncidentRead, status_code=status.HTTP_201_CREATED)
async def create_incident(incident_in: IncidentCreate, store: IncidentStore = Depends(get_incident_store)) -> Any:
    return await store.create(incident_in)


@router.put("/{incident_id}", response_model=IncidentRead)
async def update_incident(
    incident_id: str,
    incident_in: IncidentUpdate,
    store: IncidentStore = Depends(get_incident_store),
) -> Any:
    incident = await store.update(parse_id(incident_id, "incident"), incident_in)
    if incident is None:
        raise NotFoundError("Incident not found")
    return incident


@router.delete("/{incident_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_incident(incident_id: str, store: IncidentStore = Depends(get_incident_store)):
    """
    Deletes the incident with its evidence, timeline and cross-references.
    """
    ident = parse_id(incident_id, "incident")
    paths = await store.evidence_paths(ident)
    if not await store.delete(ident):
        raise NotFoundError("Incident not found")
    for path in paths:
        await StorageService.delete_file(path)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
