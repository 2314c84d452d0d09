"""
Evidence files attached to incidents.

Uploads are checked for type and size before anything is written, so a
rejected upload leaves neither a row nor a file behind.
"""

from typing import Any, List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from pawpost.api.deps import get_incident_store, parse_id
from pawpost.core.exceptions import NotFoundError
from pawpost.models.incident import EvidenceType
from pawpost.schemas.incident import EvidenceFileRead, EvidenceFileUpdate
from pawpost.services.incident_service import IncidentStore
from pawpost.services.storage_service import StorageService

incident_router = APIRouter()
router = APIRouter()


@incident_router.get("/{incident_id}/evidence", response_model=List[EvidenceFileRead])
async def read_evidence(incident_id: str, store: IncidentStore = Depends(get_incident_store)) -> Any:
    incident = await store.require(parse_id(incident_id, "incident"))
    return await store.list_evidence(incident.id)


@incident_router.post(
    "/{incident_id}/evidence",
    response_model=EvidenceFileRead,
    status_code=status.HTTP_201_CREATED,
)
async def upload_evidence(
    incident_id: str,
    file: UploadFile = File(...),
    type: EvidenceType = Form(EvidenceType.OTHER),
    description: Optional[str] = Form(None),
    source: Optional[str] = Form(None),
    store: IncidentStore = Depends(get_incident_store),
) -> Any:
    incident = await store.require(parse_id(incident_id, "incident"))

    content = await StorageService.read_upload(file)
    stored = await StorageService.save_file(content, file.filename)
    try:
        return await store.create_evidence(
            incident.id,
            filename=stored.filename,
            original_name=file.filename or stored.filename,
            file_path=stored.file_path,
            type=type,
            description=description,
            source=source,
            file_size=stored.file_size,
            mime_type=file.content_type,
            file_hash=stored.file_hash,
        )
    except Exception:
        await StorageService.delete_file(stored.file_path)
        raise


@router.get("/{evidence_id}", response_model=EvidenceFileRead)
async def read_evidence_file(evidence_id: str, store: IncidentStore = Depends(get_incident_store)) -> Any:
    evidence = await store.get_evidence(parse_id(evidence_id, "evidence"))
    if evidence is None:
        raise NotFoundError("Evidence file not found")
    return evidence


@router.put("/{evidence_id}", response_model=EvidenceFileRead)
async def update_evidence(
    evidence_id: str,
    evidence_in: EvidenceFileUpdate,
    store: IncidentStore = Depends(get_incident_store),
) -> Any:
    evidence = await store.update_evidence(parse_id(evidence_id, "evidence"), evidence_in)
    if evidence is None:
        raise NotFoundError("Evidence file not found")
    return evidence


@router.delete("/{evidence_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_evidence(evidence_id: str, store: IncidentStore = Depends(get_incident_store)):
    evidence = await store.delete_evidence(parse_id(evidence_id, "evidence"))
    if evidence is None:
        raise NotFoundError("Evidence file not found")
    await StorageService.delete_file(evidence.file_path)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
