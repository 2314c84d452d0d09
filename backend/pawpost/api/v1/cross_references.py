from typing import Any, List

from fastapi import APIRouter, Depends, Response, status

from pawpost.api.deps import get_incident_store, parse_id
from pawpost.core.exceptions import NotFoundError
from pawpost.schemas.incident import CrossReferenceCreate, CrossReferenceRead
from pawpost.services.incident_service import IncidentStore

incident_router = APIRouter()
router = APIRouter()


@incident_router.get("/{incident_id}/cross-references", response_model=List[CrossReferenceRead])
async def read_cross_references(incident_id: str, store: IncidentStore = Depends(get_incident_store)) -> Any:
    incident = await store.require(parse_id(incident_id, "incident"))
    return await store.list_cross_references(incident.id)


@incident_router.post(
    "/{incident_id}/cross-references",
    response_model=CrossReferenceRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_cross_reference(
    incident_id: str,
    cross_reference_in: CrossReferenceCreate,
    store: IncidentStore = Depends(get_incident_store),
) -> Any:
    """
    Link this incident to another one. The target must exist and differ from the source.
    """
    incident = await store.require(parse_id(incident_id, "incident"))
    return await store.create_cross_reference(incident.id, cross_reference_in)


@router.get("/{cross_reference_id}", response_model=CrossReferenceRead)
async def read_cross_reference(cross_reference_id: str, store: IncidentStore = Depends(get_incident_store)) -> Any:
    cross_reference = await store.get_cross_reference(parse_id(cross_reference_id, "cross-reference"))
    if cross_reference is None:
        raise NotFoundError("Cross-reference not found")
    return cross_reference


@router.delete("/{cross_reference_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_cross_reference(cross_reference_id: str, store: IncidentStore = Depends(get_incident_store)):
    if not await store.delete_cross_reference(parse_id(cross_reference_id, "cross-reference")):
        raise NotFoundError("Cross-reference not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
