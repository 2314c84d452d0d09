from typing import Any, List

from fastapi import APIRouter, Depends, Response, status

from pawpost.api.deps import get_incident_store, parse_id
from pawpost.core.exceptions import NotFoundError
from pawpost.schemas.incident import TimelineEntryCreate, TimelineEntryRead, TimelineEntryUpdate
from pawpost.services.incident_service import IncidentStore

incident_router = APIRouter()
router = APIRouter()


@incident_router.get("/{incident_id}/timeline", response_model=List[TimelineEntryRead])
async def read_timeline(incident_id: str, store: IncidentStore = Depends(get_incident_store)) -> Any:
    """
    Timeline entries in chronological order.
    """
    incident = await store.require(parse_id(incident_id, "incident"))
    return await store.list_timeline(incident.id)


@incident_router.post(
    "/{incident_id}/timeline",
    response_model=TimelineEntryRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_timeline_entry(
    incident_id: str,
    entry_in: TimelineEntryCreate,
    store: IncidentStore = Depends(get_incident_store),
) -> Any:
    incident = await store.require(parse_id(incident_id, "incident"))
    return await store.create_timeline_entry(incident.id, entry_in)


@router.get("/{entry_id}", response_model=TimelineEntryRead)
async def read_timeline_entry(entry_id: str, store: IncidentStore = Depends(get_incident_store)) -> Any:
    entry = await store.get_timeline_entry(parse_id(entry_id, "timeline entry"))
    if entry is None:
        raise NotFoundError("Timeline entry not found")
    return entry


@router.put("/{entry_id}", response_model=TimelineEntryRead)
async def update_timeline_entry(
    entry_id: str,
    entry_in: TimelineEntryUpdate,
    store: IncidentStore = Depends(get_incident_store),
) -> Any:
    entry = await store.update_timeline_entry(parse_id(entry_id, "timeline entry"), entry_in)
    if entry is None:
        raise NotFoundError("Timeline entry not found")
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_timeline_entry(entry_id: str, store: IncidentStore = Depends(get_incident_store)):
    if not await store.delete_timeline_entry(parse_id(entry_id, "timeline entry")):
        raise NotFoundError("Timeline entry not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
