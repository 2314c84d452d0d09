from datetime import date as date_type, datetime
from typing import Any, Dict, Literal, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from pawpost.models.incident import (
    EvidenceType,
    IncidentSeverity,
    IncidentStatus,
    RelationshipKind,
    TimelineEntryType,
)


# --- Incidents -------------------------------------------------------------

class IncidentCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    severity: IncidentSeverity = IncidentSeverity.MEDIUM
    status: IncidentStatus = IncidentStatus.INVESTIGATING
    data: Dict[str, Any] = Field(default_factory=dict)
    # Only set when importing historical records
    created_at: Optional[datetime] = None


class IncidentUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    severity: Optional[IncidentSeverity] = None
    status: Optional[IncidentStatus] = None
    data: Optional[Dict[str, Any]] = None


class IncidentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    severity: IncidentSeverity
    status: IncidentStatus
    data: Dict[str, Any]
    created_at: datetime
    updated_at: datetime


class ImportResult(BaseModel):
    imported: int
    message: str


# --- Evidence --------------------------------------------------------------

class EvidenceFileRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    incident_id: int
    filename: str
    original_name: str
    type: EvidenceType
    description: Optional[str] = None
    source: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    is_verified: bool
    uploaded_at: datetime


class EvidenceFileUpdate(BaseModel):
    type: Optional[EvidenceType] = None
    description: Optional[str] = None
    source: Optional[str] = Field(None, max_length=255)
    is_verified: Optional[bool] = None


# --- Timeline --------------------------------------------------------------

class TimelineEntryCreate(BaseModel):
    date: date_type
    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    severity: IncidentSeverity = IncidentSeverity.MEDIUM
    type: TimelineEntryType = TimelineEntryType.UPDATE
    media_type: Optional[Literal["image", "video"]] = None
    media_url: Optional[str] = Field(None, max_length=1024)
    link_url: Optional[str] = Field(None, max_length=1024)
    link_text: Optional[str] = Field(None, max_length=255)


class TimelineEntryUpdate(BaseModel):
    date: Optional[date_type] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    severity: Optional[IncidentSeverity] = None
    type: Optional[TimelineEntryType] = None


class TimelineEntryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    incident_id: int
    date: date_type
    title: str
    description: str
    severity: IncidentSeverity
    type: TimelineEntryType
    media_type: Optional[str] = None
    media_url: Optional[str] = None
    link_url: Optional[str] = None
    link_text: Optional[str] = None
    created_at: datetime


# --- Cross-references ------------------------------------------------------

class CrossReferenceCreate(BaseModel):
    related_incident_id: int = Field(..., gt=0)
    relationship: RelationshipKind = RelationshipKind.RELATED
    description: Optional[str] = None


class CrossReferenceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    incident_id: int
    related_incident_id: int
    relationship: RelationshipKind = Field(
        validation_alias=AliasChoices("relationship", "relationship_kind")
    )
    description: Optional[str] = None
    created_at: datetime
