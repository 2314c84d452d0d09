"""
Incident Tracking Store.

Repository over the incident tables. Child rows (evidence, timeline,
cross-references) always belong to exactly one incident and are removed with
it. Listing is in creation order unless the caller asks for newest first;
timelines are chronological.
"""

from typing import List, Optional, Sequence

import structlog
from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from pawpost.core.exceptions import NotFoundError, RecordValidationError
from pawpost.core.time_utils import get_utc_now, next_timestamp, to_utc
from pawpost.models.incident import CrossReference, EvidenceFile, Incident, TimelineEntry
from pawpost.schemas.incident import (
    CrossReferenceCreate,
    EvidenceFileUpdate,
    IncidentCreate,
    IncidentUpdate,
    TimelineEntryCreate,
    TimelineEntryUpdate,
)

logger = structlog.get_logger()


def _changes(updates) -> dict:
    # Partial update: supplied, non-null fields only
    return {k: v for k, v in updates.model_dump(exclude_unset=True).items() if v is not None}


class IncidentStore:

    def __init__(self, session: AsyncSession):
        self.session = session

    # --- Incidents ---------------------------------------------------------

    def _new_incident(self, data: IncidentCreate) -> Incident:
        now = get_utc_now()
        return Incident(
            title=data.title,
            severity=data.severity,
            status=data.status,
            data=data.data,
            created_at=to_utc(data.created_at) if data.created_at else now,
            updated_at=now,
        )

    async def create(self, data: IncidentCreate) -> Incident:
        incident = self._new_incident(data)
        self.session.add(incident)
        await self.session.commit()
        await self.session.refresh(incident)
        logger.info("incident_created", incident_id=incident.id, severity=incident.severity.value)
        return incident

    async def bulk_create(self, records: Sequence[IncidentCreate]) -> List[Incident]:
        """All rows are committed together or not at all."""
        incidents = [self._new_incident(data) for data in records]
        self.session.add_all(incidents)
        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("incidents_imported", count=len(incidents))
        return incidents

    async def get(self, incident_id: int) -> Optional[Incident]:
        return await self.session.get(Incident, incident_id)

    async def require(self, incident_id: int) -> Incident:
        incident = await self.get(incident_id)
        if incident is None:
            raise NotFoundError("Incident not found")
        return incident

    async def list(self, newest_first: bool = False) -> List[Incident]:
        order = (Incident.created_at.desc(), Incident.id.desc()) if newest_first else (Incident.id,)
        result = await self.session.execute(select(Incident).order_by(*order))
        return list(result.scalars().all())

    async def update(self, incident_id: int, updates: IncidentUpdate) -> Optional[Incident]:
        incident = await self.get(incident_id)
        if incident is None:
            return None
        for key, value in _changes(updates).items():
            setattr(incident, key, value)
        incident.updated_at = next_timestamp(incident.updated_at)
        await self.session.commit()
        await self.session.refresh(incident)
        logger.info("incident_updated", incident_id=incident_id)
        return incident

    async def evidence_paths(self, incident_id: int) -> List[str]:
        result = await self.session.execute(
            select(EvidenceFile.file_path).where(EvidenceFile.incident_id == incident_id)
        )
        return list(result.scalars().all())

    async def delete(self, incident_id: int) -> bool:
        if await self.get(incident_id) is None:
            return False
        await self.session.execute(delete(EvidenceFile).where(EvidenceFile.incident_id == incident_id))
        await self.session.execute(delete(TimelineEntry).where(TimelineEntry.incident_id == incident_id))
        await self.session.execute(
            delete(CrossReference).where(
                or_(CrossReference.incident_id == incident_id, CrossReference.related_incident_id == incident_id)
            )
        )
        await self.session.execute(delete(Incident).where(Incident.id == incident_id))
        await self.session.commit()
        logger.info("incident_deleted", incident_id=incident_id)
        return True

    # --- Evidence ----------------------------------------------------------

    async def list_evidence(self, incident_id: int) -> List[EvidenceFile]:
        result = await self.session.execute(
            select(EvidenceFile)
            .where(EvidenceFile.incident_id == incident_id)
            .order_by(EvidenceFile.uploaded_at, EvidenceFile.id)
        )
        return list(result.scalars().all())

    async def get_evidence(self, evidence_id: int) -> Optional[EvidenceFile]:
        return await self.session.get(EvidenceFile, evidence_id)

    async def create_evidence(self, incident_id: int, **fields) -> EvidenceFile:
        evidence = EvidenceFile(incident_id=incident_id, uploaded_at=get_utc_now(), **fields)
        self.session.add(evidence)
        await self.session.commit()
        await self.session.refresh(evidence)
        logger.info("evidence_uploaded", incident_id=incident_id, evidence_id=evidence.id)
        return evidence

    async def update_evidence(self, evidence_id: int, updates: EvidenceFileUpdate) -> Optional[EvidenceFile]:
        evidence = await self.get_evidence(evidence_id)
        if evidence is None:
            return None
        for key, value in _changes(updates).items():
            setattr(evidence, key, value)
        await self.session.commit()
        await self.session.refresh(evidence)
        return evidence

    async def delete_evidence(self, evidence_id: int) -> Optional[EvidenceFile]:
        """Returns the removed row so the caller can clean up the stored file."""
        evidence = await self.get_evidence(evidence_id)
        if evidence is None:
            return None
        await self.session.execute(delete(EvidenceFile).where(EvidenceFile.id == evidence_id))
        await self.session.commit()
        logger.info("evidence_deleted", evidence_id=evidence_id)
        return evidence

    # --- Timeline ----------------------------------------------------------

    async def list_timeline(self, incident_id: int) -> List[TimelineEntry]:
        result = await self.session.execute(
            select(TimelineEntry)
            .where(TimelineEntry.incident_id == incident_id)
            .order_by(TimelineEntry.date, TimelineEntry.id)
        )
        return list(result.scalars().all())

    async def get_timeline_entry(self, entry_id: int) -> Optional[TimelineEntry]:
        return await self.session.get(TimelineEntry, entry_id)

    async def create_timeline_entry(self, incident_id: int, data: TimelineEntryCreate) -> TimelineEntry:
        entry = TimelineEntry(incident_id=incident_id, created_at=get_utc_now(), **data.model_dump())
        self.session.add(entry)
        await self.session.commit()
        await self.session.refresh(entry)
        return entry

    async def update_timeline_entry(self, entry_id: int, updates: TimelineEntryUpdate) -> Optional[TimelineEntry]:
        entry = await self.get_timeline_entry(entry_id)
        if entry is None:
            return None
        for key, value in _changes(updates).items():
            setattr(entry, key, value)
        await self.session.commit()
        await self.session.refresh(entry)
        return entry

    async def delete_timeline_entry(self, entry_id: int) -> bool:
        result = await self.session.execute(delete(TimelineEntry).where(TimelineEntry.id == entry_id))
        await self.session.commit()
        return (result.rowcount or 0) > 0

    # --- Cross-references --------------------------------------------------

    async def list_cross_references(self, incident_id: int) -> List[CrossReference]:
        result = await self.session.execute(
            select(CrossReference)
            .where(CrossReference.incident_id == incident_id)
            .order_by(CrossReference.id)
        )
        return list(result.scalars().all())

    async def get_cross_reference(self, cross_reference_id: int) -> Optional[CrossReference]:
        return await self.session.get(CrossReference, cross_reference_id)

    async def create_cross_reference(self, incident_id: int, data: CrossReferenceCreate) -> CrossReference:
        if data.related_incident_id == incident_id:
            raise RecordValidationError(
                "An incident cannot reference itself",
                errors=[{"field": "related_incident_id", "message": "must differ from the incident id", "type": "value_error"}],
            )
        if await self.get(data.related_incident_id) is None:
            raise NotFoundError("Related incident not found")
        cross_reference = CrossReference(
            incident_id=incident_id,
            related_incident_id=data.related_incident_id,
            relationship_kind=data.relationship,
            description=data.description,
            created_at=get_utc_now(),
        )
        self.session.add(cross_reference)
        await self.session.commit()
        await self.session.refresh(cross_reference)
        logger.info(
            "cross_reference_created",
            incident_id=incident_id,
            related_incident_id=data.related_incident_id,
            relationship=data.relationship.value,
        )
        return cross_reference

    async def delete_cross_reference(self, cross_reference_id: int) -> bool:
        result = await self.session.execute(delete(CrossReference).where(CrossReference.id == cross_reference_id))
        await self.session.commit()
        return (result.rowcount or 0) > 0
