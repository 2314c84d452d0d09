from datetime import datetime
from sqlalchemy import Column, String, Boolean, Integer, Date, DateTime, ForeignKey, Enum, Text, JSON
from sqlalchemy.orm import relationship
import enum

from pawpost.db.base import Base


class IncidentSeverity(str, enum.Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'
    CRITICAL = 'critical'

class IncidentStatus(str, enum.Enum):
    INVESTIGATING = 'investigating'
    CONFIRMED = 'confirmed'
    BLACKLISTED = 'blacklisted'
    RESOLVED = 'resolved'
    ONGOING = 'ongoing'

class EvidenceType(str, enum.Enum):
    PHOTO = 'photo'
    VIDEO = 'video'
    AUDIO = 'audio'
    DOCUMENT = 'document'
    OTHER = 'other'

class TimelineEntryType(str, enum.Enum):
    REPORT = 'report'
    INCIDENT = 'incident'
    EVIDENCE = 'evidence'
    ACTION_TAKEN = 'action_taken'
    UPDATE = 'update'
    RESOLUTION = 'resolution'

class RelationshipKind(str, enum.Enum):
    SAME_INDIVIDUAL = 'same_individual'
    SAME_ORGANIZATION = 'same_organization'
    SAME_LOCATION = 'same_location'
    FOLLOW_UP = 'follow_up'
    RELATED = 'related'


def _enum_column(enum_cls, **kwargs):
    # Persist the lower-case values rather than the member names
    return Column(
        Enum(enum_cls, values_callable=lambda members: [m.value for m in members], native_enum=False),
        **kwargs,
    )


class Incident(Base):
    __tablename__ = "incidents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    severity = _enum_column(IncidentSeverity, default=IncidentSeverity.MEDIUM, nullable=False, index=True)
    status = _enum_column(IncidentStatus, default=IncidentStatus.INVESTIGATING, nullable=False, index=True)

    # Free-form payload (description, welfare impact, recommended actions, ...)
    data = Column(JSON, default=dict, nullable=False)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    evidence_files = relationship("EvidenceFile", back_populates="incident", passive_deletes=True)
    timeline_entries = relationship("TimelineEntry", back_populates="incident", passive_deletes=True)
    cross_references = relationship(
        "CrossReference",
        back_populates="incident",
        foreign_keys="CrossReference.incident_id",
        passive_deletes=True,
    )


class EvidenceFile(Base):
    __tablename__ = "evidence_files"

    id = Column(Integer, primary_key=True, autoincrement=True)
    incident_id = Column(Integer, ForeignKey("incidents.id", ondelete="CASCADE"), nullable=False, index=True)

    filename = Column(String(255), nullable=False)       # generated name on disk
    original_name = Column(String(255), nullable=False)
    file_path = Column(String(512), nullable=False)
    type = _enum_column(EvidenceType, default=EvidenceType.OTHER, nullable=False)
    description = Column(Text, nullable=True)
    source = Column(String(255), nullable=True)
    file_size = Column(Integer, nullable=True)
    mime_type = Column(String(100), nullable=True)
    file_hash = Column(String(128), nullable=True)
    is_verified = Column(Boolean, default=False, nullable=False)

    uploaded_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    incident = relationship("Incident", back_populates="evidence_files")


class TimelineEntry(Base):
    __tablename__ = "incident_timelines"

    id = Column(Integer, primary_key=True, autoincrement=True)
    incident_id = Column(Integer, ForeignKey("incidents.id", ondelete="CASCADE"), nullable=False, index=True)

    date = Column(Date, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    severity = _enum_column(IncidentSeverity, default=IncidentSeverity.MEDIUM, nullable=False)
    type = _enum_column(TimelineEntryType, default=TimelineEntryType.UPDATE, nullable=False)

    # Optional attachments shown inline on the timeline
    media_type = Column(String(20), nullable=True)
    media_url = Column(String(1024), nullable=True)
    link_url = Column(String(1024), nullable=True)
    link_text = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    incident = relationship("Incident", back_populates="timeline_entries")


class CrossReference(Base):
    __tablename__ = "incident_cross_references"

    id = Column(Integer, primary_key=True, autoincrement=True)
    incident_id = Column(Integer, ForeignKey("incidents.id", ondelete="CASCADE"), nullable=False, index=True)
    related_incident_id = Column(Integer, ForeignKey("incidents.id", ondelete="CASCADE"), nullable=False, index=True)
    relationship_kind = _enum_column(RelationshipKind, default=RelationshipKind.RELATED, nullable=False)
    description = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=datetime.utcnow, nullable=False)

    incident = relationship("Incident", back_populates="cross_references", foreign_keys=[incident_id])
