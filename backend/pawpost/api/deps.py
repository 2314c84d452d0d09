from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pawpost.core.exceptions import InvalidIdentifierError
from pawpost.db.session import get_db
from pawpost.services.incident_service import IncidentStore
from pawpost.services.template_store import SqlTemplateStore, TemplateStore


def parse_id(raw: str, entity: str = "record") -> int:
    """Path ids are positive integers; anything else is a client error."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise InvalidIdentifierError(f"Invalid {entity} ID")
    if value < 1:
        raise InvalidIdentifierError(f"Invalid {entity} ID")
    return value


async def get_template_store(db: AsyncSession = Depends(get_db)) -> TemplateStore:
    return SqlTemplateStore(db)


async def get_incident_store(db: AsyncSession = Depends(get_db)) -> IncidentStore:
    return IncidentStore(db)
