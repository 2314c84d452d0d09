import asyncio
import structlog
from sqlalchemy.ext.asyncio import AsyncEngine

from pawpost.db.base import Base
from pawpost.db.session import engine as default_engine

# Import all models so Base knows about them
from pawpost.models.template import Template  # noqa: F401
from pawpost.models.incident import Incident, EvidenceFile, TimelineEntry, CrossReference  # noqa: F401

logger = structlog.get_logger()

async def init_models(engine: AsyncEngine = default_engine):
    """
    Create every table that does not exist yet.
    """
    logger.info("db_init_start")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("db_init_complete", tables=sorted(Base.metadata.tables))

if __name__ == "__main__":
    asyncio.run(init_models())
