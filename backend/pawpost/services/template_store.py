"""
Template Store - named, saved copies of a post record.

Three interchangeable backends share one async interface:

- InMemoryTemplateStore   process-local, used by tests and throwaway sessions
- LocalFileTemplateStore  a JSON file on the user's machine (client-local)
- SqlTemplateStore        the relational database, payload kept as JSON text

Contract for all of them:
- create() assigns the next sequential id and sets created_at == updated_at
- list() returns templates in creation order
- update() changes only the supplied fields and moves updated_at forward
- get()/update() return None and delete() returns False for unknown ids
"""

import asyncio
import json
import os
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

import aiofiles
import aiofiles.os
import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from pawpost.core.time_utils import get_utc_now, next_timestamp
from pawpost.models.template import Template
from pawpost.schemas.template import TemplateCreate, TemplateRead, TemplateUpdate

logger = structlog.get_logger()


class TemplateStore(ABC):

    @abstractmethod
    async def create(self, template: TemplateCreate) -> TemplateRead: ...

    @abstractmethod
    async def get(self, template_id: int) -> Optional[TemplateRead]: ...

    @abstractmethod
    async def list(self) -> List[TemplateRead]: ...

    @abstractmethod
    async def update(self, template_id: int, updates: TemplateUpdate) -> Optional[TemplateRead]: ...

    @abstractmethod
    async def delete(self, template_id: int) -> bool: ...


def _apply_update(current: TemplateRead, updates: TemplateUpdate) -> TemplateRead:
    changes = {"updated_at": next_timestamp(current.updated_at)}
    if updates.name is not None:
        changes["name"] = updates.name
    if updates.data is not None:
        changes["data"] = updates.data
    return current.model_copy(update=changes)


class InMemoryTemplateStore(TemplateStore):

    def __init__(self):
        self._templates: Dict[int, TemplateRead] = {}
        self._next_id = 1

    async def create(self, template: TemplateCreate) -> TemplateRead:
        now = get_utc_now()
        record = TemplateRead(
            id=self._next_id,
            name=template.name,
            data=template.data.model_copy(deep=True),
            created_at=now,
            updated_at=now,
        )
        self._templates[record.id] = record
        self._next_id += 1
        return record.model_copy(deep=True)

    async def get(self, template_id: int) -> Optional[TemplateRead]:
        record = self._templates.get(template_id)
        return record.model_copy(deep=True) if record else None

    async def list(self) -> List[TemplateRead]:
        return [t.model_copy(deep=True) for t in self._templates.values()]

    async def update(self, template_id: int, updates: TemplateUpdate) -> Optional[TemplateRead]:
        current = self._templates.get(template_id)
        if current is None:
            return None
        record = _apply_update(current, updates)
        self._templates[template_id] = record
        return record.model_copy(deep=True)

    async def delete(self, template_id: int) -> bool:
        return self._templates.pop(template_id, None) is not None


class LocalFileTemplateStore(TemplateStore):
    """
    Templates kept in a single JSON document:
    {"next_id": 3, "templates": [{...}, {...}]}
    """

    def __init__(self, path: str):
        self.path = path
        self._lock = asyncio.Lock()

    async def _load(self) -> dict:
        if not await aiofiles.os.path.exists(self.path):
            return {"next_id": 1, "templates": []}
        async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
            return json.loads(await f.read())

    async def _save(self, document: dict) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            await aiofiles.os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(document, ensure_ascii=False, indent=2))
        await aiofiles.os.replace(tmp_path, self.path)

    @staticmethod
    def _records(document: dict) -> List[TemplateRead]:
        return [TemplateRead.model_validate(raw) for raw in document["templates"]]

    async def create(self, template: TemplateCreate) -> TemplateRead:
        async with self._lock:
            document = await self._load()
            now = get_utc_now()
            record = TemplateRead(
                id=document["next_id"],
                name=template.name,
                data=template.data,
                created_at=now,
                updated_at=now,
            )
            document["templates"].append(record.model_dump(mode="json"))
            document["next_id"] += 1
            await self._save(document)
        return record

    async def get(self, template_id: int) -> Optional[TemplateRead]:
        async with self._lock:
            document = await self._load()
        for record in self._records(document):
            if record.id == template_id:
                return record
        return None

    async def list(self) -> List[TemplateRead]:
        async with self._lock:
            document = await self._load()
        return self._records(document)

    async def update(self, template_id: int, updates: TemplateUpdate) -> Optional[TemplateRead]:
        async with self._lock:
            document = await self._load()
            for position, record in enumerate(self._records(document)):
                if record.id == template_id:
                    updated = _apply_update(record, updates)
                    document["templates"][position] = updated.model_dump(mode="json")
                    await self._save(document)
                    return updated
        return None

    async def delete(self, template_id: int) -> bool:
        async with self._lock:
            document = await self._load()
            remaining = [raw for raw in document["templates"] if raw["id"] != template_id]
            if len(remaining) == len(document["templates"]):
                return False
            document["templates"] = remaining
            await self._save(document)
        return True


class SqlTemplateStore(TemplateStore):

    def __init__(self, session: AsyncSession):
        self.session = session

    @staticmethod
    def _to_read(row: Template) -> TemplateRead:
        return TemplateRead(
            id=row.id,
            name=row.name,
            data=json.loads(row.data),
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    @staticmethod
    def _serialize(data) -> str:
        return json.dumps(data.model_dump(mode="json"), ensure_ascii=False)

    async def create(self, template: TemplateCreate) -> TemplateRead:
        now = get_utc_now()
        row = Template(
            name=template.name,
            data=self._serialize(template.data),
            created_at=now,
            updated_at=now,
        )
        self.session.add(row)
        await self.session.commit()
        await self.session.refresh(row)
        logger.info("template_created", template_id=row.id, kind=template.data.kind)
        return self._to_read(row)

    async def get(self, template_id: int) -> Optional[TemplateRead]:
        row = await self.session.get(Template, template_id)
        return self._to_read(row) if row else None

    async def list(self) -> List[TemplateRead]:
        result = await self.session.execute(select(Template).order_by(Template.id))
        return [self._to_read(row) for row in result.scalars().all()]

    async def update(self, template_id: int, updates: TemplateUpdate) -> Optional[TemplateRead]:
        row = await self.session.get(Template, template_id)
        if row is None:
            return None
        if updates.name is not None:
            row.name = updates.name
        if updates.data is not None:
            row.data = self._serialize(updates.data)
        row.updated_at = next_timestamp(row.updated_at)
        await self.session.commit()
        await self.session.refresh(row)
        logger.info("template_updated", template_id=row.id)
        return self._to_read(row)

    async def delete(self, template_id: int) -> bool:
        result = await self.session.execute(delete(Template).where(Template.id == template_id))
        await self.session.commit()
        deleted = (result.rowcount or 0) > 0
        if deleted:
            logger.info("template_deleted", template_id=template_id)
        return deleted
