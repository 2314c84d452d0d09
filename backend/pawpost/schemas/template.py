from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from pawpost.schemas.posts import PostRecord


class TemplateCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    data: PostRecord


class TemplateUpdate(BaseModel):
    """Partial update; only the supplied fields change."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    data: Optional[PostRecord] = None


class TemplateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    data: PostRecord
    created_at: datetime
    updated_at: datetime
