from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, RootModel

from pawpost.schemas.labels import label_tables
from pawpost.schemas.posts import PostRecord
from pawpost.services.formatter import format_post

router = APIRouter()


class PreviewRequest(RootModel[PostRecord]):
    pass


class PreviewResponse(BaseModel):
    kind: str
    text: str


@router.post("/preview", response_model=PreviewResponse)
async def preview_post(body: PreviewRequest) -> Any:
    """
    Render a post record into share-ready text.
    """
    post = body.root
    return PreviewResponse(kind=post.kind, text=format_post(post))


@router.get("/labels")
async def read_labels() -> Any:
    """
    Display labels for every enum used in posts.
    """
    return label_tables()
