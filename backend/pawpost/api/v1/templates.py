from typing import Any, List

from fastapi import APIRouter, Depends, Response, status

from pawpost.api.deps import get_template_store, parse_id
from pawpost.core.exceptions import NotFoundError
from pawpost.schemas.template import TemplateCreate, TemplateRead, TemplateUpdate
from pawpost.services.template_store import TemplateStore

router = APIRouter()


@router.get("", response_model=List[TemplateRead])
async def read_templates(store: TemplateStore = Depends(get_template_store)) -> Any:
    return await store.list()


@router.get("/{template_id}", response_model=TemplateRead)
async def read_template(template_id: str, store: TemplateStore = Depends(get_template_store)) -> Any:
    template = await store.get(parse_id(template_id, "template"))
    if template is None:
        raise NotFoundError("Template not found")
    return template


@router.post("", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
async def create_template(template_in: TemplateCreate, store: TemplateStore = Depends(get_template_store)) -> Any:
    return await store.create(template_in)


@router.put("/{template_id}", response_model=TemplateRead)
async def update_template(
    template_id: str,
    template_in: TemplateUpdate,
    store: TemplateStore = Depends(get_template_store),
) -> Any:
    template = await store.update(parse_id(template_id, "template"), template_in)
    if template is None:
        raise NotFoundError("Template not found")
    return template


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_template(template_id: str, store: TemplateStore = Depends(get_template_store)):
    if not await store.delete(parse_id(template_id, "template")):
        raise NotFoundError("Template not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
