"""
Form State Controller.

A post being edited is never mutated in place. Every user action is a small
immutable action object, and `reduce(post, action)` returns a new post that
shares untouched items with the previous version. `FormController` keeps the
current version plus history and is what a UI session holds on to.

Drafts may be incomplete (a freshly added animal has a blank name), so the
reducer builds models without validation; `FormController.validated()` runs
the full schema before anything is saved.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union, get_args

import structlog
from pydantic import TypeAdapter, ValidationError

from pawpost.core.exceptions import RecordValidationError
from pawpost.schemas.posts import POST_MODELS, PostBase, new_item_id, post_record_adapter
from pawpost.schemas.template import TemplateCreate
from pawpost.services.formatter import format_post

logger = structlog.get_logger()

# New items start with one blank input slot for these lists, like the form does
NEW_ITEM_SEEDS = {"photos": [""], "social_media": [""]}


@dataclass(frozen=True)
class SetField:
    field: str
    value: Any

@dataclass(frozen=True)
class AddItem:
    collection: str
    values: Dict[str, Any] = field(default_factory=dict)

@dataclass(frozen=True)
class UpdateItem:
    collection: str
    index: int
    values: Dict[str, Any]

@dataclass(frozen=True)
class RemoveItem:
    collection: str
    index: int

@dataclass(frozen=True)
class MoveItem:
    collection: str
    index: int
    direction: str  # "up" | "down"

@dataclass(frozen=True)
class AddListValue:
    """Append to a string list; on an item when `collection` is set, else on the post."""
    field: str
    value: str = ""
    collection: Optional[str] = None
    index: Optional[int] = None

@dataclass(frozen=True)
class SetListValue:
    field: str
    value_index: int
    value: str
    collection: Optional[str] = None
    index: Optional[int] = None

@dataclass(frozen=True)
class RemoveListValue:
    field: str
    value_index: int
    collection: Optional[str] = None
    index: Optional[int] = None

@dataclass(frozen=True)
class AddHashtag:
    tag: str

@dataclass(frozen=True)
class RemoveHashtag:
    index: int

@dataclass(frozen=True)
class AddSpecialization:
    index: int
    value: str

@dataclass(frozen=True)
class RemoveSpecialization:
    index: int
    value_index: int

@dataclass(frozen=True)
class Reset:
    post: PostBase


FormAction = Union[
    SetField, AddItem, UpdateItem, RemoveItem, MoveItem,
    AddListValue, SetListValue, RemoveListValue,
    AddHashtag, RemoveHashtag, AddSpecialization, RemoveSpecialization, Reset,
]


def default_post(kind: str = "rescue") -> PostBase:
    """Empty form for the given post variant."""
    model = POST_MODELS[kind]
    title_field = "case_title" if kind == "blacklist" else "title"
    return model.model_construct(**{title_field: ""})


def _coerce(model, name: str, value: Any) -> Any:
    if name not in model.model_fields:
        raise KeyError(f"{model.__name__} has no field '{name}'")
    if value is None:
        return None
    # Type coercion only (enum strings -> members); constraints are checked on save
    return TypeAdapter(model.model_fields[name].annotation).validate_python(value)


def _item_model(post: PostBase, collection: str):
    annotation = type(post).model_fields[collection].annotation
    (item_cls,) = get_args(annotation)
    return item_cls


def _new_item(item_cls, values: Dict[str, Any]):
    data: Dict[str, Any] = {"id": new_item_id()}
    for name, info in item_cls.model_fields.items():
        if name == "id":
            continue
        if name in NEW_ITEM_SEEDS:
            data[name] = list(NEW_ITEM_SEEDS[name])
        elif info.is_required():
            data[name] = ""
    for name, value in values.items():
        data[name] = _coerce(item_cls, name, value)
    return item_cls.model_construct(**data)


def _items(post: PostBase, collection: str) -> List:
    return list(getattr(post, collection))


def _replace_item(post: PostBase, collection: str, index: int, item) -> PostBase:
    items = _items(post, collection)
    items[index] = item
    return post.model_copy(update={collection: items})


def _update_string_list(post: PostBase, action, change) -> PostBase:
    if action.collection is None:
        values = change(list(getattr(post, action.field)))
        return post.model_copy(update={action.field: values})
    item = _items(post, action.collection)[action.index]
    values = change(list(getattr(item, action.field)))
    return _replace_item(post, action.collection, action.index, item.model_copy(update={action.field: values}))


def reduce(post: PostBase, action: FormAction) -> PostBase:
    """Apply one action and return the next version of the post."""
    if isinstance(action, Reset):
        return action.post

    if isinstance(action, SetField):
        return post.model_copy(update={action.field: _coerce(type(post), action.field, action.value)})

    if isinstance(action, AddItem):
        item = _new_item(_item_model(post, action.collection), action.values)
        return post.model_copy(update={action.collection: _items(post, action.collection) + [item]})

    if isinstance(action, UpdateItem):
        item = _items(post, action.collection)[action.index]
        changes = {name: _coerce(type(item), name, value) for name, value in action.values.items()}
        changes.pop("id", None)
        return _replace_item(post, action.collection, action.index, item.model_copy(update=changes))

    if isinstance(action, RemoveItem):
        items = _items(post, action.collection)
        del items[action.index]
        return post.model_copy(update={action.collection: items})

    if isinstance(action, MoveItem):
        items = _items(post, action.collection)
        target = action.index - 1 if action.direction == "up" else action.index + 1
        if target < 0 or target >= len(items):
            return post
        items[action.index], items[target] = items[target], items[action.index]
        return post.model_copy(update={action.collection: items})

    if isinstance(action, AddListValue):
        return _update_string_list(post, action, lambda values: values + [action.value])

    if isinstance(action, SetListValue):
        def set_value(values):
            values[action.value_index] = action.value
            return values
        return _update_string_list(post, action, set_value)

    if isinstance(action, RemoveListValue):
        def remove_value(values):
            del values[action.value_index]
            return values
        return _update_string_list(post, action, remove_value)

    if isinstance(action, AddHashtag):
        tag = action.tag.strip().lstrip("#").strip()
        if not tag or tag in post.hashtags:
            return post
        return post.model_copy(update={"hashtags": list(post.hashtags) + [tag]})

    if isinstance(action, RemoveHashtag):
        tags = list(post.hashtags)
        del tags[action.index]
        return post.model_copy(update={"hashtags": tags})

    if isinstance(action, AddSpecialization):
        value = action.value.strip()
        item = _items(post, "organizations")[action.index]
        if not value or value in item.specializations:
            return post
        updated = item.model_copy(update={"specializations": list(item.specializations) + [value]})
        return _replace_item(post, "organizations", action.index, updated)

    if isinstance(action, RemoveSpecialization):
        item = _items(post, "organizations")[action.index]
        values = list(item.specializations)
        del values[action.value_index]
        return _replace_item(post, "organizations", action.index, item.model_copy(update={"specializations": values}))

    raise TypeError(f"Unknown form action: {action!r}")


class FormController:
    """
    Holds the post being edited for one form session.
    Each dispatch produces a new version; earlier versions stay intact.
    """

    def __init__(self, post: Optional[PostBase] = None, kind: str = "rescue"):
        self._history: List[PostBase] = [post if post is not None else default_post(kind)]

    @property
    def state(self) -> PostBase:
        return self._history[-1]

    @property
    def version(self) -> int:
        return len(self._history) - 1

    def dispatch(self, action: FormAction) -> PostBase:
        next_state = reduce(self.state, action)
        if next_state is not self.state:
            self._history.append(next_state)
        return next_state

    def undo(self) -> PostBase:
        if len(self._history) > 1:
            self._history.pop()
        return self.state

    def preview(self) -> str:
        """Live preview text for the current draft."""
        return format_post(self.state)

    def validated(self) -> PostBase:
        """Full schema validation of the current draft."""
        try:
            return post_record_adapter.validate_python(self.state.model_dump())
        except ValidationError as exc:
            raise RecordValidationError.from_pydantic(exc, "Post is incomplete")

    def load_template(self, template) -> PostBase:
        return self.dispatch(Reset(template.data))

    async def save_as_template(self, store, name: str):
        if not name or not name.strip():
            raise RecordValidationError(
                "Please enter a template name",
                errors=[{"field": "name", "message": "Template name is required", "type": "missing"}],
            )
        template = await store.create(TemplateCreate(name=name.strip(), data=self.validated()))
        logger.info("form_saved_as_template", template_id=template.id, version=self.version)
        return template
