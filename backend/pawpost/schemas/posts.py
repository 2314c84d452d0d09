"""
Canonical post record schema.

These models are the single definition of a post: request validation, the
text formatter, the form state controller and template persistence all work
from them. Three explicit variants share the `kind` discriminator:

- rescue     -> RescuePost      (adoption / foster / lost & found ...)
- blacklist  -> BlacklistPost   (fraud case)
- alert      -> BlacklistAlert  (animal welfare alert)
"""

import uuid
from datetime import date, datetime
from typing import Annotated, List, Literal, Optional, Union

from pydantic import AfterValidator, AnyHttpUrl, BaseModel, EmailStr, Field, TypeAdapter, ValidationError, model_validator

from pawpost.schemas.labels import (
    AlertSeverity,
    AlertStatus,
    CaseStatus,
    Gender,
    PostType,
    Urgency,
    ViolationCategory,
)

_url_adapter = TypeAdapter(AnyHttpUrl)
_email_adapter = TypeAdapter(EmailStr)


def new_item_id() -> str:
    return uuid.uuid4().hex


def parse_iso_date(value: str) -> date:
    """Accepts YYYY-MM-DD or a full ISO-8601 datetime."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()


def _check_date(value: Optional[str]) -> Optional[str]:
    if value:
        try:
            parse_iso_date(value)
        except ValueError:
            raise ValueError("must be an ISO-8601 date (YYYY-MM-DD)")
    return value


def _check_url(value: Optional[str]) -> Optional[str]:
    # Validate without normalizing; the text is rendered exactly as typed.
    if value:
        try:
            _url_adapter.validate_python(value)
        except ValidationError:
            raise ValueError("must be a valid http(s) URL")
    return value


def _check_email(value: Optional[str]) -> Optional[str]:
    if value:
        try:
            _email_adapter.validate_python(value)
        except ValidationError:
            raise ValueError("must be a valid email address")
    return value


OptionalDate = Annotated[Optional[str], AfterValidator(_check_date)]
OptionalUrl = Annotated[Optional[str], AfterValidator(_check_url)]
OptionalEmail = Annotated[Optional[str], AfterValidator(_check_email)]


class SubRecord(BaseModel):
    id: str = Field(default_factory=new_item_id)


# --- Rescue post -----------------------------------------------------------

class Animal(SubRecord):
    name: str = Field(..., min_length=1)
    species: Optional[str] = None
    breed: Optional[str] = None
    age: Optional[str] = None
    color: Optional[str] = None
    gender: Optional[Gender] = None
    microchip_id: Optional[str] = None
    medical_conditions: Optional[str] = None
    special_needs: Optional[str] = None
    photos: List[str] = Field(default_factory=list)


class ContactPerson(SubRecord):
    name: str = Field(..., min_length=1)
    role: Optional[str] = None
    phone: Optional[str] = None
    email: OptionalEmail = None
    address: Optional[str] = None
    social_media: List[str] = Field(default_factory=list)


class RescueOrganization(SubRecord):
    name: str = Field(..., min_length=1)
    registration: Optional[str] = None
    website: OptionalUrl = None
    phone: Optional[str] = None
    email: OptionalEmail = None
    address: Optional[str] = None
    capacity: Optional[str] = None
    social_media: List[str] = Field(default_factory=list)
    specializations: List[str] = Field(default_factory=list)


# --- Fraud blacklist case --------------------------------------------------

class Individual(SubRecord):
    name: str = Field(..., min_length=1)
    dob: OptionalDate = None
    phone: Optional[str] = None
    email: OptionalEmail = None
    address: Optional[str] = None
    social_media: List[str] = Field(default_factory=list)


class Organization(SubRecord):
    name: str = Field(..., min_length=1)
    registration: Optional[str] = None
    website: OptionalUrl = None
    phone: Optional[str] = None
    address: Optional[str] = None


# --- Animal welfare alert --------------------------------------------------

class FlaggedIndividual(SubRecord):
    name: str = Field(..., min_length=1)
    role: Optional[str] = None
    phone: Optional[str] = None
    email: OptionalEmail = None
    address: Optional[str] = None
    aliases: List[str] = Field(default_factory=list)
    social_media: List[str] = Field(default_factory=list)
    photos: List[str] = Field(default_factory=list)


class FlaggedOrganization(SubRecord):
    name: str = Field(..., min_length=1)
    registration: Optional[str] = None
    website: OptionalUrl = None
    phone: Optional[str] = None
    email: OptionalEmail = None
    address: Optional[str] = None
    social_media: List[str] = Field(default_factory=list)


class Violation(SubRecord):
    description: str = Field(..., min_length=1)
    category: ViolationCategory = ViolationCategory.OTHER
    date: OptionalDate = None
    location: Optional[str] = None
    evidence: List[str] = Field(default_factory=list)


# --- Post records ----------------------------------------------------------

class PostBase(BaseModel):
    hashtags: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_item_ids(self):
        for field_name, value in self:
            if not isinstance(value, list):
                continue
            ids = [item.id for item in value if isinstance(item, SubRecord)]
            if len(ids) != len(set(ids)):
                raise ValueError(f"{field_name} contains duplicate item ids")
        return self


class RescuePost(PostBase):
    kind: Literal["rescue"] = "rescue"
    title: str = Field(..., min_length=1)
    urgency: Urgency = Urgency.MEDIUM
    post_type: PostType = PostType.ADOPTION
    description: Optional[str] = None
    animals: List[Animal] = Field(default_factory=list)
    contact_persons: List[ContactPerson] = Field(default_factory=list)
    organizations: List[RescueOrganization] = Field(default_factory=list)
    location: Optional[str] = None
    deadline: OptionalDate = None
    requirements: Optional[str] = None
    additional_info: Optional[str] = None


class BlacklistPost(PostBase):
    kind: Literal["blacklist"] = "blacklist"
    case_title: str = Field(..., min_length=1)
    incident_date: OptionalDate = None
    case_status: CaseStatus = CaseStatus.INVESTIGATING
    brief_description: Optional[str] = None
    individuals: List[Individual] = Field(default_factory=list)
    aliases: List[str] = Field(default_factory=list)
    organizations: List[Organization] = Field(default_factory=list)
    summary_statement: Optional[str] = None


class BlacklistAlert(PostBase):
    kind: Literal["alert"] = "alert"
    title: str = Field(..., min_length=1)
    severity: AlertSeverity = AlertSeverity.MEDIUM
    status: AlertStatus = AlertStatus.INVESTIGATING
    incident_date: OptionalDate = None
    location: Optional[str] = None
    description: Optional[str] = None
    animal_welfare_impact: Optional[str] = None
    individuals: List[FlaggedIndividual] = Field(default_factory=list)
    organizations: List[FlaggedOrganization] = Field(default_factory=list)
    violations: List[Violation] = Field(default_factory=list)
    recommended_actions: Optional[str] = None


PostRecord = Annotated[
    Union[RescuePost, BlacklistPost, BlacklistAlert],
    Field(discriminator="kind"),
]

post_record_adapter = TypeAdapter(PostRecord)

POST_MODELS = {
    "rescue": RescuePost,
    "blacklist": BlacklistPost,
    "alert": BlacklistAlert,
}
