import re
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, HttpUrl, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel


# Enumerations
class PositionType(str, Enum):
    FULL_TIME = "Full Time"
    PART_TIME = "Part Time"
    CONTRACTOR = "Contractor"
    UNKNOWN = "Unknown"


class ApplicationStatus(str, Enum):
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    REJECTED = "Rejected"
    OFFER = "Offer"


DEFAULT_LOCATION = "Unknown"

_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)
_URL_ADAPTER = TypeAdapter(HttpUrl)


def normalize_link(value) -> str:
    """
    Normalize a job posting link.

    Empty values become "", values without a scheme are assumed to be https,
    and anything left must parse as an http(s) URL.
    """
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError("Must be a valid URL")
    trimmed = value.strip()
    if not trimmed:
        return ""
    if not _SCHEME_RE.match(trimmed):
        trimmed = f"https://{trimmed}"
    try:
        _URL_ADAPTER.validate_python(trimmed)
    except PydanticValidationError:
        raise ValueError("Must be a valid URL")
    return trimmed


def _required_text(value: str, field_name: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{field_name} is required")
    return value


class _WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
    )


# Job Application Schemas
class JobApplicationCreate(_WireModel):
    model_config = ConfigDict(extra="forbid", validate_default=True)

    company: str
    position: str
    position_type: PositionType = PositionType.UNKNOWN
    location: str = DEFAULT_LOCATION
    link: str = ""
    date_applied: Optional[date] = None
    status: ApplicationStatus = ApplicationStatus.APPLIED

    @field_validator("company", "position")
    @classmethod
    def check_required_text(cls, v, info):
        return _required_text(v, info.field_name)

    # An explicit null on create means "use the default".
    @field_validator("position_type", mode="before")
    @classmethod
    def default_position_type(cls, v):
        return PositionType.UNKNOWN if v is None else v

    @field_validator("location", mode="before")
    @classmethod
    def default_location(cls, v):
        return DEFAULT_LOCATION if v is None else v

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v):
        return ApplicationStatus.APPLIED if v is None else v

    @field_validator("link", mode="before")
    @classmethod
    def check_link(cls, v):
        return normalize_link(v)


class JobApplicationUpdate(_WireModel):
    """Partial update: only the keys present in the payload are applied."""

    model_config = ConfigDict(extra="forbid")

    company: Optional[str] = None
    position: Optional[str] = None
    position_type: Optional[PositionType] = None
    location: Optional[str] = None
    link: Optional[str] = None
    date_applied: Optional[date] = None
    status: Optional[ApplicationStatus] = None

    @field_validator("company", "position", "position_type", "location", "status", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("company", "position")
    @classmethod
    def check_required_text(cls, v, info):
        return _required_text(v, info.field_name)

    @field_validator("link", mode="before")
    @classmethod
    def check_link(cls, v):
        return normalize_link(v)


class JobApplication(_WireModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    company: str
    position: str
    position_type: str
    location: str
    date_applied: Optional[date] = None
    link: str
    status: str
    created_at: datetime


class JobPage(_WireModel):
    data: List[JobApplication]
    total: int
    page: int
    total_pages: int
