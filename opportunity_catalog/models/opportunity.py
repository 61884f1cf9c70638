"""Opportunity - Catalog entry model plus create/update payloads."""

from datetime import date
from enum import Enum
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, Field, field_validator


class OpportunityType(str, Enum):
    """Closed set of catalog categories."""

    SCHOLARSHIP = "scholarship"
    INTERNSHIP = "internship"
    SUMMIT = "summit"
    COMPETITION = "competition"


DEFAULT_IMAGES = {
    OpportunityType.SCHOLARSHIP: "/assets/scholarship.jpg",
    OpportunityType.INTERNSHIP: "/assets/internship.jpg",
    OpportunityType.SUMMIT: "/assets/summit.jpg",
    OpportunityType.COMPETITION: "/assets/competition.jpg",
}

# Columns written to the opportunities table (tags live in the join table).
ROW_FIELDS = (
    "title",
    "organization",
    "type",
    "description",
    "full_description",
    "deadline",
    "location",
    "amount",
    "url",
    "image_url",
)


def _unique_names(names: list[str]) -> list[str]:
    return list(dict.fromkeys(names))


class Opportunity(BaseModel):
    """A catalog entry as shown in the list and detail views."""

    id: str = Field(..., description="Backend-assigned identifier")
    title: str = Field(..., description="Opportunity title")
    organization: str = Field(..., description="Offering organization")
    type: OpportunityType = Field(..., description="Category: scholarship, internship, summit, competition")

    # The list card shows `description`; the detail page shows `full_description`.
    description: str = Field(default="", description="Short description for the list view")
    full_description: str = Field(default="", description="Long description for the detail view")

    deadline: date = Field(..., description="Application deadline")
    location: str = Field(default="", description="Free-text location, e.g. 'United States', 'Global'")
    amount: Optional[str] = Field(None, description="Award or stipend, free text")
    url: str = Field(..., description="External application URL")
    image_url: Optional[str] = Field(None, description="Custom image; falls back to the category image")
    tags: list[str] = Field(default_factory=list, description="Tag names, unique")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return str(value) if value is not None else value

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: list[str]) -> list[str]:
        return _unique_names(value)

    @classmethod
    def from_row(cls, row: dict[str, Any], tags: Optional[list[str]] = None) -> "Opportunity":
        """Build a record from an opportunities row and its tag names."""
        return cls(**{**row, "tags": tags or []})

    def image_or_default(self) -> str:
        return self.image_url or DEFAULT_IMAGES[self.type]


def _require_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


RequiredText = Annotated[str, AfterValidator(_require_text)]
OptionalText = Annotated[Optional[str], AfterValidator(_blank_to_none)]


class OpportunityInput(BaseModel):
    """Payload for creating an opportunity from the CMS form."""

    title: RequiredText
    organization: RequiredText
    type: OpportunityType = OpportunityType.SCHOLARSHIP
    description: str = ""
    full_description: str = ""
    deadline: date
    location: str = ""
    amount: OptionalText = None
    url: RequiredText
    image_url: OptionalText = None
    tags: list[str] = Field(default_factory=list)

    def to_row(self) -> dict[str, Any]:
        """Return the opportunities-table row for this payload."""
        return self.model_dump(mode="json", include=set(ROW_FIELDS))


class OpportunityUpdate(BaseModel):
    """Partial update; only explicitly set fields are written.

    ``tags=None`` leaves tag links untouched, ``tags=[]`` clears them.
    """

    title: Optional[RequiredText] = None
    organization: Optional[RequiredText] = None
    type: Optional[OpportunityType] = None
    description: Optional[str] = None
    full_description: Optional[str] = None
    deadline: Optional[date] = None
    location: Optional[str] = None
    amount: OptionalText = None
    url: Optional[RequiredText] = None
    image_url: OptionalText = None
    tags: Optional[list[str]] = None

    def to_row(self) -> dict[str, Any]:
        """Return only the set columns, ready for an update call."""
        return self.model_dump(mode="json", include=set(ROW_FIELDS), exclude_unset=True)
