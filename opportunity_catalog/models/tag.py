"""Tag - Shared label entity and its opportunity association."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class Tag(BaseModel):
    """A tag row. ``name`` is the natural key and is case-sensitive."""

    id: str = Field(..., description="Backend-assigned identifier")
    name: str = Field(..., description="Globally unique tag name")

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return str(value) if value is not None else value


class TagLink(BaseModel):
    """One opportunity_tags join row."""

    opportunity_id: str
    tag_id: str
