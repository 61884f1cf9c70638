"""FilterCriteria - Immutable search/filter selection passed to the filter engine."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class FilterCriteria(BaseModel):
    """User-chosen filters. An empty group means "no constraint" for that group.

    Selections are OR-ed within a group and groups are AND-ed together.
    Deadline windows are day-count thresholds ("30", "60", "90"); values are
    kept as given and only interpreted by the engine, so a malformed window
    never fails construction.
    """

    model_config = {"frozen": True}

    query: str = Field(default="", description="Free-text query; empty disables text matching")
    categories: frozenset[str] = Field(default_factory=frozenset, description="Selected opportunity types")
    locations: frozenset[str] = Field(default_factory=frozenset, description="Selected location filters")
    deadline_windows: frozenset[str] = Field(default_factory=frozenset, description="Selected day-count windows")

    @field_validator("query", mode="before")
    @classmethod
    def _none_query(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("categories", "locations", "deadline_windows", mode="before")
    @classmethod
    def _to_str_set(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        if isinstance(value, (str, int)):
            value = [value]
        # Enum members contribute their value ("internship"), everything else its str().
        return frozenset(str(getattr(item, "value", item)) for item in value)

    @property
    def is_empty(self) -> bool:
        return not (self.query or self.categories or self.locations or self.deadline_windows)
