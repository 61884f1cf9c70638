"""Shared Pydantic models for the opportunity catalog."""

from .opportunity import Opportunity, OpportunityInput, OpportunityType, OpportunityUpdate
from .tag import Tag, TagLink
from .filter_criteria import FilterCriteria

__all__ = [
    "Opportunity",
    "OpportunityInput",
    "OpportunityType",
    "OpportunityUpdate",
    "Tag",
    "TagLink",
    "FilterCriteria",
]
