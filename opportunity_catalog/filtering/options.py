"""Selectable filter values offered by the catalog sidebar."""

from ..models.opportunity import OpportunityType

# Location filters with special meaning in the engine.
INTERNATIONAL = "International"
GLOBAL = "Global"
HOME_COUNTRY = "United States"

LOCATION_OPTIONS = [
    HOME_COUNTRY,
    INTERNATIONAL,
    "Europe",
    GLOBAL,
    "Remote",
]

DEADLINE_WINDOWS = {
    "30": "Next 30 days",
    "60": "Next 60 days",
    "90": "Next 90 days",
}

CATEGORY_LABELS = {
    OpportunityType.SCHOLARSHIP: "Scholarship",
    OpportunityType.INTERNSHIP: "Internship",
    OpportunityType.SUMMIT: "Summit",
    OpportunityType.COMPETITION: "Competition",
}
