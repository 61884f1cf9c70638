"""Filter engine for browsing the catalog."""

from .engine import days_until, filter_opportunities, parse_window
from .options import CATEGORY_LABELS, DEADLINE_WINDOWS, LOCATION_OPTIONS

__all__ = [
    "filter_opportunities",
    "days_until",
    "parse_window",
    "CATEGORY_LABELS",
    "DEADLINE_WINDOWS",
    "LOCATION_OPTIONS",
]
