"""Client-side filter engine for the opportunity catalog.

Applies four predicate groups to an in-memory list of opportunities:
text query, category, location and deadline window. Groups are AND-ed,
selections within a group are OR-ed, and an empty group is no constraint.
"""

from __future__ import annotations

import logging
import math
from datetime import date, datetime, time, timezone
from typing import Iterable, Optional, Union

from ..errors import CriteriaValidationError
from ..models.filter_criteria import FilterCriteria
from ..models.opportunity import Opportunity
from .options import GLOBAL, HOME_COUNTRY, INTERNATIONAL

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60

AsOf = Union[date, datetime]


def filter_opportunities(
    records: Iterable[Opportunity],
    criteria: FilterCriteria,
    as_of: Optional[AsOf] = None,
) -> list[Opportunity]:
    """Return the records matching every active criterion, in input order.

    Args:
        records: Opportunities to filter (typically deadline-ascending from the store).
        criteria: Selected filters.
        as_of: Reference "today" for deadline windows. A ``date`` gives exact
            day arithmetic; a ``datetime`` rounds partial days up. Defaults to
            the current UTC time.

    Returns:
        New list holding the matching records. Never raises for malformed
        criteria; see ``parse_window``.
    """
    records = list(records)
    if criteria.is_empty:
        return records

    if as_of is None:
        as_of = datetime.now(timezone.utc)

    query = criteria.query.lower()
    windows = _active_windows(criteria.deadline_windows)

    return [
        opp for opp in records
        if _matches_text(opp, query)
        and _matches_category(opp, criteria.categories)
        and _matches_location(opp, criteria.locations)
        and _matches_deadline(opp, windows, as_of)
    ]


def days_until(deadline: date, as_of: AsOf) -> int:
    """Whole calendar days from ``as_of`` to ``deadline``, rounded up.

    Negative once the deadline has passed; 0 when it is due today.
    """
    if isinstance(as_of, datetime):
        # Dates are midnight UTC when compared against an aware timestamp.
        tz = timezone.utc if as_of.tzinfo is not None else None
        deadline_at = datetime.combine(deadline, time.min, tzinfo=tz)
        delta = deadline_at - as_of
        return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)
    return (deadline - as_of).days


def parse_window(value: object) -> int:
    """Parse a deadline-window threshold ("30") into a day count.

    Raises:
        CriteriaValidationError: value is not a non-negative integer.
    """
    if isinstance(value, bool):
        raise CriteriaValidationError("deadline window", value)
    try:
        days = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise CriteriaValidationError("deadline window", value) from exc
    if days < 0:
        raise CriteriaValidationError("deadline window", value)
    return days


def _active_windows(selected: frozenset[str]) -> Optional[list[int]]:
    """Parse the selected windows; None means the deadline group is inactive."""
    if not selected:
        return None

    windows = []
    for value in sorted(selected):
        try:
            windows.append(parse_window(value))
        except CriteriaValidationError as exc:
            logger.debug("Ignoring deadline window: %s", exc)

    if not windows:
        logger.debug("No usable deadline windows in %s; deadline filter disabled", sorted(selected))
        return None
    return windows


def _matches_text(opp: Opportunity, query: str) -> bool:
    if not query:
        return True
    fields = [opp.title, opp.organization, opp.description, *opp.tags]
    return any(query in field.lower() for field in fields)


def _matches_category(opp: Opportunity, categories: frozenset[str]) -> bool:
    if not categories:
        return True
    return opp.type.value in categories


def _matches_location(opp: Opportunity, locations: frozenset[str]) -> bool:
    if not locations:
        return True
    return any(_location_filter_matches(loc, opp.location) for loc in locations)


def _location_filter_matches(selected: str, location: str) -> bool:
    # "International" is a complement of the home country, so "Global" also satisfies it.
    if selected == INTERNATIONAL:
        return location != HOME_COUNTRY
    if selected == GLOBAL:
        return location == GLOBAL
    return selected.lower() in location.lower()


def _matches_deadline(opp: Opportunity, windows: Optional[list[int]], as_of: AsOf) -> bool:
    if windows is None:
        return True
    remaining = days_until(opp.deadline, as_of)
    return any(0 <= remaining <= window for window in windows)
