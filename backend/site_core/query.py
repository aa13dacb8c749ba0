"""Query/filter engine shared by the map and table views."""
from collections.abc import Iterable
from enum import Enum
from typing import Any, Optional

from site_core.coordinates import has_valid_coordinates
from site_core.status import LocationStatus, classify

SEARCH_FIELDS = ("location_name", "area", "supervisor_name", "qr_code_id")


class StatusFilter(str, Enum):
    """Status filter for list views; `all` disables status filtering."""
    all = "all"
    pending = "pending"
    partial = "partial"
    complete = "complete"


def matches_search(location: Any, term: str) -> bool:
    """Case-insensitive substring match on name, area, supervisor and QR code id."""
    needle = term.lower()
    for field in SEARCH_FIELDS:
        value = getattr(location, field, None)
        if value and needle in str(value).lower():
            return True
    return False


def filter_locations(
    locations: Iterable[Any],
    *,
    search: Optional[str] = None,
    status: StatusFilter | str = StatusFilter.all,
    require_valid_coordinates: bool = False,
) -> list[Any]:
    """Return the visible subset of locations, preserving input order.

    Map views pass require_valid_coordinates=True; table views keep rows without
    usable coordinates since their text fields are still shown.
    """
    status = StatusFilter(status)
    term = search or ""
    result = []
    for location in locations:
        if require_valid_coordinates and not has_valid_coordinates(location):
            continue
        if term and not matches_search(location, term):
            continue
        if status is not StatusFilter.all and classify(location).value != status.value:
            continue
        result.append(location)
    return result


def summarize(locations: Iterable[Any]) -> dict[str, int]:
    """Count locations per status, plus total."""
    counts = {"total": 0, **{s.value: 0 for s in LocationStatus}}
    for location in locations:
        counts["total"] += 1
        counts[classify(location).value] += 1
    return counts
