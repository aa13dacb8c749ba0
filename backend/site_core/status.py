"""Completion status derived from before/after photo presence."""
from enum import Enum
from typing import Any


class LocationStatus(str, Enum):
    """Work-site documentation state. Never stored; recomputed on every read."""
    pending = "pending"
    partial = "partial"
    complete = "complete"


def classify(location: Any) -> LocationStatus:
    """Return pending (no photos), partial (one photo) or complete (both).

    Only presence matters; photo URLs and timestamps are never inspected.
    """
    present = sum(
        1 for photo in (getattr(location, "before_photo", None), getattr(location, "after_photo", None))
        if photo is not None
    )
    if present == 2:
        return LocationStatus.complete
    if present == 1:
        return LocationStatus.partial
    return LocationStatus.pending
