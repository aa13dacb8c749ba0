"""GPS coordinate checks used to decide which locations can be placed on the map."""
import math
from typing import Any

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


def is_valid_coordinate(value: Any) -> bool:
    """True iff value is a finite real number. Never raises."""
    # bool is an int subclass but never a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _in_range(value: Any, bounds: tuple[float, float]) -> bool:
    return is_valid_coordinate(value) and bounds[0] <= value <= bounds[1]


def has_valid_coordinates(location: Any) -> bool:
    """True iff both latitude and longitude are finite and inside their ranges.

    Works on any object with latitude/longitude attributes; a missing attribute counts as invalid.
    """
    return _in_range(getattr(location, "latitude", None), LATITUDE_RANGE) and _in_range(
        getattr(location, "longitude", None), LONGITUDE_RANGE
    )
