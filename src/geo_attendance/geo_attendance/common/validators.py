from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import MissingLocation, ValidationError


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def require_coordinates(lat: Any, lng: Any) -> tuple[float, float]:
    """Return (lat, lng) as floats or raise MissingLocation.

    Zero is treated as missing: browsers report 0/0 when geolocation failed.
    """
    lat_f = _as_float(lat)
    lng_f = _as_float(lng)
    if lat_f is None or lng_f is None or lat_f == 0 or lng_f == 0:
        raise MissingLocation()
    if not (-90.0 <= lat_f <= 90.0) or not (-180.0 <= lng_f <= 180.0):
        raise MissingLocation("Location coordinates are out of range")
    return lat_f, lng_f


def optional_accuracy(value: Any) -> Optional[float]:
    accuracy = _as_float(value)
    if accuracy is not None and accuracy < 0:
        return None
    return accuracy


def require_positive_int(value: Any, field_name: str, *, default: int) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a positive integer") from None
    if number <= 0:
        raise ValidationError(f"{field_name} must be a positive integer")
    return number
