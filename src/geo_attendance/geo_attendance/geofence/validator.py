"""Geofence checks: is a reported coordinate inside any office radius.

Everything here is pure and deterministic, so it can be tested without fakes.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ..core.constants import EARTH_RADIUS_METERS
from ..offices.model import Office


@dataclass(frozen=True)
class GeofenceResult:
    is_within_office: bool
    matched_office: Optional[Office] = None
    nearest_office: Optional[Office] = None
    distance_meters: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            "is_within_office": self.is_within_office,
            "matched_office_id": self.matched_office.office_id if self.matched_office else None,
            "nearest_office_id": self.nearest_office.office_id if self.nearest_office else None,
            "distance_meters": round(self.distance_meters, 1) if self.distance_meters is not None else None,
        }


def distance_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance (Haversine) in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Rounding can push `a` a hair past 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def _has_coordinates(lat: Optional[float], lng: Optional[float]) -> bool:
    if lat is None or lng is None:
        return False
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return False
    return not (lat == 0 or lng == 0)


def _usable(office: Office) -> bool:
    return office.is_active and office.radius_meters > 0


def is_within_office(lat: Optional[float], lng: Optional[float], offices: Iterable[Office]) -> bool:
    """True iff the point is within radius of at least one active office."""
    return GeofenceValidator(list(offices)).check(lat, lng).is_within_office


class GeofenceValidator:
    """Validates a coordinate against a fixed set of offices."""

    def __init__(self, offices: Sequence[Office]):
        self._offices = tuple(offices)

    @property
    def offices(self) -> Sequence[Office]:
        return self._offices

    def check(self, lat: Optional[float], lng: Optional[float]) -> GeofenceResult:
        if not _has_coordinates(lat, lng):
            return GeofenceResult(is_within_office=False)

        nearest: Optional[Office] = None
        nearest_distance: Optional[float] = None
        matched: Optional[Office] = None

        for office in self._offices:
            if not _usable(office):
                continue
            d = distance_meters(lat, lng, office.latitude, office.longitude)
            if nearest_distance is None or d < nearest_distance:
                nearest, nearest_distance = office, d
            if matched is None and d <= office.radius_meters:
                matched = office

        return GeofenceResult(
            is_within_office=matched is not None,
            matched_office=matched,
            nearest_office=nearest,
            distance_meters=nearest_distance,
        )
