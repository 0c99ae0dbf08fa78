from __future__ import annotations

import math
from dataclasses import replace

import pytest

from src.geo_attendance.geo_attendance.geofence.validator import GeofenceValidator, distance_meters, is_within_office


def test_distance_is_zero_for_same_point():
    assert distance_meters(17.4, 78.5, 17.4, 78.5) == pytest.approx(0.0)


def test_distance_one_degree_latitude_is_about_111km():
    assert distance_meters(0.0, 10.0, 1.0, 10.0) == pytest.approx(111_195, rel=1e-3)


def test_distance_is_symmetric_and_finite_for_antipodes():
    d = distance_meters(10.0, 20.0, -10.0, -160.0)
    assert math.isfinite(d)
    assert d == pytest.approx(math.pi * 6_371_000.0, rel=1e-6)
    assert distance_meters(17.4, 78.5, 17.41, 78.51) == pytest.approx(distance_meters(17.41, 78.51, 17.4, 78.5))


def test_point_near_office_is_inside(hq_office):
    # ~55 m north of the office
    assert is_within_office(17.4005, 78.5, [hq_office]) is True


def test_point_beyond_radius_is_outside(hq_office):
    # ~0.0009 deg lat = ~100.07 m, just past a 100 m radius
    assert is_within_office(17.4009, 78.5, [hq_office]) is False
    assert is_within_office(17.41, 78.5, [hq_office]) is False


def test_boundary_distance_counts_as_inside(hq_office):
    d = distance_meters(17.4009, 78.5, hq_office.latitude, hq_office.longitude)
    widened = replace(hq_office, radius_meters=d)
    assert is_within_office(17.4009, 78.5, [widened]) is True


def test_any_matching_office_is_enough(hq_office, branch_office):
    assert is_within_office(12.9353, 77.6245, [hq_office, branch_office]) is True


def test_inactive_or_zero_radius_offices_never_match(hq_office):
    inactive = replace(hq_office, is_active=False)
    no_radius = replace(hq_office, office_id=9, radius_meters=0)
    assert is_within_office(17.4, 78.5, [inactive, no_radius]) is False


@pytest.mark.parametrize(
    "lat,lng",
    [(None, 78.5), (17.4, None), (0.0, 78.5), (17.4, 0.0), (float("nan"), 78.5), (17.4, float("inf"))],
)
def test_missing_or_zero_coordinates_are_outside(hq_office, lat, lng):
    assert is_within_office(lat, lng, [hq_office]) is False


def test_empty_office_set_is_outside():
    assert is_within_office(17.4, 78.5, []) is False


def test_check_reports_nearest_office_and_distance(hq_office, branch_office):
    result = GeofenceValidator([hq_office, branch_office]).check(17.41, 78.5)

    assert result.is_within_office is False
    assert result.matched_office is None
    assert result.nearest_office.office_id == hq_office.office_id
    assert result.distance_meters == pytest.approx(1112, abs=2)
    assert result.to_dict()["nearest_office_id"] == 1


def test_check_matches_office(hq_office):
    result = GeofenceValidator([hq_office]).check(17.4, 78.5)

    assert result.is_within_office is True
    assert result.matched_office == hq_office
