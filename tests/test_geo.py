"""Tests for Haversine distance, unit conversion and coordinate bounds."""

import pytest

from app.core.geo import haversine_distance_km, is_valid_coordinate, km_to_miles

SEATTLE = (47.6062, -122.3321)
PORTLAND = (45.5152, -122.6784)
LONDON = (51.5074, -0.1278)


def test_distance_to_same_point_is_zero():
    assert haversine_distance_km(*SEATTLE, *SEATTLE) == 0.0


def test_seattle_to_portland_is_about_233_km():
    distance = haversine_distance_km(*SEATTLE, *PORTLAND)
    assert distance == pytest.approx(233, abs=2)


@pytest.mark.parametrize("a, b", [(SEATTLE, PORTLAND), (SEATTLE, LONDON), (PORTLAND, LONDON)])
def test_distance_is_symmetric(a, b):
    assert haversine_distance_km(*a, *b) == pytest.approx(haversine_distance_km(*b, *a))


def test_antipodal_points_are_half_circumference_apart():
    distance = haversine_distance_km(0.0, 0.0, 0.0, 180.0)
    assert distance == pytest.approx(3.141592653589793 * 6371.0)


def test_out_of_range_input_is_not_rejected():
    # Range checks belong to callers; the formula still returns a finite number
    assert haversine_distance_km(95.0, 0.0, 0.0, 0.0) > 0


def test_km_to_miles_uses_fixed_factor():
    assert km_to_miles(100.0) == pytest.approx(62.1371)
    assert km_to_miles(0.0) == 0.0


@pytest.mark.parametrize(
    "lat, lon, expected",
    [
        (0.0, 0.0, True),
        (90.0, 180.0, True),
        (-90.0, -180.0, True),
        (90.0001, 0.0, False),
        (-91.0, 0.0, False),
        (0.0, 180.5, False),
        (0.0, -181.0, False),
    ],
)
def test_is_valid_coordinate_bounds(lat, lon, expected):
    assert is_valid_coordinate(lat, lon) is expected
