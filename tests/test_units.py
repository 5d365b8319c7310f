"""Tests for unit conversion and coordinate types."""

import math

import pint
import pytest

from common.types import GeoCoordinate, PlanarCoordinate
from common.units import LINEAR_UNITS, UnitLookupError, angle_to_radians, linear_unit_to_meter


class TestLinearUnits:
    @pytest.mark.parametrize("unit_id, meters", [
        ("m", 1.0),
        ("km", 1000.0),
        ("ft", 0.3048),
        ("us-ft", 1200 / 3937),
        ("kmi", 1852.0),
        ("mi", 1609.344),
    ])
    def test_known_units(self, unit_id, meters):
        assert linear_unit_to_meter(unit_id) == pytest.approx(meters, rel=1e-12)

    def test_every_unit_resolves(self):
        for unit_id in LINEAR_UNITS:
            assert linear_unit_to_meter(unit_id) > 0

    def test_unknown_unit(self):
        with pytest.raises(UnitLookupError):
            linear_unit_to_meter("furlong")


class TestAngles:
    def test_degrees(self):
        assert angle_to_radians(180.0) == pytest.approx(math.pi)

    def test_other_angular_unit(self):
        assert angle_to_radians(200.0, "grad") == pytest.approx(math.pi)

    def test_non_angle_rejected(self):
        with pytest.raises(pint.DimensionalityError):
            angle_to_radians(1.0, "meter")


class TestCoordinates:
    def test_geo_coordinate_round_trip(self):
        coordinate = GeoCoordinate.from_degrees(-80.0, 25.0)
        assert coordinate.to_degrees() == pytest.approx((-80.0, 25.0))

    def test_longitude_normalized(self):
        coordinate = GeoCoordinate(longitude=1.5 * math.pi, latitude=0.0)
        assert coordinate.longitude == pytest.approx(-0.5 * math.pi)

    def test_latitude_validated(self):
        with pytest.raises(ValueError):
            GeoCoordinate(longitude=0.0, latitude=45.0)

    def test_planar_coordinates(self):
        assert PlanarCoordinate(1.0, 2.0).coordinates == (1.0, 2.0)
