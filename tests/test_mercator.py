"""Tests for the Mercator projection, spherical and ellipsoidal."""

import math

import pytest

from projections import create_projection
from projections.exceptions import ConvergenceFailure, MalformedParameter, OutOfDomain
from projections.families.merc import EllipsoidalMercator, MercatorConfig

R = 6371000.0


class TestSpherical:
    def test_known_values(self, spherical_merc):
        x, y = spherical_merc.forward(math.radians(10), math.radians(45))
        assert x == pytest.approx(R * math.radians(10))
        assert y == pytest.approx(R * math.log(math.tan(math.pi / 4 + math.radians(45) / 2)))

    def test_equator_on_x_axis(self, spherical_merc):
        assert spherical_merc.forward(0.5, 0.0)[1] == pytest.approx(0.0, abs=1e-9)

    def test_true_scale_latitude(self):
        projection = create_projection("+proj=merc +R=6371000 +lat_ts=60")
        x, _ = projection.forward(1.0, 0.0)
        assert x == pytest.approx(R * 0.5)

    def test_round_trip(self, spherical_merc):
        for lon_deg, lat_deg in [(-170, -80), (0, 0), (45, 30), (179, 85)]:
            lon, lat = math.radians(lon_deg), math.radians(lat_deg)
            assert spherical_merc.inverse(*spherical_merc.forward(lon, lat)) == pytest.approx(
                (lon, lat), abs=1e-12
            )

    def test_pole_out_of_domain(self, spherical_merc):
        with pytest.raises(OutOfDomain):
            spherical_merc.forward(0.0, math.pi / 2)

    @pytest.mark.parametrize("northing, pole", [(-1e10, -math.pi / 2), (1e10, math.pi / 2)])
    def test_huge_northing_approaches_pole(self, spherical_merc, northing, pole):
        lon, lat = spherical_merc.inverse(0.0, northing)
        assert lon == pytest.approx(0.0)
        assert lat == pytest.approx(pole, abs=1e-12)

    def test_inverse_symmetric_about_equator(self, spherical_merc):
        _, north = spherical_merc.inverse(0.0, 3.0e6)
        _, south = spherical_merc.inverse(0.0, -3.0e6)
        assert south == -north


class TestEllipsoidal:
    def test_round_trip(self, wgs84_merc):
        for lon_deg, lat_deg in [(-170, -80), (0, 0), (45, 30), (179, 85)]:
            lon, lat = math.radians(lon_deg), math.radians(lat_deg)
            assert wgs84_merc.inverse(*wgs84_merc.forward(lon, lat)) == pytest.approx(
                (lon, lat), abs=1e-10
            )

    def test_northing_below_spherical(self, wgs84_merc):
        sphere = create_projection("+proj=merc +R=6378137")
        _, y_ellipsoid = wgs84_merc.forward(0.0, math.radians(45))
        _, y_sphere = sphere.forward(0.0, math.radians(45))
        assert y_ellipsoid < y_sphere

    def test_known_value(self, wgs84_merc):
        # EPSG:3395 northing of 45°N
        _, y = wgs84_merc.forward(0.0, math.radians(45))
        assert y == pytest.approx(5591295.9185533915, abs=1e-3)

    @pytest.mark.parametrize("northing, pole", [(-1e10, -math.pi / 2), (1e10, math.pi / 2)])
    def test_huge_northing_approaches_pole(self, wgs84_merc, northing, pole):
        _, lat = wgs84_merc.inverse(0.0, northing)
        assert lat == pytest.approx(pole, abs=1e-12)

    def test_southern_round_trip(self, wgs84_merc):
        lon, lat = math.radians(-60), math.radians(-75)
        assert wgs84_merc.inverse(*wgs84_merc.forward(lon, lat)) == pytest.approx(
            (lon, lat), abs=1e-10
        )

    def test_convergence_failure(self):
        strategy = EllipsoidalMercator(e=0.0818191908426215, max_iterations=1)
        with pytest.raises(ConvergenceFailure) as excinfo:
            strategy.raw_inverse(0.0, 0.8)
        assert excinfo.value.iterations == 1


class TestConfig:
    def test_true_scale_latitude_at_pole_rejected(self):
        with pytest.raises(MalformedParameter):
            create_projection("+proj=merc +lat_ts=90")

    def test_default(self):
        assert MercatorConfig().true_scale_latitude == 0.0
