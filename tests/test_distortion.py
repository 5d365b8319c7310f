"""Tests for Tissot's indicatrix."""

import math
from dataclasses import dataclass

import pytest

from projections.distortion import compute_tissot_indicatrix
from projections.envelope import Projection
from projections.exceptions import OutOfDomain
from projections.projection_parameters import ProjectionParameters


@dataclass(frozen=True)
class CylindricalEqualArea:
    def raw_forward(self, lam, phi):
        return lam, math.sin(phi)

    def raw_inverse(self, x, y):
        return x, math.asin(y)


class TestConformal:
    def test_spherical_mercator(self, spherical_merc):
        tissot = compute_tissot_indicatrix(spherical_merc, math.radians(10), math.radians(60))
        assert tissot.meridian_scale == pytest.approx(2.0, rel=1e-6)
        assert tissot.parallel_scale == pytest.approx(2.0, rel=1e-6)
        assert tissot.area_scale == pytest.approx(4.0, rel=1e-6)
        assert tissot.is_conformal
        assert not tissot.is_equal_area
        assert tissot.angular_distortion_rad == pytest.approx(0.0, abs=1e-6)

    def test_ellipsoidal_mercator(self, wgs84_merc):
        tissot = compute_tissot_indicatrix(wgs84_merc, 0.0, math.radians(45))
        assert tissot.is_conformal
        assert tissot.meridian_scale == pytest.approx(tissot.parallel_scale, rel=1e-6)

    def test_bipolar_conic(self, bipc):
        tissot = compute_tissot_indicatrix(bipc, math.radians(-100), math.radians(40))
        assert tissot.is_conformal


class TestPoles:
    @pytest.mark.parametrize("lat", [math.pi / 2, -math.pi / 2])
    def test_pole_rejected(self, bipc, lat):
        with pytest.raises(OutOfDomain) as excinfo:
            compute_tissot_indicatrix(bipc, math.radians(-100), lat)
        assert excinfo.value.limit == pytest.approx(math.pi / 2)

    def test_near_pole_is_finite(self, spherical_merc):
        tissot = compute_tissot_indicatrix(spherical_merc, 0.0, math.radians(89))
        assert math.isfinite(tissot.area_scale)
        assert tissot.parallel_scale == pytest.approx(1.0 / math.cos(math.radians(89)), rel=1e-6)


class TestEqualArea:
    def test_cylindrical_equal_area(self):
        projection = Projection(
            params=ProjectionParameters(semi_major_axis=1.0),
            strategy=CylindricalEqualArea(),
            name="cea",
        )
        lat = math.radians(60)
        tissot = compute_tissot_indicatrix(projection, 0.0, lat)
        assert tissot.is_equal_area
        assert not tissot.is_conformal
        assert tissot.parallel_scale == pytest.approx(1.0 / math.cos(lat), rel=1e-6)
        assert tissot.meridian_scale == pytest.approx(math.cos(lat), rel=1e-6)
        assert tissot.semi_major == pytest.approx(2.0, rel=1e-6)
        assert tissot.semi_minor == pytest.approx(0.5, rel=1e-6)
        # sin(ω/2) = (a' - b') / (a' + b')
        assert tissot.angular_distortion_rad == pytest.approx(2.0 * math.asin(0.6), rel=1e-6)
