"""Tests for the bipolar oblique conic conformal projection."""

import math
from concurrent.futures import ThreadPoolExecutor

import pytest

from projections import create_projection
from projections.exceptions import ConvergenceFailure, OutOfDomain
from projections.families.bipc import (
    MAX_ITERATIONS,
    RHO_C,
    BipcConfig,
    BipolarObliqueConic,
)
from projections.parameters import parse_parameters


class TestConfig:
    def test_noskew_flag(self):
        assert BipcConfig.from_store(parse_parameters("+proj=bipc +bns")).noskew
        assert not BipcConfig.from_store(parse_parameters("+proj=bipc")).noskew


class TestRoundTrip:
    def test_skewed(self, bipc, americas_points):
        for lon, lat in americas_points:
            x, y = bipc.forward(lon, lat)
            lon2, lat2 = bipc.inverse(x, y)
            assert lon2 == pytest.approx(lon, abs=1e-7)
            assert lat2 == pytest.approx(lat, abs=1e-7)

    def test_noskew(self, bipc_noskew, americas_points):
        for lon, lat in americas_points:
            x, y = bipc_noskew.forward(lon, lat)
            lon2, lat2 = bipc_noskew.inverse(x, y)
            assert lon2 == pytest.approx(lon, abs=1e-7)
            assert lat2 == pytest.approx(lat, abs=1e-7)

    def test_with_offsets_and_units(self, americas_points):
        projection = create_projection("+proj=bipc +bns +x_0=1000 +y_0=-2000 +units=km +lon_0=-10")
        for lon, lat in americas_points:
            x, y = projection.forward(lon, lat)
            assert projection.inverse(x, y) == pytest.approx((lon, lat), abs=1e-7)


class TestForward:
    def test_noskew_is_a_rotation(self, bipc, bipc_noskew, americas_points):
        for lon, lat in americas_points:
            skewed = bipc.forward(lon, lat)
            straight = bipc_noskew.forward(lon, lat)
            assert math.hypot(*skewed) == pytest.approx(math.hypot(*straight))

    def test_output_in_semi_major_units(self, bipc):
        x, y = bipc.forward(math.radians(-100), math.radians(40))
        raw_x, raw_y = bipc.strategy.raw_forward(math.radians(-100), math.radians(40))
        assert x == pytest.approx(raw_x * 6378137.0)
        assert y == pytest.approx(raw_y * 6378137.0)

    @pytest.mark.parametrize("lat", [math.pi / 2, -math.pi / 2])
    def test_poles_are_finite(self, bipc, lat):
        x, y = bipc.forward(0.0, lat)
        assert math.isfinite(x) and math.isfinite(y)

    def test_far_side_of_globe_out_of_domain(self, bipc):
        with pytest.raises(OutOfDomain):
            bipc.forward(math.radians(120), 0.0)

    def test_western_pacific_out_of_domain(self, bipc):
        with pytest.raises(OutOfDomain):
            bipc.forward_degrees(160.0, -10.0)


class TestInverse:
    def test_convergence_failure(self):
        strategy = BipolarObliqueConic(max_iterations=1)
        with pytest.raises(ConvergenceFailure) as excinfo:
            strategy.raw_inverse(1e-4, -RHO_C + 0.1)
        assert excinfo.value.iterations == 1
        assert excinfo.value.residual > 0

    @pytest.mark.parametrize("lon, lat", [(-110.0, -14.0), (-28.0, 40.0)])
    def test_no_convergence_near_cone_apex(self, bipc, lon, lat):
        x, y = bipc.forward_degrees(lon, lat)
        with pytest.raises(ConvergenceFailure) as excinfo:
            bipc.inverse(x, y)
        assert excinfo.value.iterations == MAX_ITERATIONS == 10

    @pytest.mark.parametrize("y", [1e250, -1e250])
    def test_huge_radius_out_of_domain(self, bipc, y):
        with pytest.raises(OutOfDomain):
            bipc.inverse(0.0, y)

    def test_cone_apex_is_finite(self):
        lam, phi = BipolarObliqueConic().raw_inverse(0.0, -RHO_C)
        assert phi == pytest.approx(math.pi / 4)
        assert math.isfinite(lam)


class TestStatelessness:
    def test_concurrent_matches_sequential(self, bipc):
        points = [
            (math.radians(lon), math.radians(lat))
            for lon in range(-150, -30, 5)
            for lat in range(-50, 70, 5)
        ]

        def forward(point):
            try:
                return bipc.forward(*point)
            except OutOfDomain:
                return None

        sequential = [forward(p) for p in points]
        with ThreadPoolExecutor(max_workers=8) as pool:
            concurrent = list(pool.map(forward, points))
        assert concurrent == sequential
