"""Shared fixtures for the projection engine tests."""

import math

import pytest

from projections import create_projection


@pytest.fixture
def bipc():
    return create_projection("+proj=bipc")


@pytest.fixture
def bipc_noskew():
    return create_projection("+proj=bipc +bns")


@pytest.fixture
def spherical_merc():
    return create_projection("+proj=merc +R=6371000")


@pytest.fixture
def wgs84_merc():
    return create_projection("+proj=merc +ellps=WGS84")


@pytest.fixture
def americas_points():
    """(lon, lat) in radians, well inside the bipolar conic's domain."""
    degrees = [
        (-100.0, 40.0),
        (-120.0, 50.0),
        (-90.0, 20.0),
        (-60.0, -20.0),
        (-70.0, -40.0),
    ]
    return [(math.radians(lon), math.radians(lat)) for lon, lat in degrees]
