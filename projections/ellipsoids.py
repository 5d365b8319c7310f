"""
Reference Ellipsoids and Radii of Curvature.

This module holds the named figures of the Earth a parameter list may
select with ``ellps=`` and the curvature radii needed to interpret local
scale on them.

References
----------
- NIMA TR8350.2: WGS84 parameters
- PROJ.4 ellipsoid table (pj_ellps.c)
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping
import numpy as np

from common.constants import GeodeticConstants


@dataclass(frozen=True)
class EllipsoidParameters:
    """Parameters defining a reference ellipsoid.

    Attributes
    ----------
    a : float
        Semi-major axis (equatorial radius) in meters.
    f : float
        Flattening: f = (a - b) / a. Zero for a sphere.
    name : str
        Identifier for the ellipsoid.

    Derived Parameters
    ------------------
    b : float
        Semi-minor axis (polar radius) in meters.
    e2 : float
        First eccentricity squared: e² = (a² - b²) / a²
    ep2 : float
        Second eccentricity squared: e'² = (a² - b²) / b²
    """
    a: float
    f: float
    name: str

    @classmethod
    def from_axes(cls, a: float, b: float, name: str) -> 'EllipsoidParameters':
        """Build from both semi-axes."""
        return cls(a=a, f=(a - b) / a, name=name)

    @classmethod
    def from_inverse_flattening(cls, a: float, rf: float, name: str) -> 'EllipsoidParameters':
        return cls(a=a, f=1.0 / rf, name=name)

    @property
    def b(self) -> float:
        """Semi-minor axis in meters."""
        return self.a * (1 - self.f)

    @property
    def e2(self) -> float:
        """First eccentricity squared."""
        return self.f * (2 - self.f)

    @property
    def ep2(self) -> float:
        """Second eccentricity squared."""
        return self.e2 / (1 - self.e2)

    @property
    def is_sphere(self) -> bool:
        return self.f == 0.0


# WGS84 ellipsoid - the default figure of the Earth
WGS84Ellipsoid = EllipsoidParameters.from_inverse_flattening(
    a=GeodeticConstants.WGS84_SEMI_MAJOR_AXIS.value,
    rf=GeodeticConstants.WGS84_INVERSE_FLATTENING.value,
    name="WGS84"
)

GRS80Ellipsoid = EllipsoidParameters.from_inverse_flattening(
    a=GeodeticConstants.GRS80_SEMI_MAJOR_AXIS.value,
    rf=GeodeticConstants.GRS80_INVERSE_FLATTENING.value,
    name="GRS80"
)

# Named ellipsoids accepted by ``ellps=``
ELLIPSOIDS: Mapping[str, EllipsoidParameters] = MappingProxyType({
    "WGS84": WGS84Ellipsoid,
    "GRS80": GRS80Ellipsoid,
    "clrk66": EllipsoidParameters.from_axes(6_378_206.4, 6_356_583.8, "clrk66"),
    "clrk80": EllipsoidParameters.from_inverse_flattening(6_378_249.145, 293.4663, "clrk80"),
    "intl": EllipsoidParameters.from_inverse_flattening(6_378_388.0, 297.0, "intl"),
    "bessel": EllipsoidParameters.from_inverse_flattening(6_377_397.155, 299.1528128, "bessel"),
    "airy": EllipsoidParameters.from_axes(6_377_563.396, 6_356_256.910, "airy"),
    "krass": EllipsoidParameters.from_inverse_flattening(6_378_245.0, 298.3, "krass"),
    "sphere": EllipsoidParameters(
        a=GeodeticConstants.AUTHALIC_SPHERE_RADIUS.value, f=0.0, name="sphere"
    ),
})


def radius_of_curvature_meridian(
    latitude_rad: float,
    a: float,
    e2: float
) -> float:
    """Compute the radius of curvature in the meridian plane.

    Parameters
    ----------
    latitude_rad : float
        Latitude in radians.
    a : float
        Semi-major axis.
    e2 : float
        First eccentricity squared (0 for a sphere).

    Returns
    -------
    float
        Radius of curvature M, in the unit of `a`.

    Notes
    -----
    M = a(1 - e²) / (1 - e² sin²φ)^(3/2)
    """
    sin_lat = np.sin(latitude_rad)
    denominator = (1 - e2 * sin_lat**2) ** 1.5
    return a * (1 - e2) / denominator


def radius_of_curvature_prime_vertical(
    latitude_rad: float,
    a: float,
    e2: float
) -> float:
    """Compute the radius of curvature in the prime vertical.

    Notes
    -----
    N = a / (1 - e² sin²φ)^(1/2)
    """
    sin_lat = np.sin(latitude_rad)
    denominator = np.sqrt(1 - e2 * sin_lat**2)
    return a / denominator
