"""
Local Distortion Diagnostics (Tissot's Indicatrix).

No flat map can represent a curved surface without distortion. This
module quantifies it for any registered projection by differentiating the
forward transform numerically, so a new family gets diagnostics without
writing its own scale-factor formulas.

Scientific Context
------------------
Domain: Cartography, differential geometry
Model: Tissot's indicatrix on the projection's sphere or ellipsoid

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual, pp. 20-27.
- Tissot, A. (1859). Mémoire sur la représentation des surfaces.
"""

from dataclasses import dataclass
import numpy as np

from common.constants import NumericalTolerances
from projections.ellipsoids import (
    radius_of_curvature_meridian,
    radius_of_curvature_prime_vertical,
)
from projections.envelope import Projection
from projections.exceptions import OutOfDomain

POLE_EPSILON = NumericalTolerances.POLE_EPSILON.value


@dataclass
class TissotIndicatrix:
    """Tissot's indicatrix describing local distortion at a point.

    The Tissot indicatrix shows how an infinitesimally small circle
    on the Earth's surface is distorted into an ellipse on the map.

    Attributes
    ----------
    meridian_scale : float
        Scale factor h along the meridian.
    parallel_scale : float
        Scale factor k along the parallel.
    semi_major : float
        Semi-major axis a' of the distortion ellipse.
    semi_minor : float
        Semi-minor axis b' of the distortion ellipse.
    area_scale : float
        Area distortion factor a' * b'.
    angular_distortion_rad : float
        Maximum angular distortion ω in radians.

    Notes
    -----
    - For a conformal projection: semi_major = semi_minor (circle, ω = 0)
    - For an equal-area projection: area_scale = 1.0
    """
    meridian_scale: float
    parallel_scale: float
    semi_major: float
    semi_minor: float
    area_scale: float
    angular_distortion_rad: float

    @property
    def is_conformal(self) -> bool:
        """Check if projection is locally conformal (circle, no angular distortion)."""
        return np.abs(self.semi_major - self.semi_minor) < 1e-6

    @property
    def is_equal_area(self) -> bool:
        """Check if projection is locally equal-area."""
        return np.abs(self.area_scale - 1.0) < 1e-6


def compute_tissot_indicatrix(
    projection: Projection,
    lon_rad: float,
    lat_rad: float,
    delta: float = 1e-6
) -> TissotIndicatrix:
    """Compute Tissot's indicatrix numerically.

    Parameters
    ----------
    projection : Projection
        The projection to analyze.
    lon_rad, lat_rad : float
        Location in radians.
    delta : float
        Small angular offset for numerical differentiation.

    Returns
    -------
    TissotIndicatrix
        Local distortion characteristics.

    Raises
    ------
    OutOfDomain
        If the point or its small neighborhood lies outside the projection's
        domain, or if the point is a pole.
    """
    if abs(abs(lat_rad) - np.pi / 2) <= POLE_EPSILON:
        raise OutOfDomain(
            "Tissot indicatrix is undefined at the poles", value=lat_rad, limit=np.pi / 2
        )

    params = projection.params
    to_meter = params.to_meter

    # ∂x/∂λ, ∂y/∂λ (east-west), central differences
    x_e, y_e = projection.forward(lon_rad + delta, lat_rad)
    x_w, y_w = projection.forward(lon_rad - delta, lat_rad)
    dxdl = (x_e - x_w) * to_meter / (2.0 * delta)
    dydl = (y_e - y_w) * to_meter / (2.0 * delta)

    # ∂x/∂φ, ∂y/∂φ (north-south); one-sided within delta of a pole
    north = min(lat_rad + delta, np.pi / 2)
    south = max(lat_rad - delta, -np.pi / 2)
    x_n, y_n = projection.forward(lon_rad, north)
    x_s, y_s = projection.forward(lon_rad, south)
    dxdp = (x_n - x_s) * to_meter / (north - south)
    dydp = (y_n - y_s) * to_meter / (north - south)

    M = radius_of_curvature_meridian(lat_rad, params.semi_major_axis, params.eccentricity_squared)
    N = radius_of_curvature_prime_vertical(lat_rad, params.semi_major_axis, params.eccentricity_squared)
    parallel_radius = N * np.cos(lat_rad)

    # Jacobian per unit ground distance; columns are the images of due
    # east and due north
    j11, j21 = dxdl / parallel_radius, dydl / parallel_radius
    j12, j22 = dxdp / M, dydp / M

    h = np.hypot(j12, j22)
    k = np.hypot(j11, j21)
    area_scale = np.abs(j11 * j22 - j12 * j21)

    # Closed-form singular values of the 2x2 Jacobian: a' = q + r, b' = |q - r|
    q = 0.5 * np.hypot(j11 + j22, j21 - j12)
    r = 0.5 * np.hypot(j11 - j22, j21 + j12)
    semi_major = q + r
    semi_minor = np.abs(q - r)

    return TissotIndicatrix(
        meridian_scale=float(h),
        parallel_scale=float(k),
        semi_major=float(semi_major),
        semi_minor=float(semi_minor),
        area_scale=float(area_scale),
        angular_distortion_rad=float(2.0 * np.arcsin(min(q, r) / max(q, r))),
    )
