"""
Forward/Inverse Envelope shared by every projection.

`Projection` wraps a strategy with the projection-agnostic steps: range
validation, reduction to the central meridian, scaling by the semi-major
axis and scale factor, false easting/northing and linear unit conversion.
Every family goes through exactly this code, so a strategy only ever sees
unit-scale coordinates.

Domain Policy
-------------
Geographic input is validated, not wrapped:

- latitude must lie in [-π/2, π/2]; an overshoot of at most 1e-12 rad is
  snapped to the pole, anything larger raises `OutOfDomain`;
- longitude must lie in [-π, π] with the same 1e-12 slack;
- non-finite input raises `OutOfDomain`.

After subtracting the central meridian the longitude offset is wrapped to
[-π, π] (unless ``over`` is set); on the way back the recovered longitude
is wrapped the same way.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from common.constants import NumericalTolerances
from projections.exceptions import OutOfDomain
from projections.projection_parameters import ProjectionParameters
from projections.strategy import HALF_PI, ProjectionStrategy, normalize_longitude

COORDINATE_EPSILON = NumericalTolerances.COORDINATE_EPSILON.value


@dataclass(frozen=True)
class Projection:
    """A ready-to-use projection: parameters plus a strategy.

    Instances hold no per-call state; one instance may serve any number of
    concurrent `forward` / `inverse` calls.

    Parameters
    ----------
    params : ProjectionParameters
        Common setup (ellipsoid, scale, offsets, units).
    strategy : ProjectionStrategy
        Family-specific raw forward/inverse pair.
    name : str
        Registry name of the family.
    description : str
        Human-readable description.
    """
    params: ProjectionParameters
    strategy: ProjectionStrategy
    name: str = ""
    description: str = ""

    def __post_init__(self):
        if not isinstance(self.strategy, ProjectionStrategy):
            raise TypeError(
                f"{type(self.strategy).__name__} does not provide raw_forward/raw_inverse"
            )

    @property
    def _scale(self) -> float:
        return self.params.semi_major_axis * self.params.scale_factor

    def forward(self, lon: float, lat: float) -> Tuple[float, float]:
        """Project geographic coordinates to planar coordinates.

        Parameters
        ----------
        lon, lat : float
            Longitude and latitude in radians.

        Returns
        -------
        Tuple[float, float]
            (x, y) in the projection's linear unit.

        Raises
        ------
        OutOfDomain
            If the input is outside the geographic domain or outside the
            domain of this projection.
        """
        if not (math.isfinite(lon) and math.isfinite(lat)):
            raise OutOfDomain(f"Non-finite coordinate ({lon}, {lat})")

        overshoot = abs(lat) - HALF_PI
        if overshoot > COORDINATE_EPSILON:
            raise OutOfDomain(f"Latitude {lat} outside [-π/2, π/2]", value=lat, limit=HALF_PI)
        if overshoot > 0.0:
            lat = math.copysign(HALF_PI, lat)

        if abs(lon) - math.pi > COORDINATE_EPSILON:
            raise OutOfDomain(f"Longitude {lon} outside [-π, π]", value=lon, limit=math.pi)

        lam = lon - self.params.central_meridian
        if not self.params.over:
            lam = normalize_longitude(lam)

        x, y = self.strategy.raw_forward(lam, lat)

        p = self.params
        scale = self._scale
        return (
            (scale * x + p.false_easting) / p.to_meter,
            (scale * y + p.false_northing) / p.to_meter,
        )

    def inverse(self, x: float, y: float) -> Tuple[float, float]:
        """Recover geographic coordinates from planar coordinates.

        Parameters
        ----------
        x, y : float
            Planar coordinates in the projection's linear unit.

        Returns
        -------
        Tuple[float, float]
            (lon, lat) in radians.

        Raises
        ------
        OutOfDomain
            If the point has no geographic counterpart.
        ConvergenceFailure
            If an iterative inverse did not converge.
        """
        if not (math.isfinite(x) and math.isfinite(y)):
            raise OutOfDomain(f"Non-finite coordinate ({x}, {y})")

        p = self.params
        scale = self._scale
        x_raw = (x * p.to_meter - p.false_easting) / scale
        y_raw = (y * p.to_meter - p.false_northing) / scale

        lam, lat = self.strategy.raw_inverse(x_raw, y_raw)

        lon = lam + p.central_meridian
        if not p.over:
            lon = normalize_longitude(lon)
        return lon, lat

    def forward_degrees(self, lon_deg: float, lat_deg: float) -> Tuple[float, float]:
        """`forward` taking degrees instead of radians."""
        return self.forward(math.radians(lon_deg), math.radians(lat_deg))

    def inverse_degrees(self, x: float, y: float) -> Tuple[float, float]:
        """`inverse` returning degrees instead of radians."""
        lon, lat = self.inverse(x, y)
        return math.degrees(lon), math.degrees(lat)

    def __repr__(self) -> str:
        return (
            f"Projection(name={self.name!r}, a={self.params.semi_major_axis}, "
            f"es={self.params.eccentricity_squared}, k0={self.params.scale_factor})"
        )
