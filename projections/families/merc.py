"""
Mercator projection (``merc``), spherical and ellipsoidal forms.

A cylindrical conformal projection. The spherical form is closed in both
directions; the ellipsoidal inverse recovers the latitude from the
isometric latitude by fixed-point iteration.

Parameters
----------
``lat_ts``
    Latitude of true scale (default 0). Scales the output by
    cos(lat_ts) on the sphere, or by the ellipsoidal equivalent.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual, pp. 38-47.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from common.constants import NumericalTolerances
from projections.exceptions import ConvergenceFailure, MalformedParameter, OutOfDomain
from projections.parameters import ParameterStore
from projections.projection_parameters import ProjectionParameters
from projections.strategy import HALF_PI

NAME = "merc"
DESCRIPTION = "Mercator"

POLE_EPSILON = NumericalTolerances.POLE_EPSILON.value
ITERATION_TOLERANCE = NumericalTolerances.ITERATION_TOLERANCE.value
MAX_ITERATIONS = 15


@dataclass(frozen=True)
class MercatorConfig:
    """Projection-specific setup of ``merc``."""
    true_scale_latitude: float = 0.0

    @classmethod
    def from_store(cls, store: ParameterStore) -> 'MercatorConfig':
        lat_ts = store.as_angle("lat_ts", 0.0)
        if abs(lat_ts) >= HALF_PI:
            raise MalformedParameter(
                f"Latitude of true scale must be inside (-90°, 90°), got {math.degrees(lat_ts)}°",
                key="lat_ts"
            )
        return cls(true_scale_latitude=lat_ts)


def _check_pole(phi: float) -> None:
    if abs(abs(phi) - HALF_PI) <= POLE_EPSILON:
        raise OutOfDomain("Mercator is undefined at the poles", value=phi, limit=HALF_PI)


@dataclass(frozen=True)
class SphericalMercator:
    """Mercator on the unit sphere."""
    config: MercatorConfig = MercatorConfig()

    @property
    def k(self) -> float:
        return math.cos(self.config.true_scale_latitude)

    def raw_forward(self, lam: float, phi: float) -> Tuple[float, float]:
        _check_pole(phi)
        k = self.k
        return k * lam, k * math.log(math.tan(0.25 * math.pi + 0.5 * phi))

    def raw_inverse(self, x: float, y: float) -> Tuple[float, float]:
        k = self.k
        # Solved for |y| and mirrored, so exp never sees a positive argument
        phi = HALF_PI - 2.0 * math.atan(math.exp(-abs(y) / k))
        return x / k, math.copysign(phi, y)


@dataclass(frozen=True)
class EllipsoidalMercator:
    """Mercator on the unit ellipsoid of eccentricity `e`."""
    e: float
    config: MercatorConfig = MercatorConfig()
    max_iterations: int = MAX_ITERATIONS

    @property
    def k(self) -> float:
        phi = self.config.true_scale_latitude
        sin_phi = math.sin(phi)
        return math.cos(phi) / math.sqrt(1.0 - self.e * self.e * sin_phi * sin_phi)

    def _ts(self, phi: float) -> float:
        """Exponential of the negated isometric latitude."""
        e_sin = self.e * math.sin(phi)
        return math.tan(0.5 * (HALF_PI - phi)) / ((1.0 - e_sin) / (1.0 + e_sin)) ** (0.5 * self.e)

    def raw_forward(self, lam: float, phi: float) -> Tuple[float, float]:
        _check_pole(phi)
        k = self.k
        return k * lam, -k * math.log(self._ts(phi))

    def raw_inverse(self, x: float, y: float) -> Tuple[float, float]:
        k = self.k
        ts = math.exp(-abs(y) / k)
        half_e = 0.5 * self.e

        phi = HALF_PI - 2.0 * math.atan(ts)
        dphi = math.inf
        for _ in range(self.max_iterations):
            e_sin = self.e * math.sin(phi)
            dphi = HALF_PI - 2.0 * math.atan(ts * ((1.0 - e_sin) / (1.0 + e_sin)) ** half_e) - phi
            phi += dphi
            if abs(dphi) <= ITERATION_TOLERANCE:
                return x / k, math.copysign(phi, y)
        raise ConvergenceFailure(
            f"Latitude did not converge in {self.max_iterations} iterations",
            iterations=self.max_iterations, residual=abs(dphi)
        )


def create_spherical(params: ProjectionParameters) -> SphericalMercator:
    return SphericalMercator(config=MercatorConfig.from_store(params.store))


def create_ellipsoidal(params: ProjectionParameters) -> EllipsoidalMercator:
    return EllipsoidalMercator(e=params.eccentricity, config=MercatorConfig.from_store(params.store))
