"""
Bipolar Oblique Conic Conformal projection (``bipc``).

Two oblique conic projections, each centered on its own pole, joined along
the great circle through both poles. It was designed for a map of North
and South America: one pole lies at 20°S 110°W, the other at 45°N
19°59'36"W, and each point is projected from whichever pole governs its
side of the dividing line.

Scientific Context
------------------
Domain: Cartography, conformal conic projections
Model: Sphere only (the eccentricity is ignored)

Parameters
----------
``bns``
    No skew: rotate the output so that the axis of the map is vertical.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof.
  Paper 1395, pp. 116-123.
- Miller, O.M. (1941). Bipolar Oblique Conic Conformal Projection.
"""

import math
from dataclasses import dataclass
from typing import Tuple

from common.constants import NumericalTolerances
from projections.exceptions import ConvergenceFailure, OutOfDomain
from projections.parameters import ParameterStore
from projections.projection_parameters import ProjectionParameters
from projections.strategy import HALF_PI, clamped_acos, clamped_asin

NAME = "bipc"
DESCRIPTION = "Bipolar conic of western hemisphere"

POLE_EPSILON = NumericalTolerances.POLE_EPSILON.value
ITERATION_TOLERANCE = NumericalTolerances.ITERATION_TOLERANCE.value
MAX_ITERATIONS = 10

# Geometry of the two cones. Longitudes in radians, azimuths from the
# northern pole.
LAMBDA_B = -0.34894976726250681539    # longitude of the northern pole
N = 0.63055844881274687180            # cone constant
F = 1.89724742567461030582            # radius scale
AZ_AB = 0.81650043674686363166        # azimuth from the southern to the northern pole
AZ_BA = 1.82261843856185925133        # azimuth from the northern to the southern pole
T = 1.27246578267089012270
RHO_C = 1.20709121521568721927        # distance of each cone apex from the map center
COS_AZ_C = 0.69691523038678375519     # de-skew rotation
SIN_AZ_C = 0.71715351331143607555
C45 = 0.70710678118654752469          # northern pole basis
S45 = 0.70710678118654752410
C20 = 0.93969262078590838411          # southern pole basis
S20 = -0.34202014332566873287
R110 = 1.91986217719376253360         # 110°, longitude offset of the southern pole
R104 = 1.81514242207410275904         # 104°, angular distance between the poles


@dataclass(frozen=True)
class BipcConfig:
    """Projection-specific setup of ``bipc``.

    Attributes
    ----------
    noskew : bool
        Rotate the output so the map axis is vertical (``bns``).
    """
    noskew: bool = False

    @classmethod
    def from_store(cls, store: ParameterStore) -> 'BipcConfig':
        return cls(noskew=store.as_flag("bns"))


def _tan_power(half_angle: float) -> float:
    """tan(half_angle) ** N, for angles inside the cone's domain."""
    if half_angle < 0.0:
        raise OutOfDomain(
            f"Angular distance beyond {math.degrees(R104):.0f}° from the governing pole",
            value=half_angle, limit=0.0
        )
    return math.tan(half_angle) ** N


def _polar_distance(r: float) -> float:
    """Angular distance from the cone apex for a polar radius `r`."""
    ratio = r / F
    if ratio > 1.0:
        # 2 atan(t) = pi - 2 atan(1/t), which keeps the power below 1
        return math.pi - 2.0 * math.atan((1.0 / ratio) ** (1.0 / N))
    return 2.0 * math.atan(ratio ** (1.0 / N))


@dataclass(frozen=True)
class BipolarObliqueConic:
    """Raw forward/inverse of the bipolar oblique conic, on the unit sphere."""
    config: BipcConfig = BipcConfig()
    max_iterations: int = MAX_ITERATIONS

    def raw_forward(self, lam: float, phi: float) -> Tuple[float, float]:
        cos_phi = math.cos(phi)
        sin_phi = math.sin(phi)
        dlam = LAMBDA_B - lam
        cos_dlam = math.cos(dlam)
        sin_dlam = math.sin(dlam)

        at_pole = abs(abs(phi) - HALF_PI) < POLE_EPSILON
        if at_pole:
            azimuth = math.pi if phi < 0.0 else 0.0
            tan_phi = 0.0
        else:
            tan_phi = sin_phi / cos_phi
            azimuth = math.atan2(sin_dlam, C45 * (tan_phi - cos_dlam))

        # Points beyond the pole-to-pole line are governed by the southern pole
        southern = azimuth > AZ_BA
        if southern:
            dlam = lam + R110
            cos_dlam = math.cos(dlam)
            sin_dlam = math.sin(dlam)
            z = clamped_acos(S20 * sin_phi + C20 * cos_phi * cos_dlam, "polar distance")
            if not at_pole:
                azimuth = math.atan2(sin_dlam, C20 * tan_phi - S20 * cos_dlam)
            azimuth_vertex = AZ_AB
            y = RHO_C
        else:
            z = clamped_acos(S45 * (sin_phi + cos_phi * cos_dlam), "polar distance")
            azimuth_vertex = AZ_BA
            y = -RHO_C

        t = _tan_power(0.5 * z)
        r = F * t
        al = clamped_acos((t + _tan_power(0.5 * (R104 - z))) / T, "overlap angle")

        t = N * (azimuth_vertex - azimuth)
        if abs(t) < al:
            r /= math.cos(al + (t if southern else -t))

        x = r * math.sin(t)
        y += (-r if southern else r) * math.cos(t)

        if self.config.noskew:
            x, y = -x * COS_AZ_C - y * SIN_AZ_C, -y * COS_AZ_C + x * SIN_AZ_C
        return x, y

    def raw_inverse(self, x: float, y: float) -> Tuple[float, float]:
        if self.config.noskew:
            x, y = -x * COS_AZ_C + y * SIN_AZ_C, -y * COS_AZ_C - x * SIN_AZ_C

        southern = x < 0.0
        if southern:
            y = RHO_C - y
            s, c = S20, C20
            azimuth_vertex = AZ_AB
        else:
            y += RHO_C
            s, c = S45, C45
            azimuth_vertex = AZ_BA

        rho = math.hypot(x, y)
        azimuth = math.atan2(x, y)
        abs_azimuth = abs(azimuth)

        r = r_last = rho
        z = 0.0
        residual = math.inf
        for _ in range(self.max_iterations):
            z = _polar_distance(r)
            al = clamped_acos(
                (_tan_power(0.5 * z) + _tan_power(0.5 * (R104 - z))) / T, "overlap angle"
            )
            if abs_azimuth < al:
                r = rho * math.cos(al + (azimuth if southern else -azimuth))
            residual = abs(r_last - r)
            if residual < ITERATION_TOLERANCE:
                break
            r_last = r
        else:
            raise ConvergenceFailure(
                f"Polar distance did not converge in {self.max_iterations} iterations",
                iterations=self.max_iterations, residual=residual
            )

        azimuth = azimuth_vertex - azimuth / N
        phi = clamped_asin(s * math.cos(z) + c * math.sin(z) * math.cos(azimuth), "latitude")
        # atan2(sin Az, c / tan z - s cos Az), scaled by sin z so the apex (z = 0) is finite
        sin_z = math.sin(z)
        lam = math.atan2(math.sin(azimuth) * sin_z, c * math.cos(z) - s * math.cos(azimuth) * sin_z)
        if southern:
            lam -= R110
        else:
            lam = LAMBDA_B - lam
        return lam, phi


def create_strategy(params: ProjectionParameters) -> BipolarObliqueConic:
    return BipolarObliqueConic(config=BipcConfig.from_store(params.store))
