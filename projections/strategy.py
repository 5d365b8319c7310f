"""
Projection Strategy contract and shared numerical helpers.

A strategy is the raw forward/inverse pair of one projection family. It
works on the unit sphere (or unit ellipsoid), with longitudes already
reduced to the central meridian, and knows nothing about scale, offsets,
units or range checks; the envelope in `projections.envelope` does all of
that identically for every family.

Any object with these two methods satisfies the contract; no base class is
required::

    class MyStrategy:
        def raw_forward(self, lam, phi): ...
        def raw_inverse(self, x, y): ...

Strategies must be stateless across calls and report failures only by
raising `OutOfDomain` or `ConvergenceFailure`.
"""

import math
from typing import Protocol, Tuple, runtime_checkable

from common.constants import NumericalTolerances
from projections.exceptions import OutOfDomain

DOMAIN_CLAMP_EPSILON = NumericalTolerances.DOMAIN_CLAMP_EPSILON.value
ONE_PLUS_EPSILON = 1.0 + DOMAIN_CLAMP_EPSILON

TWO_PI = 2.0 * math.pi
HALF_PI = 0.5 * math.pi


@runtime_checkable
class ProjectionStrategy(Protocol):
    """Raw forward/inverse pair of one projection family."""

    def raw_forward(self, lam: float, phi: float) -> Tuple[float, float]:
        """Project (longitude offset, latitude) in radians to unit-scale (x, y)."""
        ...

    def raw_inverse(self, x: float, y: float) -> Tuple[float, float]:
        """Recover (longitude offset, latitude) in radians from unit-scale (x, y)."""
        ...


def clamp_unit(value: float, what: str = "argument") -> float:
    """Clamp `value` to [-1, 1] if it overshoots by at most the clamp epsilon.

    Raises
    ------
    OutOfDomain
        If ``|value|`` exceeds ``1 + DOMAIN_CLAMP_EPSILON`` or is NaN.
    """
    if math.isnan(value):
        raise OutOfDomain(f"{what} is not a number", value=value, limit=1.0)
    if value > 1.0 or value < -1.0:
        if abs(value) > ONE_PLUS_EPSILON:
            raise OutOfDomain(
                f"{what} {value!r} outside [-1, 1] beyond tolerance",
                value=value, limit=ONE_PLUS_EPSILON
            )
        return 1.0 if value > 0 else -1.0
    return value


def clamped_acos(value: float, what: str = "acos argument") -> float:
    """acos with clamp-if-near, fail-if-far handling of the argument."""
    return math.acos(clamp_unit(value, what))


def clamped_asin(value: float, what: str = "asin argument") -> float:
    """asin with clamp-if-near, fail-if-far handling of the argument."""
    return math.asin(clamp_unit(value, what))


def normalize_longitude(lam: float) -> float:
    """Reduce a longitude to [-π, π]."""
    if abs(lam) <= math.pi:
        return lam
    lam = math.fmod(lam + math.pi, TWO_PI)
    if lam < 0:
        lam += TWO_PI
    return lam - math.pi
