"""
Geodetic Constants and Numerical Tolerances for the Projection Engine.

This module provides the reference-ellipsoid constants and the numerical
tolerances shared by every projection family. All constants carry their
unit and provenance so that a value found in a formula can be traced back
to its source.

References
----------
- WGS84 parameters: NIMA TR8350.2, Third Edition, 2000
- GRS80 parameters: Moritz, H. (2000). Geodetic Reference System 1980.
- Tolerances: PROJ.4 cartographic projection library (G. Evenden, USGS)
"""

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Constant:
    """A constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodeticConstants:
    """Registry of reference-ellipsoid constants.

    The WGS84 ellipsoid is the default figure of the Earth whenever a
    parameter list names neither an ellipsoid nor a sphere radius.
    """

    # =========================================================================
    # WGS84 Ellipsoid Parameters
    # Reference: NIMA TR8350.2, Third Edition, 2000
    # =========================================================================

    WGS84_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,  # Defined exactly
        unit="m",
        source="WGS84, NIMA TR8350.2",
        description="Semi-major axis (equatorial radius) of WGS84 ellipsoid"
    )

    WGS84_INVERSE_FLATTENING: Final[Constant] = Constant(
        value=298.257223563,
        uncertainty=0.0,  # Defined exactly
        unit="dimensionless",
        source="WGS84, NIMA TR8350.2",
        description="Inverse flattening of WGS84 ellipsoid: 1/f = a / (a - b)"
    )

    # =========================================================================
    # GRS80 Ellipsoid Parameters
    # =========================================================================

    GRS80_SEMI_MAJOR_AXIS: Final[Constant] = Constant(
        value=6_378_137.0,
        uncertainty=0.0,
        unit="m",
        source="Moritz (2000), GRS80",
        description="Semi-major axis of the GRS80 ellipsoid"
    )

    GRS80_INVERSE_FLATTENING: Final[Constant] = Constant(
        value=298.257222101,
        uncertainty=0.0,
        unit="dimensionless",
        source="Moritz (2000), GRS80",
        description="Inverse flattening of the GRS80 ellipsoid"
    )

    # =========================================================================
    # Sphere
    # =========================================================================

    AUTHALIC_SPHERE_RADIUS: Final[Constant] = Constant(
        value=6_370_997.0,
        uncertainty=0.0,
        unit="m",
        source="PROJ.4 ellipsoid table ('sphere')",
        description="Radius of the normal sphere used by spherical projections"
    )


class NumericalTolerances:
    """Tolerances shared by the projection envelope and the strategies.

    Notes
    -----
    The clamp epsilon governs every inverse-trigonometric call in the
    strategies: an argument overshooting [-1, 1] by at most this amount is
    rounded to the nearest boundary, anything larger is a domain failure.
    """

    DOMAIN_CLAMP_EPSILON: Final[Constant] = Constant(
        value=1e-9,
        uncertainty=0.0,
        unit="dimensionless",
        source="PROJ.4 (ONEEPS = 1.000000001)",
        description="Maximum overshoot of an acos/asin argument that is clamped"
    )

    COORDINATE_EPSILON: Final[Constant] = Constant(
        value=1e-12,
        uncertainty=0.0,
        unit="rad",
        source="PROJ.4 pj_fwd (EPS = 1e-12)",
        description="Slack allowed on the latitude and longitude range checks"
    )

    POLE_EPSILON: Final[Constant] = Constant(
        value=1e-10,
        uncertainty=0.0,
        unit="rad",
        source="PROJ.4 (EPS10)",
        description="Distance from a pole below which the pole branch is taken"
    )

    ITERATION_TOLERANCE: Final[Constant] = Constant(
        value=1e-10,
        uncertainty=0.0,
        unit="dimensionless",
        source="PROJ.4",
        description="Convergence tolerance of iterative inverse solutions"
    )
