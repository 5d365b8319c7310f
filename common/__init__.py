"""
Common utilities and infrastructure for the projection engine.

This package provides foundational components used across all modules:
- Geodetic constants and numerical tolerances with provenance
- Unit registry for linear and angular unit conversion
- Coordinate type definitions
- Logging infrastructure
"""

from common.constants import Constant, GeodeticConstants, NumericalTolerances
from common.units import ureg, linear_unit_to_meter, angle_to_radians, UnitLookupError
from common.types import (
    GeoCoordinate,
    PlanarCoordinate,
)
from common.logging_config import get_logger, set_log_level

__all__ = [
    "Constant",
    "GeodeticConstants",
    "NumericalTolerances",
    "ureg",
    "linear_unit_to_meter",
    "angle_to_radians",
    "UnitLookupError",
    "GeoCoordinate",
    "PlanarCoordinate",
    "get_logger",
    "set_log_level",
]
