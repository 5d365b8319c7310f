"""
Unit Registry for Linear and Angular Units.

This module resolves the unit identifiers accepted in projection parameter
lists (``units=us-ft``) to conversion factors through the `pint` library,
so that no conversion factor is typed in by hand more than once.

Example Usage
-------------
>>> from common.units import linear_unit_to_meter
>>> linear_unit_to_meter("km")
1000.0
>>> linear_unit_to_meter("us-ft")
0.3048006096012192
"""

from functools import lru_cache
from typing import Dict

from pint import UnitRegistry as PintUnitRegistry

# Create the global unit registry
ureg = PintUnitRegistry()

# Convenience alias for creating quantities
Q_ = ureg.Quantity


# PROJ unit identifiers and the pint expression for each. The US survey
# units are written as exact ratios because pint's survey definitions have
# changed names across releases.
LINEAR_UNITS: Dict[str, str] = {
    "m": "meter",
    "km": "kilometer",
    "dm": "decimeter",
    "cm": "centimeter",
    "mm": "millimeter",
    "kmi": "nautical_mile",
    "in": "inch",
    "ft": "foot",
    "yd": "yard",
    "mi": "mile",
    "fath": "1.8288 * meter",
    "ch": "20.1168 * meter",
    "link": "0.201168 * meter",
    "us-in": "100 / 3937 * meter",
    "us-ft": "1200 / 3937 * meter",
    "us-yd": "3600 / 3937 * meter",
    "us-ch": "79200 / 3937 * meter",
    "us-mi": "6336000 / 3937 * meter",
}


class UnitLookupError(ValueError):
    """Raised when a unit identifier is not known."""


@lru_cache(maxsize=None)
def linear_unit_to_meter(unit_id: str) -> float:
    """Return the number of meters in one `unit_id`.

    Parameters
    ----------
    unit_id : str
        A PROJ linear unit identifier (``m``, ``km``, ``us-ft``, ...).

    Returns
    -------
    float
        Conversion factor to meters.

    Raises
    ------
    UnitLookupError
        If the identifier is unknown.
    """
    try:
        expression = LINEAR_UNITS[unit_id]
    except KeyError:
        raise UnitLookupError(
            f"Unknown linear unit '{unit_id}'. "
            f"Known units: {', '.join(sorted(LINEAR_UNITS))}"
        ) from None

    quantity = ureg.parse_expression(expression)
    return float(quantity.to(ureg.meter).magnitude)


def angle_to_radians(value: float, unit: str = "degree") -> float:
    """Convert an angle expressed in `unit` to radians.

    Parameters
    ----------
    value : float
        The angle.
    unit : str
        Any pint angular unit (``degree``, ``arcminute``, ``grad``, ...).

    Raises
    ------
    pint.DimensionalityError
        If `unit` is not an angle.
    """
    return float(Q_(value, unit).to(ureg.radian).magnitude)
