"""
Coordinate Types for the Projection Engine.

The transform API itself works on bare floats; these dataclasses are the
typed form used at the edges of the system (batch helpers, WKT output,
validation reports). A point is anything that exposes N ordered numeric
coordinates through its `coordinates` property.
"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np
from numpy.typing import NDArray


@dataclass
class GeoCoordinate:
    """A geographic coordinate on the sphere or ellipsoid.

    Attributes
    ----------
    longitude : float
        Longitude in RADIANS (not degrees). Normalized to [-π, π].
    latitude : float
        Latitude in RADIANS (not degrees). Range: [-π/2, π/2].

    Examples
    --------
    >>> import numpy as np
    >>> coord = GeoCoordinate.from_degrees(-80.1918, 25.7617)
    >>> lon_deg, lat_deg = coord.to_degrees()
    >>> print(f"{lat_deg:.4f}°N, {abs(lon_deg):.4f}°W")
    25.7617°N, 80.1918°W
    """
    longitude: float  # radians
    latitude: float  # radians

    def __post_init__(self):
        """Validate coordinate ranges."""
        if not -np.pi/2 <= self.latitude <= np.pi/2:
            raise ValueError(
                f"Latitude {self.latitude} rad out of range [-π/2, π/2]. "
                f"Did you pass degrees instead of radians?"
            )
        # Normalize longitude to [-π, π]
        self.longitude = float(np.arctan2(np.sin(self.longitude), np.cos(self.longitude)))

    @property
    def coordinates(self) -> Tuple[float, float]:
        """Ordered coordinates (longitude, latitude) in radians."""
        return self.longitude, self.latitude

    def to_degrees(self) -> Tuple[float, float]:
        """Convert to degrees for display.

        Returns
        -------
        Tuple[float, float]
            (longitude_degrees, latitude_degrees)
        """
        return float(np.degrees(self.longitude)), float(np.degrees(self.latitude))

    @classmethod
    def from_degrees(cls, lon_deg: float, lat_deg: float) -> 'GeoCoordinate':
        """Create coordinate from degrees (convenience constructor)."""
        return cls(longitude=float(np.radians(lon_deg)), latitude=float(np.radians(lat_deg)))


@dataclass(frozen=True)
class PlanarCoordinate:
    """A projected (easting, northing) coordinate.

    Attributes
    ----------
    x : float
        Easting, in the linear unit of the projection.
    y : float
        Northing, in the linear unit of the projection.
    """
    x: float
    y: float

    @property
    def coordinates(self) -> Tuple[float, float]:
        """Ordered coordinates (x, y)."""
        return self.x, self.y


# Type aliases for array types
CoordinateArray = NDArray[np.float64]  # Shape: (N, 2) for lon/lat or x/y
