"""
Well-Known Text output for point sequences.

Writes OGC Well-Known Text for the geometries a projection produces:
points, linestrings, rings, polygons and boxes. The writer is purely
structural; it does not validate closure or orientation.

A point is anything exposing N ordered numeric coordinates: a sequence, a
numpy row, a shapely `Point`, or an object with a `coordinates` property
(`GeoCoordinate`, `PlanarCoordinate`). Points with more than two coordinates
are written with all of them. Shapely linestrings and rings are accepted
wherever a point sequence is, and `to_wkt` writes shapely points,
linestrings, rings and polygons in the same compact form.

Examples
--------
>>> point_wkt((1.5, 2.0))
'POINT(1.5 2)'
>>> linestring_wkt([(0, 0), (1, 1)])
'LINESTRING(0 0,1 1)'
>>> box_wkt((0, 0), (2, 1))
'POLYGON((0 0,0 1,2 1,2 0,0 0))'
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Sequence

from shapely.geometry import LinearRing as ShapelyLinearRing
from shapely.geometry import LineString as ShapelyLineString
from shapely.geometry import Point as ShapelyPoint
from shapely.geometry import Polygon as ShapelyPolygon
from shapely.geometry.base import BaseGeometry

DEFAULT_PRECISION = 15


@dataclass(frozen=True)
class LineString:
    """An open sequence of points."""
    points: Sequence[Any]


@dataclass(frozen=True)
class Ring:
    """A closed sequence of points (first point repeated last)."""
    points: Sequence[Any]


@dataclass(frozen=True)
class Polygon:
    """An exterior ring with optional interior rings (holes)."""
    exterior: Sequence[Any]
    interiors: List[Sequence[Any]] = field(default_factory=list)


@dataclass(frozen=True)
class Box:
    """An axis-aligned box given by its minimum and maximum corners."""
    min_corner: Any
    max_corner: Any


def point_coordinates(point: Any) -> Sequence[float]:
    """Return the ordered coordinates of `point`."""
    if isinstance(point, ShapelyPoint):
        if point.is_empty:
            raise ValueError("A point needs at least one coordinate")
        point = point.coords[0]
    coordinates = getattr(point, "coordinates", point)
    try:
        values = [float(value) for value in coordinates]
    except TypeError:
        raise TypeError(f"{type(point).__name__} does not expose ordered coordinates") from None
    if not values:
        raise ValueError("A point needs at least one coordinate")
    return values


def _format_number(value: float, precision: int) -> str:
    return f"{value:.{precision}g}"


def _format_point(point: Any, precision: int) -> str:
    return " ".join(_format_number(value, precision) for value in point_coordinates(point))


def _format_sequence(points: Iterable[Any], precision: int) -> str:
    if isinstance(points, ShapelyLineString):
        points = points.coords
    return "(" + ",".join(_format_point(point, precision) for point in points) + ")"


def point_wkt(point: Any, precision: int = DEFAULT_PRECISION) -> str:
    """WKT for a single point, e.g. ``POINT(1 2)``."""
    return f"POINT({_format_point(point, precision)})"


def linestring_wkt(points: Iterable[Any], precision: int = DEFAULT_PRECISION) -> str:
    """WKT for a linestring, e.g. ``LINESTRING(0 0,1 1)``."""
    return "LINESTRING" + _format_sequence(points, precision)


def ring_wkt(points: Iterable[Any], precision: int = DEFAULT_PRECISION) -> str:
    """WKT for a ring. A ring is not an OGC type; it is written as a polygon."""
    return "POLYGON(" + _format_sequence(points, precision) + ")"


def polygon_wkt(
    exterior: Iterable[Any],
    interiors: Optional[Iterable[Iterable[Any]]] = None,
    precision: int = DEFAULT_PRECISION,
) -> str:
    """WKT for a polygon with optional holes."""
    rings = [_format_sequence(exterior, precision)]
    for interior in interiors or ():
        rings.append(_format_sequence(interior, precision))
    return "POLYGON(" + ",".join(rings) + ")"


def box_wkt(min_corner: Any, max_corner: Any, precision: int = DEFAULT_PRECISION) -> str:
    """WKT for a box. Boxes do not exist in WKT; they are written as a closed polygon."""
    x0, y0 = point_coordinates(min_corner)[:2]
    x1, y1 = point_coordinates(max_corner)[:2]
    ring = [(x0, y0), (x0, y1), (x1, y1), (x1, y0), (x0, y0)]
    return ring_wkt(ring, precision)


def to_wkt(geometry: Any, precision: int = DEFAULT_PRECISION) -> str:
    """Write any supported geometry as WKT.

    Parameters
    ----------
    geometry : Any
        A `LineString`, `Ring`, `Polygon`, `Box`, or a point, or a shapely
        `Point`, `LineString`, `LinearRing` or `Polygon`.
    precision : int
        Significant digits per coordinate.

    Raises
    ------
    TypeError
        If the geometry type is not supported.
    """
    if isinstance(geometry, ShapelyLinearRing):
        return ring_wkt(geometry, precision)
    if isinstance(geometry, ShapelyLineString):
        return linestring_wkt(geometry, precision)
    if isinstance(geometry, ShapelyPolygon):
        return polygon_wkt(geometry.exterior, geometry.interiors, precision)
    if isinstance(geometry, BaseGeometry) and not isinstance(geometry, ShapelyPoint):
        raise TypeError(f"Unsupported geometry type {geometry.geom_type}")
    if isinstance(geometry, LineString):
        return linestring_wkt(geometry.points, precision)
    if isinstance(geometry, Ring):
        return ring_wkt(geometry.points, precision)
    if isinstance(geometry, Polygon):
        return polygon_wkt(geometry.exterior, geometry.interiors, precision)
    if isinstance(geometry, Box):
        return box_wkt(geometry.min_corner, geometry.max_corner, precision)
    return point_wkt(geometry, precision)
