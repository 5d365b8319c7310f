"""
Well-Known Text output for projected and geographic point sequences.
"""

from wkt.writer import (
    LineString,
    Ring,
    Polygon,
    Box,
    point_wkt,
    linestring_wkt,
    ring_wkt,
    polygon_wkt,
    box_wkt,
    to_wkt,
)

__all__ = [
    "LineString",
    "Ring",
    "Polygon",
    "Box",
    "point_wkt",
    "linestring_wkt",
    "ring_wkt",
    "polygon_wkt",
    "box_wkt",
    "to_wkt",
]
