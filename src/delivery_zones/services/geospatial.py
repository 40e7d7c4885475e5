"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from ..models.domain import Circle, Coordinate, Geometry, Polygon
from ..models.errors import InvalidGeometryError

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_km(a: Coordinate, b: Coordinate) -> float:
    return haversine_km(a.lat, a.lng, b.lat, b.lng)


def point_in_circle(point: Coordinate, center: Coordinate, radius_km: float) -> bool:
    """Return True if the point lies within ``radius_km`` of ``center`` (inclusive)."""

    if not math.isfinite(radius_km) or radius_km < 0:
        raise InvalidGeometryError(f"Circle radius must be a non-negative number, got {radius_km!r}.")
    return distance_km(point, center) <= radius_km


def point_in_polygon(point: Coordinate, points: Sequence[Coordinate]) -> bool:
    """Even-odd ray casting test.

    Latitude is the x axis and longitude the ray axis; every edge (i, i-1) is
    tested, including the closing edge from the last vertex back to the first.
    Points exactly on an edge get whatever the crossing test yields.
    """

    if len(points) < 3:
        raise InvalidGeometryError(f"Polygon needs at least 3 points, got {len(points)}.")

    lat, lng = point.lat, point.lng
    inside = False
    j = len(points) - 1
    for i in range(len(points)):
        xi, yi = points[i].lat, points[i].lng
        xj, yj = points[j].lat, points[j].lng
        if (yi > lng) != (yj > lng) and lat < (xj - xi) * (lng - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def contains(geometry: Geometry, point: Coordinate) -> bool:
    match geometry:
        case Circle(center=center, radius_km=radius_km):
            return point_in_circle(point, center, radius_km)
        case Polygon(points=points):
            return point_in_polygon(point, points)
        case _:
            raise InvalidGeometryError(f"Unsupported geometry type: {type(geometry).__name__}")
