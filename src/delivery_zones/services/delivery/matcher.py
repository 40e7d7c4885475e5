"""Zone selection for a delivery destination."""

from __future__ import annotations

from typing import Iterable

from ...models.domain import Circle, Coordinate, DeliveryZone, Polygon, ZoneCheck, ZoneMatch
from ...models.errors import InvalidGeometryError
from ..geospatial import contains, distance_km


def order_zones(zones: Iterable[DeliveryZone]) -> list[DeliveryZone]:
    """Active zones in evaluation order (ascending priority, stable for ties)."""
    return sorted((zone for zone in zones if zone.is_active), key=lambda zone: zone.priority)


def _geometry_type(zone: DeliveryZone) -> str:
    match zone.geometry:
        case Circle():
            return "circle"
        case Polygon():
            return "polygon"
        case _:
            return type(zone.geometry).__name__.lower()


def match_zone(zones: Iterable[DeliveryZone], destination: Coordinate) -> ZoneMatch:
    """Return the first zone, by ascending priority, whose geometry contains ``destination``.

    Evaluation stops at the first match, so lower-priority zones are never
    checked once a zone is found. A zone with malformed geometry is recorded
    in the diagnostics and skipped.
    """
    checks: list[ZoneCheck] = []
    for zone in order_zones(zones):
        geometry_type = _geometry_type(zone)
        center_distance = None
        if isinstance(zone.geometry, Circle):
            center_distance = distance_km(destination, zone.geometry.center)
        try:
            inside = contains(zone.geometry, destination)
        except InvalidGeometryError as exc:
            checks.append(
                ZoneCheck(
                    zone_id=zone.id,
                    zone_name=zone.name,
                    geometry_type=geometry_type,
                    contains=False,
                    distance_from_center_km=center_distance,
                    error=str(exc),
                )
            )
            continue

        checks.append(
            ZoneCheck(
                zone_id=zone.id,
                zone_name=zone.name,
                geometry_type=geometry_type,
                contains=inside,
                distance_from_center_km=center_distance,
            )
        )
        if inside:
            return ZoneMatch(zone=zone, checks=tuple(checks))

    return ZoneMatch(zone=None, checks=tuple(checks))
