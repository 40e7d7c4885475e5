"""Delivery zone loader backed by Supabase.

Zone rows store geometry and tiers in a loose JSON ``coordinates`` column::

    {"type": "circle", "center": {"lat": 38.72, "lng": -9.14}, "radius": 5}
    {"type": "polygon", "points": [{"lat": ..., "lng": ...}, ...]}
    {"type": "circle", ..., "tiers": [{"distance": 5, "fee": 3}, {"distance": 10, "fee": 5}]}

Rows are parsed here, once, into explicit ``Geometry`` and ``FeeRule`` values.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import (
    Circle,
    Coordinate,
    DeliveryZone,
    FeeRule,
    FeeTier,
    FixedFee,
    Geometry,
    PerKmFee,
    Polygon,
    TieredFee,
)
from ..models.errors import InvalidGeometryError, RepositoryUnavailableError

logger = logging.getLogger(__name__)


def _parse_coordinate(value: Any) -> Coordinate:
    if not isinstance(value, Mapping):
        raise InvalidGeometryError(f"Expected a {{lat, lng}} object, got {value!r}.")
    try:
        return Coordinate(lat=float(value["lat"]), lng=float(value["lng"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidGeometryError(f"Invalid coordinate {value!r}: {exc}") from exc


def parse_geometry(raw: Any) -> Geometry:
    """Parse the ``coordinates`` JSON into a ``Circle`` or ``Polygon``.

    Structurally unusable data raises ``InvalidGeometryError``. A polygon with
    fewer than 3 points or a negative radius is still returned; the matcher
    flags it when evaluating the zone.
    """
    if not isinstance(raw, Mapping):
        raise InvalidGeometryError("Zone geometry must be an object.")

    geometry_type = str(raw.get("type") or "").lower()
    match geometry_type:
        case "circle":
            if raw.get("center") is None or raw.get("radius") is None:
                raise InvalidGeometryError("Circle zone requires 'center' and 'radius'.")
            try:
                radius_km = float(raw["radius"])
            except (TypeError, ValueError) as exc:
                raise InvalidGeometryError(f"Invalid circle radius {raw['radius']!r}.") from exc
            return Circle(center=_parse_coordinate(raw["center"]), radius_km=radius_km)
        case "polygon":
            points = raw.get("points")
            if not isinstance(points, list):
                raise InvalidGeometryError("Polygon zone requires a 'points' list.")
            return Polygon(points=tuple(_parse_coordinate(point) for point in points))
        case _:
            raise InvalidGeometryError(f"Unknown zone geometry type '{geometry_type}'.")


def _parse_tiers(raw_tiers: Any) -> tuple[FeeTier, ...]:
    if not isinstance(raw_tiers, list):
        return tuple()
    tiers: list[FeeTier] = []
    for tier in raw_tiers:
        if not isinstance(tier, Mapping):
            continue
        threshold = tier.get("max_distance_km", tier.get("distance"))
        fee = tier.get("fee")
        if threshold is None or fee is None:
            continue
        tiers.append(FeeTier(max_distance_km=float(threshold), fee=float(fee)))
    return tuple(tiers)


def parse_fee_rule(fee_type: Optional[str], fee_amount: Any, coordinates: Any = None) -> FeeRule:
    """Map ``fee_type``/``fee_amount`` (and tiers stored with the geometry) to a fee rule.

    Unknown fee types and tiered zones without tiers charge ``fee_amount`` flat.
    """
    amount = float(fee_amount or 0)
    match (fee_type or "").lower():
        case "fixed":
            return FixedFee(amount=amount)
        case "per_km":
            return PerKmFee(amount_per_km=amount)
        case "tiered":
            raw_tiers = coordinates.get("tiers") if isinstance(coordinates, Mapping) else None
            tiers = _parse_tiers(raw_tiers)
            if tiers:
                return TieredFee(tiers=tiers)
            return FixedFee(amount=amount)
        case _:
            return FixedFee(amount=amount)


def _optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def parse_zone_row(row: Mapping[str, Any]) -> DeliveryZone:
    coordinates = row.get("coordinates")
    return DeliveryZone(
        id=str(row["id"]),
        name=str(row.get("name") or row["id"]),
        geometry=parse_geometry(coordinates),
        fee_rule=parse_fee_rule(row.get("fee_type"), row.get("fee_amount"), coordinates),
        min_order_amount=_optional_float(row.get("min_order_amount")),
        max_delivery_time_minutes=_optional_int(row.get("max_delivery_time_minutes")),
        is_active=bool(row.get("is_active", True)),
        priority=int(row.get("priority") or 0),
    )


def get_active_zones(restaurant_id: str) -> tuple[DeliveryZone, ...]:
    """Active zones for a restaurant, ordered by ascending priority, from a single query."""
    supabase = get_supabase_client()
    if not supabase:
        raise RepositoryUnavailableError("Supabase is not configured.")

    try:
        response = (
            supabase.table(settings.delivery_zones_table)
            .select("*")
            .eq("restaurant_id", restaurant_id)
            .eq("is_active", True)
            .order("priority", desc=False)
            .execute()
        )
    except Exception as exc:
        logger.error(f"Failed to load delivery zones for restaurant {restaurant_id}: {exc}")
        raise RepositoryUnavailableError(f"Failed to load delivery zones: {exc}") from exc

    zones: list[DeliveryZone] = []
    for row in response.data or []:
        try:
            zones.append(parse_zone_row(row))
        except (KeyError, ValueError, TypeError) as e:
            # Skip invalid rows but continue processing
            logger.warning(f"Skipping invalid delivery zone row {row.get('id')!r}: {e}")
            continue
    return tuple(zones)
