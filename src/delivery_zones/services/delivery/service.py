"""Delivery address validation: zone resolution, fee and ETA for one destination."""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Sequence

from ...data.restaurants_repository import get_restaurant_profile
from ...data.zones_repository import get_active_zones
from ...models.domain import (
    Coordinate,
    DeliveryZone,
    RestaurantDeliveryProfile,
    ValidationRequest,
    ValidationResult,
    ZoneMatch,
)
from ...models.errors import ConfigurationError
from ..geospatial import distance_km as great_circle_km
from .eta import estimate_delivery_minutes
from .fees import compute_fee
from .matcher import match_zone, order_zones

# Radius used only when a restaurant has no zones configured.
DEFAULT_MAX_DISTANCE_KM = 10

OUT_OF_AREA_MESSAGE = "Address outside delivery area"
MISSING_ORIGIN_MESSAGE = "Restaurant location not configured"

logger = logging.getLogger(__name__)


def _round2(value: float) -> float:
    # half-up, matching how amounts are shown to customers
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _out_of_area(distance: float, message: str = OUT_OF_AREA_MESSAGE) -> ValidationResult:
    return ValidationResult(
        valid=False,
        delivery_fee=0.0,
        estimated_time_minutes=0,
        distance_km=_round2(distance),
        error=message,
        error_code="out_of_area",
    )


def evaluate_delivery(
    profile: RestaurantDeliveryProfile,
    zones: Sequence[DeliveryZone],
    destination: Coordinate,
    order_amount: Optional[float] = None,
    *,
    match: Optional[ZoneMatch] = None,
) -> ValidationResult:
    """Decide deliverability, fee and ETA from one snapshot of restaurant data.

    ``zones`` is the restaurant's zone list as read in a single query. When it
    holds no active zone the default radius applies and the restaurant's flat
    default fee is charged. A precomputed ``match`` for the same zones and
    destination may be passed to avoid matching twice.

    Raises:
        ConfigurationError: the restaurant has no origin coordinate.
    """
    if profile.origin is None:
        raise ConfigurationError(MISSING_ORIGIN_MESSAGE)

    distance = great_circle_km(profile.origin, destination)
    active_zones = order_zones(zones)

    if not active_zones:
        if distance > DEFAULT_MAX_DISTANCE_KM:
            return _out_of_area(distance, f"{OUT_OF_AREA_MESSAGE} (max {DEFAULT_MAX_DISTANCE_KM}km)")
        return ValidationResult(
            valid=True,
            delivery_fee=_round2(max(profile.default_delivery_fee, 0.0)),
            estimated_time_minutes=estimate_delivery_minutes(distance),
            distance_km=_round2(distance),
        )

    if match is None:
        match = match_zone(active_zones, destination)
    zone = match.zone
    if zone is None:
        return _out_of_area(distance)

    if order_amount is not None and zone.min_order_amount and order_amount < zone.min_order_amount:
        return ValidationResult(
            valid=False,
            delivery_fee=0.0,
            estimated_time_minutes=0,
            distance_km=_round2(distance),
            matched_zone=zone,
            error=f"Minimum order: €{zone.min_order_amount:.2f}",
            error_code="minimum_order_not_met",
        )

    return ValidationResult(
        valid=True,
        delivery_fee=_round2(compute_fee(zone.fee_rule, distance)),
        estimated_time_minutes=estimate_delivery_minutes(distance, zone),
        distance_km=_round2(distance),
        matched_zone=zone,
    )


def _log_zone_match(match: ZoneMatch, destination: Coordinate) -> None:
    logger.info(f"[Zones] Checked {len(match.checks)} zone(s) for point ({destination.lat}, {destination.lng})")
    for check in match.checks:
        if check.error:
            logger.warning(f"[Zones] Skipping zone '{check.zone_name}' ({check.zone_id}): {check.error}")
            continue
        detail = ""
        if check.distance_from_center_km is not None:
            detail = f" - {check.distance_from_center_km:.2f}km from center"
        outcome = "INSIDE" if check.contains else "OUTSIDE"
        logger.debug(f"[Zones] Point is {outcome} {check.geometry_type} zone '{check.zone_name}'{detail}")


def validate_delivery_address(request: ValidationRequest) -> ValidationResult:
    """Load the restaurant profile and zones, then evaluate the destination."""
    profile = get_restaurant_profile(request.restaurant_id)
    if profile.origin is None:
        raise ConfigurationError(MISSING_ORIGIN_MESSAGE)

    zones = order_zones(get_active_zones(request.restaurant_id))
    logger.info(f"[Zones] Found {len(zones)} active delivery zones for restaurant {request.restaurant_id}")

    match = None
    if zones:
        match = match_zone(zones, request.destination)
        _log_zone_match(match, request.destination)
    else:
        logger.info(f"[Zones] No zones configured, using default {DEFAULT_MAX_DISTANCE_KM}km radius")

    result = evaluate_delivery(
        profile,
        zones,
        request.destination,
        request.order_amount,
        match=match,
    )

    if result.valid:
        zone_name = result.matched_zone.name if result.matched_zone else "default"
        logger.info(
            f"✅ Valid delivery - Zone: {zone_name}, Fee: €{result.delivery_fee}, "
            f"Time: {result.estimated_time_minutes}min, Distance: {result.distance_km}km"
        )
    else:
        logger.info(f"❌ Delivery rejected ({result.error_code}): {result.error} - Distance: {result.distance_km}km")
    return result
