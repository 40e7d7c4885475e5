"""Restaurant delivery profile loader backed by Supabase."""

from __future__ import annotations

import logging
from typing import Any, Optional

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import Coordinate, RestaurantDeliveryProfile
from ..models.errors import RepositoryUnavailableError, RestaurantNotFoundError

logger = logging.getLogger(__name__)


def _coerce_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def parse_restaurant_row(row: dict[str, Any]) -> RestaurantDeliveryProfile:
    """Build a profile from a ``restaurants`` row; missing coordinates leave ``origin`` unset."""
    lat = _coerce_float(row.get("latitude"))
    lng = _coerce_float(row.get("longitude"))
    origin = Coordinate(lat=lat, lng=lng) if lat is not None and lng is not None else None
    default_fee = _coerce_float(row.get("delivery_fee"))
    return RestaurantDeliveryProfile(
        origin=origin,
        default_delivery_fee=default_fee if default_fee is not None else 0.0,
    )


def get_restaurant_profile(restaurant_id: str) -> RestaurantDeliveryProfile:
    supabase = get_supabase_client()
    if not supabase:
        raise RepositoryUnavailableError("Supabase is not configured.")

    try:
        response = (
            supabase.table(settings.restaurants_table)
            .select("latitude, longitude, delivery_fee")
            .eq("id", restaurant_id)
            .limit(1)
            .execute()
        )
    except Exception as exc:
        logger.error(f"Failed to load restaurant {restaurant_id}: {exc}")
        raise RepositoryUnavailableError(f"Failed to load restaurant '{restaurant_id}': {exc}") from exc

    if not response.data:
        raise RestaurantNotFoundError(f"Restaurant '{restaurant_id}' not found.")
    return parse_restaurant_row(response.data[0])
