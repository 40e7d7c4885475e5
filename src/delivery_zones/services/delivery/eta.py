"""Delivery time estimation."""

from __future__ import annotations

import math
from typing import Optional

from ...models.domain import DeliveryZone

PREP_TIME_MINUTES = 10
# ~30 km/h effective urban speed
MINUTES_PER_KM = 2


def estimate_delivery_minutes(distance_km: float, zone: Optional[DeliveryZone] = None) -> int:
    """Estimated minutes until delivery, capped by the zone's promised maximum.

    The cap only ever shortens the estimate; a zone without a cap (``None`` or 0)
    leaves the raw estimate untouched.
    """
    estimated = math.ceil(PREP_TIME_MINUTES + distance_km * MINUTES_PER_KM)
    if zone is not None and zone.max_delivery_time_minutes:
        return min(estimated, zone.max_delivery_time_minutes)
    return estimated
