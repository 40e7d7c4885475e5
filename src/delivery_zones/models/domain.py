"""Domain models for delivery zones, restaurant profiles and validation results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Optional, Union


@dataclass(frozen=True, slots=True)
class Coordinate:
    """WGS-84 point in decimal degrees."""

    lat: float
    lng: float


@dataclass(frozen=True, slots=True)
class Circle:
    center: Coordinate
    radius_km: float


@dataclass(frozen=True, slots=True)
class Polygon:
    """Closed ring given as an ordered list of vertices (the last edge wraps to the first)."""

    points: tuple[Coordinate, ...]


Geometry = Union[Circle, Polygon]


@dataclass(frozen=True, slots=True)
class FixedFee:
    amount: float


@dataclass(frozen=True, slots=True)
class PerKmFee:
    amount_per_km: float


@dataclass(frozen=True, slots=True)
class FeeTier:
    max_distance_km: float
    fee: float


@dataclass(frozen=True, slots=True)
class TieredFee:
    tiers: tuple[FeeTier, ...]


FeeRule = Union[FixedFee, PerKmFee, TieredFee]


@dataclass(frozen=True, slots=True)
class DeliveryZone:
    """A prioritized coverage region with its own pricing rule.

    Lower ``priority`` values are checked first.
    """

    id: str
    name: str
    geometry: Geometry
    fee_rule: FeeRule
    min_order_amount: Optional[float] = None
    max_delivery_time_minutes: Optional[int] = None
    is_active: bool = True
    priority: int = 0


@dataclass(frozen=True, slots=True)
class RestaurantDeliveryProfile:
    origin: Optional[Coordinate]
    default_delivery_fee: float = 0.0


@dataclass(frozen=True, slots=True)
class ValidationRequest:
    restaurant_id: str
    destination: Coordinate
    order_amount: Optional[float] = None


ErrorCode = Literal["out_of_area", "minimum_order_not_met"]


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of a delivery validation.

    Business-level failures are expressed with ``valid=False`` plus ``error`` and
    ``error_code``; they are never raised.
    """

    valid: bool
    delivery_fee: float
    estimated_time_minutes: int
    distance_km: float
    matched_zone: Optional[DeliveryZone] = None
    error: Optional[str] = None
    error_code: Optional[ErrorCode] = None


@dataclass(frozen=True, slots=True)
class ZoneCheck:
    """Diagnostic record for one zone evaluated by the matcher."""

    zone_id: str
    zone_name: str
    geometry_type: str
    contains: bool
    distance_from_center_km: Optional[float] = None
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ZoneMatch:
    zone: Optional[DeliveryZone]
    checks: tuple[ZoneCheck, ...] = field(default_factory=tuple)

    @property
    def matched(self) -> bool:
        return self.zone is not None
