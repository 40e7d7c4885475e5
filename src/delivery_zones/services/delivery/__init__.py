"""Delivery zone resolution, fee calculation and ETA estimation."""

from .eta import estimate_delivery_minutes
from .fees import compute_fee
from .matcher import match_zone
from .service import evaluate_delivery, validate_delivery_address

__all__ = [
    "compute_fee",
    "estimate_delivery_minutes",
    "evaluate_delivery",
    "match_zone",
    "validate_delivery_address",
]
