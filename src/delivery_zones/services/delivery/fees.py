"""Delivery fee calculation."""

from __future__ import annotations

from ...models.domain import FeeRule, FixedFee, PerKmFee, TieredFee


def _tiered_fee(rule: TieredFee, distance_km: float) -> float:
    if not rule.tiers:
        raise ValueError("Tiered fee rule has no tiers.")
    tiers = sorted(rule.tiers, key=lambda tier: tier.max_distance_km)
    for tier in tiers:
        if distance_km <= tier.max_distance_km:
            return tier.fee
    # beyond the largest threshold: saturate at the last tier
    return tiers[-1].fee


def compute_fee(rule: FeeRule, distance_km: float) -> float:
    """Fee for delivering ``distance_km`` under ``rule``; never negative."""

    match rule:
        case FixedFee(amount=amount):
            fee = amount
        case PerKmFee(amount_per_km=rate):
            fee = rate * distance_km
        case TieredFee():
            fee = _tiered_fee(rule, distance_km)
        case _:
            raise ValueError(f"Unsupported fee rule: {type(rule).__name__}")
    return max(float(fee), 0.0)
