import pytest

from src.delivery_zones.models.domain import (
    Circle,
    Coordinate,
    DeliveryZone,
    FeeTier,
    FixedFee,
    PerKmFee,
    TieredFee,
)
from src.delivery_zones.services.delivery.eta import estimate_delivery_minutes
from src.delivery_zones.services.delivery.fees import compute_fee

TIERS = TieredFee(tiers=(FeeTier(max_distance_km=5, fee=3.0), FeeTier(max_distance_km=10, fee=5.0)))


def _zone(max_minutes):
    return DeliveryZone(
        id="z1",
        name="Zone",
        geometry=Circle(center=Coordinate(lat=0, lng=0), radius_km=50),
        fee_rule=FixedFee(amount=3.0),
        max_delivery_time_minutes=max_minutes,
    )


def test_fixed_fee_ignores_distance():
    rule = FixedFee(amount=3.5)
    assert compute_fee(rule, 0.2) == compute_fee(rule, 42.0) == 3.5


def test_per_km_fee_is_linear_and_non_decreasing():
    rule = PerKmFee(amount_per_km=1.5)
    assert compute_fee(rule, 4.0) == pytest.approx(6.0)
    fees = [compute_fee(rule, d) for d in (0.0, 0.5, 1.0, 3.3, 10.0)]
    assert fees == sorted(fees)


@pytest.mark.parametrize("distance, expected", [(3, 3.0), (5, 3.0), (7, 5.0), (10, 5.0), (15, 5.0)])
def test_tiered_fee_picks_first_covering_tier_and_saturates(distance, expected):
    assert compute_fee(TIERS, distance) == expected


def test_tiered_fee_sorts_tiers_by_distance():
    unsorted = TieredFee(tiers=tuple(reversed(TIERS.tiers)))
    assert compute_fee(unsorted, 3) == 3.0
    assert compute_fee(unsorted, 20) == 5.0


def test_tiered_fee_without_tiers_is_an_error():
    with pytest.raises(ValueError):
        compute_fee(TieredFee(tiers=()), 1.0)


def test_fee_is_never_negative():
    assert compute_fee(FixedFee(amount=-2.0), 1.0) == 0.0
    assert compute_fee(PerKmFee(amount_per_km=-1.0), 3.0) == 0.0


def test_eta_adds_prep_time_and_two_minutes_per_km():
    assert estimate_delivery_minutes(0.0) == 10
    assert estimate_delivery_minutes(0.86) == 12
    assert estimate_delivery_minutes(12.5) == 35


def test_eta_cap_only_shortens():
    assert estimate_delivery_minutes(12.5, _zone(20)) == 20
    assert estimate_delivery_minutes(12.5, _zone(60)) == 35


def test_eta_without_cap_uses_raw_estimate():
    assert estimate_delivery_minutes(12.5, _zone(None)) == 35
    assert estimate_delivery_minutes(12.5, _zone(0)) == 35
