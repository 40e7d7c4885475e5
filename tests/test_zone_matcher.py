from src.delivery_zones.models.domain import Circle, Coordinate, DeliveryZone, FixedFee, Polygon
from src.delivery_zones.services.delivery.matcher import match_zone, order_zones

CENTER = Coordinate(lat=38.7223, lng=-9.1393)
NEARBY = Coordinate(lat=38.7300, lng=-9.1400)  # ~0.86 km from CENTER


def _circle_zone(zone_id: str, radius_km: float, priority: int, *, is_active: bool = True) -> DeliveryZone:
    return DeliveryZone(
        id=zone_id,
        name=f"Zone {zone_id}",
        geometry=Circle(center=CENTER, radius_km=radius_km),
        fee_rule=FixedFee(amount=priority + 1.0),
        is_active=is_active,
        priority=priority,
    )


def test_lowest_priority_number_wins_regardless_of_list_order():
    broad = _circle_zone("broad", 10.0, priority=2)
    narrow = _circle_zone("narrow", 2.0, priority=1)

    assert match_zone([broad, narrow], NEARBY).zone == narrow
    assert match_zone([narrow, broad], NEARBY).zone == narrow


def test_matching_stops_at_first_containing_zone():
    first = _circle_zone("first", 5.0, priority=1)
    second = _circle_zone("second", 5.0, priority=2)

    result = match_zone([second, first], NEARBY)

    assert result.zone == first
    assert [check.zone_id for check in result.checks] == ["first"]


def test_outside_zones_are_recorded_before_match():
    tiny = _circle_zone("tiny", 0.5, priority=1)
    wide = _circle_zone("wide", 5.0, priority=2)

    result = match_zone([tiny, wide], NEARBY)

    assert result.zone == wide
    assert [check.contains for check in result.checks] == [False, True]
    assert result.checks[0].distance_from_center_km > 0.5


def test_inactive_zones_are_ignored():
    inactive = _circle_zone("inactive", 5.0, priority=0, is_active=False)
    active = _circle_zone("active", 5.0, priority=5)

    result = match_zone([inactive, active], NEARBY)

    assert result.zone == active
    assert all(check.zone_id != "inactive" for check in result.checks)


def test_malformed_zone_is_skipped_and_matching_continues():
    broken = DeliveryZone(
        id="broken",
        name="Broken polygon",
        geometry=Polygon(points=(CENTER, NEARBY)),
        fee_rule=FixedFee(amount=1.0),
        priority=0,
    )
    fallback = _circle_zone("fallback", 5.0, priority=1)

    result = match_zone([broken, fallback], NEARBY)

    assert result.zone == fallback
    assert result.checks[0].zone_id == "broken"
    assert result.checks[0].error
    assert result.checks[0].geometry_type == "polygon"


def test_no_containing_zone_returns_empty_match():
    result = match_zone([_circle_zone("tiny", 0.1, priority=1)], NEARBY)

    assert result.zone is None
    assert not result.matched
    assert len(result.checks) == 1


def test_equal_priorities_keep_list_order():
    a = _circle_zone("a", 5.0, priority=1)
    b = _circle_zone("b", 5.0, priority=1)

    assert [zone.id for zone in order_zones([b, a])] == ["b", "a"]
    assert match_zone([b, a], NEARBY).zone == b


def _square_zone(zone_id: str, priority: int) -> DeliveryZone:
    return DeliveryZone(
        id=zone_id,
        name=f"Zone {zone_id}",
        geometry=Polygon(
            points=(
                Coordinate(lat=38.72, lng=-9.15),
                Coordinate(lat=38.72, lng=-9.13),
                Coordinate(lat=38.74, lng=-9.13),
                Coordinate(lat=38.74, lng=-9.15),
            )
        ),
        fee_rule=FixedFee(amount=2.0),
        priority=priority,
    )


def test_polygon_zone_contains_destination():
    square = _square_zone("square", priority=1)

    result = match_zone([square], NEARBY)

    assert result.zone == square
    assert result.checks[0].geometry_type == "polygon"
    assert result.checks[0].distance_from_center_km is None
    assert match_zone([square], Coordinate(lat=38.80, lng=-9.14)).zone is None


def test_overlapping_polygon_and_circle_resolved_by_priority():
    square = _square_zone("square", priority=1)
    circle = _circle_zone("circle", 5.0, priority=2)

    assert match_zone([circle, square], NEARBY).zone == square

    square_last = _square_zone("square", priority=3)
    assert match_zone([square_last, circle], NEARBY).zone == circle
