import pytest

from src.delivery_zones.models.domain import Circle, Coordinate, Polygon
from src.delivery_zones.models.errors import InvalidGeometryError
from src.delivery_zones.services.geospatial import (
    contains,
    distance_km,
    haversine_km,
    point_in_circle,
    point_in_polygon,
)

LISBON = Coordinate(lat=38.7223, lng=-9.1393)


def _ring(*pairs: tuple[float, float]) -> tuple[Coordinate, ...]:
    return tuple(Coordinate(lat=lat, lng=lng) for lat, lng in pairs)


UNIT_SQUARE = _ring((0, 0), (0, 1), (1, 1), (1, 0))
# "C" shape with a notch between lng 1 and 2 for lat > 1
C_SHAPE = _ring((0, 0), (0, 3), (3, 3), (3, 2), (1, 2), (1, 1), (3, 1), (3, 0))


def test_haversine_one_degree_of_latitude():
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.195, rel=1e-3)


def test_distance_is_zero_for_same_point_and_symmetric():
    other = Coordinate(lat=38.7300, lng=-9.1400)
    assert distance_km(LISBON, LISBON) == 0.0
    assert distance_km(LISBON, other) == pytest.approx(distance_km(other, LISBON))


def test_distance_short_urban_hop():
    assert round(distance_km(LISBON, Coordinate(lat=38.7300, lng=-9.1400)), 2) == 0.86


def test_point_in_circle_inside_and_outside():
    center = Coordinate(lat=0.0, lng=0.0)
    assert point_in_circle(Coordinate(lat=0.01, lng=0.0), center, 5.0)  # ~1.1 km
    assert not point_in_circle(Coordinate(lat=0.1, lng=0.0), center, 5.0)  # ~11.1 km


def test_point_in_circle_rejects_negative_radius():
    with pytest.raises(InvalidGeometryError):
        point_in_circle(LISBON, LISBON, -1.0)


@pytest.mark.parametrize(
    "point, expected",
    [
        (Coordinate(lat=0.5, lng=0.5), True),
        (Coordinate(lat=1.5, lng=0.5), False),
        (Coordinate(lat=0.5, lng=-0.1), False),
        (Coordinate(lat=-0.5, lng=0.5), False),
    ],
)
def test_point_in_polygon_square(point, expected):
    assert point_in_polygon(point, UNIT_SQUARE) is expected


def test_point_in_polygon_concave_notch_is_outside():
    assert point_in_polygon(Coordinate(lat=0.5, lng=1.5), C_SHAPE)
    assert point_in_polygon(Coordinate(lat=2.0, lng=0.5), C_SHAPE)
    assert not point_in_polygon(Coordinate(lat=2.0, lng=1.5), C_SHAPE)


def test_point_in_polygon_vertex_order_does_not_matter():
    reversed_square = tuple(reversed(UNIT_SQUARE))
    assert point_in_polygon(Coordinate(lat=0.25, lng=0.75), reversed_square)


def test_point_in_polygon_requires_three_points():
    with pytest.raises(InvalidGeometryError):
        point_in_polygon(Coordinate(lat=0.5, lng=0.5), _ring((0, 0), (1, 1)))


def test_contains_dispatches_on_geometry_type():
    assert contains(Circle(center=LISBON, radius_km=1.0), LISBON)
    assert contains(Polygon(points=UNIT_SQUARE), Coordinate(lat=0.5, lng=0.5))
    with pytest.raises(InvalidGeometryError):
        contains("not a geometry", LISBON)
