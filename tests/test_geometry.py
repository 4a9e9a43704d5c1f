import math

import pytest

from graphpresenter.geometry import (
    ORIGIN, Point, describe_arc_path, describe_wedge_path, is_finite_path,
    polar_to_cartesian, polygon_contains, rotate, rotation, unit_normal_vector, unit_vector,
    wedge_contains,
)


def test_rotation_matches_atan2() -> None:
    for source, target in [((0, 0), (1, 1)), ((5, 5), (-3, 2)), ((10, -4), (10, 20))]:
        expected = math.atan2(target[1] - source[1], target[0] - source[0]) * 180 / math.pi
        assert rotation(Point(*source), Point(*target)) == pytest.approx(expected)


def test_rotation_ignores_translation() -> None:
    angle = rotation(Point(0, 0), Point(3, 4))
    assert rotation(Point(100, -50), Point(103, -46)) == pytest.approx(angle)


def test_rotate_brings_direction_onto_x_axis() -> None:
    """Rotating a point by its own direction angle lands it on the positive x-axis."""
    p = Point(30, 40)
    local = rotate(0, 0, p.x, p.y, rotation(ORIGIN, p))
    assert local.x == pytest.approx(50)
    assert local.y == pytest.approx(0, abs=1e-9)


def test_unit_vector() -> None:
    u = unit_vector(Point(0, 0), Point(3, 4))
    assert u.x == pytest.approx(0.6)
    assert u.y == pytest.approx(0.8)


def test_unit_vector_with_length() -> None:
    u = unit_vector(Point(0, 0), Point(100, 0), 50)
    assert math.hypot(u.x, u.y) == pytest.approx(math.sqrt(50))


def test_unit_vector_of_zero_length_edge_is_nan() -> None:
    u = unit_vector(Point(2, 2), Point(2, 2))
    assert math.isnan(u.x) and math.isnan(u.y)


def test_unit_normal_points_up_for_horizontal_edge() -> None:
    n = unit_normal_vector(Point(0, 0), Point(10, 0))
    assert n.x == pytest.approx(0, abs=1e-9)
    assert n.y == pytest.approx(-1)


def test_polar_to_cartesian_measures_from_twelve_o_clock() -> None:
    top = polar_to_cartesian(0, 0, 10, 0)
    right = polar_to_cartesian(0, 0, 10, 90)
    assert (top.x, top.y) == pytest.approx((0, -10))
    assert (right.x, right.y) == pytest.approx((10, 0))


def test_describe_arc_path() -> None:
    path = describe_arc_path(0, 0, 10, -45, 45)
    assert path[0][0] == "M"
    assert path[0][1:] == pytest.approx((10 * math.cos(math.radians(-45)), 10 * math.sin(math.radians(-45))))
    op, rx, ry, rot, large, sweep, x, y = path[1]
    assert (op, rx, ry, rot, large, sweep) == ("A", 10, 10, 0, 0, 0)
    assert (x, y) == pytest.approx((-10 * math.cos(math.radians(45)), -10 * math.sin(math.radians(45))))


def test_describe_arc_path_large_arc_flag() -> None:
    assert describe_arc_path(0, 0, 10, 0, 270)[1][4] == 1


def test_describe_wedge_path_is_closed_through_centre() -> None:
    path = describe_wedge_path(1, 2, 10, -45, 45)
    assert [cmd[0] for cmd in path] == ["M", "L", "A", "Z"]
    assert path[0][1:] == (1, 2)


def test_wedge_contains() -> None:
    assert wedge_contains(0, 0, 32, -44.75, 44.75, 0, -20)
    assert not wedge_contains(0, 0, 32, -44.75, 44.75, 0, 20)
    assert not wedge_contains(0, 0, 32, -44.75, 44.75, 0, -40)
    # Wedge straddling 360 degrees
    assert wedge_contains(0, 0, 32, 225.25, 314.75, -20, 0)


def test_polygon_contains() -> None:
    square = [Point(0, 0), Point(10, 0), Point(10, 10), Point(0, 10)]
    assert polygon_contains(square, 5, 5)
    assert not polygon_contains(square, 15, 5)
    assert not polygon_contains(square, 5, -1)


def test_is_finite_path() -> None:
    assert is_finite_path([("M", 0, 0), ("L", 1, 1), ("Z",)])
    assert not is_finite_path([("M", math.nan, 0), ("Z",)])
