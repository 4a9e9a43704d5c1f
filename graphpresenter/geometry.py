"""2-D helpers for edge and affordance shapes.

Points are anything with `x` and `y` attributes (nodes included). Paths
are lists of SVG-style commands: ("M", x, y), ("L", x, y),
("A", rx, ry, rotation, large_arc, sweep, x, y) and ("Z",).
"""
import math
from typing import NamedTuple


class Point(NamedTuple):
    x: float
    y: float


ORIGIN = Point(0.0, 0.0)
NAN_POINT = Point(math.nan, math.nan)


def rotation(source, target):
    """Angle of the edge source -> target in degrees."""
    return math.atan2(target.y - source.y, target.x - source.x) * 180 / math.pi


def rotate(cx, cy, x, y, angle):
    # Maps a vector at `angle` degrees back onto the positive x-axis
    radians = (math.pi / 180) * angle
    cos = math.cos(radians)
    sin = math.sin(radians)
    nx = (cos * (x - cx)) + (sin * (y - cy)) + cx
    ny = (cos * (y - cy)) - (sin * (x - cx)) + cy
    return Point(nx, ny)


def rotate_point(center, point, angle):
    return rotate(center.x, center.y, point.x, point.y, angle)


def unit_vector(source, target, new_length=None):
    """Direction source -> target, of length sqrt(new_length) when given.

    A zero-length edge has no direction and yields NaN components.
    """
    length = math.sqrt((target.x - source.x) ** 2 + (target.y - source.y) ** 2) / math.sqrt(new_length or 1)
    if length == 0:
        return NAN_POINT
    return Point((target.x - source.x) / length, (target.y - source.y) / length)


def unit_normal_vector(source, target, new_length=None):
    return rotate_point(ORIGIN, unit_vector(source, target, new_length), 90)


def polar_to_cartesian(cx, cy, radius, angle):
    """Point at `angle` degrees clockwise from 12 o'clock."""
    ar = (angle - 90) * math.pi / 180.0
    return Point(cx + radius * math.cos(ar), cy + radius * math.sin(ar))


def describe_arc_path(x, y, radius, start_angle, end_angle):
    start = polar_to_cartesian(x, y, radius, end_angle)
    end = polar_to_cartesian(x, y, radius, start_angle)
    large_arc = 0 if end_angle - start_angle <= 180 else 1
    return [
        ("M", start.x, start.y),
        ("A", radius, radius, 0, large_arc, 0, end.x, end.y),
    ]


def describe_wedge_path(x, y, radius, start_angle, end_angle):
    """Pie slice: the arc of describe_arc_path closed through its centre."""
    arc = describe_arc_path(x, y, radius, start_angle, end_angle)
    return [("M", x, y), ("L",) + arc[0][1:]] + arc[1:] + [("Z",)]


def wedge_contains(cx, cy, radius, start_angle, end_angle, px, py):
    """True when (px, py) lies in the pie slice described by describe_wedge_path."""
    dx = px - cx
    dy = py - cy
    if dx*dx + dy*dy > radius * radius:
        return False
    angle = (math.degrees(math.atan2(dy, dx)) + 90) % 360
    span = (end_angle - start_angle) % 360
    return (angle - start_angle) % 360 <= span


def polygon_contains(points, px, py):
    """Even-odd test of (px, py) against a closed polygon."""
    inside = False
    j = len(points) - 1
    for i, pi in enumerate(points):
        pj = points[j]
        if (pi.y > py) != (pj.y > py):
            cross_x = (pj.x - pi.x) * (py - pi.y) / (pj.y - pi.y) + pi.x
            if px < cross_x:
                inside = not inside
        j = i
    return inside


def is_finite_path(commands):
    return all(math.isfinite(v) for cmd in commands for v in cmd[1:])
