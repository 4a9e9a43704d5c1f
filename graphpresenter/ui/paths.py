import math

from PyQt6.QtCore import QRectF
from PyQt6.QtGui import QPainterPath


def to_painter_path(commands):
    """Builds a QPainterPath from geometry path commands.

    Only circular arcs (rx == ry, no x-axis rotation) are supported,
    which is all the renderers emit.
    """
    path = QPainterPath()
    for cmd in commands:
        op = cmd[0]
        if op == "M":
            path.moveTo(cmd[1], cmd[2])
        elif op == "L":
            path.lineTo(cmd[1], cmd[2])
        elif op == "A":
            _arc_to(path, *cmd[1:])
        elif op == "Z":
            path.closeSubpath()
    return path


def _arc_to(path, rx, ry, rotation, large_arc, sweep, x2, y2):
    start = path.currentPosition()
    x1, y1 = start.x(), start.y()
    r = rx

    # Endpoint to centre parameterisation (SVG implementation notes, F.6.5)
    hx = (x1 - x2) / 2
    hy = (y1 - y2) / 2
    d2 = hx*hx + hy*hy
    if d2 == 0:
        return
    if d2 > r * r:
        r = math.sqrt(d2)

    coef = math.sqrt(max(r*r - d2, 0.0) / d2)
    if large_arc == sweep:
        coef = -coef
    cx = coef * hy + (x1 + x2) / 2
    cy = -coef * hx + (y1 + y2) / 2

    theta1 = math.degrees(math.atan2(y1 - cy, x1 - cx))
    theta2 = math.degrees(math.atan2(y2 - cy, x2 - cx))
    delta = theta2 - theta1
    if sweep and delta < 0:
        delta += 360
    elif not sweep and delta > 0:
        delta -= 360

    # Qt measures angles counter-clockwise on screen, y grows downward here
    path.arcTo(QRectF(cx - r, cy - r, 2 * r, 2 * r), -theta1, -delta)
