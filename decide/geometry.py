"""
Geometry Kernel for the DECIDE Engine.

Pure functions of coordinates. No state, no errors: callers handle the
degenerate cases (coincident points) by policy before calling in.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from .domain import Point


@dataclass(frozen=True)
class Line:
    """Line in the form a*x + b*y + c = 0."""
    a: float
    b: float
    c: float


def distance(p: Point, q: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p.x - q.x, p.y - q.y)


def line_equation(p: Point, q: Point) -> Line:
    """
    Coefficients of the line through p and q.

    Uses a = p.y - q.y and b = p.x - q.x (not the textbook b = -dx).
    distance_to_line depends on this exact convention.
    """
    return Line(
        a=p.y - q.y,
        b=p.x - q.x,
        c=p.x * q.y - q.x * p.y,
    )


def distance_to_line(p: Point, line: Line) -> float:
    """
    Distance from p to line.

    Undefined for a line built from two coincident points; callers must
    branch on that case first.
    """
    return abs(line.a * p.x + line.b * p.y + line.c) / math.sqrt(line.a ** 2 + line.b ** 2)


def triangle_area(p: Point, q: Point, r: Point) -> float:
    return abs(p.x * (q.y - r.y) + q.x * (r.y - p.y) + r.x * (p.y - q.y)) / 2


def centroid_radius(p: Point, q: Point, r: Point) -> float:
    """Largest distance from the centroid of p, q, r to any of the three."""
    centre = Point((p.x + q.x + r.x) / 3, (p.y + q.y + r.y) / 3)
    return max(distance(p, centre), distance(q, centre), distance(r, centre))


def angle(a: Point, b: Point, c: Point) -> Optional[float]:
    """
    Signed angle at vertex b, in (-pi, pi].

    Computed with atan2 of the cross and dot products of (b - a) and
    (b - c). Returns None when a or c coincides with the vertex.
    """
    if a == b or c == b:
        return None
    ux, uy = b.x - a.x, b.y - a.y
    vx, vy = b.x - c.x, b.y - c.y
    cross = ux * vy - uy * vx
    dot = ux * vx + uy * vy
    theta = math.atan2(cross, dot)
    # atan2 yields -pi for a negative-zero cross product
    if theta == -math.pi:
        return math.pi
    return theta


def quadrant(p: Point) -> int:
    """
    Quadrant number 1-4 of p.

    Points on an axis go to the lowest-numbered quadrant they touch:
    (0, 0) -> 1, (-1, 0) -> 2, (0, -1) -> 3, (1, 0) -> 1, (0, 1) -> 1.
    """
    if p.x >= 0 and p.y >= 0:
        return 1
    if p.x <= 0 and p.y >= 0:
        return 2
    if p.x <= 0 and p.y < 0:
        return 3
    return 4
