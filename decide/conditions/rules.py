"""
Launch Interceptor Conditions (LIC 0-14).

Each condition is independently computable from the points and the
parameters alone. Every condition answers one existential question:
"is there at least one window of the trajectory that satisfies C?"

A condition first validates the parameters it reads. An out-of-domain
value raises InvalidConfigurationError and aborts the run. Degenerate
geometry (coincident points, undefined angles) is never an error: the
window simply does not satisfy the condition.

Window conventions:
    pair K apart        -> indices (i, i + K)
    triple at (A, A+B)  -> indices (i, i + A, i + A + B)
    N-point window      -> indices i .. i + N - 1
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..domain import Parameters, Point
from ..geometry import (
    angle,
    centroid_radius,
    distance,
    distance_to_line,
    line_equation,
    quadrant,
    triangle_area,
)
from ..validation import (
    require_at_least,
    require_between,
    require_epsilon,
    require_non_negative,
    require_offset_sum,
)


# =============================================================================
# CONDITION RESULT
# =============================================================================

@dataclass
class ConditionResult:
    """
    Outcome of one condition with full transparency.

    Every result exposes:
    - index: LIC number 0-14
    - name: What this condition measures
    - met: The CMV entry
    - witnesses: Point-index windows that satisfied the condition
      (two windows for the dual conditions 11-14, empty when not met)
    - reason: Human-readable explanation
    """
    index: int
    name: str
    met: bool
    witnesses: list[tuple[int, ...]] = field(default_factory=list)
    reason: str = ""


def _met(index: int, name: str, witnesses: list[tuple[int, ...]], reason: str) -> ConditionResult:
    return ConditionResult(index=index, name=name, met=True, witnesses=witnesses, reason=reason)


def _not_met(index: int, name: str, reason: str) -> ConditionResult:
    return ConditionResult(index=index, name=name, met=False, reason=reason)


# =============================================================================
# WINDOW HELPERS
# =============================================================================

def _pairs(n: int, gap: int) -> Iterator[tuple[int, int]]:
    for i in range(n - gap):
        yield i, i + gap


def _triples(n: int, first: int, second: int) -> Iterator[tuple[int, int, int]]:
    for i in range(n - first - second):
        yield i, i + first, i + first + second


def _angle_outside(a: Point, b: Point, c: Point, epsilon: float) -> bool:
    theta = angle(a, b, c)
    if theta is None:
        return False
    magnitude = abs(theta)
    return magnitude < math.pi - epsilon or magnitude > math.pi + epsilon


# =============================================================================
# LIC 0-5: CONSECUTIVE WINDOWS
# =============================================================================

def lic_0(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """Two consecutive points farther apart than LENGTH1."""
    name = "consecutive_distance"
    require_non_negative(0, "LENGTH1", params.length1)

    for i, j in _pairs(len(points), 1):
        d = distance(points[i], points[j])
        if d > params.length1:
            return _met(0, name, [(i, j)], f"points {i},{j} are {d:.4g} apart (> LENGTH1 {params.length1})")
    return _not_met(0, name, f"no consecutive pair is farther apart than LENGTH1 {params.length1}")


def lic_1(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """Three consecutive points not contained in a circle of RADIUS1."""
    name = "consecutive_radius"
    require_non_negative(1, "RADIUS1", params.radius1)

    for i, j, k in _triples(len(points), 1, 1):
        r = centroid_radius(points[i], points[j], points[k])
        if r > params.radius1:
            return _met(1, name, [(i, j, k)], f"points {i},{j},{k} need radius {r:.4g} (> RADIUS1 {params.radius1})")
    return _not_met(1, name, f"every consecutive triple fits in RADIUS1 {params.radius1}")


def lic_2(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """Three consecutive points forming an angle outside [pi - EPSILON, pi + EPSILON]."""
    name = "consecutive_angle"
    require_epsilon(2, params.epsilon)

    for i, j, k in _triples(len(points), 1, 1):
        if _angle_outside(points[i], points[j], points[k], params.epsilon):
            return _met(2, name, [(i, j, k)], f"angle at point {j} deviates from pi by more than EPSILON {params.epsilon}")
    return _not_met(2, name, f"no consecutive triple bends by more than EPSILON {params.epsilon}")


def lic_3(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """Three consecutive points forming a triangle larger than AREA1."""
    name = "consecutive_area"
    require_non_negative(3, "AREA1", params.area1)

    for i, j, k in _triples(len(points), 1, 1):
        area = triangle_area(points[i], points[j], points[k])
        if area > params.area1:
            return _met(3, name, [(i, j, k)], f"points {i},{j},{k} span area {area:.4g} (> AREA1 {params.area1})")
    return _not_met(3, name, f"no consecutive triple spans more than AREA1 {params.area1}")


def lic_4(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """Q_PTS consecutive points lying in more than QUADS quadrants."""
    name = "quadrant_spread"
    n = len(points)
    require_between(4, "Q_PTS", params.q_pts, 2, n)
    require_between(4, "QUADS", params.quads, 1, 3)

    for start in range(n - params.q_pts + 1):
        window = range(start, start + params.q_pts)
        touched = {quadrant(points[i]) for i in window}
        if len(touched) > params.quads:
            return _met(
                4, name, [tuple(window)],
                f"points {start}..{window[-1]} touch {len(touched)} quadrants (> QUADS {params.quads})",
            )
    return _not_met(4, name, f"no {params.q_pts}-point window touches more than {params.quads} quadrants")


def lic_5(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """Two consecutive points where the second has a smaller x."""
    name = "x_decrease"

    for i, j in _pairs(len(points), 1):
        if points[j].x - points[i].x < 0:
            return _met(5, name, [(i, j)], f"x decreases from point {i} to point {j}")
    return _not_met(5, name, "x never decreases between consecutive points")


# =============================================================================
# LIC 6-10: PARAMETERIZED WINDOWS
# =============================================================================

def lic_6(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """
    N_PTS consecutive points where one lies farther than DIST from the
    line through the first and last point of the window.

    When the first and last points coincide, distances are measured to
    that point instead.
    """
    name = "line_deviation"
    n = len(points)
    if n < 3:
        return _not_met(6, name, "fewer than 3 points")
    require_between(6, "N_PTS", params.n_pts, 3, n)
    require_non_negative(6, "DIST", params.dist)

    for start in range(n - params.n_pts + 1):
        end = start + params.n_pts - 1
        first, last = points[start], points[end]
        line = None if first == last else line_equation(first, last)
        for i in range(start, end + 1):
            if line is None:
                d = distance(points[i], first)
            else:
                d = distance_to_line(points[i], line)
            if d > params.dist:
                return _met(
                    6, name, [tuple(range(start, end + 1))],
                    f"point {i} lies {d:.4g} from the window line (> DIST {params.dist})",
                )
    return _not_met(6, name, f"every {params.n_pts}-point window stays within DIST {params.dist}")


def lic_7(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """Two points K_PTS apart that are farther apart than LENGTH1."""
    name = "gapped_distance"
    n = len(points)
    if n < 3:
        return _not_met(7, name, "fewer than 3 points")
    require_between(7, "K_PTS", params.k_pts, 1, n - 2)

    for i, j in _pairs(n, params.k_pts):
        d = distance(points[i], points[j])
        if d > params.length1:
            return _met(7, name, [(i, j)], f"points {i},{j} are {d:.4g} apart (> LENGTH1 {params.length1})")
    return _not_met(7, name, f"no pair {params.k_pts} apart exceeds LENGTH1 {params.length1}")


def lic_8(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """Three points at offsets A_PTS and A_PTS + B_PTS not contained in a circle of RADIUS1."""
    name = "gapped_radius"
    n = len(points)
    if n < 5:
        return _not_met(8, name, "fewer than 5 points")
    require_at_least(8, "A_PTS", params.a_pts, 1)
    require_at_least(8, "B_PTS", params.b_pts, 1)
    require_offset_sum(8, ("A_PTS", "B_PTS"), params.a_pts + params.b_pts, n - 3)

    for i, j, k in _triples(n, params.a_pts, params.b_pts):
        r = centroid_radius(points[i], points[j], points[k])
        if r > params.radius1:
            return _met(8, name, [(i, j, k)], f"points {i},{j},{k} need radius {r:.4g} (> RADIUS1 {params.radius1})")
    return _not_met(8, name, f"every spaced triple fits in RADIUS1 {params.radius1}")


def lic_9(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """Three points at offsets C_PTS and C_PTS + D_PTS forming an angle outside [pi - EPSILON, pi + EPSILON]."""
    name = "gapped_angle"
    n = len(points)
    if n < 5:
        return _not_met(9, name, "fewer than 5 points")
    if params.c_pts + params.d_pts > n - 3:
        return _not_met(9, name, f"C_PTS + D_PTS exceeds {n - 3}")
    require_at_least(9, "C_PTS", params.c_pts, 1)
    require_at_least(9, "D_PTS", params.d_pts, 1)
    require_epsilon(9, params.epsilon)

    for i, j, k in _triples(n, params.c_pts, params.d_pts):
        if _angle_outside(points[i], points[j], points[k], params.epsilon):
            return _met(9, name, [(i, j, k)], f"angle at point {j} deviates from pi by more than EPSILON {params.epsilon}")
    return _not_met(9, name, f"no spaced triple bends by more than EPSILON {params.epsilon}")


def lic_10(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """Three points at offsets E_PTS and E_PTS + F_PTS forming a triangle larger than AREA1."""
    name = "gapped_area"
    require_at_least(10, "E_PTS", params.e_pts, 1)
    require_at_least(10, "F_PTS", params.f_pts, 1)
    require_non_negative(10, "AREA1", params.area1)

    for i, j, k in _triples(len(points), params.e_pts, params.f_pts):
        area = triangle_area(points[i], points[j], points[k])
        if area > params.area1:
            return _met(10, name, [(i, j, k)], f"points {i},{j},{k} span area {area:.4g} (> AREA1 {params.area1})")
    return _not_met(10, name, f"no spaced triple spans more than AREA1 {params.area1}")


# =============================================================================
# LIC 11-14: DUAL THRESHOLDS
# =============================================================================
# Each of these latches two independent flags during one scan. The two
# witnessing windows may differ.

def lic_11(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """A pair K_PTS apart farther than LENGTH1, and a pair K_PTS apart closer than LENGTH2."""
    name = "gapped_distance_band"
    n = len(points)
    if n < 3:
        return _not_met(11, name, "fewer than 3 points")
    require_at_least(11, "K_PTS", params.k_pts, 1)
    require_non_negative(11, "LENGTH2", params.length2)

    far: Optional[tuple[int, int]] = None
    near: Optional[tuple[int, int]] = None
    for i, j in _pairs(n, params.k_pts):
        d = distance(points[i], points[j])
        if far is None and d > params.length1:
            far = (i, j)
        if near is None and d < params.length2:
            near = (i, j)
        if far and near:
            return _met(
                11, name, [far, near],
                f"pair {far} exceeds LENGTH1 {params.length1}, pair {near} is under LENGTH2 {params.length2}",
            )
    return _not_met(11, name, f"no pairs both above LENGTH1 {params.length1} and below LENGTH2 {params.length2}")


def lic_12(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """A pair K_PTS apart farther than LENGTH1, and a pair K_PTS apart farther than LENGTH2."""
    name = "gapped_distance_dual"
    require_at_least(12, "K_PTS", params.k_pts, 1)

    first: Optional[tuple[int, int]] = None
    second: Optional[tuple[int, int]] = None
    for i, j in _pairs(len(points), params.k_pts):
        d = distance(points[i], points[j])
        if first is None and d > params.length1:
            first = (i, j)
        if second is None and d > params.length2:
            second = (i, j)
        if first and second:
            return _met(
                12, name, [first, second],
                f"pair {first} exceeds LENGTH1 {params.length1}, pair {second} exceeds LENGTH2 {params.length2}",
            )
    return _not_met(12, name, f"LENGTH1 {params.length1} and LENGTH2 {params.length2} are not both exceeded")


def lic_13(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """A spaced triple outside RADIUS1, and a spaced triple outside RADIUS2."""
    name = "gapped_radius_dual"
    require_at_least(13, "A_PTS", params.a_pts, 1)
    require_at_least(13, "B_PTS", params.b_pts, 1)

    first: Optional[tuple[int, int, int]] = None
    second: Optional[tuple[int, int, int]] = None
    for i, j, k in _triples(len(points), params.a_pts, params.b_pts):
        r = centroid_radius(points[i], points[j], points[k])
        if first is None and r > params.radius1:
            first = (i, j, k)
        if second is None and r > params.radius2:
            second = (i, j, k)
        if first and second:
            return _met(
                13, name, [first, second],
                f"triple {first} exceeds RADIUS1 {params.radius1}, triple {second} exceeds RADIUS2 {params.radius2}",
            )
    return _not_met(13, name, f"RADIUS1 {params.radius1} and RADIUS2 {params.radius2} are not both exceeded")


def lic_14(points: tuple[Point, ...], params: Parameters) -> ConditionResult:
    """A spaced triple larger than AREA1, and a spaced triple larger than AREA2."""
    name = "gapped_area_dual"
    require_at_least(14, "E_PTS", params.e_pts, 1)
    require_at_least(14, "F_PTS", params.f_pts, 1)

    first: Optional[tuple[int, int, int]] = None
    second: Optional[tuple[int, int, int]] = None
    for i, j, k in _triples(len(points), params.e_pts, params.f_pts):
        area = triangle_area(points[i], points[j], points[k])
        if first is None and area > params.area1:
            first = (i, j, k)
        if second is None and area > params.area2:
            second = (i, j, k)
        if first and second:
            return _met(
                14, name, [first, second],
                f"triple {first} exceeds AREA1 {params.area1}, triple {second} exceeds AREA2 {params.area2}",
            )
    return _not_met(14, name, f"AREA1 {params.area1} and AREA2 {params.area2} are not both exceeded")
