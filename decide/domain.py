"""
Core Domain Objects for the DECIDE Engine.

One evaluation run consumes one DecideInput snapshot and produces one
DecideOutput snapshot. Nothing survives across runs and nothing in an
input is mutated by the engine.

Domain Objects:
    Point           - An immutable (x, y) coordinate
    Parameters      - The tuning values read by the fifteen conditions
    Connector       - AND / OR / NOT_USED relation between two conditions
    DecideInput     - Points + Parameters + LCM + PUV
    DecideOutput    - CMV + PUM + FUV + launch decision
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Optional


# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

NUM_CONDITIONS = 15
MIN_POINTS = 2
MAX_POINTS = 100


# =============================================================================
# ERROR SYSTEM
# =============================================================================

class ConfigurationCheck(Enum):
    """
    Checks that can reject an input snapshot.

    Any of these aborts the whole run before a decision exists:
    POINT_COUNT: declared point count out of [2, 100]
    POINT_LIST:  declared point count does not match the point list
    CONNECTOR:   LCM is malformed or holds an unknown connector
    ENABLEMENT:  PUV is malformed
    PARAMETER:   a condition parameter is outside its validity domain
    """
    POINT_COUNT = "point_count"
    POINT_LIST = "point_list"
    CONNECTOR = "connector"
    ENABLEMENT = "enablement"
    PARAMETER = "parameter"


class InvalidConfigurationError(Exception):
    """Raised when an input snapshot cannot be evaluated."""

    def __init__(
        self,
        check: ConfigurationCheck,
        reason: str,
        condition: Optional[int] = None,
    ):
        self.check = check
        self.reason = reason
        self.condition = condition
        super().__init__(f"[{check.value}] {reason}")


# =============================================================================
# GEOMETRY PRIMITIVES
# =============================================================================

@dataclass(frozen=True)
class Point:
    """A planar point. Points are never modified once read."""
    x: float
    y: float

    @classmethod
    def from_pair(cls, pair) -> Point:
        x, y = pair
        return cls(float(x), float(y))

    def to_pair(self) -> list[float]:
        return [self.x, self.y]


# =============================================================================
# PARAMETERS
# =============================================================================

@dataclass(frozen=True)
class Parameters:
    """
    Tuning values for the fifteen conditions.

    Field names are the lower-case forms of the wire names (RADIUS1,
    A_PTS, ...). Each condition validates only the fields it reads.
    G_PTS is carried for wire compatibility; no condition reads it.
    """
    radius1: float = 0.0
    radius2: float = 0.0
    length1: float = 0.0
    length2: float = 0.0
    dist: float = 0.0
    epsilon: float = 0.0
    quads: int = 0
    area1: float = 0.0
    area2: float = 0.0
    a_pts: int = 0
    b_pts: int = 0
    c_pts: int = 0
    d_pts: int = 0
    e_pts: int = 0
    f_pts: int = 0
    g_pts: int = 0
    k_pts: int = 0
    n_pts: int = 0
    q_pts: int = 0

    def to_wire(self) -> dict:
        return {f.name.upper(): getattr(self, f.name) for f in fields(self)}


# =============================================================================
# LOGIC CONNECTORS
# =============================================================================

class Connector(Enum):
    """How PUM[i][j] is derived from CMV[i] and CMV[j]."""
    AND = "AND"
    OR = "OR"
    NOT_USED = "NOT_USED"


class LaunchDecision(Enum):
    """Terminal decision of one evaluation run."""
    YES = "YES"
    NO = "NO"


# =============================================================================
# INPUT / OUTPUT SNAPSHOTS
# =============================================================================

@dataclass(frozen=True)
class DecideInput:
    """
    One input snapshot.

    Shape and range checks are not done here; the engine runs them
    through decide.validation before any condition is evaluated, so
    a malformed snapshot can still be built and inspected.
    """
    num_points: int
    points: tuple[Point, ...]
    parameters: Parameters
    lcm: tuple[tuple[Connector, ...], ...]
    puv: tuple[bool, ...]

    @property
    def n(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class DecideOutput:
    """
    One output snapshot.

    `conditions` holds the per-condition explanations produced by the
    rule evaluator. It is a view for humans and is not serialized.
    """
    launch: LaunchDecision
    cmv: tuple[bool, ...]
    pum: tuple[tuple[bool, ...], ...]
    fuv: tuple[bool, ...]
    conditions: tuple = field(default=(), compare=False)

    def to_record(self) -> dict:
        """Output record in the wire layout."""
        return {
            "LAUNCH": self.launch.value,
            "CMV": list(self.cmv),
            "PUM": [list(row) for row in self.pum],
            "FUV": list(self.fuv),
        }
