"""
Validation Logic for the DECIDE Engine.

Validation is all-or-nothing. A snapshot either passes every check
or the run is aborted with InvalidConfigurationError; there is no
partial decision.

Top-level checks (run before any condition):
1. Declared point count lies in [MIN_POINTS, MAX_POINTS]
2. Declared point count equals the length of the point list
3. LCM is NUM_CONDITIONS x NUM_CONDITIONS Connectors
4. PUV holds NUM_CONDITIONS booleans

Per-condition parameter checks are exposed as small helpers that the
conditions call on entry.
"""

from __future__ import annotations

import math

from .domain import (
    MAX_POINTS,
    MIN_POINTS,
    NUM_CONDITIONS,
    ConfigurationCheck,
    Connector,
    DecideInput,
    InvalidConfigurationError,
)


# =============================================================================
# INPUT VALIDATION
# =============================================================================

def validate_point_count(num_points: int, points: tuple) -> None:
    """
    Raises:
        InvalidConfigurationError: If the count is out of range or does
            not match the point list
    """
    if num_points < MIN_POINTS or num_points > MAX_POINTS:
        raise InvalidConfigurationError(
            ConfigurationCheck.POINT_COUNT,
            f"NUMPOINTS {num_points} is outside [{MIN_POINTS}, {MAX_POINTS}]",
        )
    if num_points != len(points):
        raise InvalidConfigurationError(
            ConfigurationCheck.POINT_LIST,
            f"NUMPOINTS is {num_points} but {len(points)} points were given",
        )


def validate_lcm(lcm: tuple) -> None:
    """
    Raises:
        InvalidConfigurationError: If the matrix is not square with
            NUM_CONDITIONS rows or holds anything but a Connector
    """
    if len(lcm) != NUM_CONDITIONS:
        raise InvalidConfigurationError(
            ConfigurationCheck.CONNECTOR,
            f"LCM has {len(lcm)} rows, expected {NUM_CONDITIONS}",
        )
    for i, row in enumerate(lcm):
        if len(row) != NUM_CONDITIONS:
            raise InvalidConfigurationError(
                ConfigurationCheck.CONNECTOR,
                f"LCM row {i} has {len(row)} entries, expected {NUM_CONDITIONS}",
            )
        for j, connector in enumerate(row):
            if not isinstance(connector, Connector):
                raise InvalidConfigurationError(
                    ConfigurationCheck.CONNECTOR,
                    f"LCM[{i}][{j}] is not a connector: {connector!r}",
                )


def validate_puv(puv: tuple) -> None:
    """
    Raises:
        InvalidConfigurationError: If PUV is not NUM_CONDITIONS booleans
    """
    if len(puv) != NUM_CONDITIONS:
        raise InvalidConfigurationError(
            ConfigurationCheck.ENABLEMENT,
            f"PUV has {len(puv)} entries, expected {NUM_CONDITIONS}",
        )
    for i, enabled in enumerate(puv):
        if not isinstance(enabled, bool):
            raise InvalidConfigurationError(
                ConfigurationCheck.ENABLEMENT,
                f"PUV[{i}] is not a boolean: {enabled!r}",
            )


def validate_input(snapshot: DecideInput) -> None:
    """
    Run every top-level check on a snapshot.

    Raises:
        InvalidConfigurationError: On the first failing check
    """
    validate_point_count(snapshot.num_points, snapshot.points)
    validate_lcm(snapshot.lcm)
    validate_puv(snapshot.puv)


# =============================================================================
# PARAMETER CHECKS
# =============================================================================

def _parameter_error(condition: int, reason: str) -> InvalidConfigurationError:
    return InvalidConfigurationError(
        ConfigurationCheck.PARAMETER,
        f"LIC {condition}: {reason}",
        condition,
    )


def require_non_negative(condition: int, name: str, value: float) -> None:
    if value < 0:
        raise _parameter_error(condition, f"{name} must be >= 0, got {value}")


def require_at_least(condition: int, name: str, value: int, minimum: int) -> None:
    if value < minimum:
        raise _parameter_error(condition, f"{name} must be >= {minimum}, got {value}")


def require_between(
    condition: int,
    name: str,
    value: int,
    low: int,
    high: int,
) -> None:
    """Inclusive range check."""
    if value < low or value > high:
        raise _parameter_error(
            condition,
            f"{name} must be in [{low}, {high}], got {value}",
        )


def require_epsilon(condition: int, epsilon: float) -> None:
    """EPSILON must lie in [0, pi)."""
    if epsilon < 0 or epsilon >= math.pi:
        raise _parameter_error(condition, f"EPSILON must be in [0, pi), got {epsilon}")


def require_offset_sum(
    condition: int,
    names: tuple[str, str],
    total: int,
    limit: int,
) -> None:
    if total > limit:
        raise _parameter_error(
            condition,
            f"{names[0]} + {names[1]} must be <= {limit}, got {total}",
        )
