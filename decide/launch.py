"""
Unlocking Logic for the DECIDE Engine.

Three stages follow the rule evaluator, each a pure function of the
stage before it:

    CMV + LCM  -> PUM     (combine_pum)
    PUM + PUV  -> FUV     (reduce_fuv)
    FUV        -> Launch  (aggregate_launch)
"""

from __future__ import annotations

from typing import Sequence

from .domain import (
    NUM_CONDITIONS,
    ConfigurationCheck,
    Connector,
    InvalidConfigurationError,
    LaunchDecision,
)


# =============================================================================
# PRELIMINARY UNLOCKING MATRIX
# =============================================================================

def combine(connector: Connector, left: bool, right: bool) -> bool:
    """
    Apply one connector to two CMV entries.

    Raises:
        InvalidConfigurationError: If connector is not a Connector
    """
    if connector is Connector.NOT_USED:
        return True
    if connector is Connector.AND:
        return left and right
    if connector is Connector.OR:
        return left or right
    raise InvalidConfigurationError(
        ConfigurationCheck.CONNECTOR,
        f"Unrecognized connector: {connector!r}",
    )


def combine_pum(
    cmv: Sequence[bool],
    lcm: Sequence[Sequence[Connector]],
) -> tuple[tuple[bool, ...], ...]:
    """PUM[i][j] = LCM[i][j] applied to CMV[i] and CMV[j]."""
    return tuple(
        tuple(combine(lcm[i][j], cmv[i], cmv[j]) for j in range(NUM_CONDITIONS))
        for i in range(NUM_CONDITIONS)
    )


# =============================================================================
# FINAL UNLOCKING VECTOR
# =============================================================================

def reduce_fuv(
    pum: Sequence[Sequence[bool]],
    puv: Sequence[bool],
) -> tuple[bool, ...]:
    """
    FUV[i] is True when condition i is not required (PUV[i] False), or
    when every PUM[i][j] with j != i holds. The diagonal is ignored.
    """
    return tuple(
        not puv[i] or all(pum[i][j] for j in range(NUM_CONDITIONS) if j != i)
        for i in range(NUM_CONDITIONS)
    )


# =============================================================================
# LAUNCH
# =============================================================================

def aggregate_launch(fuv: Sequence[bool]) -> LaunchDecision:
    """YES only if every FUV entry is True."""
    if all(fuv):
        return LaunchDecision.YES
    return LaunchDecision.NO
