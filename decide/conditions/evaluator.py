"""
Rule Evaluator for the DECIDE Engine.

Builds the Condition Met Vector (CMV) from the fifteen conditions.

Core principle:
    Conditions are dispatched through one explicit, ordered table.
    The CMV entry at index i is always produced by CONDITIONS[i].

The conditions only read the immutable points and parameters, so they
may run on a thread pool. Results are always joined in index order,
which keeps the output and the reported error deterministic.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

from ..domain import Parameters, Point
from .rules import (
    ConditionResult,
    lic_0,
    lic_1,
    lic_2,
    lic_3,
    lic_4,
    lic_5,
    lic_6,
    lic_7,
    lic_8,
    lic_9,
    lic_10,
    lic_11,
    lic_12,
    lic_13,
    lic_14,
)

logger = logging.getLogger(__name__)

Predicate = Callable[[tuple[Point, ...], Parameters], ConditionResult]


# =============================================================================
# DISPATCH TABLE
# =============================================================================

@dataclass(frozen=True)
class ConditionSpec:
    """One entry of the dispatch table."""
    index: int
    predicate: Predicate

    @property
    def summary(self) -> str:
        return (self.predicate.__doc__ or "").strip().splitlines()[0]


CONDITIONS: tuple[ConditionSpec, ...] = tuple(
    ConditionSpec(index, predicate)
    for index, predicate in enumerate((
        lic_0, lic_1, lic_2, lic_3, lic_4,
        lic_5, lic_6, lic_7, lic_8, lic_9,
        lic_10, lic_11, lic_12, lic_13, lic_14,
    ))
)


# =============================================================================
# EVALUATION
# =============================================================================

def evaluate_conditions(
    points: tuple[Point, ...],
    params: Parameters,
    workers: Optional[int] = None,
) -> list[ConditionResult]:
    """
    Evaluate all fifteen conditions.

    Args:
        points: The trajectory
        params: Condition parameters
        workers: Thread count; None or 1 evaluates sequentially

    Returns:
        One ConditionResult per condition, in index order

    Raises:
        InvalidConfigurationError: From the lowest-indexed condition
            whose parameters are invalid
    """
    logger.debug("Evaluating %d conditions on %d points (workers=%s)", len(CONDITIONS), len(points), workers)
    if workers is None or workers <= 1:
        return [spec.predicate(points, params) for spec in CONDITIONS]

    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(spec.predicate, points, params)
            for spec in CONDITIONS
        ]
        # .result() re-raises, so the first failing index wins
        return [future.result() for future in futures]
