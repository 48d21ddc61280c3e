"""
Evaluation Engine for the DECIDE Engine.

Ties the stages together into a single execution flow:

    1. Input validation
    2. Rule evaluation (CMV)
    3. Logic combination (PUM)
    4. Unlock reduction (FUV)
    5. Launch aggregation

The engine is a pure function of its input. Any validation failure
propagates before a decision exists.
"""

from __future__ import annotations

import logging
from typing import Optional

from .conditions.evaluator import evaluate_conditions
from .domain import DecideInput, DecideOutput
from .launch import aggregate_launch, combine_pum, reduce_fuv
from .validation import validate_input

logger = logging.getLogger(__name__)


def decide(snapshot: DecideInput, workers: Optional[int] = None) -> DecideOutput:
    """
    Evaluate one input snapshot.

    Args:
        snapshot: Points, parameters, LCM and PUV
        workers: Thread count for condition evaluation (None = sequential)

    Returns:
        DecideOutput with CMV, PUM, FUV and the launch decision

    Raises:
        InvalidConfigurationError: If the snapshot or any condition
            parameter is invalid
    """
    validate_input(snapshot)

    results = evaluate_conditions(snapshot.points, snapshot.parameters, workers)
    cmv = tuple(result.met for result in results)
    logger.debug("CMV: %s", cmv)

    pum = combine_pum(cmv, snapshot.lcm)
    fuv = reduce_fuv(pum, snapshot.puv)
    logger.debug("FUV: %s", fuv)

    launch = aggregate_launch(fuv)
    logger.info("Decision for %d points: %s", snapshot.num_points, launch.value)

    return DecideOutput(
        launch=launch,
        cmv=cmv,
        pum=pum,
        fuv=fuv,
        conditions=tuple(results),
    )
