"""
Baseline (degraded) schedule for inspection when the solver finds nothing.

- anchor:     periodic pattern at offset 0
- flexible_b: periodic pattern at the analytic seed offset (N - induction)
- flexible_a: follows demand, Duty exactly where the other two leave a gap,
              framed by Ascent / Induction before and Descent after each block

No rule is enforced here, so the result usually breaks pattern rules; it must
always be passed through the schedule validator and shown with its Findings.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from rotaplan.engine.anchor_pattern import generate_anchor_pattern
from rotaplan.engine.roster_types import DayState, RotationParameters, Schedule, REQUIRED_ON_DUTY

logger = logging.getLogger(__name__)


def generate_baseline_schedule(params: RotationParameters) -> Schedule:
    horizon = params.horizon_days
    anchor = generate_anchor_pattern(0, params, horizon)
    flexible_b = generate_anchor_pattern(params.seed_offset, params, horizon)
    flexible_a = follow_demand(anchor, flexible_b, params)
    logger.info(f"Baseline schedule built for {params.describe()}")
    return Schedule(tuple(anchor), tuple(flexible_a), tuple(flexible_b), duty_ceiling=None)


def follow_demand(anchor: Sequence[DayState], other: Sequence[DayState],
                  params: RotationParameters) -> List[DayState]:
    horizon = len(anchor)
    coverage_start = params.coverage_start_day
    needed = [
        day >= coverage_start
        and (anchor[day] == DayState.DUTY) + (other[day] == DayState.DUTY) < REQUIRED_ON_DUTY
        for day in range(horizon)
    ]

    states: List[Optional[DayState]] = [None] * horizon
    for day, need in enumerate(needed):
        if need:
            states[day] = DayState.DUTY

    first_ascent = None
    for block_index, (start, end) in enumerate(_runs(needed)):
        induction = params.induction_length if block_index == 0 else 0
        ascent_day = start - 1 - induction
        if ascent_day >= 0 and states[ascent_day] is None:
            states[ascent_day] = DayState.ASCENT
            if first_ascent is None:
                first_ascent = ascent_day
        for day in range(max(ascent_day + 1, 0), start):
            if states[day] is None:
                states[day] = DayState.INDUCTION
        if end + 1 < horizon and states[end + 1] is None:
            states[end + 1] = DayState.DESCENT

    if first_ascent is None:
        first_ascent = 0
    return [
        state if state is not None else (DayState.WAIT if day < first_ascent else DayState.REST)
        for day, state in enumerate(states)
    ]


def _runs(flags: Sequence[bool]) -> List[Tuple[int, int]]:
    """(start, end) inclusive of each maximal run of True."""
    runs = []
    day = 0
    while day < len(flags):
        if not flags[day]:
            day += 1
            continue
        start = day
        while day < len(flags) and flags[day]:
            day += 1
        runs.append((start, day - 1))
    return runs
