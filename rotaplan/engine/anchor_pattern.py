"""
Anchor Pattern Generator - deterministic periodic schedule.

Cycle layout (cycle length N + M), day t counted from the worker's offset:
    t % cycle == 0          Ascent
    1 .. N                  Induction (first cycle, first `induction_length` days) else Duty
    N + 1                   Descent
    N + 2 .. N + M - 1      Rest
Days before the offset are Wait.
"""

from typing import List

from rotaplan.engine.roster_types import DayState, RotationParameters


def anchor_state(day: int, offset_days: int, params: RotationParameters) -> DayState:
    """Day state of a periodic worker that starts its first Ascent on `offset_days`."""
    if day < offset_days:
        return DayState.WAIT

    t = day - offset_days
    cycle_index, day_in_cycle = divmod(t, params.cycle_length)
    n = params.duty_cycle_length

    if day_in_cycle == 0:
        return DayState.ASCENT
    if day_in_cycle <= n:
        if cycle_index == 0 and day_in_cycle <= params.induction_length:
            return DayState.INDUCTION
        return DayState.DUTY
    if day_in_cycle == n + 1:
        return DayState.DESCENT
    return DayState.REST


def generate_anchor_pattern(offset_days: int, params: RotationParameters, horizon_days: int) -> List[DayState]:
    """
    Generate the periodic schedule for one worker.

    Args:
        offset_days: day of the worker's first Ascent (0 for the anchor worker)
        params: rotation parameters (N, M, induction)
        horizon_days: number of days to generate

    Returns:
        List of DayState, one per day
    """
    return [anchor_state(day, offset_days, params) for day in range(horizon_days)]
