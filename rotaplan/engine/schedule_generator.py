"""
Schedule generation entry points.

    generate(params)                           -> Schedule
    generate_for_required_duty_days(params)    -> RequiredDutyDaysResult
    generate_baseline(params)                  -> Schedule (degraded, unsolved)
    validate(schedule, horizon, grace)         -> List[Finding]
    coverage_start_day(params)                 -> int

Pipeline: parameters -> validator -> anchor generator + coverage solver -> Schedule.
"""

import logging
from typing import List, Optional

from rotaplan.engine.anchor_pattern import generate_anchor_pattern
from rotaplan.engine.baseline_pattern import generate_baseline_schedule
from rotaplan.engine.coverage_solver import solve_coverage
from rotaplan.engine.horizon_extender import extend_horizon
from rotaplan.engine.parameter_validator import (
    HORIZON_MODE,
    REQUIRED_DUTY_MODE,
    validate_parameters,
)
from rotaplan.engine.roster_types import (
    Finding,
    RequiredDutyDaysResult,
    RotationParameters,
    Schedule,
    coverage_start_day,
)
from rotaplan.engine.schedule_validator import validate_schedule
from rotaplan.engine.search_config import SearchConfig

logger = logging.getLogger(__name__)

__all__ = [
    "generate",
    "generate_for_required_duty_days",
    "generate_baseline",
    "validate",
    "coverage_start_day",
]


def generate(params: RotationParameters, config: Optional[SearchConfig] = None) -> Schedule:
    """
    Generate a fully covered schedule over `params.horizon_days`.

    Raises:
        ConfigurationError: parameters cannot yield a schedule
        InfeasibleScheduleError: the coverage solver exhausted its ceiling bound
    """
    validate_parameters(params, HORIZON_MODE)
    config = config or SearchConfig()
    logger.info(f"Generating schedule: {params.describe()}")

    anchor = generate_anchor_pattern(0, params, params.horizon_days)
    solution = solve_coverage(params, anchor, config)
    return Schedule(
        anchor=tuple(anchor),
        flexible_a=tuple(solution.flexible_a),
        flexible_b=tuple(solution.flexible_b),
        duty_ceiling=solution.duty_ceiling,
    )


def generate_for_required_duty_days(
    params: RotationParameters,
    config: Optional[SearchConfig] = None,
) -> RequiredDutyDaysResult:
    """
    Generate the shortest schedule that contains `params.required_duty_days`
    fully covered days from the coverage-start day on.

    Raises:
        ConfigurationError: parameters cannot yield a schedule
        InfeasibleScheduleError: the horizon extender exhausted its attempts
    """
    validate_parameters(params, REQUIRED_DUTY_MODE)
    config = config or SearchConfig()
    logger.info(f"Generating schedule for {params.required_duty_days} covered duty days "
                f"(N={params.duty_cycle_length} M={params.rest_cycle_length} "
                f"induction={params.induction_length})")
    return extend_horizon(params, generate, config)


def generate_baseline(params: RotationParameters) -> Schedule:
    """Unsolved periodic/demand-following schedule for inspection; validate before showing it."""
    validate_parameters(params, HORIZON_MODE)
    return generate_baseline_schedule(params)


def validate(
    schedule: Schedule,
    horizon_days: int,
    grace_period_days: int,
    params: Optional[RotationParameters] = None,
    duty_ceiling: Optional[int] = None,
) -> List[Finding]:
    return validate_schedule(schedule, horizon_days, grace_period_days, params, duty_ceiling)
