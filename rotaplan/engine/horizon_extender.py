"""
Horizon Extender - generation driven by a target count of fully covered days.

Grows the simulation horizon until a day is found at which the cumulative
number of exactly-two-on-Duty days (counted from the coverage-start day)
reaches the target, then truncates the schedule at that day (inclusive).
"""

import math
import logging
from typing import Callable, Optional

from rotaplan.engine.errors import InfeasibleScheduleError
from rotaplan.engine.roster_types import (
    RequiredDutyDaysResult,
    RotationParameters,
    Schedule,
    REQUIRED_ON_DUTY,
)
from rotaplan.engine.search_config import SearchConfig

logger = logging.getLogger(__name__)


def initial_horizon(params: RotationParameters, config: SearchConfig) -> int:
    buffer = config.horizon_buffer_cycles * params.cycle_length + config.horizon_buffer_days
    return params.required_duty_days + params.coverage_start_day + buffer


def find_target_day(schedule: Schedule, coverage_start: int, required_count: int) -> Optional[int]:
    """First day at which the cumulative count of fully covered days reaches `required_count`."""
    covered = 0
    for day in range(coverage_start, schedule.horizon_days):
        if schedule.duty_count(day) == REQUIRED_ON_DUTY:
            covered += 1
            if covered >= required_count:
                return day
    return None


def extend_horizon(
    params: RotationParameters,
    generate: Callable[[RotationParameters, SearchConfig], Schedule],
    config: SearchConfig,
) -> RequiredDutyDaysResult:
    """
    Re-run `generate` with a growing horizon until the duty-day target is met.

    Infeasibility from `generate` is only retried in single-shot search mode,
    where a longer horizon is the caller's way of relaxing the search.
    """
    coverage_start = params.coverage_start_day
    required = params.required_duty_days
    horizon = initial_horizon(params, config)
    last_error = None

    for attempt in range(1, config.horizon_attempts + 1):
        logger.info(f"Horizon attempt {attempt}/{config.horizon_attempts}: "
                    f"{horizon} days for {required} covered days")
        try:
            schedule = generate(params.with_horizon(horizon), config)
        except InfeasibleScheduleError as exc:
            if not config.single_shot:
                raise
            logger.warning(f"Attempt {attempt} infeasible at horizon {horizon}: {exc}")
            last_error = exc
        else:
            target_day = find_target_day(schedule, coverage_start, required)
            if target_day is not None:
                logger.info(f"Target of {required} covered days reached on day {target_day}")
                return RequiredDutyDaysResult(
                    schedule=schedule.truncate(target_day + 1),
                    coverage_start_day=coverage_start,
                    horizon_days=target_day + 1,
                    attempts=attempt,
                )
            logger.info(f"Target not reached within {horizon} days")

        horizon = int(math.ceil(horizon * config.horizon_growth))

    raise InfeasibleScheduleError(
        f"Could not reach {required} covered duty days within "
        f"{config.horizon_attempts} horizon attempts",
        params=params,
        ceilings_tried=last_error.ceilings_tried if last_error else None,
    )
