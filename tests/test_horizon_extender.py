"""
Tests for the horizon extender with stubbed generators.
"""

import sys
import pathlib
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))

import pytest
from rotaplan.engine.errors import InfeasibleScheduleError
from rotaplan.engine.horizon_extender import extend_horizon, find_target_day, initial_horizon
from rotaplan.engine.roster_types import DayState, RotationParameters, Schedule, from_codes
from rotaplan.engine.search_config import SearchConfig


PARAMS = RotationParameters(14, 7, 5, required_duty_days=20)


def covered_schedule(params, config=None):
    """Two on Duty every day."""
    horizon = params.horizon_days
    return Schedule(
        (DayState.DUTY,) * horizon,
        (DayState.DUTY,) * horizon,
        (DayState.REST,) * horizon,
    )


def uncovered_schedule(params, config=None):
    horizon = params.horizon_days
    return Schedule((DayState.WAIT,) * horizon, (DayState.WAIT,) * horizon, (DayState.WAIT,) * horizon)


class TestFindTargetDay:

    def test_counts_from_coverage_start(self):
        schedule = Schedule(from_codes("DDRDD"), from_codes("DDRDD"), from_codes("RRRRR"))
        assert find_target_day(schedule, 0, 2) == 1
        assert find_target_day(schedule, 0, 3) == 3
        assert find_target_day(schedule, 2, 1) == 3

    def test_target_not_reached(self):
        schedule = Schedule(from_codes("DD"), from_codes("DD"), from_codes("RR"))
        assert find_target_day(schedule, 0, 3) is None


class TestExtendHorizon:

    def test_initial_horizon(self):
        # 20 + 6 + 6 * 21 + 30
        assert initial_horizon(PARAMS, SearchConfig()) == 182

    def test_truncates_at_target(self):
        result = extend_horizon(PARAMS, covered_schedule, SearchConfig())
        assert result.horizon_days == 26
        assert result.schedule.horizon_days == 26
        assert result.attempts == 1

    def test_grows_horizon_then_gives_up(self):
        horizons = []

        def recording(params, config):
            horizons.append(params.horizon_days)
            return uncovered_schedule(params)

        with pytest.raises(InfeasibleScheduleError):
            extend_horizon(PARAMS, recording, SearchConfig())
        assert horizons == [182, 273, 410]

    def test_infeasible_propagates_with_deepening(self):
        def failing(params, config):
            raise InfeasibleScheduleError("no schedule", ceilings_tried=[14, 15])

        with pytest.raises(InfeasibleScheduleError, match="no schedule"):
            extend_horizon(PARAMS, failing, SearchConfig())

    def test_single_shot_retries_longer_horizon(self):
        calls = []

        def flaky(params, config):
            calls.append(params.horizon_days)
            if len(calls) == 1:
                raise InfeasibleScheduleError("no schedule", ceilings_tried=[14])
            return covered_schedule(params)

        result = extend_horizon(PARAMS, flaky, SearchConfig(ceiling_span=0))
        assert result.attempts == 2
        assert calls == [182, 273]
        assert result.horizon_days == 26

    def test_single_shot_exhaustion_keeps_last_ceilings(self):
        def failing(params, config):
            raise InfeasibleScheduleError("no schedule", ceilings_tried=[14])

        with pytest.raises(InfeasibleScheduleError) as exc_info:
            extend_horizon(PARAMS, failing, SearchConfig(ceiling_span=0))
        assert exc_info.value.ceilings_tried == [14]
