"""
End-to-end tests for the generation entry points.

Run with: pytest tests/test_schedule_generator.py -v
"""

import sys
import pathlib
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))

import pytest
from rotaplan.engine.errors import ConfigurationError, InfeasibleScheduleError
from rotaplan.engine.roster_types import DayState, RotationParameters
from rotaplan.engine.schedule_generator import (
    coverage_start_day,
    generate,
    generate_baseline,
    generate_for_required_duty_days,
    validate,
)
from rotaplan.engine.schedule_validator import coverage_findings, pattern_findings
from rotaplan.engine.search_config import SearchConfig


class TestParameterRejection:

    def test_no_room_for_duty_after_induction(self):
        with pytest.raises(ConfigurationError) as exc_info:
            generate(RotationParameters(5, 4, 5, horizon_days=30))
        codes = [issue.code for issue in exc_info.value.issues]
        assert codes == ["NO_DUTY_AFTER_INDUCTION"]

    @pytest.mark.parametrize("n,m,induction,horizon", [
        (14, 2, 5, 45),     # rest cycle too short
        (14, 7, 0, 45),     # induction below range
        (14, 7, 6, 45),     # induction above range
        (14, 7, 5, 0),      # empty horizon
    ])
    def test_out_of_range(self, n, m, induction, horizon):
        with pytest.raises(ConfigurationError):
            generate(RotationParameters(n, m, induction, horizon_days=horizon))

    def test_reports_every_problem(self):
        with pytest.raises(ConfigurationError) as exc_info:
            generate(RotationParameters(5, 2, 6, horizon_days=0))
        assert len(exc_info.value.issues) == 4


@pytest.fixture(scope="module")
def params():
    """N=14, M=7, induction=5, horizon=45"""
    return RotationParameters(14, 7, 5, horizon_days=45)


@pytest.fixture(scope="module")
def schedule(params):
    return generate(params)


@pytest.fixture(scope="module")
def baseline(params):
    return generate_baseline(params)


class TestConcreteScenario:

    def test_coverage_start_day(self, params):
        assert coverage_start_day(params) == 6

    def test_three_sequences_of_horizon_length(self, schedule):
        assert schedule.horizon_days == 45
        assert len(schedule.flexible_a) == len(schedule.flexible_b) == 45

    def test_anchor_is_periodic_pattern(self, schedule):
        assert schedule.to_codes()["anchor"][:22] == "AIIIIIDDDDDDDDDXRRRRRA"

    def test_no_coverage_findings(self, params, schedule):
        findings = validate(schedule, 45, coverage_start_day(params))
        assert coverage_findings(findings) == []

    def test_no_pattern_findings(self, params, schedule):
        findings = validate(schedule, 45, coverage_start_day(params), params, schedule.duty_ceiling)
        assert pattern_findings(findings) == []

    def test_no_single_duty_day(self, schedule):
        for states in schedule.workers().values():
            for day in range(1, 44):
                if states[day] == DayState.DUTY:
                    assert DayState.DUTY in (states[day - 1], states[day + 1])

    def test_duty_ceiling_reported(self, schedule):
        assert schedule.duty_ceiling == 16

    def test_single_shot_search_is_infeasible(self, params):
        with pytest.raises(InfeasibleScheduleError):
            generate(params, SearchConfig(ceiling_span=0))


class TestOtherCases:

    @pytest.mark.parametrize("n,m,induction,horizon", [
        (21, 7, 3, 90),
        (10, 5, 2, 90),
    ])
    def test_full_coverage(self, n, m, induction, horizon):
        params = RotationParameters(n, m, induction, horizon_days=horizon)
        schedule = generate(params)
        assert validate(schedule, horizon, coverage_start_day(params)) == []

    def test_never_three_on_duty(self):
        params = RotationParameters(10, 5, 2, horizon_days=90)
        schedule = generate(params)
        assert all(schedule.duty_count(day) <= 2 for day in range(90))


class TestBaseline:

    def test_baseline_shape(self, baseline):
        assert baseline.horizon_days == 45
        assert baseline.duty_ceiling is None

    def test_baseline_fills_every_gap(self, baseline):
        findings = validate(baseline, 45, 6)
        assert coverage_findings(findings) == []

    def test_baseline_reports_pattern_breaks(self, baseline):
        findings = validate(baseline, 45, 6)
        assert [(f.day_index, f.worker_id, f.code) for f in findings] == [
            (23, "flexible_a", "INVALID_TRANSITION"),
        ]

    def test_baseline_rejects_invalid_parameters(self):
        with pytest.raises(ConfigurationError):
            generate_baseline(RotationParameters(5, 4, 5, horizon_days=30))


class TestRequiredDutyDays:

    def test_truncates_at_target_day(self):
        params = RotationParameters(14, 7, 5, required_duty_days=20)
        result = generate_for_required_duty_days(params)
        assert result.coverage_start_day == 6
        assert result.horizon_days == 26
        assert result.schedule.horizon_days == 26
        assert result.attempts == 1

    def test_more_required_days_never_shorter(self):
        horizons = [
            generate_for_required_duty_days(
                RotationParameters(14, 7, 5, required_duty_days=required)
            ).horizon_days
            for required in (10, 20, 40)
        ]
        assert horizons == sorted(horizons)

    def test_rejects_missing_target(self):
        with pytest.raises(ConfigurationError):
            generate_for_required_duty_days(RotationParameters(14, 7, 5, required_duty_days=0))
