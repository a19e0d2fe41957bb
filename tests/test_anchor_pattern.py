"""
Tests for the Anchor Pattern Generator.

Run with: pytest tests/test_anchor_pattern.py -v
"""

import sys
import pathlib
sys.path.insert(0, str(pathlib.Path(__file__).resolve().parent.parent))

import pytest
from rotaplan.engine.anchor_pattern import anchor_state, generate_anchor_pattern
from rotaplan.engine.roster_types import DayState, RotationParameters, to_codes


@pytest.fixture
def params_14x7():
    return RotationParameters(duty_cycle_length=14, rest_cycle_length=7, induction_length=5)


class TestFirstCycle:
    """Anchor layout over the first two cycles"""

    def test_first_cycle_layout(self, params_14x7):
        pattern = generate_anchor_pattern(0, params_14x7, 21)
        assert to_codes(pattern) == "A" + "I" * 5 + "D" * 9 + "X" + "R" * 5

    def test_second_cycle_has_no_induction(self, params_14x7):
        pattern = generate_anchor_pattern(0, params_14x7, 42)
        assert pattern[21] == DayState.ASCENT
        assert pattern[22:36] == [DayState.DUTY] * 14
        assert pattern[36] == DayState.DESCENT
        assert DayState.INDUCTION not in pattern[21:]

    def test_minimal_duty_room(self):
        """N - induction == 2 still leaves a two-day duty block"""
        params = RotationParameters(duty_cycle_length=3, rest_cycle_length=3, induction_length=1)
        assert to_codes(generate_anchor_pattern(0, params, 12)) == "AIDDXR" + "ADDDXR"


class TestOffset:
    """Offset worker (the seed used for flexible_b)"""

    def test_wait_before_offset(self, params_14x7):
        pattern = generate_anchor_pattern(9, params_14x7, 16)
        assert pattern[:9] == [DayState.WAIT] * 9
        assert pattern[9] == DayState.ASCENT
        assert pattern[10:15] == [DayState.INDUCTION] * 5
        assert pattern[15] == DayState.DUTY

    def test_seed_offset_lines_up_with_anchor_descent(self, params_14x7):
        anchor = generate_anchor_pattern(0, params_14x7, 30)
        seeded = generate_anchor_pattern(params_14x7.seed_offset, params_14x7, 30)
        first_duty = seeded.index(DayState.DUTY)
        assert anchor[first_duty] == DayState.DESCENT

    def test_anchor_state_matches_generator(self, params_14x7):
        pattern = generate_anchor_pattern(4, params_14x7, 50)
        assert [anchor_state(d, 4, params_14x7) for d in range(50)] == pattern


class TestPeriodicity:
    """The anchor repeats every N + M days from the second cycle on"""

    @pytest.mark.parametrize("n,m,induction", [(14, 7, 5), (21, 7, 3), (10, 5, 2), (5, 4, 2)])
    def test_period_equals_cycle_length(self, n, m, induction):
        params = RotationParameters(n, m, induction)
        cycle = params.cycle_length
        pattern = generate_anchor_pattern(0, params, 3 * cycle)
        for day in range(cycle, 2 * cycle):
            assert pattern[day] == pattern[day + cycle]
