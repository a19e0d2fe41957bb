"""
Schedule Validator - re-scans any schedule for rule violations.

Works on solver output and degraded baseline schedules alike; it has no side
effects and never raises, it only returns Findings ordered by day.

Supported rules:
- P1: Forbidden adjacent states (Ascent-Ascent, Ascent-Descent, Descent-Ascent)
- P2: Isolated single Duty day
- C1: Three workers on Duty (checked on every day, grace period included)
- C2: Fewer than two workers on Duty (checked from the grace period onward)
- B1: Flexible Duty block longer than the duty ceiling (needs duty_ceiling)
- B2: Rest block shorter than max(1, M - 2) (needs params)

Blocks that touch either end of the horizon are incomplete and never flagged
by B1/B2.
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from rotaplan.engine.roster_types import (
    DayState,
    Finding,
    RotationParameters,
    Schedule,
    REQUIRED_ON_DUTY,
)

logger = logging.getLogger(__name__)

FLEXIBLE_WORKERS = ("flexible_a", "flexible_b")


class ScheduleValidator:
    """
    Validates a schedule against pattern and coverage rules.

    Usage:
        validator = ScheduleValidator()
        findings = validator.validate(schedule, horizon_days=45, grace_period_days=6)
    """

    DEFAULT_RULES = {
        'P1': {'enabled': True, 'name': 'Forbidden Adjacent States', 'code': 'INVALID_TRANSITION'},
        'P2': {'enabled': True, 'name': 'Isolated Duty Day', 'code': 'SINGLE_DUTY_DAY'},
        'C1': {'enabled': True, 'name': 'Triple Duty', 'code': 'TRIPLE_DUTY'},
        'C2': {'enabled': True, 'name': 'Under Coverage', 'code': 'UNDER_COVERAGE'},
        'B1': {'enabled': True, 'name': 'Duty Block Too Long', 'code': 'DUTY_BLOCK_TOO_LONG'},
        'B2': {'enabled': True, 'name': 'Rest Block Too Short', 'code': 'REST_BLOCK_TOO_SHORT'},
    }

    FORBIDDEN_PAIRS = {
        (DayState.ASCENT, DayState.ASCENT),
        (DayState.ASCENT, DayState.DESCENT),
        (DayState.DESCENT, DayState.ASCENT),
    }

    PATTERN_CODES = {'INVALID_TRANSITION', 'SINGLE_DUTY_DAY', 'DUTY_BLOCK_TOO_LONG', 'REST_BLOCK_TOO_SHORT'}
    COVERAGE_CODES = {'TRIPLE_DUTY', 'UNDER_COVERAGE'}

    def __init__(self, rules: Optional[Dict[str, dict]] = None):
        self.rules = {rule_id: dict(cfg) for rule_id, cfg in self.DEFAULT_RULES.items()}
        for rule_id, overrides in (rules or {}).items():
            self.rules.setdefault(rule_id, {}).update(overrides)

    def _enabled(self, rule_id: str) -> bool:
        return self.rules.get(rule_id, {}).get('enabled', True)

    def _code(self, rule_id: str) -> str:
        return self.rules[rule_id]['code']

    def validate(
        self,
        schedule: Schedule,
        horizon_days: int,
        grace_period_days: int,
        params: Optional[RotationParameters] = None,
        duty_ceiling: Optional[int] = None,
    ) -> List[Finding]:
        """
        Scan the first `horizon_days` days of `schedule`.

        Args:
            schedule: schedule to check (any origin)
            horizon_days: number of days to scan (clamped to the schedule length)
            grace_period_days: days before this index are not flagged for under-coverage
            params: enables the rest block check (B2)
            duty_ceiling: enables the flexible duty block check (B1)

        Returns:
            Findings ordered by day index
        """
        horizon = max(0, min(horizon_days, schedule.horizon_days))
        findings: List[Finding] = []

        for worker_id, states in schedule.workers().items():
            states = states[:horizon]
            if self._enabled('P1'):
                findings.extend(self._check_transitions(worker_id, states))
            if self._enabled('P2'):
                findings.extend(self._check_single_duty(worker_id, states))
            if self._enabled('B1') and duty_ceiling is not None and worker_id in FLEXIBLE_WORKERS:
                findings.extend(self._check_duty_blocks(worker_id, states, duty_ceiling))
            if self._enabled('B2') and params is not None:
                findings.extend(self._check_rest_blocks(worker_id, states, params.min_rest_days))

        findings.extend(self._check_coverage(schedule, horizon, grace_period_days))

        findings.sort(key=lambda f: f.day_index)
        return findings

    def _check_transitions(self, worker_id: str, states: Sequence[DayState]) -> List[Finding]:
        """P1: forbidden adjacent pairs."""
        findings = []
        for day in range(1, len(states)):
            pair = (states[day - 1], states[day])
            if pair in self.FORBIDDEN_PAIRS:
                findings.append(Finding(
                    day_index=day,
                    message=f"{worker_id}: {pair[0].value} followed by {pair[1].value}",
                    code=self._code('P1'),
                    worker_id=worker_id,
                ))
        return findings

    def _check_single_duty(self, worker_id: str, states: Sequence[DayState]) -> List[Finding]:
        """P2: a Duty day with non-Duty neighbours on both sides."""
        findings = []
        for day in range(1, len(states) - 1):
            if (states[day] == DayState.DUTY
                    and states[day - 1] != DayState.DUTY
                    and states[day + 1] != DayState.DUTY):
                findings.append(Finding(
                    day_index=day,
                    message=f"{worker_id}: isolated single Duty day",
                    code=self._code('P2'),
                    worker_id=worker_id,
                ))
        return findings

    def _check_duty_blocks(self, worker_id: str, states: Sequence[DayState], duty_ceiling: int) -> List[Finding]:
        """B1: complete Duty blocks longer than the ceiling."""
        findings = []
        for start, length in _complete_blocks(states, DayState.DUTY):
            if length > duty_ceiling:
                findings.append(Finding(
                    day_index=start,
                    message=f"{worker_id}: Duty block of {length} days exceeds ceiling {duty_ceiling}",
                    code=self._code('B1'),
                    worker_id=worker_id,
                ))
        return findings

    def _check_rest_blocks(self, worker_id: str, states: Sequence[DayState], min_rest: int) -> List[Finding]:
        """B2: complete Rest blocks shorter than the minimum."""
        findings = []
        for start, length in _complete_blocks(states, DayState.REST):
            if length < min_rest:
                findings.append(Finding(
                    day_index=start,
                    message=f"{worker_id}: Rest block of {length} days is shorter than {min_rest}",
                    code=self._code('B2'),
                    worker_id=worker_id,
                ))
        return findings

    def _check_coverage(self, schedule: Schedule, horizon: int, grace_period_days: int) -> List[Finding]:
        """C1/C2: Duty head count per day."""
        findings = []
        for day in range(horizon):
            on_duty = schedule.duty_count(day)
            if on_duty > REQUIRED_ON_DUTY:
                if self._enabled('C1'):
                    findings.append(Finding(day, f"{on_duty} workers on Duty", self._code('C1')))
            elif on_duty < REQUIRED_ON_DUTY and day >= grace_period_days:
                if self._enabled('C2'):
                    message = "Only 1 worker on Duty" if on_duty == 1 else "0 workers on Duty"
                    findings.append(Finding(day, message, self._code('C2')))
        return findings


def _complete_blocks(states: Sequence[DayState], target: DayState) -> List[Tuple[int, int]]:
    """(start, length) of maximal runs of `target` that do not touch either horizon end."""
    blocks = []
    day = 0
    while day < len(states):
        if states[day] != target:
            day += 1
            continue
        start = day
        while day < len(states) and states[day] == target:
            day += 1
        if start > 0 and day < len(states):
            blocks.append((start, day - start))
    return blocks


def validate_schedule(
    schedule: Schedule,
    horizon_days: int,
    grace_period_days: int,
    params: Optional[RotationParameters] = None,
    duty_ceiling: Optional[int] = None,
) -> List[Finding]:
    """Validate with the default rule set and log a summary."""
    findings = ScheduleValidator().validate(schedule, horizon_days, grace_period_days, params, duty_ceiling)
    if findings:
        logger.info(f"Schedule validation: {len(findings)} finding(s), first on day {findings[0].day_index}")
    else:
        logger.info("Schedule validation: PASSED")
    return findings


def coverage_findings(findings: Sequence[Finding]) -> List[Finding]:
    return [f for f in findings if f.code in ScheduleValidator.COVERAGE_CODES]


def pattern_findings(findings: Sequence[Finding]) -> List[Finding]:
    return [f for f in findings if f.code in ScheduleValidator.PATTERN_CODES]
