"""
Core value types for the rotation planner.

A schedule covers three interchangeable workers over a horizon of days:
- anchor: follows the fixed periodic pattern (never touched by the solver)
- flexible_a / flexible_b: daily states chosen by the coverage solver

Day states follow the lifecycle Ascent -> Induction (first cycle only) -> Duty
-> Descent -> Rest -> Ascent ...
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple


MIN_DUTY_BLOCK = 2
MIN_REST_CYCLE_LENGTH = 3
MIN_INDUCTION_LENGTH = 1
MAX_INDUCTION_LENGTH = 5
REQUIRED_ON_DUTY = 2

WORKER_IDS = ("anchor", "flexible_a", "flexible_b")


class DayState(str, Enum):
    """State of one worker on one day."""
    WAIT = "Wait"
    ASCENT = "Ascent"
    INDUCTION = "Induction"
    DUTY = "Duty"
    DESCENT = "Descent"
    REST = "Rest"

    @property
    def code(self) -> str:
        return _STATE_CODES[self]

    @classmethod
    def from_code(cls, code: str) -> "DayState":
        for state, state_code in _STATE_CODES.items():
            if state_code == code:
                return state
        raise ValueError(f"Unknown day state code '{code}'")


_STATE_CODES = {
    DayState.WAIT: "-",
    DayState.ASCENT: "A",
    DayState.INDUCTION: "I",
    DayState.DUTY: "D",
    DayState.DESCENT: "X",
    DayState.REST: "R",
}


def to_codes(states: Sequence[DayState]) -> str:
    """Render a sequence of day states as a compact string (e.g. 'AIIDDDXRR')."""
    return "".join(state.code for state in states)


def from_codes(codes: str) -> Tuple[DayState, ...]:
    return tuple(DayState.from_code(c) for c in codes)


@dataclass(frozen=True)
class RotationParameters:
    """
    Input record for schedule generation.

    Attributes:
        duty_cycle_length: N, days of work per cycle (Ascent + Induction/Duty)
        rest_cycle_length: M, days off per cycle (Descent + Rest + next Ascent)
        induction_length: onboarding days, first cycle only
        horizon_days: schedule length (fixed-horizon entry point)
        required_duty_days: target count of fully covered days (alternate entry point)
    """
    duty_cycle_length: int
    rest_cycle_length: int
    induction_length: int
    horizon_days: Optional[int] = None
    required_duty_days: Optional[int] = None

    @property
    def cycle_length(self) -> int:
        return self.duty_cycle_length + self.rest_cycle_length

    @property
    def min_rest_days(self) -> int:
        return max(1, self.rest_cycle_length - 2)

    @property
    def coverage_start_day(self) -> int:
        return coverage_start_day(self)

    @property
    def seed_offset(self) -> int:
        """Start offset that lines a worker's first Duty day up with the anchor's first Descent."""
        return self.duty_cycle_length - self.induction_length

    def with_horizon(self, horizon_days: int) -> "RotationParameters":
        return replace(self, horizon_days=horizon_days)

    def describe(self) -> str:
        return (f"N={self.duty_cycle_length} M={self.rest_cycle_length} "
                f"induction={self.induction_length} horizon={self.horizon_days}")


def coverage_start_day(params: RotationParameters) -> int:
    """First day on which two workers can be on Duty simultaneously."""
    return 1 + params.induction_length


@dataclass(frozen=True)
class Schedule:
    """Three equal-length day-state sequences. Immutable once produced."""
    anchor: Tuple[DayState, ...]
    flexible_a: Tuple[DayState, ...]
    flexible_b: Tuple[DayState, ...]
    duty_ceiling: Optional[int] = None

    def __post_init__(self):
        lengths = {len(self.anchor), len(self.flexible_a), len(self.flexible_b)}
        if len(lengths) != 1:
            raise ValueError(f"Worker sequences must have equal length, got {sorted(lengths)}")

    @property
    def horizon_days(self) -> int:
        return len(self.anchor)

    def workers(self) -> Dict[str, Tuple[DayState, ...]]:
        return {
            "anchor": self.anchor,
            "flexible_a": self.flexible_a,
            "flexible_b": self.flexible_b,
        }

    def duty_count(self, day: int) -> int:
        return sum(1 for seq in (self.anchor, self.flexible_a, self.flexible_b)
                   if seq[day] == DayState.DUTY)

    def truncate(self, days: int) -> "Schedule":
        return replace(
            self,
            anchor=self.anchor[:days],
            flexible_a=self.flexible_a[:days],
            flexible_b=self.flexible_b[:days],
        )

    def to_codes(self) -> Dict[str, str]:
        return {worker_id: to_codes(seq) for worker_id, seq in self.workers().items()}


@dataclass(frozen=True)
class Finding:
    """One validation finding: a day and a human-readable message."""
    day_index: int
    message: str
    code: str = "GENERAL"
    worker_id: Optional[str] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "dayIndex": self.day_index,
            "message": self.message,
            "code": self.code,
            "workerId": self.worker_id,
        }


@dataclass
class SolveStats:
    """Search statistics reported by the coverage solver."""
    ceilings_tried: List[int] = field(default_factory=list)
    nodes_expanded: int = 0
    memo_hits: int = 0
    memo_evictions: int = 0
    elapsed_seconds: float = 0.0


@dataclass(frozen=True)
class RequiredDutyDaysResult:
    """Result of generation driven by a target count of fully covered days."""
    schedule: Schedule
    coverage_start_day: int
    horizon_days: int
    attempts: int = 1
