"""
Coverage Solver - joint search over the two flexible workers.

Finds one assignment of daily states for flexible_a and flexible_b such that
both follow legal automaton transitions and, together with the fixed anchor,
every day has at most 2 workers on Duty and every day from the coverage-start
day onward has exactly 2.

Search strategy:
1. Depth-first over days, branching on the cross product of both workers' legal
   transitions; branches violating the day's Duty count are pruned immediately.
2. Failure memoization: a composite key (day, ceiling, both canonical worker
   states) is recorded whenever its subtree is exhausted, so the same dead end
   is never explored twice.
3. Iterative deepening on the duty ceiling, starting at max(N, MIN_DUTY_BLOCK).
   The memo is discarded between ceilings.

The DFS runs on an explicit stack of choice points, so stack depth does not
grow with the horizon and the wall-clock budget can be checked in the loop.
"""

import time
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from rotaplan.engine.errors import InfeasibleScheduleError
from rotaplan.engine.failure_memo import FailureMemo
from rotaplan.engine.phase_automaton import (
    Transition,
    WorkerState,
    canonical_key,
    initial_state,
    transitions,
)
from rotaplan.engine.roster_types import (
    DayState,
    RotationParameters,
    SolveStats,
    MIN_DUTY_BLOCK,
    REQUIRED_ON_DUTY,
)
from rotaplan.engine.search_config import SearchConfig

logger = logging.getLogger(__name__)

BUDGET_CHECK_INTERVAL = 1024


@dataclass
class CoverageSolution:
    flexible_a: List[DayState]
    flexible_b: List[DayState]
    duty_ceiling: int
    stats: SolveStats


class _Frame:
    """One choice point: the day being decided and its remaining candidates."""
    __slots__ = ("day", "key", "candidates")

    def __init__(self, day: int, key: Tuple, candidates: Iterator[Tuple[Transition, Transition]]):
        self.day = day
        self.key = key
        self.candidates = candidates


def starting_ceiling(params: RotationParameters) -> int:
    return max(params.duty_cycle_length, MIN_DUTY_BLOCK)


def ceiling_bound(params: RotationParameters, horizon_days: int, config: SearchConfig) -> int:
    """Largest duty ceiling iterative deepening will try."""
    start = starting_ceiling(params)
    if config.single_shot:
        return start
    # A run longer than the horizon is never observable, so stop there
    return max(start, min(start + config.ceiling_span, horizon_days))


def solve_coverage(
    params: RotationParameters,
    anchor: Sequence[DayState],
    config: Optional[SearchConfig] = None,
    flexible_b_offset: Optional[int] = None,
) -> CoverageSolution:
    """
    Assign daily states to both flexible workers against a fixed anchor sequence.

    Args:
        params: validated rotation parameters
        anchor: the anchor worker's day states (defines the horizon)
        config: search tunables (defaults to SearchConfig())
        flexible_b_offset: start delay of flexible_b (defaults to the analytic seed offset)

    Returns:
        CoverageSolution with both sequences and the ceiling that succeeded

    Raises:
        InfeasibleScheduleError: no ceiling up to the search bound yields a schedule
    """
    config = config or SearchConfig()
    horizon = len(anchor)
    if flexible_b_offset is None:
        flexible_b_offset = params.seed_offset

    start_a = initial_state(params, 0)
    start_b = initial_state(params, flexible_b_offset)
    anchor_duty = [1 if state == DayState.DUTY else 0 for state in anchor]

    stats = SolveStats()
    started = time.perf_counter()
    deadline = started + config.time_budget_seconds if config.time_budget_seconds else None

    first = starting_ceiling(params)
    last = ceiling_bound(params, horizon, config)
    logger.info(f"Coverage search: {params.describe()} ceilings {first}..{last}, "
                f"flexible_b offset {flexible_b_offset}")

    for ceiling in range(first, last + 1):
        stats.ceilings_tried.append(ceiling)
        memo = FailureMemo(config.memo_capacity)
        found = _depth_first(params, anchor_duty, start_a, start_b, ceiling, memo, stats, deadline)
        stats.memo_hits += memo.hits
        stats.memo_evictions += memo.evictions

        if found is not None:
            stats.elapsed_seconds = time.perf_counter() - started
            logger.info(f"✅ Coverage found with duty ceiling {ceiling} "
                        f"({stats.nodes_expanded} nodes, {stats.memo_hits} memo hits, "
                        f"{stats.elapsed_seconds:.3f}s)")
            flexible_a, flexible_b = found
            return CoverageSolution(flexible_a, flexible_b, ceiling, stats)

        logger.debug(f"Ceiling {ceiling} exhausted ({len(memo)} memo entries)")

    stats.elapsed_seconds = time.perf_counter() - started
    logger.warning(f"❌ No coverage for {params.describe()} with ceilings {first}..{last}")
    raise InfeasibleScheduleError(
        f"No legal schedule exists for {params.describe()} "
        f"(duty ceilings {first}..{last} exhausted)",
        params=params,
        ceilings_tried=stats.ceilings_tried,
    )


def _day_candidates(
    day: int,
    anchor_duty: Sequence[int],
    state_a: WorkerState,
    state_b: WorkerState,
    params: RotationParameters,
    ceiling: int,
) -> List[Tuple[Transition, Transition]]:
    """Joint transitions for one day that respect the Duty count."""
    coverage_start = params.coverage_start_day
    candidates = []
    for step_a in transitions(state_a, params, ceiling):
        for step_b in transitions(state_b, params, ceiling):
            on_duty = (anchor_duty[day]
                       + (step_a.emitted == DayState.DUTY)
                       + (step_b.emitted == DayState.DUTY))
            if on_duty > REQUIRED_ON_DUTY:
                continue
            if day >= coverage_start and on_duty != REQUIRED_ON_DUTY:
                continue
            candidates.append((step_a, step_b))
    return candidates


def _search_key(day: int, ceiling: int, state_a: WorkerState, state_b: WorkerState,
                params: RotationParameters) -> Tuple:
    return (day, ceiling, canonical_key(state_a, params), canonical_key(state_b, params))


def _depth_first(
    params: RotationParameters,
    anchor_duty: Sequence[int],
    start_a: WorkerState,
    start_b: WorkerState,
    ceiling: int,
    memo: FailureMemo,
    stats: SolveStats,
    deadline: Optional[float],
) -> Optional[Tuple[List[DayState], List[DayState]]]:
    horizon = len(anchor_duty)
    path_a: List[Optional[DayState]] = [None] * horizon
    path_b: List[Optional[DayState]] = [None] * horizon

    root = _Frame(
        0,
        _search_key(0, ceiling, start_a, start_b, params),
        iter(_day_candidates(0, anchor_duty, start_a, start_b, params, ceiling)),
    )
    stack = [root]
    stats.nodes_expanded += 1

    while stack:
        frame = stack[-1]
        step = next(frame.candidates, None)
        if step is None:
            memo.add(frame.key)
            stack.pop()
            continue

        step_a, step_b = step
        path_a[frame.day] = step_a.emitted
        path_b[frame.day] = step_b.emitted

        next_day = frame.day + 1
        if next_day == horizon:
            return list(path_a), list(path_b)

        key = _search_key(next_day, ceiling, step_a.next_state, step_b.next_state, params)
        if key in memo:
            continue

        stats.nodes_expanded += 1
        if deadline is not None and stats.nodes_expanded % BUDGET_CHECK_INTERVAL == 0:
            if time.perf_counter() > deadline:
                raise InfeasibleScheduleError(
                    f"Search budget exhausted for {params.describe()} at duty ceiling {ceiling}",
                    params=params,
                    ceilings_tried=stats.ceilings_tried,
                )

        stack.append(_Frame(
            next_day,
            key,
            iter(_day_candidates(next_day, anchor_duty, step_a.next_state, step_b.next_state,
                                 params, ceiling)),
        ))

    return None
