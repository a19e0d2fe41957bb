"""
Worker Phase Automaton - legal next states for one flexible worker.

The relation is nondeterministic: in Duty and Rest a worker may either continue
or move on, so `transitions()` returns every legal (emitted day state, next
automaton state) pair and leaves the choice to the coverage solver.

Phases:
    PRE        waiting out a start delay (emits Wait)
    ASCENT     travel-in day
    INDUCTION  onboarding, first cycle only
    DUTY       active duty; block length in [MIN_DUTY_BLOCK, duty_ceiling]
    DESCENT    travel-out day
    REST       rest; at least max(1, M - 2) days before the next Ascent
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, NamedTuple, Tuple

from rotaplan.engine.roster_types import DayState, RotationParameters, MIN_DUTY_BLOCK


class Phase(str, Enum):
    PRE = "Pre"
    ASCENT = "Ascent"
    INDUCTION = "Induction"
    DUTY = "Duty"
    DESCENT = "Descent"
    REST = "Rest"


class Choice(str, Enum):
    """Tag of one alternative offered by the automaton."""
    WAIT = "wait"
    ASCEND = "ascend"
    INDUCT = "induct"
    CONTINUE_DUTY = "continueDuty"
    END_DUTY = "endDuty"
    DESCEND = "descend"
    CONTINUE_REST = "continueRest"
    RETURN = "return"


@dataclass(frozen=True)
class WorkerState:
    """Internal automaton state of one flexible worker. Immutable; branches copy it."""
    phase: Phase
    days_until_start: int = 0
    is_first_cycle: bool = True
    induction_days_remaining: int = 0
    consecutive_duty_days: int = 0
    rest_days_taken: int = 0


class Transition(NamedTuple):
    choice: Choice
    emitted: DayState
    next_state: WorkerState


def initial_state(params: RotationParameters, start_offset: int = 0) -> WorkerState:
    """State of a worker whose first Ascent falls on day `start_offset`."""
    phase = Phase.PRE if start_offset > 0 else Phase.ASCENT
    return WorkerState(
        phase=phase,
        days_until_start=start_offset,
        is_first_cycle=True,
        induction_days_remaining=params.induction_length,
    )


def transitions(state: WorkerState, params: RotationParameters, duty_ceiling: int) -> List[Transition]:
    """All legal transitions out of `state` for one day."""
    phase = state.phase

    if phase == Phase.PRE:
        remaining = state.days_until_start - 1
        next_phase = Phase.ASCENT if remaining <= 0 else Phase.PRE
        return [Transition(Choice.WAIT, DayState.WAIT,
                           replace(state, phase=next_phase, days_until_start=max(remaining, 0)))]

    if phase == Phase.ASCENT:
        if state.is_first_cycle and state.induction_days_remaining > 0:
            nxt = replace(state, phase=Phase.INDUCTION)
        else:
            nxt = replace(state, phase=Phase.DUTY, consecutive_duty_days=0)
        return [Transition(Choice.ASCEND, DayState.ASCENT, nxt)]

    if phase == Phase.INDUCTION:
        remaining = state.induction_days_remaining - 1
        if remaining <= 0:
            nxt = replace(state, phase=Phase.DUTY, induction_days_remaining=0, consecutive_duty_days=0)
        else:
            nxt = replace(state, induction_days_remaining=remaining)
        return [Transition(Choice.INDUCT, DayState.INDUCTION, nxt)]

    if phase == Phase.DUTY:
        run = state.consecutive_duty_days + 1
        options = []
        if run < duty_ceiling:
            options.append(Transition(Choice.CONTINUE_DUTY, DayState.DUTY,
                                      replace(state, consecutive_duty_days=run)))
        if run >= MIN_DUTY_BLOCK:
            options.append(Transition(Choice.END_DUTY, DayState.DUTY,
                                      replace(state, phase=Phase.DESCENT, consecutive_duty_days=run)))
        return options

    if phase == Phase.DESCENT:
        nxt = replace(state, phase=Phase.REST, rest_days_taken=0,
                      is_first_cycle=False, induction_days_remaining=0)
        return [Transition(Choice.DESCEND, DayState.DESCENT, nxt)]

    if phase == Phase.REST:
        taken = state.rest_days_taken + 1
        options = [Transition(Choice.CONTINUE_REST, DayState.REST,
                              replace(state, rest_days_taken=taken))]
        if taken >= params.min_rest_days:
            options.append(Transition(Choice.RETURN, DayState.REST,
                                      replace(state, phase=Phase.ASCENT, rest_days_taken=taken)))
        return options

    raise ValueError(f"Unknown phase {phase!r}")


def canonical_key(state: WorkerState, params: RotationParameters) -> Tuple:
    """
    Encoding of `state` that keeps only what influences future transitions.

    Two states with the same key have identical futures, so a failure recorded
    for one applies to the other.
    """
    phase = state.phase
    if phase == Phase.PRE:
        return (phase.value, state.days_until_start, state.induction_days_remaining)
    if phase in (Phase.ASCENT, Phase.INDUCTION):
        return (phase.value, state.is_first_cycle, state.induction_days_remaining)
    if phase == Phase.DUTY:
        return (phase.value, state.consecutive_duty_days)
    if phase == Phase.REST:
        return (phase.value, min(state.rest_days_taken, params.min_rest_days))
    return (phase.value,)
