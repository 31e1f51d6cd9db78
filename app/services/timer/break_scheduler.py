"""
Break Scheduler - splits a focus session into work segments and breaks

Pure functions over TimerState: every operation takes the state explicitly
and returns a new one. Side effects (notification sound, marking the todo as
completed) are left to the caller, driven by the returned signals.
"""
import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real
from typing import List, Optional

from app.services.errors import StateError, ValidationError
from .models.timer_state import (
    AdvanceResult,
    BreakWindow,
    TimerPhase,
    TimerSignal,
    TimerState,
    TimerStatus,
)

logger = logging.getLogger(__name__)


def _is_number(value: object) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def compute_plan(
    total_minutes: float,
    break_count: int,
    break_duration_minutes: float,
) -> List[BreakWindow]:
    """
    Evenly space `break_count` breaks over a session.

    The session is cut into break_count + 1 equal segments and break k
    (1-indexed) starts at round_half_up(k * total / (break_count + 1)).
    Breaks running past the end of the session are kept as they are.

    Args:
        total_minutes: Session length in minutes, > 0
        break_count: Number of breaks, integer >= 0 and < total_minutes
        break_duration_minutes: Length of each break, > 0

    Returns:
        Ordered list of BreakWindow, empty when break_count == 0

    Raises:
        ValidationError: If any input is out of range
    """
    if not _is_number(total_minutes) or total_minutes <= 0:
        raise ValidationError(f"total_minutes must be a positive number, got {total_minutes!r}")
    if not isinstance(break_count, int) or isinstance(break_count, bool) or break_count < 0:
        raise ValidationError(f"break_count must be a non-negative integer, got {break_count!r}")
    if not _is_number(break_duration_minutes) or break_duration_minutes <= 0:
        raise ValidationError(
            f"break_duration_minutes must be a positive number, got {break_duration_minutes!r}"
        )

    if break_count == 0:
        return []

    # Segments shorter than a minute would round two breaks onto the same offset
    if break_count >= total_minutes:
        raise ValidationError(
            f"Cannot fit {break_count} breaks into {total_minutes} minutes"
        )

    total = Decimal(str(total_minutes))
    segments = Decimal(break_count + 1)
    starts = [round_half_up(k * total / segments) for k in range(1, break_count + 1)]
    # Fractional totals can still round two breaks onto the same minute
    if starts[0] <= 0 or starts[-1] >= total_minutes or any(a >= b for a, b in zip(starts, starts[1:])):
        raise ValidationError(
            f"Cannot fit {break_count} breaks into {total_minutes} minutes at distinct minutes"
        )

    return [
        BreakWindow(start_offset_minutes=start, duration_minutes=break_duration_minutes)
        for start in starts
    ]


def phase_at(plan: List[BreakWindow], elapsed_seconds: float) -> TimerPhase:
    """Break if elapsed falls inside any [start, start + duration) window"""
    if any(window.contains(elapsed_seconds) for window in plan):
        return TimerPhase.BREAK
    return TimerPhase.WORK


def new_timer(
    total_minutes: float,
    break_count: int = 0,
    break_duration_minutes: float = 5,
    task_id: Optional[str] = None,
) -> TimerState:
    """Build a NotStarted timer with a freshly computed plan"""
    plan = compute_plan(total_minutes, break_count, break_duration_minutes)
    total_seconds = round_half_up(Decimal(str(total_minutes)) * 60)
    if total_seconds <= 0:
        raise ValidationError(f"total_minutes too small: {total_minutes!r}")
    return TimerState(total_seconds=total_seconds, plan=plan, task_id=task_id)


def reconfigure_timer(
    state: TimerState,
    total_minutes: float,
    break_count: int,
    break_duration_minutes: float,
) -> TimerState:
    """Replace the plan of a timer that has not started yet"""
    if state.status != TimerStatus.NOT_STARTED:
        raise StateError(f"Cannot reconfigure a {state.status.value} timer")
    return new_timer(total_minutes, break_count, break_duration_minutes, state.task_id)


def start_timer(state: TimerState) -> TimerState:
    if state.status != TimerStatus.NOT_STARTED:
        raise StateError(f"Cannot start a {state.status.value} timer")
    return state.model_copy(update={
        "status": TimerStatus.RUNNING,
        "phase": TimerPhase.WORK,
        "elapsed_seconds": 0,
        "completion_signalled": False,
    })


def pause_timer(state: TimerState) -> TimerState:
    if state.status != TimerStatus.RUNNING:
        raise StateError(f"Cannot pause a {state.status.value} timer")
    return state.model_copy(update={"status": TimerStatus.PAUSED})


def resume_timer(state: TimerState) -> TimerState:
    if state.status != TimerStatus.PAUSED:
        raise StateError(f"Cannot resume a {state.status.value} timer")
    return state.model_copy(update={"status": TimerStatus.RUNNING})


def toggle_timer(state: TimerState) -> TimerState:
    """Play/pause button"""
    if state.status == TimerStatus.RUNNING:
        return pause_timer(state)
    return resume_timer(state)


def reset_timer(state: TimerState) -> TimerState:
    """Back to NotStarted with elapsed = 0, whatever the current phase"""
    return state.model_copy(update={
        "status": TimerStatus.NOT_STARTED,
        "phase": TimerPhase.WORK,
        "elapsed_seconds": 0,
        "completion_signalled": False,
    })


def advance(state: TimerState, delta_seconds: float) -> AdvanceResult:
    """
    Move a running timer forward by `delta_seconds`.

    Phase edges fire once per crossing observed between the old and the new
    elapsed time; a single large jump over a whole break window observes no
    edge. The completion signal fires once, when remaining time reaches 0.
    Paused and completed timers are left untouched.

    Raises:
        ValidationError: If delta_seconds is negative, NaN, infinite or not a number
        StateError: If the timer has not been started
    """
    if not _is_number(delta_seconds) or delta_seconds < 0:
        raise ValidationError(f"delta_seconds must be a non-negative number, got {delta_seconds!r}")
    if state.status == TimerStatus.NOT_STARTED:
        raise StateError("Timer has not been started")
    if state.status in (TimerStatus.PAUSED, TimerStatus.COMPLETED):
        return AdvanceResult(state=state)

    elapsed = min(state.total_seconds, state.elapsed_seconds + delta_seconds)
    phase = phase_at(state.plan, elapsed)

    signals: List[TimerSignal] = []
    if phase != state.phase:
        signals.append(
            TimerSignal.BREAK_STARTED if phase == TimerPhase.BREAK else TimerSignal.BREAK_ENDED
        )

    status = TimerStatus.RUNNING
    completion_signalled = state.completion_signalled
    if elapsed >= state.total_seconds:
        status = TimerStatus.COMPLETED
        if not completion_signalled:
            signals.append(TimerSignal.COMPLETED)
            completion_signalled = True
        logger.info(f"Focus session finished after {state.total_seconds}s (task={state.task_id})")

    new_state = state.model_copy(update={
        "status": status,
        "phase": phase,
        "elapsed_seconds": elapsed,
        "completion_signalled": completion_signalled,
    })
    return AdvanceResult(state=new_state, signals=signals)


def next_break(state: TimerState) -> Optional[BreakWindow]:
    """Upcoming break while working, None during a break or after the last one"""
    if state.phase == TimerPhase.BREAK:
        return None
    for window in state.plan:
        if window.start_seconds > state.elapsed_seconds:
            return window
    return None


def remaining_percent(state: TimerState) -> float:
    return 100 * state.remaining_seconds / state.total_seconds


def format_clock(seconds: float) -> str:
    """Seconds as MM:SS (minutes are not wrapped into hours)"""
    whole = int(seconds)
    return f"{whole // 60:02d}:{whole % 60:02d}"
