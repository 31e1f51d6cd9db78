"""Focus timer services"""
from .models.timer_state import (
    AdvanceResult,
    BreakWindow,
    TimerPhase,
    TimerSignal,
    TimerState,
    TimerStatus,
)
from .break_scheduler import (
    compute_plan,
    phase_at,
    new_timer,
    reconfigure_timer,
    start_timer,
    pause_timer,
    resume_timer,
    toggle_timer,
    reset_timer,
    advance,
    next_break,
    remaining_percent,
    format_clock,
)
from .duration import duration_string_to_minutes
from .ticker import TimerTicker

__all__ = [
    'AdvanceResult', 'BreakWindow', 'TimerPhase', 'TimerSignal', 'TimerState', 'TimerStatus',
    'compute_plan', 'phase_at', 'new_timer', 'reconfigure_timer',
    'start_timer', 'pause_timer', 'resume_timer', 'toggle_timer', 'reset_timer',
    'advance', 'next_break', 'remaining_percent', 'format_clock',
    'duration_string_to_minutes', 'TimerTicker',
]
