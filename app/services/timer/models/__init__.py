"""Timer state models"""
from .timer_state import AdvanceResult, BreakWindow, TimerPhase, TimerSignal, TimerState, TimerStatus

__all__ = [
    "AdvanceResult", "BreakWindow", "TimerPhase", "TimerSignal", "TimerState", "TimerStatus",
]
