"""Timer state models"""
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class TimerStatus(str, Enum):
    """Timer status"""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


class TimerPhase(str, Enum):
    """Current mode of a running timer"""
    WORK = "work"
    BREAK = "break"


class TimerSignal(str, Enum):
    """Edge-triggered notifications emitted by advance()"""
    BREAK_STARTED = "break_started"
    BREAK_ENDED = "break_ended"
    COMPLETED = "completed"


class BreakWindow(BaseModel):
    """One break inside a focus session"""
    start_offset_minutes: int
    duration_minutes: float

    @property
    def start_seconds(self) -> float:
        return self.start_offset_minutes * 60

    @property
    def end_seconds(self) -> float:
        return (self.start_offset_minutes + self.duration_minutes) * 60

    def contains(self, elapsed_seconds: float) -> bool:
        return self.start_seconds <= elapsed_seconds < self.end_seconds


class TimerState(BaseModel):
    """State of one focus session, owned by a single client session"""
    status: TimerStatus = TimerStatus.NOT_STARTED
    phase: TimerPhase = TimerPhase.WORK
    elapsed_seconds: float = Field(0, ge=0)
    total_seconds: int = Field(..., gt=0)
    plan: List[BreakWindow] = []
    task_id: Optional[str] = None  # todo marked completed when the session ends
    completion_signalled: bool = False

    @property
    def remaining_seconds(self) -> float:
        return max(0, self.total_seconds - self.elapsed_seconds)


class AdvanceResult(BaseModel):
    """New state plus the signals fired while reaching it"""
    state: TimerState
    signals: List[TimerSignal] = []
