"""
Day timeline model

Maps a fixed discretization of a day (slots) onto clock times and turns
pointer drags over the grid into candidate calendar tasks. Everything here
is pure: state goes in as an argument and a new state comes back.
"""
import logging
import random
import string
import time
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Callable, Iterable, List, Optional, TypeVar, Union

from app.models.task import DEFAULT_TASK_COLOR, DEFAULT_TASK_TITLE, TaskCreate
from app.services.errors import StateError, ValidationError

logger = logging.getLogger(__name__)

_BASE36 = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class TimeGrid:
    """N equal slots starting at day_start_minutes after midnight"""
    slots_per_day: int = 24
    slot_minutes: int = 60
    day_start_minutes: int = 0

    def __post_init__(self):
        if self.slots_per_day <= 0 or self.slot_minutes <= 0:
            raise ValidationError("slots_per_day and slot_minutes must be positive")

    def is_valid_slot(self, slot: object) -> bool:
        return isinstance(slot, int) and not isinstance(slot, bool) and 0 <= slot < self.slots_per_day

    def slot_label(self, boundary: int) -> str:
        """
        Clock label of a slot boundary.

        Boundary N (end of the last slot) is rendered as "24:00" rather than
        wrapping to "00:00" so labels stay ordered within a day.
        """
        minutes = self.day_start_minutes + boundary * self.slot_minutes
        return f"{minutes // 60:02d}:{minutes % 60:02d}"

    def slot_at(self, label: str, round_up: bool = False) -> int:
        """Slot boundary for an "HH:MM" label, clamped to [0, N]"""
        try:
            hours, minutes = label.strip().split(":")
            offset = int(hours) * 60 + int(minutes) - self.day_start_minutes
        except (AttributeError, ValueError):
            raise ValidationError(f"Invalid clock label: {label!r}")
        boundary, rest = divmod(offset, self.slot_minutes)
        if round_up and rest:
            boundary += 1
        return max(0, min(self.slots_per_day, boundary))

    @property
    def labels(self) -> List[str]:
        return [self.slot_label(i) for i in range(self.slots_per_day)]


@dataclass(frozen=True)
class DragSelection:
    """Transient interval defined by an in-progress pointer drag"""
    date: str  # YYYY-MM-DD of the anchor's day column
    anchor_slot: int
    current_slot: int

    @property
    def start_slot(self) -> int:
        return min(self.anchor_slot, self.current_slot)

    @property
    def end_slot(self) -> int:
        return max(self.anchor_slot, self.current_slot) + 1

    @property
    def is_extending(self) -> bool:
        return self.current_slot > self.anchor_slot

    @property
    def span(self) -> int:
        return self.end_slot - self.start_slot


@dataclass(frozen=True)
class IntervalGeometry:
    top_percent: float
    height_percent: float


@dataclass(frozen=True)
class DragPreview:
    """Provisional block shown while the pointer is still down"""
    geometry: IntervalGeometry
    caption: str
    start: str
    end: str
    slots: int


DayLike = Union[date, str]


def _canonical_date(day: DayLike) -> str:
    if isinstance(day, datetime):
        return day.date().isoformat()
    if isinstance(day, date):
        return day.isoformat()
    try:
        return date.fromisoformat(day).isoformat()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date: {day!r}")


def validate_slot(grid: TimeGrid, slot: object) -> int:
    """Reject malformed slot indices at a non-interactive boundary"""
    if not grid.is_valid_slot(slot):
        raise ValidationError(
            f"Slot index must be an integer in [0, {grid.slots_per_day}), got {slot!r}"
        )
    return slot  # type: ignore[return-value]


def generate_task_id() -> str:
    """Unique id in the form task_<epoch ms>_<6 base36 chars>"""
    suffix = "".join(random.choice(_BASE36) for _ in range(6))
    return f"task_{int(time.time() * 1000)}_{suffix}"


def begin_drag(grid: TimeGrid, slot: object, day: DayLike) -> Optional[DragSelection]:
    """Start a selection on pointer-down; slots outside the grid are ignored"""
    if not grid.is_valid_slot(slot):
        logger.debug(f"Ignoring pointer-down outside grid: {slot!r}")
        return None
    return DragSelection(date=_canonical_date(day), anchor_slot=slot, current_slot=slot)  # type: ignore[arg-type]


def update_drag(
    grid: TimeGrid,
    selection: Optional[DragSelection],
    slot: object,
    day: Optional[DayLike] = None,
) -> Optional[DragSelection]:
    """
    Move the free end of the selection to `slot`.

    The selection stays pinned to the anchor's day: `day` is accepted so
    callers can forward the hovered column, but it never changes the result.
    """
    if selection is None or not grid.is_valid_slot(slot):
        return selection
    return replace(selection, current_slot=slot)


def commit_drag(
    grid: TimeGrid,
    selection: Optional[DragSelection],
    title: Optional[str] = None,
    color: Optional[str] = None,
    id_factory: Callable[[], str] = generate_task_id,
) -> TaskCreate:
    """
    Convert a finished drag into a candidate task.

    Args:
        grid: Timeline the selection was made on
        selection: Active selection
        title: Task title, "New Task" when omitted
        color: Color tag, the default blue block when omitted
        id_factory: Generator for the task identifier

    Returns:
        TaskCreate covering [start_slot, end_slot), at least one slot wide

    Raises:
        StateError: If there is no active selection
    """
    if selection is None:
        raise StateError("No active drag selection to commit")

    start_slot, end_slot = selection.start_slot, selection.end_slot
    return TaskCreate(
        id=id_factory(),
        title=title or DEFAULT_TASK_TITLE,
        start_slot=start_slot,
        end_slot=end_slot,
        start=grid.slot_label(start_slot),
        end=grid.slot_label(end_slot),
        date=selection.date,
        color=color or DEFAULT_TASK_COLOR,
    )


def cancel_drag(selection: Optional[DragSelection] = None) -> None:
    """Drop the transient selection"""
    return None


def interval_geometry(start_slot: int, end_slot: int, slots_per_day: int) -> IntervalGeometry:
    """Vertical placement of [start, end) as percentages of the day column"""
    return IntervalGeometry(
        top_percent=100 * start_slot / slots_per_day,
        height_percent=100 * (end_slot - start_slot) / slots_per_day,
    )


def drag_preview(grid: TimeGrid, selection: DragSelection) -> DragPreview:
    return DragPreview(
        geometry=interval_geometry(selection.start_slot, selection.end_slot, grid.slots_per_day),
        caption="Extend Task" if selection.is_extending else "Shorten Task",
        start=grid.slot_label(selection.start_slot),
        end=grid.slot_label(selection.end_slot),
        slots=selection.span,
    )


T = TypeVar("T")


def events_for_date(events: Iterable[T], day: DayLike) -> List[T]:
    """Records whose stored date string equals the canonical YYYY-MM-DD of `day`"""
    target = _canonical_date(day)
    result = []
    for event in events:
        if event is None:
            continue
        stored = event.get("date") if isinstance(event, dict) else getattr(event, "date", None)
        if stored == target:
            result.append(event)
    return result


# Reducer --------------------------------------------------------------------

@dataclass(frozen=True)
class PointerDown:
    slot: int
    date: DayLike


@dataclass(frozen=True)
class PointerEnter:
    slot: int
    date: Optional[DayLike] = None


@dataclass(frozen=True)
class PointerUp:
    title: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class CancelDrag:
    pass


DragAction = Union[PointerDown, PointerEnter, PointerUp, CancelDrag]


@dataclass(frozen=True)
class DragOutcome:
    selection: Optional[DragSelection]
    committed: Optional[TaskCreate] = None


def reduce_drag(
    grid: TimeGrid,
    selection: Optional[DragSelection],
    action: DragAction,
    id_factory: Callable[[], str] = generate_task_id,
) -> DragOutcome:
    """(selection, action) -> outcome; a pointer-up without a pointer-down is discarded"""
    if isinstance(action, PointerDown):
        return DragOutcome(begin_drag(grid, action.slot, action.date))
    if isinstance(action, PointerEnter):
        return DragOutcome(update_drag(grid, selection, action.slot, action.date))
    if isinstance(action, PointerUp):
        if selection is None:
            return DragOutcome(None)
        task = commit_drag(grid, selection, action.title, action.color, id_factory)
        return DragOutcome(None, task)
    if isinstance(action, CancelDrag):
        return DragOutcome(cancel_drag(selection))
    raise ValidationError(f"Unknown drag action: {action!r}")
