"""Calendar timeline services"""
from .timeline import (
    TimeGrid,
    DragSelection,
    DragPreview,
    IntervalGeometry,
    DragOutcome,
    PointerDown,
    PointerEnter,
    PointerUp,
    CancelDrag,
    begin_drag,
    update_drag,
    commit_drag,
    cancel_drag,
    reduce_drag,
    drag_preview,
    interval_geometry,
    events_for_date,
    validate_slot,
    generate_task_id,
)
from .views import CalendarView, days_for_view, shift_anchor

__all__ = [
    'TimeGrid', 'DragSelection', 'DragPreview', 'IntervalGeometry', 'DragOutcome',
    'PointerDown', 'PointerEnter', 'PointerUp', 'CancelDrag',
    'begin_drag', 'update_drag', 'commit_drag', 'cancel_drag', 'reduce_drag',
    'drag_preview', 'interval_geometry', 'events_for_date', 'validate_slot',
    'generate_task_id',
    'CalendarView', 'days_for_view', 'shift_anchor',
]
