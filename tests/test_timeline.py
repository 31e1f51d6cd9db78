"""
Day timeline tests

Slot labels, drag selection lifecycle, geometry and the pointer reducer.
"""
import re
from datetime import date, datetime
from types import SimpleNamespace

import pytest

from app.models.task import DEFAULT_TASK_COLOR, DEFAULT_TASK_TITLE
from app.services.calendar.timeline import (
    CancelDrag,
    DragSelection,
    PointerDown,
    PointerEnter,
    PointerUp,
    TimeGrid,
    begin_drag,
    cancel_drag,
    commit_drag,
    drag_preview,
    events_for_date,
    generate_task_id,
    interval_geometry,
    reduce_drag,
    update_drag,
    validate_slot,
)
from app.services.errors import StateError, ValidationError

DAY = "2025-10-07"


@pytest.fixture
def grid():
    return TimeGrid()


def fixed_id():
    return "task_1_abcdef"


class TestTimeGrid:
    def test_hourly_labels(self, grid):
        assert grid.slot_label(0) == "00:00"
        assert grid.slot_label(9) == "09:00"
        assert grid.labels[:3] == ["00:00", "01:00", "02:00"]
        assert len(grid.labels) == 24

    def test_end_of_day_boundary_is_24_00(self, grid):
        assert grid.slot_label(24) == "24:00"

    def test_half_hour_grid(self):
        grid = TimeGrid(slots_per_day=48, slot_minutes=30)
        assert grid.slot_label(3) == "01:30"
        assert grid.slot_at("01:30") == 3

    def test_day_start_offset(self):
        grid = TimeGrid(slots_per_day=10, slot_minutes=60, day_start_minutes=8 * 60)
        assert grid.slot_label(0) == "08:00"
        assert grid.slot_label(10) == "18:00"
        assert grid.slot_at("07:00") == 0

    def test_slot_at_rounding_and_clamping(self, grid):
        assert grid.slot_at("09:30") == 9
        assert grid.slot_at("09:30", round_up=True) == 10
        assert grid.slot_at("09:00", round_up=True) == 9
        assert grid.slot_at("25:00") == 24

    @pytest.mark.parametrize("label", ["noon", "9", "", "ab:cd"])
    def test_slot_at_rejects_bad_labels(self, grid, label):
        with pytest.raises(ValidationError):
            grid.slot_at(label)

    def test_non_positive_grid_rejected(self):
        with pytest.raises(ValidationError):
            TimeGrid(slots_per_day=0)
        with pytest.raises(ValidationError):
            TimeGrid(slot_minutes=-15)

    @pytest.mark.parametrize("slot", [-1, 24, 3.0, "3", None, True])
    def test_invalid_slots(self, grid, slot):
        assert not grid.is_valid_slot(slot)
        with pytest.raises(ValidationError):
            validate_slot(grid, slot)

    def test_valid_slot_passes_through(self, grid):
        assert validate_slot(grid, 0) == 0
        assert validate_slot(grid, 23) == 23


class TestDragLifecycle:
    def test_begin_drag_pins_anchor_and_day(self, grid):
        selection = begin_drag(grid, 9, date(2025, 10, 7))
        assert selection == DragSelection(date=DAY, anchor_slot=9, current_slot=9)

    def test_begin_drag_accepts_datetime_and_string(self, grid):
        assert begin_drag(grid, 1, datetime(2025, 10, 7, 15, 30)).date == DAY
        assert begin_drag(grid, 1, DAY).date == DAY

    def test_begin_drag_outside_grid_is_ignored(self, grid):
        assert begin_drag(grid, 24, DAY) is None
        assert begin_drag(grid, -1, DAY) is None
        assert begin_drag(grid, "9", DAY) is None

    def test_begin_drag_with_bad_date(self, grid):
        with pytest.raises(ValidationError):
            begin_drag(grid, 3, "not-a-date")

    def test_extend_downwards(self, grid):
        selection = update_drag(grid, begin_drag(grid, 9, DAY), 11)
        assert (selection.start_slot, selection.end_slot) == (9, 12)
        assert selection.is_extending
        assert selection.span == 3

    def test_drag_upwards_normalizes_range(self, grid):
        selection = update_drag(grid, begin_drag(grid, 9, DAY), 7)
        assert (selection.start_slot, selection.end_slot) == (7, 10)
        assert not selection.is_extending

    def test_update_without_selection_is_noop(self, grid):
        assert update_drag(grid, None, 5) is None

    def test_update_with_invalid_slot_keeps_selection(self, grid):
        selection = update_drag(grid, begin_drag(grid, 9, DAY), 11)
        assert update_drag(grid, selection, 40) == selection
        assert update_drag(grid, selection, None) == selection

    def test_selection_stays_on_anchor_day(self, grid):
        selection = update_drag(grid, begin_drag(grid, 9, DAY), 11, "2025-10-08")
        assert selection.date == DAY

    def test_commit_builds_candidate_task(self, grid):
        selection = update_drag(grid, begin_drag(grid, 9, DAY), 11)
        task = commit_drag(grid, selection, id_factory=fixed_id)
        assert task.id == "task_1_abcdef"
        assert task.title == DEFAULT_TASK_TITLE
        assert task.color == DEFAULT_TASK_COLOR
        assert (task.start_slot, task.end_slot) == (9, 12)
        assert (task.start, task.end) == ("09:00", "12:00")
        assert task.date == DAY

    def test_click_without_move_commits_one_slot(self, grid):
        task = commit_drag(grid, begin_drag(grid, 23, DAY), title="Late", id_factory=fixed_id)
        assert (task.start_slot, task.end_slot) == (23, 24)
        assert task.end == "24:00"
        assert task.title == "Late"

    def test_commit_without_selection_fails(self, grid):
        with pytest.raises(StateError):
            commit_drag(grid, None)

    def test_cancel_drops_selection(self, grid):
        assert cancel_drag(begin_drag(grid, 4, DAY)) is None

    def test_generated_ids(self):
        task_id = generate_task_id()
        assert re.match(r"^task_\d+_[0-9a-z]{6}$", task_id)
        assert generate_task_id() != task_id


class TestGeometry:
    def test_interval_geometry(self):
        geometry = interval_geometry(6, 12, 24)
        assert geometry.top_percent == 25.0
        assert geometry.height_percent == 25.0

    def test_preview_captions(self, grid):
        anchor = begin_drag(grid, 9, DAY)
        assert drag_preview(grid, update_drag(grid, anchor, 11)).caption == "Extend Task"
        assert drag_preview(grid, anchor).caption == "Shorten Task"
        assert drag_preview(grid, update_drag(grid, anchor, 7)).caption == "Shorten Task"

    def test_preview_labels(self, grid):
        preview = drag_preview(grid, update_drag(grid, begin_drag(grid, 9, DAY), 11))
        assert (preview.start, preview.end, preview.slots) == ("09:00", "12:00", 3)


class TestEventsForDate:
    def test_filters_dicts_and_objects(self):
        records = [
            {"title": "a", "date": DAY},
            {"title": "b", "date": "2025-10-08"},
            None,
            SimpleNamespace(title="c", date=DAY),
            {"title": "d"},
        ]
        matched = events_for_date(records, date(2025, 10, 7))
        assert [r["title"] if isinstance(r, dict) else r.title for r in matched] == ["a", "c"]

    def test_exact_string_match_only(self):
        assert events_for_date([{"date": "2025-10-07T09:00:00"}], DAY) == []


class TestReducer:
    def test_full_gesture(self, grid):
        outcome = reduce_drag(grid, None, PointerDown(9, date(2025, 10, 7)))
        outcome = reduce_drag(grid, outcome.selection, PointerEnter(10, "2025-10-08"))
        outcome = reduce_drag(grid, outcome.selection, PointerEnter(11))
        outcome = reduce_drag(grid, outcome.selection, PointerUp(title="Focus"), id_factory=fixed_id)

        assert outcome.selection is None
        task = outcome.committed
        assert task.title == "Focus"
        assert (task.start_slot, task.end_slot, task.date) == (9, 12, DAY)

    def test_pointer_up_without_pointer_down_is_discarded(self, grid):
        outcome = reduce_drag(grid, None, PointerUp())
        assert outcome.selection is None
        assert outcome.committed is None

    def test_cancel(self, grid):
        selection = begin_drag(grid, 2, DAY)
        outcome = reduce_drag(grid, selection, CancelDrag())
        assert outcome.selection is None
        assert outcome.committed is None

    def test_unknown_action(self, grid):
        with pytest.raises(ValidationError):
            reduce_drag(grid, None, "drop")
