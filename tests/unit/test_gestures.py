# File: tests/unit/test_gestures.py
"""
Unit tests for gesture controllers.
Covers pointer capture, hit testing, drag, resize, context menu and slot selection.
"""

import pytest
from datetime import date, datetime, timedelta
from unittest.mock import Mock

from lifeplanner.controllers import (
    ContextMenuController, DragController, GridHitTester, PointerEventBus,
    ResizeController, SlotSelectionController, pointer_capture
)
from lifeplanner.models import (
    ContextAction, MoveIntent, Occurrence, OccurrenceKind, ResizeIntent
)
from lifeplanner.processors.grid_builder import CalendarGridModel

CELL = 120.0


def make_event(start=datetime(2024, 1, 10, 9, 0), end=datetime(2024, 1, 10, 10, 30), **kwargs):
    return Occurrence.for_event(
        id=kwargs.pop('id', "1"), source_id="1", title="E",
        start=start, end=end, color="#64748B", **kwargs
    )


def make_task():
    return Occurrence.for_task(
        id="task-9", source_id="9", title="T",
        start=datetime(2024, 1, 12), end=datetime(2024, 1, 12, 23, 59), color="#94A3B8"
    )


def cell_center(grid, day):
    """Screen position in the middle of ``day``'s cell."""
    index = (day - grid[0].date).days
    row, col = divmod(index, 7)
    return (col * CELL + CELL / 2, row * CELL + CELL / 2)


@pytest.fixture
def grid():
    return CalendarGridModel().build(date(2024, 1, 1), [])


@pytest.fixture
def hit_tester(grid):
    return GridHitTester.for_grid(grid, cell_width=CELL, cell_height=CELL)


@pytest.fixture
def bus():
    return PointerEventBus()


# ==================== Pointer Capture Tests ====================

class TestPointerCapture:
    """Tests for the scoped global listeners."""

    def test_listeners_released_on_exit(self, bus):
        with pointer_capture(bus, Mock(), Mock()):
            assert bus.listener_count() == 2
        assert bus.listener_count() == 0

    def test_listeners_released_on_error(self, bus):
        with pytest.raises(RuntimeError):
            with pointer_capture(bus, Mock(), Mock()):
                raise RuntimeError("boom")
        assert bus.listener_count() == 0

    def test_dispatch(self, bus):
        on_move, on_up = Mock(), Mock()
        with pointer_capture(bus, on_move, on_up):
            bus.dispatch_move((1, 2))
            bus.dispatch_up((3, 4))
        on_move.assert_called_once_with((1, 2))
        on_up.assert_called_once_with((3, 4))

    def test_unknown_kind_rejected(self, bus):
        with pytest.raises(ValueError):
            bus.add_listener("wheel", Mock())


# ==================== Hit Test Tests ====================

class TestGridHitTester:
    """Tests for GridHitTester.day_at."""

    def test_cells(self, grid, hit_tester):
        assert hit_tester.day_at((10, 10)) == date(2023, 12, 31)
        assert hit_tester.day_at(cell_center(grid, date(2024, 1, 10))) == date(2024, 1, 10)

    @pytest.mark.parametrize("position", [None, (-5, 10), (10, -5), (7 * CELL + 1, 10), (10, 6 * CELL + 1)])
    def test_outside_grid(self, hit_tester, position):
        assert hit_tester.day_at(position) is None

    def test_cell_size_must_be_positive(self):
        with pytest.raises(ValueError):
            GridHitTester(days=[], cell_width=0)


# ==================== Drag Tests ====================

class TestDragController:
    """Tests for DragController."""

    def test_move_preserves_time_of_day(self, bus):
        on_intent = Mock()
        controller = DragController(bus=bus, on_intent=on_intent)

        assert controller.on_gesture_start(make_event(), date(2024, 1, 10)) is True
        intent = controller.on_drop(date(2024, 1, 12))

        assert intent == MoveIntent(
            source_id="1",
            new_start=datetime(2024, 1, 12, 9, 0),
            new_end=datetime(2024, 1, 12, 10, 30),
            day_delta=2,
        )
        on_intent.assert_called_once_with(intent)
        assert controller.is_active is False
        assert bus.listener_count() == 0

    def test_move_backwards(self):
        controller = DragController()
        controller.on_gesture_start(make_event(), date(2024, 1, 10))
        intent = controller.on_drop(date(2024, 1, 3))

        assert intent.new_start == datetime(2024, 1, 3, 9, 0)
        assert intent.new_end - intent.new_start == timedelta(minutes=90)

    def test_recurring_instance_cannot_drag(self, bus):
        controller = DragController(bus=bus)
        occurrence = make_event(id="1-repeat-0", is_recurring_instance=True)

        assert controller.on_gesture_start(occurrence, date(2024, 1, 10)) is False
        assert controller.is_active is False
        assert bus.listener_count() == 0

    def test_task_cannot_drag(self):
        assert DragController().on_gesture_start(make_task(), date(2024, 1, 12)) is False

    def test_drop_outside_grid(self, bus):
        on_intent = Mock()
        controller = DragController(bus=bus, on_intent=on_intent)
        controller.on_gesture_start(make_event(), date(2024, 1, 10))

        assert controller.on_drop(None) is None
        on_intent.assert_not_called()
        assert controller.is_active is False
        assert bus.listener_count() == 0

    def test_global_release_drops_on_hovered_day(self, bus):
        on_intent = Mock()
        controller = DragController(bus=bus, on_intent=on_intent)
        controller.on_gesture_start(make_event(), date(2024, 1, 10))
        controller.on_drag_over_day(date(2024, 1, 11))

        bus.dispatch_up((0, 0))

        intent = on_intent.call_args[0][0]
        assert intent.new_start == datetime(2024, 1, 11, 9, 0)
        assert bus.listener_count() == 0

    def test_cancel(self, bus):
        on_intent = Mock()
        controller = DragController(bus=bus, on_intent=on_intent)
        controller.on_gesture_start(make_event(), date(2024, 1, 10))
        controller.on_cancel()

        assert controller.on_drop(date(2024, 1, 11)) is None
        on_intent.assert_not_called()
        assert bus.listener_count() == 0


# ==================== Resize Tests ====================

class TestResizeController:
    """Tests for ResizeController."""

    def test_resize_to_later_day(self, grid, hit_tester, bus):
        on_intent = Mock()
        controller = ResizeController(hit_tester=hit_tester, bus=bus, on_intent=on_intent)

        assert controller.on_handle_pointer_down(make_event()) is True
        controller.on_pointer_move((5, 5))
        intent = controller.on_pointer_up(cell_center(grid, date(2024, 1, 13)))

        assert intent == ResizeIntent(
            source_id="1",
            new_start=datetime(2024, 1, 10, 9, 0),
            new_end=datetime(2024, 1, 13, 23, 59, 59, 999000),
        )
        on_intent.assert_called_once_with(intent)
        assert bus.listener_count() == 0

    def test_resize_on_same_day_extends_to_end_of_day(self, grid, hit_tester):
        controller = ResizeController(hit_tester=hit_tester)
        controller.on_handle_pointer_down(make_event())
        intent = controller.on_pointer_up(cell_center(grid, date(2024, 1, 10)))

        assert intent.new_end == datetime(2024, 1, 10, 23, 59, 59, 999000)

    def test_resize_before_start_is_rejected(self, grid, hit_tester, bus):
        on_intent = Mock()
        controller = ResizeController(hit_tester=hit_tester, bus=bus, on_intent=on_intent)
        controller.on_handle_pointer_down(make_event())

        assert controller.on_pointer_up(cell_center(grid, date(2024, 1, 9))) is None
        on_intent.assert_not_called()
        assert controller.is_active is False
        assert bus.listener_count() == 0

    def test_release_outside_grid(self, hit_tester, bus):
        controller = ResizeController(hit_tester=hit_tester, bus=bus)
        controller.on_handle_pointer_down(make_event())

        assert controller.on_pointer_up((-50, -50)) is None
        assert controller.is_active is False
        assert bus.listener_count() == 0

    def test_release_without_hit_tester(self, bus):
        on_intent = Mock()
        controller = ResizeController(bus=bus, on_intent=on_intent)
        controller.on_handle_pointer_down(make_event())

        assert controller.on_pointer_up((10, 10)) is None
        on_intent.assert_not_called()
        assert bus.listener_count() == 0

    def test_cancel(self, grid, hit_tester, bus):
        on_intent = Mock()
        controller = ResizeController(hit_tester=hit_tester, bus=bus, on_intent=on_intent)
        controller.on_handle_pointer_down(make_event())
        assert bus.listener_count() == 2

        controller.on_cancel()

        assert controller.is_active is False
        assert bus.listener_count() == 0
        assert controller.on_pointer_up(cell_center(grid, date(2024, 1, 11))) is None
        on_intent.assert_not_called()

    def test_move_only_records_position(self, hit_tester):
        controller = ResizeController(hit_tester=hit_tester)
        occurrence = make_event()
        controller.on_handle_pointer_down(occurrence)
        controller.on_pointer_move((400, 200))

        assert controller.state.last_position == (400, 200)
        assert controller.state.original_end == occurrence.end

    def test_read_only_occurrences_cannot_resize(self, hit_tester):
        controller = ResizeController(hit_tester=hit_tester)
        assert controller.on_handle_pointer_down(make_event(is_recurring_instance=True)) is False
        assert controller.on_handle_pointer_down(make_task()) is False

    def test_global_release_resizes(self, grid, hit_tester, bus):
        on_intent = Mock()
        controller = ResizeController(hit_tester=hit_tester, bus=bus, on_intent=on_intent)
        controller.on_handle_pointer_down(make_event())

        bus.dispatch_move((1, 1))
        bus.dispatch_up(cell_center(grid, date(2024, 1, 11)))

        assert on_intent.call_args[0][0].new_end.date() == date(2024, 1, 11)
        assert bus.listener_count() == 0


# ==================== Context Menu Tests ====================

class TestContextMenuController:
    """Tests for ContextMenuController."""

    def test_toggle_flow(self):
        on_intent = Mock()
        controller = ContextMenuController(on_intent=on_intent)

        menu = controller.on_open(make_event(), (100, 200))
        assert menu.position == (100, 200)
        assert menu.toggle_label == "Mark complete"

        intent = controller.on_action(ContextAction.TOGGLE_COMPLETE)
        assert intent.source_id == "1"
        assert intent.completed is True
        assert intent.kind == OccurrenceKind.EVENT
        on_intent.assert_called_once_with(intent)
        assert controller.is_open is False

    def test_completed_event_toggles_back(self):
        controller = ContextMenuController()
        controller.on_open(make_event(completed=True), (0, 0))
        assert controller.on_action(ContextAction.TOGGLE_COMPLETE).completed is False

    def test_suppressed_for_recurring_instance_and_task(self):
        controller = ContextMenuController()
        assert controller.on_open(make_event(is_recurring_instance=True), (0, 0)) is None
        assert controller.on_open(make_task(), (0, 0)) is None
        assert controller.is_open is False

    def test_action_without_menu(self):
        assert ContextMenuController().on_action(ContextAction.TOGGLE_COMPLETE) is None

    def test_click_outside_closes(self):
        controller = ContextMenuController(menu_size=(100, 40))
        controller.on_open(make_event(), (50, 50))

        assert controller.on_click((60, 60)) is False
        assert controller.is_open is True
        assert controller.on_click((300, 300)) is True
        assert controller.is_open is False

    def test_dismiss(self):
        controller = ContextMenuController()
        controller.on_open(make_event(), (0, 0))
        controller.on_dismiss()
        assert controller.menu is None


# ==================== Slot Selection Tests ====================

class TestSlotSelectionController:
    """Tests for SlotSelectionController."""

    def test_click_on_empty_cell_creates_draft(self):
        on_draft = Mock()
        controller = SlotSelectionController(on_draft=on_draft)

        assert controller.on_pointer_down(date(2024, 1, 5)) is True
        draft = controller.on_pointer_up(date(2024, 1, 5))

        assert draft.start_date == draft.end_date == date(2024, 1, 5)
        assert draft.all_day is True
        on_draft.assert_called_once_with(draft)

    def test_press_on_occurrence_is_ignored(self):
        controller = SlotSelectionController()
        assert controller.on_pointer_down(date(2024, 1, 5), on_occurrence=True) is False
        assert controller.on_pointer_up(date(2024, 1, 5)) is None

    def test_release_on_other_cell(self):
        controller = SlotSelectionController()
        controller.on_pointer_down(date(2024, 1, 5))
        assert controller.on_pointer_up(date(2024, 1, 6)) is None
        assert controller.is_active is False
