# File: lifeplanner/core/calendar_view.py
"""
Calendar view controller.
Owns the month view state and wires gestures, the grid and the API together.

Every mutation goes to the API first; the local occurrence set is only
rebuilt from a fresh load, so a failed request leaves the view unchanged.
"""

import datetime
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from lifeplanner.controllers import (
    ContextMenuController,
    DragController,
    GridHitTester,
    PointerEventBus,
    ResizeController,
    SlotSelectionController,
)
from lifeplanner.core.config_manager import Config
from lifeplanner.models import (
    CalendarSettings,
    ContextAction,
    DayBucket,
    EventDraft,
    MenuState,
    MoveIntent,
    Occurrence,
    OccurrenceKind,
    Point,
    ResizeIntent,
    SourceEvent,
    TaskRef,
    ToggleIntent,
)
from lifeplanner.processors.event_styler import EventStyle, EventStyler
from lifeplanner.processors.grid_builder import CalendarGridModel, shift_month
from lifeplanner.processors.occurrence_builder import OccurrenceBuilder
from lifeplanner.services.api_client import PlannerApiClient
from lifeplanner.services.data_collector import DataCollector
from lifeplanner.utils.logger import setup_logger

logger = setup_logger(__name__)

RECURRING_NOTICE = (
    "This is a repeated occurrence. Select the original event "
    "(the one without the recurrence mark) to edit it."
)


@dataclass
class CalendarCallbacks:
    """Hooks into the UI shell; every one is optional."""
    on_slot_select: Optional[Callable[[EventDraft], None]] = None
    on_occurrence_select: Optional[Callable[[Occurrence], None]] = None
    on_occurrence_context_menu: Optional[Callable[[MenuState], None]] = None
    on_move_intent: Optional[Callable[[MoveIntent], None]] = None
    on_resize_intent: Optional[Callable[[ResizeIntent], None]] = None
    on_toggle_intent: Optional[Callable[[ToggleIntent], None]] = None
    notify: Optional[Callable[[str, str], None]] = None
    on_overflow_open: Optional[Callable[[DayBucket], None]] = None


@dataclass
class ViewState:
    """Explicit UI state of the month view."""
    current_month: datetime.date
    selected_occurrence: Optional[Occurrence] = None
    editing_event: Optional[SourceEvent] = None
    draft: Optional[EventDraft] = None
    context_menu: Optional[MenuState] = None
    overflow_day: Optional[datetime.date] = None

    @property
    def dialog_open(self) -> bool:
        return self.editing_event is not None or self.draft is not None


class CalendarView:
    """
    Month calendar controller.

    Holds the loaded events and tasks, memoizes their expansion per data
    revision and routes gesture intents to the persistence API.
    """

    def __init__(
        self,
        api_client: PlannerApiClient,
        collector: Optional[DataCollector] = None,
        settings: Optional[CalendarSettings] = None,
        callbacks: Optional[CalendarCallbacks] = None,
        bus: Optional[PointerEventBus] = None,
        today: Optional[datetime.date] = None,
        grid_origin: Point = (0.0, 0.0),
        cell_size: Tuple[float, float] = (120.0, 120.0)
    ):
        """
        Initialize the calendar view.

        Args:
            api_client: Client used for every mutation
            collector: Data source for loads (default: DataCollector(api_client))
            settings: Calendar constants (default: CalendarSettings())
            callbacks: UI shell hooks
            bus: Global pointer event bus for drag and resize capture
            today: Fixed "today", mainly for tests (default: Config.today())
            grid_origin: Screen position of the top-left grid cell
            cell_size: Width and height of one day cell
        """
        self.api = api_client
        self.collector = collector or DataCollector(api_client)
        self.settings = settings or CalendarSettings()
        self.callbacks = callbacks or CalendarCallbacks()
        self.bus = bus or PointerEventBus()
        self._today = today
        self.grid_origin = grid_origin
        self.cell_size = cell_size

        self.builder = OccurrenceBuilder(self.settings)
        self.grid_model = CalendarGridModel(self.settings)
        self.styler = EventStyler(self.settings)

        self.events: Dict[str, SourceEvent] = {}
        self.tasks: List[TaskRef] = []
        self._revision = 0
        self._cached_revision = -1
        self._cached_occurrences: List[Occurrence] = []

        self.drag = DragController(bus=self.bus, on_intent=self._apply_move)
        self.resize = ResizeController(bus=self.bus, on_intent=self._apply_resize)
        self.menu = ContextMenuController(on_intent=self._apply_toggle)
        self.slots = SlotSelectionController(on_draft=self._open_draft)

        self.state = ViewState(current_month=self.today().replace(day=1))

    # ==================== Data ====================

    def today(self) -> datetime.date:
        return self._today or Config.today()

    def load(self) -> bool:
        """
        Fetch events and tasks.

        A resource whose request failed keeps its previous contents and the
        failure is passed to ``notify``.

        Returns:
            True if every request succeeded
        """
        data = self.collector.collect_calendar_data()
        errors = data['errors']

        if 'events' not in errors:
            self.events = {event.id: event for event in data['events']}
        if 'tasks' not in errors:
            self.tasks = list(data['tasks'])
        self._revision += 1

        for message in errors.values():
            self._notify("Loading failed", message)

        logger.info(f"Loaded {len(self.events)} events and {len(self.tasks)} tasks")
        return not errors

    def set_data(self, events: List[SourceEvent], tasks: Optional[List[TaskRef]] = None) -> None:
        """Replace the loaded data directly, bypassing the API."""
        self.events = {event.id: event for event in events}
        self.tasks = list(tasks or [])
        self._revision += 1

    def occurrences(self) -> List[Occurrence]:
        """Expanded events and dated tasks, rebuilt once per data revision."""
        if self._cached_revision != self._revision:
            self._cached_occurrences = self.builder.build(self.events.values(), self.tasks)
            self._cached_revision = self._revision
        return self._cached_occurrences

    def grid(self) -> List[DayBucket]:
        """Day buckets of the current month; also refreshes the resize hit tester."""
        buckets = self.grid_model.build(self.state.current_month, self.occurrences(), today=self.today())
        self.resize.hit_tester = GridHitTester.for_grid(
            buckets, self.grid_origin, self.cell_size[0], self.cell_size[1]
        )
        return buckets

    def style(self, occurrence: Occurrence) -> EventStyle:
        return self.styler.style(occurrence)

    # ==================== Navigation ====================

    def next_month(self) -> datetime.date:
        return self._go_to(shift_month(self.state.current_month, 1))

    def prev_month(self) -> datetime.date:
        return self._go_to(shift_month(self.state.current_month, -1))

    def go_today(self) -> datetime.date:
        return self._go_to(self.today().replace(day=1))

    def _go_to(self, month: datetime.date) -> datetime.date:
        self.state.current_month = month
        self.state.overflow_day = None
        # Rebuilt from the new month's grid on the next render or resize
        self.resize.hit_tester = None
        self.close_context_menu()
        logger.debug(f"Showing {month:%Y-%m}")
        return month

    # ==================== Selection and dialogs ====================

    def select_occurrence(self, occurrence: Occurrence) -> Optional[SourceEvent]:
        """
        Handle a click on an occurrence.

        Recurring instances and tasks only produce a notification; a base
        event opens the edit dialog state.

        Returns:
            The event now being edited, or None
        """
        self.state.selected_occurrence = occurrence

        if occurrence.is_recurring_instance:
            self._notify("Recurring event", RECURRING_NOTICE)
            return None

        if occurrence.kind == OccurrenceKind.TASK:
            priority = getattr(occurrence.priority, 'value', occurrence.priority)
            self._notify("Task", f"{occurrence.title} (priority {priority})")
            return None

        event = self.events.get(occurrence.source_id)
        if event is None:
            logger.warning(f"Selected occurrence {occurrence.id} has no loaded source event")
            return None

        self.state.editing_event = event
        self.state.draft = None
        if self.callbacks.on_occurrence_select:
            self.callbacks.on_occurrence_select(occurrence)
        return event

    def close_dialog(self) -> None:
        self.state.editing_event = None
        self.state.draft = None
        self.state.selected_occurrence = None

    def save_event(self, payload: Dict[str, Any]) -> bool:
        """
        Create the drafted event or update the one being edited.

        Args:
            payload: camelCase event record from the authoring dialog

        Returns:
            True if the API accepted the change
        """
        if not str(payload.get('title') or '').strip():
            self._notify("Error", "Please enter a title for the event.")
            return False
        if not payload.get('startDate'):
            self._notify("Error", "Please choose a start date.")
            return False

        editing = self.state.editing_event
        if editing is not None:
            result = self.api.update_event(editing.id, payload)
            success_title = "Event updated"
        else:
            result = self.api.create_event(payload)
            success_title = "Event created"

        if not result.is_success():
            self._notify("Saving failed", result.message or "The event could not be saved.")
            return False

        self._notify(success_title, payload['title'])
        self.close_dialog()
        self.load()
        return True

    def delete_event(self) -> bool:
        """Delete the event currently being edited."""
        editing = self.state.editing_event
        if editing is None:
            return False

        result = self.api.delete_event(editing.id)
        if not result.is_success():
            self._notify("Deleting failed", result.message or "The event could not be deleted.")
            return False

        self._notify("Event deleted", editing.title)
        self.close_dialog()
        self.load()
        return True

    def _open_draft(self, draft: EventDraft) -> None:
        self.state.draft = draft
        self.state.editing_event = None
        if self.callbacks.on_slot_select:
            self.callbacks.on_slot_select(draft)

    # ==================== Overflow ====================

    def open_overflow(self, day: datetime.date) -> Optional[DayBucket]:
        """Expose the full occurrence list of ``day``."""
        bucket = CalendarGridModel.find_bucket(self.grid(), day)
        if bucket is None:
            logger.debug(f"Overflow requested for off-grid day {day}")
            return None

        self.state.overflow_day = day
        if self.callbacks.on_overflow_open:
            self.callbacks.on_overflow_open(bucket)
        return bucket

    def close_overflow(self) -> None:
        self.state.overflow_day = None

    # ==================== Gestures ====================

    def gesture_active(self) -> bool:
        return self.drag.is_active or self.resize.is_active or self.slots.is_active

    def press_cell(self, day: datetime.date, on_occurrence: bool = False) -> bool:
        if self.drag.is_active or self.resize.is_active:
            return False
        return self.slots.on_pointer_down(day, on_occurrence)

    def release_cell(self, day: Optional[datetime.date]) -> Optional[EventDraft]:
        return self.slots.on_pointer_up(day)

    def start_drag(self, occurrence: Occurrence, origin_day: datetime.date) -> bool:
        if self.gesture_active():
            logger.debug("Drag refused: another gesture is active")
            return False
        return self.drag.on_gesture_start(occurrence, origin_day)

    def drag_over(self, day: Optional[datetime.date]) -> None:
        self.drag.on_drag_over_day(day)

    def drop(self, target_day: Optional[datetime.date]) -> Optional[MoveIntent]:
        return self.drag.on_drop(target_day)

    def start_resize(self, occurrence: Occurrence) -> bool:
        if self.gesture_active():
            logger.debug("Resize refused: another gesture is active")
            return False
        if self.resize.hit_tester is None:
            self.grid()
        return self.resize.on_handle_pointer_down(occurrence)

    def resize_move(self, position: Point) -> None:
        self.resize.on_pointer_move(position)

    def resize_release(self, position: Optional[Point]) -> Optional[ResizeIntent]:
        return self.resize.on_pointer_up(position)

    def cancel_gestures(self) -> None:
        self.drag.on_cancel()
        self.resize.on_cancel()
        self.slots.on_cancel()

    # ==================== Context menu and completion ====================

    def open_context_menu(self, occurrence: Occurrence, position: Point) -> Optional[MenuState]:
        menu = self.menu.on_open(occurrence, position)
        self.state.context_menu = menu
        if menu is not None and self.callbacks.on_occurrence_context_menu:
            self.callbacks.on_occurrence_context_menu(menu)
        return menu

    def choose_menu_action(self, action: ContextAction = ContextAction.TOGGLE_COMPLETE) -> Optional[ToggleIntent]:
        intent = self.menu.on_action(action)
        self.state.context_menu = None
        return intent

    def click(self, position: Point) -> None:
        """Any click on the page; closes the context menu when outside it."""
        if self.menu.on_click(position):
            self.state.context_menu = None

    def close_context_menu(self) -> None:
        self.menu.on_dismiss()
        self.state.context_menu = None

    def toggle_completed(self, occurrence: Occurrence) -> Optional[ToggleIntent]:
        """Checkbox toggle for a base event or a task."""
        if occurrence.is_recurring_instance:
            logger.debug(f"Completion toggle ignored for recurring instance {occurrence.id}")
            return None

        intent = ToggleIntent(
            source_id=occurrence.source_id,
            completed=not occurrence.completed,
            kind=occurrence.kind,
        )
        self._apply_toggle(intent)
        return intent

    # ==================== Intent handling ====================

    def _apply_move(self, intent: MoveIntent) -> None:
        if self.callbacks.on_move_intent:
            self.callbacks.on_move_intent(intent)
        self._reschedule(intent.source_id, intent.new_start, intent.new_end)

    def _apply_resize(self, intent: ResizeIntent) -> None:
        if self.callbacks.on_resize_intent:
            self.callbacks.on_resize_intent(intent)
        self._reschedule(intent.source_id, intent.new_start, intent.new_end)

    def _reschedule(self, event_id: str, new_start: datetime.datetime, new_end: datetime.datetime) -> bool:
        event = self.events.get(event_id)
        if event is None:
            logger.warning(f"Cannot reschedule unknown event {event_id}")
            return False

        result = self.api.update_event(event_id, event.rescheduled_payload(new_start, new_end))
        if not result.is_success():
            self._notify("Updating failed", result.message or "The event could not be moved.")
            return False

        self._notify("Event updated", event.title)
        self.load()
        return True

    def _apply_toggle(self, intent: ToggleIntent) -> None:
        if self.callbacks.on_toggle_intent:
            self.callbacks.on_toggle_intent(intent)

        if intent.kind == OccurrenceKind.TASK:
            result = self.api.set_task_completed(intent.source_id, intent.completed)
            label = "Task"
        else:
            result = self.api.set_event_completed(intent.source_id, intent.completed)
            label = "Event"

        if not result.is_success():
            self._notify("Updating failed", result.message or "Completion could not be changed.")
            return

        self._notify(f"{label} completion changed", "Completed" if intent.completed else "Not completed")
        self.load()

    def _notify(self, title: str, message: str) -> None:
        logger.info(f"{title}: {message}")
        if self.callbacks.notify:
            self.callbacks.notify(title, message)
