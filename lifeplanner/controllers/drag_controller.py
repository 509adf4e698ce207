# File: lifeplanner/controllers/drag_controller.py
"""
Drag-to-move gesture.
Moves a whole event to another day, keeping its clock times and duration.
"""

import datetime
from dataclasses import dataclass
from typing import Callable, Optional

from lifeplanner.controllers.pointer_capture import CapturingGesture, PointerEventBus
from lifeplanner.models import MoveIntent, Occurrence, Point


@dataclass
class DragState:
    """Transient state of one drag gesture."""
    occurrence: Occurrence
    origin_day: datetime.date
    hover_day: Optional[datetime.date] = None
    last_position: Optional[Point] = None


class DragController(CapturingGesture):
    """State machine for moving an occurrence between day cells."""

    def __init__(
        self,
        bus: Optional[PointerEventBus] = None,
        on_intent: Optional[Callable[[MoveIntent], None]] = None
    ):
        """
        Initialize drag controller.

        Args:
            bus: Global pointer event bus shared with the UI shell
            on_intent: Callback receiving every emitted MoveIntent
        """
        super().__init__(bus)
        self.on_intent = on_intent
        self.state: Optional[DragState] = None

    @property
    def is_active(self) -> bool:
        return self.state is not None

    def on_gesture_start(self, occurrence: Occurrence, origin_day: datetime.date) -> bool:
        """
        Begin dragging ``occurrence`` from ``origin_day``.

        Returns False, keeping no state, for occurrences that cannot move.
        """
        if not occurrence.draggable:
            self.logger.debug(f"Drag ignored for read-only occurrence {occurrence.id}")
            return False

        self.state = DragState(occurrence=occurrence, origin_day=origin_day, hover_day=origin_day)
        self._begin_capture(self._handle_move, self._handle_up)
        self.logger.debug(f"Drag started for {occurrence.id} from {origin_day}")
        return True

    def on_drag_over_day(self, day: Optional[datetime.date]) -> None:
        """Track the cell currently under the dragged item."""
        if self.state is not None:
            self.state.hover_day = day

    def on_drop(self, target_day: Optional[datetime.date]) -> Optional[MoveIntent]:
        """
        Finish the gesture over ``target_day``.

        Both bounds shift by the same whole-day delta. A missing target
        ends the gesture without an intent.
        """
        state = self.state
        if state is None:
            return None

        try:
            if target_day is None:
                self.logger.debug(f"Drag of {state.occurrence.id} ended outside the grid")
                return None

            day_delta = (target_day - state.origin_day).days
            shift = datetime.timedelta(days=day_delta)
            intent = MoveIntent(
                source_id=state.occurrence.source_id,
                new_start=state.occurrence.start + shift,
                new_end=state.occurrence.end + shift,
                day_delta=day_delta,
            )
            self.logger.info(
                f"Move {intent.source_id}: {day_delta:+d} days -> {intent.new_start:%Y-%m-%d %H:%M}"
            )
        finally:
            self._reset()

        if self.on_intent:
            self.on_intent(intent)
        return intent

    def on_cancel(self) -> None:
        """Abandon the gesture without emitting anything."""
        if self.state is not None:
            self.logger.debug(f"Drag of {self.state.occurrence.id} cancelled")
        self._reset()

    def _handle_move(self, position: Point) -> None:
        if self.state is not None:
            self.state.last_position = position

    def _handle_up(self, position: Point) -> None:
        # Released without an explicit drop: drop on the last hovered cell
        if self.state is not None:
            self.on_drop(self.state.hover_day)

    def _reset(self) -> None:
        self.state = None
        self._end_capture()
