# File: lifeplanner/controllers/resize_controller.py
"""
Edge-drag resize gesture.
Moves the end boundary of an event to the end of the day under the cursor.
"""

import datetime
from dataclasses import dataclass
from typing import Callable, Optional

from lifeplanner.controllers.hit_test import GridHitTester
from lifeplanner.controllers.pointer_capture import CapturingGesture, PointerEventBus
from lifeplanner.models import Occurrence, Point, ResizeIntent

END_OF_DAY = datetime.time(23, 59, 59, 999000)


@dataclass
class ResizeState:
    """Transient state of one resize gesture."""
    occurrence: Occurrence
    anchor_start: datetime.datetime
    original_end: datetime.datetime
    last_position: Optional[Point] = None


class ResizeController(CapturingGesture):
    """State machine for the resize handle on an event's trailing edge."""

    def __init__(
        self,
        hit_tester: Optional[GridHitTester] = None,
        bus: Optional[PointerEventBus] = None,
        on_intent: Optional[Callable[[ResizeIntent], None]] = None
    ):
        """
        Initialize resize controller.

        Args:
            hit_tester: Maps pointer positions to rendered day cells
            bus: Global pointer event bus shared with the UI shell
            on_intent: Callback receiving every emitted ResizeIntent
        """
        super().__init__(bus)
        self.hit_tester = hit_tester
        self.on_intent = on_intent
        self.state: Optional[ResizeState] = None

    @property
    def is_active(self) -> bool:
        return self.state is not None

    def on_handle_pointer_down(self, occurrence: Occurrence) -> bool:
        """Grab the resize handle; returns False for non-resizable items."""
        if not occurrence.resizable:
            self.logger.debug(f"Resize ignored for read-only occurrence {occurrence.id}")
            return False

        self.state = ResizeState(
            occurrence=occurrence,
            anchor_start=occurrence.start,
            original_end=occurrence.end,
        )
        self._begin_capture(self.on_pointer_move, self._handle_up)
        self.logger.debug(f"Resize started for {occurrence.id}")
        return True

    def on_pointer_move(self, position: Point) -> None:
        """Cursor feedback only; nothing is mutated while dragging."""
        if self.state is not None:
            self.state.last_position = position

    def on_pointer_up(self, position: Optional[Point]) -> Optional[ResizeIntent]:
        """
        Release the handle at ``position``.

        Emits an intent when the cursor is over a day cell whose end of day
        is not before the unchanged start. Every other outcome keeps the
        original end and emits nothing.
        """
        state = self.state
        if state is None:
            return None

        try:
            day = self.hit_tester.day_at(position) if self.hit_tester else None
            if day is None:
                self.logger.debug(f"Resize of {state.occurrence.id} released outside the grid")
                return None

            candidate_end = datetime.datetime.combine(day, END_OF_DAY)
            if candidate_end < state.anchor_start:
                self.logger.debug(
                    f"Resize of {state.occurrence.id} rejected: "
                    f"{candidate_end:%Y-%m-%d} precedes start {state.anchor_start:%Y-%m-%d}"
                )
                return None

            intent = ResizeIntent(
                source_id=state.occurrence.source_id,
                new_start=state.anchor_start,
                new_end=candidate_end,
            )
            self.logger.info(f"Resize {intent.source_id}: end -> {candidate_end:%Y-%m-%d}")
        finally:
            self._reset()

        if self.on_intent:
            self.on_intent(intent)
        return intent

    def on_cancel(self) -> None:
        """Abandon the gesture; the original end stays."""
        self._reset()

    def _handle_up(self, position: Point) -> None:
        self.on_pointer_up(position)

    def _reset(self) -> None:
        self.state = None
        self._end_capture()
