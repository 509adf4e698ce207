# File: lifeplanner/controllers/slot_selection.py

import datetime
from typing import Callable, Optional

from lifeplanner.models import EventDraft
from lifeplanner.utils.logger import LoggerMixin


class SlotSelectionController(LoggerMixin):
    """Turns a click on an empty day cell into a new event draft."""

    def __init__(self, on_draft: Optional[Callable[[EventDraft], None]] = None):
        self.on_draft = on_draft
        self.pressed_day: Optional[datetime.date] = None

    @property
    def is_active(self) -> bool:
        return self.pressed_day is not None

    def on_pointer_down(self, day: datetime.date, on_occurrence: bool = False) -> bool:
        # Presses on an occurrence belong to the other gestures
        if on_occurrence:
            self.pressed_day = None
            return False
        self.pressed_day = day
        return True

    def on_pointer_up(self, day: Optional[datetime.date]) -> Optional[EventDraft]:
        """Release; a draft is produced only when released on the pressed cell."""
        pressed, self.pressed_day = self.pressed_day, None
        if pressed is None or day != pressed:
            return None

        draft = EventDraft(start_date=pressed, end_date=pressed, all_day=True)
        self.logger.debug(f"New event draft for {pressed}")
        if self.on_draft:
            self.on_draft(draft)
        return draft

    def on_cancel(self) -> None:
        self.pressed_day = None
