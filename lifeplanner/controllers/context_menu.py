# File: lifeplanner/controllers/context_menu.py
"""
Right-click menu for toggling completion of an event.
"""

from typing import Callable, Optional, Tuple

from lifeplanner.models import ContextAction, MenuState, Occurrence, Point, ToggleIntent
from lifeplanner.utils.logger import LoggerMixin

MENU_SIZE: Tuple[float, float] = (160.0, 40.0)


class ContextMenuController(LoggerMixin):
    """State machine for a position-anchored action menu."""

    def __init__(
        self,
        on_intent: Optional[Callable[[ToggleIntent], None]] = None,
        menu_size: Tuple[float, float] = MENU_SIZE
    ):
        self.on_intent = on_intent
        self.menu_size = menu_size
        self.menu: Optional[MenuState] = None

    @property
    def is_open(self) -> bool:
        return self.menu is not None

    def on_open(self, occurrence: Occurrence, position: Point) -> Optional[MenuState]:
        """
        Open the menu for ``occurrence`` at ``position``.

        Returns None (menu suppressed) for recurring instances and tasks;
        only base events are independently actionable.
        """
        if not occurrence.context_menu_eligible:
            self.logger.debug(f"Context menu suppressed for {occurrence.id}")
            self.menu = None
            return None

        self.menu = MenuState(occurrence=occurrence, position=position)
        return self.menu

    def on_action(self, action: ContextAction) -> Optional[ToggleIntent]:
        """Run ``action`` against the open menu's occurrence, then close."""
        menu = self.menu
        if menu is None:
            return None

        self.menu = None
        if action != ContextAction.TOGGLE_COMPLETE:
            self.logger.warning(f"Unsupported context action: {action}")
            return None

        intent = ToggleIntent(
            source_id=menu.occurrence.source_id,
            completed=not menu.occurrence.completed,
            kind=menu.occurrence.kind,
        )
        self.logger.info(f"Toggle {intent.source_id}: completed={intent.completed}")
        if self.on_intent:
            self.on_intent(intent)
        return intent

    def on_dismiss(self) -> None:
        self.menu = None

    def contains(self, position: Point) -> bool:
        """True when ``position`` lies inside the open menu."""
        if self.menu is None:
            return False
        left, top = self.menu.position
        width, height = self.menu_size
        x, y = position
        return left <= x <= left + width and top <= y <= top + height

    def on_click(self, position: Point) -> bool:
        """Close on any click outside the menu; returns True if it closed."""
        if self.menu is None or self.contains(position):
            return False
        self.menu = None
        return True
