from .pointer_capture import PointerEventBus, pointer_capture
from .hit_test import GridHitTester
from .drag_controller import DragController, DragState
from .resize_controller import ResizeController, ResizeState
from .context_menu import ContextMenuController
from .slot_selection import SlotSelectionController

__all__ = [
    "PointerEventBus",
    "pointer_capture",
    "GridHitTester",
    "DragController",
    "DragState",
    "ResizeController",
    "ResizeState",
    "ContextMenuController",
    "SlotSelectionController",
]
