# File: lifeplanner/controllers/pointer_capture.py
"""
Global pointer listeners held for exactly one gesture.

The UI shell forwards document-level pointer moves and releases to a
PointerEventBus. Drag and resize gestures subscribe through
``pointer_capture`` when they start and are unsubscribed when the
capture is closed, whichever way the gesture ends.
"""

from contextlib import ExitStack, contextmanager
from typing import Callable, Dict, Iterator, List, Optional

from lifeplanner.models import Point
from lifeplanner.utils.logger import LoggerMixin, setup_logger

logger = setup_logger(__name__)

PointerHandler = Callable[[Point], None]

MOVE = "move"
UP = "up"


class PointerEventBus:
    """Dispatches global pointer events to the active gesture."""

    def __init__(self):
        self._listeners: Dict[str, List[PointerHandler]] = {MOVE: [], UP: []}

    def add_listener(self, kind: str, handler: PointerHandler) -> None:
        if kind not in self._listeners:
            raise ValueError(f"Unknown pointer event kind: {kind}")
        self._listeners[kind].append(handler)

    def remove_listener(self, kind: str, handler: PointerHandler) -> None:
        try:
            self._listeners[kind].remove(handler)
        except (KeyError, ValueError):
            logger.debug(f"Listener for '{kind}' was not attached")

    def listener_count(self, kind: Optional[str] = None) -> int:
        if kind is not None:
            return len(self._listeners.get(kind, []))
        return sum(len(handlers) for handlers in self._listeners.values())

    def dispatch_move(self, position: Point) -> None:
        # Copy: handlers may detach themselves while running
        for handler in list(self._listeners[MOVE]):
            handler(position)

    def dispatch_up(self, position: Point) -> None:
        for handler in list(self._listeners[UP]):
            handler(position)


@contextmanager
def pointer_capture(
    bus: PointerEventBus,
    on_move: PointerHandler,
    on_up: PointerHandler
) -> Iterator[PointerEventBus]:
    """Attach move/up listeners for the duration of the block."""
    bus.add_listener(MOVE, on_move)
    bus.add_listener(UP, on_up)
    try:
        yield bus
    finally:
        bus.remove_listener(MOVE, on_move)
        bus.remove_listener(UP, on_up)


class CapturingGesture(LoggerMixin):
    """Base for gestures that hold a pointer capture while active."""

    def __init__(self, bus: Optional[PointerEventBus] = None):
        self.bus = bus or PointerEventBus()
        self._capture: Optional[ExitStack] = None

    @property
    def is_capturing(self) -> bool:
        return self._capture is not None

    def _begin_capture(self, on_move: PointerHandler, on_up: PointerHandler) -> None:
        self._end_capture()
        stack = ExitStack()
        stack.enter_context(pointer_capture(self.bus, on_move, on_up))
        self._capture = stack

    def _end_capture(self) -> None:
        stack, self._capture = self._capture, None
        if stack is not None:
            stack.close()
