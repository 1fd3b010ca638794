"""Spin lifecycle events.

The controller publishes what happens to the wheel; hosts subscribe to the
parts they draw or log. Dispatch is synchronous and runs inside the frame
that emitted the event.
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
import logging
import time

logger = logging.getLogger(__name__)

HISTORY_SIZE = 100


class EventType(Enum):
    # Host input
    BUTTON_PRESS = auto()
    TICK = auto()
    SHUTDOWN = auto()

    # Published by the wheel
    SPIN_STARTED = auto()
    SPIN_COMPLETE = auto()
    SPIN_REFUSED = auto()
    PRIZES_CHANGED = auto()


@dataclass
class Event:
    """Something that happened, with its payload and emitter name."""
    type: EventType
    data: dict[str, Any] = field(default_factory=dict)
    source: str = "host"
    timestamp: float = field(default_factory=time.time)


Handler = Callable[[Event], None]


class EventBus:
    """Fan-out of wheel and host events to subscribed handlers.

    A failing handler is logged and skipped so one broken subscriber never
    stops the others (or the spin that emitted the event). The most recent
    events are kept for inspection.
    """

    def __init__(self, history_size: int = HISTORY_SIZE) -> None:
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)
        self._history: deque[Event] = deque(maxlen=history_size)

    def subscribe(self, event_type: EventType, handler: Handler) -> Callable[[], None]:
        """Register a handler. Returns a function that removes it again."""
        self._handlers[event_type].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[event_type]:
                self._handlers[event_type].remove(handler)

        return unsubscribe

    def emit(self, event: Event) -> None:
        self._history.append(event)
        # Copy so handlers may unsubscribe while being called
        for handler in list(self._handlers.get(event.type, ())):
            try:
                handler(event)
            except Exception as e:
                logger.error(f"Error handling {event.type.name} from {event.source}: {e}")

    def get_history(self, event_type: EventType | None = None, limit: int = 10) -> list[Event]:
        """Most recent events, oldest first, optionally of one type."""
        events = [e for e in self._history if event_type is None or e.type == event_type]
        return events[-limit:]


def tick_event(delta_ms: float, frame: int) -> Event:
    """Frame tick. Delta is in milliseconds."""
    return Event(EventType.TICK, data={"delta_ms": delta_ms, "frame": frame})


def button_press_event(source: str = "button") -> Event:
    return Event(EventType.BUTTON_PRESS, source=source)
