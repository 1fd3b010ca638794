"""Core framework components for the wheel."""

from .state import WheelPhase, WheelState, StateMachine
from .events import EventBus, Event, EventType
from .scheduler import FrameScheduler
from .errors import InvalidConfiguration, RenderSurfaceUnavailable

__all__ = [
    "WheelPhase",
    "WheelState",
    "StateMachine",
    "EventBus",
    "Event",
    "EventType",
    "FrameScheduler",
    "InvalidConfiguration",
    "RenderSurfaceUnavailable",
]
