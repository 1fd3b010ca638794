"""
State machine for the spin engine.

States:
    IDLE: Wheel at rest, a spin may be requested
    SPINNING: A spin is in progress, ticks advance the rotation

The machine is owned exclusively by a SpinController. Outside code only
ever sees frozen WheelState snapshots.
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Callable, Any
import logging

logger = logging.getLogger(__name__)


class WheelPhase(Enum):
    """Spin phases."""
    IDLE = auto()
    SPINNING = auto()


@dataclass
class SpinContext:
    """Mutable per-spin data, carried across ticks."""
    rotation: float = 0.0          # radians, accumulates across spins
    elapsed: float = 0.0           # ms since the current spin started
    total_duration: float = 0.0    # ms planned for the current spin
    initial_velocity: float = 0.0  # degrees per tick at spin start


@dataclass(frozen=True)
class WheelState:
    """Read-only snapshot of the wheel."""
    phase: WheelPhase
    rotation: float
    elapsed: float
    total_duration: float
    initial_velocity: float

    @property
    def is_spinning(self) -> bool:
        return self.phase == WheelPhase.SPINNING


class StateMachine:
    """
    Manages the wheel phase and its transitions.

    Only IDLE -> SPINNING and SPINNING -> IDLE are valid; any other request
    is refused and logged, leaving the phase untouched.
    """

    VALID_TRANSITIONS: list[tuple[WheelPhase, WheelPhase]] = [
        (WheelPhase.IDLE, WheelPhase.SPINNING),
        (WheelPhase.SPINNING, WheelPhase.IDLE),
    ]

    def __init__(self, initial_state: WheelPhase = WheelPhase.IDLE) -> None:
        self._state = initial_state
        self._context = SpinContext()
        self._listeners: list[Callable[[WheelPhase, WheelPhase, SpinContext], None]] = []
        self._valid_transitions = set(self.VALID_TRANSITIONS)
        logger.debug(f"StateMachine initialized with state: {initial_state.name}")

    @property
    def state(self) -> WheelPhase:
        """Get current phase."""
        return self._state

    @property
    def context(self) -> SpinContext:
        """Get the mutable spin context."""
        return self._context

    def can_transition(self, to_state: WheelPhase) -> bool:
        """Check if transition to given phase is valid."""
        return (self._state, to_state) in self._valid_transitions

    def transition(self, to_state: WheelPhase, **context_updates: Any) -> bool:
        """
        Attempt to transition to a new phase.

        Args:
            to_state: Target phase
            **context_updates: SpinContext fields to set as part of the transition

        Returns:
            True if transition successful, False otherwise
        """
        if not self.can_transition(to_state):
            logger.warning(
                f"Invalid transition: {self._state.name} -> {to_state.name}"
            )
            return False

        old_state = self._state
        self._state = to_state

        for key, value in context_updates.items():
            if hasattr(self._context, key):
                setattr(self._context, key, value)

        logger.debug(f"State transition: {old_state.name} -> {to_state.name}")

        for listener in self._listeners:
            try:
                listener(old_state, to_state, self._context)
            except Exception as e:
                logger.error(f"Error in state listener: {e}")

        return True

    def add_listener(
        self,
        callback: Callable[[WheelPhase, WheelPhase, SpinContext], None]
    ) -> None:
        """Add a phase change listener."""
        self._listeners.append(callback)

    def remove_listener(
        self,
        callback: Callable[[WheelPhase, WheelPhase, SpinContext], None]
    ) -> None:
        """Remove a phase change listener."""
        if callback in self._listeners:
            self._listeners.remove(callback)

    def snapshot(self) -> WheelState:
        """Freeze the current phase and context."""
        ctx = self._context
        return WheelState(
            phase=self._state,
            rotation=ctx.rotation,
            elapsed=ctx.elapsed,
            total_duration=ctx.total_duration,
            initial_velocity=ctx.initial_velocity,
        )
