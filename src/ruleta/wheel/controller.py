"""Spin controller - the wheel's Idle/Spinning state machine.

Flow:
1. spin(): sample a starting speed and a duration, enter SPINNING and
   schedule the first tick
2. tick(delta): advance elapsed time, ease the speed down, turn the wheel
   and redraw, then schedule the next tick
3. Once elapsed reaches the planned duration: back to IDLE, resolve the
   winner, fire the celebration, publish SPIN_COMPLETE and call on_complete
"""

from typing import Callable, Optional, Sequence, TYPE_CHECKING
import logging
import math
import random

from ruleta.animation.celebration import BurstConfig, Celebration, default_burst
from ruleta.animation.easing import ease
from ruleta.core.errors import InvalidConfiguration, RenderSurfaceUnavailable
from ruleta.core.events import Event, EventBus, EventType
from ruleta.core.scheduler import FrameScheduler
from ruleta.core.state import StateMachine, WheelPhase, WheelState
from ruleta.graphics.surface import DrawingSurface
from ruleta.wheel.prizes import MIN_PRIZES, Prize
from ruleta.wheel.renderer import WheelRenderer
from ruleta.wheel.resolver import resolve_winner

if TYPE_CHECKING:
    from ruleta.config.settings import SpinSettings

logger = logging.getLogger(__name__)

SurfaceProvider = Callable[[], Optional[DrawingSurface]]
CompletionHandler = Callable[[Prize], None]


class SpinController:
    """Owns the wheel rotation and drives one spin at a time.

    The rotation keeps accumulating across spins so the wheel never snaps
    back; it only changes while a spin is running and never decreases.

    Args:
        prizes: Entries on the wheel, at least two
        renderer: Draws each frame (a default WheelRenderer if omitted)
        surface_provider: Returns the surface for the current frame. May
            return None or raise RenderSurfaceUnavailable to skip a draw.
        scheduler: Frame scheduler used to queue ticks
        celebrate: Called with a burst description when a spin completes
        on_complete: Called with the winning prize when a spin completes
        event_bus: Optional bus for SPIN_STARTED / SPIN_COMPLETE events
        settings: Spin timing settings
        rng: Random source for speed and duration sampling
    """

    def __init__(
        self,
        prizes: Sequence[Prize],
        renderer: Optional[WheelRenderer] = None,
        surface_provider: Optional[SurfaceProvider] = None,
        scheduler: Optional[FrameScheduler] = None,
        celebrate: Optional[Celebration] = None,
        on_complete: Optional[CompletionHandler] = None,
        event_bus: Optional[EventBus] = None,
        settings: Optional["SpinSettings"] = None,
        rng: Optional[random.Random] = None,
        burst: Optional[BurstConfig] = None,
    ):
        if settings is None:
            from ruleta.config.settings import SpinSettings
            settings = SpinSettings()

        self._prizes = prizes
        self._renderer = renderer or WheelRenderer()
        self._surface_provider = surface_provider
        self._settings = settings
        self._scheduler = scheduler or FrameScheduler(settings.scheduler_step_ms)
        self._celebrate = celebrate
        self._on_complete = on_complete
        self._event_bus = event_bus
        self._rng = rng or random.Random()
        self._burst = burst or default_burst()

        self._machine = StateMachine()
        # Prizes the running spin was started with
        self._spin_prizes: Sequence[Prize] = prizes
        self._spin_count = 0

    # --- Public surface ---

    @property
    def is_spinning(self) -> bool:
        return self._machine.state == WheelPhase.SPINNING

    @property
    def rotation(self) -> float:
        """Current wheel rotation in radians."""
        return self._machine.context.rotation

    @property
    def state(self) -> WheelState:
        """Frozen snapshot of the wheel state."""
        return self._machine.snapshot()

    @property
    def prize_set(self) -> Sequence[Prize]:
        return self._prizes

    @property
    def scheduler(self) -> FrameScheduler:
        return self._scheduler

    @property
    def spin_count(self) -> int:
        """Completed spins since construction."""
        return self._spin_count

    def set_on_complete(self, callback: Optional[CompletionHandler]) -> None:
        """Set callback for when a spin completes."""
        self._on_complete = callback

    def set_prize_set(self, prizes: Sequence[Prize]) -> bool:
        """Swap in a rebuilt prize set.

        Refused while a spin is running; the live wheel is never edited.

        Returns:
            True if the new prizes were accepted
        """
        if self.is_spinning:
            logger.warning("Prize change refused while the wheel is spinning")
            return False

        self._prizes = prizes
        logger.info(f"Wheel now has {len(prizes)} options")
        self._emit(EventType.PRIZES_CHANGED, count=len(prizes))
        self.draw()
        return True

    def spin(self) -> None:
        """Start a spin.

        Ignored while a spin is already running: no new timer and no
        resampling.

        Raises:
            InvalidConfiguration: If the wheel has fewer than two entries
        """
        if self.is_spinning:
            logger.debug("Spin request ignored, wheel already spinning")
            return

        if len(self._prizes) < MIN_PRIZES:
            self._emit(EventType.SPIN_REFUSED, count=len(self._prizes))
            raise InvalidConfiguration(
                f"Cannot spin a wheel with {len(self._prizes)} option(s)"
            )

        cfg = self._settings
        initial_velocity = self._rng.uniform(cfg.velocity_min, cfg.velocity_max)
        total_duration = self._rng.uniform(cfg.duration_min_ms, cfg.duration_max_ms)

        self._wrap_rotation()
        self._spin_prizes = self._prizes
        self._machine.transition(
            WheelPhase.SPINNING,
            elapsed=0.0,
            total_duration=total_duration,
            initial_velocity=initial_velocity,
        )
        self._scheduler.schedule(self.tick)

        logger.info(
            f"Wheel spinning: v0={initial_velocity:.2f} deg/tick, "
            f"duration={total_duration:.0f}ms"
        )
        self._emit(
            EventType.SPIN_STARTED,
            initial_velocity=initial_velocity,
            total_duration=total_duration,
        )

    def draw(self) -> bool:
        """Render the wheel at its current rotation.

        Returns:
            True if a frame was drawn, False if the draw was skipped or failed
        """
        if self._surface_provider is None:
            return False

        prizes = self._spin_prizes if self.is_spinning else self._prizes
        try:
            surface = self._surface_provider()
            if surface is None:
                logger.debug("Draw skipped: no surface this frame")
                return False
            self._renderer.render(surface, prizes, self.rotation)
        except RenderSurfaceUnavailable as e:
            logger.debug(f"Draw skipped: {e}")
            return False
        except Exception as e:
            logger.error(f"Error drawing wheel: {e}")
            return False

        return True

    # --- Tick loop ---

    def tick(self, delta_ms: float) -> None:
        """Advance a running spin by one frame."""
        if not self.is_spinning:
            return

        ctx = self._machine.context
        ctx.elapsed += delta_ms

        if ctx.elapsed >= ctx.total_duration:
            self._finish()
            return

        ctx.rotation += self.velocity_at(ctx.elapsed) * math.pi / 180
        # Queue the next tick before drawing so a bad frame cannot stall the spin
        self._scheduler.schedule(self.tick)
        self.draw()

    def velocity_at(self, elapsed: float) -> float:
        """Angular speed in degrees per tick at a point of the current spin."""
        ctx = self._machine.context
        v0 = ctx.initial_velocity
        velocity = v0 - ease(elapsed, 0.0, v0, ctx.total_duration, self._settings.easing)
        return max(0.0, velocity)

    def _finish(self) -> None:
        """Stop the wheel and report the winner."""
        prizes = self._spin_prizes
        self._machine.transition(WheelPhase.IDLE)
        self._spin_count += 1

        index = resolve_winner(self.rotation, len(prizes))
        winner = prizes[index]
        logger.info(f"Spin complete: #{index} {winner.text!r}")

        if self._celebrate is not None:
            try:
                self._celebrate(self._burst)
            except Exception as e:
                logger.error(f"Error in celebration: {e}")

        # Published before the callback, which may already start the next spin
        self._emit(EventType.SPIN_COMPLETE, prize=winner, index=index)

        if self._on_complete is not None:
            try:
                self._on_complete(winner)
            except Exception as e:
                logger.error(f"Error in completion handler: {e}")

    def _wrap_rotation(self) -> None:
        """Range-reduce a very large rotation. Only between spins."""
        ctx = self._machine.context
        if ctx.rotation > self._settings.rotation_wrap_threshold:
            wrapped = math.fmod(ctx.rotation, 2 * math.pi)
            logger.debug(f"Rotation wrapped: {ctx.rotation:.1f} -> {wrapped:.4f}")
            ctx.rotation = wrapped

    def _emit(self, event_type: EventType, **data) -> None:
        if self._event_bus is not None:
            self._event_bus.emit(Event(event_type, data=data, source="wheel"))
