"""Cooperative frame scheduler.

The host's "run this again soon" primitive. Callbacks scheduled during a
frame run on the next frame, never re-entrantly, so a spin of any length
keeps a flat call stack.
"""

from typing import Callable, List, Optional
import asyncio
import logging

logger = logging.getLogger(__name__)

FrameCallback = Callable[[float], None]


class FrameScheduler:
    """Runs queued callbacks once per frame.

    Args:
        fixed_step_ms: If set, every frame advances callbacks by this many
            milliseconds regardless of the wall-clock delta handed to
            advance(). None passes the real delta through.
    """

    def __init__(self, fixed_step_ms: Optional[float] = 30.0):
        self.fixed_step_ms = fixed_step_ms
        self._pending: List[FrameCallback] = []
        self._frame_count = 0

    @property
    def pending(self) -> bool:
        """True while any callback waits for the next frame."""
        return bool(self._pending)

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def schedule(self, callback: FrameCallback) -> None:
        """Queue a callback for the next frame."""
        self._pending.append(callback)

    def advance(self, delta_ms: float) -> int:
        """Run the callbacks queued before this call.

        Args:
            delta_ms: Wall-clock time since the previous frame

        Returns:
            Number of callbacks run
        """
        if not self._pending:
            return 0

        step = self.fixed_step_ms if self.fixed_step_ms is not None else delta_ms
        due, self._pending = self._pending, []
        self._frame_count += 1

        for callback in due:
            callback(step)

        return len(due)

    def clear(self) -> None:
        """Drop every pending callback."""
        self._pending.clear()

    async def run(self, interval_ms: float = 30.0) -> int:
        """Drive frames until nothing is pending.

        Each frame ends with an asyncio sleep, the only point where other
        tasks interleave.

        Returns:
            Number of frames run
        """
        loop = asyncio.get_running_loop()
        frames = 0
        last = loop.time()

        while self._pending:
            await asyncio.sleep(interval_ms / 1000)
            now = loop.time()
            self.advance((now - last) * 1000)
            last = now
            frames += 1

        logger.debug(f"Scheduler idle after {frames} frames")
        return frames
