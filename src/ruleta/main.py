"""
Main entry point for the Ruleta wheel.

Reads the environment and launches either the pygame simulator or a
headless run that spins against a recording surface.
"""

import asyncio
import logging
import sys
from typing import List, Optional

from ruleta.animation.celebration import BurstConfig, default_burst, describe_burst
from ruleta.config.settings import Settings, get_settings
from ruleta.core.errors import InvalidConfiguration
from ruleta.core.events import EventBus
from ruleta.graphics.surface import RecordingSurface
from ruleta.wheel.controller import SpinController
from ruleta.wheel.prizes import Prize, PrizeSet

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


def log_burst(config: BurstConfig) -> None:
    """Headless celebration: describe the confetti instead of drawing it."""
    for line in describe_burst(config):
        logger.info(line)


async def run_simulator(settings: Settings) -> None:
    """Run the pygame simulator."""
    from ruleta.simulator.window import SimulatorWindow

    prizes = PrizeSet.from_labels(settings.load_labels())
    window = SimulatorWindow(prizes, settings, event_bus=EventBus())
    await window.run()


async def run_headless(
    settings: Settings,
    interval_ms: Optional[float] = None,
) -> List[Prize]:
    """Spin the wheel without a display.

    Args:
        settings: Application settings
        interval_ms: Real time between frames; defaults to the spin tick

    Returns:
        The winner of each spin, in order
    """
    prizes = PrizeSet.from_labels(settings.load_labels())
    surface = RecordingSurface(settings.wheel.canvas_size, settings.wheel.canvas_size)
    winners: List[Prize] = []

    controller = SpinController(
        prizes,
        surface_provider=lambda: surface,
        celebrate=log_burst,
        on_complete=winners.append,
        event_bus=EventBus(),
        settings=settings.spin,
        burst=default_burst(settings.wheel.celebration_particles),
    )
    controller.draw()

    interval = settings.spin.tick_ms if interval_ms is None else interval_ms
    for n in range(settings.spins):
        controller.spin()
        frames = await controller.scheduler.run(interval)
        logger.info(
            f"Spin {n + 1}/{settings.spins}: {winners[-1].text!r} "
            f"after {frames} frames ({surface.frames} drawn in total)"
        )

    return winners


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger.info("Ruleta starting...")

    try:
        if settings.is_simulator:
            logger.info("Running in simulator mode")
            asyncio.run(run_simulator(settings))
        elif settings.is_headless:
            logger.info("Running in headless mode")
            asyncio.run(run_headless(settings))

    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except InvalidConfiguration as e:
        logger.error(f"Invalid wheel configuration: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("Ruleta stopped")


if __name__ == "__main__":
    main()
