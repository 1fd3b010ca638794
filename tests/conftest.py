import os
import random

# No window or audio device in tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from ruleta.config.settings import SpinSettings
from ruleta.core.scheduler import FrameScheduler
from ruleta.graphics.surface import RecordingSurface
from ruleta.wheel.controller import SpinController
from ruleta.wheel.prizes import PrizeSet


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def surface():
    return RecordingSurface(480, 480)


@pytest.fixture
def prizes():
    return PrizeSet.from_labels(["10% OFF", "Nada", "2x1", "Sorpresa", "50% OFF", "Intenta", "Envío Gratis", "VIP"])


@pytest.fixture
def two_prizes():
    return PrizeSet.from_labels(["A", "B"])


@pytest.fixture
def spin_settings():
    """Short spins so a full run takes a few dozen frames."""
    return SpinSettings(duration_min_ms=600, duration_max_ms=900)


@pytest.fixture
def scheduler():
    return FrameScheduler(30.0)


@pytest.fixture
def make_controller(prizes, surface, scheduler, spin_settings, rng):
    def factory(**overrides):
        kwargs = dict(
            surface_provider=lambda: surface,
            scheduler=scheduler,
            settings=spin_settings,
            rng=rng,
        )
        kwargs.update(overrides)
        return SpinController(kwargs.pop("prizes", prizes), **kwargs)

    return factory


def run_until_idle(scheduler: FrameScheduler, limit: int = 10_000) -> int:
    """Advance frames until nothing is scheduled."""
    frames = 0
    while scheduler.pending:
        scheduler.advance(30.0)
        frames += 1
        assert frames < limit, "spin never finished"
    return frames


@pytest.fixture
def drain():
    return run_until_idle
