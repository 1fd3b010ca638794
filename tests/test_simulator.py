import random

import pygame
import pytest

from ruleta.animation.celebration import default_burst
from ruleta.config.settings import Settings, SpinSettings
from ruleta.core.events import EventType, button_press_event, tick_event
from ruleta.simulator.window import SimulatorWindow, WindowConfig


@pytest.fixture
def window(tmp_path, prizes):
    settings = Settings(
        _env_file=None,
        debug=True,
        screenshot_path=tmp_path / "shots",
        spin=SpinSettings(duration_min_ms=300, duration_max_ms=400),
    )
    window = SimulatorWindow(prizes, settings, rng=random.Random(5))
    window._init_pygame()
    yield window
    window._cleanup()


def test_config_from_settings():
    settings = Settings(_env_file=None)
    config = WindowConfig.from_settings(settings)
    assert (config.width, config.height) == (settings.display.width, settings.display.height)
    assert config.canvas_size == settings.wheel.canvas_size


def test_wheel_fits_window(window):
    wheel = window._layout["wheel"]
    assert wheel.width == wheel.height
    assert wheel.bottom <= window.config.height
    assert window.get_wheel_surface().width == wheel.width


def test_button_press_spins_and_ticks_finish_it(window):
    window.event_bus.emit(button_press_event("keyboard"))
    assert window.controller.is_spinning

    frames = 0
    while window.controller.is_spinning and frames < 500:
        window.event_bus.emit(tick_event(16.0, frames))
        frames += 1

    assert not window.controller.is_spinning
    assert window.last_winner is not None
    assert window.particles.total_particles > 0
    assert window.event_bus.get_history(EventType.SPIN_COMPLETE)


def test_keys_toggle_panels(window):
    window._handle_keydown(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_l))
    window._handle_keydown(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_d))

    assert window._show_log
    assert not window._show_debug


def test_render_and_screenshot(window):
    window.celebrate(default_burst())
    window._show_log = True
    window._render()

    path = window._capture_screenshot()
    assert path is not None and path.exists()


def test_reload_keeps_wheel_when_labels_invalid(window):
    window.settings.labels = ["Solo"]
    before = window.controller.prize_set

    window._reload_labels()
    assert window.controller.prize_set is before

    window.settings.labels = ["Uno", "Dos"]
    window._reload_labels()
    assert window.controller.prize_set.texts == ["Uno", "Dos"]
