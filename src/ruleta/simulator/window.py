"""
Desktop simulator window using pygame.

Shows the wheel next to a side panel with the options, the spin button
state and the last winner. Confetti is drawn over the whole window.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence
import random

import numpy as np
import pygame

from ruleta.animation.celebration import BurstConfig, default_burst
from ruleta.animation.particles import ConfettiCelebration, ParticleSystem
from ruleta.config.settings import Settings
from ruleta.core.errors import InvalidConfiguration
from ruleta.core.events import Event, EventBus, EventType, button_press_event, tick_event
from ruleta.graphics.pygame_surface import PygameSurface
from ruleta.wheel.controller import SpinController
from ruleta.wheel.prizes import Prize, PrizeSet

logger = logging.getLogger(__name__)

SPIN_LABEL = "¡GIRAR!"
SPINNING_LABEL = "Girando..."

# Most scheduler frames run per rendered frame when catching up
MAX_CATCH_UP_FRAMES = 4


@dataclass
class WindowConfig:
    """Simulator window configuration."""
    width: int = 1100
    height: int = 720
    title: str = "Ruleta"
    fullscreen: bool = False
    fps: int = 60
    canvas_size: int = 640
    font_name: Optional[str] = None

    # Colors
    bg_color: tuple[int, int, int] = (17, 17, 27)
    panel_color: tuple[int, int, int] = (34, 34, 48)
    text_color: tuple[int, int, int] = (220, 220, 235)
    accent_color: tuple[int, int, int] = (255, 215, 0)
    button_color: tuple[int, int, int] = (255, 0, 85)
    button_busy_color: tuple[int, int, int] = (80, 80, 100)

    @classmethod
    def from_settings(cls, settings: Settings) -> "WindowConfig":
        return cls(
            width=settings.display.width,
            height=settings.display.height,
            title=settings.display.title,
            fullscreen=settings.display.fullscreen,
            fps=settings.display.fps,
            canvas_size=settings.wheel.canvas_size,
            font_name=settings.wheel.font_name,
        )


class SimulatorWindow:
    """
    Main simulator window.

    Keyboard Mapping:
        SPACE / RETURN: Spin the wheel
        R: Reload the options from settings or the labels file
        D: Toggle debug overlay
        L: Toggle log viewer
        S: Capture screenshot
        ESC / Q: Exit simulator
    """

    def __init__(
        self,
        prizes: Sequence[Prize],
        settings: Settings,
        event_bus: Optional[EventBus] = None,
        config: Optional[WindowConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings
        self.config = config or WindowConfig.from_settings(settings)
        self.event_bus = event_bus or EventBus()

        # Pygame setup
        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._running = False
        self._frame_count = 0
        self._show_debug = settings.debug
        self._tick_accumulator = 0.0

        self._wheel_surface: Optional[PygameSurface] = None
        self.particles = ParticleSystem()
        self._confetti: Optional[ConfettiCelebration] = None

        self.controller = SpinController(
            prizes,
            surface_provider=self.get_wheel_surface,
            celebrate=self.celebrate,
            event_bus=self.event_bus,
            settings=settings.spin,
            rng=rng,
            burst=default_burst(settings.wheel.celebration_particles),
        )
        self.last_winner: Optional[Prize] = None

        # UI layout (calculated on init)
        self._layout: dict[str, pygame.Rect] = {}

        # Fonts
        self._font: Optional[pygame.font.Font] = None
        self._small_font: Optional[pygame.font.Font] = None
        self._button_font: Optional[pygame.font.Font] = None

        # Log viewer
        self._show_log = False
        self._log_buffer: List[str] = []
        self._max_log_lines = 20
        self._log_handler: Optional[logging.Handler] = None

        self.event_bus.subscribe(EventType.BUTTON_PRESS, self._on_button_press)
        self.event_bus.subscribe(EventType.TICK, self._on_tick)
        self.event_bus.subscribe(EventType.SPIN_COMPLETE, self._on_spin_complete)

        self._setup_log_capture()

        logger.info("SimulatorWindow created")

    def _setup_log_capture(self) -> None:
        """Setup log capturing for the log viewer."""
        class SimulatorLogHandler(logging.Handler):
            def __init__(self, window: 'SimulatorWindow'):
                super().__init__()
                self.window = window

            def emit(self, record):
                msg = self.format(record)
                self.window._log_buffer.append(msg)
                # Keep buffer size limited
                if len(self.window._log_buffer) > self.window._max_log_lines * 2:
                    self.window._log_buffer = self.window._log_buffer[-self.window._max_log_lines:]

        handler = SimulatorLogHandler(self)
        handler.setFormatter(logging.Formatter('%(levelname).1s %(name)s: %(message)s'))
        logging.getLogger().addHandler(handler)
        self._log_handler = handler

    # --- Collaborators handed to the controller ---

    def get_wheel_surface(self) -> Optional[PygameSurface]:
        """Wheel surface, or None before pygame is up."""
        return self._wheel_surface

    def celebrate(self, config: BurstConfig) -> None:
        """Fire confetti over the window."""
        if self._confetti is None:
            logger.debug("Celebration skipped, window not initialized")
            return
        self._confetti(config)

    # --- Setup ---

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.fullscreen:
            flags |= pygame.FULLSCREEN

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._font = pygame.font.SysFont(self.config.font_name, 20)
        self._small_font = pygame.font.SysFont(self.config.font_name, 14)
        self._button_font = pygame.font.SysFont(self.config.font_name, 32, bold=True)

        self._calculate_layout()

        wheel_rect = self._layout["wheel"]
        self._wheel_surface = PygameSurface(wheel_rect.width, wheel_rect.height, self.config.font_name)
        self._confetti = ConfettiCelebration(self.particles, self.config.width, self.config.height)

        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _calculate_layout(self) -> None:
        """Calculate positions for all UI elements."""
        w, h = self.config.width, self.config.height
        panel_w = 320
        margin = 30

        size = min(self.config.canvas_size, h - 2 * margin - 20, w - panel_w - 3 * margin)
        size = max(size, 64)
        wheel_x = margin
        wheel_y = (h - size) // 2 + 10

        panel_x = wheel_x + size + margin
        panel_rect = pygame.Rect(panel_x, 50, w - panel_x - margin, h - 80)

        self._layout = {
            "wheel": pygame.Rect(wheel_x, wheel_y, size, size),
            "panel": panel_rect,
            "button": pygame.Rect(panel_rect.x + 20, panel_rect.bottom - 90, panel_rect.width - 40, 70),
        }

    # --- Input ---

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self._layout.get("button") and self._layout["button"].collidepoint(event.pos):
                    self.event_bus.emit(button_press_event("mouse"))

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False
        elif key == pygame.K_d:
            self._show_debug = not self._show_debug
        elif key == pygame.K_l:
            self._show_log = not self._show_log
        elif key == pygame.K_s:
            self._capture_screenshot()
        elif key == pygame.K_r:
            self._reload_labels()
        elif key in (pygame.K_SPACE, pygame.K_RETURN):
            self.event_bus.emit(button_press_event("keyboard"))

    def _on_button_press(self, event: Event) -> None:
        try:
            self.controller.spin()
        except InvalidConfiguration as e:
            logger.warning(f"Spin refused: {e}")

    def _reload_labels(self) -> None:
        """Rebuild the wheel from the configured labels."""
        try:
            prizes = PrizeSet.from_labels(self.settings.load_labels())
        except (InvalidConfiguration, OSError) as e:
            logger.warning(f"Options not reloaded: {e}")
            return

        self.controller.set_prize_set(prizes)

    # --- Frame loop ---

    def _on_tick(self, event: Event) -> None:
        """Advance the spin and the confetti by one rendered frame."""
        delta_ms = event.data.get("delta_ms", 0.0)
        scheduler = self.controller.scheduler

        if scheduler.fixed_step_ms is None:
            scheduler.advance(delta_ms)
        else:
            # Keep the nominal tick cadence regardless of the render rate
            self._tick_accumulator += delta_ms
            frames = 0
            while self._tick_accumulator >= scheduler.fixed_step_ms and frames < MAX_CATCH_UP_FRAMES:
                self._tick_accumulator -= scheduler.fixed_step_ms
                scheduler.advance(scheduler.fixed_step_ms)
                frames += 1
            if frames == MAX_CATCH_UP_FRAMES:
                self._tick_accumulator = 0.0

        self.particles.update(delta_ms)

    def _on_spin_complete(self, event: Event) -> None:
        self.last_winner = event.data.get("prize")

    # --- Rendering ---

    def _render(self) -> None:
        """Render all UI elements."""
        if not self._screen:
            return

        self._screen.fill(self.config.bg_color)

        self._render_wheel()
        self._render_side_panel()
        self._render_particles()
        if self._show_debug:
            self._render_debug_panel()
        if self._show_log:
            self._render_log_panel()
        self._render_title_bar()

        pygame.display.flip()

    def _render_wheel(self) -> None:
        if self._wheel_surface is None:
            return
        self._screen.blit(self._wheel_surface.surface, self._layout["wheel"].topleft)

    def _render_side_panel(self) -> None:
        """Options list, spin button and last winner."""
        rect = self._layout["panel"]
        pygame.draw.rect(self._screen, self.config.panel_color, rect, border_radius=8)

        if not self._font:
            return

        title = self._font.render("Opciones", True, self.config.accent_color)
        self._screen.blit(title, (rect.x + 20, rect.y + 15))

        y = rect.y + 50
        bottom = self._layout["button"].y - 70
        prizes = self.controller.prize_set
        for i, prize in enumerate(prizes):
            if y > bottom:
                more = self._small_font.render(f"... y {len(prizes) - i} más", True, self.config.text_color)
                self._screen.blit(more, (rect.x + 20, y))
                break
            pygame.draw.rect(self._screen, prize.color, (rect.x + 20, y + 3, 14, 14), border_radius=3)
            label = self._small_font.render(prize.text, True, self.config.text_color)
            self._screen.blit(label, (rect.x + 44, y + 2))
            y += 22

        if self.last_winner is not None:
            winner = self._font.render(f"Ganador: {self.last_winner.text}", True, self.config.accent_color)
            self._screen.blit(winner, (rect.x + 20, self._layout["button"].y - 40))

        self._render_button()

    def _render_button(self) -> None:
        rect = self._layout["button"]
        spinning = self.controller.is_spinning
        color = self.config.button_busy_color if spinning else self.config.button_color
        pygame.draw.rect(self._screen, color, rect, border_radius=12)

        text = SPINNING_LABEL if spinning else SPIN_LABEL
        surface = self._button_font.render(text, True, (255, 255, 255))
        self._screen.blit(surface, surface.get_rect(center=rect.center))

    def _render_particles(self) -> None:
        """Blend confetti straight into the screen pixels."""
        if not self.particles.emitters:
            return
        if self._screen.get_bytesize() < 3:
            logger.debug("Confetti needs a 24 or 32 bit display surface")
            return
        pixels = pygame.surfarray.pixels3d(self._screen)
        try:
            # surfarray is x-major; particles expect rows first
            self.particles.render(np.transpose(pixels, (1, 0, 2)))
        finally:
            del pixels

    def _render_debug_panel(self) -> None:
        """Render the debug overlay."""
        if not self._small_font:
            return

        state = self.controller.state
        lines = [
            f"FPS: {self._clock.get_fps():.1f}" if self._clock else "FPS: --",
            f"Frame: {self._frame_count}",
            f"Phase: {state.phase.name}",
            f"Rotation: {state.rotation:.3f} rad",
            f"Elapsed: {state.elapsed:.0f}/{state.total_duration:.0f} ms",
            f"Spins: {self.controller.spin_count}",
            f"Particles: {self.particles.total_particles}",
            "",
            "SPACE spin  R reload",
            "D debug  L log  S shot  Q quit",
        ]

        rect = pygame.Rect(10, self.config.height - 18 * len(lines) - 20, 280, 18 * len(lines) + 10)
        surf = pygame.Surface(rect.size, pygame.SRCALPHA)
        surf.fill((20, 25, 35, 200))
        self._screen.blit(surf, rect.topleft)

        y = rect.y + 5
        for line in lines:
            text_surface = self._small_font.render(line, True, self.config.text_color)
            self._screen.blit(text_surface, (rect.x + 10, y))
            y += 18

    def _render_log_panel(self) -> None:
        """Render the log viewer panel."""
        if not self._small_font:
            return

        rect = pygame.Rect(10, 50, 420, self.config.height - 150)

        surf = pygame.Surface((rect.width, rect.height), pygame.SRCALPHA)
        surf.fill((20, 25, 35, 230))
        self._screen.blit(surf, rect.topleft)
        pygame.draw.rect(self._screen, (60, 80, 100), rect, 1, border_radius=5)

        title_surf = self._font.render("LOG", True, (100, 200, 255))
        self._screen.blit(title_surf, (rect.x + 10, rect.y + 5))

        y = rect.y + 32
        for line in self._log_buffer[-self._max_log_lines:]:
            # Color code by level
            if line.startswith('E'):
                color = (255, 100, 100)
            elif line.startswith('W'):
                color = (255, 200, 100)
            elif line.startswith('I'):
                color = (150, 200, 150)
            else:
                color = (150, 150, 170)

            display_line = line[:57] + "..." if len(line) > 60 else line
            text_surf = self._small_font.render(display_line, True, color)
            self._screen.blit(text_surf, (rect.x + 8, y))
            y += 16

            if y > rect.bottom - 10:
                break

    def _render_title_bar(self) -> None:
        if not self._font:
            return

        title = f"{self.config.title} | {self.controller.state.phase.name}"
        text_surface = self._font.render(title, True, self.config.accent_color)
        self._screen.blit(text_surface, (20, 15))

    def _capture_screenshot(self) -> Optional[Path]:
        """Capture and save a screenshot."""
        if not self._screen:
            return None

        directory = self.settings.screenshot_path
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"ruleta_{self._frame_count}.png"
        pygame.image.save(self._screen, str(path))
        logger.info(f"Screenshot saved: {path}")
        return path

    async def run(self) -> None:
        """Main simulator loop."""
        self._init_pygame()
        self._running = True
        self.controller.draw()

        logger.info("Simulator started")

        try:
            while self._running:
                self._handle_events()

                if self._clock:
                    self.event_bus.emit(tick_event(self._clock.get_time(), self._frame_count))

                self._render()

                if self._clock:
                    self._clock.tick(self.config.fps)

                self._frame_count += 1

                # Yield to other tasks
                await asyncio.sleep(0)
        finally:
            self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        if self._log_handler is not None:
            logging.getLogger().removeHandler(self._log_handler)
            self._log_handler = None
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="simulator"))
        pygame.quit()
        logger.info("Simulator stopped")

    def stop(self) -> None:
        """Stop the simulator."""
        self._running = False
