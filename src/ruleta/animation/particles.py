"""Particle system for the simulator's confetti."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
import itertools
import logging
import math
import random
import numpy as np
from numpy.typing import NDArray

from ruleta.animation.celebration import BurstConfig, SubBurst
from ruleta.animation.easing import interpolate_color

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

CONFETTI_COLORS: Tuple[RGB, ...] = (
    (38, 204, 255),
    (162, 90, 253),
    (255, 94, 126),
    (136, 255, 90),
    (252, 255, 66),
    (255, 166, 45),
    (255, 54, 255),
)

# Burst units to pixels; tuned for a 60fps frame
FRAME_MS = 1000.0 / 60
SPEED_SCALE = 14.0          # px/s per unit of start velocity
CONFETTI_GRAVITY = 600.0    # px/s^2
CONFETTI_SIZE = 8.0         # px at scalar 1.0


@dataclass
class Particle:
    """A single particle with physics properties."""

    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    ay: float = 0.0  # gravity
    size: float = 1.0
    size_end: float = 0.0
    color: RGB = (255, 255, 255)
    color_end: Optional[RGB] = None
    alpha: float = 1.0
    alpha_end: float = 0.0
    lifetime: float = 1000.0  # milliseconds
    age: float = 0.0
    active: bool = True

    @property
    def progress(self) -> float:
        """Get normalized lifetime progress (0.0 to 1.0)."""
        if self.lifetime <= 0:
            return 1.0
        return min(1.0, self.age / self.lifetime)

    @property
    def is_dead(self) -> bool:
        return self.age >= self.lifetime

    def update(self, delta_ms: float) -> None:
        """Update particle physics."""
        if not self.active:
            return

        self.vy += self.ay * delta_ms / 1000
        self.x += self.vx * delta_ms / 1000
        self.y += self.vy * delta_ms / 1000

        self.age += delta_ms
        if self.is_dead:
            self.active = False

    def get_current_size(self) -> float:
        t = self.progress
        return self.size + (self.size_end - self.size) * t

    def get_current_alpha(self) -> float:
        t = self.progress
        return self.alpha + (self.alpha_end - self.alpha) * t

    def get_current_color(self) -> RGB:
        if self.color_end is None:
            return self.color
        return interpolate_color(self.color, self.color_end, self.progress)


@dataclass
class EmitterConfig:
    """Configuration for a one-shot particle emitter."""

    # Position
    x: float = 0.0
    y: float = 0.0

    burst: int = 10
    max_particles: int = 200

    # Velocity; angles in degrees, screen frame (270 is straight up)
    speed_min: float = 50.0
    speed_max: float = 100.0
    angle_min: float = 0.0
    angle_max: float = 360.0

    # Physics
    gravity: float = 0.0   # Pixels per second squared
    friction: float = 0.0  # Velocity decay per second

    # Appearance
    size_min: float = 2.0
    size_max: float = 4.0
    size_end_min: float = 0.0
    size_end_max: float = 0.0
    colors: Sequence[RGB] = CONFETTI_COLORS
    alpha_start: float = 1.0
    alpha_end: float = 0.0

    # Lifetime
    lifetime_min: float = 500.0  # milliseconds
    lifetime_max: float = 1000.0


class ParticleEmitter:
    """Emits and manages particles."""

    def __init__(self, config: Optional[EmitterConfig] = None, rng: Optional[random.Random] = None):
        self.config = config or EmitterConfig()
        self.particles: List[Particle] = []
        self._rng = rng or random.Random()

    def emit(self, count: int = 1) -> None:
        """Emit a specified number of particles."""
        room = self.config.max_particles - len(self.particles)
        for _ in range(max(0, min(count, room))):
            self.particles.append(self._create_particle())

    def burst(self, count: Optional[int] = None) -> None:
        """Emit the configured burst."""
        self.emit(self.config.burst if count is None else count)

    def _create_particle(self) -> Particle:
        """Create a new particle with randomized properties."""
        cfg = self.config
        rng = self._rng

        angle_rad = math.radians(rng.uniform(cfg.angle_min, cfg.angle_max))
        speed = rng.uniform(cfg.speed_min, cfg.speed_max)

        return Particle(
            x=cfg.x,
            y=cfg.y,
            vx=math.cos(angle_rad) * speed,
            vy=math.sin(angle_rad) * speed,
            ay=cfg.gravity,
            size=rng.uniform(cfg.size_min, cfg.size_max),
            size_end=rng.uniform(cfg.size_end_min, cfg.size_end_max),
            color=rng.choice(list(cfg.colors)),
            alpha=cfg.alpha_start,
            alpha_end=cfg.alpha_end,
            lifetime=rng.uniform(cfg.lifetime_min, cfg.lifetime_max),
        )

    def update(self, delta_ms: float) -> None:
        """Update all particles."""
        friction_factor = max(0.0, 1.0 - self.config.friction * delta_ms / 1000)
        for particle in self.particles:
            if particle.active:
                particle.update(delta_ms)
                if self.config.friction > 0:
                    particle.vx *= friction_factor
                    particle.vy *= friction_factor

    def render(self, buffer: NDArray[np.uint8]) -> None:
        """Alpha-blend all particles into an (H, W, 3) buffer."""
        h, w = buffer.shape[:2]

        for particle in self.particles:
            if not particle.active:
                continue

            size = particle.get_current_size()
            alpha = particle.get_current_alpha()
            if alpha <= 0 or size <= 0:
                continue

            radius = max(1, int(size / 2))
            cx, cy = int(particle.x), int(particle.y)
            x0, x1 = max(0, cx - radius), min(w, cx + radius + 1)
            y0, y1 = max(0, cy - radius), min(h, cy + radius + 1)
            if x0 >= x1 or y0 >= y1:
                continue

            ys, xs = np.ogrid[y0:y1, x0:x1]
            mask = (xs - cx) ** 2 + (ys - cy) ** 2 <= radius * radius
            region = buffer[y0:y1, x0:x1]
            color = np.array(particle.get_current_color(), dtype=np.float64)
            blended = region[mask] * (1 - alpha) + color * alpha
            region[mask] = np.clip(blended, 0, 255).astype(np.uint8)

    def get_active_count(self) -> int:
        """Get the number of active particles."""
        return sum(1 for p in self.particles if p.active)

    def clear(self) -> None:
        """Remove all particles."""
        self.particles.clear()


class ParticleSystem:
    """Manages multiple particle emitters."""

    def __init__(self) -> None:
        self.emitters: Dict[str, ParticleEmitter] = {}

    def add_emitter(
        self,
        name: str,
        config: EmitterConfig,
        rng: Optional[random.Random] = None,
    ) -> ParticleEmitter:
        """Add a new emitter to the system."""
        emitter = ParticleEmitter(config, rng)
        self.emitters[name] = emitter
        return emitter

    def remove_emitter(self, name: str) -> bool:
        """Remove an emitter by name."""
        if name in self.emitters:
            del self.emitters[name]
            return True
        return False

    def update(self, delta_ms: float) -> None:
        """Update all emitters, dropping those whose particles are gone."""
        for emitter in self.emitters.values():
            emitter.update(delta_ms)

        finished = [name for name, e in self.emitters.items() if e.get_active_count() == 0]
        for name in finished:
            del self.emitters[name]

    def render(self, buffer: NDArray[np.uint8]) -> None:
        for emitter in self.emitters.values():
            emitter.render(buffer)

    def clear_all(self) -> None:
        self.emitters.clear()

    @property
    def total_particles(self) -> int:
        """Get total active particle count."""
        return sum(e.get_active_count() for e in self.emitters.values())


def confetti_config(sub: SubBurst, count: int, x: float, y: float) -> EmitterConfig:
    """Emitter settings for one sub-burst, fired upward from (x, y).

    Decay is a per-frame velocity multiplier; it becomes a per-second
    friction at 60fps.
    """
    half_spread = sub.spread / 2
    speed = sub.start_velocity * SPEED_SCALE
    size = CONFETTI_SIZE * sub.scalar
    return EmitterConfig(
        x=x, y=y,
        burst=count,
        max_particles=max(count, 1),
        speed_min=speed * 0.5, speed_max=speed,
        angle_min=270 - half_spread, angle_max=270 + half_spread,
        gravity=CONFETTI_GRAVITY,
        friction=(1 - sub.decay) * 1000 / FRAME_MS,
        size_min=size * 0.6, size_max=size,
        size_end_min=size * 0.6, size_end_max=size,
        alpha_start=1.0, alpha_end=0.0,
        lifetime_min=2500, lifetime_max=3500,
    )


class ConfettiCelebration:
    """Celebration that turns a BurstConfig into particle emitters.

    Args:
        system: Particle system to add emitters to
        width: Width of the area the burst origin is relative to
        height: Height of that area
        rng: Random source for particle sampling
    """

    def __init__(
        self,
        system: ParticleSystem,
        width: int,
        height: int,
        rng: Optional[random.Random] = None,
    ):
        self.system = system
        self.width = width
        self.height = height
        self._rng = rng or random.Random()
        self._counter = itertools.count()

    def __call__(self, config: BurstConfig) -> None:
        ox, oy = config.origin
        x, y = ox * self.width, oy * self.height
        shot = next(self._counter)

        for i, sub in enumerate(config.bursts):
            count = config.count_for(sub)
            if count <= 0:
                continue
            emitter = self.system.add_emitter(
                f"confetti-{shot}-{i}",
                confetti_config(sub, count, x, y),
                self._rng,
            )
            emitter.burst()

        logger.debug(f"Confetti: {config.total_emitted} particles at ({x:.0f}, {y:.0f})")
