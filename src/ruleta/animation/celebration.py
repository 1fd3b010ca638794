"""Declarative confetti bursts fired when a spin completes.

The spin engine never simulates particles. It hands a BurstConfig to
whatever celebration callable the host wires in; the simulator realises it
with the particle system, the headless runner just logs it.
"""

from dataclasses import dataclass, field
from typing import Callable, List, Tuple
import math


@dataclass(frozen=True)
class SubBurst:
    """One weighted shot within a burst."""

    particle_ratio: float     # Share of the burst's total particle count
    spread: float = 45.0      # Cone width in degrees
    start_velocity: float = 45.0
    decay: float = 0.9        # Velocity kept per frame
    scalar: float = 1.0       # Particle size multiplier


@dataclass(frozen=True)
class BurstConfig:
    """Full celebration description."""

    particle_count: int = 200
    origin: Tuple[float, float] = (0.5, 0.7)  # Normalized x, y on the surface
    bursts: Tuple[SubBurst, ...] = field(default_factory=tuple)

    def count_for(self, sub: SubBurst) -> int:
        """Particles emitted by a sub-burst."""
        return math.floor(self.particle_count * sub.particle_ratio)

    @property
    def total_emitted(self) -> int:
        return sum(self.count_for(sub) for sub in self.bursts)


Celebration = Callable[[BurstConfig], None]


def default_burst(particle_count: int = 200) -> BurstConfig:
    """The layered confetti shower shown for every winner."""
    return BurstConfig(
        particle_count=particle_count,
        origin=(0.5, 0.7),
        bursts=(
            SubBurst(0.25, spread=26, start_velocity=55),
            SubBurst(0.2, spread=60),
            SubBurst(0.35, spread=100, decay=0.91, scalar=0.8),
            SubBurst(0.1, spread=120, start_velocity=25, decay=0.92, scalar=1.2),
            SubBurst(0.1, spread=120, start_velocity=45),
        ),
    )


def describe_burst(config: BurstConfig) -> List[str]:
    """Human-readable summary lines, used by the headless runner's log."""
    lines = [f"burst of {config.total_emitted} particles at {config.origin}"]
    for sub in config.bursts:
        lines.append(
            f"  {config.count_for(sub):>3} @ spread={sub.spread:g} "
            f"v={sub.start_velocity:g} decay={sub.decay:g} scale={sub.scalar:g}"
        )
    return lines
