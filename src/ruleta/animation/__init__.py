"""Animation module for the wheel."""

from ruleta.animation.easing import Easing, ease, get_easing, interpolate, interpolate_color
from ruleta.animation.celebration import BurstConfig, SubBurst, default_burst, describe_burst
from ruleta.animation.particles import (
    Particle,
    ParticleEmitter,
    ParticleSystem,
    EmitterConfig,
    ConfettiCelebration,
)

__all__ = [
    # Easing
    "Easing",
    "ease",
    "get_easing",
    "interpolate",
    "interpolate_color",
    # Celebration
    "BurstConfig",
    "SubBurst",
    "default_burst",
    "describe_burst",
    # Particles
    "Particle",
    "ParticleEmitter",
    "ParticleSystem",
    "EmitterConfig",
    "ConfettiCelebration",
]
