import random

import numpy as np
import pytest

from ruleta.animation.celebration import BurstConfig, SubBurst, default_burst
from ruleta.animation.particles import (
    ConfettiCelebration,
    EmitterConfig,
    Particle,
    ParticleEmitter,
    ParticleSystem,
    confetti_config,
)


def test_particle_physics_and_expiry():
    particle = Particle(x=0, y=0, vx=100, vy=0, ay=10, lifetime=500)

    particle.update(250)
    assert particle.x == pytest.approx(25)
    assert particle.vy == pytest.approx(2.5)
    assert particle.active

    particle.update(300)
    assert not particle.active


def test_emitter_respects_max_particles():
    emitter = ParticleEmitter(EmitterConfig(burst=50, max_particles=20), random.Random(1))
    emitter.burst()
    assert emitter.get_active_count() == 20


def test_confetti_fires_upward():
    config = confetti_config(SubBurst(0.25, spread=26, start_velocity=55), 50, 100, 200)

    assert config.angle_min == pytest.approx(257)
    assert config.angle_max == pytest.approx(283)
    assert config.burst == 50

    emitter = ParticleEmitter(config, random.Random(3))
    emitter.burst()
    assert all(p.vy < 0 for p in emitter.particles)


def test_celebration_emits_burst_total():
    system = ParticleSystem()
    celebrate = ConfettiCelebration(system, 800, 600, random.Random(7))

    celebrate(default_burst())

    assert system.total_particles == 200
    assert len(system.emitters) == 5
    emitter = next(iter(system.emitters.values()))
    assert (emitter.config.x, emitter.config.y) == pytest.approx((400, 420))


def test_empty_sub_bursts_are_skipped():
    system = ParticleSystem()
    celebrate = ConfettiCelebration(system, 100, 100)
    celebrate(BurstConfig(particle_count=3, bursts=(SubBurst(0.1), SubBurst(1.0))))

    assert len(system.emitters) == 1
    assert system.total_particles == 3


def test_finished_emitters_are_dropped():
    system = ParticleSystem()
    ConfettiCelebration(system, 100, 100)(default_burst(20))

    for _ in range(300):
        system.update(16)

    assert system.total_particles == 0
    assert system.emitters == {}


def test_render_blends_into_buffer():
    buffer = np.zeros((50, 50, 3), dtype=np.uint8)
    emitter = ParticleEmitter(EmitterConfig(x=25, y=25, speed_min=0, speed_max=0,
                                            size_min=6, size_max=6, size_end_min=6, size_end_max=6,
                                            colors=((255, 0, 0),), alpha_start=1.0, alpha_end=1.0))
    emitter.burst(1)
    emitter.render(buffer)

    assert tuple(buffer[25, 25]) == (255, 0, 0)
    assert tuple(buffer[0, 0]) == (0, 0, 0)


def test_render_ignores_offscreen_particles():
    buffer = np.zeros((10, 10, 3), dtype=np.uint8)
    emitter = ParticleEmitter(EmitterConfig(x=-100, y=-100, speed_min=0, speed_max=0))
    emitter.burst(3)
    emitter.render(buffer)
    assert not buffer.any()
