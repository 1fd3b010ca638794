from ruleta.animation.celebration import BurstConfig, SubBurst, default_burst, describe_burst


def test_default_burst_shape():
    burst = default_burst()

    assert burst.particle_count == 200
    assert burst.origin == (0.5, 0.7)
    assert [b.particle_ratio for b in burst.bursts] == [0.25, 0.2, 0.35, 0.1, 0.1]
    assert [burst.count_for(b) for b in burst.bursts] == [50, 40, 70, 20, 20]
    assert burst.total_emitted == 200


def test_sub_burst_defaults():
    sub = SubBurst(0.2)
    assert (sub.spread, sub.start_velocity, sub.decay, sub.scalar) == (45.0, 45.0, 0.9, 1.0)


def test_counts_are_floored():
    burst = BurstConfig(particle_count=15, bursts=(SubBurst(0.25), SubBurst(0.35)))
    assert [burst.count_for(b) for b in burst.bursts] == [3, 5]


def test_describe_burst_lists_each_shot():
    lines = describe_burst(default_burst(100))
    assert lines[0].startswith("burst of 100 particles")
    assert len(lines) == 6
