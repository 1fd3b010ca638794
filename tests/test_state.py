import dataclasses

import pytest

from ruleta.core.state import StateMachine, WheelPhase


def test_initial_state():
    machine = StateMachine()
    assert machine.state == WheelPhase.IDLE
    assert machine.context.rotation == 0.0


def test_valid_round_trip_updates_context():
    machine = StateMachine()

    assert machine.transition(WheelPhase.SPINNING, elapsed=0.0, total_duration=5000.0)
    assert machine.state == WheelPhase.SPINNING
    assert machine.context.total_duration == 5000.0

    assert machine.transition(WheelPhase.IDLE)
    assert machine.state == WheelPhase.IDLE


def test_invalid_transition_refused(caplog):
    machine = StateMachine()

    assert not machine.can_transition(WheelPhase.IDLE)
    assert machine.transition(WheelPhase.IDLE) is False
    assert machine.state == WheelPhase.IDLE
    assert "Invalid transition" in caplog.text

    machine.transition(WheelPhase.SPINNING)
    assert machine.transition(WheelPhase.SPINNING, total_duration=1.0) is False
    assert machine.context.total_duration == 0.0


def test_unknown_context_keys_ignored():
    machine = StateMachine()
    machine.transition(WheelPhase.SPINNING, bogus=1)
    assert not hasattr(machine.context, "bogus")


def test_listeners_notified_and_errors_contained():
    machine = StateMachine()
    seen = []

    def broken(old, new, ctx):
        raise RuntimeError("listener failure")

    def record(old, new, ctx):
        seen.append((old, new))

    machine.add_listener(broken)
    machine.add_listener(record)
    machine.transition(WheelPhase.SPINNING)

    assert seen == [(WheelPhase.IDLE, WheelPhase.SPINNING)]

    machine.remove_listener(record)
    machine.transition(WheelPhase.IDLE)
    assert len(seen) == 1


def test_snapshot_is_frozen_copy():
    machine = StateMachine()
    machine.transition(WheelPhase.SPINNING, initial_velocity=12.5)
    snapshot = machine.snapshot()

    assert snapshot.is_spinning
    assert snapshot.initial_velocity == 12.5

    machine.context.rotation = 3.0
    assert snapshot.rotation == 0.0

    with pytest.raises(dataclasses.FrozenInstanceError):
        snapshot.rotation = 1.0
