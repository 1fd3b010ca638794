import pytest

from ruleta.animation.easing import EASING_NAMES, Easing, ease, get_easing, interpolate, interpolate_color


@pytest.mark.parametrize("name", EASING_NAMES)
def test_curves_start_at_zero_end_at_one_and_never_decrease(name):
    func = get_easing(name)
    samples = [func(i / 100) for i in range(101)]

    assert samples[0] == pytest.approx(0.0, abs=1e-9)
    assert samples[-1] == pytest.approx(1.0)
    assert all(b >= a for a, b in zip(samples, samples[1:]))


def test_lookup_by_enum_and_case_insensitive_name():
    assert get_easing(Easing.EASE_OUT_CUBIC) is get_easing("EASE_OUT_CUBIC")


def test_unknown_name_raises():
    with pytest.raises(ValueError):
        get_easing("bounce_forever")


def test_penner_form_cubic():
    # Midway through an ease-out cubic: 1 - 0.5^3 = 0.875 of the change
    assert ease(500, 0, 10, 1000, Easing.EASE_OUT_CUBIC) == pytest.approx(8.75)
    assert ease(0, 2, 10, 1000) == pytest.approx(2)
    assert ease(1000, 2, 10, 1000) == pytest.approx(12)


def test_penner_form_clamps_time():
    assert ease(5000, 0, 10, 1000) == pytest.approx(10)
    assert ease(-5, 0, 10, 1000) == pytest.approx(0)
    assert ease(3, 1, 10, 0) == pytest.approx(11)


def test_interpolate_helpers():
    assert interpolate(10, 20, 0.5) == pytest.approx(15)
    assert interpolate_color((0, 0, 0), (255, 100, 50), 1.0) == (255, 100, 50)
