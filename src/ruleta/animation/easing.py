"""Easing functions for the wheel deceleration.

All normalized functions take a time t (0.0 to 1.0) and return a normalized
value. Every ease-out curve here is monotonically non-decreasing on [0, 1]
and ends at exactly 1.0, which keeps the spin velocity non-negative.
"""

from enum import Enum, auto
from typing import Callable
import math


class Easing(Enum):
    """Available easing function types."""

    LINEAR = auto()
    EASE_OUT_QUAD = auto()
    EASE_OUT_CUBIC = auto()
    EASE_OUT_QUART = auto()
    EASE_OUT_QUINT = auto()
    EASE_OUT_SINE = auto()
    EASE_OUT_EXPO = auto()
    EASE_OUT_CIRC = auto()


# Type alias for easing functions
EasingFunc = Callable[[float], float]


def linear(t: float) -> float:
    """Linear interpolation (no easing)."""
    return t


def ease_out_quad(t: float) -> float:
    """Decelerate to zero velocity."""
    return 1 - (1 - t) * (1 - t)


def ease_out_cubic(t: float) -> float:
    """Decelerate to zero velocity (cubic).

    Same curve as t³ - 3t² + 3t.
    """
    return 1 - pow(1 - t, 3)


def ease_out_quart(t: float) -> float:
    """Decelerate to zero velocity (quartic)."""
    return 1 - pow(1 - t, 4)


def ease_out_quint(t: float) -> float:
    """Decelerate to zero velocity (quintic)."""
    return 1 - pow(1 - t, 5)


def ease_out_sine(t: float) -> float:
    """Decelerate using sine curve."""
    return math.sin((t * math.pi) / 2)


def ease_out_expo(t: float) -> float:
    """Decelerate exponentially."""
    return 1 if t == 1 else 1 - pow(2, -10 * t)


def ease_out_circ(t: float) -> float:
    """Decelerate along circular curve."""
    return math.sqrt(1 - pow(t - 1, 2))


_EASING_FUNCTIONS: dict[Easing, EasingFunc] = {
    Easing.LINEAR: linear,
    Easing.EASE_OUT_QUAD: ease_out_quad,
    Easing.EASE_OUT_CUBIC: ease_out_cubic,
    Easing.EASE_OUT_QUART: ease_out_quart,
    Easing.EASE_OUT_QUINT: ease_out_quint,
    Easing.EASE_OUT_SINE: ease_out_sine,
    Easing.EASE_OUT_EXPO: ease_out_expo,
    Easing.EASE_OUT_CIRC: ease_out_circ,
}

# String name mapping for settings
_EASING_BY_NAME: dict[str, Easing] = {
    "linear": Easing.LINEAR,
    "ease_out_quad": Easing.EASE_OUT_QUAD,
    "ease_out_cubic": Easing.EASE_OUT_CUBIC,
    "ease_out_quart": Easing.EASE_OUT_QUART,
    "ease_out_quint": Easing.EASE_OUT_QUINT,
    "ease_out_sine": Easing.EASE_OUT_SINE,
    "ease_out_expo": Easing.EASE_OUT_EXPO,
    "ease_out_circ": Easing.EASE_OUT_CIRC,
}

EASING_NAMES = tuple(_EASING_BY_NAME)


def get_easing(easing: Easing | str) -> EasingFunc:
    """Get an easing function by enum or name.

    Args:
        easing: Easing enum value or string name (e.g., "ease_out_cubic")

    Returns:
        The easing function

    Raises:
        ValueError: If easing name is not recognized
    """
    if isinstance(easing, str):
        easing_enum = _EASING_BY_NAME.get(easing.lower())
        if easing_enum is None:
            raise ValueError(f"Unknown easing function: {easing}")
        easing = easing_enum

    func = _EASING_FUNCTIONS.get(easing)
    if func is None:
        raise ValueError(f"No function registered for: {easing}")

    return func


def ease(
    t: float,
    b: float,
    c: float,
    d: float,
    easing: Easing | str = Easing.EASE_OUT_CUBIC,
) -> float:
    """Penner-style easing: value at time t of a change c from b over d.

    Args:
        t: Elapsed time
        b: Start value
        c: Total change
        d: Duration (same unit as t)
        easing: Curve to follow

    Returns:
        b + c * curve(t / d), with t / d clamped to [0, 1]
    """
    if d <= 0:
        return b + c
    progress = max(0.0, min(1.0, t / d))
    return b + c * get_easing(easing)(progress)


def interpolate(start: float, end: float, t: float, easing: Easing | str = Easing.LINEAR) -> float:
    """Interpolate between two values using an easing function."""
    easing_func = get_easing(easing)
    eased_t = easing_func(max(0.0, min(1.0, t)))
    return start + (end - start) * eased_t


def interpolate_color(
    start: tuple[int, int, int],
    end: tuple[int, int, int],
    t: float,
    easing: Easing | str = Easing.LINEAR
) -> tuple[int, int, int]:
    """Interpolate between two RGB colors."""
    return (
        int(interpolate(start[0], end[0], t, easing)),
        int(interpolate(start[1], end[1], t, easing)),
        int(interpolate(start[2], end[2], t, easing)),
    )
