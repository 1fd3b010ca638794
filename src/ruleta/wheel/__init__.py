"""Wheel model, drawing and spin control."""

from ruleta.wheel.prizes import Prize, PrizeSet, PALETTE, DEFAULT_LABELS, parse_labels
from ruleta.wheel.geometry import WheelGeometry, Slice
from ruleta.wheel.resolver import resolve_winner
from ruleta.wheel.renderer import WheelRenderer, WheelStyle
from ruleta.wheel.controller import SpinController

__all__ = [
    # Model
    "Prize",
    "PrizeSet",
    "PALETTE",
    "DEFAULT_LABELS",
    "parse_labels",
    # Drawing
    "WheelGeometry",
    "Slice",
    "WheelRenderer",
    "WheelStyle",
    # Spin
    "resolve_winner",
    "SpinController",
]
