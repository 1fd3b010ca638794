"""Wheel geometry, derived proportionally from the surface size.

Every measure scales with the outer radius. The ratios were tuned on a
500px canvas with a 240px outer radius, which is why most of them are
expressed in 240ths.

Coordinate frame: angle 0 points right, angles grow clockwise on screen
(y grows downward), and the pointer is fixed at -pi/2 (straight up).
"""

from dataclasses import dataclass
from typing import List, Tuple
import math

Point = Tuple[float, float]

# Outer radius as a share of half the surface size
OUTER_RADIUS_RATIO = 0.96

# Ratios relative to the outer radius
INNER_RADIUS_RATIO = 50 / 240
LABEL_OFFSET_RATIO = 15 / 240
LABEL_MARGIN_RATIO = 30 / 240
HUB_RING_INSET_RATIO = 5 / 240
CENTER_DOT_RATIO = 15 / 240
POINTER_HALF_WIDTH_RATIO = 10 / 240
POINTER_BASE_RATIO = 10 / 240   # Base sits this far outside the rim
POINTER_TIP_RATIO = 5 / 240     # Tip reaches this far inside the rim

# Font tiers by segment count. Sizes are outer_radius / divisor.
FONT_TIER_BASE = 10     # n <= 12
FONT_TIER_MID = 14      # 12 < n <= 20
FONT_TIER_SMALL = 18    # n > 20
FONT_MID_THRESHOLD = 12
FONT_SMALL_THRESHOLD = 20

POINTER_ANGLE = -math.pi / 2


def arc_width(segment_count: int) -> float:
    """Angular width of one segment in radians."""
    return 2 * math.pi / segment_count


def font_divisor(segment_count: int) -> int:
    """Radius divisor for the label font at a segment count."""
    if segment_count > FONT_SMALL_THRESHOLD:
        return FONT_TIER_SMALL
    if segment_count > FONT_MID_THRESHOLD:
        return FONT_TIER_MID
    return FONT_TIER_BASE


@dataclass(frozen=True)
class Slice:
    """Angular extent of one segment."""

    index: int
    start: float
    end: float

    @property
    def mid(self) -> float:
        return self.start + (self.end - self.start) / 2

    def contains(self, angle: float) -> bool:
        """Check whether an angle falls in [start, end), modulo a full turn."""
        width = self.end - self.start
        offset = (angle - self.start) % (2 * math.pi)
        return offset < width


@dataclass(frozen=True)
class WheelGeometry:
    """All wheel measures for one surface size."""

    cx: float
    cy: float
    outer_radius: float

    @classmethod
    def for_size(cls, width: int, height: int) -> "WheelGeometry":
        """Geometry centered in a surface. Square surfaces are assumed;
        the smaller side wins otherwise."""
        size = min(width, height)
        return cls(cx=width / 2, cy=height / 2, outer_radius=size / 2 * OUTER_RADIUS_RATIO)

    @property
    def center(self) -> Point:
        return (self.cx, self.cy)

    @property
    def inner_radius(self) -> float:
        return self.outer_radius * INNER_RADIUS_RATIO

    @property
    def label_radius(self) -> float:
        """Distance from center to the label anchor."""
        return self.inner_radius + self.outer_radius * LABEL_OFFSET_RATIO

    @property
    def label_max_width(self) -> float:
        return self.outer_radius - self.inner_radius - self.outer_radius * LABEL_MARGIN_RATIO

    @property
    def hub_ring_radius(self) -> float:
        return self.inner_radius - self.outer_radius * HUB_RING_INSET_RATIO

    @property
    def center_dot_radius(self) -> float:
        return self.outer_radius * CENTER_DOT_RATIO

    def font_size(self, segment_count: int) -> int:
        """Label font size in pixels, never below 1."""
        return max(1, round(self.outer_radius / font_divisor(segment_count)))

    def slices(self, rotation: float, segment_count: int) -> List[Slice]:
        """Segment extents for a rotation. Widths always sum to a full turn."""
        arc = arc_width(segment_count)
        return [
            Slice(i, rotation + i * arc, rotation + (i + 1) * arc)
            for i in range(segment_count)
        ]

    def label_anchor(self, angle: float) -> Point:
        """Where a label starts along a radial direction."""
        return (
            self.cx + math.cos(angle) * self.label_radius,
            self.cy + math.sin(angle) * self.label_radius,
        )

    def pointer_polygon(self) -> List[Point]:
        """Fixed triangle above the wheel, tip pointing down into the rim."""
        half = self.outer_radius * POINTER_HALF_WIDTH_RATIO
        base_y = self.cy - (self.outer_radius + self.outer_radius * POINTER_BASE_RATIO)
        tip_y = self.cy - (self.outer_radius - self.outer_radius * POINTER_TIP_RATIO)
        return [
            (self.cx - half, base_y),
            (self.cx + half, base_y),
            (self.cx, tip_y),
        ]
