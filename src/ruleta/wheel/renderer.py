"""Wheel renderer.

Draws the segments, radial labels, hub and pointer for a prize set at a
given rotation. Holds no state between calls: the same inputs always
produce the same drawing commands.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from ruleta.graphics.surface import Color, DrawingSurface, TRANSPARENT
from ruleta.wheel.geometry import POINTER_ANGLE, WheelGeometry
from ruleta.wheel.prizes import Prize


@dataclass(frozen=True)
class WheelStyle:
    """Non-geometric look of the wheel."""

    background: Color = TRANSPARENT
    label_color: Color = (255, 255, 255)
    label_shadow: Color = (0, 0, 0, 51)   # 20% black
    hub_color: Color = (255, 255, 255)
    center_dot_color: Color = (26, 26, 26)
    pointer_color: Color = (255, 255, 255)


class WheelRenderer:
    """Renders a wheel onto any DrawingSurface."""

    def __init__(self, style: Optional[WheelStyle] = None):
        self.style = style or WheelStyle()

    def render(
        self,
        surface: DrawingSurface,
        prizes: Sequence[Prize],
        rotation: float,
    ) -> WheelGeometry:
        """
        Draw the full wheel.

        Args:
            surface: Target surface, assumed square
            prizes: Ordered prizes, one segment each
            rotation: Wheel rotation in radians

        Returns:
            The geometry used for this frame
        """
        geometry = WheelGeometry.for_size(surface.width, surface.height)
        surface.clear(self.style.background)

        if prizes:
            self._draw_segments(surface, geometry, prizes, rotation)
        self._draw_hub(surface, geometry)
        self._draw_pointer(surface, geometry)
        return geometry

    def _draw_segments(
        self,
        surface: DrawingSurface,
        geometry: WheelGeometry,
        prizes: Sequence[Prize],
        rotation: float,
    ) -> None:
        """Draw every slice, then its label on top."""
        font_size = geometry.font_size(len(prizes))
        max_width = geometry.label_max_width

        for prize, slice_ in zip(prizes, geometry.slices(rotation, len(prizes))):
            surface.fill_sector(
                geometry.cx, geometry.cy,
                geometry.outer_radius, geometry.inner_radius,
                slice_.start, slice_.end,
                prize.color,
            )

            # Label runs outward along the slice's middle, starting near the hub
            mid = slice_.mid
            ax, ay = geometry.label_anchor(mid)
            surface.save()
            surface.translate(ax, ay)
            surface.rotate(mid)
            surface.draw_text(
                prize.text, 0, 0,
                self.style.label_color,
                font_size,
                max_width=max_width,
                shadow=self.style.label_shadow,
            )
            surface.restore()

    def _draw_hub(self, surface: DrawingSurface, geometry: WheelGeometry) -> None:
        """Light ring with a dark center dot."""
        surface.fill_circle(geometry.cx, geometry.cy, geometry.hub_ring_radius, self.style.hub_color)
        surface.fill_circle(geometry.cx, geometry.cy, geometry.center_dot_radius, self.style.center_dot_color)

    def _draw_pointer(self, surface: DrawingSurface, geometry: WheelGeometry) -> None:
        """Fixed triangle at the top; it never rotates with the wheel."""
        surface.fill_polygon(geometry.pointer_polygon(), self.style.pointer_color)


def segment_under_pointer(geometry: WheelGeometry, rotation: float, segment_count: int) -> int:
    """Index of the slice that covers the pointer angle in the drawn frame."""
    for slice_ in geometry.slices(rotation, segment_count):
        if slice_.contains(POINTER_ANGLE):
            return slice_.index
    return 0
