"""
Pygame implementation of the drawing surface.

Sectors are rasterized as polygons sampled along both arcs. Text is rendered
with a cached bold system font, squeezed horizontally when wider than the
allowed width, then rotated to the current transform angle.
"""

from typing import Dict, Optional, Sequence
import logging
import math

import pygame

from ruleta.core.errors import RenderSurfaceUnavailable
from ruleta.graphics.surface import Color, DrawingSurface, Point, TRANSPARENT

logger = logging.getLogger(__name__)

# Arc sampling step for sectors
ARC_STEP = math.radians(2)


def arc_points(cx: float, cy: float, radius: float, start: float, end: float) -> list:
    """Points along an arc from start to end, endpoints included."""
    steps = max(2, math.ceil(abs(end - start) / ARC_STEP) + 1)
    return [
        (cx + math.cos(start + (end - start) * i / (steps - 1)) * radius,
         cy + math.sin(start + (end - start) * i / (steps - 1)) * radius)
        for i in range(steps)
    ]


class PygameSurface(DrawingSurface):
    """Offscreen pygame surface the wheel is drawn onto.

    Args:
        width: Surface width in pixels
        height: Surface height in pixels
        font_name: Comma separated system font names for labels
    """

    def __init__(self, width: int, height: int, font_name: Optional[str] = None) -> None:
        super().__init__()
        if not pygame.font.get_init():
            pygame.font.init()

        self._size = (width, height)
        self._surface: Optional[pygame.Surface] = pygame.Surface((width, height), pygame.SRCALPHA)
        self.font_name = font_name
        self._fonts: Dict[int, pygame.font.Font] = {}

    @property
    def width(self) -> int:
        return self._size[0]

    @property
    def height(self) -> int:
        return self._size[1]

    @property
    def surface(self) -> pygame.Surface:
        """The backing pygame surface."""
        return self._target()

    def release(self) -> None:
        """Drop the backing surface. Further drawing raises."""
        self._surface = None

    def _target(self) -> pygame.Surface:
        if self._surface is None:
            raise RenderSurfaceUnavailable("pygame surface was released")
        return self._surface

    def _font(self, size: int) -> pygame.font.Font:
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.SysFont(self.font_name, size, bold=True)
            logger.debug(f"Loaded label font {self.font_name!r} at {size}px")
            self._fonts[size] = font
        return font

    def clear(self, color: Color = TRANSPARENT) -> None:
        self._target().fill(color)

    def fill_sector(self, cx, cy, outer_radius, inner_radius, start, end, color) -> None:
        outline = arc_points(cx, cy, outer_radius, start, end)
        if inner_radius > 0:
            outline += arc_points(cx, cy, inner_radius, end, start)
        else:
            outline.append((cx, cy))
        self.fill_polygon(outline, color)

    def fill_circle(self, cx, cy, radius, color) -> None:
        center = self._transform.apply(cx, cy)
        pygame.draw.circle(self._target(), color, center, radius)

    def fill_polygon(self, points: Sequence[Point], color: Color) -> None:
        device = self._transform.apply_many(points).tolist()
        pygame.draw.polygon(self._target(), color, device)

    def draw_text(self, text, x, y, color, font_size, max_width=None, shadow=None) -> None:
        target = self._target()
        # SDL_ttf rejects embedded NULs
        text = text.replace("\x00", "")
        if not text:
            return

        if shadow is not None:
            self._blit_text(target, text, x + 1, y + 1, shadow, font_size, max_width)
        self._blit_text(target, text, x, y, color, font_size, max_width)

    def _blit_text(
        self,
        target: pygame.Surface,
        text: str,
        x: float,
        y: float,
        color: Color,
        font_size: int,
        max_width: Optional[float],
    ) -> None:
        image = self._font(font_size).render(text, True, color[:3])

        if max_width is not None and image.get_width() > max_width:
            image = pygame.transform.smoothscale(
                image, (max(1, int(max_width)), image.get_height())
            )

        w, h = image.get_size()
        corners = self._transform.apply_many([
            (x, y - h / 2), (x + w, y - h / 2),
            (x + w, y + h / 2), (x, y + h / 2),
        ])

        # Screen angles grow clockwise, pygame rotates counterclockwise
        angle = self._transform.angle
        if angle:
            image = pygame.transform.rotate(image, -math.degrees(angle))
        if len(color) > 3:
            image.set_alpha(color[3])

        left, top = corners.min(axis=0)
        target.blit(image, (round(left), round(top)))
