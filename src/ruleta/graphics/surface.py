"""
Abstract drawing surface for the wheel renderer.

Defines the contract that both the pygame surface and the headless
recording surface must follow: clearing, filled shapes, width-clamped text
and a save/restore transform stack with translate and rotate.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import math
import numpy as np
from numpy.typing import NDArray

Color = Tuple[int, ...]  # RGB or RGBA
Point = Tuple[float, float]

TRANSPARENT: Color = (0, 0, 0, 0)


class TransformStack:
    """2D affine transform with a save/restore stack.

    Rotations follow the screen frame: with y growing downward, a positive
    angle turns clockwise.
    """

    def __init__(self) -> None:
        self._matrix: NDArray[np.float64] = np.identity(3)
        self._stack: List[NDArray[np.float64]] = []

    @property
    def depth(self) -> int:
        """Number of saved states."""
        return len(self._stack)

    @property
    def matrix(self) -> NDArray[np.float64]:
        return self._matrix.copy()

    @property
    def angle(self) -> float:
        """Total rotation in radians."""
        return math.atan2(self._matrix[1, 0], self._matrix[0, 0])

    def save(self) -> None:
        self._stack.append(self._matrix.copy())

    def restore(self) -> None:
        # Unbalanced restores are ignored, like a canvas context
        if self._stack:
            self._matrix = self._stack.pop()

    def translate(self, dx: float, dy: float) -> None:
        step = np.array([[1.0, 0.0, dx], [0.0, 1.0, dy], [0.0, 0.0, 1.0]])
        self._matrix = self._matrix @ step

    def rotate(self, angle: float) -> None:
        c, s = math.cos(angle), math.sin(angle)
        step = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        self._matrix = self._matrix @ step

    def apply(self, x: float, y: float) -> Point:
        """Map a point from user space to device space."""
        px, py, _ = self._matrix @ np.array([x, y, 1.0])
        return (float(px), float(py))

    def apply_many(self, points: Sequence[Point]) -> NDArray[np.float64]:
        """Map many points at once. Returns an (N, 2) array."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        homogeneous = np.hstack([pts, np.ones((len(pts), 1))])
        return (homogeneous @ self._matrix.T)[:, :2]


class DrawingSurface(ABC):
    """Abstract base class for wheel drawing targets.

    Shape and text coordinates are in user space and pass through the
    current transform.
    """

    def __init__(self) -> None:
        self._transform = TransformStack()

    @property
    @abstractmethod
    def width(self) -> int:
        """Surface width in pixels."""
        ...

    @property
    @abstractmethod
    def height(self) -> int:
        """Surface height in pixels."""
        ...

    @abstractmethod
    def clear(self, color: Color = TRANSPARENT) -> None:
        """Clear the whole surface."""
        ...

    @abstractmethod
    def fill_sector(
        self,
        cx: float,
        cy: float,
        outer_radius: float,
        inner_radius: float,
        start: float,
        end: float,
        color: Color,
    ) -> None:
        """Fill an annular sector between two radii from start to end angle."""
        ...

    @abstractmethod
    def fill_circle(self, cx: float, cy: float, radius: float, color: Color) -> None:
        """Fill a circle."""
        ...

    @abstractmethod
    def fill_polygon(self, points: Sequence[Point], color: Color) -> None:
        """Fill a closed polygon."""
        ...

    @abstractmethod
    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        color: Color,
        font_size: int,
        max_width: Optional[float] = None,
        shadow: Optional[Color] = None,
    ) -> None:
        """
        Draw a single line of text.

        Args:
            text: Text to draw
            x: Left edge of the text (left aligned)
            y: Vertical middle of the text
            color: Text color
            font_size: Font size in pixels (bold face)
            max_width: If set, text wider than this is squeezed to fit
            shadow: Optional soft shadow color drawn one pixel down-right
        """
        ...

    @property
    def transform(self) -> TransformStack:
        return self._transform

    def save(self) -> None:
        """Push the current transform."""
        self._transform.save()

    def restore(self) -> None:
        """Pop the last saved transform."""
        self._transform.restore()

    def translate(self, dx: float, dy: float) -> None:
        self._transform.translate(dx, dy)

    def rotate(self, angle: float) -> None:
        self._transform.rotate(angle)


@dataclass
class DrawCommand:
    """One recorded drawing call."""

    op: str
    args: Dict[str, Any] = field(default_factory=dict)


class RecordingSurface(DrawingSurface):
    """Surface that records drawing calls instead of rasterizing them.

    Used by the headless runner and in tests. Text commands also record the
    device-space anchor and rotation in effect when they were drawn.
    """

    def __init__(self, width: int = 800, height: int = 800) -> None:
        super().__init__()
        self._width = width
        self._height = height
        self.commands: List[DrawCommand] = []
        self.frames = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self, color: Color = TRANSPARENT) -> None:
        self.commands.clear()
        self.frames += 1
        self._record("clear", color=color)

    def fill_sector(self, cx, cy, outer_radius, inner_radius, start, end, color) -> None:
        self._record(
            "fill_sector",
            cx=cx, cy=cy,
            outer_radius=outer_radius, inner_radius=inner_radius,
            start=start, end=end, color=color,
        )

    def fill_circle(self, cx, cy, radius, color) -> None:
        self._record("fill_circle", cx=cx, cy=cy, radius=radius, color=color)

    def fill_polygon(self, points, color) -> None:
        device = [tuple(p) for p in self._transform.apply_many(points).tolist()]
        self._record("fill_polygon", points=device, color=color)

    def draw_text(self, text, x, y, color, font_size, max_width=None, shadow=None) -> None:
        self._record(
            "draw_text",
            text=text, x=x, y=y, color=color, font_size=font_size,
            max_width=max_width, shadow=shadow,
            origin=self._transform.apply(x, y),
            angle=self._transform.angle,
        )

    def save(self) -> None:
        super().save()
        self._record("save")

    def restore(self) -> None:
        super().restore()
        self._record("restore")

    def ops(self, op: str) -> List[DrawCommand]:
        """All recorded commands of one kind, in order."""
        return [c for c in self.commands if c.op == op]

    def _record(self, op: str, **args: Any) -> None:
        self.commands.append(DrawCommand(op, args))
