"""Drawing surfaces for the wheel renderer."""

from ruleta.graphics.surface import DrawingSurface, RecordingSurface, DrawCommand, TransformStack

__all__ = ["DrawingSurface", "RecordingSurface", "DrawCommand", "TransformStack"]
