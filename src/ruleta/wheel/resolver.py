"""Map a resting rotation to the segment under the pointer."""

import logging
import math

logger = logging.getLogger(__name__)

# Pointer sits at -90 degrees (straight up) in the drawing frame
POINTER_OFFSET_DEGREES = 90.0


def resolve_winner(rotation: float, segment_count: int) -> int:
    """Index of the segment under the fixed top pointer.

    Angle 0 points right and angles grow clockwise on screen, so a growing
    rotation carries higher indices past the pointer first. The 90 degree
    offset moves the reference to the pointer and the 360 - x inversion
    turns "how far the wheel turned" into "which slice is now on top".

    Args:
        rotation: Accumulated wheel rotation in radians
        segment_count: Number of equal segments (>= 1)

    Returns:
        Index in [0, segment_count - 1]. Out-of-range results, including the
        exact slice-0 boundary, fall back to 0.
    """
    if segment_count < 1:
        raise ValueError(f"segment_count must be positive, got {segment_count}")

    if not math.isfinite(rotation):
        logger.warning(f"Non-finite rotation {rotation!r}, defaulting to segment 0")
        return 0

    degrees = rotation * 180 / math.pi + POINTER_OFFSET_DEGREES
    arc_degrees = 360 / segment_count
    normalized = (360 - degrees % 360) / arc_degrees
    index = math.floor(normalized)

    if 0 <= index < segment_count:
        return index
    return 0
