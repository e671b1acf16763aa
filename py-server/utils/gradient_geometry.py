"""Gradient handle geometry in normalized shape space.

Figma describes a gradient with handle points inside the shape's unit
square: handles 0 and 1 span the gradient axis and, for radial gradients,
handle 2 spans the secondary axis. CSS instead takes a direction angle and
stop offsets measured from the corner the gradient line starts at. The
functions here convert between the two conventions.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from constants.figma_types import (
    CORNER_BOTTOM_LEFT,
    CORNER_BOTTOM_RIGHT,
    CORNER_TOP_LEFT,
    CORNER_TOP_RIGHT,
)
from models.figma_types import ColorStop

logger = logging.getLogger(__name__)

DEGENERATE_LENGTH_TOLERANCE = 1e-12


class Point(NamedTuple):
    x: float
    y: float


def _as_point(handle) -> Point:
    if isinstance(handle, Point):
        return handle
    if isinstance(handle, (tuple, list)):
        return Point(float(handle[0]), float(handle[1]))
    return Point(float(handle.x), float(handle.y))


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


# (sign(dx), sign(dy), |dx| > |dy|) -> corner the gradient line starts from.
# The line runs opposite the handle vector, so a vector pointing up-right
# starts bottom-left, etc. dx == dy == 0 has no entry (degenerate).
ORIGIN_CORNER_TABLE: Dict[Tuple[int, int, bool], Point] = {
    # Rightward
    (1, 1, True): Point(*CORNER_TOP_LEFT),
    (1, 1, False): Point(*CORNER_TOP_LEFT),
    (1, 0, True): Point(*CORNER_TOP_LEFT),
    (1, -1, True): Point(*CORNER_BOTTOM_LEFT),
    (1, -1, False): Point(*CORNER_BOTTOM_LEFT),
    # Leftward
    (-1, 1, True): Point(*CORNER_TOP_RIGHT),
    (-1, 1, False): Point(*CORNER_TOP_RIGHT),
    (-1, 0, True): Point(*CORNER_TOP_RIGHT),
    (-1, -1, True): Point(*CORNER_BOTTOM_RIGHT),
    (-1, -1, False): Point(*CORNER_BOTTOM_RIGHT),
    # Vertical
    (0, 1, False): Point(*CORNER_TOP_LEFT),
    (0, -1, False): Point(*CORNER_BOTTOM_LEFT),
}


def origin_corner_for(dx: float, dy: float) -> Point:
    """Look up the origin corner for a non-zero handle vector."""
    return ORIGIN_CORNER_TABLE[(_sign(dx), _sign(dy), abs(dx) > abs(dy))]


@dataclass(frozen=True)
class GradientLineDescriptor:
    """Gradient axis derived from two handles.

    `m` is None for vertical lines and slopes too steep to represent.
    `origin_corner` is the unit-square corner stop distances are measured
    from.
    """
    start: Point
    end: Point
    r: float
    cos: float
    sin: float
    m: Optional[float]
    origin_corner: Point

    def project(self, point) -> Point:
        """Project a point onto the gradient line through the origin corner.

        Vertical and horizontal handle pairs project straight across onto
        the handle axis.
        """
        point = _as_point(point)
        if self.start.x == self.end.x:
            return Point(self.start.x, point.y)
        if self.start.y == self.end.y:
            return Point(point.x, self.start.y)

        # Perpendicular foot along the unit direction; m is never divided by
        corner = self.origin_corner
        along = (point.x - corner.x) * self.cos + (point.y - corner.y) * self.sin
        return Point(corner.x + along * self.cos, corner.y + along * self.sin)

    def point_at(self, position: float) -> Point:
        """Point at a fraction of the start->end handle segment."""
        distance = self.r * position
        return Point(
            self.start.x + distance * self.cos,
            self.start.y + distance * self.sin,
        )


def resolve_gradient_line(
    handles: Sequence,
    tolerance: float = DEGENERATE_LENGTH_TOLERANCE,
) -> Optional[GradientLineDescriptor]:
    """Build the gradient line descriptor from handle positions.

    Returns None when fewer than 2 handles are given, the handles
    coincide or their span overflows; there is no usable axis then.
    """
    if not handles or len(handles) < 2:
        return None

    start = _as_point(handles[0])
    end = _as_point(handles[1])
    dx = end.x - start.x
    dy = end.y - start.y

    r = float(np.hypot(dx, dy))
    if not np.isfinite(r):
        logger.warning(f"Gradient handle span overflows: ({start.x}, {start.y}) -> ({end.x}, {end.y})")
        return None
    if r < tolerance:
        logger.debug(f"Zero-length gradient handles at ({start.x}, {start.y})")
        return None

    slope = dy / dx if dx != 0 else None
    if slope is not None and not np.isfinite(slope):
        slope = None

    return GradientLineDescriptor(
        start=start,
        end=end,
        r=r,
        cos=dx / r,
        sin=dy / r,
        m=slope,
        origin_corner=origin_corner_for(dx, dy),
    )


# Origin corner -> test for a stop point lying before that corner
_BEFORE_ORIGIN: Dict[Point, Callable[[Point], bool]] = {
    Point(*CORNER_TOP_LEFT): lambda p: p.x < 0 or p.y < 0,
    Point(*CORNER_TOP_RIGHT): lambda p: p.x > 1 or p.y < 0,
    Point(*CORNER_BOTTOM_RIGHT): lambda p: p.x > 1 or p.y > 1,
    Point(*CORNER_BOTTOM_LEFT): lambda p: p.x < 0 or p.y > 1,
}


def signed_stop_distance(descriptor: GradientLineDescriptor, position: float) -> float:
    """Distance from the origin corner to a stop, negative before the corner."""
    point = descriptor.point_at(position)
    projected = descriptor.project(point)
    corner = descriptor.origin_corner

    distance = float(np.hypot(projected.x - corner.x, projected.y - corner.y))
    if _BEFORE_ORIGIN[corner](point):
        distance = -distance
    return distance


def remap_stops(
    descriptor: GradientLineDescriptor,
    stops: Sequence[ColorStop],
) -> List[ColorStop]:
    """Re-express stop positions as signed distances along the gradient line.

    Returns new stops; colors and order are kept, inputs are not modified.
    """
    return [
        stop.model_copy(update={"position": signed_stop_distance(descriptor, stop.position)})
        for stop in stops
    ]


def gradient_direction_angle(handles: Sequence) -> Optional[float]:
    """CSS linear-gradient angle in degrees; rightward handles give 90."""
    if not handles or len(handles) < 2:
        logger.warning("Insufficient handle positions for gradient direction")
        return None

    start = _as_point(handles[0])
    end = _as_point(handles[1])
    if start == end:
        logger.warning("Zero-length gradient handles, no direction")
        return None

    angle_radians = np.pi / 2 - np.arctan2(end.y - start.y, end.x - start.x)
    return float(np.degrees(angle_radians))


@dataclass(frozen=True)
class EllipsePosition:
    """Radial gradient ellipse, all values in percent of the shape size."""
    rx: float
    ry: float
    cx: float
    cy: float


def radial_gradient_position(handles: Sequence) -> Optional[EllipsePosition]:
    """Ellipse radii and center from center, x-radius and y-radius handles."""
    if not handles or len(handles) < 3:
        return None

    center, x_handle, y_handle = (_as_point(h) for h in handles[:3])
    return EllipsePosition(
        rx=float(np.hypot(x_handle.x - center.x, x_handle.y - center.y)) * 100,
        ry=float(np.hypot(y_handle.x - center.x, y_handle.y - center.y)) * 100,
        cx=center.x * 100,
        cy=center.y * 100,
    )
