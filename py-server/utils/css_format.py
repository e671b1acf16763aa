"""CSS value formatting for converted node styles."""

import logging
from typing import Optional, Sequence

import numpy as np

from models.figma_types import Color, ColorStop
from utils.gradient_geometry import (
    gradient_direction_angle,
    radial_gradient_position,
    remap_stops,
    resolve_gradient_line,
    DEGENERATE_LENGTH_TOLERANCE,
)

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 4
RADIAL_FALLBACK_POSITION = "at center"


def format_number(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Round and drop trailing zeros: 12.5000 -> '12.5', -0.0 -> '0'."""
    text = f"{round(float(value), precision):.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def to_px(value: float, precision: int = DEFAULT_PRECISION) -> str:
    return f"{format_number(value, precision)}px"


def color_to_css(color: Color, opacity: Optional[float] = None, precision: int = DEFAULT_PRECISION) -> str:
    """Convert a 0..1 Figma color to rgba(); paint opacity replaces alpha."""
    alpha = color.a if opacity is None else opacity
    channels = [int(round(c * 255)) for c in (color.r, color.g, color.b)]
    return f"rgba({channels[0]},{channels[1]},{channels[2]},{format_number(alpha, precision)})"


def format_stops(stops: Sequence[ColorStop], precision: int = DEFAULT_PRECISION) -> str:
    """Join stops as 'color position%' pairs."""
    return ", ".join(
        f"{color_to_css(stop.color, precision=precision)} {format_number(stop.position * 100, precision)}%"
        for stop in stops
    )


def linear_gradient_css(
    handles: Sequence,
    stops: Sequence[ColorStop],
    precision: int = DEFAULT_PRECISION,
    tolerance: float = DEGENERATE_LENGTH_TOLERANCE,
) -> str:
    """Build a linear-gradient() value from Figma handles and stops.

    Without usable handle geometry the stops are emitted unmodified and the
    direction argument is dropped.
    """
    descriptor = resolve_gradient_line(handles, tolerance)
    if descriptor is not None:
        stops = remap_stops(descriptor, stops)
    else:
        logger.debug("Linear gradient without handle geometry, keeping stop positions")

    angle = gradient_direction_angle(handles) if descriptor is not None else None
    stops_css = format_stops(stops, precision)
    if angle is None:
        return f"linear-gradient({stops_css})"
    return f"linear-gradient({format_number(angle, precision)}deg, {stops_css})"


def radial_gradient_css(
    handles: Sequence,
    stops: Sequence[ColorStop],
    precision: int = DEFAULT_PRECISION,
) -> str:
    """Build a radial-gradient() value from center/x-radius/y-radius handles."""
    ellipse = radial_gradient_position(handles)
    if ellipse is None:
        position = RADIAL_FALLBACK_POSITION
    else:
        position = (
            f"ellipse {format_number(ellipse.rx, precision)}% {format_number(ellipse.ry, precision)}% "
            f"at {format_number(ellipse.cx, precision)}% {format_number(ellipse.cy, precision)}%"
        )
    return f"radial-gradient({position}, {format_stops(stops, precision)})"


def rotation_css(angle: float, unit: str = "rad", precision: int = DEFAULT_PRECISION) -> str:
    """rotate() transform for a rotation given in radians."""
    if unit == "deg":
        return f"rotate({format_number(float(np.degrees(angle)), precision)}deg)"
    return f"rotate({format_number(angle, precision)}rad)"
