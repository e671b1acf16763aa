"""
Input Validation Utilities
Validation of handle sets and boxes arriving at the converter API.
"""

import math
from typing import Optional, Sequence, Tuple
import logging

from models.figma_types import BoundingBox

logger = logging.getLogger(__name__)

# Validation constants
VALIDATION_CONSTANTS = {
    'MAX_HANDLES': 3,
    'MAX_STOPS': 256,
}


class GeometryInputError(Exception):
    """Raised when a request carries unusable geometry"""
    pass


def validate_handles(handles: Sequence, minimum: int) -> Tuple[bool, Optional[str]]:
    """
    Validate a gradient handle set

    Args:
        handles: Sequence of points with x/y attributes
        minimum: Required number of handles

    Returns:
        Tuple of (is_valid, error_message)
    """
    if handles is None:
        return False, "Gradient handles are required"

    if len(handles) < minimum:
        return False, f"Expected at least {minimum} gradient handles, got {len(handles)}"

    if len(handles) > VALIDATION_CONSTANTS['MAX_HANDLES']:
        return False, f"Expected at most {VALIDATION_CONSTANTS['MAX_HANDLES']} gradient handles, got {len(handles)}"

    for index, handle in enumerate(handles):
        if not (math.isfinite(handle.x) and math.isfinite(handle.y)):
            return False, f"Handle {index} has non-finite coordinates"

    return True, None


def validate_stops(stops: Sequence) -> Tuple[bool, Optional[str]]:
    """
    Validate a color stop list

    Returns:
        Tuple of (is_valid, error_message)
    """
    if len(stops) > VALIDATION_CONSTANTS['MAX_STOPS']:
        return False, f"Too many color stops: {len(stops)} (max: {VALIDATION_CONSTANTS['MAX_STOPS']})"
    return True, None


def validate_bounding_box(box: BoundingBox) -> Tuple[bool, Optional[str]]:
    """
    Validate a bounding box

    Returns:
        Tuple of (is_valid, error_message)
    """
    values = (box.x, box.y, box.width, box.height)
    if not all(math.isfinite(v) for v in values):
        return False, "Bounding box has non-finite values"

    if box.width < 0 or box.height < 0:
        return False, f"Bounding box has negative size: {box.width}x{box.height}"

    return True, None


def require_valid(result: Tuple[bool, Optional[str]]) -> None:
    """Raise GeometryInputError for a failed validation result."""
    is_valid, error = result
    if not is_valid:
        logger.warning(f"Rejected geometry input: {error}")
        raise GeometryInputError(error)


__all__ = [
    'validate_handles',
    'validate_stops',
    'validate_bounding_box',
    'require_valid',
    'GeometryInputError',
    'VALIDATION_CONSTANTS',
]
