"""Rotation recovery for rotated node bounds."""

import logging
from dataclasses import dataclass
from typing import Tuple

import numpy as np

from models.figma_types import BoundingBox, RecoveryStatus

logger = logging.getLogger(__name__)

ROTATION_SINGULARITY_TOLERANCE = 1e-6


@dataclass(frozen=True)
class RecoveredDimensions:
    """Width/height of a rectangle before rotation."""
    width: float
    height: float
    status: RecoveryStatus = RecoveryStatus.RECOVERED


def recover_dimensions(
    angle: float,
    rotated_width: float,
    rotated_height: float,
    tolerance: float = ROTATION_SINGULARITY_TOLERANCE,
) -> RecoveredDimensions:
    """Recover the unrotated width/height from an axis-aligned bounding box.

    A w x h rectangle rotated by `angle` has bounds
    W = w|cos| + h|sin| and H = w|sin| + h|cos|; this inverts that system.

    Args:
        angle: Rotation in radians
        rotated_width: Width of the rotated bounding box
        rotated_height: Height of the rotated bounding box
        tolerance: Minimum |cos² - sin²| accepted as invertible

    Returns:
        RecoveredDimensions. When the system is singular, or the solve yields
        a non-finite or negative size, the inputs come back unchanged with
        status SINGULAR.
    """
    if angle == 0:
        return RecoveredDimensions(rotated_width, rotated_height, RecoveryStatus.UNROTATED)

    cos_a = float(np.cos(angle))
    sin_a = float(np.sin(angle))
    denominator = cos_a * cos_a - sin_a * sin_a

    if abs(denominator) < tolerance:
        logger.warning(
            f"Rotation {angle:.6f}rad is too close to 45°, keeping rotated bounds "
            f"{rotated_width}x{rotated_height}"
        )
        return RecoveredDimensions(rotated_width, rotated_height, RecoveryStatus.SINGULAR)

    abs_cos, abs_sin = abs(cos_a), abs(sin_a)
    width = (rotated_width * abs_cos - rotated_height * abs_sin) / denominator
    height = (rotated_height * abs_cos - rotated_width * abs_sin) / denominator

    if not (np.isfinite(width) and np.isfinite(height)) or width < 0 or height < 0:
        logger.warning(
            f"Inconsistent rotated bounds {rotated_width}x{rotated_height} at "
            f"{angle:.6f}rad (solved {width:.3f}x{height:.3f}), keeping rotated bounds"
        )
        return RecoveredDimensions(rotated_width, rotated_height, RecoveryStatus.SINGULAR)

    return RecoveredDimensions(width, height, RecoveryStatus.RECOVERED)


def recover_box(
    box: BoundingBox,
    angle: float,
    tolerance: float = ROTATION_SINGULARITY_TOLERANCE,
) -> Tuple[BoundingBox, RecoveryStatus]:
    """Recover an unrotated box that shares the rotated box's center."""
    size = recover_dimensions(angle, box.width, box.height, tolerance)

    center_x = box.x + box.width / 2
    center_y = box.y + box.height / 2

    recovered = BoundingBox(
        x=center_x - size.width / 2,
        y=center_y - size.height / 2,
        width=size.width,
        height=size.height,
    )
    return recovered, size.status
