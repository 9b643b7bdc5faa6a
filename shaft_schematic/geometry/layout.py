"""
Layout Scaler Module

Fits a resolved shaft into a drawing rectangle with one linear scale
factor. Both the axial span and the largest diameter must fit; the aspect
ratio is never distorted.
"""

import logging
import math
from dataclasses import dataclass
from typing import Sequence

from ..constants import (
    MIN_AXIAL_SPAN_MM,
    MIN_DRAWING_DIAMETER_MM,
    MIN_TARGET_EXTENT,
)
from ..model.segments import InvalidGeometryError, check_length, max_diameter
from .resolver import ResolvedComponent

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShaftLayout:
    """
    Result of fitting a shaft into a drawing rectangle.

    Drawing units are whatever the caller's rectangle uses (PDF points,
    pixels). Physical units are millimeters.
    """
    scale: float             # drawing units per mm
    axial_scale: float
    radial_scale: float
    min_x_mm: float          # physical position drawn at origin_x
    max_dia_mm: float
    origin_x: float
    origin_y: float
    target_width: float
    target_height: float

    @property
    def centerline_y(self) -> float:
        """Drawing y of the shaft centerline (middle of the rectangle)."""
        return self.origin_y + self.target_height / 2

    def to_drawing_x(self, position_mm: float) -> float:
        """Map a physical axial position to drawing x."""
        return self.origin_x + (position_mm - self.min_x_mm) * self.scale

    def to_drawing_radius(self, radius_mm: float) -> float:
        """Map a physical radius to a drawing length."""
        return radius_mm * self.scale

    def to_drawing_length(self, length_mm: float) -> float:
        """Map a physical axial length to a drawing length."""
        return length_mm * self.scale


def _check_target(value: float, name: str) -> float:
    if value is None or not math.isfinite(value):
        raise InvalidGeometryError(f"{name} must be finite, got {value}")
    return max(value, MIN_TARGET_EXTENT)


def max_component_diameter(resolved: Sequence[ResolvedComponent]) -> float:
    """
    Largest diameter over all components.

    Falls back to MIN_DRAWING_DIAMETER_MM so a degenerate shaft still
    renders something.
    """
    largest = max((max_diameter(c.segment) for c in resolved), default=0.0)
    if largest <= 0:
        return MIN_DRAWING_DIAMETER_MM
    return largest


def compute_scale(
    resolved: Sequence[ResolvedComponent],
    overall_length_mm: float,
    target_width: float,
    target_height: float,
    origin_x: float = 0.0,
    origin_y: float = 0.0
) -> ShaftLayout:
    """
    Compute the drawing scale and coordinate mapping for a shaft.

    scale = min(width / max(overall, 1 mm), height / max diameter)

    Args:
        resolved: Resolved components
        overall_length_mm: Axial span to fit
        target_width: Drawing rectangle width
        target_height: Drawing rectangle height (budget for the full diameter)
        origin_x: Drawing x of the leftmost component start
        origin_y: Drawing y of the top of the rectangle

    Returns:
        ShaftLayout

    Raises:
        InvalidGeometryError: On negative length or non-finite inputs
    """
    check_length(overall_length_mm, "overall length")
    width = _check_target(target_width, "target width")
    height = _check_target(target_height, "target height")

    axial_scale = width / max(overall_length_mm, MIN_AXIAL_SPAN_MM)
    max_dia = max_component_diameter(resolved)
    radial_scale = height / max_dia
    scale = min(axial_scale, radial_scale)

    min_x = min((c.start_mm for c in resolved), default=0.0)

    logger.debug(
        f"Layout scale {scale:.4f}/mm (axial {axial_scale:.4f}, radial {radial_scale:.4f}), "
        f"max dia {max_dia:.3f} mm, min x {min_x:.3f} mm"
    )

    return ShaftLayout(
        scale=scale,
        axial_scale=axial_scale,
        radial_scale=radial_scale,
        min_x_mm=min_x,
        max_dia_mm=max_dia,
        origin_x=origin_x,
        origin_y=origin_y,
        target_width=width,
        target_height=height,
    )
