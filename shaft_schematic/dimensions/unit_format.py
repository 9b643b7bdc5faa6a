"""
Unit Format Module

Functions for converting canonical millimeters to display units and
formatting dimension labels.
"""

import logging
import math
from enum import Enum

from ..constants import (
    MM_PER_INCH,
    INCH_FRACTION_DENOMINATOR,
    INCH_SNAP_TOLERANCE,
    LENGTH_DECIMAL_PLACES,
    UnitSystemName,
)

logger = logging.getLogger(__name__)


class UnitSystem(Enum):
    """Display unit system. Geometry always stays in millimeters."""
    MILLIMETERS = UnitSystemName.MILLIMETERS
    INCHES = UnitSystemName.INCHES

    @property
    def display_name(self) -> str:
        return "Millimeters" if self == UnitSystem.MILLIMETERS else "Inches"

    @property
    def suffix(self) -> str:
        return "mm" if self == UnitSystem.MILLIMETERS else "in"

    def to_mm(self, value: float) -> float:
        """Convert a value in this unit to millimeters."""
        if self == UnitSystem.INCHES:
            return value * MM_PER_INCH
        return value

    def from_mm(self, value_mm: float) -> float:
        """Convert millimeters to this unit."""
        if self == UnitSystem.INCHES:
            return value_mm / MM_PER_INCH
        return value_mm

    @classmethod
    def from_string(cls, value: str) -> "UnitSystem":
        """
        Parse a unit system name.

        Examples:
            >>> UnitSystem.from_string("mm")
            UnitSystem.MILLIMETERS
            >>> UnitSystem.from_string("imperial")
            UnitSystem.INCHES

        Raises:
            ValueError: If the name is not recognized
        """
        normalized = (value or "").strip().lower()
        if normalized in ("mm", "millimeter", "millimeters", "metric"):
            return cls.MILLIMETERS
        if normalized in ("in", "inch", "inches", "imperial", '"'):
            return cls.INCHES
        raise ValueError(f"Unknown unit system: {value}")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_inches_smart(
    inches: float,
    max_denominator: int = INCH_FRACTION_DENOMINATOR,
    snap_tolerance: float = INCH_SNAP_TOLERANCE,
    decimal_places: int = LENGTH_DECIMAL_PLACES
) -> str:
    """
    Format inches as a reduced mixed fraction when close to one.

    Examples:
        16.0 -> "16"
        1.5 -> "1 1/2"
        0.0625 -> "1/16"
        1.23 -> "1.230"

    Args:
        inches: Length in inches
        max_denominator: Finest fraction to snap to
        snap_tolerance: Maximum distance to the fraction, in inches
        decimal_places: Places for the decimal fallback

    Returns:
        Formatted string without unit suffix
    """
    if abs(inches) < 1e-9:
        return f"{0:.{decimal_places}f}"

    sign = "-" if inches < 0 else ""
    a = abs(inches)

    den = max_denominator
    snapped = _round_half_up(a * den) / den

    if abs(a - snapped) <= snap_tolerance:
        whole = int(math.floor(snapped))
        num = _round_half_up((snapped - whole) * den)
        if num >= den:
            whole += 1
            num -= den

        if num == 0:
            return f"{sign}{whole}"

        g = math.gcd(num, den)
        num, reduced_den = num // g, den // g

        if whole == 0:
            return f"{sign}{num}/{reduced_den}"
        return f"{sign}{whole} {num}/{reduced_den}"

    return f"{sign}{a:.{decimal_places}f}"


def format_length(length_mm: float, unit: UnitSystem = UnitSystem.MILLIMETERS) -> str:
    """
    Format a length dimension label.

    Inches prefer fractions snapped to 1/16; millimeters use 3 decimals.
    """
    if unit == UnitSystem.INCHES:
        return f"{format_inches_smart(length_mm / MM_PER_INCH)} in"
    return f"{length_mm:.{LENGTH_DECIMAL_PLACES}f} mm"


def format_dim(value_mm: float, unit: UnitSystem = UnitSystem.MILLIMETERS) -> str:
    """
    Format a value as a plain decimal in the display unit.

    Inches use 4 decimals so common fractions round exactly.
    """
    if unit == UnitSystem.INCHES:
        return f"{value_mm / MM_PER_INCH:.4f} in"
    return f"{value_mm:.3f} mm"


def format_diameter(dia_mm: float, unit: UnitSystem = UnitSystem.MILLIMETERS) -> str:
    """Format a diameter callout like "Ø 50.000 mm"."""
    return f"Ø {format_length(dia_mm, unit)}"


def format_pitch(pitch_mm: float, tpi: float = None, unit: UnitSystem = UnitSystem.MILLIMETERS) -> str:
    """
    Format a thread pitch.

    Inches show threads per inch, millimeters show pitch.
    """
    if unit == UnitSystem.INCHES:
        if not tpi and pitch_mm > 0:
            tpi = MM_PER_INCH / pitch_mm
        if tpi:
            return f"{format_inches_smart(tpi)} TPI"
        return "TPI ?"
    if pitch_mm > 0:
        return f"P {pitch_mm:.3f}"
    return "P ?"
