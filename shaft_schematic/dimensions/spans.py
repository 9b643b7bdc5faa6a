"""
Dimension Span Types

Axial dimension annotations and their rail assignments.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SpanKind(Enum):
    """
    Classification used only to bias rail preference.

    Values:
        LOCAL: Length of a single feature, hugs low rails
        DATUM: Offset from a datum (SET), stair-steps above locals
        OAL: Overall length, outermost
    """
    LOCAL = "LOCAL"
    DATUM = "DATUM"
    OAL = "OAL"

    @property
    def priority(self) -> int:
        """Processing order when interval starts tie (lower first)."""
        return _KIND_PRIORITY[self]


_KIND_PRIORITY = {
    SpanKind.LOCAL: 0,
    SpanKind.DATUM: 1,
    SpanKind.OAL: 2,
}


@dataclass(frozen=True)
class DimSpan:
    """
    A dimension line from x1 to x2 with labels.

    x values are in measurement-space millimeters; either endpoint may be
    the larger one.
    """
    x1_mm: float
    x2_mm: float
    label_top: str
    kind: SpanKind = SpanKind.LOCAL
    label_bottom: Optional[str] = None

    @property
    def lo_mm(self) -> float:
        return min(self.x1_mm, self.x2_mm)

    @property
    def hi_mm(self) -> float:
        return max(self.x1_mm, self.x2_mm)

    @property
    def length_mm(self) -> float:
        return self.hi_mm - self.lo_mm


@dataclass(frozen=True)
class RailSpan:
    """A span with its assigned rail (0 = closest to the drawing)."""
    rail: int
    span: DimSpan
