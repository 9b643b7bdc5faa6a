"""
Shaft Segment Model

Value types for the four authored component kinds and the shaft snapshot
that holds them. All distances are in millimeters, measured from the AFT
face toward FWD.
"""

import logging
import math
import uuid
from dataclasses import dataclass, field, fields, asdict
from typing import List, Tuple, Optional, Dict, Any, Union, Iterable

from ..constants import (
    MM_PER_INCH,
    SEGMENT_END_TOLERANCE_MM,
)

logger = logging.getLogger(__name__)


class ShaftSchematicError(Exception):
    """Base class for all shaft schematic errors."""
    pass


class InvalidGeometryError(ShaftSchematicError, ValueError):
    """Raised when geometry violates a precondition (negative length, NaN, inf)."""
    pass


def _new_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Body:
    """Constant-diameter cylindrical section."""
    id: str = field(default_factory=_new_id)
    start_mm: float = 0.0
    length_mm: float = 0.0
    dia_mm: float = 0.0

    @property
    def end_mm(self) -> float:
        return self.start_mm + self.length_mm


@dataclass(frozen=True)
class Taper:
    """
    Linear transition between two diameters.

    start_dia_mm is the diameter at the AFT end of the taper, end_dia_mm at
    the FWD end. Either may be the larger one.
    """
    id: str = field(default_factory=_new_id)
    start_mm: float = 0.0
    length_mm: float = 0.0
    start_dia_mm: float = 0.0
    end_dia_mm: float = 0.0

    @property
    def end_mm(self) -> float:
        return self.start_mm + self.length_mm

    @property
    def is_increasing(self) -> bool:
        """True when the taper grows toward FWD."""
        return self.end_dia_mm > self.start_dia_mm


@dataclass(frozen=True)
class Thread:
    """
    External threaded section.

    Attributes:
        major_dia_mm: Major (outer) diameter
        pitch_mm: Distance per turn; may be 0 when only tpi is known
        exclude_from_oal: Thread still renders but is left out of the
            overall-length figure when it sits at a shaft end
        tpi: Optional threads-per-inch
    """
    id: str = field(default_factory=_new_id)
    start_mm: float = 0.0
    length_mm: float = 0.0
    major_dia_mm: float = 0.0
    pitch_mm: float = 0.0
    exclude_from_oal: bool = False
    tpi: Optional[float] = None

    @property
    def end_mm(self) -> float:
        return self.start_mm + self.length_mm

    @property
    def has_pitch(self) -> bool:
        return self.pitch_mm > 0 or (self.tpi or 0) > 0

    def normalized(self) -> "Thread":
        """
        Return a copy with both pitch_mm and tpi populated when either is set.

        Examples:
            Thread(tpi=4).normalized().pitch_mm -> 6.35
            Thread(pitch_mm=6.35).normalized().tpi -> 4.0
        """
        pitch = self.pitch_mm
        if pitch <= 0 and (self.tpi or 0) > 0:
            pitch = MM_PER_INCH / self.tpi

        tpi = self.tpi
        if (tpi or 0) <= 0 and pitch > 0:
            tpi = MM_PER_INCH / pitch

        return Thread(
            id=self.id,
            start_mm=self.start_mm,
            length_mm=self.length_mm,
            major_dia_mm=self.major_dia_mm,
            pitch_mm=pitch,
            exclude_from_oal=self.exclude_from_oal,
            tpi=tpi,
        )


@dataclass(frozen=True)
class Liner:
    """Sleeve pressed over the shaft; only the outer diameter matters."""
    id: str = field(default_factory=_new_id)
    start_mm: float = 0.0
    length_mm: float = 0.0
    od_mm: float = 0.0
    label: Optional[str] = None

    @property
    def end_mm(self) -> float:
        return self.start_mm + self.length_mm


Segment = Union[Body, Taper, Thread, Liner]

SEGMENT_TYPES = (Body, Taper, Thread, Liner)


# =============================================================================
# KIND DISPATCH
# =============================================================================

def max_diameter(segment: Segment) -> float:
    """Largest diameter of a segment."""
    if isinstance(segment, Body):
        return segment.dia_mm
    elif isinstance(segment, Taper):
        return max(segment.start_dia_mm, segment.end_dia_mm)
    elif isinstance(segment, Thread):
        return segment.major_dia_mm
    elif isinstance(segment, Liner):
        return segment.od_mm
    raise TypeError(f"Unknown segment type: {type(segment).__name__}")


def aft_diameter(segment: Segment) -> float:
    """Diameter on the AFT-facing side of a segment."""
    if isinstance(segment, Body):
        return segment.dia_mm
    elif isinstance(segment, Taper):
        return segment.start_dia_mm
    elif isinstance(segment, Thread):
        return segment.major_dia_mm
    elif isinstance(segment, Liner):
        return segment.od_mm
    raise TypeError(f"Unknown segment type: {type(segment).__name__}")


def fwd_diameter(segment: Segment) -> float:
    """Diameter on the FWD-facing side of a segment."""
    if isinstance(segment, Body):
        return segment.dia_mm
    elif isinstance(segment, Taper):
        return segment.end_dia_mm
    elif isinstance(segment, Thread):
        return segment.major_dia_mm
    elif isinstance(segment, Liner):
        return segment.od_mm
    raise TypeError(f"Unknown segment type: {type(segment).__name__}")


def type_priority(segment: Segment, is_auto: bool = False) -> int:
    """
    Render order among segments sharing a start position.

    Body < auto Body < Taper < Thread < Liner
    """
    if isinstance(segment, Body):
        return 1 if is_auto else 0
    elif isinstance(segment, Taper):
        return 2
    elif isinstance(segment, Thread):
        return 3
    elif isinstance(segment, Liner):
        return 4
    raise TypeError(f"Unknown segment type: {type(segment).__name__}")


def segment_diameters(segment: Segment) -> Tuple[float, ...]:
    """All diameter attributes of a segment."""
    if isinstance(segment, Body):
        return (segment.dia_mm,)
    elif isinstance(segment, Taper):
        return (segment.start_dia_mm, segment.end_dia_mm)
    elif isinstance(segment, Thread):
        return (segment.major_dia_mm,)
    elif isinstance(segment, Liner):
        return (segment.od_mm,)
    raise TypeError(f"Unknown segment type: {type(segment).__name__}")


# =============================================================================
# PRECONDITIONS
# =============================================================================

def check_length(value: float, name: str) -> float:
    """
    Check that a length is finite and non-negative.

    Raises:
        InvalidGeometryError: If the value is NaN, infinite or negative
    """
    if value is None or not math.isfinite(value):
        raise InvalidGeometryError(f"{name} must be finite, got {value}")
    if value < 0:
        raise InvalidGeometryError(f"{name} must be >= 0, got {value}")
    return value


def check_position(value: float, name: str) -> float:
    """Check that a position is finite. Negative positions are allowed."""
    if value is None or not math.isfinite(value):
        raise InvalidGeometryError(f"{name} must be finite, got {value}")
    return value


def check_segment_geometry(segment: Segment) -> None:
    """
    Fail fast on geometry that indicates an upstream bug.

    Overlaps, out-of-range ends and negative starts are normal editing
    states and are not checked here; see validate_shaft.

    Raises:
        InvalidGeometryError: On negative length or non-finite values
    """
    if not isinstance(segment, SEGMENT_TYPES):
        raise TypeError(f"Unknown segment type: {type(segment).__name__}")

    label = f"{type(segment).__name__} {segment.id}"
    check_position(segment.start_mm, f"{label} start")
    check_length(segment.length_mm, f"{label} length")
    for dia in segment_diameters(segment):
        check_position(dia, f"{label} diameter")


# =============================================================================
# SHAFT SNAPSHOT
# =============================================================================

@dataclass(frozen=True)
class Shaft:
    """
    Authored shaft model snapshot.

    overall_length_mm of 0 means the length is implicit and follows the
    authored content.
    """
    overall_length_mm: float = 0.0
    bodies: Tuple[Body, ...] = ()
    tapers: Tuple[Taper, ...] = ()
    threads: Tuple[Thread, ...] = ()
    liners: Tuple[Liner, ...] = ()

    @property
    def has_fixed_length(self) -> bool:
        return self.overall_length_mm > 0

    def components(self) -> List[Segment]:
        """All authored components, grouped by kind."""
        return [*self.bodies, *self.tapers, *self.threads, *self.liners]

    def coverage_end_mm(self) -> float:
        """Furthest end position over all components (0 when empty)."""
        return max((c.end_mm for c in self.components()), default=0.0)

    def effective_length_mm(self) -> float:
        """Overall length when fixed, otherwise where authored content ends."""
        if self.has_fixed_length:
            return self.overall_length_mm
        return self.coverage_end_mm()

    def max_outer_dia_mm(self) -> float:
        return max((max_diameter(c) for c in self.components()), default=0.0)

    def to_dict(self) -> Dict[str, Any]:
        """Convert shaft to dictionary for JSON serialization."""
        return {
            "overall_length_mm": self.overall_length_mm,
            "bodies": [asdict(b) for b in self.bodies],
            "tapers": [asdict(t) for t in self.tapers],
            "threads": [asdict(t) for t in self.threads],
            "liners": [asdict(ln) for ln in self.liners],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Shaft":
        """
        Build a shaft from a dictionary as produced by to_dict.

        Unknown keys are ignored. Missing lists are treated as empty.

        Raises:
            InvalidGeometryError: If the overall length is invalid
            TypeError: If a component entry has the wrong shape
        """
        overall = float(data.get("overall_length_mm", 0.0))
        check_length(overall, "overall length")

        return cls(
            overall_length_mm=overall,
            bodies=tuple(_segments_from_dicts(Body, data.get("bodies", []))),
            tapers=tuple(_segments_from_dicts(Taper, data.get("tapers", []))),
            threads=tuple(_segments_from_dicts(Thread, data.get("threads", []))),
            liners=tuple(_segments_from_dicts(Liner, data.get("liners", []))),
        )


def _segments_from_dicts(cls, items: Iterable[Dict[str, Any]]) -> List[Segment]:
    known = {f.name for f in fields(cls)}
    segments = []

    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise TypeError(f"{cls.__name__} entry {index} must be an object")

        unknown = set(item) - known
        if unknown:
            logger.debug(f"{cls.__name__} entry {index}: ignoring keys {sorted(unknown)}")

        kwargs = {k: v for k, v in item.items() if k in known}
        if "id" not in kwargs:
            kwargs["id"] = f"{cls.__name__.lower()}_{index}"
        segments.append(cls(**kwargs))

    return segments


# =============================================================================
# VALIDATION (non-throwing)
# =============================================================================

def validate_shaft(shaft: Shaft) -> List[str]:
    """
    Check a shaft for authoring problems and return warnings.

    Half-built shafts are a normal editing state, so nothing here raises.

    Args:
        shaft: Authored shaft snapshot

    Returns:
        List of warning messages
    """
    warnings = []
    components = shaft.components()

    for comp in components:
        name = f"{type(comp).__name__} {comp.id}"

        if comp.start_mm < 0:
            warnings.append(f"{name} starts before the AFT end ({comp.start_mm:.3f} mm)")

        if comp.length_mm <= 0:
            warnings.append(f"{name} has zero length")

        if shaft.has_fixed_length and comp.end_mm > shaft.overall_length_mm + SEGMENT_END_TOLERANCE_MM:
            warnings.append(
                f"{name} ends at {comp.end_mm:.3f} mm, past the overall length "
                f"({shaft.overall_length_mm:.3f} mm)"
            )

        if any(d < 0 for d in segment_diameters(comp)):
            warnings.append(f"{name} has a negative diameter")

    # Liners sit over the shaft and may overlap anything
    core = [c for c in components if not isinstance(c, Liner)]
    ordered = sorted(core, key=lambda c: (c.start_mm, c.end_mm))
    for prev, nxt in zip(ordered, ordered[1:]):
        if nxt.start_mm < prev.end_mm - SEGMENT_END_TOLERANCE_MM:
            warnings.append(
                f"{type(nxt).__name__} {nxt.id} overlaps "
                f"{type(prev).__name__} {prev.id}"
            )

    return warnings
