"""
Component Resolver Module

Turns the authored component list into the complete, render-ready list:
every explicit component plus auto bodies filling the gaps between them.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..constants import DEFAULT_AUTO_BODY_DIA_MM, ComponentKind
from ..model.segments import (
    Body,
    Taper,
    Thread,
    Liner,
    Segment,
    Shaft,
    aft_diameter,
    fwd_diameter,
    type_priority,
    check_length,
    check_segment_geometry,
)

logger = logging.getLogger(__name__)


class ComponentSource(Enum):
    """Where a resolved component came from."""
    EXPLICIT = "EXPLICIT"  # Authored by the user
    AUTO = "AUTO"          # Derived gap filler


@dataclass(frozen=True)
class ResolvedComponent:
    """A segment placed on the shaft, tagged with its source."""
    segment: Segment
    source: ComponentSource
    start_mm: float
    end_mm: float

    @property
    def id(self) -> str:
        return self.segment.id

    @property
    def length_mm(self) -> float:
        return self.end_mm - self.start_mm

    @property
    def is_auto(self) -> bool:
        return self.source == ComponentSource.AUTO

    @property
    def kind(self) -> str:
        """Kind name, distinguishing auto bodies."""
        seg = self.segment
        if isinstance(seg, Body):
            return ComponentKind.BODY_AUTO if self.is_auto else ComponentKind.BODY
        elif isinstance(seg, Taper):
            return ComponentKind.TAPER
        elif isinstance(seg, Thread):
            return ComponentKind.THREAD
        elif isinstance(seg, Liner):
            return ComponentKind.LINER
        raise TypeError(f"Unknown segment type: {type(seg).__name__}")

    def sort_key(self) -> Tuple[float, int, int, float, str]:
        """Start, explicit before auto, type priority, then end and id."""
        return (
            self.start_mm,
            1 if self.is_auto else 0,
            type_priority(self.segment, self.is_auto),
            self.end_mm,
            self.id,
        )


def auto_body_id(start_mm: float, end_mm: float) -> str:
    """Stable identifier for an auto body, derived from its span."""
    return f"auto_body_{start_mm:.3f}_{end_mm:.3f}"


def _explicit_sort_key(segment: Segment) -> Tuple[float, int, float, str]:
    return (segment.start_mm, type_priority(segment), segment.end_mm, segment.id)


def resolve_auto_body_dia(
    gap_start_mm: float,
    gap_end_mm: float,
    explicit: Sequence[Segment],
    fallback_dia_mm: float = DEFAULT_AUTO_BODY_DIA_MM
) -> float:
    """
    Pick the diameter of an auto body by nearest-neighbor inheritance.

    Order of preference:
        1. Nearest upstream explicit Body
        2. Nearest upstream explicit component's FWD-facing diameter
        3. Nearest downstream explicit component's AFT-facing diameter
        4. fallback_dia_mm

    Args:
        gap_start_mm: Start of the gap being filled
        gap_end_mm: End of the gap being filled
        explicit: Explicit components sorted by start
        fallback_dia_mm: Diameter when no neighbor exists

    Returns:
        Diameter in mm
    """
    upstream = [s for s in explicit if s.end_mm <= gap_start_mm]

    upstream_bodies = [s for s in upstream if isinstance(s, Body)]
    if upstream_bodies:
        return max(upstream_bodies, key=lambda s: s.end_mm).dia_mm

    if upstream:
        return fwd_diameter(max(upstream, key=lambda s: s.end_mm))

    downstream = [s for s in explicit if s.start_mm >= gap_end_mm]
    if downstream:
        return aft_diameter(min(downstream, key=lambda s: s.start_mm))

    return fallback_dia_mm


def _make_auto_body(start_mm: float, end_mm: float, dia_mm: float) -> ResolvedComponent:
    body = Body(
        id=auto_body_id(start_mm, end_mm),
        start_mm=start_mm,
        length_mm=end_mm - start_mm,
        dia_mm=dia_mm,
    )
    return ResolvedComponent(
        segment=body,
        source=ComponentSource.AUTO,
        start_mm=start_mm,
        end_mm=end_mm,
    )


def find_gaps(
    overall_length_mm: float,
    explicit: Sequence[Segment]
) -> List[Tuple[float, float]]:
    """
    Find uncovered spans between explicit components.

    Leading and trailing gaps to the shaft ends are only reported when the
    overall length is fixed (> 0).

    Args:
        overall_length_mm: Overall length, 0 when implicit
        explicit: Explicit components sorted by start

    Returns:
        List of (start, end) tuples, each with end > start
    """
    if not explicit:
        if overall_length_mm > 0:
            return [(0.0, overall_length_mm)]
        return []

    gaps = []

    # Frontier is the furthest end reached so far, so an auto body never
    # overlaps an earlier component that extends past its neighbor
    frontier = explicit[0].end_mm
    for segment in explicit[1:]:
        if segment.start_mm - frontier > 0:
            gaps.append((frontier, segment.start_mm))
        frontier = max(frontier, segment.end_mm)

    if overall_length_mm > 0:
        first_start = explicit[0].start_mm
        if first_start > 0:
            gaps.insert(0, (0.0, first_start))
        if overall_length_mm - frontier > 0:
            gaps.append((frontier, overall_length_mm))

    return gaps


def resolve_components(
    overall_length_mm: float,
    explicit_components: Sequence[Segment],
    fallback_dia_mm: float = DEFAULT_AUTO_BODY_DIA_MM
) -> List[ResolvedComponent]:
    """
    Resolve authored components into the complete render list.

    Pure function: the same input always yields the same, identically
    ordered output, including auto body ids.

    Args:
        overall_length_mm: Overall length, 0 when the length is implicit
        explicit_components: Authored components in any order
        fallback_dia_mm: Auto body diameter when no neighbor exists

    Returns:
        New list of ResolvedComponent sorted for rendering

    Raises:
        InvalidGeometryError: On negative lengths or non-finite values
    """
    check_length(overall_length_mm, "overall length")
    for segment in explicit_components:
        check_segment_geometry(segment)

    explicit = sorted(explicit_components, key=_explicit_sort_key)

    resolved = [
        ResolvedComponent(
            segment=s,
            source=ComponentSource.EXPLICIT,
            start_mm=s.start_mm,
            end_mm=s.end_mm,
        )
        for s in explicit
    ]

    gaps = find_gaps(overall_length_mm, explicit)
    for gap_start, gap_end in gaps:
        dia = resolve_auto_body_dia(gap_start, gap_end, explicit, fallback_dia_mm)
        resolved.append(_make_auto_body(gap_start, gap_end, dia))

    resolved.sort(key=ResolvedComponent.sort_key)

    logger.debug(
        f"Resolved {len(resolved)} components "
        f"({len(explicit)} explicit, {len(gaps)} auto)"
    )
    return resolved


def shaft_components(shaft: Shaft) -> List[Segment]:
    """Explicit components of a shaft snapshot, grouped by kind."""
    return shaft.components()


def resolve_shaft(
    shaft: Shaft,
    fallback_dia_mm: float = DEFAULT_AUTO_BODY_DIA_MM
) -> List[ResolvedComponent]:
    """Resolve all components of a shaft snapshot."""
    return resolve_components(shaft.overall_length_mm, shaft_components(shaft), fallback_dia_mm)


def auto_components(resolved: Sequence[ResolvedComponent]) -> List[ResolvedComponent]:
    return [c for c in resolved if c.is_auto]


def explicit_components(resolved: Sequence[ResolvedComponent]) -> List[ResolvedComponent]:
    return [c for c in resolved if not c.is_auto]


def find_component(
    resolved: Sequence[ResolvedComponent],
    component_id: str
) -> Optional[ResolvedComponent]:
    """Look up a resolved component by id (explicit or auto)."""
    for comp in resolved:
        if comp.id == component_id:
            return comp
    return None
