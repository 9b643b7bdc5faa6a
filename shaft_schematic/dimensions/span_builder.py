"""
Dimension Span Builder Module

Builds the axial dimension spans for a resolved shaft, in measurement
space, ready for rail assignment.
"""

import logging
from typing import List, Sequence

from ..constants import SPAN_DEDUPE_EPS_MM
from ..geometry.oal_window import OalWindow, SetPositions, compute_set_positions
from ..geometry.resolver import ResolvedComponent
from ..model.segments import Body, Taper, Thread, Liner
from .spans import DimSpan, SpanKind
from .unit_format import (
    UnitSystem,
    format_length,
    format_diameter,
    format_pitch,
)

logger = logging.getLogger(__name__)


def component_callout(component: ResolvedComponent, unit: UnitSystem) -> str:
    """
    Bottom label describing a component's diameter(s).

    Examples:
        Body     -> "Ø 50.000 mm"
        Taper    -> "Ø 50.000 mm / Ø 40.000 mm"
        Thread   -> "Ø 6 in x 4 TPI"
        Liner    -> "SEAL Ø 60.000 mm"
    """
    seg = component.segment
    if isinstance(seg, Body):
        return format_diameter(seg.dia_mm, unit)
    elif isinstance(seg, Taper):
        return f"{format_diameter(seg.start_dia_mm, unit)} / {format_diameter(seg.end_dia_mm, unit)}"
    elif isinstance(seg, Thread):
        return f"{format_diameter(seg.major_dia_mm, unit)} x {format_pitch(seg.pitch_mm, seg.tpi, unit)}"
    elif isinstance(seg, Liner):
        callout = format_diameter(seg.od_mm, unit)
        return f"{seg.label} {callout}" if seg.label else callout
    raise TypeError(f"Unknown segment type: {type(seg).__name__}")


def build_component_spans(
    resolved: Sequence[ResolvedComponent],
    window: OalWindow,
    unit: UnitSystem = UnitSystem.MILLIMETERS
) -> List[DimSpan]:
    """
    One LOCAL length span per component with positive length.

    Args:
        resolved: Resolved components
        window: Measurement window
        unit: Display unit for labels

    Returns:
        List of DimSpan in measurement space
    """
    spans = []
    for comp in resolved:
        if comp.length_mm <= 0:
            continue
        spans.append(DimSpan(
            x1_mm=window.to_measure_x(comp.start_mm),
            x2_mm=window.to_measure_x(comp.end_mm),
            label_top=format_length(comp.length_mm, unit),
            kind=SpanKind.LOCAL,
            label_bottom=component_callout(comp, unit),
        ))
    return spans


def build_liner_spans(
    resolved: Sequence[ResolvedComponent],
    window: OalWindow,
    sets: SetPositions,
    unit: UnitSystem = UnitSystem.MILLIMETERS
) -> List[DimSpan]:
    """
    DATUM offset spans locating each liner from its nearer SET.

    A liner whose center lies at or before mid-OAL is located from the AFT
    SET to its AFT edge; otherwise from the FWD SET to its FWD edge.
    Zero offsets produce no span.
    """
    spans = []
    half_oal = (sets.aft_set_mm + sets.fwd_set_mm) / 2

    for comp in resolved:
        if not isinstance(comp.segment, Liner):
            continue

        start = window.to_measure_x(comp.start_mm)
        end = window.to_measure_x(comp.end_mm)
        center = (start + end) / 2

        if center <= half_oal:
            datum, edge = sets.aft_set_mm, start
            offset = edge - datum
        else:
            datum, edge = sets.fwd_set_mm, end
            offset = datum - edge

        if offset <= SPAN_DEDUPE_EPS_MM:
            continue

        spans.append(DimSpan(
            x1_mm=datum,
            x2_mm=edge,
            label_top=format_length(offset, unit),
            kind=SpanKind.DATUM,
        ))

    return spans


def build_oal_span(window: OalWindow, unit: UnitSystem = UnitSystem.MILLIMETERS) -> DimSpan:
    """Overall-length span across the whole measurement window."""
    return DimSpan(
        x1_mm=0.0,
        x2_mm=window.oal_mm,
        label_top=f"OAL {format_length(window.oal_mm, unit)}",
        kind=SpanKind.OAL,
    )


def build_dimension_spans(
    resolved: Sequence[ResolvedComponent],
    window: OalWindow,
    unit: UnitSystem = UnitSystem.MILLIMETERS,
    include_oal: bool = True
) -> List[DimSpan]:
    """
    All dimension spans for a shaft drawing.

    Args:
        resolved: Resolved components
        window: Measurement window
        unit: Display unit for labels
        include_oal: Add the overall-length span when the OAL is positive

    Returns:
        Component, liner datum and OAL spans
    """
    sets = compute_set_positions(window)

    spans = build_component_spans(resolved, window, unit)
    spans.extend(build_liner_spans(resolved, window, sets, unit))
    if include_oal and window.oal_mm > 0:
        spans.append(build_oal_span(window, unit))

    logger.debug(f"Built {len(spans)} dimension spans")
    return spans
