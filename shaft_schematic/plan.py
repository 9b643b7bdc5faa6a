"""
Drawing Plan Module

Runs the geometry engine once for a shaft snapshot and bundles the
results that renderers consume: resolved components, measurement window,
dimension spans and their rails.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Dict, Any

from .constants import DEFAULT_AUTO_BODY_DIA_MM
from .dimensions.span_builder import build_dimension_spans
from .dimensions.spans import RailSpan
from .dimensions.tiering import assign_rails, rail_count
from .dimensions.unit_format import UnitSystem
from .geometry.oal_window import OalWindow, compute_shaft_window
from .geometry.resolver import ResolvedComponent, resolve_shaft
from .model.segments import Shaft, validate_shaft

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrawingPlan:
    """Everything a renderer needs, computed from one shaft snapshot."""
    shaft: Shaft
    unit: UnitSystem
    components: List[ResolvedComponent]
    window: OalWindow
    rails: List[RailSpan]
    warnings: List[str] = field(default_factory=list)

    @property
    def length_mm(self) -> float:
        """Physical length the drawing has to fit."""
        return self.shaft.effective_length_mm()

    @property
    def rail_count(self) -> int:
        return rail_count(self.rails)

    @property
    def auto_count(self) -> int:
        return sum(1 for c in self.components if c.is_auto)

    def to_dict(self) -> Dict[str, Any]:
        """Convert plan to dictionary for JSON serialization."""
        return {
            "unit": self.unit.value,
            "overall_length_mm": round(self.shaft.overall_length_mm, 3),
            "effective_length_mm": round(self.length_mm, 3),
            "window": {
                "measure_start_mm": round(self.window.measure_start_mm, 3),
                "measure_end_mm": round(self.window.measure_end_mm, 3),
                "oal_mm": round(self.window.oal_mm, 3),
            },
            "components": [
                {
                    "id": c.id,
                    "kind": c.kind,
                    "source": c.source.value,
                    "start_mm": round(c.start_mm, 3),
                    "end_mm": round(c.end_mm, 3),
                }
                for c in self.components
            ],
            "rails": [
                {
                    "rail": rs.rail,
                    "kind": rs.span.kind.value,
                    "x1_mm": round(rs.span.x1_mm, 3),
                    "x2_mm": round(rs.span.x2_mm, 3),
                    "label_top": rs.span.label_top,
                    "label_bottom": rs.span.label_bottom,
                }
                for rs in self.rails
            ],
            "warnings": list(self.warnings),
        }


def plan_drawing(
    shaft: Shaft,
    unit: UnitSystem = UnitSystem.MILLIMETERS,
    fallback_dia_mm: float = DEFAULT_AUTO_BODY_DIA_MM,
    tier_origin: Optional[float] = None
) -> DrawingPlan:
    """
    Compute the drawing plan for a shaft.

    Args:
        shaft: Authored shaft snapshot
        unit: Display unit for labels
        fallback_dia_mm: Auto body diameter when no neighbor exists
        tier_origin: Optional measurement-space datum for outward stacking

    Returns:
        DrawingPlan

    Raises:
        InvalidGeometryError: On negative lengths or non-finite values
    """
    warnings = validate_shaft(shaft)
    for warning in warnings:
        logger.warning(warning)

    components = resolve_shaft(shaft, fallback_dia_mm)
    window = compute_shaft_window(shaft)
    spans = build_dimension_spans(components, window, unit)
    rails = assign_rails(spans, tier_origin)

    plan = DrawingPlan(
        shaft=shaft,
        unit=unit,
        components=components,
        window=window,
        rails=rails,
        warnings=warnings,
    )

    logger.debug(
        f"Plan: {len(components)} components ({plan.auto_count} auto), "
        f"OAL {window.oal_mm:.3f} mm, {plan.rail_count} rails"
    )
    return plan
