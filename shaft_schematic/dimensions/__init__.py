# Dimension spans, rail tiering and label formatting module

from .spans import (
    SpanKind,
    DimSpan,
    RailSpan,
)

from .tiering import (
    dedupe_spans,
    tier_interval,
    assign_rails,
    rail_count,
)

from .unit_format import (
    UnitSystem,
    format_inches_smart,
    format_length,
    format_dim,
    format_diameter,
    format_pitch,
)

from .span_builder import (
    component_callout,
    build_component_spans,
    build_liner_spans,
    build_oal_span,
    build_dimension_spans,
)

__all__ = [
    # Span types
    "SpanKind",
    "DimSpan",
    "RailSpan",
    # Tiering
    "dedupe_spans",
    "tier_interval",
    "assign_rails",
    "rail_count",
    # Unit format
    "UnitSystem",
    "format_inches_smart",
    "format_length",
    "format_dim",
    "format_diameter",
    "format_pitch",
    # Span builder
    "component_callout",
    "build_component_spans",
    "build_liner_spans",
    "build_oal_span",
    "build_dimension_spans",
]
