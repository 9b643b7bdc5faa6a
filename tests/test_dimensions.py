"""
Dimension Tests: Unit Formatting and Span Building

Tests for:
- Unit system parsing and conversion
- Smart inch fractions and millimeter labels
- Component, liner datum and OAL spans
- Drawing plan assembly
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from shaft_schematic.dimensions import (
    SpanKind,
    UnitSystem,
    format_inches_smart,
    format_length,
    format_dim,
    format_diameter,
    format_pitch,
    component_callout,
    build_component_spans,
    build_liner_spans,
    build_dimension_spans,
)
from shaft_schematic.geometry import (
    OalWindow,
    compute_set_positions,
    compute_shaft_window,
    resolve_shaft,
    find_component,
)
from shaft_schematic.model import Body, Taper, Thread, Liner, Shaft
from shaft_schematic.plan import plan_drawing


def threaded_shaft():
    """1000 mm shaft with an excluded AFT thread and one body."""
    return Shaft(
        overall_length_mm=1000.0,
        bodies=(Body(id="body", start_mm=50.0, length_mm=950.0, dia_mm=120.0),),
        threads=(Thread(id="thread", start_mm=0.0, length_mm=50.0, major_dia_mm=100.0,
                        pitch_mm=6.35, exclude_from_oal=True),),
    )


class TestUnitSystem:
    """Tests for unit parsing and conversion."""

    def test_from_string(self):
        assert UnitSystem.from_string("mm") == UnitSystem.MILLIMETERS
        assert UnitSystem.from_string("Metric") == UnitSystem.MILLIMETERS
        assert UnitSystem.from_string("in") == UnitSystem.INCHES
        assert UnitSystem.from_string(" imperial ") == UnitSystem.INCHES
        assert UnitSystem.from_string("INCHES") == UnitSystem.INCHES
        print("  [PASS] Unit system parsing")

    def test_from_string_rejects_unknown(self):
        with pytest.raises(ValueError):
            UnitSystem.from_string("furlongs")
        print("  [PASS] Unknown unit rejected")

    def test_conversion(self):
        assert UnitSystem.INCHES.to_mm(2.0) == 50.8
        assert UnitSystem.INCHES.from_mm(50.8) == 2.0
        assert UnitSystem.MILLIMETERS.to_mm(12.5) == 12.5
        assert UnitSystem.INCHES.suffix == "in"
        assert UnitSystem.MILLIMETERS.display_name == "Millimeters"
        print("  [PASS] Unit conversion")


class TestFormatting:
    """Tests for label formatting."""

    def test_inches_smart(self):
        assert format_inches_smart(16.0) == "16"
        assert format_inches_smart(1.5) == "1 1/2"
        assert format_inches_smart(0.0625) == "1/16"
        assert format_inches_smart(2.75) == "2 3/4"
        assert format_inches_smart(1.23) == "1.230"
        assert format_inches_smart(0.0) == "0.000"
        assert format_inches_smart(-0.5) == "-1/2"
        print("  [PASS] Smart inch fractions")

    def test_inches_snap_to_whole(self):
        assert format_inches_smart(0.99999) == "1"
        print("  [PASS] Near-whole snaps up")

    def test_length_labels(self):
        assert format_length(50.0) == "50.000 mm"
        assert format_length(25.4, UnitSystem.INCHES) == "1 in"
        assert format_length(38.1, UnitSystem.INCHES) == "1 1/2 in"
        print("  [PASS] Length labels")

    def test_dim_and_diameter(self):
        assert format_dim(25.4, UnitSystem.INCHES) == "1.0000 in"
        assert format_dim(12.0) == "12.000 mm"
        assert format_diameter(50.0) == "Ø 50.000 mm"
        assert format_diameter(152.4, UnitSystem.INCHES) == "Ø 6 in"
        print("  [PASS] Decimal and diameter labels")

    def test_pitch(self):
        assert format_pitch(6.35, None, UnitSystem.INCHES) == "4 TPI"
        assert format_pitch(0.0, 8.0, UnitSystem.INCHES) == "8 TPI"
        assert format_pitch(6.35) == "P 6.350"
        assert format_pitch(0.0) == "P ?"
        assert format_pitch(0.0, None, UnitSystem.INCHES) == "TPI ?"
        print("  [PASS] Pitch labels")


class TestSpanBuilder:
    """Tests for dimension span construction."""

    def test_callouts(self):
        resolved = resolve_shaft(Shaft(
            tapers=(Taper(id="t", start_mm=0.0, length_mm=10.0, start_dia_mm=50.0, end_dia_mm=40.0),),
            liners=(Liner(id="l", start_mm=0.0, length_mm=10.0, od_mm=60.0, label="SEAL"),),
        ))
        assert component_callout(find_component(resolved, "t"), UnitSystem.MILLIMETERS) == \
            "Ø 50.000 mm / Ø 40.000 mm"
        assert component_callout(find_component(resolved, "l"), UnitSystem.MILLIMETERS) == \
            "SEAL Ø 60.000 mm"
        print("  [PASS] Component callouts")

    def test_component_spans_in_measurement_space(self):
        shaft = threaded_shaft()
        resolved = resolve_shaft(shaft)
        window = compute_shaft_window(shaft)
        spans = build_component_spans(resolved, window)

        by_label = {s.label_top: s for s in spans}
        thread_span = by_label["50.000 mm"]
        assert (thread_span.x1_mm, thread_span.x2_mm) == (-50.0, 0.0)
        assert thread_span.label_bottom == "Ø 100.000 mm x P 6.350"

        body_span = by_label["950.000 mm"]
        assert (body_span.x1_mm, body_span.x2_mm) == (0.0, 950.0)
        assert all(s.kind == SpanKind.LOCAL for s in spans)
        print("  [PASS] Component spans in measurement space")

    def test_zero_length_components_skipped(self):
        resolved = resolve_shaft(Shaft(bodies=(
            Body(id="a", start_mm=0.0, length_mm=10.0, dia_mm=10.0),
            Body(id="z", start_mm=10.0, length_mm=0.0, dia_mm=10.0),
        )))
        spans = build_component_spans(resolved, OalWindow(0.0, 10.0))
        assert len(spans) == 1
        print("  [PASS] Zero-length components skipped")

    def test_liner_datum_spans(self):
        shaft = Shaft(
            overall_length_mm=1000.0,
            bodies=(Body(id="b", start_mm=0.0, length_mm=1000.0, dia_mm=100.0),),
            liners=(
                Liner(id="aft", start_mm=100.0, length_mm=100.0, od_mm=120.0),
                Liner(id="fwd", start_mm=850.0, length_mm=100.0, od_mm=120.0),
            ),
        )
        resolved = resolve_shaft(shaft)
        window = compute_shaft_window(shaft)
        spans = build_liner_spans(resolved, window, compute_set_positions(window))

        assert len(spans) == 2
        assert all(s.kind == SpanKind.DATUM for s in spans)
        endpoints = {(s.x1_mm, s.x2_mm): s.label_top for s in spans}
        assert endpoints == {(0.0, 100.0): "100.000 mm", (1000.0, 950.0): "50.000 mm"}
        print("  [PASS] Liner datum spans from nearer SET")

    def test_liner_at_set_has_no_datum_span(self):
        shaft = Shaft(
            overall_length_mm=500.0,
            liners=(Liner(id="l", start_mm=0.0, length_mm=50.0, od_mm=80.0),),
        )
        resolved = resolve_shaft(shaft)
        window = compute_shaft_window(shaft)
        assert build_liner_spans(resolved, window, compute_set_positions(window)) == []
        print("  [PASS] Liner at SET has no datum span")

    def test_oal_span(self):
        shaft = threaded_shaft()
        spans = build_dimension_spans(resolve_shaft(shaft), compute_shaft_window(shaft))
        oal = [s for s in spans if s.kind == SpanKind.OAL]
        assert len(oal) == 1
        assert (oal[0].x1_mm, oal[0].x2_mm) == (0.0, 950.0)
        assert oal[0].label_top == "OAL 950.000 mm"
        print("  [PASS] OAL span")

    def test_oal_span_optional(self):
        shaft = threaded_shaft()
        spans = build_dimension_spans(resolve_shaft(shaft), compute_shaft_window(shaft), include_oal=False)
        assert not any(s.kind == SpanKind.OAL for s in spans)
        assert build_dimension_spans([], OalWindow(0.0, 0.0)) == []
        print("  [PASS] OAL span optional")


class TestDrawingPlan:
    """Tests for plan_drawing."""

    def test_plan_rails(self):
        plan = plan_drawing(threaded_shaft())
        rails = {rs.span.label_top: rs.rail for rs in plan.rails}
        assert rails == {"50.000 mm": 0, "950.000 mm": 0, "OAL 950.000 mm": 1}
        assert plan.rail_count == 2
        assert plan.auto_count == 0
        assert plan.window.oal_mm == 950.0
        print("  [PASS] Plan rails")

    def test_plan_inch_labels(self):
        plan = plan_drawing(threaded_shaft(), UnitSystem.INCHES)
        labels = {rs.span.label_top for rs in plan.rails}
        assert all(label.endswith(" in") for label in labels)
        assert "OAL 37.402 in" in labels
        print("  [PASS] Plan inch labels")

    def test_plan_warnings_and_dict(self):
        shaft = Shaft(bodies=(
            Body(id="a", start_mm=0.0, length_mm=50.0, dia_mm=40.0),
            Body(id="b", start_mm=30.0, length_mm=50.0, dia_mm=30.0),
        ))
        plan = plan_drawing(shaft)
        assert len(plan.warnings) == 1

        d = plan.to_dict()
        assert d["unit"] == "MILLIMETERS"
        assert d["effective_length_mm"] == 80.0
        assert d["window"]["oal_mm"] == 80.0
        assert [c["id"] for c in d["components"]] == ["a", "b"]
        assert len(d["rails"]) == len(plan.rails)
        print("  [PASS] Plan warnings and dictionary")
