#!/usr/bin/env python
"""
PDF Composer Tests

Tests for:
- Single-page drawing output
- Title block and dimension text
- Layout fitting inside the work area
- Write failures
"""

import sys
import tempfile
from pathlib import Path

# Add project root to path so we can import package modules
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pymupdf
import pytest

from shaft_schematic.constants import (
    PAGE_WIDTH_POINTS,
    PAGE_HEIGHT_POINTS,
    DRAWING_PADDING_POINTS,
)
from shaft_schematic.dimensions import UnitSystem
from shaft_schematic.model import Body, Taper, Thread, Liner, Shaft
from shaft_schematic.pdf import (
    compose_shaft_pdf,
    write_plan_pdf,
    fit_layout,
    format_scale_ratio,
    rail_y,
    work_area,
    PDFWriteError,
)
from shaft_schematic.plan import plan_drawing


def pump_shaft() -> Shaft:
    """Shaft with every component kind and an auto body gap."""
    return Shaft(
        overall_length_mm=1000.0,
        bodies=(Body(id="main", start_mm=100.0, length_mm=500.0, dia_mm=120.0),),
        tapers=(Taper(id="taper", start_mm=600.0, length_mm=100.0, start_dia_mm=120.0, end_dia_mm=90.0),),
        threads=(
            Thread(id="aft_thread", start_mm=0.0, length_mm=100.0, major_dia_mm=100.0,
                   pitch_mm=6.35, exclude_from_oal=True),
            Thread(id="fwd_thread", start_mm=900.0, length_mm=100.0, major_dia_mm=80.0,
                   tpi=4.0, exclude_from_oal=True),
        ),
        liners=(Liner(id="liner", start_mm=300.0, length_mm=80.0, od_mm=140.0, label="SLEEVE"),),
    )


class TestComposeShaftPdf:
    """Tests for compose_shaft_pdf."""

    def test_writes_single_page(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "pump.pdf"
            summary = compose_shaft_pdf(pump_shaft(), str(output), title="PUMP SHAFT")

            assert output.exists()
            doc = pymupdf.open(str(output))
            try:
                assert doc.page_count == 1
                page = doc[0]
                assert abs(page.rect.width - PAGE_WIDTH_POINTS) < 1
                assert abs(page.rect.height - PAGE_HEIGHT_POINTS) < 1
                assert len(page.get_drawings()) > 0
            finally:
                doc.close()

            assert summary.output_path == str(output)
            print(f"  [PASS] Single page written, scale {summary.scale_note}")

    def test_page_text(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "pump.pdf"
            compose_shaft_pdf(pump_shaft(), str(output), title="PUMP SHAFT")

            doc = pymupdf.open(str(output))
            try:
                text = doc[0].get_text()
            finally:
                doc.close()

            assert "PUMP SHAFT" in text
            assert "OAL 800.000 mm" in text
            assert "500.000 mm" in text
            assert "Millimeters" in text
            print("  [PASS] Title block and dimension text")

    def test_inch_labels(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "pump_in.pdf"
            compose_shaft_pdf(pump_shaft(), str(output), unit=UnitSystem.INCHES)

            doc = pymupdf.open(str(output))
            try:
                text = doc[0].get_text()
            finally:
                doc.close()

            assert "Inches" in text
            assert "Shaft Schematic" in text
            print("  [PASS] Inch labels and default title")

    def test_summary_matches_plan(self):
        plan = plan_drawing(pump_shaft())
        with tempfile.TemporaryDirectory() as tmpdir:
            summary = write_plan_pdf(plan, str(Path(tmpdir) / "plan.pdf"))

        assert summary.rail_count == plan.rail_count
        assert summary.component_count == len(plan.components)
        assert summary.auto_count == 1
        assert summary.oal_mm == 800.0
        assert summary.scale > 0

        d = summary.to_dict()
        assert d["rail_count"] == plan.rail_count
        assert d["scale"] == summary.scale_note
        print("  [PASS] Summary matches plan")

    def test_empty_shaft(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "empty.pdf"
            summary = compose_shaft_pdf(Shaft(), str(output))
            assert output.exists()
            assert summary.component_count == 0
            assert summary.rail_count == 0
        print("  [PASS] Empty shaft still renders")

    def test_write_failure(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "missing" / "dir" / "out.pdf"
            with pytest.raises(PDFWriteError):
                compose_shaft_pdf(pump_shaft(), str(output))
        print("  [PASS] Write failure raises PDFWriteError")


class TestPageLayout:
    """Tests for fitting the shaft on the page."""

    def test_shaft_inside_work_area(self):
        plan = plan_drawing(pump_shaft())
        area = work_area()
        layout = fit_layout(plan, area)

        left = layout.to_drawing_x(0.0)
        right = layout.to_drawing_x(1000.0)
        assert left >= area.x0 + DRAWING_PADDING_POINTS - 1e-6
        assert right <= area.x1 - DRAWING_PADDING_POINTS + 1e-6

        top = layout.centerline_y - layout.to_drawing_radius(layout.max_dia_mm / 2)
        assert top >= area.y0 + DRAWING_PADDING_POINTS - 1e-6
        print("  [PASS] Shaft inside work area")

    def test_rails_inside_work_area(self):
        plan = plan_drawing(pump_shaft())
        area = work_area()
        layout = fit_layout(plan, area)

        last = rail_y(layout, plan.rail_count - 1)
        assert last <= area.y1 - DRAWING_PADDING_POINTS + 1e-6
        assert rail_y(layout, 1) > rail_y(layout, 0)
        print("  [PASS] Rails inside work area")

    def test_content_before_zero_inside_work_area(self):
        shaft = Shaft(bodies=(Body(id="b", start_mm=-500.0, length_mm=1500.0, dia_mm=50.0),))
        area = work_area()
        layout = fit_layout(plan_drawing(shaft), area)

        assert layout.to_drawing_x(-500.0) >= area.x0 + DRAWING_PADDING_POINTS - 1e-6
        assert layout.to_drawing_x(1000.0) <= area.x1 - DRAWING_PADDING_POINTS + 1e-6
        print("  [PASS] Content before zero stays inside work area")

    def test_content_past_overall_inside_work_area(self):
        shaft = Shaft(
            overall_length_mm=1000.0,
            bodies=(Body(id="b", start_mm=0.0, length_mm=1500.0, dia_mm=50.0),),
        )
        area = work_area()
        layout = fit_layout(plan_drawing(shaft), area)

        assert layout.to_drawing_x(0.0) >= area.x0 + DRAWING_PADDING_POINTS - 1e-6
        assert layout.to_drawing_x(1500.0) <= area.x1 - DRAWING_PADDING_POINTS + 1e-6
        print("  [PASS] Content past overall length stays inside work area")

    def test_short_shaft_centered(self):
        shaft = Shaft(bodies=(Body(id="b", start_mm=0.0, length_mm=50.0, dia_mm=200.0),))
        plan = plan_drawing(shaft)
        area = work_area()
        layout = fit_layout(plan, area)

        left_gap = layout.to_drawing_x(0.0) - area.x0
        right_gap = area.x1 - layout.to_drawing_x(50.0)
        assert left_gap == pytest.approx(right_gap)
        print("  [PASS] Short shaft centered")


class TestScaleRatio:
    """Tests for the scale note."""

    def test_format(self):
        assert format_scale_ratio(0.25) == "1:4.00"
        assert format_scale_ratio(2.0) == "2.00:1"
        assert format_scale_ratio(1.0) == "1.00:1"
        assert format_scale_ratio(0.0) == "n/a"
        print("  [PASS] Scale ratio format")


def run_all_tests():
    """Run all composer tests."""
    print("=" * 60)
    print("PDF COMPOSER TESTS")
    print("=" * 60)

    all_passed = True
    for suite in (TestComposeShaftPdf(), TestPageLayout(), TestScaleRatio()):
        print(f"\n{type(suite).__name__}:")
        print("-" * 40)
        for name in sorted(n for n in dir(suite) if n.startswith("test_")):
            try:
                getattr(suite, name)()
            except AssertionError as e:
                print(f"  [FAIL] {name}: {e}")
                all_passed = False
            except Exception as e:
                print(f"  [ERROR] {name}: {e}")
                all_passed = False

    print()
    print("=" * 60)
    print("ALL COMPOSER TESTS PASSED" if all_passed else "SOME TESTS FAILED")
    return 0 if all_passed else 1


if __name__ == "__main__":
    sys.exit(run_all_tests())
