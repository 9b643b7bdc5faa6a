"""
PDF Composer Module

Renders a drawing plan onto a single print-ready page: shaft silhouette,
component outlines, centerline, stacked dimension rails and title block.
"""

import logging
import math
from dataclasses import dataclass, replace
from datetime import date
from pathlib import Path
from typing import Dict, Any, List, Optional, Tuple

import pymupdf

from ..constants import (
    PAGE_WIDTH_POINTS,
    PAGE_HEIGHT_POINTS,
    PAGE_MARGIN_POINTS,
    TITLE_BLOCK_HEIGHT_POINTS,
    DRAWING_PADDING_POINTS,
    RAIL_SPACING_POINTS,
    RAIL_OFFSET_POINTS,
    ARROW_SIZE_POINTS,
    ARROW_WING_DEG,
    THREAD_HATCH_SPACING_POINTS,
    DIMENSION_FONT_SIZE,
    TITLE_FONT_SIZE,
    TITLE_BLOCK_FONT_SIZE,
    PAGE_FONT_NAME,
    POINTS_PER_MM,
    DEFAULT_DRAWING_TITLE,
    DEFAULT_AUTO_BODY_DIA_MM,
)
from ..dimensions.spans import RailSpan
from ..dimensions.unit_format import UnitSystem, format_length
from ..geometry.layout import ShaftLayout, compute_scale
from ..geometry.profile import shaft_profile, profile_rings
from ..geometry.resolver import ResolvedComponent
from ..model.segments import Body, Taper, Thread, Liner, Shaft, ShaftSchematicError
from ..plan import DrawingPlan, plan_drawing

logger = logging.getLogger(__name__)

BLACK = (0, 0, 0)
GRAY = (0.45, 0.45, 0.45)

# Never let rails squeeze the shaft below this share of the drawing height
MIN_SHAFT_HEIGHT_RATIO = 0.25


class PDFWriteError(ShaftSchematicError):
    """Raised when the drawing cannot be written."""
    pass


@dataclass
class DrawingSummary:
    """Result of composing a drawing page."""
    output_path: str
    scale: float          # PDF points per mm
    scale_ratio: float    # drawn size / real size
    rail_count: int
    component_count: int
    auto_count: int
    oal_mm: float

    @property
    def scale_note(self) -> str:
        return format_scale_ratio(self.scale_ratio)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "output_path": self.output_path,
            "scale_pt_per_mm": round(self.scale, 4),
            "scale": self.scale_note,
            "rail_count": self.rail_count,
            "component_count": self.component_count,
            "auto_count": self.auto_count,
            "oal_mm": round(self.oal_mm, 3),
        }


def format_scale_ratio(ratio: float) -> str:
    """
    Human-readable drawing scale.

    Examples:
        0.25 -> "1:4.00"
        2.0 -> "2.00:1"
    """
    if not math.isfinite(ratio) or ratio <= 0:
        return "n/a"
    if ratio < 1:
        return f"1:{1 / ratio:.2f}"
    return f"{ratio:.2f}:1"


def work_area() -> pymupdf.Rect:
    """Drawing border area (page minus margins and title block)."""
    return pymupdf.Rect(
        PAGE_MARGIN_POINTS,
        PAGE_MARGIN_POINTS,
        PAGE_WIDTH_POINTS - PAGE_MARGIN_POINTS,
        PAGE_HEIGHT_POINTS - PAGE_MARGIN_POINTS - TITLE_BLOCK_HEIGHT_POINTS,
    )


def title_block_area() -> pymupdf.Rect:
    return pymupdf.Rect(
        PAGE_MARGIN_POINTS,
        PAGE_HEIGHT_POINTS - PAGE_MARGIN_POINTS - TITLE_BLOCK_HEIGHT_POINTS,
        PAGE_WIDTH_POINTS - PAGE_MARGIN_POINTS,
        PAGE_HEIGHT_POINTS - PAGE_MARGIN_POINTS,
    )


def fit_layout(plan: DrawingPlan, area: pymupdf.Rect) -> ShaftLayout:
    """
    Fit the shaft into the drawing area, leaving room for the rails.

    The axial fit covers everything that gets drawn: the overall length
    plus any component that starts before 0 or ends past it. The shaft is
    centered horizontally when it does not use the full width.

    Args:
        plan: Drawing plan
        area: Work area inside the border

    Returns:
        ShaftLayout in page points
    """
    left = area.x0 + DRAWING_PADDING_POINTS
    top = area.y0 + DRAWING_PADDING_POINTS
    width = area.width - 2 * DRAWING_PADDING_POINTS
    height = area.height - 2 * DRAWING_PADDING_POINTS

    rails_height = RAIL_OFFSET_POINTS + plan.rail_count * RAIL_SPACING_POINTS
    shaft_height = max(height - rails_height, height * MIN_SHAFT_HEIGHT_RATIO)

    drawn_start = min(min((c.start_mm for c in plan.components), default=0.0), 0.0)
    drawn_end = max(max((c.end_mm for c in plan.components), default=0.0), plan.length_mm)

    layout = compute_scale(
        plan.components,
        drawn_end - drawn_start,
        width,
        shaft_height,
        origin_x=left,
        origin_y=top,
    )
    layout = replace(layout, min_x_mm=drawn_start)

    drawn_width = layout.to_drawing_length(drawn_end - drawn_start)
    if drawn_width < width:
        layout = replace(layout, origin_x=left + (width - drawn_width) / 2)

    return layout


def _to_page(layout: ShaftLayout, x_mm: float, y_mm: float) -> pymupdf.Point:
    """Map profile coordinates (mm, y up from centerline) to page points."""
    return pymupdf.Point(
        layout.to_drawing_x(x_mm),
        layout.centerline_y - layout.to_drawing_radius(y_mm),
    )


def draw_component(page: pymupdf.Page, layout: ShaftLayout, comp: ResolvedComponent) -> None:
    """Outline one component; auto bodies are dashed and gray."""
    x0 = layout.to_drawing_x(comp.start_mm)
    x1 = layout.to_drawing_x(comp.end_mm)
    cy = layout.centerline_y
    seg = comp.segment

    if isinstance(seg, Taper):
        r0 = layout.to_drawing_radius(seg.start_dia_mm / 2)
        r1 = layout.to_drawing_radius(seg.end_dia_mm / 2)
        points = [(x0, cy - r0), (x1, cy - r1), (x1, cy + r1), (x0, cy + r0)]
        page.draw_polyline(points, color=BLACK, width=0.8, closePath=True)
        return

    if isinstance(seg, Body):
        radius = layout.to_drawing_radius(seg.dia_mm / 2)
    elif isinstance(seg, Thread):
        radius = layout.to_drawing_radius(seg.major_dia_mm / 2)
    elif isinstance(seg, Liner):
        radius = layout.to_drawing_radius(seg.od_mm / 2)
    else:
        raise TypeError(f"Unknown segment type: {type(seg).__name__}")

    rect = pymupdf.Rect(x0, cy - radius, x1, cy + radius)
    if comp.is_auto:
        page.draw_rect(rect, color=GRAY, width=0.5, dashes="[2 2] 0")
    else:
        page.draw_rect(rect, color=BLACK, width=0.8)

    if isinstance(seg, Thread):
        x = x0 + THREAD_HATCH_SPACING_POINTS
        while x < x1:
            page.draw_line((x, cy - radius), (x, cy + radius), color=GRAY, width=0.3)
            x += THREAD_HATCH_SPACING_POINTS


def draw_profile(page: pymupdf.Page, layout: ShaftLayout, plan: DrawingPlan) -> None:
    """Heavy outline of the whole shaft silhouette."""
    for ring in profile_rings(shaft_profile(plan.components)):
        points = [_to_page(layout, x, y) for x, y in ring]
        page.draw_polyline(points, color=BLACK, width=1.5, closePath=True)


def draw_centerline(page: pymupdf.Page, layout: ShaftLayout, plan: DrawingPlan) -> None:
    start = min((c.start_mm for c in plan.components), default=0.0)
    end = max((c.end_mm for c in plan.components), default=plan.length_mm)
    cy = layout.centerline_y
    page.draw_line(
        (layout.to_drawing_x(start) - 10, cy),
        (layout.to_drawing_x(end) + 10, cy),
        color=GRAY,
        width=0.6,
        dashes="[12 3 3 3] 0",
    )


def _draw_arrowhead(page: pymupdf.Page, tip: Tuple[float, float], direction: float) -> None:
    """Open arrowhead at tip, pointing along +x (direction=1) or -x (-1)."""
    wing = math.radians(180.0 - ARROW_WING_DEG)
    dx = -direction * ARROW_SIZE_POINTS * math.cos(wing)
    dy = ARROW_SIZE_POINTS * math.sin(wing)
    page.draw_line(tip, (tip[0] + dx, tip[1] - dy), color=BLACK, width=0.6)
    page.draw_line(tip, (tip[0] + dx, tip[1] + dy), color=BLACK, width=0.6)


def _draw_centered_text(page: pymupdf.Page, x_center: float, baseline: float, text: str) -> None:
    text_width = pymupdf.get_text_length(text, fontname=PAGE_FONT_NAME, fontsize=DIMENSION_FONT_SIZE)
    page.insert_text(
        (x_center - text_width / 2, baseline),
        text,
        fontname=PAGE_FONT_NAME,
        fontsize=DIMENSION_FONT_SIZE,
        color=BLACK,
    )


def rail_y(layout: ShaftLayout, rail: int) -> float:
    """Page y of a rail's dimension line; rails stack downward from the shaft."""
    shaft_bottom = layout.centerline_y + layout.to_drawing_radius(layout.max_dia_mm / 2)
    return shaft_bottom + RAIL_OFFSET_POINTS + rail * RAIL_SPACING_POINTS


def draw_rail_span(
    page: pymupdf.Page,
    layout: ShaftLayout,
    plan: DrawingPlan,
    rail_span: RailSpan
) -> None:
    """Dimension line with extension lines, arrowheads and labels."""
    span = rail_span.span
    x1 = layout.to_drawing_x(plan.window.to_physical_x(span.x1_mm))
    x2 = layout.to_drawing_x(plan.window.to_physical_x(span.x2_mm))
    a, b = min(x1, x2), max(x1, x2)
    y = rail_y(layout, rail_span.rail)
    ext_top = layout.centerline_y + 2

    page.draw_line((a, ext_top), (a, y + 3), color=GRAY, width=0.3)
    page.draw_line((b, ext_top), (b, y + 3), color=GRAY, width=0.3)
    page.draw_line((a, y), (b, y), color=BLACK, width=0.6)

    if b - a > 2 * ARROW_SIZE_POINTS:
        _draw_arrowhead(page, (a, y), -1.0)
        _draw_arrowhead(page, (b, y), 1.0)

    _draw_centered_text(page, (a + b) / 2, y - 2, span.label_top)
    if span.label_bottom:
        _draw_centered_text(page, (a + b) / 2, y + DIMENSION_FONT_SIZE + 1, span.label_bottom)


def draw_title_block(
    page: pymupdf.Page,
    plan: DrawingPlan,
    title: str,
    scale_note: str
) -> None:
    """Three-column title block along the bottom of the page."""
    area = title_block_area()
    page.draw_rect(area, color=BLACK, width=1.2)

    col_w = area.width / 3
    for i in (1, 2):
        x = area.x0 + col_w * i
        page.draw_line((x, area.y0), (x, area.y1), color=BLACK, width=1.0)

    y0 = area.y0 + 20
    line_h = TITLE_BLOCK_FONT_SIZE + 6
    unit = plan.unit

    page.insert_text((area.x0 + 12, y0), title, fontname="hebo", fontsize=TITLE_FONT_SIZE)

    left_lines = [
        f"Overall: {format_length(plan.length_mm, unit)}",
        f"OAL (measured): {format_length(plan.window.oal_mm, unit)}",
    ]
    middle_lines = [
        f"Date: {date.today().isoformat()}",
        f"Units: {unit.display_name}",
        f"Scale: {scale_note}",
    ]
    right_lines = [
        f"Components: {len(plan.components)} ({plan.auto_count} auto)",
        f"Dimension rails: {plan.rail_count}",
        "Rev: A",
    ]

    columns: List[Tuple[float, float, List[str]]] = [
        (area.x0 + 12, y0 + line_h + 2, left_lines),
        (area.x0 + col_w + 12, y0, middle_lines),
        (area.x0 + 2 * col_w + 12, y0, right_lines),
    ]
    for x, y, lines in columns:
        for i, text in enumerate(lines):
            page.insert_text(
                (x, y + i * line_h),
                text,
                fontname=PAGE_FONT_NAME,
                fontsize=TITLE_BLOCK_FONT_SIZE,
            )


def compose_page(
    doc: pymupdf.Document,
    plan: DrawingPlan,
    title: Optional[str] = None
) -> ShaftLayout:
    """
    Draw a plan onto a new page of doc.

    Returns:
        The layout used for the page
    """
    page = doc.new_page(width=PAGE_WIDTH_POINTS, height=PAGE_HEIGHT_POINTS)
    area = work_area()
    page.draw_rect(area, color=BLACK, width=1.2)

    layout = fit_layout(plan, area)

    for comp in plan.components:
        draw_component(page, layout, comp)
    draw_profile(page, layout, plan)
    draw_centerline(page, layout, plan)

    for rail_span in plan.rails:
        draw_rail_span(page, layout, plan, rail_span)

    scale_note = format_scale_ratio(layout.scale / POINTS_PER_MM)
    draw_title_block(page, plan, title or DEFAULT_DRAWING_TITLE, scale_note)

    return layout


def write_plan_pdf(
    plan: DrawingPlan,
    output_path: str,
    title: Optional[str] = None
) -> DrawingSummary:
    """
    Render a drawing plan to a single-page PDF.

    Args:
        plan: Drawing plan from plan_drawing
        output_path: Destination PDF path
        title: Title block heading

    Returns:
        DrawingSummary

    Raises:
        PDFWriteError: If the PDF cannot be saved
    """
    path = Path(output_path)
    doc = pymupdf.open()

    try:
        layout = compose_page(doc, plan, title)
        try:
            doc.save(str(path))
        except Exception as e:
            raise PDFWriteError(f"Cannot write PDF: {output_path}. Error: {e}")
    finally:
        doc.close()

    summary = DrawingSummary(
        output_path=str(path),
        scale=layout.scale,
        scale_ratio=layout.scale / POINTS_PER_MM,
        rail_count=plan.rail_count,
        component_count=len(plan.components),
        auto_count=plan.auto_count,
        oal_mm=plan.window.oal_mm,
    )

    logger.info(f"Wrote drawing: {path} (scale {summary.scale_note}, {summary.rail_count} rails)")
    return summary


def compose_shaft_pdf(
    shaft: Shaft,
    output_path: str,
    unit: UnitSystem = UnitSystem.MILLIMETERS,
    fallback_dia_mm: float = DEFAULT_AUTO_BODY_DIA_MM,
    title: Optional[str] = None
) -> DrawingSummary:
    """
    Plan and render a shaft drawing in one step.

    Args:
        shaft: Authored shaft snapshot
        output_path: Destination PDF path
        unit: Display unit for labels
        fallback_dia_mm: Auto body diameter when no neighbor exists
        title: Title block heading

    Returns:
        DrawingSummary

    Raises:
        InvalidGeometryError: On invalid geometry
        PDFWriteError: If the PDF cannot be saved
    """
    plan = plan_drawing(shaft, unit, fallback_dia_mm)
    return write_plan_pdf(plan, output_path, title)
