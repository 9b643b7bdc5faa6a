# PDF drawing output module

from .composer import (
    compose_shaft_pdf,
    write_plan_pdf,
    compose_page,
    fit_layout,
    format_scale_ratio,
    rail_y,
    work_area,
    title_block_area,
    DrawingSummary,
    PDFWriteError,
)

__all__ = [
    # Composer functions
    "compose_shaft_pdf",
    "write_plan_pdf",
    "compose_page",
    "fit_layout",
    "format_scale_ratio",
    "rail_y",
    "work_area",
    "title_block_area",
    "DrawingSummary",
    # Composer exceptions
    "PDFWriteError",
]
