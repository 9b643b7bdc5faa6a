"""
Pipeline Orchestration Module

Coordinates the workflow from a shaft JSON document to drawing outputs.
"""

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Optional, Any

from .constants import DEFAULT_AUTO_BODY_DIA_MM, UnitSystemName
from .dimensions.unit_format import UnitSystem
from .model.segments import Shaft, ShaftSchematicError
from .pdf.composer import DrawingSummary, write_plan_pdf
from .plan import DrawingPlan, plan_drawing


logger = logging.getLogger(__name__)


class ShaftDocumentError(ShaftSchematicError):
    """Raised when a shaft document cannot be read or parsed."""
    pass


@dataclass
class PipelineConfig:
    """Configuration for pipeline execution."""
    input_path: str
    output_dir: str
    units: str = UnitSystemName.MILLIMETERS
    fallback_dia_mm: float = DEFAULT_AUTO_BODY_DIA_MM
    title: Optional[str] = None
    no_pdf: bool = False
    write_json: bool = False
    verbose: bool = False


@dataclass
class PipelineResult:
    """Result from full pipeline execution."""
    input_file: str
    output_dir: str
    plan: DrawingPlan
    units: str
    warnings: List[str] = field(default_factory=list)
    pdf_path: Optional[str] = None
    json_path: Optional[str] = None
    summary: Optional[DrawingSummary] = None
    processing_time: float = 0.0

    @property
    def component_count(self) -> int:
        return len(self.plan.components)


def load_shaft_document(filepath: str) -> Shaft:
    """
    Read a shaft JSON document.

    The document is either the shaft object itself or an object with a
    "shaft" key holding it.

    Args:
        filepath: Path to the JSON file

    Returns:
        Shaft

    Raises:
        ShaftDocumentError: If the file is missing or malformed
    """
    path = Path(filepath)

    if not path.exists():
        raise ShaftDocumentError(f"File not found: {filepath}")

    if not path.is_file():
        raise ShaftDocumentError(f"Path is not a file: {filepath}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ShaftDocumentError(f"Invalid JSON in {filepath}: {e}")
    except OSError as e:
        raise ShaftDocumentError(f"Cannot read {filepath}: {e}")

    if isinstance(data, dict) and isinstance(data.get("shaft"), dict):
        data = data["shaft"]

    if not isinstance(data, dict):
        raise ShaftDocumentError(f"Shaft document must be a JSON object: {filepath}")

    try:
        return Shaft.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ShaftDocumentError(f"Invalid shaft document {filepath}: {e}")


def generate_output_filename(input_path: str, output_dir: str, suffix: str) -> str:
    """
    Output file path next to the other outputs, named after the input.

    Example:
        ("parts/pump.json", "out", "_drawing.pdf") -> "out/pump_drawing.pdf"
    """
    stem = Path(input_path).stem
    return str(Path(output_dir) / f"{stem}{suffix}")


def write_layout_json(
    plan: DrawingPlan,
    output_path: str,
    input_file: str,
    summary: Optional[DrawingSummary] = None
) -> str:
    """
    Write the layout report (components, window, rails) as JSON.

    Returns:
        Path written
    """
    report: Dict[str, Any] = {
        "input_file": input_file,
        "plan": plan.to_dict(),
    }
    if summary is not None:
        report["drawing"] = summary.to_dict()

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2)

    return output_path


def run_pipeline(config: PipelineConfig) -> PipelineResult:
    """
    Run the full drawing pipeline.

    Args:
        config: Pipeline configuration

    Returns:
        PipelineResult with all outputs
    """
    start_time = time.time()

    # Setup logging
    log_level = logging.DEBUG if config.verbose else logging.INFO
    logging.basicConfig(level=log_level, format='%(message)s')

    logger.info(f"Processing: {config.input_path}")

    unit = UnitSystem.from_string(config.units)
    shaft = load_shaft_document(config.input_path)

    plan = plan_drawing(shaft, unit, config.fallback_dia_mm)
    all_warnings = list(plan.warnings)

    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    pdf_path = None
    json_path = None
    summary = None

    if not config.no_pdf:
        pdf_path = generate_output_filename(config.input_path, config.output_dir, "_drawing.pdf")
        summary = write_plan_pdf(plan, pdf_path, config.title)
        logger.info(f"PDF written: {pdf_path}")

    if config.write_json:
        json_path = generate_output_filename(config.input_path, config.output_dir, "_layout.json")
        write_layout_json(plan, json_path, config.input_path, summary)
        logger.info(f"JSON written: {json_path}")

    processing_time = time.time() - start_time

    # Summary
    logger.info(f"\nSummary:")
    logger.info(f"  Components: {len(plan.components)} ({plan.auto_count} auto)")
    logger.info(f"  OAL: {plan.window.oal_mm:.3f} mm")
    logger.info(f"  Dimension rails: {plan.rail_count}")
    logger.info(f"  Processing time: {processing_time:.1f}s")

    if all_warnings and config.verbose:
        logger.info(f"\nWarnings ({len(all_warnings)}):")
        for w in all_warnings[:10]:
            logger.info(f"  - {w}")
        if len(all_warnings) > 10:
            logger.info(f"  ... and {len(all_warnings) - 10} more")

    return PipelineResult(
        input_file=config.input_path,
        output_dir=config.output_dir,
        plan=plan,
        units=unit.value,
        warnings=all_warnings,
        pdf_path=pdf_path,
        json_path=json_path,
        summary=summary,
        processing_time=processing_time,
    )
