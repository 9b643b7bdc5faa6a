"""
Command Line Interface Module

Parses command-line arguments for the shaft drawing pipeline.
"""

import argparse
import math
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .constants import DEFAULT_AUTO_BODY_DIA_MM, DEFAULT_DRAWING_TITLE


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the pipeline."""
    parser = argparse.ArgumentParser(
        prog="shaft_schematic",
        description="Render dimensioned shaft drawings from shaft JSON documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m shaft_schematic.cli -i shaft.json -o ./output
  python -m shaft_schematic.cli -i shaft.json -o ./output --units in --json
  python -m shaft_schematic.cli -i shaft.json -o ./output --no-pdf --json --verbose
        """
    )

    # Required arguments
    parser.add_argument(
        "-i", "--input",
        required=True,
        help="Input shaft JSON file path"
    )

    parser.add_argument(
        "-o", "--output",
        required=True,
        help="Output directory path"
    )

    # Optional arguments
    parser.add_argument(
        "--units",
        choices=["mm", "in"],
        default="mm",
        help="Label units (default: mm)"
    )

    parser.add_argument(
        "--fallback-dia",
        type=float,
        default=DEFAULT_AUTO_BODY_DIA_MM,
        help=f"Auto body diameter in mm when no neighbor exists (default: {DEFAULT_AUTO_BODY_DIA_MM})"
    )

    parser.add_argument(
        "--title",
        default=DEFAULT_DRAWING_TITLE,
        help=f"Title block heading (default: '{DEFAULT_DRAWING_TITLE}')"
    )

    parser.add_argument(
        "--no-pdf",
        action="store_true",
        help="Skip PDF drawing output"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Write a JSON layout report (components, window, rails)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    return parser


def validate_args(args: argparse.Namespace) -> Tuple[bool, str]:
    """
    Validate parsed arguments.

    Args:
        args: Parsed arguments

    Returns:
        Tuple of (is_valid, error_message)
    """
    # Check input file exists
    input_path = Path(args.input)
    if not input_path.exists():
        return False, f"Input file not found: {args.input}"

    if not input_path.suffix.lower() == ".json":
        return False, f"Input file must be JSON: {args.input}"

    # Check/create output directory
    output_path = Path(args.output)
    try:
        output_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return False, f"Cannot create output directory: {e}"

    if not math.isfinite(args.fallback_dia) or args.fallback_dia <= 0:
        return False, f"Fallback diameter must be a positive number: {args.fallback_dia}"

    if args.no_pdf and not args.json:
        return False, "Nothing to write: --no-pdf requires --json"

    return True, ""


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse and validate command-line arguments.

    Args:
        args: Optional list of arguments (uses sys.argv if None)

    Returns:
        Parsed and validated arguments
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    is_valid, error_msg = validate_args(parsed)
    if not is_valid:
        parser.error(error_msg)

    return parsed


def config_from_args(args: argparse.Namespace):
    """Build a PipelineConfig from parsed arguments."""
    from .pipeline import PipelineConfig

    return PipelineConfig(
        input_path=args.input,
        output_dir=args.output,
        units=args.units,
        fallback_dia_mm=args.fallback_dia,
        title=args.title,
        no_pdf=args.no_pdf,
        write_json=args.json,
        verbose=args.verbose,
    )


def main(argv: Optional[List[str]] = None):
    """Main entry point for CLI."""
    args = parse_args(argv)

    # Import pipeline and run
    from .pipeline import run_pipeline

    try:
        run_pipeline(config_from_args(args))
    except KeyboardInterrupt:
        print("\nProcessing cancelled by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
