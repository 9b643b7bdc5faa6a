#!/usr/bin/env python
"""
Shaft Schematic - Installation Verification Script

Run this script to verify all dependencies are correctly installed.
"""

import sys
import tempfile
from pathlib import Path

# Add project root to path for package import
sys.path.insert(0, str(Path(__file__).parent.parent))


def check_package(name: str, import_name: str = None, version_attr: str = "__version__") -> tuple[bool, str]:
    """Check if a package is installed and return version."""
    import_name = import_name or name
    try:
        module = __import__(import_name)
        version = getattr(module, version_attr, "unknown")
        return True, str(version)
    except ImportError as e:
        return False, str(e)


def check_constants() -> tuple[bool, str]:
    """Check if constants module loads correctly."""
    try:
        from shaft_schematic.constants import (
            END_ADJACENCY_EPS_MM,
            DEFAULT_AUTO_BODY_DIA_MM,
            RAIL_TOUCH_EPS_MM,
        )
        return True, f"loaded ({END_ADJACENCY_EPS_MM=}, {DEFAULT_AUTO_BODY_DIA_MM=}, {RAIL_TOUCH_EPS_MM=})"
    except ImportError as e:
        return False, str(e)


def check_drawing() -> tuple[bool, str]:
    """Render a small shaft to a temporary PDF."""
    try:
        from shaft_schematic.model import Shaft, Body, Thread
        from shaft_schematic.pdf import compose_shaft_pdf

        shaft = Shaft(
            overall_length_mm=300.0,
            bodies=(Body(id="b", start_mm=40.0, length_mm=260.0, dia_mm=60.0),),
            threads=(Thread(id="t", start_mm=0.0, length_mm=40.0, major_dia_mm=50.0,
                            pitch_mm=2.0, exclude_from_oal=True),),
        )
        with tempfile.TemporaryDirectory() as tmp:
            summary = compose_shaft_pdf(shaft, str(Path(tmp) / "check.pdf"))
        return True, f"scale {summary.scale_note}, {summary.rail_count} rails"
    except Exception as e:
        return False, str(e)


def main():
    print("=" * 60)
    print("Shaft Schematic - Installation Verification")
    print("=" * 60)
    print()

    results = []

    # Core packages
    print("Core Dependencies:")
    print("-" * 40)

    packages = [
        ("pymupdf", "pymupdf", "__version__"),
        ("shapely", "shapely", "__version__"),
    ]

    for name, import_name, version_attr in packages:
        ok, info = check_package(name, import_name, version_attr)
        status = "PASS" if ok else "FAIL"
        print(f"  {name:25} [{status}] {info}")
        results.append((name, ok))

    print()
    print("Package:")
    print("-" * 40)

    ok, info = check_constants()
    status = "PASS" if ok else "FAIL"
    print(f"  {'constants.py':25} [{status}] {info}")
    results.append(("constants", ok))

    ok, info = check_drawing()
    status = "PASS" if ok else "FAIL"
    print(f"  {'sample drawing':25} [{status}] {info}")
    results.append(("drawing", ok))

    print()
    print("=" * 60)

    # Summary
    passed = sum(1 for _, ok in results if ok)
    total = len(results)

    if passed == total:
        print(f"ALL CHECKS PASSED ({passed}/{total})")
        print("Environment is ready for shaft drawings.")
        return 0
    else:
        failed = [name for name, ok in results if not ok]
        print(f"SOME CHECKS FAILED ({passed}/{total})")
        print(f"Failed: {', '.join(failed)}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
