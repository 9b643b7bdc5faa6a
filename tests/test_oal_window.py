"""
Measurement Window Tests

Tests for OAL window computation, end-thread exclusion and SET positions.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import pytest

from shaft_schematic.geometry import (
    OalWindow,
    compute_oal_window,
    compute_shaft_window,
    compute_set_positions,
    is_aft_adjacent,
    is_fwd_adjacent,
)
from shaft_schematic.model import Body, Thread, Shaft, InvalidGeometryError


def excluded_thread(start, length, tid="t"):
    return Thread(id=tid, start_mm=start, length_mm=length, major_dia_mm=50.0,
                  pitch_mm=2.0, exclude_from_oal=True)


def assert_window_bounds(window, overall):
    assert 0.0 <= window.measure_start_mm <= window.measure_end_mm <= overall


class TestOalWindow:
    """Tests for compute_oal_window."""

    def test_no_threads(self):
        window = compute_oal_window(1000.0, [])
        assert window == OalWindow(0.0, 1000.0)
        assert window.oal_mm == 1000.0
        print("  [PASS] No threads: full length")

    def test_aft_excluded_thread(self):
        window = compute_oal_window(1000.0, [excluded_thread(0.0, 50.0)])
        assert window.measure_start_mm == 50.0
        assert window.measure_end_mm == 1000.0
        assert window.oal_mm == 950.0
        print("  [PASS] AFT excluded thread")

    def test_both_ends_excluded(self):
        threads = [excluded_thread(0.0, 100.0, "aft"), excluded_thread(950.0, 50.0, "fwd")]
        window = compute_oal_window(1000.0, threads)
        assert window.measure_start_mm == 100.0
        assert window.measure_end_mm == 950.0
        assert window.oal_mm == 850.0
        print("  [PASS] Both ends excluded")

    def test_included_thread_ignored(self):
        thread = Thread(id="t", start_mm=0.0, length_mm=50.0, major_dia_mm=50.0)
        assert compute_oal_window(1000.0, [thread]).oal_mm == 1000.0
        print("  [PASS] Included thread ignored")

    def test_interior_excluded_thread_ignored(self):
        window = compute_oal_window(1000.0, [excluded_thread(400.0, 50.0)])
        assert window == OalWindow(0.0, 1000.0)
        print("  [PASS] Interior excluded thread ignored")

    def test_farthest_aft_thread_wins(self):
        threads = [excluded_thread(0.0, 30.0, "a"), excluded_thread(0.2, 60.0, "b")]
        assert compute_oal_window(500.0, threads).measure_start_mm == pytest.approx(60.2)
        print("  [PASS] Farthest AFT thread end wins")

    def test_adjacency_tolerance(self):
        assert is_aft_adjacent(excluded_thread(0.4, 10.0))
        assert not is_aft_adjacent(excluded_thread(0.6, 10.0))
        assert is_fwd_adjacent(excluded_thread(90.0, 9.6), 100.0)
        assert not is_fwd_adjacent(excluded_thread(90.0, 9.0), 100.0)

        window = compute_oal_window(1000.0, [excluded_thread(0.6, 50.0)])
        assert window.measure_start_mm == 0.0
        print("  [PASS] End adjacency tolerance")

    def test_thread_covering_whole_shaft_collapses(self):
        window = compute_oal_window(100.0, [excluded_thread(0.0, 100.0)])
        assert_window_bounds(window, 100.0)
        assert window.oal_mm == 0.0
        print("  [PASS] Whole-shaft thread collapses window")

    def test_thread_past_end_is_clamped(self):
        window = compute_oal_window(100.0, [excluded_thread(0.0, 150.0)])
        assert_window_bounds(window, 100.0)
        assert window.measure_start_mm == 100.0
        assert window.oal_mm == 0.0
        print("  [PASS] Thread past end clamped")

    def test_zero_length_shaft(self):
        window = compute_oal_window(0.0, [excluded_thread(0.0, 0.0)])
        assert window == OalWindow(0.0, 0.0)
        print("  [PASS] Zero-length shaft")

    def test_negative_length_rejected(self):
        with pytest.raises(InvalidGeometryError):
            compute_oal_window(-1.0, [])
        print("  [PASS] Negative overall length rejected")


class TestMeasurementSpace:
    """Tests for measurement-space mapping and SET positions."""

    def test_coordinate_mapping(self):
        window = OalWindow(50.0, 1000.0)
        assert window.to_measure_x(50.0) == 0.0
        assert window.to_measure_x(0.0) == -50.0
        assert window.to_physical_x(950.0) == 1000.0
        print("  [PASS] Coordinate mapping")

    def test_oal_never_negative(self):
        assert OalWindow(10.0, 5.0).oal_mm == 0.0
        print("  [PASS] OAL never negative")

    def test_set_positions(self):
        sets = compute_set_positions(OalWindow(100.0, 950.0))
        assert sets.aft_set_mm == 0.0
        assert sets.fwd_set_mm == 850.0
        print("  [PASS] SET positions")

    def test_shaft_window_uses_effective_length(self):
        shaft = Shaft(
            bodies=(Body(id="b", start_mm=20.0, length_mm=180.0, dia_mm=40.0),),
            threads=(excluded_thread(0.0, 20.0),),
        )
        window = compute_shaft_window(shaft)
        assert window.measure_start_mm == 20.0
        assert window.measure_end_mm == 200.0
        print("  [PASS] Implicit length uses content end")
