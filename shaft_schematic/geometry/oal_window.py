"""
Measurement Window Module

Computes the OAL window: the measurement frame used for official dimension
figures. End threads excluded from the overall length shift the frame's
origin and extent away from the raw physical coordinates.
"""

import logging
from dataclasses import dataclass
from typing import Iterable

from ..constants import END_ADJACENCY_EPS_MM
from ..model.segments import Shaft, Thread, check_length, check_segment_geometry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OalWindow:
    """
    Measurement window in physical millimeters.

    Measurement-space x = 0 is the first counted AFT surface.
    """
    measure_start_mm: float
    measure_end_mm: float

    @property
    def oal_mm(self) -> float:
        """Official overall length (never negative)."""
        return max(self.measure_end_mm - self.measure_start_mm, 0.0)

    def to_measure_x(self, physical_mm: float) -> float:
        """Re-express a physical position as distance from the measurement origin."""
        return physical_mm - self.measure_start_mm

    def to_physical_x(self, measure_mm: float) -> float:
        """Inverse of to_measure_x."""
        return measure_mm + self.measure_start_mm


@dataclass(frozen=True)
class SetPositions:
    """AFT and FWD SET datums in measurement space."""
    aft_set_mm: float
    fwd_set_mm: float


def is_aft_adjacent(thread: Thread, eps_mm: float = END_ADJACENCY_EPS_MM) -> bool:
    return abs(thread.start_mm) <= eps_mm


def is_fwd_adjacent(
    thread: Thread,
    overall_length_mm: float,
    eps_mm: float = END_ADJACENCY_EPS_MM
) -> bool:
    return abs(thread.end_mm - overall_length_mm) <= eps_mm


def compute_oal_window(
    overall_length_mm: float,
    threads: Iterable[Thread],
    end_eps_mm: float = END_ADJACENCY_EPS_MM
) -> OalWindow:
    """
    Compute the measurement window for a shaft.

    Rules:
        - Excluded threads at the AFT end move the start to the farthest
          such thread's end.
        - Excluded threads at the FWD end move the end to the nearest such
          thread's start.
        - Interior excluded threads and non-excluded threads are ignored.
        - Result always satisfies 0 <= start <= end <= overall length.

    Args:
        overall_length_mm: Physical overall length in mm
        threads: Authored threads
        end_eps_mm: End-adjacency tolerance

    Returns:
        OalWindow

    Raises:
        InvalidGeometryError: On negative lengths or non-finite values
    """
    check_length(overall_length_mm, "overall length")

    excluded = []
    for thread in threads:
        check_segment_geometry(thread)
        if thread.exclude_from_oal:
            excluded.append(thread)

    start = 0.0
    end = overall_length_mm
    for thread in excluded:
        if is_aft_adjacent(thread, end_eps_mm):
            start = max(start, thread.end_mm)
        if is_fwd_adjacent(thread, overall_length_mm, end_eps_mm):
            end = min(end, thread.start_mm)

    start = min(max(start, 0.0), overall_length_mm)
    end = min(max(end, 0.0), overall_length_mm)
    if start > end:
        logger.debug(
            f"Excluded threads exceed the shaft ({start:.3f} > {end:.3f} mm), "
            f"collapsing measurement window"
        )
        end = start

    window = OalWindow(measure_start_mm=start, measure_end_mm=end)
    logger.debug(
        f"OAL window: [{window.measure_start_mm:.3f}, {window.measure_end_mm:.3f}] "
        f"oal={window.oal_mm:.3f} mm"
    )
    return window


def compute_shaft_window(shaft: Shaft, end_eps_mm: float = END_ADJACENCY_EPS_MM) -> OalWindow:
    """Measurement window for a shaft, using its effective length."""
    return compute_oal_window(shaft.effective_length_mm(), shaft.threads, end_eps_mm)


def compute_set_positions(window: OalWindow) -> SetPositions:
    """
    SET datums in measurement space.

    AFT SET sits at the measurement origin, FWD SET at the official OAL.
    """
    return SetPositions(aft_set_mm=0.0, fwd_set_mm=window.oal_mm)
