"""
Shaft Profile Module

Builds the side-view silhouette of a resolved shaft as shapely geometry,
in physical millimeters, with the centerline on y = 0.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from shapely.geometry import Polygon, box
from shapely.geometry.base import BaseGeometry
from shapely.ops import unary_union

from ..model.segments import Body, Taper, Thread, Liner
from .resolver import ResolvedComponent

logger = logging.getLogger(__name__)


def component_outline(component: ResolvedComponent) -> Optional[Polygon]:
    """
    Side-view outline of one component.

    Bodies, threads and liners are rectangles; tapers are trapezoids.
    Zero-length or zero-diameter components have no area and return None.

    Args:
        component: Resolved component

    Returns:
        Shapely Polygon or None
    """
    start, end = component.start_mm, component.end_mm
    if end <= start:
        return None

    seg = component.segment
    if isinstance(seg, Taper):
        r0 = seg.start_dia_mm / 2
        r1 = seg.end_dia_mm / 2
        if r0 <= 0 and r1 <= 0:
            return None
        return Polygon([(start, -r0), (end, -r1), (end, r1), (start, r0)])

    if isinstance(seg, Body):
        radius = seg.dia_mm / 2
    elif isinstance(seg, Thread):
        radius = seg.major_dia_mm / 2
    elif isinstance(seg, Liner):
        radius = seg.od_mm / 2
    else:
        raise TypeError(f"Unknown segment type: {type(seg).__name__}")

    if radius <= 0:
        return None
    return box(start, -radius, end, radius)


def shaft_profile(resolved: Sequence[ResolvedComponent]) -> BaseGeometry:
    """
    Union of all component outlines.

    Returns an empty Polygon when nothing has area.
    """
    outlines = [o for o in (component_outline(c) for c in resolved) if o is not None]
    if not outlines:
        return Polygon()

    profile = unary_union(outlines)
    logger.debug(f"Shaft profile from {len(outlines)} outlines, area {profile.area:.1f} mm^2")
    return profile


def profile_rings(profile: BaseGeometry) -> List[List[Tuple[float, float]]]:
    """
    Exterior rings of a profile as coordinate lists, ready for drawing.

    Handles both Polygon and MultiPolygon (a shaft with a zero-diameter
    section splits into several pieces).
    """
    if profile.is_empty:
        return []

    polygons = getattr(profile, "geoms", [profile])
    return [list(p.exterior.coords) for p in polygons if isinstance(p, Polygon)]
