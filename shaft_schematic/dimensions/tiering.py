"""
Dimension Tier Assigner Module

Packs axial dimension spans into stacked, non-overlapping rails.

Tiering is purely geometric (mm-space) and follows drafting convention:
- LOCAL spans hug low rails.
- DATUM and OAL spans stair-step above them.
- Endpoints touching are allowed on the same rail.

It does not consider text bounds, arrowheads or component types.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from ..constants import RAIL_TOUCH_EPS_MM, SPAN_DEDUPE_EPS_MM
from ..model.segments import InvalidGeometryError
from .spans import DimSpan, RailSpan, SpanKind

logger = logging.getLogger(__name__)

# Higher wins when two coincident spans collide
_DEDUPE_PREFERENCE = {
    SpanKind.LOCAL: 2,
    SpanKind.DATUM: 1,
    SpanKind.OAL: 0,
}


def _check_span(span: DimSpan) -> None:
    for value in (span.x1_mm, span.x2_mm):
        if value is None or not math.isfinite(value):
            raise InvalidGeometryError(f"Span '{span.label_top}' endpoint must be finite, got {value}")


def _dedupe_key(span: DimSpan, eps_mm: float) -> Tuple[int, int, str, Optional[str]]:
    return (
        round(span.lo_mm / eps_mm),
        round(span.hi_mm / eps_mm),
        span.label_top,
        span.label_bottom,
    )


def dedupe_spans(
    spans: Sequence[DimSpan],
    eps_mm: float = SPAN_DEDUPE_EPS_MM
) -> List[DimSpan]:
    """
    Drop coincident spans.

    Two spans coincide when their normalized endpoints match on the eps
    grid and their label pairs are identical. The LOCAL representation is
    kept over DATUM over OAL so a duplicate from another derivation does
    not force a stair-step. Between duplicates of the same kind the one
    with the smaller raw (x1, x2) is kept, so the survivor does not
    depend on input order.

    Args:
        spans: Spans in input order
        eps_mm: Endpoint rounding grid

    Returns:
        New list in first-seen order
    """
    by_key: Dict[Tuple[int, int, str, Optional[str]], DimSpan] = {}

    for span in spans:
        key = _dedupe_key(span, eps_mm)
        existing = by_key.get(key)
        if existing is None:
            by_key[key] = span
            continue

        rank = (_DEDUPE_PREFERENCE[span.kind], -span.x1_mm, -span.x2_mm)
        existing_rank = (_DEDUPE_PREFERENCE[existing.kind], -existing.x1_mm, -existing.x2_mm)
        if rank > existing_rank:
            by_key[key] = span

    dropped = len(spans) - len(by_key)
    if dropped:
        logger.debug(f"Deduplicated {dropped} coincident spans")

    return list(by_key.values())


def tier_interval(span: DimSpan, tier_origin: Optional[float] = None) -> Tuple[float, float]:
    """
    Interval used for rail placement.

    With a tier origin each endpoint becomes its distance from the origin,
    so spans stack outward from a datum instead of left to right.
    """
    a, b = span.x1_mm, span.x2_mm
    if tier_origin is not None:
        a = abs(a - tier_origin)
        b = abs(b - tier_origin)
    return (min(a, b), max(a, b))


def assign_rails(
    spans: Sequence[DimSpan],
    tier_origin: Optional[float] = None,
    touch_eps_mm: float = RAIL_TOUCH_EPS_MM
) -> List[RailSpan]:
    """
    Assign each span to the lowest rail it fits on.

    Spans are deduplicated, then processed by interval start, kind
    priority (LOCAL < DATUM < OAL), interval end, labels, raw endpoints and
    finally input position. Each goes to the lowest rail whose last
    interval ends at or before its start.

    Args:
        spans: Spans in any order
        tier_origin: Optional datum position for outward stacking
        touch_eps_mm: Endpoints closer than this count as touching

    Returns:
        New list of RailSpan in processing order

    Raises:
        InvalidGeometryError: If an endpoint is NaN or infinite
    """
    if tier_origin is not None and not math.isfinite(tier_origin):
        raise InvalidGeometryError(f"Tier origin must be finite, got {tier_origin}")
    for span in spans:
        _check_span(span)

    unique = dedupe_spans(spans)

    entries = []
    for index, span in enumerate(unique):
        lo, hi = tier_interval(span, tier_origin)
        sort_key = (
            lo,
            span.kind.priority,
            hi,
            span.label_top,
            span.label_bottom is None,
            span.label_bottom or "",
            span.x1_mm,
            span.x2_mm,
            index,
        )
        entries.append((sort_key, lo, hi, span))

    entries.sort(key=lambda e: e[0])

    rail_ends: List[float] = []
    result = []

    for _, lo, hi, span in entries:
        rail = None
        for r, rail_end in enumerate(rail_ends):
            if rail_end <= lo + touch_eps_mm:
                rail = r
                break

        if rail is None:
            rail = len(rail_ends)
            rail_ends.append(hi)
        else:
            rail_ends[rail] = max(rail_ends[rail], hi)

        result.append(RailSpan(rail=rail, span=span))

    logger.debug(f"Assigned {len(result)} spans to {len(rail_ends)} rails")
    return result


def rail_count(rail_spans: Sequence[RailSpan]) -> int:
    """Number of rails used (0 when there are no spans)."""
    return max((rs.rail for rs in rail_spans), default=-1) + 1
